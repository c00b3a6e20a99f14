import base64
import logging
import os
import secrets
from typing import Optional

from cryptography.fernet import Fernet
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from pydantic import BaseModel, Field

logger = logging.getLogger('session_guard.session.config')


class SessionSettings(BaseModel):
    secret_key: str = Field(description="Secret the cookie encryption key is derived from", repr=False)
    cookie_domain: Optional[str] = Field(default=None, description="Domain attribute for the session cookie")

    def build_fernet(self) -> Fernet:
        """Derive the Fernet key from the configured secret with HKDF-SHA256."""
        hkdf = HKDF(
            algorithm=hashes.SHA256(),
            length=32,
            salt=None,
            info=b"session-guard private cookies",
        )
        key = hkdf.derive(self.secret_key.encode("utf-8"))
        return Fernet(base64.urlsafe_b64encode(key))


def load_session_settings() -> SessionSettings:
    """
    Build SessionSettings from the environment.

    SESSION_SECRET_KEY is required. In development mode (MODE=dev) a random
    secret is generated instead, so cookies from earlier runs stop decrypting
    and clients silently get new sessions after a restart.
    """
    secret_key = os.getenv("SESSION_SECRET_KEY")
    if not secret_key:
        if os.getenv("MODE") != "dev":
            raise ValueError("SESSION_SECRET_KEY environment variable must be set")
        logger.warning("SESSION_SECRET_KEY not set, generating an ephemeral secret for development")
        secret_key = secrets.token_urlsafe(32)

    return SessionSettings(
        secret_key=secret_key,
        cookie_domain=os.getenv("COOKIE_DOMAIN") or None,  # None for localhost
    )
