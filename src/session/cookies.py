"""
Private (encrypted and authenticated) cookies.

Values are sealed with Fernet: AES-128-CBC for confidentiality and
HMAC-SHA256 for integrity. A tampered, forged or foreign cookie fails
verification and is reported as absent.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from cryptography.fernet import Fernet, InvalidToken
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger('session_guard.session.cookies')


class SameSite(str, Enum):
    STRICT = "strict"
    LAX = "lax"
    NONE = "none"


@dataclass
class Cookie:
    """A plaintext cookie together with the attributes it is emitted with."""
    name: str
    value: str
    path: str = "/"
    domain: Optional[str] = None
    secure: bool = True
    http_only: bool = True
    same_site: SameSite = SameSite.LAX
    max_age: Optional[int] = None


def _strip_padding(token: bytes) -> str:
    # '=' would force the value to be quoted in the Set-Cookie header
    return token.decode("ascii").rstrip("=")


def _restore_padding(value: str) -> str:
    return value + "=" * (-len(value) % 4)


class PrivateCookieJar:
    """
    Request-scoped view of the incoming cookies plus the private cookies
    queued for the response.
    """

    def __init__(self, cookies: Mapping[str, str], fernet: Fernet, domain: Optional[str] = None):
        self._incoming = dict(cookies)
        self._fernet = fernet
        self._domain = domain
        self._pending: dict[str, Cookie] = {}

    @classmethod
    def from_request(cls, request: Request, fernet: Fernet, domain: Optional[str] = None) -> "PrivateCookieJar":
        return cls(request.cookies, fernet, domain=domain)

    @property
    def pending(self) -> dict[str, Cookie]:
        """Plaintext cookies queued for the response, by name."""
        return dict(self._pending)

    def get_private(self, name: str) -> Optional[Cookie]:
        """
        Return the decrypted cookie `name`, or None if it is missing or fails
        verification. Cookies queued during this request take precedence.
        """
        if name in self._pending:
            return self._pending[name]

        raw = self._incoming.get(name)
        if raw is None:
            return None

        try:
            value = self._fernet.decrypt(_restore_padding(raw)).decode("utf-8")
        except (InvalidToken, ValueError) as e:
            # UnicodeDecodeError is a ValueError as well
            logger.debug(f"Rejected private cookie '{name}' ({len(raw)} chars): {type(e).__name__}")
            return None

        return Cookie(name=name, value=value)

    def add_private(self, cookie: Cookie) -> None:
        """Queue `cookie` to be encrypted onto the response, replacing any earlier one of the same name."""
        if cookie.domain is None and self._domain:
            cookie.domain = self._domain
        self._pending[cookie.name] = cookie

    def seal(self, value: str) -> str:
        return _strip_padding(self._fernet.encrypt(value.encode("utf-8")))

    def apply_to(self, response: Response) -> None:
        for cookie in self._pending.values():
            response.set_cookie(
                key=cookie.name,
                value=self.seal(cookie.value),
                max_age=cookie.max_age,
                path=cookie.path,
                domain=cookie.domain,
                secure=cookie.secure,
                httponly=cookie.http_only,
                samesite=cookie.same_site.value,
            )
        if self._pending:
            logger.debug(f"Wrote private cookies: {list(self._pending)}")
