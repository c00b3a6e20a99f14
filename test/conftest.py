import logging

import pytest
import pytest_asyncio
from cryptography.fernet import Fernet
from httpx import AsyncClient, ASGITransport

from session import SessionSettings, PrivateCookieJar, SESSION_COOKIE_NAME
from service.service import create_app


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Configure logging for tests."""
    logging.basicConfig(level=logging.INFO)


@pytest.fixture
def settings() -> SessionSettings:
    return SessionSettings(secret_key="test-session-secret")


@pytest.fixture
def fernet(settings) -> Fernet:
    return settings.build_fernet()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def client(app):
    # https, so the client's cookie jar stores and resends the Secure cookie
    async with AsyncClient(transport=ASGITransport(app=app), base_url="https://testserver") as client:
        yield client


@pytest.fixture
def seal(fernet):
    """Encrypt a plaintext cookie value the way the service does."""
    def _seal(value: str) -> str:
        return PrivateCookieJar({}, fernet).seal(value)
    return _seal


@pytest.fixture
def unseal(fernet):
    """Decrypt the session cookie value from a response, or None."""
    def _unseal(raw: str):
        cookie = PrivateCookieJar({SESSION_COOKIE_NAME: raw}, fernet).get_private(SESSION_COOKIE_NAME)
        return cookie.value if cookie else None
    return _unseal
