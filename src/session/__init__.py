"""Cookie-backed session identity and state."""

from .config import SessionSettings, load_session_settings
from .cookies import Cookie, PrivateCookieJar, SameSite
from .guard import recover_session, session_scope
from .models import SESSION_COOKIE_NAME, Session, SessionId, new_session_id

__all__ = [
    "SESSION_COOKIE_NAME",
    "Cookie",
    "PrivateCookieJar",
    "SameSite",
    "Session",
    "SessionId",
    "SessionSettings",
    "load_session_settings",
    "new_session_id",
    "recover_session",
    "session_scope",
]
