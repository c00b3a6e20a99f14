"""
Request-scoped session guard.

A session is recovered from the `session` private cookie when the request
enters the scope, handed to the request handler, and written back to the jar
when the scope ends, whichever way it ends.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from pydantic import ValidationError

from session.cookies import PrivateCookieJar
from session.models import SESSION_COOKIE_NAME, Session

logger = logging.getLogger('session_guard.session.guard')


def recover_session(jar: PrivateCookieJar) -> Session:
    """
    Return the session carried by the request's cookie, or a new one.

    A missing, unverifiable or malformed cookie all give a new session with a
    fresh id and no data; recovery never fails the request. Nothing is written.
    """
    cookie = jar.get_private(SESSION_COOKIE_NAME)

    if cookie is not None:
        try:
            session = Session.from_cookie_value(cookie.value)
        except ValidationError as e:
            logger.debug(f"Discarding malformed session cookie: {e.error_count()} validation error(s)")
        else:
            session.attach(jar)
            logger.debug(f"Recovered session {session.id}")
            return session

    session = Session.new(jar)
    logger.debug(f"Started new session {session.id}")
    return session


@contextmanager
def session_scope(jar: PrivateCookieJar) -> Iterator[Session]:
    """Yield the request's session and write it back on every exit path."""
    session = recover_session(jar)
    try:
        yield session
    finally:
        session.write_back()
