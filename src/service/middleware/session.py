import logging
from typing import Optional

from cryptography.fernet import Fernet
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import Request

from session import PrivateCookieJar, session_scope

logger = logging.getLogger('session_guard.service.middleware')


class SessionMiddleware(BaseHTTPMiddleware):
    """
    Attach the request's session to request.state.session and write it back
    to the encrypted `session` cookie once the response is ready.

    Must wrap ErrorHandlingMiddleware, so that unhandled errors reach this
    middleware as a 500 response that can still carry the cookie.
    """

    def __init__(self, app, fernet: Fernet, cookie_domain: Optional[str] = None):
        super().__init__(app)
        self.fernet = fernet
        self.cookie_domain = cookie_domain

    async def dispatch(self, request: Request, call_next):
        jar = PrivateCookieJar.from_request(request, self.fernet, domain=self.cookie_domain)

        with session_scope(jar) as session:
            request.state.session = session
            response = await call_next(request)

        jar.apply_to(response)
        return response
