import logging
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import Request, HTTPException

from session import SESSION_COOKIE_NAME

logger = logging.getLogger('session_guard.service.middleware')


class RequestResponseLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log requests and responses, including whether a session cookie came and went"""

    async def dispatch(self, request: Request, call_next):
        logger.debug(f"REQUEST_DEBUG: {request.method} {request.url}")

        # Never log the cookie itself, only that it is there
        session_cookie_value = request.cookies.get(SESSION_COOKIE_NAME)
        logger.debug(f"REQUEST_DEBUG: Session cookie present: {bool(session_cookie_value)}")
        if session_cookie_value:
            logger.debug(f"REQUEST_DEBUG: Session cookie length: {len(session_cookie_value)}")

        try:
            response = await call_next(request)

            logger.debug(f"RESPONSE_DEBUG: Status {response.status_code}")
            set_cookies = response.headers.getlist("set-cookie")
            logger.debug(
                f"RESPONSE_DEBUG: Session cookie set: "
                f"{any(c.startswith(f'{SESSION_COOKIE_NAME}=') for c in set_cookies)}"
            )

            if response.status_code >= 400:
                logger.error(f"ERROR_RESPONSE_DEBUG: Status {response.status_code} for {request.url}")

            return response

        except HTTPException as exc:
            logger.error(f"HTTP_EXCEPTION_DEBUG: Status {exc.status_code}, Detail: {exc.detail}")
            raise
        except Exception as exc:
            logger.error(f"UNEXPECTED_EXCEPTION_DEBUG: {type(exc)}: {str(exc)}")
            raise
