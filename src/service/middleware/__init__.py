import logging as log
from cryptography.fernet import Fernet
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from typing import Optional

from .logging import RequestResponseLoggingMiddleware
from .error_handling import ErrorHandlingMiddleware
from .session import SessionMiddleware
from .exception_handlers import custom_http_exception_handler

logger = log.getLogger('session_guard.service.middleware')


def setup_middleware(
    app: FastAPI,
    fernet: Fernet,
    cors_allowed_origins: list[str],
    cors_allowed_methods: list[str],
    cors_allowed_headers: list[str],
    cookie_domain: Optional[str] = None,
):
    """
    Setup all middleware for the FastAPI application.

    Middleware are added in reverse order (last added = first executed).
    Current order of execution:
    1. CORSMiddleware (handles CORS, answers preflights without a session)
    2. RequestResponseLoggingMiddleware (logs requests/responses)
    3. SessionMiddleware (recovers the session, writes the cookie back)
    4. ErrorHandlingMiddleware (turns unhandled errors into 500 responses)

    Args:
        app: FastAPI application instance
        fernet: Cipher used for the private session cookie
        cors_allowed_origins: List of allowed CORS origins
        cors_allowed_methods: List of allowed HTTP methods
        cors_allowed_headers: List of allowed headers
        cookie_domain: Optional Domain attribute for the session cookie
    """
    app.add_exception_handler(HTTPException, custom_http_exception_handler)

    # Innermost, so the session middleware always gets a response back
    app.add_middleware(ErrorHandlingMiddleware)

    app.add_middleware(SessionMiddleware, fernet=fernet, cookie_domain=cookie_domain)

    app.add_middleware(RequestResponseLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allowed_origins,
        allow_credentials=True,
        allow_methods=cors_allowed_methods,
        allow_headers=cors_allowed_headers,
    )

    logger.info(f"CORS configured with origins: {cors_allowed_origins}")


__all__ = [
    'setup_middleware',
    'RequestResponseLoggingMiddleware',
    'ErrorHandlingMiddleware',
    'SessionMiddleware',
    'custom_http_exception_handler',
]
