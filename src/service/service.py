import logging
from typing import Optional

from fastapi import FastAPI

from session import SessionSettings

from .config import get_cors_config, get_session_settings
from .middleware import setup_middleware
from .routers import misc, session as session_router

logger = logging.getLogger('session_guard.service')


def create_app(settings: Optional[SessionSettings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Session cookie settings, read from the environment when omitted
    """
    if settings is None:
        settings = get_session_settings()

    app = FastAPI(title="session-guard")

    cors_allowed_origins, cors_allowed_methods, cors_allowed_headers = get_cors_config()
    setup_middleware(
        app,
        fernet=settings.build_fernet(),
        cors_allowed_origins=cors_allowed_origins,
        cors_allowed_methods=cors_allowed_methods,
        cors_allowed_headers=cors_allowed_headers,
        cookie_domain=settings.cookie_domain,
    )

    app.include_router(misc.router)
    app.include_router(session_router.router)

    logger.info("Application created")
    return app
