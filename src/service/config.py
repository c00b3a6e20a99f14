"""
Configuration setup for the session-guard service.

This module handles configuration initialization from environment variables:
- CORS settings
- Session cookie settings
"""
import os
import logging
from typing import Tuple

from session import SessionSettings, load_session_settings

logger = logging.getLogger('session_guard.service.config')


def get_cors_config() -> Tuple[list[str], list[str], list[str]]:
    """
    Read the CORS policy from the CORS_ALLOWED_* variables.

    Returns:
        (origins, methods, headers), each a list of trimmed, non-empty entries
    """
    cors_allowed_origins = os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
    cors_allowed_origins = [origin.strip() for origin in cors_allowed_origins if origin.strip()]

    if not cors_allowed_origins:
        logger.warning("No CORS_ALLOWED_ORIGINS configured, allowing local frontend origins only")
        cors_allowed_origins = [
            "http://localhost:5174",
            "http://localhost:3000",
            "http://127.0.0.1:5174",
            "http://127.0.0.1:3000"
        ]

    cors_allowed_methods = os.getenv("CORS_ALLOWED_METHODS", "GET,POST,PUT,PATCH,DELETE,OPTIONS").split(",")
    cors_allowed_methods = [method.strip() for method in cors_allowed_methods if method.strip()]

    cors_allowed_headers = os.getenv("CORS_ALLOWED_HEADERS", "Content-Type,Authorization").split(",")
    cors_allowed_headers = [header.strip() for header in cors_allowed_headers if header.strip()]

    return cors_allowed_origins, cors_allowed_methods, cors_allowed_headers


def get_session_settings() -> SessionSettings:
    settings = load_session_settings()
    logger.info(f"Session cookie domain: {settings.cookie_domain or '(host only)'}")
    return settings


__all__ = [
    'get_cors_config',
    'get_session_settings',
]
