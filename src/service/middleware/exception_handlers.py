import logging
from fastapi import Request, HTTPException
from fastapi.exception_handlers import http_exception_handler

logger = logging.getLogger('session_guard.service.middleware')


async def custom_http_exception_handler(request: Request, exc: HTTPException):
    """Log HTTPExceptions before rendering them with FastAPI's default handler"""
    if exc.status_code >= 500:
        logger.error(f"HTTP_EXCEPTION: {exc.status_code} - {exc.detail} for {request.url.path}")
    else:
        logger.info(f"HTTP_EXCEPTION: {exc.status_code} - {exc.detail} for {request.url.path}")
    return await http_exception_handler(request, exc)
