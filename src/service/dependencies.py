"""
FastAPI dependencies for the session-guard service.

This module provides reusable dependency functions that can be injected
into route handlers throughout the application.
"""
from typing import Annotated

from fastapi import Depends, Request

from session import Session


def get_session(request: Request) -> Session:
    """
    Get the session SessionMiddleware attached to this request.

    The session lives exactly as long as the request; handlers must not keep
    a reference to it afterwards.

    Raises:
        RuntimeError: if SessionMiddleware is not installed on the app
    """
    session = getattr(request.state, "session", None)
    if session is None:
        raise RuntimeError("No session on request state, is SessionMiddleware installed?")
    return session


SessionDep = Annotated[Session, Depends(get_session)]
