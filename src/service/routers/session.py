from fastapi import APIRouter, HTTPException
import logging

from schema import SessionDataInput, SessionInfoResponse, SessionValueInput, SessionValueResponse
from service.dependencies import SessionDep

logger = logging.getLogger('session_guard.service.routers.session')

router = APIRouter(
    prefix="/session",
    tags=["session"],
)


@router.get("")
async def get_session_info(session: SessionDep) -> SessionInfoResponse:
    """
    Return the current session. A client without a valid session cookie gets a
    new session, which is persisted by the cookie on this response.
    """
    return SessionInfoResponse(session_id=session.id, data=dict(session.data))


@router.get("/data/{key}")
async def get_session_value(key: str, session: SessionDep) -> SessionValueResponse:
    value = session.get(key)
    if value is None:
        raise HTTPException(status_code=404, detail=f"Session has no value for '{key}'")
    return SessionValueResponse(key=key, value=value)


@router.put("/data/{key}")
async def set_session_value(key: str, body: SessionValueInput, session: SessionDep) -> SessionValueResponse:
    session.set(key, body.value)
    logger.debug(f"Set '{key}' on session {session.id}")
    return SessionValueResponse(key=key, value=session[key])


@router.patch("/data")
async def update_session_data(body: SessionDataInput, session: SessionDep) -> SessionInfoResponse:
    """Insert or overwrite several attributes at once."""
    for key, value in body.values.items():
        session.set(key, value)
    logger.debug(f"Updated {len(body.values)} key(s) on session {session.id}")
    return SessionInfoResponse(session_id=session.id, data=dict(session.data))
