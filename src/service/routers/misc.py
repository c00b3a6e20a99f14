from fastapi import APIRouter
from typing import Any

router = APIRouter()


@router.get("/status")
async def get_status() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok"}
