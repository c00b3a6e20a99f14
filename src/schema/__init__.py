from .schema import (
    SessionDataInput,
    SessionInfoResponse,
    SessionValueInput,
    SessionValueResponse,
)

__all__ = [
    "SessionDataInput",
    "SessionInfoResponse",
    "SessionValueInput",
    "SessionValueResponse",
]
