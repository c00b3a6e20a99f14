from uuid import UUID

from pydantic import BaseModel, Field


class SessionInfoResponse(BaseModel):
    """The current session as seen by the server."""

    session_id: UUID = Field(
        description="Identifier of the session",
    )
    data: dict[str, str] = Field(
        description="Attributes stored in the session",
        default={},
        examples=[{"user": "alice"}],
    )


class SessionValueResponse(BaseModel):
    key: str = Field(
        description="Session attribute name",
        examples=["user"],
    )
    value: str = Field(
        description="Session attribute value",
        examples=["alice"],
    )


class SessionValueInput(BaseModel):
    value: str = Field(
        description="Value to store under the key",
        examples=["alice"],
    )


class SessionDataInput(BaseModel):
    values: dict[str, str] = Field(
        description="Attributes to insert or overwrite",
        examples=[{"user": "alice", "theme": "dark"}],
    )
