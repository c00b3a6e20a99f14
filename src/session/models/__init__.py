from __future__ import annotations

import logging
from typing import NewType, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, PrivateAttr
from pydantic_core import PydanticSerializationError

from session.cookies import Cookie, PrivateCookieJar, SameSite

logger = logging.getLogger('session_guard.session.models')

SESSION_COOKIE_NAME = "session"

SessionId = NewType("SessionId", UUID)


def new_session_id() -> SessionId:
    """Mint a random (version 4) session identifier."""
    return SessionId(uuid4())


class Session(BaseModel):
    """
    Per-request session: an identifier plus string attributes.

    Only `id` and `data` are serialized into the cookie. The jar reference is
    borrowed from the request and dropped once the session has been written back.
    """
    id: SessionId = Field(frozen=True, description="Opaque 128-bit session identifier")
    data: dict[str, str] = Field(description="Application-defined session attributes")

    _jar: Optional[PrivateCookieJar] = PrivateAttr(default=None)

    @classmethod
    def new(cls, jar: Optional[PrivateCookieJar] = None) -> Session:
        session = cls(id=new_session_id(), data={})
        session._jar = jar
        return session

    @classmethod
    def from_cookie_value(cls, value: str) -> Session:
        """Raises pydantic.ValidationError when the payload is not a session."""
        return cls.model_validate_json(value)

    def to_cookie_value(self) -> str:
        """
        Raises PydanticSerializationError when `data` holds a non-string value,
        which from_cookie_value would reject on the next request.
        """
        return self.model_dump_json(warnings="error")

    def attach(self, jar: PrivateCookieJar) -> None:
        self._jar = jar

    @property
    def is_attached(self) -> bool:
        return self._jar is not None

    def set(self, key, value) -> None:
        """Insert or overwrite `key`. Both are stored as text."""
        self.data[str(key)] = str(value)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> str:
        return self.data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def write_back(self) -> None:
        """
        Queue this session as the `session` private cookie on its jar.

        Runs at most once per request: the jar reference is released first, so
        later calls and detached sessions do nothing. A session that cannot be
        serialized is logged and skipped, leaving the client's previous cookie
        in place.
        """
        jar, self._jar = self._jar, None
        if jar is None:
            return

        try:
            payload = self.to_cookie_value()
        except (PydanticSerializationError, ValueError, TypeError) as e:
            logger.error(f"Could not serialize session {self.id}: {e}")
            return

        # TODO: skip the write when the data is unchanged since recovery
        cookie = Cookie(
            name=SESSION_COOKIE_NAME,
            value=payload,
            secure=True,
            http_only=True,
            same_site=SameSite.LAX,
        )
        jar.add_private(cookie)
        logger.debug(f"Session {self.id} written back ({len(self.data)} keys)")
