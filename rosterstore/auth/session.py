from enum import Enum

from pydantic import BaseModel

from rosterstore.models.user import PublicUser


class SessionState(str, Enum):
    ANONYMOUS = 'anonymous'
    AUTHENTICATED = 'authenticated'


class LeaderSession(BaseModel):
    """The single signed-in leader of this process, if any."""

    user: PublicUser | None = None

    @property
    def state(self) -> SessionState:
        return SessionState.AUTHENTICATED if self.user is not None else SessionState.ANONYMOUS

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None
