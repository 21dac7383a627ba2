from pydantic import Field

from propconnect_admin.models.base import CamelModel
from propconnect_admin.models.enums import SessionState, UserType
from propconnect_admin.models.notification import Notification


class Session(CamelModel):
    """Operator session mirrored from the backend-issued credential."""

    username: str = Field(min_length=1)
    user_type: UserType
    token: str = Field(min_length=1)


class LoginRequest(CamelModel):
    username: str
    password: str


class LoginResponse(CamelModel):
    """Body of `POST /api/auth/admin/login`; every field is optional on failure."""

    username: str | None = None
    user_type: str | None = None
    token: str | None = None
    message: str | None = None
    error: str | None = None


class LoginResult(CamelModel):
    authenticated: bool
    username: str | None = None
    user_type: UserType | None = None
    notification: Notification | None = None


class SessionInfo(CamelModel):
    state: SessionState
    username: str | None = None
    user_type: UserType | None = None
