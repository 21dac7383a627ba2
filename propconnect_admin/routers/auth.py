"""Operator login, logout and session status."""

from typing import Annotated

from fastapi import APIRouter, Depends

from propconnect_admin.core.dependencies import (
    BackendDep,
    get_notifier,
    get_session_store,
)
from propconnect_admin.exceptions import InvalidCredentialsError
from propconnect_admin.models.session import LoginRequest, LoginResult, SessionInfo
from propconnect_admin.services.notification import Notifier
from propconnect_admin.services.session_store import SessionStore

router = APIRouter(tags=["auth"])

SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]


@router.post("/login", response_model=LoginResult)
async def login(
    credentials: LoginRequest,
    session_store: SessionStoreDep,
    backend: BackendDep,
    notifier: Annotated[Notifier, Depends(get_notifier)],
) -> LoginResult:
    """
    Log the operator in with their admin credentials.

    Only ADMIN accounts are accepted. A rejected attempt leaves any existing session as it
    was and answers 401 with the reason shown to the operator.

    Example request:
        {"username": "admin", "password": "secret"}

    Example response:
        {
            "authenticated": true,
            "username": "admin",
            "userType": "ADMIN",
            "notification": {"title": "Login Successful", ...}
        }
    """
    authenticated = await session_store.login(
        backend, credentials.username, credentials.password
    )
    notification = notifier.pending[-1] if notifier.pending else None
    if not authenticated:
        raise InvalidCredentialsError(
            notification.description if notification else "Invalid admin credentials"
        )

    session = session_store.session
    return LoginResult(
        authenticated=True,
        username=session.username,
        user_type=session.user_type,
        notification=notification,
    )


@router.post("/logout", response_model=SessionInfo)
async def logout(session_store: SessionStoreDep) -> SessionInfo:
    """End the operator session. Always succeeds, even without a session."""
    await session_store.logout()
    return session_store.info()


@router.get("/session", response_model=SessionInfo)
def get_session(session_store: SessionStoreDep) -> SessionInfo:
    """Current session state; RESOLVING while the persisted session is being read."""
    return session_store.info()
