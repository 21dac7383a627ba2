from typing import Annotated

from fastapi import Depends, Request

from propconnect_admin.core.shell import build_shell
from propconnect_admin.core.state import ConsoleState
from propconnect_admin.exceptions import (
    InsufficientPermissionsError,
    NotAuthenticatedError,
    SessionResolvingError,
)
from propconnect_admin.models.enums import SessionState, UserType
from propconnect_admin.models.session import Session
from propconnect_admin.models.shell import AdminShell
from propconnect_admin.services.backend_client import BackendClient
from propconnect_admin.services.notification import Notifier
from propconnect_admin.services.session_store import SessionStore


def get_console(request: Request) -> ConsoleState:
    return request.app.state.console


def get_session_store(
    console: Annotated[ConsoleState, Depends(get_console)],
) -> SessionStore:
    return console.session_store


def get_backend_client(
    console: Annotated[ConsoleState, Depends(get_console)],
) -> BackendClient:
    return console.backend


def get_notifier(console: Annotated[ConsoleState, Depends(get_console)]) -> Notifier:
    return console.notifier


def require_admin(
    request: Request,
    session_store: Annotated[SessionStore, Depends(get_session_store)],
) -> Session:
    """
    Guard of every protected route.

    Returns:
        Session: The operator session.

    Raises:
        SessionResolvingError: The persisted session has not been read yet.
        NotAuthenticatedError: No operator is logged in; carries the requested path for the login redirect.
        InsufficientPermissionsError: The session does not belong to an ADMIN.
    """
    if session_store.state == SessionState.RESOLVING:
        raise SessionResolvingError()

    session = session_store.session
    if session_store.state != SessionState.AUTHENTICATED or session is None:
        next_path = request.url.path
        if request.url.query:
            next_path = f"{next_path}?{request.url.query}"
        raise NotAuthenticatedError(next_path)

    if session.user_type != UserType.ADMIN:
        raise InsufficientPermissionsError()
    return session


def get_admin_shell(
    request: Request, session: Annotated[Session, Depends(require_admin)]
) -> AdminShell:
    return build_shell(session, request.url.path)


CurrentAdmin = Annotated[Session, Depends(require_admin)]
AdminShellDep = Annotated[AdminShell, Depends(get_admin_shell)]
BackendDep = Annotated[BackendClient, Depends(get_backend_client)]
ConsoleDep = Annotated[ConsoleState, Depends(get_console)]
