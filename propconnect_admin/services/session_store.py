"""
Operator session store.

Single source of truth for "is the operator authenticated". The store mirrors the
credential issued by the backend login endpoint into durable storage so that a restart
of the console keeps the operator logged in, and it is the only component allowed to
move between the RESOLVING, ANONYMOUS and AUTHENTICATED states:

- RESOLVING -> ANONYMOUS | AUTHENTICATED: `initialize()` reading durable storage.
- ANONYMOUS -> AUTHENTICATED: a successful `login()` only.
- AUTHENTICATED -> ANONYMOUS: `logout()` or `force_logout()` (backend answered 401).

A persisted session is trusted until the backend rejects it; there is no local expiry.
"""

import logging
from typing import TYPE_CHECKING, Callable, Protocol

from anyio import to_thread
from pydantic import ValidationError as PydanticValidationError

from propconnect_admin.exceptions import BackendError, BackendUnavailableError
from propconnect_admin.models.enums import SessionState, UserType
from propconnect_admin.models.session import LoginResponse, Session, SessionInfo
from propconnect_admin.services.notification import Notifier
from propconnect_admin.utils.validation import mask_token

if TYPE_CHECKING:
    from propconnect_admin.services.backend_client import BackendClient

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "propconnect_admin_auth"
LOGIN_PATH = "/api/auth/admin/login"


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class SessionStore:
    def __init__(
        self,
        storage: KeyValueStorage,
        notifier: Notifier,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        self._storage = storage
        self._notifier = notifier
        self._storage_key = storage_key
        self._session: Session | None = None
        self._state = SessionState.RESOLVING
        self._logout_listeners: list[Callable[[], None]] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def token(self) -> str | None:
        return self._session.token if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._state == SessionState.AUTHENTICATED

    def info(self) -> SessionInfo:
        return SessionInfo(
            state=self._state,
            username=self._session.username if self._session else None,
            user_type=self._session.user_type if self._session else None,
        )

    def add_logout_listener(self, listener: Callable[[], None]) -> None:
        """
        Register a callback run every time an authenticated session ends.

        That is a transition to ANONYMOUS, or a login by a different operator replacing
        the current session.
        """
        self._logout_listeners.append(listener)

    async def initialize(self) -> SessionState:
        """
        Resolve the initial state from durable storage.

        A missing record means ANONYMOUS. A record that cannot be read, parsed or validated
        (or that does not belong to an ADMIN) is discarded, also resulting in ANONYMOUS;
        this method never raises.

        Returns:
            SessionState: ANONYMOUS or AUTHENTICATED.
        """
        try:
            raw = await to_thread.run_sync(self._storage.get_item, self._storage_key)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read persisted session: {e}")
            raw = None

        self._session = await self._parse_persisted(raw) if raw is not None else None
        self._state = (
            SessionState.AUTHENTICATED if self._session else SessionState.ANONYMOUS
        )
        logger.info(f"Session resolved as {self._state.value}.")
        return self._state

    async def _parse_persisted(self, raw: str) -> Session | None:
        try:
            session = Session.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.warning(
                f"Discarding malformed persisted session ({e.error_count()} errors)."
            )
            await self._remove_persisted()
            return None

        if session.user_type != UserType.ADMIN:
            logger.warning("Discarding persisted session of a non-admin account.")
            await self._remove_persisted()
            return None
        return session

    async def login(self, client: "BackendClient", username: str, password: str) -> bool:
        """
        Authenticate the operator against the backend admin login endpoint.

        The request is sent without the bearer header and outside the 401 interceptor, so a
        rejected attempt never disturbs an existing session. Only a success response whose
        `userType` is ADMIN and which carries a token creates and persists a session.

        Args:
            client: Gateway to the backend.
            username: Operator username.
            password: Operator password.

        Returns:
            bool: True when the operator is now authenticated, False otherwise.
        """
        try:
            payload = await client.post(
                LOGIN_PATH,
                json={"username": username, "password": password},
                anonymous=True,
            )
        except BackendUnavailableError:
            self._notifier.error(
                "Connection Error", "Unable to connect to server. Please try again."
            )
            return False
        except BackendError as e:
            logger.info(f"Admin login rejected for '{username}' ({e.status_code}).")
            self._notifier.error("Login Failed", e.detail or "Invalid admin credentials")
            return False

        try:
            response = LoginResponse.model_validate(payload or {})
        except PydanticValidationError:
            logger.error(f"Login response for '{username}' is not a login payload.")
            self._notifier.error("Login Failed", "Invalid admin credentials")
            return False

        if response.user_type != UserType.ADMIN.value:
            logger.info(f"Login of '{username}' refused: account is not an admin.")
            self._notifier.error(
                "Login Failed", response.error or "Invalid admin credentials"
            )
            return False

        try:
            session = Session(
                username=response.username or username,
                user_type=UserType.ADMIN,
                token=response.token or "",
            )
        except PydanticValidationError:
            logger.error("Login response did not include a session token.")
            self._notifier.error(
                "Login Failed", "Login response did not include a session token"
            )
            return False

        previous = self._session
        self._session = session
        self._state = SessionState.AUTHENTICATED
        if previous is not None and previous.username != session.username:
            # Another operator took over; drop what was cached for the previous one
            self._run_logout_listeners()
        try:
            await to_thread.run_sync(
                self._storage.set_item,
                self._storage_key,
                session.model_dump_json(by_alias=True),
            )
        except OSError as e:
            # The operator stays logged in for this process only
            logger.error(f"Could not persist session: {e}")

        logger.info(f"Admin '{session.username}' logged in (token {mask_token(session.token)}).")
        self._notifier.notify(
            "Login Successful", response.message or "Welcome to PropConnect Admin Panel"
        )
        return True

    async def logout(self) -> None:
        """Clear the in-memory and persisted session. Never fails."""
        await self._clear()
        self._notifier.notify("Logged Out", "You have been successfully logged out.")

    async def force_logout(self) -> None:
        """
        Tear the session down after the backend rejected its token.

        Storage is cleared on every call; the notification is only emitted when an
        authenticated session actually ended.
        """
        was_authenticated = self.is_authenticated
        await self._clear()
        if was_authenticated:
            self._notifier.error(
                "Session Expired", "Your session has expired. Please log in again."
            )

    async def _clear(self) -> None:
        was_authenticated = self.is_authenticated
        self._session = None
        self._state = SessionState.ANONYMOUS
        await self._remove_persisted()
        if was_authenticated:
            self._run_logout_listeners()

    async def _remove_persisted(self) -> None:
        try:
            await to_thread.run_sync(self._storage.remove_item, self._storage_key)
        except OSError as e:
            logger.error(f"Could not remove persisted session: {e}")

    def _run_logout_listeners(self) -> None:
        for listener in self._logout_listeners:
            try:
                listener()
            except Exception as e:
                logger.error(f"Logout listener {listener!r} failed: {e}")
