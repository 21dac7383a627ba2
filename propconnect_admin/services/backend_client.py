"""
Gateway to the PropConnect REST backend.

Every backend call of the console goes through one `BackendClient`, which wraps a
single `httpx.AsyncClient` and installs two event hooks:

- request: attach `Authorization: Bearer <token>` whenever the session store holds a
  session, unless the request is marked anonymous (the login call).
- response: a 401 on an authenticated request tears the session down through
  `SessionStore.force_logout()` and raises `SessionExpiredError`. There is no retry.
"""

import logging
from typing import Any

import httpx

from propconnect_admin.exceptions import (
    BackendError,
    BackendUnavailableError,
    SessionExpiredError,
)
from propconnect_admin.services.session_store import SessionStore

logger = logging.getLogger(__name__)

ANONYMOUS_EXTENSION = "propconnect_anonymous"

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "ngrok-skip-browser-warning": "true",
}


def _error_message(response: httpx.Response) -> str | None:
    """Pick the backend's error text out of a failure body (`error`, `message` or `detail`)."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    for key in ("error", "message", "detail"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


class BackendClient:
    def __init__(
        self,
        base_url: str,
        session_store: SessionStore,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.session_store = session_store
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers=DEFAULT_HEADERS,
            transport=transport,
            event_hooks={
                "request": [self._attach_token],
                "response": [self._intercept_unauthorized],
            },
        )

    async def _attach_token(self, request: httpx.Request) -> None:
        if request.extensions.get(ANONYMOUS_EXTENSION):
            return
        token = self.session_store.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _intercept_unauthorized(self, response: httpx.Response) -> None:
        if response.status_code != httpx.codes.UNAUTHORIZED:
            return
        if response.request.extensions.get(ANONYMOUS_EXTENSION):
            return
        logger.warning(
            f"Backend rejected the session on {response.request.method} {response.request.url.path}."
        )
        await self.session_store.force_logout()
        raise SessionExpiredError()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
        files: Any = None,
        anonymous: bool = False,
    ) -> Any:
        """
        Send a request to the backend and decode its JSON body.

        Args:
            method: HTTP verb.
            path: Path relative to the backend base URL, e.g. "/api/admin/agents".
            params: Query parameters; None values are dropped.
            json: JSON body.
            data: Form fields (multipart when `files` is given).
            files: Files for a multipart body.
            anonymous: Send without the bearer header and outside the 401 interceptor.

        Returns:
            The decoded JSON body, or None for an empty body.

        Raises:
            SessionExpiredError: The backend answered 401 to an authenticated request.
            BackendError: The backend answered with any other error status, or with a body that is not JSON.
            BackendUnavailableError: The backend could not be reached.
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        extensions = {ANONYMOUS_EXTENSION: True} if anonymous else None

        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                data=data,
                files=files,
                extensions=extensions,
            )
        except httpx.RequestError as e:
            logger.error(f"Backend unreachable for {method} {path}: {e!r}")
            raise BackendUnavailableError() from e

        if response.is_error:
            detail = _error_message(response)
            logger.warning(
                f"Backend {method} {path} failed with {response.status_code}: {detail or '-'}"
            )
            raise BackendError(response.status_code, detail)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Backend {method} {path} returned a non-JSON body.")
            raise BackendError(response.status_code, "Invalid response from server") from e

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
