"""Tests for the backend gateway: token attachment, 401 interception and error mapping."""

import httpx
import pytest

from propconnect_admin.exceptions import (
    BackendError,
    BackendUnavailableError,
    SessionExpiredError,
)
from propconnect_admin.models.enums import SessionState
from propconnect_admin.services.backend_client import BackendClient
from propconnect_admin.services.notification import Notifier
from propconnect_admin.services.session_store import SessionStore
from propconnect_admin.services.storage import MemoryStorage

KEY = "propconnect_admin_auth"
SESSION = '{"username": "admin", "userType": "ADMIN", "token": "tok-abcdefghij"}'


@pytest.fixture
def logged_in(fake_backend):
    storage = MemoryStorage({KEY: SESSION})
    notifier = Notifier()
    store = SessionStore(storage, notifier)
    client = BackendClient("http://backend.test", store, transport=fake_backend.transport)
    return store, client, storage, notifier


class TestHeaders:
    @pytest.mark.asyncio
    async def test_bearer_token_attached_when_logged_in(self, logged_in, fake_backend):
        store, client, _, _ = logged_in
        fake_backend.add("GET", "/api/admin/users", [])
        await store.initialize()

        await client.get("/api/admin/users")

        request = fake_backend.last("GET", "/api/admin/users")
        assert request.headers["authorization"] == "Bearer tok-abcdefghij"
        assert request.headers["ngrok-skip-browser-warning"] == "true"
        assert request.headers["accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_no_token_without_session(
        self, session_store, backend_client, fake_backend
    ):
        fake_backend.add("GET", "/api/admin/users", [])
        await session_store.initialize()

        await backend_client.get("/api/admin/users")

        assert "authorization" not in fake_backend.last("GET", "/api/admin/users").headers

    @pytest.mark.asyncio
    async def test_anonymous_request_skips_token(self, logged_in, fake_backend):
        store, client, _, _ = logged_in
        fake_backend.add("POST", "/api/auth/admin/login", {})
        await store.initialize()

        await client.post("/api/auth/admin/login", json={}, anonymous=True)

        assert "authorization" not in fake_backend.last(
            "POST", "/api/auth/admin/login"
        ).headers

    @pytest.mark.asyncio
    async def test_none_params_are_dropped(self, backend_client, fake_backend):
        fake_backend.add("GET", "/api/properties", {"content": []})

        await backend_client.get(
            "/api/properties", params={"page": 0, "propertyType": None}
        )

        request = fake_backend.last("GET", "/api/properties")
        assert dict(request.url.params) == {"page": "0"}


class TestUnauthorized:
    @pytest.mark.asyncio
    async def test_401_forces_logout(self, logged_in, fake_backend):
        store, client, storage, notifier = logged_in
        fake_backend.add("GET", "/api/admin/agents", {"error": "expired"}, status_code=401)
        await store.initialize()

        with pytest.raises(SessionExpiredError):
            await client.get("/api/admin/agents")

        assert store.state == SessionState.ANONYMOUS
        assert KEY not in storage.items
        assert [n.title for n in notifier.pending] == ["Session Expired"]

    @pytest.mark.asyncio
    async def test_401_on_anonymous_request_is_a_plain_error(
        self, logged_in, fake_backend
    ):
        store, client, storage, _ = logged_in
        fake_backend.add("POST", "/api/auth/admin/login", status_code=401)
        await store.initialize()

        with pytest.raises(BackendError) as exc_info:
            await client.post("/api/auth/admin/login", json={}, anonymous=True)

        assert exc_info.value.status_code == 401
        assert store.state == SessionState.AUTHENTICATED
        assert KEY in storage.items

    @pytest.mark.asyncio
    async def test_401_is_not_retried(self, logged_in, fake_backend):
        store, client, _, _ = logged_in
        fake_backend.add("GET", "/api/inquiries", status_code=401)
        await store.initialize()

        with pytest.raises(SessionExpiredError):
            await client.get("/api/inquiries")

        assert len(fake_backend.requests) == 1


class TestErrors:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body, expected",
        [
            ({"error": "Agent exists"}, "Agent exists"),
            ({"message": "Bad input"}, "Bad input"),
            ({"detail": "Nope"}, "Nope"),
            (["unexpected"], None),
        ],
    )
    async def test_error_status_raises_backend_error(
        self, backend_client, fake_backend, body, expected
    ):
        fake_backend.add("POST", "/api/admin/agents", body, status_code=400)

        with pytest.raises(BackendError) as exc_info:
            await backend_client.post("/api/admin/agents", json={})

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == expected

    @pytest.mark.asyncio
    async def test_server_error_default_message(self, backend_client, fake_backend):
        fake_backend.add("GET", "/api/admin/users", status_code=500)

        with pytest.raises(BackendError) as exc_info:
            await backend_client.get("/api/admin/users")

        assert str(exc_info.value) == "Backend request failed with status 500"

    @pytest.mark.asyncio
    async def test_transport_failure(self, backend_client, fake_backend):
        def timeout(request):
            raise httpx.ReadTimeout("too slow", request=request)

        fake_backend.add_handler("GET", "/api/admin/users", timeout)

        with pytest.raises(BackendUnavailableError):
            await backend_client.get("/api/admin/users")

    @pytest.mark.asyncio
    async def test_non_json_body(self, backend_client, fake_backend):
        fake_backend.add_handler(
            "GET", "/api/admin/users", lambda request: httpx.Response(200, text="<html>")
        )

        with pytest.raises(BackendError):
            await backend_client.get("/api/admin/users")

    @pytest.mark.asyncio
    async def test_empty_body_is_none(self, backend_client, fake_backend):
        fake_backend.add("DELETE", "/api/admin/agents/3", status_code=204)

        assert await backend_client.delete("/api/admin/agents/3") is None


@pytest.mark.asyncio
async def test_context_manager_closes_client(session_store, fake_backend):
    async with BackendClient(
        "http://backend.test", session_store, transport=fake_backend.transport
    ) as client:
        assert isinstance(client, BackendClient)
    assert client._client.is_closed
