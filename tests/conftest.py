import asyncio
import os
from datetime import datetime, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("PROPCONNECT_API_BASE_URL", "http://backend.test")

from propconnect_admin.core.config import Settings  # noqa: E402
from propconnect_admin.core.state import ConsoleState  # noqa: E402
from propconnect_admin.models.enums import PropertyType, UserType  # noqa: E402
from propconnect_admin.models.session import Session  # noqa: E402
from propconnect_admin.models.sold_property import SoldBy, SoldProperty  # noqa: E402
from propconnect_admin.services.backend_client import BackendClient  # noqa: E402
from propconnect_admin.services.notification import Notifier  # noqa: E402
from propconnect_admin.services.session_store import SessionStore  # noqa: E402
from propconnect_admin.services.storage import MemoryStorage  # noqa: E402

BACKEND_URL = "http://backend.test"
STORAGE_KEY = "propconnect_admin_auth"
ADMIN_TOKEN = "admin-token-1234567890"


class FakeBackend:
    """
    In-memory stand-in for the PropConnect REST API, served through httpx.MockTransport.

    Routes are keyed by (method, path); a route is either a (status, body) pair or a
    callable receiving the httpx.Request. Unknown routes answer 404.
    """

    def __init__(self):
        self.routes = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, body=None, status_code: int = 200):
        self.routes[(method, path)] = (status_code, body)

    def add_handler(self, method: str, path: str, handler):
        self.routes[(method, path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "Not found"})
        if callable(route):
            return route(request)
        status_code, body = route
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def last(self, method: str, path: str) -> httpx.Request:
        for request in reversed(self.requests):
            if request.method == method and request.url.path == path:
                return request
        raise AssertionError(f"No {method} {path} request was sent")


def admin_session_json(username: str = "admin", token: str = ADMIN_TOKEN) -> str:
    session = Session(username=username, user_type=UserType.ADMIN, token=token)
    return session.model_dump_json(by_alias=True)


def make_sold_property(
    property_id: int = 1,
    *,
    title: str | None = None,
    price: float = 5_000_000,
    property_type: PropertyType = PropertyType.RESIDENTIAL,
    city: str = "Hyderabad",
    locality: str = "Banjara Hills",
    bedrooms: int = 3,
    updated_at: datetime | None = None,
    agent_id: int = 1,
    agent_name: str = "Ravi Kumar",
) -> SoldProperty:
    updated_at = updated_at or datetime(2024, 3, 7, 10, 30, tzinfo=timezone.utc)
    return SoldProperty(
        property_id=property_id,
        property_title=title or f"Property {property_id}",
        price=price,
        property_type=property_type,
        listing_type="SALE",
        city=city,
        locality=locality,
        full_address=f"{property_id} Main Road, {city}",
        bedrooms=bedrooms,
        bathrooms=2,
        area="1500 sqft",
        status="SOLD",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        updated_at=updated_at,
        sold_by=SoldBy(
            agent_id=agent_id,
            agent_name=agent_name,
            agent_email=f"agent{agent_id}@propconnect.test",
            agent_phone=f"90000000{agent_id:02d}",
        ),
    )


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture
def session_store(storage, notifier) -> SessionStore:
    return SessionStore(storage, notifier, storage_key=STORAGE_KEY)


@pytest.fixture
def backend_client(fake_backend, session_store) -> BackendClient:
    return BackendClient(BACKEND_URL, session_store, transport=fake_backend.transport)


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests: fake backend URL, no dashboard poller."""
    return Settings(
        PROPCONNECT_API_BASE_URL=BACKEND_URL,
        DASHBOARD_REFRESH_SECONDS=0,
        BACKEND_CORS_ORIGINS="",
    )


def _build_console(settings, fake_backend, storage) -> ConsoleState:
    console = ConsoleState(settings, storage=storage, transport=fake_backend.transport)
    asyncio.run(console.session_store.initialize())
    return console


@pytest.fixture
def console(test_settings, fake_backend) -> ConsoleState:
    """Console state with an ADMIN operator already logged in."""
    storage = MemoryStorage({STORAGE_KEY: admin_session_json()})
    return _build_console(test_settings, fake_backend, storage)


@pytest.fixture
def anonymous_console(test_settings, fake_backend) -> ConsoleState:
    return _build_console(test_settings, fake_backend, MemoryStorage())


def _client_for(console: ConsoleState):
    from propconnect_admin.main import app

    app.state.console = console
    # No context manager: the lifespan (logging, file storage, poller) stays off
    client = TestClient(app)
    yield client
    del app.state.console


@pytest.fixture
def client(console):
    """TestClient with an authenticated operator."""
    yield from _client_for(console)


@pytest.fixture
def anonymous_client(anonymous_console):
    yield from _client_for(anonymous_console)


@pytest.fixture
def sold_property_factory():
    return make_sold_property
