"""
Process-wide console state.

One `ConsoleState` is built per process in the application lifespan and stored on
`app.state.console`; routes reach its parts through the dependencies of
`propconnect_admin/core/dependencies.py`.
"""

import logging

import httpx

from propconnect_admin.core.config import Settings
from propconnect_admin.models.dashboard import DashboardReport
from propconnect_admin.services.backend_client import BackendClient
from propconnect_admin.services.dashboard import load_dashboard
from propconnect_admin.services.notification import Notifier
from propconnect_admin.services.session_store import KeyValueStorage, SessionStore
from propconnect_admin.services.sold_property import SoldPropertiesWorkspace
from propconnect_admin.services.storage import FileStorage
from propconnect_admin.services.view_state import LatestOnly, StatsPoller

logger = logging.getLogger(__name__)


class ConsoleState:
    def __init__(
        self,
        settings: Settings,
        storage: KeyValueStorage | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.notifier = Notifier()
        self.session_store = SessionStore(
            storage or FileStorage(settings.SESSION_STORAGE_PATH),
            self.notifier,
            storage_key=settings.SESSION_STORAGE_KEY,
        )
        self.backend = BackendClient(
            settings.api_base_url,
            self.session_store,
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
            transport=transport,
        )
        self.dashboard: LatestOnly[DashboardReport] = LatestOnly("dashboard")
        self.sold_properties = SoldPropertiesWorkspace()
        self.poller = StatsPoller(settings.DASHBOARD_REFRESH_SECONDS, self.refresh_dashboard)

        self.session_store.add_logout_listener(self.drop_cached_pages)

    def drop_cached_pages(self) -> None:
        """Forget every page cached for the operator who just logged out."""
        self.dashboard.reset()
        self.sold_properties.reset()
        logger.debug("Cached pages dropped.")

    async def refresh_dashboard(self) -> None:
        """Poller tick; does nothing while no operator is logged in."""
        if not self.session_store.is_authenticated:
            return
        await self.dashboard.load(lambda: load_dashboard(self.backend))

    async def startup(self) -> None:
        await self.session_store.initialize()
        self.poller.start()

    async def shutdown(self) -> None:
        await self.poller.stop()
        await self.backend.aclose()
