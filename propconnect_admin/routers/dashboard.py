from fastapi import APIRouter

from propconnect_admin.core.dependencies import AdminShellDep, ConsoleDep
from propconnect_admin.models.dashboard import DashboardReport
from propconnect_admin.models.shell import AdminPage
from propconnect_admin.services.dashboard import load_dashboard

router = APIRouter(tags=["dashboard"])


@router.get("/", response_model=AdminPage[DashboardReport])
async def get_dashboard(
    shell: AdminShellDep, console: ConsoleDep, refresh: bool = False
) -> AdminPage[DashboardReport]:
    """
    Dashboard statistics: stat cards, property status distribution and agent performance.

    The report is cached and kept fresh by the background poller; `refresh=true` fetches
    it again from the backend.
    """
    report = await console.dashboard.get(
        lambda: load_dashboard(console.backend), refresh=refresh
    )
    return AdminPage[DashboardReport](shell=shell, data=report)
