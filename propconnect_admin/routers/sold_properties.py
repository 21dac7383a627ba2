"""
Sold properties report.

The table, the filter panel and the CSV export all derive from the same cached report;
`refresh=true` on the table fetches it again. Filter edits go to the draft until applied.
"""

from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import Response

from propconnect_admin.core.dependencies import AdminShellDep, ConsoleDep, CurrentAdmin
from propconnect_admin.models.enums import SortDirection, SortField
from propconnect_admin.models.shell import AdminPage
from propconnect_admin.models.sold_property import (
    PAGE_SIZE_OPTIONS,
    FilterDraftUpdate,
    FilterPanelState,
    SoldPropertiesView,
)
from propconnect_admin.services.csv_export import export_csv, export_filename
from propconnect_admin.services.sold_property import SortState, build_view, derive_view

router = APIRouter(prefix="/sold-properties", tags=["sold properties"])

AgentIdQuery = Annotated[int | None, Query(alias="agentId")]
SortByQuery = Annotated[SortField | None, Query(alias="sortBy")]
SortDirectionQuery = Annotated[SortDirection, Query(alias="sortDirection")]


@router.get("", response_model=AdminPage[SoldPropertiesView])
async def get_sold_properties(
    shell: AdminShellDep,
    console: ConsoleDep,
    agent_id: AgentIdQuery = None,
    search: str = "",
    sort_by: SortByQuery = None,
    sort_direction: SortDirectionQuery = SortDirection.DESC,
    page: int = 1,
    page_size: Annotated[int, Query(alias="pageSize")] = PAGE_SIZE_OPTIONS[0],
    refresh: bool = False,
) -> AdminPage[SoldPropertiesView]:
    """
    The visible page of the report.

    Records are scoped to `agentId`, searched, filtered with the active filters, sorted
    and paginated, in that order. Out-of-range pages are clamped and a new `pageSize`
    starts over at page 1. `sortLinks` gives the sort state each column header toggles to.
    """
    workspace = console.sold_properties
    report = await workspace.get_report(console.backend, refresh=refresh)
    view = build_view(
        report,
        agent_id=agent_id,
        search=search,
        filters=workspace.filters.active,
        sort=SortState(sort_by=sort_by, direction=sort_direction),
        page=workspace.resolve_page(page, page_size),
        page_size=page_size,
    )
    return AdminPage[SoldPropertiesView](shell=shell, data=view)


@router.get("/filters", response_model=AdminPage[FilterPanelState])
async def get_filters(
    shell: AdminShellDep, console: ConsoleDep
) -> AdminPage[FilterPanelState]:
    """Draft and active filters, with the city list offered by the panel."""
    workspace = console.sold_properties
    report = await workspace.get_report(console.backend)
    return AdminPage[FilterPanelState](
        shell=shell, data=workspace.filters.state(report.sold_properties)
    )


@router.patch("/filters/draft", response_model=AdminPage[FilterPanelState])
async def update_filter_draft(
    update: FilterDraftUpdate, shell: AdminShellDep, console: ConsoleDep
) -> AdminPage[FilterPanelState]:
    """Change the draft filter. Nothing changes in the table until the draft is applied."""
    workspace = console.sold_properties
    workspace.filters.update_draft(update)
    report = await workspace.get_report(console.backend)
    return AdminPage[FilterPanelState](
        shell=shell, data=workspace.filters.state(report.sold_properties)
    )


@router.post("/filters/apply", response_model=AdminPage[FilterPanelState])
async def apply_filters(
    shell: AdminShellDep, console: ConsoleDep
) -> AdminPage[FilterPanelState]:
    workspace = console.sold_properties
    workspace.filters.apply()
    report = await workspace.get_report(console.backend)
    return AdminPage[FilterPanelState](
        shell=shell, data=workspace.filters.state(report.sold_properties)
    )


@router.post("/filters/clear", response_model=AdminPage[FilterPanelState])
async def clear_filters(
    shell: AdminShellDep, console: ConsoleDep
) -> AdminPage[FilterPanelState]:
    workspace = console.sold_properties
    workspace.filters.clear()
    report = await workspace.get_report(console.backend)
    return AdminPage[FilterPanelState](
        shell=shell, data=workspace.filters.state(report.sold_properties)
    )


@router.get("/export")
async def export_sold_properties(
    _: CurrentAdmin,
    console: ConsoleDep,
    agent_id: AgentIdQuery = None,
    search: str = "",
    sort_by: SortByQuery = None,
    sort_direction: SortDirectionQuery = SortDirection.DESC,
) -> Response:
    """
    Download the filtered and sorted report (every page) as CSV.

    Answers 422 when no record matches.
    """
    workspace = console.sold_properties
    report = await workspace.get_report(console.backend)
    rows = derive_view(
        report.sold_properties,
        agent_id=agent_id,
        search=search,
        filters=workspace.filters.active,
        sort=SortState(sort_by=sort_by, direction=sort_direction),
    )
    return Response(
        content=export_csv(rows),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename()}"'
        },
    )
