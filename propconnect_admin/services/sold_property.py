"""
Sold properties report: fetching, filtering, sorting and paginating.

The visible table is always derived from the full report by the same pipeline:

1. agent scope (`agentId`),
2. free-text search over title, city, locality and agent name,
3. facets (AND across facets, OR within one facet),
4. optional single-key sort,
5. pagination.

Steps 1-4 feed the CSV export as well; pagination only applies to the table.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Iterable, Sequence

from propconnect_admin.models.enums import PropertyType, SortDirection, SortField
from propconnect_admin.models.sold_property import (
    PAGE_SIZE_OPTIONS,
    FilterDraftUpdate,
    FilterPanelState,
    FilterState,
    SoldPropertiesReport,
    SoldPropertiesView,
    SoldProperty,
    SortLink,
)
from propconnect_admin.services.backend_client import BackendClient
from propconnect_admin.services.pagination import paginate, validate_page_size
from propconnect_admin.services.view_state import LatestOnly
from propconnect_admin.utils.validation import parse_optional_float

logger = logging.getLogger(__name__)

SOLD_PROPERTIES_PATH = "/api/admin/dashboard/sold-properties"
OPEN_ENDED_BUCKET_SUFFIX = "+"


async def fetch_sold_properties(client: BackendClient) -> SoldPropertiesReport:
    payload = await client.get(SOLD_PROPERTIES_PATH)
    report = SoldPropertiesReport.model_validate(payload or {})
    logger.info(f"Fetched {len(report.sold_properties)} sold properties.")
    return report


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC so every comparison is between instants."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def scope_to_agent(
    records: Iterable[SoldProperty], agent_id: int | None
) -> list[SoldProperty]:
    if agent_id is None:
        return list(records)
    return [r for r in records if r.sold_by.agent_id == agent_id]


def search_properties(records: Iterable[SoldProperty], query: str) -> list[SoldProperty]:
    query = (query or "").lower()
    if not query:
        return list(records)
    return [
        r
        for r in records
        if query in r.property_title.lower()
        or query in r.city.lower()
        or query in r.locality.lower()
        or query in r.sold_by.agent_name.lower()
    ]


def matches_bedrooms(bedrooms: int, buckets: set[str]) -> bool:
    """
    Check a bedroom count against the selected buckets.

    A plain bucket "3" matches exactly 3 bedrooms; an open-ended bucket "5+" matches
    5 or more. No selected bucket means no constraint.
    """
    if not buckets:
        return True
    for bucket in buckets:
        if bucket.endswith(OPEN_ENDED_BUCKET_SUFFIX):
            lower = parse_optional_float(bucket[: -len(OPEN_ENDED_BUCKET_SUFFIX)])
            if lower is not None and bedrooms >= lower:
                return True
        elif str(bedrooms) == bucket:
            return True
    return False


def apply_filters(
    records: Iterable[SoldProperty], filters: FilterState
) -> list[SoldProperty]:
    """Keep the records passing every active facet. Unparseable prices are ignored."""
    min_price = parse_optional_float(filters.min_price)
    max_price = parse_optional_float(filters.max_price)
    date_from = _as_utc(filters.date_from) if filters.date_from else None
    date_to = _as_utc(filters.date_to) if filters.date_to else None

    result = []
    for record in records:
        if filters.cities and record.city not in filters.cities:
            continue
        if filters.property_types and record.property_type not in filters.property_types:
            continue
        if min_price is not None and record.price < min_price:
            continue
        if max_price is not None and record.price > max_price:
            continue
        if not matches_bedrooms(record.bedrooms, filters.bedrooms):
            continue
        sold_at = _as_utc(record.updated_at)
        if date_from is not None and sold_at < date_from:
            continue
        if date_to is not None and sold_at > date_to:
            continue
        result.append(record)
    return result


_SORT_KEYS = {
    SortField.PRICE: lambda r: r.price,
    SortField.UPDATED_AT: lambda r: _as_utc(r.updated_at),
    SortField.PROPERTY_TITLE: lambda r: r.property_title.lower(),
}


@dataclass(frozen=True)
class SortState:
    """At most one active sort key; no key keeps the backend order."""

    sort_by: SortField | None = None
    direction: SortDirection = SortDirection.DESC

    def toggle(self, field: SortField) -> "SortState":
        """Same key flips the direction, a new key starts descending."""
        if field == self.sort_by:
            flipped = (
                SortDirection.ASC
                if self.direction == SortDirection.DESC
                else SortDirection.DESC
            )
            return replace(self, direction=flipped)
        return SortState(sort_by=field, direction=SortDirection.DESC)

    def apply(self, records: Sequence[SoldProperty]) -> list[SoldProperty]:
        if self.sort_by is None:
            return list(records)
        # sorted() is stable: ties keep their incoming order in both directions
        return sorted(
            records,
            key=_SORT_KEYS[self.sort_by],
            reverse=self.direction == SortDirection.DESC,
        )

    def links(self) -> list[SortLink]:
        links = []
        for field in SortField:
            target = self.toggle(field)
            links.append(
                SortLink(
                    sort_by=field,
                    sort_direction=target.direction,
                    active=field == self.sort_by,
                )
            )
        return links


def derive_view(
    records: Iterable[SoldProperty],
    *,
    agent_id: int | None = None,
    search: str = "",
    filters: FilterState | None = None,
    sort: SortState | None = None,
) -> list[SoldProperty]:
    """Run scope, search, facets and sort over the report; the result is what gets exported."""
    result = scope_to_agent(records, agent_id)
    result = search_properties(result, search)
    result = apply_filters(result, filters or FilterState())
    return (sort or SortState()).apply(result)


def available_cities(records: Iterable[SoldProperty]) -> list[str]:
    return sorted({r.city for r in records if r.city})


def agent_name_for(records: Iterable[SoldProperty], agent_id: int | None) -> str | None:
    if agent_id is None:
        return None
    for record in records:
        if record.sold_by.agent_id == agent_id:
            return record.sold_by.agent_name
    return None


class FilterPanel:
    """
    Draft and active copies of the facet filter.

    Edits only touch the draft; the table only ever sees the active copy, which changes
    on `apply()` and `clear()`.
    """

    def __init__(self):
        self.draft = FilterState()
        self.active = FilterState()

    def toggle_city(self, city: str) -> None:
        self.draft.cities ^= {city}

    def toggle_property_type(self, property_type: PropertyType) -> None:
        self.draft.property_types ^= {property_type}

    def toggle_bedroom(self, bucket: str) -> None:
        self.draft.bedrooms ^= {bucket}

    def set_price_range(self, min_price: str = "", max_price: str = "") -> None:
        self.draft.min_price = min_price
        self.draft.max_price = max_price

    def set_date_range(
        self, date_from: datetime | None = None, date_to: datetime | None = None
    ) -> None:
        self.draft.date_from = date_from
        self.draft.date_to = date_to

    def update_draft(self, update: FilterDraftUpdate) -> FilterState:
        """
        Overwrite the draft facets present in `update`.

        An explicit null clears its facet: no selection for the set facets, a blank
        bound for the prices and no bound for the dates.
        """
        changes = update.model_dump(exclude_unset=True)
        for field in ("cities", "property_types", "bedrooms"):
            if field in changes and changes[field] is None:
                changes[field] = set()
        for field in ("min_price", "max_price"):
            if field in changes and changes[field] is None:
                changes[field] = ""
        self.draft = FilterState.model_validate(
            {**self.draft.model_dump(), **changes}
        )
        return self.draft

    def apply(self) -> FilterState:
        self.active = self.draft.model_copy(deep=True)
        logger.debug("Sold properties filters applied.")
        return self.active

    def clear(self) -> None:
        self.draft = FilterState()
        self.active = FilterState()

    def state(self, records: Iterable[SoldProperty]) -> FilterPanelState:
        return FilterPanelState(
            draft=self.draft,
            active=self.active,
            available_cities=available_cities(records),
        )


def build_view(
    report: SoldPropertiesReport,
    *,
    agent_id: int | None = None,
    search: str = "",
    filters: FilterState | None = None,
    sort: SortState | None = None,
    page: int = 1,
    page_size: int = PAGE_SIZE_OPTIONS[0],
) -> SoldPropertiesView:
    filters = filters or FilterState()
    sort = sort or SortState()
    rows = derive_view(
        report.sold_properties,
        agent_id=agent_id,
        search=search,
        filters=filters,
        sort=sort,
    )
    items, pagination = paginate(rows, page, page_size)
    return SoldPropertiesView(
        agent_id=agent_id,
        agent_name=agent_name_for(report.sold_properties, agent_id),
        search=search,
        total_sold=report.total_sold,
        top_selling_agent=report.top_selling_agent,
        total_filtered=len(rows),
        page=pagination.page,
        page_size=pagination.page_size,
        total_pages=pagination.total_pages,
        sort_by=sort.sort_by,
        sort_direction=sort.direction,
        sort_links=sort.links(),
        filters=filters,
        items=items,
    )


class SoldPropertiesWorkspace:
    """
    Per-console state of the sold properties page: the cached report, the filter panel
    and the last page size shown. Dropped on logout.
    """

    def __init__(self):
        self.report: LatestOnly[SoldPropertiesReport] = LatestOnly("sold properties")
        self.filters = FilterPanel()
        self.page_size = PAGE_SIZE_OPTIONS[0]

    async def get_report(
        self, client: BackendClient, refresh: bool = False
    ) -> SoldPropertiesReport:
        return await self.report.get(lambda: fetch_sold_properties(client), refresh)

    def resolve_page(self, page: int, page_size: int) -> int:
        """Return the page to show; a page size change sends the operator back to page 1."""
        validate_page_size(page_size)
        if page_size != self.page_size:
            self.page_size = page_size
            return 1
        return page

    def reset(self) -> None:
        self.report.reset()
        self.filters.clear()
        self.page_size = PAGE_SIZE_OPTIONS[0]
