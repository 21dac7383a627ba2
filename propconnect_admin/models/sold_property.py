"""Sold properties report records and the filter state applied to them."""

from datetime import datetime

from pydantic import ConfigDict, Field, field_serializer

from propconnect_admin.models.base import CamelModel
from propconnect_admin.models.enums import PropertyType, SortDirection, SortField

PAGE_SIZE_OPTIONS: tuple[int, ...] = (10, 25, 50, 100)
BEDROOM_OPTIONS: tuple[str, ...] = ("1", "2", "3", "4", "5+")


class SoldBy(CamelModel):
    model_config = ConfigDict(frozen=True)

    agent_id: int
    agent_name: str
    agent_email: str = ""
    agent_phone: str = ""
    agent_username: str = ""
    agent_status: str = ""
    total_sold_by_agent: int = 0


class SoldProperty(CamelModel):
    """Read projection of a sold listing; never mutated locally."""

    model_config = ConfigDict(frozen=True)

    property_id: int
    property_title: str
    price: float
    property_type: PropertyType
    listing_type: str = ""
    city: str = ""
    locality: str = ""
    full_address: str = ""
    bedrooms: int = 0
    bathrooms: int = 0
    area: str = ""
    status: str = ""
    created_at: datetime
    updated_at: datetime
    sold_by: SoldBy


class TopSellingAgent(CamelModel):
    agent_id: int
    agent_name: str
    agent_email: str = ""
    agent_phone: str = ""
    sold_count: int = 0


class SoldPropertiesReport(CamelModel):
    total_sold: int = 0
    top_selling_agent: TopSellingAgent | None = None
    sold_properties: list[SoldProperty] = Field(default_factory=list)


class FilterState(CamelModel):
    """
    Faceted filter of the sold properties report.

    Empty sets and blank strings mean "no constraint" for their facet.
    """

    cities: set[str] = Field(default_factory=set)
    property_types: set[PropertyType] = Field(default_factory=set)
    min_price: str = ""
    max_price: str = ""
    bedrooms: set[str] = Field(default_factory=set)
    date_from: datetime | None = None
    date_to: datetime | None = None

    @field_serializer("cities", "property_types", "bedrooms")
    def _sorted(self, values: set) -> list:
        return sorted(values)

    def is_empty(self) -> bool:
        return self == FilterState()


class FilterDraftUpdate(CamelModel):
    """Partial edit of the draft filter; omitted fields keep their draft value."""

    cities: set[str] | None = None
    property_types: set[PropertyType] | None = None
    min_price: str | None = None
    max_price: str | None = None
    bedrooms: set[str] | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None


class FilterPanelState(CamelModel):
    draft: FilterState
    active: FilterState
    available_cities: list[str]
    property_types: list[PropertyType] = Field(default_factory=lambda: list(PropertyType))
    bedroom_options: list[str] = Field(default_factory=lambda: list(BEDROOM_OPTIONS))


class SortLink(CamelModel):
    """Sort state a click on a column header would produce."""

    sort_by: SortField
    sort_direction: SortDirection
    active: bool


class SoldPropertiesView(CamelModel):
    agent_id: int | None = None
    agent_name: str | None = None
    search: str = ""
    total_sold: int
    top_selling_agent: TopSellingAgent | None = None
    total_filtered: int
    page: int
    page_size: int
    total_pages: int
    page_size_options: list[int] = Field(default_factory=lambda: list(PAGE_SIZE_OPTIONS))
    sort_by: SortField | None = None
    sort_direction: SortDirection = SortDirection.DESC
    sort_links: list[SortLink] = Field(default_factory=list)
    filters: FilterState
    items: list[SoldProperty]
