from datetime import datetime

from pydantic import Field, computed_field

from propconnect_admin.models.badges import LISTING_TYPE_BADGES, PROPERTY_TYPE_BADGES
from propconnect_admin.models.base import CamelModel
from propconnect_admin.models.enums import BadgeVariant, ListingType, PropertyType


class PropertyImage(CamelModel):
    image_url: str
    is_primary: bool = False


class PropertyListItem(CamelModel):
    id: int
    property_title: str
    price: float
    property_type: PropertyType
    listing_type: ListingType
    city: str = ""
    agent_id: int | None = None
    agent_name: str | None = None
    agent_phone: str | None = None
    agent_email: str | None = None
    status: str = ""
    created_at: datetime | None = None
    view_count: int = 0
    full_address: str | None = None
    locality: str | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    area: str | None = None
    amenities: str | None = None
    property_images: list[PropertyImage] = Field(default_factory=list)
    latitude: float | None = None
    longitude: float | None = None
    is_verified: bool | None = None

    @computed_field
    @property
    def type_badge(self) -> BadgeVariant:
        return PROPERTY_TYPE_BADGES[self.property_type]

    @computed_field
    @property
    def listing_badge(self) -> BadgeVariant:
        return LISTING_TYPE_BADGES[self.listing_type]


class PropertyPage(CamelModel):
    """Spring-style page returned by `GET /api/properties`."""

    content: list[PropertyListItem] = Field(default_factory=list)
    total_pages: int = 0
    total_elements: int = 0
    number: int = 0
    size: int = 10


# Fields the edit form refuses to submit empty
PROPERTY_REQUIRED_FIELDS: tuple[str, ...] = (
    "property_title",
    "price",
    "property_type",
    "listing_type",
    "full_address",
    "locality",
    "city",
    "state",
    "pincode",
    "contact_name",
    "contact_phone",
)


class PropertyUpdate(CamelModel):
    """Multipart edit of a listing; blank optional fields are not sent."""

    property_title: str | None = None
    price: float | None = None
    property_type: PropertyType | None = None
    listing_type: ListingType | None = None
    property_description: str | None = None
    full_address: str | None = None
    locality: str | None = None
    city: str | None = None
    state: str | None = None
    pincode: str | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    area: str | None = None
    carpet_area: str | None = None
    built_up_area: str | None = None
    floors: int | None = None
    total_floors: int | None = None
    property_age: int | None = None
    furnishing: str | None = None
    parking_available: bool = False
    parking_spots: int | None = None
    contact_name: str | None = None
    contact_phone: str | None = None
    contact_email: str | None = None
    youtube_video_url: str | None = None
    instagram_profile: str | None = None
    listing_status: str | None = None
    amenities: list[str] = Field(default_factory=list)
    existing_images: list[PropertyImage] = Field(default_factory=list)
