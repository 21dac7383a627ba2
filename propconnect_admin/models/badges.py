"""
Badge variants shown next to statuses and types.

Every mapping is keyed by an enum and covers all of its members, so a lookup never
falls back to a default variant.
"""

from propconnect_admin.models.enums import (
    AgentStatus,
    BadgeVariant,
    InquiryStatus,
    ListingType,
    PropertyType,
)

AGENT_STATUS_BADGES: dict[AgentStatus, BadgeVariant] = {
    AgentStatus.ACTIVE: BadgeVariant.DEFAULT,
    AgentStatus.INACTIVE: BadgeVariant.SECONDARY,
    AgentStatus.SUSPENDED: BadgeVariant.DESTRUCTIVE,
}

INQUIRY_STATUS_BADGES: dict[InquiryStatus, BadgeVariant] = {
    InquiryStatus.NEW: BadgeVariant.DESTRUCTIVE,
    InquiryStatus.CONTACTED: BadgeVariant.SECONDARY,
    InquiryStatus.IN_PROGRESS: BadgeVariant.DEFAULT,
    InquiryStatus.CLOSED: BadgeVariant.OUTLINE,
}

PROPERTY_TYPE_BADGES: dict[PropertyType, BadgeVariant] = {
    PropertyType.RESIDENTIAL: BadgeVariant.DEFAULT,
    PropertyType.COMMERCIAL: BadgeVariant.SECONDARY,
    PropertyType.NEW_DEVELOPMENT: BadgeVariant.OUTLINE,
    PropertyType.AGRICULTURE: BadgeVariant.DESTRUCTIVE,
}

LISTING_TYPE_BADGES: dict[ListingType, BadgeVariant] = {
    ListingType.SALE: BadgeVariant.DEFAULT,
    ListingType.RENT: BadgeVariant.SECONDARY,
}


def badge_label(value: str) -> str:
    """Display text of an enum value, e.g. IN_PROGRESS -> 'IN PROGRESS'."""
    return value.replace("_", " ")
