from datetime import datetime

from pydantic import computed_field

from propconnect_admin.models.badges import INQUIRY_STATUS_BADGES, badge_label
from propconnect_admin.models.base import CamelModel
from propconnect_admin.models.enums import BadgeVariant, InquiryStatus, InquiryType


class Inquiry(CamelModel):
    id: int
    full_name: str
    email: str = ""
    phone_number: str = ""
    message: str = ""
    inquiry_type: InquiryType
    status: InquiryStatus
    property_id: int
    property_title: str | None = None
    property_city: str | None = None
    agent_id: int | None = None
    agent_name: str | None = None
    agent_phone: str | None = None
    agent_email: str | None = None
    user_id: int | None = None
    user_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    admin_response: str | None = None
    responded_at: datetime | None = None

    @computed_field
    @property
    def status_badge(self) -> BadgeVariant:
        return INQUIRY_STATUS_BADGES[self.status]

    @computed_field
    @property
    def status_label(self) -> str:
        return badge_label(self.status.value)


class InquiryStatusUpdate(CamelModel):
    status: InquiryStatus
    response: str | None = None
