"""Operator-facing notifications (toasts)."""

from datetime import datetime, timezone

from pydantic import Field

from propconnect_admin.models.base import CamelModel
from propconnect_admin.models.enums import NotificationVariant


class Notification(CamelModel):
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
