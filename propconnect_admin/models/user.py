from datetime import datetime

from propconnect_admin.models.base import CamelModel


class User(CamelModel):
    id: int
    email: str
    full_name: str
    phone_number: str = ""
    status: str = ""
    created_at: datetime | None = None
