from datetime import datetime

from pydantic import computed_field

from propconnect_admin.models.badges import AGENT_STATUS_BADGES
from propconnect_admin.models.base import CamelModel
from propconnect_admin.models.enums import AgentStatus, BadgeVariant


class AgentBase(CamelModel):
    username: str
    full_name: str
    email: str
    phone_number: str
    location: str | None = None
    address: str | None = None
    age: int | None = None
    blood_group: str | None = None
    date_of_birth: str | None = None


class Agent(AgentBase):
    id: int
    status: AgentStatus = AgentStatus.ACTIVE
    created_at: datetime | None = None
    proofs: list[str] | None = None

    @computed_field
    @property
    def status_badge(self) -> BadgeVariant:
        return AGENT_STATUS_BADGES[self.status]


class AgentCreate(AgentBase):
    password: str


class AgentUpdate(CamelModel):
    username: str | None = None
    full_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    status: AgentStatus | None = None
    location: str | None = None
    address: str | None = None
    age: int | None = None
    blood_group: str | None = None
    date_of_birth: str | None = None
