"""Dashboard statistics as computed by the backend, and their display projection."""

from datetime import datetime

from pydantic import Field

from propconnect_admin.models.base import CamelModel


class PropertyStatusDistribution(CamelModel):
    active: int = 0
    sold: int = 0
    rented: int = 0
    inactive: int = 0
    under_review: int = 0
    total: int = 0


class AgentSummary(CamelModel):
    agent_id: int
    agent_name: str
    agent_email: str | None = None
    agent_phone: str | None = None
    count: int = 0


class DashboardStats(CamelModel):
    total_properties: int = 0
    total_agents: int = 0
    total_users: int = 0
    total_inquiries: int = 0
    property_status_distribution: PropertyStatusDistribution | None = None
    top_performing_agent: AgentSummary | None = None
    least_active_agent: AgentSummary | None = None


class StatCard(CamelModel):
    title: str
    value: int
    display_value: str
    link: str


class DistributionSlice(CamelModel):
    key: str
    name: str
    value: int
    percent: float
    label_percent: str


class AgentPerformanceCard(CamelModel):
    title: str
    variant: str
    agent_id: int
    agent_name: str
    agent_email: str | None = None
    agent_phone: str | None = None
    count: int
    count_label: str
    link: str


class DashboardReport(CamelModel):
    stat_cards: list[StatCard]
    distribution: list[DistributionSlice] = Field(default_factory=list)
    distribution_total: int = 0
    agent_cards: list[AgentPerformanceCard] = Field(default_factory=list)
    refreshed_at: datetime
