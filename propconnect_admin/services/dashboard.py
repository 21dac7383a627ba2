import logging
from datetime import datetime, timezone

from propconnect_admin.models.dashboard import (
    AgentPerformanceCard,
    AgentSummary,
    DashboardReport,
    DashboardStats,
    DistributionSlice,
    PropertyStatusDistribution,
    StatCard,
)
from propconnect_admin.services.backend_client import BackendClient

logger = logging.getLogger(__name__)

DASHBOARD_STATS_PATH = "/api/admin/dashboard/stats"

# (title, stats attribute, page the card links to)
STAT_CARDS = (
    ("Total Properties", "total_properties", "/properties"),
    ("Total Agents", "total_agents", "/agents"),
    ("Total Users", "total_users", "/users"),
    ("Total Inquiries", "total_inquiries", "/inquiries"),
)

# (slice key, legend label)
DISTRIBUTION_SLICES = (
    ("active", "Active"),
    ("sold", "Sold"),
    ("rented", "Rented"),
    ("inactive", "Inactive"),
    ("under_review", "Under Review"),
)


async def fetch_dashboard_stats(client: BackendClient) -> DashboardStats:
    payload = await client.get(DASHBOARD_STATS_PATH)
    return DashboardStats.model_validate(payload or {})


def build_stat_cards(stats: DashboardStats) -> list[StatCard]:
    cards = []
    for title, attribute, link in STAT_CARDS:
        value = getattr(stats, attribute)
        cards.append(
            StatCard(title=title, value=value, display_value=f"{value:,}", link=link)
        )
    return cards


def build_distribution(
    distribution: PropertyStatusDistribution,
) -> list[DistributionSlice]:
    """
    Pie slices of the property status distribution.

    Empty statuses are left out. Percentages are taken over `distribution.total`
    (as reported by the backend) and are 0 when that total is 0.
    """
    slices = []
    for key, name in DISTRIBUTION_SLICES:
        value = getattr(distribution, key)
        if value <= 0:
            continue
        ratio = value / distribution.total * 100 if distribution.total else 0.0
        slices.append(
            DistributionSlice(
                key=key,
                name=name,
                value=value,
                percent=round(ratio, 1),
                label_percent=f"{ratio:.0f}%",
            )
        )
    return slices


def build_agent_card(
    summary: AgentSummary, title: str, variant: str
) -> AgentPerformanceCard:
    return AgentPerformanceCard(
        title=title,
        variant=variant,
        agent_id=summary.agent_id,
        agent_name=summary.agent_name,
        agent_email=summary.agent_email,
        agent_phone=summary.agent_phone,
        count=summary.count,
        count_label="properties sold",
        link=f"/sold-properties?agentId={summary.agent_id}",
    )


def build_dashboard_report(stats: DashboardStats) -> DashboardReport:
    """Project backend statistics onto the dashboard cards and chart. Nothing is recomputed."""
    agent_cards = []
    if stats.top_performing_agent:
        agent_cards.append(
            build_agent_card(stats.top_performing_agent, "Top Performing Agent", "gold")
        )
    if stats.least_active_agent:
        agent_cards.append(
            build_agent_card(stats.least_active_agent, "Least Active Agent", "muted")
        )

    distribution = stats.property_status_distribution
    return DashboardReport(
        stat_cards=build_stat_cards(stats),
        distribution=build_distribution(distribution) if distribution else [],
        distribution_total=distribution.total if distribution else 0,
        agent_cards=agent_cards,
        refreshed_at=datetime.now(timezone.utc),
    )


async def load_dashboard(client: BackendClient) -> DashboardReport:
    stats = await fetch_dashboard_stats(client)
    logger.debug(
        f"Dashboard stats: {stats.total_properties} properties, {stats.total_agents} agents."
    )
    return build_dashboard_report(stats)
