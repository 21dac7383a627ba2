"""Shared fixtures for benchmark tests."""

from datetime import datetime, timedelta, timezone

import pytest

from propconnect_admin.models.enums import PropertyType
from propconnect_admin.models.sold_property import (
    SoldBy,
    SoldPropertiesReport,
    SoldProperty,
)

CITIES = ("Hyderabad", "Pune", "Mumbai", "Chennai", "Bengaluru", "Kochi")
PROPERTY_TYPES = tuple(PropertyType)


@pytest.fixture(name="sold_report")
def sold_report_fixture() -> SoldPropertiesReport:
    """
    A sold properties report shaped like a busy month: 2,000 sales across 40 agents.

    Records are deterministic so benchmark runs stay comparable.
    """
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    records = []
    for i in range(2000):
        agent_id = i % 40 + 1
        records.append(
            SoldProperty(
                property_id=i + 1,
                property_title=f"Listing {i + 1:04d}",
                price=1_000_000 + (i * 7919) % 20_000_000,
                property_type=PROPERTY_TYPES[i % len(PROPERTY_TYPES)],
                city=CITIES[i % len(CITIES)],
                locality=f"Sector {i % 25}",
                bedrooms=i % 7,
                bathrooms=i % 4 + 1,
                area=f"{800 + i % 1200} sqft",
                created_at=start,
                updated_at=start + timedelta(hours=i * 5),
                sold_by=SoldBy(
                    agent_id=agent_id,
                    agent_name=f"Agent {agent_id}",
                    agent_email=f"agent{agent_id}@propconnect.test",
                ),
            )
        )
    return SoldPropertiesReport(total_sold=len(records), sold_properties=records)
