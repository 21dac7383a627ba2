"""Inquiry service module: listing, enrichment and status updates of property inquiries."""

import logging
from typing import Iterable

import anyio

from propconnect_admin.exceptions import (
    AppException,
    BackendError,
    NotFoundError,
    SessionExpiredError,
    ValidationError,
)
from propconnect_admin.models.enums import InquiryStatus, InquiryType
from propconnect_admin.models.inquiry import Inquiry
from propconnect_admin.services.backend_client import BackendClient
from propconnect_admin.services.property import get_property

logger = logging.getLogger(__name__)

INQUIRIES_PATH = "/api/inquiries"
ALL = "ALL"


async def enrich_inquiry(client: BackendClient, inquiry: Inquiry) -> Inquiry:
    """
    Copy the agent of the inquired property onto the inquiry.

    A failed property lookup leaves the inquiry as it is. An expired session is not a
    lookup failure and propagates.
    """
    try:
        listing = await get_property(client, inquiry.property_id)
    except SessionExpiredError:
        raise
    except AppException as e:
        logger.warning(
            f"Failed to fetch property {inquiry.property_id} for inquiry {inquiry.id}: {e}"
        )
        return inquiry
    return inquiry.model_copy(
        update={
            "agent_id": listing.agent_id,
            "agent_name": listing.agent_name,
            "agent_phone": listing.agent_phone,
            "agent_email": listing.agent_email,
        }
    )


async def list_inquiries(client: BackendClient) -> list[Inquiry]:
    """
    Retrieve every inquiry, each enriched with the agent of its property.

    Property lookups run concurrently; the result keeps the backend order.
    """
    payload = await client.get(INQUIRIES_PATH)
    inquiries = [Inquiry.model_validate(item) for item in payload or []]
    enriched: list[Inquiry] = list(inquiries)
    expired: list[SessionExpiredError] = []

    async def _enrich(index: int, inquiry: Inquiry) -> None:
        try:
            enriched[index] = await enrich_inquiry(client, inquiry)
        except SessionExpiredError as e:
            expired.append(e)

    async with anyio.create_task_group() as tg:
        for index, inquiry in enumerate(inquiries):
            tg.start_soon(_enrich, index, inquiry)

    # Surface the plain error rather than an exception group
    if expired:
        raise expired[0]
    return enriched


async def get_inquiry(client: BackendClient, inquiry_id: int) -> Inquiry:
    """
    The backend has no single-inquiry endpoint; the inquiry is picked from the full list.

    Raises:
        NotFoundError: No inquiry has this ID.
    """
    for inquiry in await list_inquiries(client):
        if inquiry.id == inquiry_id:
            return inquiry
    raise NotFoundError("Inquiry", inquiry_id)


async def update_inquiry_status(
    client: BackendClient,
    inquiry_id: int,
    status: InquiryStatus,
    response: str | None = None,
) -> Inquiry | None:
    """
    Change the status of an inquiry, optionally recording the admin response.

    Raises:
        NotFoundError: The backend has no inquiry with this ID.
    """
    params = {"status": status.value}
    if response:
        params["response"] = response
    try:
        payload = await client.put(f"{INQUIRIES_PATH}/{inquiry_id}/status", params=params)
    except BackendError as e:
        if e.status_code == 404:
            raise NotFoundError("Inquiry", inquiry_id) from e
        raise
    logger.info(f"Inquiry {inquiry_id} moved to {status.value}.")
    return Inquiry.model_validate(payload) if isinstance(payload, dict) else None


def filter_inquiries(
    inquiries: Iterable[Inquiry],
    search: str = "",
    status: str = ALL,
    inquiry_type: str = ALL,
) -> list[Inquiry]:
    """
    Case-insensitive search over name, property title and message, with status and type filters.

    Raises:
        ValidationError: `status` or `inquiry_type` is neither "ALL" nor a known value.
    """
    if status != ALL and status not in InquiryStatus.__members__:
        raise ValidationError(f"Unknown inquiry status '{status}'", field="status")
    if inquiry_type != ALL and inquiry_type not in InquiryType.__members__:
        raise ValidationError(f"Unknown inquiry type '{inquiry_type}'", field="inquiryType")

    query = (search or "").strip().lower()
    result = []
    for inquiry in inquiries:
        if query and not (
            query in inquiry.full_name.lower()
            or query in (inquiry.property_title or "").lower()
            or query in inquiry.message.lower()
        ):
            continue
        if status != ALL and inquiry.status.value != status:
            continue
        if inquiry_type != ALL and inquiry.inquiry_type.value != inquiry_type:
            continue
        result.append(inquiry)
    return result
