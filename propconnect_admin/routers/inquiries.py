from typing import Annotated

from fastapi import APIRouter, Query

from propconnect_admin.core.dependencies import AdminShellDep, BackendDep
from propconnect_admin.models.inquiry import Inquiry, InquiryStatusUpdate
from propconnect_admin.models.shell import AdminPage
from propconnect_admin.services import inquiry as inquiry_service

router = APIRouter(prefix="/inquiries", tags=["inquiries"])


@router.get("", response_model=AdminPage[list[Inquiry]])
async def list_inquiries(
    shell: AdminShellDep,
    backend: BackendDep,
    search: str = "",
    status_filter: Annotated[str, Query(alias="status")] = inquiry_service.ALL,
    inquiry_type: Annotated[str, Query(alias="inquiryType")] = inquiry_service.ALL,
) -> AdminPage[list[Inquiry]]:
    """
    Inquiries with the agent of each inquired property, searched by name, property title
    or message and filtered by status and type ("ALL" disables a filter).
    """
    inquiries = await inquiry_service.list_inquiries(backend)
    filtered = inquiry_service.filter_inquiries(
        inquiries, search, status_filter, inquiry_type
    )
    return AdminPage[list[Inquiry]](shell=shell, data=filtered)


@router.get("/{inquiry_id}", response_model=AdminPage[Inquiry])
async def get_inquiry(
    inquiry_id: int, shell: AdminShellDep, backend: BackendDep
) -> AdminPage[Inquiry]:
    inquiry = await inquiry_service.get_inquiry(backend, inquiry_id)
    return AdminPage[Inquiry](shell=shell, data=inquiry)


@router.put("/{inquiry_id}/status", response_model=AdminPage[Inquiry | None])
async def update_inquiry_status(
    inquiry_id: int,
    update: InquiryStatusUpdate,
    shell: AdminShellDep,
    backend: BackendDep,
) -> AdminPage[Inquiry | None]:
    """
    Move an inquiry to a new status, optionally with a response for the customer.

    Example request:
        {"status": "CONTACTED", "response": "Called back, visit booked for Monday."}
    """
    updated = await inquiry_service.update_inquiry_status(
        backend, inquiry_id, update.status, update.response
    )
    return AdminPage[Inquiry | None](shell=shell, data=updated)
