from typing import Annotated

from fastapi import APIRouter, Depends

from propconnect_admin.core.dependencies import get_notifier
from propconnect_admin.models.notification import Notification
from propconnect_admin.services.notification import Notifier

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[Notification])
def drain_notifications(
    notifier: Annotated[Notifier, Depends(get_notifier)],
) -> list[Notification]:
    """
    Pending toasts, oldest first. Each notification is returned once.

    Unguarded so the login page can show why an attempt failed or a session expired.
    """
    return notifier.drain()
