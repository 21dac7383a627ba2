from fastapi import APIRouter

from propconnect_admin.core.dependencies import AdminShellDep, BackendDep
from propconnect_admin.models.shell import AdminPage
from propconnect_admin.models.user import User
from propconnect_admin.services import user as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=AdminPage[list[User]])
async def list_users(
    shell: AdminShellDep, backend: BackendDep, search: str = ""
) -> AdminPage[list[User]]:
    """Registered users, optionally searched by name, email or phone number."""
    users = await user_service.list_users(backend)
    return AdminPage[list[User]](shell=shell, data=user_service.filter_users(users, search))
