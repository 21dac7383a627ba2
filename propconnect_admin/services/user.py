from typing import Iterable

from propconnect_admin.models.user import User
from propconnect_admin.services.backend_client import BackendClient

USERS_PATH = "/api/admin/users"


async def list_users(client: BackendClient) -> list[User]:
    payload = await client.get(USERS_PATH)
    return [User.model_validate(item) for item in payload or []]


def filter_users(users: Iterable[User], search: str = "") -> list[User]:
    """Case-insensitive search over full name, email and phone number."""
    query = (search or "").strip().lower()
    if not query:
        return list(users)
    return [
        user
        for user in users
        if query in user.full_name.lower()
        or query in user.email.lower()
        or query in user.phone_number.lower()
    ]
