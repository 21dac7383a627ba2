"""Admin shell models wrapped around every protected page."""

from typing import Generic, TypeVar

from propconnect_admin.models.base import CamelModel

T = TypeVar("T")


class NavItem(CamelModel):
    title: str
    path: str
    active: bool = False


class AdminShell(CamelModel):
    title: str
    username: str
    active_path: str
    navigation: list[NavItem]


class AdminPage(CamelModel, Generic[T]):
    shell: AdminShell
    data: T
