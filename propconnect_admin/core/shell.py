"""Admin shell (title, operator, sidebar) wrapped around every protected page."""

from propconnect_admin.models.session import Session
from propconnect_admin.models.shell import AdminShell, NavItem

SHELL_TITLE = "PropConnect Admin"

# (sidebar label, path)
NAVIGATION = (
    ("Dashboard", "/"),
    ("Agents", "/agents"),
    ("Properties", "/properties"),
    ("Sold Properties", "/sold-properties"),
    ("Users", "/users"),
    ("Inquiries", "/inquiries"),
)


def is_active(item_path: str, current_path: str) -> bool:
    """The dashboard entry matches "/" only; other entries match their whole subtree."""
    if item_path == "/":
        return current_path == "/"
    return current_path == item_path or current_path.startswith(f"{item_path}/")


def build_shell(session: Session, current_path: str) -> AdminShell:
    return AdminShell(
        title=SHELL_TITLE,
        username=session.username,
        active_path=current_path,
        navigation=[
            NavItem(title=title, path=path, active=is_active(path, current_path))
            for title, path in NAVIGATION
        ],
    )
