"""Navigation model and route table.

``NAV_ENTRIES`` is the sidebar, in display order. ``ROUTES`` maps every
view path to the requirement it declares; paths not listed declare none
and fall through to the not-found view.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fluxflow.core.rbac.types import RouteRequirement

if TYPE_CHECKING:
    from fluxflow.core.auth.types import Identity


@dataclass(frozen=True)
class NavEntry:
    """A sidebar entry.

    Attributes:
        label: Text shown in the sidebar.
        path: View path the entry links to.
        icon: Icon tag understood by the frontend.
        admin_only: Hidden from client-side roles when set.
    """

    label: str
    path: str
    icon: str
    admin_only: bool = False


NAV_ENTRIES: tuple[NavEntry, ...] = (
    NavEntry("Dashboard", "/", "layout-dashboard"),
    NavEntry("Clients", "/clients", "users", admin_only=True),
    NavEntry("Services", "/services", "shopping-bag", admin_only=True),
    NavEntry("Orders", "/orders", "shopping-bag"),
    NavEntry("Tasks", "/tasks", "check-square"),
    NavEntry("Tickets", "/tickets", "ticket-check"),
    NavEntry("Invoices", "/invoices", "file-text"),
    NavEntry("Subscriptions", "/subscriptions", "credit-card"),
    NavEntry("Marketing", "/marketing", "bar-chart-3", admin_only=True),
    NavEntry("Team", "/team", "users", admin_only=True),
    NavEntry("Support", "/support", "message-square"),
    NavEntry("Settings", "/settings", "settings"),
)

ROUTES: dict[str, RouteRequirement] = {
    "/": RouteRequirement.NONE,
    "/clients": RouteRequirement.ADMIN,
    "/services": RouteRequirement.ADMIN,
    "/orders": RouteRequirement.NONE,
    "/tasks": RouteRequirement.ADMIN_MEMBER,
    "/tickets": RouteRequirement.NONE,
    "/invoices": RouteRequirement.NONE,
    "/subscriptions": RouteRequirement.NONE,
    "/marketing": RouteRequirement.ADMIN,
    "/team": RouteRequirement.ADMIN,
    "/support": RouteRequirement.NONE,
    "/settings": RouteRequirement.ADMIN,
    # Landing views declare no requirement so every redirect target renders
    "/client/dashboard": RouteRequirement.NONE,
    "/client/services": RouteRequirement.CLIENT,
    "/client/invoices": RouteRequirement.CLIENT,
    "/client/tickets": RouteRequirement.NONE,
    "/client/support": RouteRequirement.NONE,
}


def normalize_path(path: str) -> str:
    """Strip query string and trailing slash, keeping the bare root."""
    bare = path.split("?", 1)[0].split("#", 1)[0] or "/"
    if len(bare) > 1:
        bare = bare.rstrip("/") or "/"
    return bare if bare.startswith("/") else f"/{bare}"


def requirement_for(path: str) -> RouteRequirement:
    """Requirement declared by the view at ``path``."""
    return ROUTES.get(normalize_path(path), RouteRequirement.NONE)


def visible_entries(identity: Identity | None) -> list[NavEntry]:
    """Sidebar entries visible to an identity.

    Admin-only entries are dropped unless the identity is admin-family.
    Order is preserved.
    """
    is_admin = identity is not None and identity.role.is_admin_family
    return [entry for entry in NAV_ENTRIES if is_admin or not entry.admin_only]
