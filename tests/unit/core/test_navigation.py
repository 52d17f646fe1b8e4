"""Unit tests for the navigation model."""

from __future__ import annotations

import pytest

from fluxflow.core.auth.types import Identity, Role
from fluxflow.core.navigation import (
    NAV_ENTRIES,
    ROUTES,
    normalize_path,
    requirement_for,
    visible_entries,
)
from fluxflow.core.rbac.types import RouteRequirement
from tests.fixtures.identities import make_identity


class TestVisibleEntries:
    """Tests for visible_entries."""

    def test_sidebar_order(self) -> None:
        """Test the fixed sidebar order."""
        assert [e.label for e in NAV_ENTRIES] == [
            "Dashboard",
            "Clients",
            "Services",
            "Orders",
            "Tasks",
            "Tickets",
            "Invoices",
            "Subscriptions",
            "Marketing",
            "Team",
            "Support",
            "Settings",
        ]

    @pytest.mark.parametrize("role", [Role.ADMIN, Role.ADMIN_MEMBER])
    def test_admin_family_sees_everything(self, role: Role) -> None:
        """Test agency roles see every entry."""
        assert visible_entries(make_identity(role)) == list(NAV_ENTRIES)

    @pytest.mark.parametrize("role", [Role.CLIENT, Role.CLIENT_MEMBER])
    def test_client_family_loses_admin_entries(self, role: Role) -> None:
        """Test client roles never see admin-only entries."""
        entries = visible_entries(make_identity(role))

        assert entries
        assert not any(e.admin_only for e in entries)
        assert [e.label for e in entries] == [
            "Dashboard",
            "Orders",
            "Tasks",
            "Tickets",
            "Invoices",
            "Subscriptions",
            "Support",
            "Settings",
        ]

    def test_no_identity(self) -> None:
        """Test anonymous callers get only the shared entries."""
        assert not any(e.admin_only for e in visible_entries(None))

    def test_filtering_by_family(self, any_identity: Identity) -> None:
        """Test admin-only entries appear exactly for admin-family roles."""
        has_admin_entries = any(e.admin_only for e in visible_entries(any_identity))
        assert has_admin_entries is any_identity.role.is_admin_family


class TestRoutes:
    """Tests for the route table."""

    def test_every_nav_entry_routed(self) -> None:
        """Test each sidebar path has a route."""
        for entry in NAV_ENTRIES:
            assert entry.path in ROUTES

    @pytest.mark.parametrize(
        ("path", "requirement"),
        [
            ("/tasks", RouteRequirement.ADMIN_MEMBER),
            ("/team", RouteRequirement.ADMIN),
            ("/settings", RouteRequirement.ADMIN),
            ("/client/dashboard", RouteRequirement.NONE),
            ("/client/invoices", RouteRequirement.CLIENT),
            ("/does-not-exist", RouteRequirement.NONE),
        ],
    )
    def test_requirement_for(self, path: str, requirement: RouteRequirement) -> None:
        """Test requirements come from the table, unknown paths declare none."""
        assert requirement_for(path) is requirement

    def test_requirement_ignores_query_and_slash(self) -> None:
        """Test paths are normalized before lookup."""
        assert requirement_for("/tasks/?view=board") is RouteRequirement.ADMIN_MEMBER

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("/", "/"),
            ("", "/"),
            ("tasks", "/tasks"),
            ("/tasks/", "/tasks"),
            ("/tasks?x=1", "/tasks"),
            ("/tasks#top", "/tasks"),
        ],
    )
    def test_normalize_path(self, raw: str, expected: str) -> None:
        """Test path normalization."""
        assert normalize_path(raw) == expected
