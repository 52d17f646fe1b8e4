"""Identity fixtures for testing."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

import pytest

from fluxflow.core.auth.types import Identity, Role

CLIENT_ACCOUNT_ID = uuid.UUID("c1c1c1c1-0000-0000-0000-000000000001")


def make_identity(role: Role, /, **overrides: object) -> Identity:
    """Build an identity with sensible defaults for ``role``."""
    fields: dict[str, object] = {
        "id": uuid.uuid4(),
        "email": f"{role.value.replace(':', '.')}@fluxflow.io",
        "full_name": f"Test {role.value}",
        "role": role,
        "client_id": CLIENT_ACCOUNT_ID if role.is_client_family else None,
        "created_at": datetime(2024, 1, 15, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Identity(**fields)


@pytest.fixture
def admin_identity() -> Identity:
    """Return a full admin."""
    return make_identity(Role.ADMIN, full_name="ada admin")


@pytest.fixture
def admin_member_identity() -> Identity:
    """Return an agency team member."""
    return make_identity(Role.ADMIN_MEMBER)


@pytest.fixture
def client_identity() -> Identity:
    """Return a client account owner."""
    return make_identity(Role.CLIENT)


@pytest.fixture
def client_member_identity() -> Identity:
    """Return a member of a client account."""
    return make_identity(Role.CLIENT_MEMBER)


@pytest.fixture(params=list(Role), ids=lambda role: role.value)
def any_identity(request: pytest.FixtureRequest) -> Identity:
    """Return one identity per role."""
    return make_identity(request.param)
