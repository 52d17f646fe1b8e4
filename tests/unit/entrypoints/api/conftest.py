"""Fixtures for API tests."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from fluxflow.adapters.db.memory import (
    InMemoryProfileRepository,
    InMemoryTaskRepository,
    InMemoryTokenDenylist,
)
from fluxflow.core.auth.jwt import create_access_token
from fluxflow.core.auth.types import Identity
from fluxflow.entrypoints.api.deps import (
    get_auth_service,
    get_denylist,
    get_frontend_url,
    get_profiles,
    get_reconcile_on_failure,
    get_task_service,
)
from fluxflow.entrypoints.api.routes import api_router
from fluxflow.services.auth import AuthService
from fluxflow.services.notification import NotificationService
from fluxflow.services.tasks import TaskService


@pytest.fixture
def profiles(
    admin_identity: Identity,
    admin_member_identity: Identity,
    client_identity: Identity,
    client_member_identity: Identity,
) -> InMemoryProfileRepository:
    """Return a profile repository with one identity per role."""
    return InMemoryProfileRepository(
        [admin_identity, admin_member_identity, client_identity, client_member_identity]
    )


@pytest.fixture
def denylist() -> InMemoryTokenDenylist:
    """Return an empty denylist."""
    return InMemoryTokenDenylist()


@pytest.fixture
def magic_links() -> AsyncMock:
    """Return a link sender that records the links it is given."""
    sender = AsyncMock()
    sender.send_magic_link.return_value = True
    return sender


@pytest.fixture
def task_service(task_repository: InMemoryTaskRepository) -> TaskService:
    """Return a task service over the seeded repository."""
    return TaskService(task_repository, NotificationService([]))


@pytest.fixture
def app(
    profiles: InMemoryProfileRepository,
    denylist: InMemoryTokenDenylist,
    task_service: TaskService,
    magic_links: AsyncMock,
) -> FastAPI:
    """Create test app with the API routes and in-memory stores."""
    app = FastAPI()
    app.include_router(api_router, prefix="/api/v1")
    app.dependency_overrides[get_profiles] = lambda: profiles
    app.dependency_overrides[get_denylist] = lambda: denylist
    app.dependency_overrides[get_task_service] = lambda: task_service
    app.dependency_overrides[get_auth_service] = lambda: AuthService(
        profiles, denylist, magic_links
    )
    app.dependency_overrides[get_frontend_url] = lambda: "https://app.fluxflow.io"
    app.dependency_overrides[get_reconcile_on_failure] = lambda: False
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def auth_headers() -> Callable[[Identity], dict[str, str]]:
    """Return a factory for bearer headers."""

    def make(identity: Identity) -> dict[str, str]:
        token = create_access_token(
            str(identity.id),
            identity.role.value,
            client_id=str(identity.client_id) if identity.client_id else None,
        )
        return {"Authorization": f"Bearer {token}"}

    return make
