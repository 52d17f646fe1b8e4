"""Dependency injection and application lifespan management."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import httpx
import structlog
from fastapi import Request

from fluxflow.adapters.auth import (
    LogMagicLinkSender,
    PostgresProfileRepository,
    PostgresTokenDenylist,
    WebhookMagicLinkSender,
)
from fluxflow.adapters.db import (
    AppDatabase,
    InMemoryProfileRepository,
    InMemoryTaskRepository,
    InMemoryTokenDenylist,
)
from fluxflow.adapters.notifications import (
    LogNotificationSink,
    WebhookConfig,
    WebhookNotificationSink,
)
from fluxflow.adapters.tasks import PostgresTaskRepository
from fluxflow.core.interfaces import (
    MagicLinkSender,
    NotificationSink,
    ProfileRepository,
    TaskRepository,
    TokenDenylist,
)
from fluxflow.services.auth import AuthService
from fluxflow.services.notification import NotificationService
from fluxflow.services.tasks import TaskService

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = structlog.get_logger()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Settings:
    """Application settings loaded from environment.

    ``JWT_SECRET_KEY`` is read by ``fluxflow.core.auth.jwt`` directly.
    """

    def __init__(self) -> None:
        """Load settings from environment variables."""
        self.database_url = os.getenv("DATABASE_URL", "postgresql://localhost:5432/fluxflow")
        self.in_memory = _env_flag("FLUXFLOW_IN_MEMORY")
        self.frontend_url = os.getenv("FLUXFLOW_FRONTEND_URL", "http://localhost:5173")

        # Notifications
        self.webhook_url = os.getenv("FLUXFLOW_WEBHOOK_URL", "")
        self.webhook_secret = os.getenv("FLUXFLOW_WEBHOOK_SECRET") or None

        # Task board
        self.reconcile_on_failure = _env_flag("FLUXFLOW_RECONCILE_ON_FAILURE")

        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("FLUXFLOW_CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]


settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - setup and teardown.

    This context manager handles:
    - Database connection pool setup (or in-memory stores)
    - Notification sinks and magic-link delivery
    - Service construction
    """
    app_db: AppDatabase | None = None
    http_client: httpx.AsyncClient | None = None

    tasks: TaskRepository
    profiles: ProfileRepository
    denylist: TokenDenylist
    if settings.in_memory:
        logger.info("using_in_memory_stores")
        tasks = InMemoryTaskRepository()
        profiles = InMemoryProfileRepository()
        denylist = InMemoryTokenDenylist()
    else:
        app_db = AppDatabase(settings.database_url)
        await app_db.connect()
        tasks = PostgresTaskRepository(app_db)
        profiles = PostgresProfileRepository(app_db)
        denylist = PostgresTokenDenylist(app_db)

    sinks: list[NotificationSink] = [LogNotificationSink()]
    magic_links: MagicLinkSender = LogMagicLinkSender()
    if settings.webhook_url:
        http_client = httpx.AsyncClient()
        webhook = WebhookNotificationSink(
            WebhookConfig(url=settings.webhook_url, secret=settings.webhook_secret),
            client=http_client,
        )
        sinks.append(webhook)
        magic_links = WebhookMagicLinkSender(webhook)
    notifier = NotificationService(sinks)

    # Store in app state
    app.state.app_db = app_db
    app.state.profiles = profiles
    app.state.denylist = denylist
    app.state.notifier = notifier
    app.state.task_service = TaskService(tasks, notifier)
    app.state.auth_service = AuthService(profiles, denylist, magic_links)
    app.state.reconcile_on_failure = settings.reconcile_on_failure

    yield

    if http_client is not None:
        await http_client.aclose()
    if app_db is not None:
        await app_db.close()


def get_task_service(request: Request) -> TaskService:
    """Get the task service from app state."""
    service: TaskService = request.app.state.task_service
    return service


def get_auth_service(request: Request) -> AuthService:
    """Get the auth service from app state."""
    service: AuthService = request.app.state.auth_service
    return service


def get_profiles(request: Request) -> ProfileRepository:
    """Get the profile repository from app state."""
    profiles: ProfileRepository = request.app.state.profiles
    return profiles


def get_denylist(request: Request) -> TokenDenylist:
    """Get the token denylist from app state."""
    denylist: TokenDenylist = request.app.state.denylist
    return denylist


def get_reconcile_on_failure(request: Request) -> bool:
    """Whether board drops refetch tasks after a failed write."""
    return bool(getattr(request.app.state, "reconcile_on_failure", False))


def get_frontend_url() -> str:
    """Get the frontend base URL for links sent to users."""
    return settings.frontend_url
