"""Application services."""

from fluxflow.services.auth import AuthService
from fluxflow.services.notification import NotificationService
from fluxflow.services.tasks import TaskService

__all__ = ["AuthService", "NotificationService", "TaskService"]
