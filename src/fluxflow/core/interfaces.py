"""Protocol definitions for all external collaborators.

This module defines the interfaces (Protocols) that adapters must implement.
The core only depends on these protocols, never on concrete implementations:
the data store, the notification channel and the session backend are all
swappable.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable
from uuid import UUID

if TYPE_CHECKING:
    from .auth.types import Identity
    from .tasks.status import PersistedTaskStatus
    from .tasks.types import Task, TaskCreate, TaskUpdate


class NotificationLevel(str, Enum):
    """Severity of a user-facing notification."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@runtime_checkable
class IdentityResolver(Protocol):
    """Resolves who is signed in for the current session.

    Called exactly once per session store. May raise; the store treats a
    failure the same as "not signed in".
    """

    async def resolve_session(self) -> Identity | None:
        """Resolve the current identity, or None when unauthenticated."""
        ...


@runtime_checkable
class SignOutService(Protocol):
    """Invalidates the session remotely."""

    async def sign_out(self) -> None:
        """Invalidate the current session.

        Raises:
            Exception: If the remote invalidation fails.
        """
        ...


@runtime_checkable
class TaskRepository(Protocol):
    """Interface for task persistence.

    Returned tasks are in the UI status vocabulary. Writes are keyed by
    task id and may run concurrently for different tasks.
    """

    async def fetch_tasks(self) -> list[Task]:
        """Fetch all tasks, newest first."""
        ...

    async def set_task_status(self, task_id: str, status: PersistedTaskStatus) -> Task:
        """Write a task's status.

        Raises:
            TaskNotFoundError: If the task does not exist.
        """
        ...

    async def create_task(self, data: TaskCreate) -> Task:
        """Insert a new task."""
        ...

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        """Apply a partial update to a task.

        Raises:
            TaskNotFoundError: If the task does not exist.
        """
        ...

    async def delete_task(self, task_id: str) -> None:
        """Delete a task.

        Raises:
            TaskNotFoundError: If the task does not exist.
        """
        ...


@runtime_checkable
class NotificationSink(Protocol):
    """Accepts user-facing notifications.

    The core reports task-mutation outcomes here and does not care how
    they are presented (log line, webhook, toast).
    """

    async def notify(self, level: NotificationLevel, message: str, **context: Any) -> None:
        """Deliver a notification."""
        ...


@runtime_checkable
class ProfileRepository(Protocol):
    """Looks up profile rows for authenticated users."""

    async def get_profile(self, user_id: UUID) -> Identity | None:
        """Get the identity for a user id, or None if no profile exists."""
        ...

    async def get_profile_by_email(self, email: str) -> Identity | None:
        """Get the identity for an email address, or None if no profile exists."""
        ...


@runtime_checkable
class TokenDenylist(Protocol):
    """Tracks revoked token ids so signed-out tokens stop resolving."""

    async def revoke(self, jti: str, expires_at: datetime) -> None:
        """Mark a token id as revoked until it would have expired."""
        ...

    async def is_revoked(self, jti: str) -> bool:
        """Whether a token id has been revoked."""
        ...


@runtime_checkable
class MagicLinkSender(Protocol):
    """Delivers passwordless sign-in links.

    Implementations decide the channel (email, webhook, or the log in
    development); the link already carries the sign-in token.
    """

    async def send_magic_link(self, email: str, link: str) -> bool:
        """Send a sign-in link.

        Args:
            email: Address of the profile signing in.
            link: Full URL that completes the sign-in.

        Returns:
            True if the link was handed off for delivery.
        """
        ...
