"""In-memory adapters for testing and local development.

These keep rows in the same shape as the PostgreSQL tables (task status
in the persisted vocabulary), so the status mapping is exercised the same
way as against a real database.

Attributes on each adapter expose what was written, for assertions:
- ``InMemoryTaskRepository.status_writes``: every status write, in order.
- ``InMemoryTokenDenylist.revoked``: revoked token ids.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from fluxflow.core.auth.types import Identity
from fluxflow.core.exceptions import TaskNotFoundError
from fluxflow.core.tasks.status import PersistedTaskStatus
from fluxflow.core.tasks.types import Task, TaskCreate, TaskUpdate


class InMemoryTaskRepository:
    """Task repository backed by a dict of stored rows."""

    def __init__(self, rows: list[dict[str, Any]] | None = None) -> None:
        """Initialize with optional seed rows.

        Args:
            rows: Stored task rows; ``status`` uses the persisted vocabulary.
        """
        self._rows: dict[str, dict[str, Any]] = {}
        for row in rows or []:
            self._rows[str(row["id"])] = dict(row)
        self.status_writes: list[tuple[str, PersistedTaskStatus]] = []

    def row(self, task_id: str) -> dict[str, Any] | None:
        """Get the stored row for a task."""
        return self._rows.get(task_id)

    async def fetch_tasks(self) -> list[Task]:
        """Fetch all tasks, newest first."""
        rows = sorted(
            self._rows.values(),
            key=lambda r: r.get("created_at") or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )
        return [Task.from_record(row) for row in rows]

    async def set_task_status(self, task_id: str, status: PersistedTaskStatus) -> Task:
        """Write a task's status."""
        row = self._require(task_id)
        self.status_writes.append((task_id, status))
        row["status"] = PersistedTaskStatus(status).value
        row["updated_at"] = datetime.now(UTC)
        return Task.from_record(row)

    async def create_task(self, data: TaskCreate) -> Task:
        """Insert a new task."""
        now = datetime.now(UTC)
        row = {"id": str(uuid4()), **data.to_record(), "created_at": now, "updated_at": now}
        self._rows[row["id"]] = row
        return Task.from_record(row)

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        """Apply a partial update to a task."""
        row = self._require(task_id)
        row.update(updates.to_record())
        row["updated_at"] = datetime.now(UTC)
        return Task.from_record(row)

    async def delete_task(self, task_id: str) -> None:
        """Delete a task."""
        self._require(task_id)
        del self._rows[task_id]

    def _require(self, task_id: str) -> dict[str, Any]:
        row = self._rows.get(task_id)
        if row is None:
            raise TaskNotFoundError(task_id)
        return row


class InMemoryProfileRepository:
    """Profile repository backed by a dict of identities."""

    def __init__(self, identities: list[Identity] | None = None) -> None:
        """Initialize with optional identities."""
        self._profiles: dict[UUID, Identity] = {i.id: i for i in identities or []}

    def add(self, identity: Identity) -> None:
        """Add or replace a profile."""
        self._profiles[identity.id] = identity

    async def get_profile(self, user_id: UUID) -> Identity | None:
        """Get the identity for a user id."""
        return self._profiles.get(user_id)

    async def get_profile_by_email(self, email: str) -> Identity | None:
        """Get the identity for an email address, ignoring case."""
        wanted = email.strip().lower()
        return next(
            (i for i in self._profiles.values() if i.email.lower() == wanted),
            None,
        )


class InMemoryTokenDenylist:
    """Token denylist backed by a dict of expiry times."""

    def __init__(self) -> None:
        """Initialize an empty denylist."""
        self.revoked: dict[str, datetime] = {}

    async def revoke(self, jti: str, expires_at: datetime) -> None:
        """Mark a token id as revoked."""
        self.revoked[jti] = expires_at

    async def is_revoked(self, jti: str) -> bool:
        """Whether a token id has been revoked and not yet expired."""
        expires_at = self.revoked.get(jti)
        return expires_at is not None and expires_at > datetime.now(UTC)
