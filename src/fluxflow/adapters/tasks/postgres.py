"""PostgreSQL implementation of TaskRepository."""

from typing import Any
from uuid import UUID

import structlog

from fluxflow.adapters.db.app_db import AppDatabase
from fluxflow.core.exceptions import TaskNotFoundError
from fluxflow.core.tasks.status import PersistedTaskStatus
from fluxflow.core.tasks.types import Task, TaskCreate, TaskUpdate

logger = structlog.get_logger()

# Columns a partial update may touch; anything else is ignored.
_UPDATABLE_COLUMNS = (
    "title",
    "description",
    "status",
    "due_date",
    "assigned_to",
    "order_id",
    "ticket_id",
)

_UUID_COLUMNS = frozenset({"assigned_to", "order_id", "ticket_id"})


def _task_uuid(task_id: str) -> UUID:
    """Parse a task id, treating malformed ids as missing tasks."""
    try:
        return UUID(task_id)
    except ValueError:
        raise TaskNotFoundError(task_id) from None


def _column_value(column: str, value: Any) -> Any:
    if column in _UUID_COLUMNS and value is not None:
        return UUID(str(value))
    return value


class PostgresTaskRepository:
    """PostgreSQL implementation of task repository."""

    def __init__(self, db: AppDatabase) -> None:
        """Initialize with database connection.

        Args:
            db: Application database instance.
        """
        self._db = db

    async def fetch_tasks(self) -> list[Task]:
        """Fetch all tasks, newest first."""
        rows = await self._db.fetch_all("SELECT * FROM tasks ORDER BY created_at DESC")
        return [Task.from_record(row) for row in rows]

    async def set_task_status(self, task_id: str, status: PersistedTaskStatus) -> Task:
        """Write a task's status."""
        row = await self._db.fetch_one(
            """
            UPDATE tasks
            SET status = $1, updated_at = NOW()
            WHERE id = $2
            RETURNING *
            """,
            PersistedTaskStatus(status).value,
            _task_uuid(task_id),
        )
        if row is None:
            raise TaskNotFoundError(task_id)
        return Task.from_record(row)

    async def create_task(self, data: TaskCreate) -> Task:
        """Insert a new task."""
        record = data.to_record()
        row = await self._db.fetch_one(
            """
            INSERT INTO tasks
                (title, description, status, due_date, assigned_to, order_id, ticket_id)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING *
            """,
            record["title"],
            record["description"],
            record["status"],
            record["due_date"],
            _column_value("assigned_to", record["assigned_to"]),
            _column_value("order_id", record["order_id"]),
            _column_value("ticket_id", record["ticket_id"]),
        )
        assert row is not None, "INSERT RETURNING should always return a row"
        logger.info("task_created", task_id=str(row["id"]))
        return Task.from_record(row)

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        """Apply a partial update to a task."""
        task_uuid = _task_uuid(task_id)
        changes = updates.to_record()

        assignments = []
        params: list[Any] = []
        for column in _UPDATABLE_COLUMNS:
            if column in changes:
                params.append(_column_value(column, changes[column]))
                assignments.append(f"{column} = ${len(params)}")

        if not assignments:
            row = await self._db.fetch_one("SELECT * FROM tasks WHERE id = $1", task_uuid)
        else:
            params.append(task_uuid)
            row = await self._db.fetch_one(
                f"""
                UPDATE tasks
                SET {", ".join(assignments)}, updated_at = NOW()
                WHERE id = ${len(params)}
                RETURNING *
                """,
                *params,
            )

        if row is None:
            raise TaskNotFoundError(task_id)
        return Task.from_record(row)

    async def delete_task(self, task_id: str) -> None:
        """Delete a task."""
        result = await self._db.execute("DELETE FROM tasks WHERE id = $1", _task_uuid(task_id))
        if result == "DELETE 0":
            raise TaskNotFoundError(task_id)
