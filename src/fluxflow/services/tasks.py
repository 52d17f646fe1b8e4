"""Task mutation service.

Wraps a TaskRepository with the user-facing outcome reporting the board
relies on: every mutation reports success or failure to the notification
sink, and failures are re-raised so callers can react.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog

from fluxflow.core.exceptions import TaskNotFoundError, TaskPersistenceError
from fluxflow.core.interfaces import NotificationLevel, NotificationSink, TaskRepository
from fluxflow.core.tasks.status import TaskStatus, to_persisted
from fluxflow.core.tasks.types import Task, TaskCreate, TaskUpdate

logger = structlog.get_logger()


class TaskService:
    """Creates, edits, deletes and moves tasks."""

    def __init__(self, repository: TaskRepository, notifier: NotificationSink) -> None:
        """Initialize the task service.

        Args:
            repository: Task persistence.
            notifier: Receives success and failure notifications.
        """
        self.repository = repository
        self.notifier = notifier

    async def list_tasks(self) -> list[Task]:
        """All tasks, newest first."""
        return await self.repository.fetch_tasks()

    async def create_task(self, data: TaskCreate) -> Task:
        """Create a task."""
        async with self._reported("Failed to create task"):
            task = await self.repository.create_task(data)

        await self.notifier.notify(
            NotificationLevel.SUCCESS, "Task created successfully!", task_id=task.id
        )
        return task

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        """Apply a partial update to a task."""
        async with self._reported("Failed to update task", task_id):
            task = await self.repository.update_task(task_id, updates)

        await self.notifier.notify(
            NotificationLevel.SUCCESS, "Task updated successfully!", task_id=task_id
        )
        return task

    async def delete_task(self, task_id: str) -> None:
        """Delete a task."""
        async with self._reported("Failed to delete task", task_id):
            await self.repository.delete_task(task_id)

        await self.notifier.notify(
            NotificationLevel.SUCCESS, "Task deleted successfully!", task_id=task_id
        )

    async def update_task_status(self, task_id: str, status: TaskStatus) -> Task:
        """Persist a board move.

        The UI status is written in the persisted vocabulary. Usable as the
        commit callable of a TaskBoard.
        """
        async with self._reported("Failed to update task status", task_id):
            task = await self.repository.set_task_status(task_id, to_persisted(status))

        logger.info("task_status_updated", task_id=task_id, status=task.status.value)
        await self.notifier.notify(
            NotificationLevel.SUCCESS,
            "Task status updated successfully!",
            task_id=task_id,
            status=task.status.value,
        )
        return task

    @asynccontextmanager
    async def _reported(self, action: str, task_id: str | None = None) -> AsyncIterator[None]:
        """Report a failed mutation, re-raising it as a domain error.

        Not-found and persistence errors pass through unchanged; anything
        else is wrapped in TaskPersistenceError.
        """
        try:
            yield
        except (TaskNotFoundError, TaskPersistenceError) as e:
            await self._notify_failure(action, e, task_id)
            raise
        except Exception as e:
            await self._notify_failure(action, e, task_id)
            raise TaskPersistenceError(f"{action}: {e}", task_id=task_id) from e

    async def _notify_failure(self, action: str, error: Exception, task_id: str | None) -> None:
        logger.error("task_mutation_failed", action=action, task_id=task_id, error=str(error))
        await self.notifier.notify(NotificationLevel.ERROR, f"{action}: {error}", task_id=task_id)
