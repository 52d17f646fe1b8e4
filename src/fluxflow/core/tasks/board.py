"""Task board state machine.

Tasks move between three columns (``todo``, ``wip``, ``done``) by drag and
drop. The protocol is independent of any drag library:

- ``drag_start`` records the single active task (for lift/overlay).
- ``drag_over`` is observed but never commits anything.
- ``drag_end`` is the only commit point. It clears the active slot, decodes
  the drop target, and when the task actually changes column moves it
  optimistically and issues exactly one status write.

Drops on the task's own column and drops on unrecognized targets are
silent no-ops. ``done`` is not terminal.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

import structlog

from fluxflow.core.tasks.status import TaskStatus, parse_status
from fluxflow.core.tasks.types import Task

logger = structlog.get_logger()

COLUMN_PREFIX = "column-"

StatusCommit = Callable[[str, TaskStatus], Awaitable[Task]]
TaskFetch = Callable[[], Awaitable[list[Task]]]


def column_id(status: TaskStatus) -> str:
    """Drop-target id of the column for ``status``."""
    return f"{COLUMN_PREFIX}{status.value}"


def decode_drop_target(target_id: str | None) -> TaskStatus | None:
    """Decode a drop-target id into a column status.

    Args:
        target_id: Id reported by the drag mechanism, e.g. ``column-done``.

    Returns:
        The column's status, or None when the id is not a column.
    """
    if not target_id or not target_id.startswith(COLUMN_PREFIX):
        return None
    return parse_status(target_id[len(COLUMN_PREFIX) :])


def resolve_transition(current: TaskStatus, target_id: str | None) -> TaskStatus | None:
    """Status a task moves to when dropped on ``target_id``.

    Returns:
        The new status, or None when the drop is invalid or lands on the
        task's current column.
    """
    target = decode_drop_target(target_id)
    if target is None or target is current:
        return None
    return target


@dataclass(frozen=True)
class DropOutcome:
    """Result of a completed drag gesture.

    Attributes:
        task_id: The dragged task.
        previous: Column before the drop; None if the task is unknown.
        status: Column after the drop; None if the task is unknown.
        changed: Whether a status write was issued.
    """

    task_id: str
    previous: TaskStatus | None
    status: TaskStatus | None
    changed: bool


class TaskBoard:
    """Working set of tasks for one board, grouped by status.

    The board does not own the tasks long-term: it is built from a fetch,
    applies optimistic moves, and replaces moved tasks with what the
    persistence layer returns.
    """

    def __init__(
        self,
        tasks: Iterable[Task],
        commit: StatusCommit,
        refetch: TaskFetch | None = None,
    ) -> None:
        """Initialize the board.

        Args:
            tasks: Tasks to show, in display order.
            commit: Persists a status change for one task.
            refetch: When given, used to reload authoritative tasks after a
                failed commit. Without it a failed move stays on the board.
        """
        self._tasks: dict[str, Task] = {task.id: task for task in tasks}
        self._commit = commit
        self._refetch = refetch
        self._active_task_id: str | None = None

    @classmethod
    async def load(
        cls,
        fetch: TaskFetch,
        commit: StatusCommit,
        reconcile_on_failure: bool = False,
    ) -> TaskBoard:
        """Build a board from a fresh fetch."""
        tasks = await fetch()
        return cls(tasks, commit, refetch=fetch if reconcile_on_failure else None)

    @property
    def active_task_id(self) -> str | None:
        """Task currently being dragged, if any."""
        return self._active_task_id

    @property
    def tasks(self) -> list[Task]:
        """All tasks in display order."""
        return list(self._tasks.values())

    def task(self, task_id: str) -> Task | None:
        """Get a task by id."""
        return self._tasks.get(task_id)

    def column(self, status: TaskStatus) -> list[Task]:
        """Tasks in one column, in display order."""
        return [task for task in self._tasks.values() if task.status is status]

    def columns(self) -> dict[TaskStatus, list[Task]]:
        """All three columns, in board order."""
        return {status: self.column(status) for status in TaskStatus}

    def replace_tasks(self, tasks: Iterable[Task]) -> None:
        """Swap the working set for a freshly fetched one."""
        self._tasks = {task.id: task for task in tasks}

    def drag_start(self, task_id: str) -> None:
        """Mark a task as being dragged. Unknown ids are ignored."""
        if task_id in self._tasks:
            self._active_task_id = task_id

    def drag_over(self, task_id: str, over_id: str | None) -> None:
        """Observe a hover. Nothing is committed until drag_end."""
        return None

    def drag_cancel(self) -> None:
        """Abandon the current gesture without committing."""
        self._active_task_id = None

    async def drag_end(self, task_id: str, over_id: str | None) -> DropOutcome:
        """Complete a drag gesture.

        The active slot is cleared and the optimistic move applied before
        the status write is awaited.

        Args:
            task_id: The dragged task.
            over_id: Drop-target id, or None when dropped outside any target.

        Returns:
            What happened to the task.

        Raises:
            Exception: Whatever the commit raised, after reconciliation.
        """
        self._active_task_id = None

        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("task_drop_ignored", task_id=task_id, reason="unknown_task")
            return DropOutcome(task_id, None, None, changed=False)

        new_status = resolve_transition(task.status, over_id)
        if new_status is None:
            logger.debug("task_drop_ignored", task_id=task_id, over_id=over_id)
            return DropOutcome(task_id, task.status, task.status, changed=False)

        self._move(task, new_status)
        saved = await self.commit(task_id, new_status)
        return DropOutcome(task_id, task.status, saved.status, changed=True)

    async def commit(self, task_id: str, status: TaskStatus) -> Task:
        """Persist a status change and fold the result into the board.

        Args:
            task_id: Task to update.
            status: New UI status.

        Returns:
            The task as persisted.
        """
        try:
            saved = await self._commit(task_id, status)
        except Exception:
            if self._refetch is not None:
                await self._reconcile()
            raise

        current = self._tasks.get(task_id)
        # A later move of the same task wins over this result
        if current is not None and current.status is status:
            self._tasks[task_id] = saved
        return saved

    def _move(self, task: Task, status: TaskStatus) -> None:
        # Re-insert so the task lands at the end of its new column
        del self._tasks[task.id]
        self._tasks[task.id] = task.model_copy(update={"status": status})
        logger.debug(
            "task_moved",
            task_id=task.id,
            from_status=task.status.value,
            to_status=status.value,
        )

    async def _reconcile(self) -> None:
        assert self._refetch is not None
        try:
            self.replace_tasks(await self._refetch())
        except Exception as e:
            logger.warning("task_board_reconcile_failed", error=str(e))
