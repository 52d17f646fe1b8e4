"""Unit tests for the task board state machine."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from fluxflow.core.exceptions import TaskPersistenceError
from fluxflow.core.tasks.board import (
    TaskBoard,
    column_id,
    decode_drop_target,
    resolve_transition,
)
from fluxflow.core.tasks.status import TaskStatus
from fluxflow.core.tasks.types import Task


def saved(task_id: str, status: TaskStatus) -> Task:
    """Build the task a commit returns."""
    return Task(id=task_id, title=f"Task {task_id}", status=status)


@pytest.fixture
def commit() -> AsyncMock:
    """Return a commit callable that echoes the new status."""
    return AsyncMock(side_effect=saved)


@pytest.fixture
def board(sample_tasks: list[Task], commit: AsyncMock) -> TaskBoard:
    """Return a board with one task per column."""
    return TaskBoard(sample_tasks, commit)


class TestDropTargets:
    """Tests for the pure drop-target functions."""

    @pytest.mark.parametrize("status", list(TaskStatus))
    def test_column_id(self, status: TaskStatus) -> None:
        """Test column ids decode back to their status."""
        assert decode_drop_target(column_id(status)) is status

    @pytest.mark.parametrize(
        "target",
        ["column-", "column-doing", "column-to_do", "done", "task-t2", "", None, "COLUMN-done"],
    )
    def test_invalid_targets(self, target: str | None) -> None:
        """Test anything that is not a column id decodes to None."""
        assert decode_drop_target(target) is None

    def test_transition(self) -> None:
        """Test a drop on another column moves the task."""
        assert resolve_transition(TaskStatus.TODO, "column-wip") is TaskStatus.WIP

    def test_same_column(self) -> None:
        """Test a drop on the current column is not a transition."""
        assert resolve_transition(TaskStatus.WIP, "column-wip") is None

    def test_done_not_terminal(self) -> None:
        """Test done tasks can move back."""
        assert resolve_transition(TaskStatus.DONE, "column-todo") is TaskStatus.TODO


class TestTaskBoardColumns:
    """Tests for column grouping."""

    def test_columns_in_order(self, board: TaskBoard) -> None:
        """Test columns are keyed in board order."""
        columns = board.columns()
        assert list(columns) == [TaskStatus.TODO, TaskStatus.WIP, TaskStatus.DONE]
        assert [t.id for t in columns[TaskStatus.WIP]] == ["t2"]

    async def test_load(self, sample_tasks: list[Task], commit: AsyncMock) -> None:
        """Test a board can be built from a fetch."""
        fetch = AsyncMock(return_value=sample_tasks)

        board = await TaskBoard.load(fetch, commit)

        assert board.tasks == sample_tasks
        fetch.assert_awaited_once()


class TestTaskBoardDrag:
    """Tests for the drag protocol."""

    async def test_drag_scenario(self, board: TaskBoard, commit: AsyncMock) -> None:
        """Test dropping a todo task on the done column commits once."""
        board.drag_start("t1")

        outcome = await board.drag_end("t1", "column-done")

        commit.assert_awaited_once_with("t1", TaskStatus.DONE)
        assert outcome.changed
        assert outcome.previous is TaskStatus.TODO
        assert outcome.status is TaskStatus.DONE
        task = board.task("t1")
        assert task is not None
        assert task.status is TaskStatus.DONE

    async def test_moved_task_lands_last(self, board: TaskBoard) -> None:
        """Test the moved task is appended to its new column."""
        await board.drag_end("t1", "column-done")
        assert [t.id for t in board.column(TaskStatus.DONE)] == ["t3", "t1"]

    async def test_same_column_no_commit(self, board: TaskBoard, commit: AsyncMock) -> None:
        """Test dropping on the current column writes nothing."""
        board.drag_start("t2")

        outcome = await board.drag_end("t2", "column-wip")

        commit.assert_not_awaited()
        assert not outcome.changed
        assert board.active_task_id is None

    @pytest.mark.parametrize("target", ["column-archived", "t3", None, "column-"])
    async def test_invalid_target_no_change(
        self,
        board: TaskBoard,
        commit: AsyncMock,
        sample_tasks: list[Task],
        target: str | None,
    ) -> None:
        """Test invalid drops write nothing and leave the board alone."""
        board.drag_start("t1")

        outcome = await board.drag_end("t1", target)

        commit.assert_not_awaited()
        assert not outcome.changed
        assert board.tasks == sample_tasks

    async def test_unknown_task(self, board: TaskBoard, commit: AsyncMock) -> None:
        """Test dropping an unknown task is ignored."""
        outcome = await board.drag_end("missing", "column-done")

        commit.assert_not_awaited()
        assert not outcome.changed
        assert outcome.previous is None

    def test_drag_start_tracks_single_task(self, board: TaskBoard) -> None:
        """Test the active slot holds one task at a time."""
        board.drag_start("t1")
        board.drag_start("t2")
        assert board.active_task_id == "t2"

        board.drag_start("unknown")
        assert board.active_task_id == "t2"

    def test_drag_over_commits_nothing(self, board: TaskBoard, commit: AsyncMock) -> None:
        """Test hovering never writes."""
        board.drag_start("t1")
        board.drag_over("t1", "column-done")

        commit.assert_not_called()
        task = board.task("t1")
        assert task is not None
        assert task.status is TaskStatus.TODO

    def test_drag_cancel(self, board: TaskBoard, commit: AsyncMock) -> None:
        """Test cancelling clears the active task without writing."""
        board.drag_start("t1")
        board.drag_cancel()

        assert board.active_task_id is None
        commit.assert_not_called()

    async def test_optimistic_before_commit(self, sample_tasks: list[Task]) -> None:
        """Test the slot is cleared and the move shown while the write is in flight."""
        release = asyncio.Event()

        async def slow_commit(task_id: str, status: TaskStatus) -> Task:
            await release.wait()
            return saved(task_id, status)

        board = TaskBoard(sample_tasks, slow_commit)
        board.drag_start("t1")

        pending = asyncio.create_task(board.drag_end("t1", "column-wip"))
        await asyncio.sleep(0)

        assert board.active_task_id is None
        task = board.task("t1")
        assert task is not None
        assert task.status is TaskStatus.WIP

        release.set()
        outcome = await pending
        assert outcome.changed

    async def test_concurrent_moves(self, sample_tasks: list[Task], commit: AsyncMock) -> None:
        """Test moves of different tasks may be in flight together."""
        board = TaskBoard(sample_tasks, commit)

        await asyncio.gather(
            board.drag_end("t1", "column-wip"),
            board.drag_end("t3", "column-todo"),
        )

        assert commit.await_count == 2
        assert [t.id for t in board.column(TaskStatus.WIP)] == ["t2", "t1"]
        assert [t.id for t in board.column(TaskStatus.TODO)] == ["t3"]


class TestTaskBoardFailure:
    """Tests for failed commits."""

    async def test_no_rollback_by_default(self, sample_tasks: list[Task]) -> None:
        """Test a failed write re-raises and leaves the optimistic move."""
        commit = AsyncMock(side_effect=TaskPersistenceError("db down", task_id="t1"))
        board = TaskBoard(sample_tasks, commit)

        with pytest.raises(TaskPersistenceError):
            await board.drag_end("t1", "column-done")

        task = board.task("t1")
        assert task is not None
        assert task.status is TaskStatus.DONE

    async def test_reconcile_on_failure(self, sample_tasks: list[Task]) -> None:
        """Test a failed write refetches authoritative tasks when enabled."""
        commit = AsyncMock(side_effect=TaskPersistenceError("db down", task_id="t1"))
        fetch = AsyncMock(return_value=sample_tasks)
        board = await TaskBoard.load(fetch, commit, reconcile_on_failure=True)

        with pytest.raises(TaskPersistenceError):
            await board.drag_end("t1", "column-done")

        assert fetch.await_count == 2
        task = board.task("t1")
        assert task is not None
        assert task.status is TaskStatus.TODO

    async def test_reconcile_failure_reraises_write_error(
        self, sample_tasks: list[Task]
    ) -> None:
        """Test a failing refetch does not mask the write error."""
        commit = AsyncMock(side_effect=TaskPersistenceError("db down"))
        refetch = AsyncMock(side_effect=RuntimeError("still down"))
        board = TaskBoard(sample_tasks, commit, refetch=refetch)

        with pytest.raises(TaskPersistenceError, match="db down"):
            await board.drag_end("t1", "column-wip")

        refetch.assert_awaited_once()
