"""Task status vocabularies and the mapping between them.

The board speaks the UI vocabulary (``todo`` / ``wip`` / ``done``); the
tasks table stores ``to_do`` / ``doing`` / ``done``. Every read and write
of a task status goes through :func:`to_ui` / :func:`to_persisted`.

Both functions are total: anything outside the three recognized values
maps to the ``todo`` column so legacy rows still land on the board.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task status as shown on the board."""

    TODO = "todo"
    WIP = "wip"
    DONE = "done"

    @property
    def label(self) -> str:
        """Column heading for this status."""
        return STATUS_LABELS[self]


class PersistedTaskStatus(str, Enum):
    """Task status as stored in the tasks table."""

    TO_DO = "to_do"
    DOING = "doing"
    DONE = "done"


STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "To Do",
    TaskStatus.WIP: "Doing",
    TaskStatus.DONE: "Done",
}

_UI_TO_PERSISTED: dict[TaskStatus, PersistedTaskStatus] = {
    TaskStatus.TODO: PersistedTaskStatus.TO_DO,
    TaskStatus.WIP: PersistedTaskStatus.DOING,
    TaskStatus.DONE: PersistedTaskStatus.DONE,
}

_PERSISTED_TO_UI: dict[PersistedTaskStatus, TaskStatus] = {
    persisted: ui for ui, persisted in _UI_TO_PERSISTED.items()
}


def parse_status(value: TaskStatus | str | None) -> TaskStatus | None:
    """Parse a UI status tag, returning None when unrecognized."""
    try:
        return TaskStatus(value)
    except ValueError:
        return None


def to_persisted(status: TaskStatus | str | None) -> PersistedTaskStatus:
    """Map a UI status to its stored form.

    Args:
        status: UI status tag.

    Returns:
        Stored status; ``to_do`` for unrecognized input.
    """
    ui = parse_status(status)
    if ui is None:
        return PersistedTaskStatus.TO_DO
    return _UI_TO_PERSISTED[ui]


def to_ui(status: PersistedTaskStatus | str | None) -> TaskStatus:
    """Map a stored status to its UI form.

    Args:
        status: Stored status value.

    Returns:
        UI status; ``todo`` for unrecognized input.
    """
    try:
        persisted = PersistedTaskStatus(status)
    except ValueError:
        return TaskStatus.TODO
    return _PERSISTED_TO_UI[persisted]
