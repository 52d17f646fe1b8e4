"""Task domain: status vocabularies, task model and the board."""

from fluxflow.core.tasks.board import (
    COLUMN_PREFIX,
    DropOutcome,
    TaskBoard,
    column_id,
    decode_drop_target,
    resolve_transition,
)
from fluxflow.core.tasks.status import (
    STATUS_LABELS,
    PersistedTaskStatus,
    TaskStatus,
    parse_status,
    to_persisted,
    to_ui,
)
from fluxflow.core.tasks.types import Task, TaskCreate, TaskUpdate

__all__ = [
    "COLUMN_PREFIX",
    "STATUS_LABELS",
    "DropOutcome",
    "PersistedTaskStatus",
    "Task",
    "TaskBoard",
    "TaskCreate",
    "TaskStatus",
    "TaskUpdate",
    "column_id",
    "decode_drop_target",
    "parse_status",
    "resolve_transition",
    "to_persisted",
    "to_ui",
]
