"""Task domain types."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from fluxflow.core.tasks.status import TaskStatus, to_persisted, to_ui


class Task(BaseModel):
    """A unit of work on the task board.

    ``status`` is always in the UI vocabulary; adapters convert at the
    storage boundary.
    """

    id: str
    title: str = Field(..., min_length=1)
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    due_date: datetime | None = None
    assigned_to: str | None = None
    order_id: str | None = None
    ticket_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, row: dict[str, Any]) -> "Task":
        """Build a task from a stored row (persisted status vocabulary)."""

        def _opt_str(value: Any) -> str | None:
            return str(value) if value is not None else None

        return cls(
            id=str(row["id"]),
            title=row["title"],
            description=row.get("description"),
            status=to_ui(row.get("status")),
            due_date=row.get("due_date"),
            assigned_to=_opt_str(row.get("assigned_to")),
            order_id=_opt_str(row.get("order_id")),
            ticket_id=_opt_str(row.get("ticket_id")),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


class TaskCreate(BaseModel):
    """Fields accepted when creating a task."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    due_date: datetime | None = None
    assigned_to: UUID | None = None
    order_id: UUID | None = None
    ticket_id: UUID | None = None

    @field_validator("assigned_to", "order_id", "ticket_id", mode="before")
    @classmethod
    def blank_reference_is_unset(cls, value: Any) -> Any:
        """Treat an empty form value as an unset reference."""
        return None if value == "" else value

    def to_record(self) -> dict[str, Any]:
        """Columns to insert, status in the persisted vocabulary."""
        return {
            "title": self.title,
            "description": self.description or None,
            "status": to_persisted(self.status).value,
            "due_date": self.due_date,
            "assigned_to": self.assigned_to,
            "order_id": self.order_id,
            "ticket_id": self.ticket_id,
        }


class TaskUpdate(BaseModel):
    """Partial task update; unset fields are left untouched."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus | None = None
    due_date: datetime | None = None
    assigned_to: UUID | None = None
    order_id: UUID | None = None
    ticket_id: UUID | None = None

    @field_validator("assigned_to", "order_id", "ticket_id", mode="before")
    @classmethod
    def blank_reference_is_unset(cls, value: Any) -> Any:
        """Treat an empty form value as an unset reference."""
        return None if value == "" else value

    def to_record(self) -> dict[str, Any]:
        """Columns to update, status in the persisted vocabulary."""
        changes = self.model_dump(exclude_unset=True)
        # title and status are NOT NULL columns
        for key in ("title", "status"):
            if key in changes and changes[key] is None:
                del changes[key]
        if "status" in changes:
            changes["status"] = to_persisted(changes["status"]).value
        return changes
