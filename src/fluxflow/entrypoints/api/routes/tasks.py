"""Task board routes.

All routes are gated by the requirement declared for the ``/tasks`` view.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from fluxflow.core.exceptions import TaskNotFoundError, TaskPersistenceError
from fluxflow.core.tasks import (
    Task,
    TaskBoard,
    TaskCreate,
    TaskStatus,
    TaskUpdate,
    column_id,
)
from fluxflow.entrypoints.api.deps import get_reconcile_on_failure, get_task_service
from fluxflow.entrypoints.api.middleware.session import RequireTasksView
from fluxflow.services.tasks import TaskService

logger = structlog.get_logger()

router = APIRouter(prefix="/tasks", tags=["tasks"])

TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]


class ColumnResponse(BaseModel):
    """One board column."""

    id: str
    status: TaskStatus
    label: str
    tasks: list[Task]


class BoardResponse(BaseModel):
    """The whole board, columns in order."""

    columns: list[ColumnResponse]


class DropRequest(BaseModel):
    """Drag-end payload: the id of the target under the pointer."""

    over_id: str | None = None


class DropResponse(BaseModel):
    """Outcome of a drop."""

    task_id: str
    changed: bool
    previous: TaskStatus | None = None
    status: TaskStatus | None = None
    task: Task | None = None


@router.get("", response_model=BoardResponse)
async def get_board(_: RequireTasksView, service: TaskServiceDep) -> BoardResponse:
    """Get all tasks grouped into board columns."""
    board = TaskBoard(await service.list_tasks(), service.update_task_status)
    return BoardResponse(
        columns=[
            ColumnResponse(
                id=column_id(status),
                status=status,
                label=status.label,
                tasks=tasks,
            )
            for status, tasks in board.columns().items()
        ]
    )


@router.post("", response_model=Task, status_code=201)
async def create_task(
    body: TaskCreate,
    _: RequireTasksView,
    service: TaskServiceDep,
) -> Task:
    """Create a task."""
    try:
        return await service.create_task(body)
    except TaskPersistenceError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None


@router.patch("/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    _: RequireTasksView,
    service: TaskServiceDep,
) -> Task:
    """Apply a partial update to a task."""
    try:
        return await service.update_task(task_id, body)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except TaskPersistenceError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    _: RequireTasksView,
    service: TaskServiceDep,
) -> Response:
    """Delete a task."""
    try:
        await service.delete_task(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except TaskPersistenceError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None
    return Response(status_code=204)


@router.post("/{task_id}/drop", response_model=DropResponse)
async def drop_task(
    task_id: str,
    body: DropRequest,
    _: RequireTasksView,
    service: TaskServiceDep,
    reconcile_on_failure: Annotated[bool, Depends(get_reconcile_on_failure)],
) -> DropResponse | JSONResponse:
    """Complete a drag gesture for a task.

    Drops on the task's own column or on anything that is not a column
    answer 200 with ``changed`` false and write nothing. A failed write
    answers 502; with reconciliation enabled the body also carries the
    task as reloaded from storage.
    """
    board = await TaskBoard.load(
        service.list_tasks,
        service.update_task_status,
        reconcile_on_failure=reconcile_on_failure,
    )
    if board.task(task_id) is None:
        raise HTTPException(status_code=404, detail=f"Task not found: {task_id}")

    board.drag_start(task_id)
    try:
        outcome = await board.drag_end(task_id, body.over_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except TaskPersistenceError as e:
        if not reconcile_on_failure:
            raise HTTPException(status_code=502, detail=str(e)) from None
        reconciled = board.task(task_id)
        return JSONResponse(
            status_code=502,
            content={
                "detail": str(e),
                "task": reconciled.model_dump(mode="json") if reconciled else None,
            },
        )

    logger.debug("task_drop_handled", task_id=task_id, changed=outcome.changed)
    return DropResponse(
        task_id=outcome.task_id,
        changed=outcome.changed,
        previous=outcome.previous,
        status=outcome.status,
        task=board.task(task_id),
    )
