"""Domain-specific exceptions.

All exceptions in the fluxflow system inherit from FluxflowError,
making it easy to catch all system errors while still being able
to handle specific error types.

Routing decisions never raise: unauthorized navigation is a verdict,
not an exception. Only asynchronous collaborator failures (session
resolution, task persistence) surface as exceptions.
"""

from __future__ import annotations


class FluxflowError(Exception):
    """Base exception for all fluxflow errors."""

    pass


class SessionResolutionError(FluxflowError):
    """The caller's session could not be resolved.

    The session store retains this error for display but routes the
    caller exactly as if no session existed.
    """

    pass


class TokenError(SessionResolutionError):
    """Raised when token validation fails."""

    pass


class SignOutError(FluxflowError):
    """Remote session invalidation failed.

    Local session state is already cleared when this is raised; the
    failure is reported but never retried.
    """

    pass


class TaskNotFoundError(FluxflowError):
    """The referenced task does not exist."""

    def __init__(self, task_id: str) -> None:
        """Initialize TaskNotFoundError.

        Args:
            task_id: ID of the missing task.
        """
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class TaskPersistenceError(FluxflowError):
    """A task write was rejected by the persistence layer.

    Attributes:
        task_id: ID of the task being written, if any.
    """

    def __init__(self, message: str, task_id: str | None = None) -> None:
        """Initialize TaskPersistenceError.

        Args:
            message: Error description.
            task_id: ID of the task being written.
        """
        super().__init__(message)
        self.task_id = task_id
