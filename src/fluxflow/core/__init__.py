"""Core domain - pure session, access and task board logic."""

from .auth import Identity, Role, RoleFamily, SessionState, SessionStore
from .exceptions import (
    FluxflowError,
    SessionResolutionError,
    SignOutError,
    TaskNotFoundError,
    TaskPersistenceError,
    TokenError,
)
from .interfaces import (
    IdentityResolver,
    MagicLinkSender,
    NotificationLevel,
    NotificationSink,
    ProfileRepository,
    SignOutService,
    TaskRepository,
    TokenDenylist,
)
from .navigation import NAV_ENTRIES, ROUTES, NavEntry, requirement_for, visible_entries
from .rbac import AccessDecision, RouteRequirement, Verdict, decide, evaluate_access
from .tasks import PersistedTaskStatus, Task, TaskBoard, TaskStatus, to_persisted, to_ui

__all__ = [
    # Auth
    "Identity",
    "Role",
    "RoleFamily",
    "SessionState",
    "SessionStore",
    # Exceptions
    "FluxflowError",
    "SessionResolutionError",
    "SignOutError",
    "TaskNotFoundError",
    "TaskPersistenceError",
    "TokenError",
    # Interfaces
    "IdentityResolver",
    "MagicLinkSender",
    "NotificationLevel",
    "NotificationSink",
    "ProfileRepository",
    "SignOutService",
    "TaskRepository",
    "TokenDenylist",
    # Navigation
    "NAV_ENTRIES",
    "ROUTES",
    "NavEntry",
    "requirement_for",
    "visible_entries",
    # Access policy
    "AccessDecision",
    "RouteRequirement",
    "Verdict",
    "decide",
    "evaluate_access",
    # Tasks
    "PersistedTaskStatus",
    "Task",
    "TaskBoard",
    "TaskStatus",
    "to_persisted",
    "to_ui",
]
