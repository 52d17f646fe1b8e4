"""API middleware."""

from fluxflow.entrypoints.api.middleware.session import (
    CurrentIdentity,
    CurrentSession,
    RequireTasksView,
    bearer_scheme,
    get_session,
    raise_for_decision,
    require_identity,
    require_view,
)

__all__ = [
    "CurrentIdentity",
    "CurrentSession",
    "RequireTasksView",
    "bearer_scheme",
    "get_session",
    "raise_for_decision",
    "require_identity",
    "require_view",
]
