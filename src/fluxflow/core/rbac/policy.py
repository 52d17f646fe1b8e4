"""Access policy: decide whether a view may be rendered.

Rules are evaluated in order and the first match wins:

1. Session still resolving: show a loading state.
2. No identity: redirect to the auth view.
3. Client-side role requesting the bare root with no requirement:
   redirect to the client landing view.
4. Requirement not met (exact match or full-admin bypass): redirect to
   the caller's landing view.
5. Otherwise render.

Decisions are pure and synchronous; they never raise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fluxflow.core.auth.session import SessionState, SessionStore
from fluxflow.core.rbac.types import (
    ADMIN_HOME_PATH,
    AUTH_PATH,
    CLIENT_HOME_PATH,
    AccessDecision,
    RouteRequirement,
    Verdict,
    home_for,
    satisfies,
)

if TYPE_CHECKING:
    from fluxflow.core.auth.types import Identity

LOADING = AccessDecision(Verdict.SHOW_LOADING)
RENDER = AccessDecision(Verdict.RENDER)
TO_AUTH = AccessDecision(Verdict.REDIRECT_TO_AUTH, AUTH_PATH)


def decide(
    identity: Identity | None,
    path: str,
    requirement: RouteRequirement | None = None,
    *,
    resolving: bool = False,
) -> AccessDecision:
    """Decide access for raw session values.

    Args:
        identity: The signed-in identity, or None.
        path: The requested path.
        requirement: The view's declared requirement; None means none.
        resolving: Whether the session is still being resolved.

    Returns:
        The access decision.
    """
    required = RouteRequirement(requirement) if requirement else RouteRequirement.NONE

    if resolving:
        return LOADING

    if identity is None:
        return TO_AUTH

    role = identity.role

    if role.is_client_family and path == ADMIN_HOME_PATH and required is RouteRequirement.NONE:
        return AccessDecision(Verdict.REDIRECT_TO_HOME, CLIENT_HOME_PATH)

    if not satisfies(role, required):
        return AccessDecision(Verdict.REDIRECT_TO_HOME, home_for(role))

    return RENDER


def evaluate_access(
    session: SessionStore | SessionState,
    path: str,
    requirement: RouteRequirement | None = None,
) -> AccessDecision:
    """Decide access for the current state of a session.

    Args:
        session: A session store or a snapshot of one.
        path: The requested path.
        requirement: The view's declared requirement; None means none.

    Returns:
        The access decision.
    """
    state = session.snapshot() if isinstance(session, SessionStore) else session
    return decide(state.identity, path, requirement, resolving=state.resolving)
