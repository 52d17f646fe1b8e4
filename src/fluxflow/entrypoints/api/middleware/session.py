"""Session resolution and route gating for API requests.

Each request gets its own SessionStore, resolved once from the bearer
token. Route gating runs the access policy against it and maps verdicts
onto HTTP: redirect-to-auth becomes 401, redirect-to-home becomes 403
with the caller's landing path in ``Location`` and in the body.
"""

from collections.abc import Callable
from typing import Annotated, Any

import structlog
from fastapi import Depends, HTTPException, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fluxflow.adapters.auth import BearerTokenResolver, TokenSignOut
from fluxflow.core.auth.session import SessionStore
from fluxflow.core.auth.types import Identity
from fluxflow.core.interfaces import ProfileRepository, TokenDenylist
from fluxflow.core.navigation import requirement_for
from fluxflow.core.rbac import AccessDecision, Verdict, evaluate_access
from fluxflow.entrypoints.api.deps import get_denylist, get_profiles

logger = structlog.get_logger()

# Use Bearer token authentication
bearer_scheme = HTTPBearer(auto_error=False)


async def get_session(
    request: Request,
    profiles: Annotated[ProfileRepository, Depends(get_profiles)],
    denylist: Annotated[TokenDenylist, Depends(get_denylist)],
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),  # noqa: B008
) -> SessionStore:
    """Build and resolve the session for this request.

    Never raises: an invalid token leaves the session without an identity
    and the error on ``session.error``.
    """
    resolver = BearerTokenResolver(
        credentials.credentials if credentials else None,
        profiles,
        denylist,
    )
    session = SessionStore(resolver, TokenSignOut(resolver, denylist))
    await session.initialize()

    # Store in request state for downstream use
    request.state.session = session
    return session


def raise_for_decision(decision: AccessDecision, session: SessionStore) -> None:
    """Raise the HTTP error matching a non-render decision."""
    if decision.verdict is Verdict.RENDER:
        return

    if decision.verdict is Verdict.REDIRECT_TO_AUTH:
        detail = str(session.error) if session.error else "Not authenticated"
        raise HTTPException(
            status_code=401,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

    if decision.verdict is Verdict.REDIRECT_TO_HOME:
        raise HTTPException(
            status_code=403,
            detail={
                "message": "Insufficient role for this view",
                "redirect_to": decision.redirect_to,
            },
            headers={"Location": decision.redirect_to or "/"},
        )

    raise HTTPException(status_code=503, detail="Session is still resolving")


async def require_identity(
    session: Annotated[SessionStore, Depends(get_session)],
) -> Identity:
    """Require a signed-in caller.

    Raises:
        HTTPException: 401 if there is no identity.
    """
    identity = session.current_identity()
    if identity is None:
        raise_for_decision(evaluate_access(session, "/auth"), session)
    assert identity is not None
    return identity


def require_view(path: str) -> Callable[..., Any]:
    """Dependency gating a route by the requirement declared for ``path``.

    Usage:
        @router.get("/tasks")
        async def list_tasks(
            session: Annotated[SessionStore, Depends(require_view("/tasks"))],
        ):
            ...

    Args:
        path: View path whose route requirement applies.

    Returns:
        Dependency function that yields the resolved session.
    """
    requirement = requirement_for(path)

    async def view_checker(
        session: Annotated[SessionStore, Depends(get_session)],
    ) -> SessionStore:
        decision = evaluate_access(session, path, requirement)
        if not decision.allowed:
            identity = session.current_identity()
            logger.info(
                "view_access_denied",
                path=path,
                verdict=decision.verdict.value,
                role=identity.role.value if identity else None,
            )
        raise_for_decision(decision, session)
        return session

    return view_checker


# Common dependencies for convenience
CurrentSession = Annotated[SessionStore, Depends(get_session)]
CurrentIdentity = Annotated[Identity, Depends(require_identity)]
RequireTasksView = Annotated[SessionStore, Depends(require_view("/tasks"))]
