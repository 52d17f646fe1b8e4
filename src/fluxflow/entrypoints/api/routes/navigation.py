"""Navigation routes: the sidebar and per-path access checks."""

from fastapi import APIRouter, Query
from pydantic import BaseModel

from fluxflow.core.navigation import normalize_path, requirement_for, visible_entries
from fluxflow.core.rbac import evaluate_access
from fluxflow.entrypoints.api.middleware.session import CurrentSession

router = APIRouter(prefix="/navigation", tags=["navigation"])


class NavEntryResponse(BaseModel):
    """A sidebar entry."""

    label: str
    path: str
    icon: str
    admin_only: bool


class AccessResponse(BaseModel):
    """Access decision for one path."""

    path: str
    requirement: str
    verdict: str
    redirect_to: str | None = None


@router.get("", response_model=list[NavEntryResponse])
async def list_entries(session: CurrentSession) -> list[NavEntryResponse]:
    """Sidebar entries visible to the caller.

    Callers without a session get the entries every role can see.
    """
    return [
        NavEntryResponse(
            label=entry.label,
            path=entry.path,
            icon=entry.icon,
            admin_only=entry.admin_only,
        )
        for entry in visible_entries(session.current_identity())
    ]


@router.get("/access", response_model=AccessResponse)
async def check_access(
    session: CurrentSession,
    path: str = Query(..., min_length=1),
) -> AccessResponse:
    """Evaluate the access policy for a view path.

    Always answers 200; the verdict is in the body.
    """
    view = normalize_path(path)
    requirement = requirement_for(view)
    decision = evaluate_access(session, view, requirement)
    return AccessResponse(
        path=view,
        requirement=requirement.value,
        verdict=decision.verdict.value,
        redirect_to=decision.redirect_to,
    )
