"""RBAC domain types and the role/requirement relation."""

from dataclasses import dataclass
from enum import Enum

from fluxflow.core.auth.types import Role

AUTH_PATH = "/auth"
ADMIN_HOME_PATH = "/"
CLIENT_HOME_PATH = "/client/dashboard"


class RouteRequirement(str, Enum):
    """Role a view declares it needs.

    Matching is exact; the only widening is the full-admin bypass.
    """

    NONE = "none"
    ADMIN = "admin"
    ADMIN_MEMBER = "admin:member"
    CLIENT = "client"
    CLIENT_MEMBER = "client:member"


class Verdict(str, Enum):
    """Outcome of an access check."""

    SHOW_LOADING = "show_loading"
    RENDER = "render"
    REDIRECT_TO_AUTH = "redirect_to_auth"
    REDIRECT_TO_HOME = "redirect_to_home"


@dataclass(frozen=True)
class AccessDecision:
    """A verdict plus where to send the caller, if anywhere."""

    verdict: Verdict
    redirect_to: str | None = None

    @property
    def allowed(self) -> bool:
        """Whether protected content may be rendered."""
        return self.verdict is Verdict.RENDER


# Requirements each role meets by exact match.
ROLE_SATISFIES: dict[Role, frozenset[RouteRequirement]] = {
    Role.ADMIN: frozenset({RouteRequirement.NONE, RouteRequirement.ADMIN}),
    Role.ADMIN_MEMBER: frozenset({RouteRequirement.NONE, RouteRequirement.ADMIN_MEMBER}),
    Role.CLIENT: frozenset({RouteRequirement.NONE, RouteRequirement.CLIENT}),
    Role.CLIENT_MEMBER: frozenset({RouteRequirement.NONE, RouteRequirement.CLIENT_MEMBER}),
}

# Requirements the full admin meets without matching them.
ADMIN_BYPASS_REQUIREMENTS: frozenset[RouteRequirement] = frozenset(
    {
        RouteRequirement.ADMIN_MEMBER,
        RouteRequirement.CLIENT,
        RouteRequirement.CLIENT_MEMBER,
    }
)


def admin_bypass(role: Role, requirement: RouteRequirement) -> bool:
    """Whether the full-admin bypass lets ``role`` through ``requirement``."""
    return role is Role.ADMIN and requirement in ADMIN_BYPASS_REQUIREMENTS


def satisfies(role: Role, requirement: RouteRequirement | None) -> bool:
    """Whether ``role`` may render a view declaring ``requirement``.

    Args:
        role: The identity's role.
        requirement: The view's declared requirement; None means none.

    Returns:
        True on exact match, for views with no requirement, or via the
        admin bypass.
    """
    required = RouteRequirement(requirement) if requirement else RouteRequirement.NONE
    return required in ROLE_SATISFIES[role] or admin_bypass(role, required)


def home_for(role: Role) -> str:
    """Landing view for a role: the client portal for client roles."""
    return CLIENT_HOME_PATH if role.is_client_family else ADMIN_HOME_PATH
