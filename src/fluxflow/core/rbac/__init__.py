"""RBAC core domain."""

from fluxflow.core.rbac.policy import decide, evaluate_access
from fluxflow.core.rbac.types import (
    ADMIN_HOME_PATH,
    AUTH_PATH,
    CLIENT_HOME_PATH,
    AccessDecision,
    RouteRequirement,
    Verdict,
    admin_bypass,
    home_for,
    satisfies,
)

__all__ = [
    "ADMIN_HOME_PATH",
    "AUTH_PATH",
    "CLIENT_HOME_PATH",
    "AccessDecision",
    "RouteRequirement",
    "Verdict",
    "admin_bypass",
    "decide",
    "evaluate_access",
    "home_for",
    "satisfies",
]
