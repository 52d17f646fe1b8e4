"""Auth domain types and session state."""

from fluxflow.core.auth.jwt import (
    create_access_token,
    create_magic_link_token,
    create_refresh_token,
    decode_token,
)
from fluxflow.core.auth.session import SessionState, SessionStore
from fluxflow.core.auth.types import Identity, Role, RoleFamily, TokenPayload
from fluxflow.core.exceptions import TokenError

__all__ = [
    "Identity",
    "Role",
    "RoleFamily",
    "TokenPayload",
    "SessionState",
    "SessionStore",
    "create_access_token",
    "create_magic_link_token",
    "create_refresh_token",
    "decode_token",
    "TokenError",
]
