"""Bearer-token session backend.

``BearerTokenResolver`` resolves an identity from an access token: decode,
check the denylist, load the profile. ``TokenSignOut`` revokes the token
so it stops resolving. Together they back a SessionStore for one request.
"""

from uuid import UUID

import structlog

from fluxflow.core.auth.jwt import decode_token, token_expiry
from fluxflow.core.auth.types import Identity, TokenPayload
from fluxflow.core.exceptions import SessionResolutionError, SignOutError, TokenError
from fluxflow.core.interfaces import ProfileRepository, TokenDenylist

logger = structlog.get_logger()


class BearerTokenResolver:
    """Resolves the identity behind an access token."""

    def __init__(
        self,
        token: str | None,
        profiles: ProfileRepository,
        denylist: TokenDenylist,
    ) -> None:
        """Initialize the resolver.

        Args:
            token: Raw bearer token, or None when the caller sent none.
            profiles: Profile lookup.
            denylist: Revoked token ids.
        """
        self._token = token
        self._profiles = profiles
        self._denylist = denylist
        self.payload: TokenPayload | None = None

    async def resolve_session(self) -> Identity | None:
        """Resolve the identity, or None when no token was sent.

        Raises:
            TokenError: If the token is invalid, expired, revoked, or not
                an access token.
            SessionResolutionError: If the token's user has no profile.
        """
        if not self._token:
            return None

        payload = decode_token(self._token)
        if not payload.is_access:
            raise TokenError(f"A {payload.type} token cannot be used for access")
        if await self._denylist.is_revoked(payload.jti):
            raise TokenError("Token has been revoked")

        try:
            user_id = UUID(payload.sub)
        except ValueError:
            raise TokenError("Invalid token subject") from None

        identity = await self._profiles.get_profile(user_id)
        if identity is None:
            raise SessionResolutionError(f"No profile for user {payload.sub}")

        self.payload = payload
        return identity


class TokenSignOut:
    """Signs out by revoking the resolved access token."""

    def __init__(self, resolver: BearerTokenResolver, denylist: TokenDenylist) -> None:
        """Initialize with the resolver whose token should be revoked.

        Args:
            resolver: Resolver that decoded the session token.
            denylist: Revoked token ids.
        """
        self._resolver = resolver
        self._denylist = denylist

    async def sign_out(self) -> None:
        """Revoke the session token.

        Raises:
            SignOutError: If there is no resolved token or revocation fails.
        """
        payload = self._resolver.payload
        if payload is None:
            raise SignOutError("No active session token to revoke")

        try:
            await self._denylist.revoke(payload.jti, token_expiry(payload))
        except Exception as e:
            raise SignOutError(f"Failed to revoke token: {e}") from e

        logger.debug("token_revoked", user_id=payload.sub)
