"""Passwordless sign-in and token refresh service."""

from typing import Any
from urllib.parse import urlencode
from uuid import UUID

import structlog

from fluxflow.core.auth.jwt import (
    create_access_token,
    create_magic_link_token,
    create_refresh_token,
    decode_token,
    token_expiry,
)
from fluxflow.core.auth.types import Identity
from fluxflow.core.exceptions import TokenError
from fluxflow.core.interfaces import MagicLinkSender, ProfileRepository, TokenDenylist

logger = structlog.get_logger()

MAGIC_LINK_PATH = "/auth/verify"


class AuthService:
    """Establishes sessions from magic links and refresh tokens."""

    def __init__(
        self,
        profiles: ProfileRepository,
        denylist: TokenDenylist,
        magic_links: MagicLinkSender | None = None,
    ) -> None:
        """Initialize with profile lookup and the token denylist.

        Args:
            profiles: Profile repository.
            denylist: Revoked token ids.
            magic_links: Delivers sign-in links; without one, link
                requests are logged and dropped.
        """
        self._profiles = profiles
        self._denylist = denylist
        self._magic_links = magic_links

    async def request_magic_link(self, email: str, frontend_url: str) -> None:
        """Send a single-use sign-in link to a profile's email.

        For security, this always succeeds (doesn't reveal if the email
        has a profile).

        Args:
            email: Email address to sign in.
            frontend_url: Base URL of the frontend for building the link.
        """
        identity = await self._profiles.get_profile_by_email(email)
        if identity is None:
            logger.info("magic_link_requested_unknown_email", email=email)
            return

        if self._magic_links is None:
            logger.warning("magic_link_delivery_unconfigured", user_id=str(identity.id))
            return

        token = create_magic_link_token(str(identity.id))
        link = f"{frontend_url.rstrip('/')}{MAGIC_LINK_PATH}?{urlencode({'token': token})}"
        sent = await self._magic_links.send_magic_link(identity.email, link)
        logger.info("magic_link_requested", user_id=str(identity.id), sent=sent)

    async def verify_magic_link(self, token: str) -> dict[str, Any]:
        """Exchange a magic-link token for access and refresh tokens.

        The link token is revoked on first use.

        Args:
            token: Token from the emailed link.

        Returns:
            Dict with access_token, refresh_token and the signed-in user.

        Raises:
            TokenError: If the token is invalid, expired, already used, or
                its user has no profile.
        """
        payload = decode_token(token)
        if not payload.is_magic_link:
            raise TokenError("Not a sign-in link token")
        if await self._denylist.is_revoked(payload.jti):
            raise TokenError("Sign-in link has already been used")

        identity = await self._identity_for(payload.sub)
        await self._denylist.revoke(payload.jti, token_expiry(payload))
        logger.info("signed_in_with_magic_link", user_id=str(identity.id))

        return {
            "access_token": self._access_token(identity),
            "refresh_token": create_refresh_token(str(identity.id)),
            "token_type": "bearer",
            "user": identity,
        }

    async def refresh(self, refresh_token: str) -> dict[str, Any]:
        """Refresh access token.

        The new token carries the role currently stored on the profile, so
        role changes take effect on the next refresh.

        Args:
            refresh_token: Valid refresh token.

        Returns:
            Dict with new access_token.

        Raises:
            TokenError: If refresh fails.
        """
        payload = decode_token(refresh_token)
        if not payload.is_refresh:
            raise TokenError("Not a refresh token")
        if await self._denylist.is_revoked(payload.jti):
            raise TokenError("Refresh token has been revoked")

        identity = await self._identity_for(payload.sub)
        logger.info("access_token_refreshed", user_id=str(identity.id))

        return {
            "access_token": self._access_token(identity),
            "token_type": "bearer",
        }

    async def _identity_for(self, subject: str) -> Identity:
        try:
            user_id = UUID(subject)
        except ValueError:
            raise TokenError("Invalid token subject") from None

        identity = await self._profiles.get_profile(user_id)
        if identity is None:
            raise TokenError("User not found")
        return identity

    def _access_token(self, identity: Identity) -> str:
        # Role and client come from the stored profile, not the presented token
        return create_access_token(
            user_id=str(identity.id),
            role=identity.role.value,
            client_id=str(identity.client_id) if identity.client_id else None,
        )
