"""Session store: single source of truth for who is signed in.

A store is constructed once per session (per request in the API) and
handed by reference to the access policy and navigation model. It starts
in the resolving state, resolves the identity exactly once, and from then
on only changes on sign-out or when a refreshed identity is set.

Subscribers are called synchronously, in subscription order, on every
state change.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from fluxflow.core.auth.types import Identity
    from fluxflow.core.interfaces import IdentityResolver, SignOutService

logger = structlog.get_logger()

Listener = Callable[["SessionStore"], None]


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of a session store.

    Attributes:
        identity: The signed-in identity, or None.
        resolving: True until the first resolution completes.
        error: The last session error, retained for display only.
    """

    identity: Identity | None
    resolving: bool
    error: Exception | None = None


class SessionStore:
    """Holds the current identity and its loading/error state."""

    def __init__(
        self,
        resolver: IdentityResolver,
        sign_out_service: SignOutService | None = None,
    ) -> None:
        """Initialize the store in the resolving state.

        Args:
            resolver: Resolves the identity once, on initialize().
            sign_out_service: Remote invalidation, called on sign_out().
        """
        self._resolver = resolver
        self._sign_out_service = sign_out_service
        self._identity: Identity | None = None
        self._resolving = True
        self._started = False
        self._settled = asyncio.Event()
        # Bumped whenever the identity is replaced outside initialize()
        self._generation = 0
        self._error: Exception | None = None
        self._listeners: list[Listener] = []

    @property
    def error(self) -> Exception | None:
        """The last resolution or sign-out error, if any."""
        return self._error

    def current_identity(self) -> Identity | None:
        """Get the signed-in identity, or None."""
        return self._identity

    def is_resolving(self) -> bool:
        """Whether the first resolution is still pending."""
        return self._resolving

    def snapshot(self) -> SessionState:
        """Get an immutable view of the current state."""
        return SessionState(
            identity=self._identity,
            resolving=self._resolving,
            error=self._error,
        )

    async def initialize(self) -> Identity | None:
        """Resolve the identity.

        Only the first call reaches the resolver; later calls wait for that
        resolution and return the current identity. A resolver failure
        settles the store to no identity with the error retained. If the
        identity is replaced while resolving (sign-out or refresh), the
        resolved value is discarded.

        Returns:
            The current identity, or None.
        """
        if self._started:
            await self._settled.wait()
            return self._identity
        self._started = True
        generation = self._generation

        try:
            identity = await self._resolver.resolve_session()
        except Exception as e:
            logger.warning("session_resolution_failed", error=str(e))
            if generation == self._generation:
                self._identity = None
                self._error = e
        else:
            if generation == self._generation:
                self._identity = identity
                self._error = None
                logger.debug(
                    "session_resolved",
                    user_id=str(identity.id) if identity else None,
                    role=identity.role.value if identity else None,
                )
            else:
                logger.debug("session_resolution_superseded")

        self._resolving = False
        self._settled.set()
        self._notify()
        return self._identity

    def set_identity(self, identity: Identity | None) -> None:
        """Replace the identity, e.g. after a token refresh."""
        self._identity = identity
        self._resolving = False
        self._started = True
        self._generation += 1
        self._settled.set()
        self._error = None
        self._notify()

    async def sign_out(self) -> None:
        """Clear the identity and invalidate the session remotely.

        The identity is cleared and subscribers notified before the remote
        call is made. A remote failure is logged and retained in ``error``;
        it is not retried and does not restore the identity.
        """
        previous = self._identity
        self._identity = None
        self._generation += 1
        self._notify()

        if self._sign_out_service is None:
            return

        try:
            await self._sign_out_service.sign_out()
        except Exception as e:
            logger.error(
                "sign_out_failed",
                user_id=str(previous.id) if previous else None,
                error=str(e),
            )
            self._error = e
            self._notify()
        else:
            logger.info("signed_out", user_id=str(previous.id) if previous else None)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for state changes.

        Args:
            listener: Called with the store after every change.

        Returns:
            A callable that removes the listener. Safe to call twice.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(self)
