"""Session backend adapters."""

from fluxflow.adapters.auth.magic_link import LogMagicLinkSender, WebhookMagicLinkSender
from fluxflow.adapters.auth.postgres import PostgresProfileRepository, PostgresTokenDenylist
from fluxflow.adapters.auth.session import BearerTokenResolver, TokenSignOut

__all__ = [
    "BearerTokenResolver",
    "LogMagicLinkSender",
    "PostgresProfileRepository",
    "PostgresTokenDenylist",
    "TokenSignOut",
    "WebhookMagicLinkSender",
]
