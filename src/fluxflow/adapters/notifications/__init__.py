"""Notification sinks."""

from fluxflow.adapters.notifications.log import LogNotificationSink
from fluxflow.adapters.notifications.webhook import (
    WebhookConfig,
    WebhookNotificationSink,
    sign_body,
    verify_signature,
)

__all__ = [
    "LogNotificationSink",
    "WebhookConfig",
    "WebhookNotificationSink",
    "sign_body",
    "verify_signature",
]
