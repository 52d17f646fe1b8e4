"""Structured-log notification sink."""

from typing import Any

import structlog

from fluxflow.core.interfaces import NotificationLevel

logger = structlog.get_logger()


class LogNotificationSink:
    """Writes each notification as a structured log event.

    Errors are logged at error level; success and info at info level.
    """

    async def notify(self, level: NotificationLevel, message: str, **context: Any) -> None:
        """Deliver a notification."""
        level = NotificationLevel(level)
        log = logger.error if level is NotificationLevel.ERROR else logger.info
        log("notification", level=level.value, message=message, **context)
