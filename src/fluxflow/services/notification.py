"""Notification fan-out service."""

import asyncio
from collections.abc import Iterable
from typing import Any

import structlog

from fluxflow.core.interfaces import NotificationLevel, NotificationSink

logger = structlog.get_logger()


class NotificationService:
    """Sends each notification through every configured sink.

    Sinks run in parallel. A failing sink is logged and does not stop the
    others, and never propagates to the caller.
    """

    def __init__(self, sinks: Iterable[NotificationSink]):
        self.sinks = list(sinks)

    async def notify(self, level: NotificationLevel, message: str, **context: Any) -> None:
        """Send a notification through all configured sinks."""
        if not self.sinks:
            return

        results = await asyncio.gather(
            *(sink.notify(level, message, **context) for sink in self.sinks),
            return_exceptions=True,
        )

        for sink, result in zip(self.sinks, results, strict=True):
            if isinstance(result, Exception):
                logger.error(
                    "notification_sink_failed",
                    sink=type(sink).__name__,
                    level=NotificationLevel(level).value,
                    error=str(result),
                )

    async def notify_success(self, message: str, **context: Any) -> None:
        """Convenience method for success notifications."""
        await self.notify(NotificationLevel.SUCCESS, message, **context)

    async def notify_error(self, message: str, **context: Any) -> None:
        """Convenience method for error notifications."""
        await self.notify(NotificationLevel.ERROR, message, **context)

    async def notify_info(self, message: str, **context: Any) -> None:
        """Convenience method for informational notifications."""
        await self.notify(NotificationLevel.INFO, message, **context)
