"""Unit tests for LogNotificationSink."""

from __future__ import annotations

from structlog.testing import capture_logs

from fluxflow.adapters.notifications.log import LogNotificationSink
from fluxflow.core.interfaces import NotificationLevel


class TestLogNotificationSink:
    """Tests for LogNotificationSink."""

    async def test_success_logged_at_info(self) -> None:
        """Test success notifications are info events."""
        with capture_logs() as logs:
            await LogNotificationSink().notify(
                NotificationLevel.SUCCESS, "Task created successfully!", task_id="t1"
            )

        assert logs == [
            {
                "event": "notification",
                "log_level": "info",
                "level": "success",
                "message": "Task created successfully!",
                "task_id": "t1",
            }
        ]

    async def test_error_logged_at_error(self) -> None:
        """Test error notifications are error events."""
        with capture_logs() as logs:
            await LogNotificationSink().notify(NotificationLevel.ERROR, "Failed to delete task: x")

        assert logs[0]["log_level"] == "error"
        assert logs[0]["level"] == "error"
