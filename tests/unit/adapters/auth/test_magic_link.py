"""Unit tests for magic-link delivery adapters."""

from __future__ import annotations

from unittest.mock import AsyncMock

from structlog.testing import capture_logs

from fluxflow.adapters.auth.magic_link import LogMagicLinkSender, WebhookMagicLinkSender
from fluxflow.core.interfaces import NotificationLevel

LINK = "https://app.fluxflow.io/auth/verify?token=abc"


class TestLogMagicLinkSender:
    """Tests for LogMagicLinkSender."""

    async def test_logs_link(self) -> None:
        """Test the link is written to the log."""
        with capture_logs() as logs:
            sent = await LogMagicLinkSender().send_magic_link("owner@acme.io", LINK)

        assert sent is True
        assert logs == [
            {
                "event": "magic_link_issued",
                "log_level": "info",
                "email": "owner@acme.io",
                "link": LINK,
            }
        ]


class TestWebhookMagicLinkSender:
    """Tests for WebhookMagicLinkSender."""

    async def test_posts_link(self) -> None:
        """Test the link goes out through the webhook addressed to the user."""
        webhook = AsyncMock()
        webhook.send.return_value = True

        sent = await WebhookMagicLinkSender(webhook).send_magic_link("owner@acme.io", LINK)

        assert sent is True
        webhook.send.assert_awaited_once_with(
            NotificationLevel.INFO,
            "Sign-in link requested",
            {"kind": "magic_link", "email": "owner@acme.io", "link": LINK},
        )

    async def test_reports_failed_delivery(self) -> None:
        """Test a failed webhook delivery is reported as not sent."""
        webhook = AsyncMock()
        webhook.send.return_value = False

        assert await WebhookMagicLinkSender(webhook).send_magic_link("a@b.io", LINK) is False
