"""Magic-link delivery adapters.

``LogMagicLinkSender`` writes the link to the log for local development,
where no mail relay is configured. ``WebhookMagicLinkSender`` hands the link
to a mailer listening on the notification webhook.
"""

import structlog

from fluxflow.adapters.notifications.webhook import WebhookNotificationSink
from fluxflow.core.interfaces import NotificationLevel

logger = structlog.get_logger()


class LogMagicLinkSender:
    """Logs sign-in links instead of emailing them."""

    async def send_magic_link(self, email: str, link: str) -> bool:
        """Log the sign-in link so a developer can open it directly.

        Returns:
            True (logging always succeeds).
        """
        logger.info("magic_link_issued", email=email, link=link)
        return True


class WebhookMagicLinkSender:
    """Posts sign-in links to the notification webhook for a mailer to send."""

    def __init__(self, webhook: WebhookNotificationSink) -> None:
        """Initialize with the webhook used for delivery.

        Args:
            webhook: Signed webhook sink; its receiver sends the email.
        """
        self._webhook = webhook

    async def send_magic_link(self, email: str, link: str) -> bool:
        """Post the link as an ``info`` notification addressed to ``email``."""
        return await self._webhook.send(
            NotificationLevel.INFO,
            "Sign-in link requested",
            {"kind": "magic_link", "email": email, "link": link},
        )
