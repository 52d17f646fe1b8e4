"""Webhook notification sink.

Posts each notification as signed JSON to a configured URL, so the
frontend (or any listener) can show it as a toast.
"""

import hashlib
import hmac
import json
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import httpx
import structlog

from fluxflow.core.interfaces import NotificationLevel

logger = structlog.get_logger()


@dataclass
class WebhookConfig:
    """Webhook configuration."""

    url: str
    secret: str | None = None
    timeout_seconds: float = 10


class WebhookNotificationSink:
    """Delivers notifications via an HTTP webhook.

    Delivery failures are logged and reported through ``send``'s return
    value; ``notify`` never raises for transport errors.
    """

    def __init__(self, config: WebhookConfig, client: httpx.AsyncClient | None = None):
        """Initialize the webhook sink.

        Args:
            config: Webhook configuration settings.
            client: Shared HTTP client; a short-lived one is used per call
                when omitted.
        """
        self.config = config
        self._client = client

    async def notify(self, level: NotificationLevel, message: str, **context: Any) -> None:
        """Deliver a notification."""
        await self.send(level, message, context)

    async def send(
        self,
        level: NotificationLevel,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> bool:
        """Send the webhook.

        Returns True if the webhook was delivered successfully (2xx response).
        """
        level_value = NotificationLevel(level).value
        body = json.dumps(
            {
                "level": level_value,
                "message": message,
                "timestamp": datetime.now(UTC).isoformat(),
                "context": context or {},
            },
            default=str,
        )

        headers = {
            "Content-Type": "application/json",
            "User-Agent": "FluxFlow-Notifications/1.0",
        }

        if self.config.secret:
            headers["X-Webhook-Signature"] = f"sha256={sign_body(body.encode(), self.config.secret)}"

        try:
            response = await self._post(body, headers)
        except httpx.TimeoutException:
            logger.warning("notification_webhook_timeout", url=self.config.url, level=level_value)
            return False
        except httpx.RequestError as e:
            logger.error(
                "notification_webhook_error",
                url=self.config.url,
                level=level_value,
                error=str(e),
            )
            return False

        logger.debug(
            "notification_webhook_sent",
            url=self.config.url,
            status_code=response.status_code,
            success=response.is_success,
        )
        return response.is_success

    async def _post(self, body: str, headers: dict[str, str]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(
                self.config.url,
                content=body,
                headers=headers,
                timeout=self.config.timeout_seconds,
            )
        async with httpx.AsyncClient() as client:
            return await client.post(
                self.config.url,
                content=body,
                headers=headers,
                timeout=self.config.timeout_seconds,
            )


def sign_body(body: bytes, secret: str) -> str:
    """HMAC-SHA256 hex digest of a webhook body."""
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def verify_signature(body: bytes, signature_header: str, secret: str) -> bool:
    """Verify a webhook signature header of the form ``sha256=<hex>``."""
    if not signature_header.startswith("sha256="):
        return False
    return hmac.compare_digest(sign_body(body, secret), signature_header[7:])
