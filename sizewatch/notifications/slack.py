"""Slack incoming-webhook notification channel."""

from __future__ import annotations

from collections.abc import Sequence

import httpx
import structlog

from sizewatch.models.releases import SizeChange
from sizewatch.notifications.base import NotificationChannel, format_change_line

_log = structlog.get_logger(component="notifications.slack")


class SlackNotificationChannel(NotificationChannel):
    """Posts a plain-text summary of the batch to a Slack incoming webhook.

    Args:
        webhook_url: Slack incoming webhook URL.
        timeout:     HTTP request timeout in seconds. Defaults to 10.
        transport:   Optional httpx transport (tests inject a mock).
    """

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not webhook_url:
            raise ValueError("Slack webhook_url must not be empty")
        self._webhook_url = webhook_url
        self._timeout = timeout
        self._transport = transport

    @property
    def channel_name(self) -> str:
        return "slack"

    async def report(self, changes: Sequence[SizeChange]) -> bool:
        payload = {"text": self._build_text(changes)}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._webhook_url, json=payload)
                if response.is_success:
                    return True
                _log.warning(
                    "slack_non_2xx_response",
                    status_code=response.status_code,
                    body=response.text[:200],
                    changes=len(changes),
                )
                return False
        except httpx.TimeoutException:
            _log.warning("slack_request_timeout", changes=len(changes))
            return False
        except httpx.HTTPError as exc:
            _log.warning("slack_http_error", error=str(exc), changes=len(changes))
            return False

    def _build_text(self, changes: Sequence[SizeChange]) -> str:
        noun = "change" if len(changes) == 1 else "changes"
        lines = [f"Significant artifact size {noun} detected ({len(changes)}):"]
        lines.extend(f"- {format_change_line(change)}" for change in changes)
        return "\n".join(lines)
