"""Generic JSON webhook notification channel.

Posts the batch as ``{"changes": [...]}`` where each entry is the
structured record produced by ``SizeChange.to_dict``.
"""

from __future__ import annotations

from collections.abc import Sequence

import httpx
import structlog

from sizewatch.models.releases import SizeChange
from sizewatch.notifications.base import NotificationChannel

_log = structlog.get_logger(component="notifications.webhook")


class WebhookNotificationChannel(NotificationChannel):
    """Delivers batches by POSTing a JSON payload to a configurable URL.

    Args:
        url:       Full endpoint URL (must be HTTPS in production).
        headers:   Optional extra headers (e.g. Authorization).
        timeout:   HTTP request timeout in seconds. Defaults to 10.
        transport: Optional httpx transport (tests inject a mock).
    """

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not url:
            raise ValueError("Webhook url must not be empty")
        self._url = url
        self._headers = headers or {}
        self._timeout = timeout
        self._transport = transport

    @property
    def channel_name(self) -> str:
        return "webhook"

    async def report(self, changes: Sequence[SizeChange]) -> bool:
        """POST *changes* as JSON.  Returns True on a 2xx response."""
        payload = {"changes": [change.to_dict() for change in changes]}
        request_headers = {
            "Content-Type": "application/json",
            **self._headers,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._url, json=payload, headers=request_headers)
                if response.is_success:
                    return True
                _log.warning(
                    "webhook_non_2xx_response",
                    status_code=response.status_code,
                    body=response.text[:200],
                    changes=len(changes),
                )
                return False
        except httpx.TimeoutException:
            _log.warning("webhook_request_timeout", url=self._url, changes=len(changes))
            return False
        except httpx.HTTPError as exc:
            _log.warning("webhook_http_error", error=str(exc), changes=len(changes))
            return False
