"""Log-only notification channel used when no remote channel is configured."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from sizewatch.models.releases import SizeChange
from sizewatch.notifications.base import NotificationChannel

_log = structlog.get_logger(component="notifications.log")


class LogNotificationChannel(NotificationChannel):
    """Emits one structured log line per change.  Always succeeds."""

    @property
    def channel_name(self) -> str:
        return "log"

    async def report(self, changes: Sequence[SizeChange]) -> bool:
        for change in changes:
            _log.info("size_change", **change.to_dict())
        return True
