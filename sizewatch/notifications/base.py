"""Notification channel contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from sizewatch.models.releases import SizeChange


class NotificationChannel(ABC):
    """Abstract base class for all notification channels.

    ``report`` receives one whole batch per run and should not raise:
    return ``False`` instead.  The comparator still guards against
    exceptions and treats them as failed deliveries.
    """

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Human-readable channel identifier used in logs."""

    @abstractmethod
    async def report(self, changes: Sequence[SizeChange]) -> bool:
        """Deliver *changes* via this channel.

        Returns:
            True  -- batch accepted by the remote endpoint.
            False -- delivery failed (already logged inside implementation).
        """


def format_size(size_in_bytes: int) -> str:
    """Format a byte count in decimal megabytes."""
    return f"{size_in_bytes / 1_000_000:.1f} MB"


def format_change_line(change: SizeChange) -> str:
    """One plain-text line describing *change*."""
    return (
        f"{change.platform}: {change.base.version} -> {change.changed.version}, "
        f"{format_size(change.base.size_in_bytes)} -> {format_size(change.changed.size_in_bytes)} "
        f"({change.relative:+.2%}, {change.absolute:+,} bytes)"
    )
