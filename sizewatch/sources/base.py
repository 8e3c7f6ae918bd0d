"""Metadata provider contract.

MetadataProvider    -- ABC with exactly the three operations the comparator
                       consumes.
ReleaseIndexProvider -- Provider that derives version selection from a raw
                        release list via the version selector.  The list is
                        fetched lazily once and owned by the instance, so it
                        never leaks across runs or providers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime

from sizewatch.models.releases import AssetMeta, Release
from sizewatch.selector.versions import latest_versions, previous_version


class MetadataProvider(ABC):
    """Source of release version and asset size metadata."""

    @abstractmethod
    async def get_latest_versions(self) -> list[str]:
        """Return the tracked versions, one per major line plus the newest nightly."""

    @abstractmethod
    async def get_previous_version(self, version: str) -> str | None:
        """Return the release immediately preceding *version*, if any."""

    @abstractmethod
    async def get_asset_metas(self, version: str) -> list[AssetMeta]:
        """Return asset sizes for *version*.

        Implementations return an empty list instead of raising when no
        data is available.
        """

    async def close(self) -> None:
        """Release network resources.  No-op unless overridden."""


class ReleaseIndexProvider(MetadataProvider):
    """Provider backed by a full list of known releases.

    Args:
        window_days: Tracking window for ``get_latest_versions``.
        now:         Fixed reference time; defaults to the current time.
    """

    def __init__(self, window_days: int = 60, now: datetime | None = None) -> None:
        self._window_days = window_days
        self._now = now
        self._releases: list[Release] | None = None

    @abstractmethod
    async def _fetch_releases(self) -> Sequence[Release]:
        """Load every known release.  Called at most once per instance."""

    async def releases(self) -> list[Release]:
        if self._releases is None:
            self._releases = list(await self._fetch_releases())
        return self._releases

    async def get_latest_versions(self) -> list[str]:
        return latest_versions(await self.releases(), self._window_days, now=self._now)

    async def get_previous_version(self, version: str) -> str | None:
        return previous_version(await self.releases(), version)
