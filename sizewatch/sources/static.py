"""In-memory metadata provider, optionally loaded from a JSON snapshot.

Snapshot format::

    {
      "releases": [{"version": "38.0.0", "date": "2025-09-01"}, ...],
      "assets": {"38.0.0": [{"platform": "darwin-arm64", "size": 105000000}, ...]}
    }
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path

from sizewatch.errors import FetchError
from sizewatch.models.releases import AssetMeta, Release
from sizewatch.sources.base import ReleaseIndexProvider


def parse_release_date(value: str) -> datetime:
    """Parse an ISO date or datetime; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class StaticMetadataProvider(ReleaseIndexProvider):
    """Serves releases and asset sizes held in memory."""

    def __init__(
        self,
        releases: Iterable[Release],
        assets: Mapping[str, Sequence[AssetMeta]],
        window_days: int = 60,
        now: datetime | None = None,
    ) -> None:
        super().__init__(window_days=window_days, now=now)
        self._static_releases = list(releases)
        self._assets = {version: list(metas) for version, metas in assets.items()}

    @classmethod
    def from_snapshot(
        cls,
        path: str | Path,
        window_days: int = 60,
        now: datetime | None = None,
    ) -> StaticMetadataProvider:
        """Build a provider from a snapshot file.

        Raises:
            FetchError: if the file cannot be read or does not match the format.
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
            releases = [
                Release(version=str(entry["version"]), published_at=parse_release_date(str(entry["date"])))
                for entry in data.get("releases", [])
            ]
            assets = {
                version: [
                    AssetMeta(version=version, target_platform=str(item["platform"]), size_in_bytes=int(item["size"]))
                    for item in items
                ]
                for version, items in data.get("assets", {}).items()
            }
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            raise FetchError(f"Cannot load metadata snapshot {str(path)!r}: {exc}") from exc
        return cls(releases, assets, window_days=window_days, now=now)

    async def _fetch_releases(self) -> Sequence[Release]:
        return self._static_releases

    async def get_asset_metas(self, version: str) -> list[AssetMeta]:
        return list(self._assets.get(version, []))
