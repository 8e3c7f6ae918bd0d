"""Shared fixtures for sizewatch integration tests.

Provides in-memory metadata, a recording notification channel and a
file-backed change cache so tests can exercise full comparison runs
without network access.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from sizewatch.cache.change_cache import ChangeCache, JsonFileCacheStore
from sizewatch.models.releases import AssetMeta, Release, SizeChange
from sizewatch.notifications.base import NotificationChannel
from sizewatch.sources.static import StaticMetadataProvider

_NOW = datetime(2025, 10, 1, 12, 0, 0, tzinfo=UTC)

# ---------------------------------------------------------------------------
# Factory helpers
# ---------------------------------------------------------------------------


def make_release(version: str, days_ago: int = 5) -> Release:
    return Release(version=version, published_at=_NOW - timedelta(days=days_ago))


def make_metas(version: str, sizes: dict[str, int]) -> list[AssetMeta]:
    return [AssetMeta(version=version, target_platform=platform, size_in_bytes=size) for platform, size in sizes.items()]


BASE_SIZES = {
    "darwin-arm64": 100_000_000,
    "win32-x64": 120_000_000,
    "linux-x64": 110_000_000,
    "win32-arm64": 100_000_000,
}

CHANGED_SIZES = {
    "darwin-arm64": 105_000_000,  # +5%
    "win32-x64": 121_000_000,  # +0.83%
    "linux-x64": 109_000_000,  # -0.91%
    "win32-arm64": 89_000_000,  # -11%
}


class RecordingChannel(NotificationChannel):
    """Test double that records every batch it is asked to report."""

    def __init__(self, succeed: bool = True, raises: Exception | None = None) -> None:
        self.batches: list[list[SizeChange]] = []
        self._succeed = succeed
        self._raises = raises

    @property
    def channel_name(self) -> str:
        return "recording"

    async def report(self, changes: Sequence[SizeChange]) -> bool:
        self.batches.append(list(changes))
        if self._raises is not None:
            raise self._raises
        return self._succeed


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def now() -> datetime:
    return _NOW


@pytest.fixture()
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / ".cache"


@pytest.fixture()
def change_cache(cache_path: Path) -> ChangeCache:
    return ChangeCache(JsonFileCacheStore(cache_path))


@pytest.fixture()
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture()
def single_pair_source() -> StaticMetadataProvider:
    """38.0.0 is the only tracked version; its predecessor is 37.2.4."""
    releases = [make_release("38.0.0"), make_release("37.2.4", days_ago=90)]
    assets = {
        "37.2.4": make_metas("37.2.4", BASE_SIZES),
        "38.0.0": make_metas("38.0.0", CHANGED_SIZES),
    }
    return StaticMetadataProvider(releases, assets, window_days=60, now=_NOW)
