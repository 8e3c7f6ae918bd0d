"""Metadata providers for sizewatch.

Exports:
    MetadataProvider        -- Abstract contract consumed by the comparator.
    ReleaseIndexProvider    -- Base for providers holding a raw release list.
    ElectronReleaseProvider -- Electron headers index + GitHub Releases API.
    StaticMetadataProvider  -- In-memory data, optionally from a JSON snapshot.
    build_metadata_provider -- Factory used by the application bootstrap.
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import TYPE_CHECKING

from sizewatch.sources.base import MetadataProvider, ReleaseIndexProvider
from sizewatch.sources.electron import ElectronReleaseProvider
from sizewatch.sources.static import StaticMetadataProvider

if TYPE_CHECKING:
    from sizewatch.models.config import SourceConfig

__all__ = [
    "ElectronReleaseProvider",
    "MetadataProvider",
    "ReleaseIndexProvider",
    "StaticMetadataProvider",
    "build_metadata_provider",
]


def build_metadata_provider(
    config: SourceConfig,
    window_days: int,
    now: datetime | None = None,
) -> MetadataProvider:
    """Build the configured provider.

    A snapshot file takes precedence over the network-backed provider.
    ``github_token_secret_ref`` names the environment variable holding the
    GitHub token.
    """
    if config.snapshot_file:
        return StaticMetadataProvider.from_snapshot(config.snapshot_file, window_days=window_days, now=now)

    token = os.environ.get(config.github_token_secret_ref, "") if config.github_token_secret_ref else ""
    return ElectronReleaseProvider(
        releases_url=config.releases_url,
        github_api_url=config.github_api_url,
        github_token=token or None,
        window_days=window_days,
        timeout=config.timeout_seconds,
        now=now,
    )
