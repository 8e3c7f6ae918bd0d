"""Application bootstrap for sizewatch.

Wires components in dependency order for a single run:
config → logging → change cache → metadata provider → notification
channel → comparator.

Each invocation runs to completion and exits; scheduling is left to the
caller (cron, CI).  Overlapping invocations must be prevented by that
scheduler because the change cache has no cross-process locking.
"""

from __future__ import annotations

from dataclasses import dataclass

from sizewatch.cache import ChangeCache, JsonFileCacheStore
from sizewatch.comparator import SizeComparator
from sizewatch.config import load_config
from sizewatch.errors import SizewatchError
from sizewatch.models.config import SizewatchConfig
from sizewatch.models.releases import SizeChange
from sizewatch.notifications import NotificationChannel, build_notification_channel
from sizewatch.observability.logging import bind_run_context, get_logger, setup_logging
from sizewatch.sources import MetadataProvider, build_metadata_provider

EXIT_OK = 0
EXIT_FATAL = 1


@dataclass
class Components:
    """Everything a run needs, built from one configuration."""

    config: SizewatchConfig
    cache: ChangeCache
    source: MetadataProvider
    channel: NotificationChannel
    comparator: SizeComparator

    async def close(self) -> None:
        await self.source.close()


def build_components(config: SizewatchConfig) -> Components:
    """Construct the run's components.

    The change cache is loaded first so that a corrupt store aborts the
    run before any metadata is fetched.

    Raises:
        CacheStoreCorruptError: if the persisted store cannot be parsed.
        FetchError: if a configured snapshot file cannot be loaded.
    """
    cache = ChangeCache(JsonFileCacheStore(config.cache.path))
    source = build_metadata_provider(config.source, window_days=config.comparator.window_days)
    channel = build_notification_channel(config.notifications)
    comparator = SizeComparator(
        source=source,
        channel=channel,
        cache=cache,
        threshold=config.comparator.threshold,
        failure_policy=config.comparator.failure_policy,
    )
    return Components(config=config, cache=cache, source=source, channel=channel, comparator=comparator)


async def run_latest(components: Components) -> list[SizeChange]:
    """Run the production comparison and release network resources."""
    try:
        return await components.comparator.compare_latest()
    finally:
        await components.close()


async def main(config: SizewatchConfig | None = None) -> int:
    """Run one production comparison; return the process exit code."""
    try:
        config = config or load_config()
    except ValueError as exc:
        setup_logging()
        get_logger("app").critical("fatal_run_error", stage="config", error=str(exc))
        return EXIT_FATAL

    setup_logging(config.log.level)
    bind_run_context("run")
    log = get_logger("app")
    log.info("sizewatch run starting", version=_sizewatch_version())

    try:
        components = build_components(config)
        reported = await run_latest(components)
    except (SizewatchError, ValueError) as exc:
        log.critical("fatal_run_error", error_type=type(exc).__name__, error=str(exc))
        return EXIT_FATAL

    log.info("sizewatch run finished", reported=len(reported))
    return EXIT_OK


def _sizewatch_version() -> str:
    from sizewatch import __version__

    return __version__
