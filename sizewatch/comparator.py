"""Size comparison pipeline.

SizeComparator composes the metadata provider, the diff engine, the change
cache and a notification channel.  ``compare_latest`` is the production
path and runs strictly in this order:

1) Select tracked versions
2) For each, look up its predecessor (versions without one are skipped)
3) Fetch both metadata sets and diff them, one pair at a time
4) Keep changes whose relative delta magnitude exceeds the threshold
5) Drop changes whose fingerprint is already cached
6) Sort by relative delta, most positive first
7) Report the batch once, then record its fingerprints

Pairs are processed sequentially to bound the request rate against the
metadata provider.

Fingerprints are recorded according to ReportFailurePolicy.  Under the
default AT_MOST_ONCE policy they are recorded even when delivery fails,
so a failed notification is lost rather than retried on the next run.
"""

from __future__ import annotations

from collections.abc import Sequence

from sizewatch.cache.change_cache import ChangeCache
from sizewatch.cache.fingerprint import fingerprint
from sizewatch.diff.engine import diff_metas
from sizewatch.models.config import ReportFailurePolicy
from sizewatch.models.releases import AssetMeta, SizeChange
from sizewatch.notifications.base import NotificationChannel
from sizewatch.observability.logging import get_logger
from sizewatch.sources.base import MetadataProvider

_log = get_logger("comparator")

DEFAULT_THRESHOLD = 0.04


class SizeComparator:
    """Compares artifact sizes of successive versions and reports regressions."""

    def __init__(
        self,
        source: MetadataProvider,
        channel: NotificationChannel,
        cache: ChangeCache,
        threshold: float = DEFAULT_THRESHOLD,
        failure_policy: ReportFailurePolicy = ReportFailurePolicy.AT_MOST_ONCE,
    ) -> None:
        self._source = source
        self._channel = channel
        self._cache = cache
        self._threshold = threshold
        self._failure_policy = failure_policy

    async def compare(self, base_version: str, changed_version: str) -> list[SizeChange]:
        """Return every size change between two versions.

        Ad hoc comparison: nothing is filtered, reported or cached.
        """
        return await self._fetch_and_diff(base_version, changed_version)

    async def compare_latest(self) -> list[SizeChange]:
        """Run the production pipeline and return the batch that was reported."""
        tracked = await self._source.get_latest_versions()
        _log.info("tracked_versions_selected", versions=tracked)

        collected: list[SizeChange] = []
        for version in tracked:
            previous = await self._source.get_previous_version(version)
            if previous is None:
                _log.info("no_previous_version", version=version)
                continue
            collected.extend(await self._fetch_and_diff(previous, version))

        batch = self._select_reportable(collected)
        _log.info(
            "comparison_complete",
            pairs=len(tracked),
            changes=len(collected),
            reportable=len(batch),
            threshold=self._threshold,
        )
        if not batch:
            return []

        delivered = await self._report(batch)
        if delivered or self._failure_policy is ReportFailurePolicy.AT_MOST_ONCE:
            self._cache.record_many(fingerprint(change) for change in batch)
        else:
            _log.warning("fingerprints_not_recorded", reason="delivery failed", changes=len(batch))
        return batch

    def is_significant(self, change: SizeChange) -> bool:
        """True when the relative delta magnitude is strictly above the threshold."""
        return abs(change.relative) > self._threshold

    def _select_reportable(self, changes: Sequence[SizeChange]) -> list[SizeChange]:
        selected: list[SizeChange] = []
        seen: set[str] = set()
        for change in changes:
            if not self.is_significant(change):
                continue
            key = fingerprint(change)
            if key in seen:
                continue
            seen.add(key)
            if self._cache.contains(key):
                _log.debug(
                    "dedup_skip",
                    platform=change.platform,
                    base_version=change.base.version,
                    changed_version=change.changed.version,
                )
                continue
            selected.append(change)
        # sorted() is stable, so ties keep encounter order
        return sorted(selected, key=lambda change: change.relative, reverse=True)

    async def _fetch_and_diff(self, base_version: str, changed_version: str) -> list[SizeChange]:
        base_metas = await self._fetch_metas(base_version)
        changed_metas = await self._fetch_metas(changed_version)
        changes = diff_metas(base_metas, changed_metas)
        _log.debug(
            "pair_compared",
            base_version=base_version,
            changed_version=changed_version,
            changes=len(changes),
        )
        return changes

    async def _fetch_metas(self, version: str) -> list[AssetMeta]:
        try:
            return list(await self._source.get_asset_metas(version))
        except Exception as exc:  # noqa: BLE001
            _log.error("asset_fetch_failed", version=version, error=str(exc))
            return []

    async def _report(self, batch: list[SizeChange]) -> bool:
        try:
            delivered = await self._channel.report(batch)
        except Exception as exc:  # noqa: BLE001
            _log.error(
                "notification_channel_unexpected_error",
                channel=self._channel.channel_name,
                error=str(exc),
            )
            delivered = False

        if delivered:
            _log.info("notification_sent", channel=self._channel.channel_name, changes=len(batch))
        else:
            _log.warning(
                "notification_failed",
                channel=self._channel.channel_name,
                changes=len(batch),
                policy=self._failure_policy.value,
            )
        return delivered
