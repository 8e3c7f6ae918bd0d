"""Size delta computation between two platform-keyed metadata sets.

Platforms present on only one side are excluded from the output rather
than reported as changes.  Pairs whose base size is zero have no defined
relative delta; they are skipped with a warning.
"""

from __future__ import annotations

from collections.abc import Sequence

from sizewatch.models.releases import AssetMeta, SizeChange
from sizewatch.observability.logging import get_logger

_logger = get_logger("diff.engine")


def diff_metas(base_metas: Sequence[AssetMeta], changed_metas: Sequence[AssetMeta]) -> list[SizeChange]:
    """Compute absolute and relative size deltas per matching platform.

    Output follows *base_metas* order.
    """
    changed_by_platform: dict[str, AssetMeta] = {}
    for meta in changed_metas:
        changed_by_platform.setdefault(meta.target_platform, meta)

    changes: list[SizeChange] = []
    for base in base_metas:
        changed = changed_by_platform.get(base.target_platform)
        if changed is None:
            continue
        if base.size_in_bytes == 0:
            _logger.warning(
                "zero_base_size_skipped",
                platform=base.target_platform,
                base_version=base.version,
                changed_version=changed.version,
                changed_size=changed.size_in_bytes,
            )
            continue
        absolute = changed.size_in_bytes - base.size_in_bytes
        changes.append(
            SizeChange(
                base=base,
                changed=changed,
                absolute=absolute,
                relative=absolute / base.size_in_bytes,
            )
        )

    base_platforms = {meta.target_platform for meta in base_metas}
    unmatched = sorted(base_platforms.symmetric_difference(changed_by_platform))
    if unmatched:
        _logger.debug("unmatched_platforms_excluded", platforms=unmatched)
    return changes
