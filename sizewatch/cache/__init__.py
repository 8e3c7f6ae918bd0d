"""Dedup cache for sizewatch.

Remembers fingerprints of size changes that were already reported so each
unique change is notified at most once, across process restarts.

Submodules:
    fingerprint   -- Deterministic identity string for a SizeChange.
    change_cache  -- In-memory fingerprint set backed by a JSON file store.
"""

from sizewatch.cache.change_cache import ChangeCache, JsonFileCacheStore
from sizewatch.cache.fingerprint import fingerprint

__all__ = ["ChangeCache", "JsonFileCacheStore", "fingerprint"]
