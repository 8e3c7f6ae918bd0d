"""Persistent set of already-reported change fingerprints.

The store is read fully once when the cache is created and rewritten in
full on every mutation.  A missing store means an empty cache; a store
with unparsable content is fatal.

Single-writer only: two processes sharing one store file can lose each
other's updates.  Schedulers must not run overlapping invocations.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from sizewatch.errors import CacheStoreCorruptError
from sizewatch.observability.logging import get_logger

_log = get_logger("cache.change_cache")


class JsonFileCacheStore:
    """Flat JSON array of fingerprint strings on disk."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def location(self) -> str:
        return str(self._path)

    def load(self) -> list[str]:
        """Read every stored fingerprint in insertion order.

        Raises:
            CacheStoreCorruptError: if the file is not a JSON array of strings.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            _log.info("cache_store_missing", path=self.location)
            return []
        except UnicodeDecodeError as exc:
            raise CacheStoreCorruptError(self.location, f"not valid UTF-8: {exc}") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CacheStoreCorruptError(self.location, f"invalid JSON: {exc}") from exc
        if not isinstance(data, list):
            raise CacheStoreCorruptError(self.location, f"expected a JSON array, got {type(data).__name__}")
        if not all(isinstance(item, str) for item in data):
            raise CacheStoreCorruptError(self.location, "every entry must be a string")
        return data

    def save(self, fingerprints: list[str]) -> None:
        """Atomically replace the store content with *fingerprints*."""
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(fingerprints, handle)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class ChangeCache:
    """Membership set of reported fingerprints, loaded once per instance."""

    def __init__(self, store: JsonFileCacheStore) -> None:
        self._store = store
        self._entries: list[str] = []
        self._members: set[str] = set()
        for entry in store.load():
            if entry not in self._members:
                self._members.add(entry)
                self._entries.append(entry)
        _log.debug("change_cache_loaded", path=store.location, entries=len(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._members

    def contains(self, fingerprint: str) -> bool:
        return fingerprint in self._members

    def record(self, fingerprint: str) -> None:
        """Add *fingerprint* and persist.  Recording a known entry is a no-op."""
        self.record_many([fingerprint])

    def record_many(self, fingerprints: Iterable[str]) -> None:
        """Add several fingerprints with a single store rewrite."""
        added = 0
        for fingerprint in fingerprints:
            if fingerprint in self._members:
                continue
            self._members.add(fingerprint)
            self._entries.append(fingerprint)
            added += 1
        if not added:
            return
        self._store.save(list(self._entries))
        _log.debug("change_cache_saved", path=self._store.location, added=added, entries=len(self._entries))
