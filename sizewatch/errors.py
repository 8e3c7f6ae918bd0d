"""Error taxonomy for sizewatch.

SizewatchError         -- Base class; any subclass aborts a run with exit code 1
                          unless it is recovered locally.
FetchError             -- Metadata retrieval failed.  Recovered per version pair
                          by the comparator; fatal when the release index itself
                          cannot be loaded.
CacheStoreCorruptError -- The persisted dedup store exists but cannot be parsed.
InvalidVersionError    -- A version string is not a valid semantic version.
"""

from __future__ import annotations


class SizewatchError(Exception):
    """Base class for all sizewatch errors."""


class FetchError(SizewatchError):
    """Raised when release or asset metadata cannot be retrieved."""


class CacheStoreCorruptError(SizewatchError):
    """Raised when the persisted fingerprint store holds unparsable content."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"Change cache store {location!r} is corrupt: {reason}")
        self.location = location
        self.reason = reason


class InvalidVersionError(SizewatchError, ValueError):
    """Raised for version strings that are not semantic versions."""

    def __init__(self, version: str) -> None:
        super().__init__(f"Invalid semantic version: {version!r}")
        self.version = version
