"""Release, asset and size-change data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Release:
    """A published release version.  Sourced externally, never mutated."""

    version: str
    published_at: datetime


@dataclass(frozen=True)
class AssetMeta:
    """Size of one distribution artifact of a version for a target platform.

    The (version, target_platform) pair is unique within a metadata set.
    """

    version: str
    target_platform: str
    size_in_bytes: int

    def __post_init__(self) -> None:
        if self.size_in_bytes < 0:
            raise ValueError(f"size_in_bytes must be non-negative, got {self.size_in_bytes}")


@dataclass(frozen=True)
class SizeChange:
    """Size delta between the same platform's artifacts of two versions.

    Derived per run and never persisted; only its fingerprint survives in
    the change cache.
    """

    base: AssetMeta
    changed: AssetMeta
    absolute: int
    relative: float

    @property
    def platform(self) -> str:
        return self.base.target_platform

    def to_dict(self) -> dict[str, object]:
        """Structured, JSON-safe change record."""
        return {
            "platform": self.platform,
            "base_version": self.base.version,
            "changed_version": self.changed.version,
            "base_size": self.base.size_in_bytes,
            "changed_size": self.changed.size_in_bytes,
            "absolute": self.absolute,
            "relative": self.relative,
        }
