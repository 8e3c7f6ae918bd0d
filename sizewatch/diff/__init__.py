"""Per-platform size diffing between two versions' asset metadata."""

from sizewatch.diff.engine import diff_metas

__all__ = ["diff_metas"]
