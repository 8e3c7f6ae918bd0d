"""Core data structures for sizewatch."""

from sizewatch.models.config import SizewatchConfig
from sizewatch.models.releases import AssetMeta, Release, SizeChange

__all__ = [
    "AssetMeta",
    "Release",
    "SizeChange",
    "SizewatchConfig",
]
