"""sizewatch: release artifact size regression watcher."""

__version__ = "0.1.0"
