"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ReportFailurePolicy(StrEnum):
    """What the comparator does with fingerprints when delivery fails."""

    AT_MOST_ONCE = "at_most_once"
    AT_LEAST_ONCE = "at_least_once"


@dataclass
class ComparatorConfig:
    """Significance and selection settings."""

    threshold: float = 0.04
    window_days: int = 60
    failure_policy: ReportFailurePolicy = ReportFailurePolicy.AT_MOST_ONCE


@dataclass
class CacheConfig:
    """Dedup store location."""

    path: str = ".cache"


@dataclass
class SourceConfig:
    """Metadata provider configuration."""

    releases_url: str = "https://electronjs.org/headers/index.json"
    github_api_url: str = "https://api.github.com"
    github_token_secret_ref: str = ""
    snapshot_file: str = ""
    timeout_seconds: float = 30.0


@dataclass
class NotificationConfig:
    """Notification channel configuration."""

    slack_secret_ref: str = ""
    webhook_secret_ref: str = ""


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class SizewatchConfig:
    """Top-level sizewatch configuration."""

    comparator: ComparatorConfig = field(default_factory=ComparatorConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    log: LogConfig = field(default_factory=LogConfig)
