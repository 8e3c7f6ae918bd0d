"""Configuration loading from environment variables."""

from __future__ import annotations

import math
import os

from sizewatch.models.config import (
    CacheConfig,
    ComparatorConfig,
    LogConfig,
    NotificationConfig,
    ReportFailurePolicy,
    SizewatchConfig,
    SourceConfig,
)


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"SIZEWATCH_{key}", default)


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_float(key: str, default: float) -> float:
    return float(_env(key, str(default)))


def _validate_threshold(value: float) -> float:
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"Invalid threshold: {value}. Must be a finite number >= 0")
    return value


def _validate_failure_policy(value: str) -> ReportFailurePolicy:
    try:
        return ReportFailurePolicy(value.lower())
    except ValueError:
        valid = {p.value for p in ReportFailurePolicy}
        raise ValueError(f"Invalid report failure policy: {value}. Must be one of {valid}") from None


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> SizewatchConfig:
    """Load configuration from SIZEWATCH_* environment variables."""
    return SizewatchConfig(
        comparator=ComparatorConfig(
            threshold=_validate_threshold(_env_float("THRESHOLD", 0.04)),
            window_days=_env_int("WINDOW_DAYS", 60, min_val=1),
            failure_policy=_validate_failure_policy(_env("REPORT_FAILURE_POLICY", "at_most_once")),
        ),
        cache=CacheConfig(
            path=_env("CACHE_FILE", ".cache"),
        ),
        source=SourceConfig(
            releases_url=_env("SOURCE_RELEASES_URL", "https://electronjs.org/headers/index.json"),
            github_api_url=_env("SOURCE_GITHUB_API_URL", "https://api.github.com"),
            github_token_secret_ref=_env("SOURCE_GITHUB_TOKEN_SECRET_REF", ""),
            snapshot_file=_env("SOURCE_SNAPSHOT_FILE", ""),
            timeout_seconds=_env_float("SOURCE_TIMEOUT", 30.0),
        ),
        notifications=NotificationConfig(
            slack_secret_ref=_env("NOTIFICATIONS_SLACK_SECRET_REF", ""),
            webhook_secret_ref=_env("NOTIFICATIONS_WEBHOOK_SECRET_REF", ""),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )
