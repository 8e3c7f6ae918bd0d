"""Test-wide fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Drop logging configuration made by a test (e.g. bound to a CliRunner stream)."""
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
