"""Tests for logging setup and run context binding."""

from __future__ import annotations

import json

import pytest
import structlog

from sizewatch.observability.logging import bind_run_context, get_logger, setup_logging


class TestBindRunContext:
    def test_binds_run_id_and_mode(self) -> None:
        run_id = bind_run_context("run")
        context = structlog.contextvars.get_contextvars()
        assert context == {"run_id": run_id, "mode": "run"}

    def test_each_run_gets_a_fresh_id(self) -> None:
        first = bind_run_context("run")
        second = bind_run_context("compare")
        assert first != second
        assert structlog.contextvars.get_contextvars()["mode"] == "compare"


class TestSetupLogging:
    def test_json_lines_carry_component_and_run_id(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("info")
        run_id = bind_run_context("run")

        get_logger("comparator").info("comparison_complete", changes=3)

        line = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert line["event"] == "comparison_complete"
        assert line["component"] == "comparator"
        assert line["run_id"] == run_id
        assert line["changes"] == 3
        assert line["level"] == "info"
        assert "ts" in line

    def test_level_filters_lower_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("warning")
        get_logger("comparator").info("hidden")
        assert "hidden" not in capsys.readouterr().err
