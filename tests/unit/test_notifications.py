"""Tests for notification channels and the channel factory."""

from __future__ import annotations

import json

import httpx
import pytest

from sizewatch.models.config import NotificationConfig
from sizewatch.models.releases import AssetMeta, SizeChange
from sizewatch.notifications import (
    LogNotificationChannel,
    SlackNotificationChannel,
    WebhookNotificationChannel,
    build_notification_channel,
)
from sizewatch.notifications.base import format_change_line


def _change(platform: str = "darwin-arm64", base_size: int = 100_000_000, changed_size: int = 105_000_000) -> SizeChange:
    absolute = changed_size - base_size
    return SizeChange(
        base=AssetMeta(version="37.2.4", target_platform=platform, size_in_bytes=base_size),
        changed=AssetMeta(version="38.0.0", target_platform=platform, size_in_bytes=changed_size),
        absolute=absolute,
        relative=absolute / base_size,
    )


class _Recorder:
    """Captures requests made through an httpx.MockTransport."""

    def __init__(self, status_code: int = 200) -> None:
        self.requests: list[httpx.Request] = []
        self._status_code = status_code

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self._status_code, text="ok")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class TestFormatChangeLine:
    def test_growth_line(self) -> None:
        line = format_change_line(_change())
        assert line == "darwin-arm64: 37.2.4 -> 38.0.0, 100.0 MB -> 105.0 MB (+5.00%, +5,000,000 bytes)"

    def test_shrink_line_has_minus_sign(self) -> None:
        line = format_change_line(_change(changed_size=89_000_000))
        assert "(-11.00%, -11,000,000 bytes)" in line


# ---------------------------------------------------------------------------
# Slack
# ---------------------------------------------------------------------------


class TestSlackChannel:
    def test_empty_url_rejected(self) -> None:
        with pytest.raises(ValueError):
            SlackNotificationChannel(webhook_url="")

    async def test_posts_one_message_per_batch(self) -> None:
        recorder = _Recorder()
        channel = SlackNotificationChannel("https://hooks.slack.test/T/B/X", transport=recorder.transport)

        ok = await channel.report([_change(), _change(platform="win32-arm64", changed_size=89_000_000)])

        assert ok is True
        assert len(recorder.requests) == 1
        body = json.loads(recorder.requests[0].content)
        lines = body["text"].splitlines()
        assert lines[0] == "Significant artifact size changes detected (2):"
        assert lines[1].startswith("- darwin-arm64:")
        assert lines[2].startswith("- win32-arm64:")

    async def test_non_2xx_returns_false(self) -> None:
        recorder = _Recorder(status_code=500)
        channel = SlackNotificationChannel("https://hooks.slack.test/T/B/X", transport=recorder.transport)
        assert await channel.report([_change()]) is False

    async def test_transport_error_returns_false(self) -> None:
        def _boom(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        channel = SlackNotificationChannel("https://hooks.slack.test/T/B/X", transport=httpx.MockTransport(_boom))
        assert await channel.report([_change()]) is False

    def test_channel_name(self) -> None:
        assert SlackNotificationChannel("https://hooks.slack.test/x").channel_name == "slack"


# ---------------------------------------------------------------------------
# Webhook
# ---------------------------------------------------------------------------


class TestWebhookChannel:
    def test_empty_url_rejected(self) -> None:
        with pytest.raises(ValueError):
            WebhookNotificationChannel(url="")

    async def test_posts_structured_records(self) -> None:
        recorder = _Recorder()
        channel = WebhookNotificationChannel(
            "https://example.test/hook",
            headers={"Authorization": "Bearer token"},
            transport=recorder.transport,
        )

        ok = await channel.report([_change()])

        assert ok is True
        request = recorder.requests[0]
        assert request.headers["Authorization"] == "Bearer token"
        assert json.loads(request.content) == {
            "changes": [
                {
                    "platform": "darwin-arm64",
                    "base_version": "37.2.4",
                    "changed_version": "38.0.0",
                    "base_size": 100_000_000,
                    "changed_size": 105_000_000,
                    "absolute": 5_000_000,
                    "relative": 0.05,
                }
            ]
        }

    async def test_timeout_returns_false(self) -> None:
        def _slow(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        channel = WebhookNotificationChannel("https://example.test/hook", transport=httpx.MockTransport(_slow))
        assert await channel.report([_change()]) is False


# ---------------------------------------------------------------------------
# Log channel and factory
# ---------------------------------------------------------------------------


class TestLogChannel:
    async def test_always_succeeds(self) -> None:
        assert await LogNotificationChannel().report([_change()]) is True


class TestBuildNotificationChannel:
    def test_slack_preferred(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SLACK_URL", "https://hooks.slack.test/x")
        monkeypatch.setenv("HOOK_URL", "https://example.test/hook")
        config = NotificationConfig(slack_secret_ref="SLACK_URL", webhook_secret_ref="HOOK_URL")
        assert isinstance(build_notification_channel(config), SlackNotificationChannel)

    def test_webhook_when_slack_ref_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SLACK_URL", raising=False)
        monkeypatch.setenv("HOOK_URL", "https://example.test/hook")
        config = NotificationConfig(slack_secret_ref="SLACK_URL", webhook_secret_ref="HOOK_URL")
        assert isinstance(build_notification_channel(config), WebhookNotificationChannel)

    def test_log_fallback(self) -> None:
        assert isinstance(build_notification_channel(NotificationConfig()), LogNotificationChannel)
