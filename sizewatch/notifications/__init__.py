"""Notification channels for sizewatch.

Exports:
    NotificationChannel        -- Abstract base for all channel implementations.
    SlackNotificationChannel   -- Slack incoming webhook (plain-text summary).
    WebhookNotificationChannel -- Generic JSON POST webhook channel.
    LogNotificationChannel     -- Structured log output, no remote delivery.
    build_notification_channel -- Factory used by the application bootstrap.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import structlog

from sizewatch.notifications.base import NotificationChannel
from sizewatch.notifications.log import LogNotificationChannel
from sizewatch.notifications.slack import SlackNotificationChannel
from sizewatch.notifications.webhook import WebhookNotificationChannel

if TYPE_CHECKING:
    from sizewatch.models.config import NotificationConfig

_log = structlog.get_logger(component="notifications")

__all__ = [
    "LogNotificationChannel",
    "NotificationChannel",
    "SlackNotificationChannel",
    "WebhookNotificationChannel",
    "build_notification_channel",
]


def build_notification_channel(config: NotificationConfig) -> NotificationChannel:
    """Build the notification channel from environment-resolved secrets.

    The ``*_secret_ref`` fields in NotificationConfig are names of
    environment variables that hold the actual webhook URLs.  Slack wins
    over the generic webhook; with neither configured, changes are only
    logged.
    """
    slack_ref = config.slack_secret_ref
    if slack_ref:
        slack_url = os.environ.get(slack_ref, "")
        if slack_url:
            _log.info("slack_channel_enabled")
            return SlackNotificationChannel(webhook_url=slack_url)
        _log.debug("slack_channel_skipped", reason="secret ref env var is empty")

    webhook_ref = config.webhook_secret_ref
    if webhook_ref:
        webhook_url = os.environ.get(webhook_ref, "")
        if webhook_url:
            _log.info("webhook_channel_enabled")
            return WebhookNotificationChannel(url=webhook_url)
        _log.debug("webhook_channel_skipped", reason="secret ref env var is empty")

    _log.info("no_notification_channels_configured")
    return LogNotificationChannel()
