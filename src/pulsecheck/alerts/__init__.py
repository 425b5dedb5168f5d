"""pulsecheck alerts - dispatcher and webhook sinks."""

from pulsecheck.alerts.dispatcher import AlertDispatcher, format_failure_message
from pulsecheck.alerts.sinks import DiscordWebhookSink, NotificationSink, SlackWebhookSink

__all__ = [
    "AlertDispatcher",
    "DiscordWebhookSink",
    "NotificationSink",
    "SlackWebhookSink",
    "format_failure_message",
]
