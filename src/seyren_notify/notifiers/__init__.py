from seyren_notify.notifiers.base import NotificationService
from seyren_notify.notifiers.email import EmailNotificationService
from seyren_notify.notifiers.slack import SlackNotificationService, SlackPayload, build_slack_payload

__all__ = [
    "NotificationService",
    "EmailNotificationService",
    "SlackNotificationService",
    "SlackPayload",
    "build_slack_payload",
]
