from __future__ import annotations

from collections.abc import Sequence
from email.message import EmailMessage

import structlog

from seyren_notify.config import Settings
from seyren_notify.errors import ConfigurationError, DeliveryFailed
from seyren_notify.formatter import format_plain_text, latest_alert
from seyren_notify.models import Alert, Check, DeliveryOutcome, Subscription, SubscriptionType
from seyren_notify.targets import parse_email_target
from seyren_notify.transport import SmtpSender


def email_subject(check: Check) -> str:
    name = " ".join(check.name.split())
    return f"Seyren alert: {name} is {check.state}"


class EmailNotificationService:
    channel_type = SubscriptionType.EMAIL

    def __init__(self, settings: Settings, sender: SmtpSender | None = None) -> None:
        self.settings = settings
        self.sender = sender or SmtpSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            timeout_seconds=settings.delivery_timeout_seconds,
        )

    def can_handle(self, channel_type: SubscriptionType) -> bool:
        return channel_type == SubscriptionType.EMAIL

    def build_message(self, check: Check, recipients: list[str], alerts: Sequence[Alert]) -> EmailMessage:
        latest_alert(alerts)
        message = EmailMessage()
        message["From"] = self.settings.smtp_from
        message["To"] = ", ".join(recipients)
        message["Subject"] = email_subject(check)
        message.set_content(format_plain_text(check, alerts, self.settings.public_url))
        return message

    async def deliver(
        self,
        check: Check,
        subscription: Subscription,
        alerts: Sequence[Alert],
    ) -> DeliveryOutcome:
        log = structlog.get_logger().bind(channel="email", check_id=check.id, subscription_id=subscription.id)
        latest_alert(alerts)
        try:
            recipients = parse_email_target(subscription.target)
        except ConfigurationError as exc:
            log.warning("email_target_invalid", target=subscription.target, error=str(exc))
            return DeliveryOutcome(
                subscription_id=subscription.id,
                channel=self.channel_type,
                status="configuration_error",
                error=str(exc),
            )

        message = self.build_message(check, recipients, alerts)
        endpoint = f"smtp://{self.settings.smtp_host}:{self.settings.smtp_port}"
        try:
            await self.sender.send(message)
        except DeliveryFailed as exc:
            log.warning("email_delivery_failed", endpoint=endpoint, error=str(exc))
            return DeliveryOutcome(
                subscription_id=subscription.id,
                channel=self.channel_type,
                status="delivery_failed",
                endpoint=endpoint,
                error=str(exc),
            )

        log.info("notification_sent", endpoint=endpoint, recipients=len(recipients))
        return DeliveryOutcome(
            subscription_id=subscription.id,
            channel=self.channel_type,
            status="sent",
            endpoint=endpoint,
        )
