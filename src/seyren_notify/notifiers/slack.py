from __future__ import annotations

from collections.abc import Sequence

import httpx
import structlog
from pydantic import BaseModel, ConfigDict

from seyren_notify.config import Settings
from seyren_notify.errors import ConfigurationError, DeliveryFailed
from seyren_notify.formatter import format_message
from seyren_notify.models import (
    Alert,
    Check,
    DeliveryOutcome,
    NotificationMessage,
    Subscription,
    SubscriptionType,
)
from seyren_notify.targets import SlackTarget, parse_slack_target
from seyren_notify.transport import post_json

CHANNEL_MENTION = "<!channel>"


class SlackField(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    value: str
    short: bool | None = None


class SlackAttachment(BaseModel):
    model_config = ConfigDict(frozen=True)

    color: str
    title: str
    title_link: str
    fields: list[SlackField]


class SlackPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel: str
    username: str
    icon_emoji: str
    text: str | None = None
    attachments: list[SlackAttachment]

    def to_json_bytes(self) -> bytes:
        return self.model_dump_json(exclude_none=True).encode("utf-8")


def build_slack_payload(message: NotificationMessage, target: SlackTarget, icon_emoji: str) -> SlackPayload:
    attachment = SlackAttachment(
        color=message.color,
        title=message.title,
        title_link=message.link,
        fields=[
            SlackField(title=field.title, value=field.value, short=True if field.short else None)
            for field in message.fields
        ],
    )
    return SlackPayload(
        channel=f"#{target.channel}",
        username=target.username,
        icon_emoji=icon_emoji,
        text=CHANNEL_MENTION if message.mention else None,
        attachments=[attachment],
    )


class SlackNotificationService:
    channel_type = SubscriptionType.SLACK

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self.transport = transport

    def can_handle(self, channel_type: SubscriptionType) -> bool:
        return channel_type == SubscriptionType.SLACK

    def render(self, check: Check, subscription: Subscription, alerts: Sequence[Alert]) -> tuple[SlackTarget, bytes]:
        message = format_message(check, subscription, alerts, self.settings.public_url)
        target = parse_slack_target(
            subscription.target,
            default_channel=self.settings.slack_default_channel,
            default_username=self.settings.slack_username,
        )
        payload = build_slack_payload(message, target, self.settings.slack_icon_emoji)
        return target, payload.to_json_bytes()

    async def deliver(
        self,
        check: Check,
        subscription: Subscription,
        alerts: Sequence[Alert],
    ) -> DeliveryOutcome:
        log = structlog.get_logger().bind(channel="slack", check_id=check.id, subscription_id=subscription.id)
        try:
            target, body = self.render(check, subscription, alerts)
        except ConfigurationError as exc:
            log.warning("slack_target_invalid", target=subscription.target, error=str(exc))
            return DeliveryOutcome(
                subscription_id=subscription.id,
                channel=self.channel_type,
                status="configuration_error",
                error=str(exc),
            )

        log.debug("slack_payload_built", endpoint=target.endpoint, body=body.decode("utf-8"))
        try:
            response = await post_json(
                target.endpoint,
                body,
                timeout_seconds=self.settings.delivery_timeout_seconds,
                transport=self.transport,
            )
        except ConfigurationError as exc:
            log.warning("slack_endpoint_invalid", endpoint=target.endpoint, error=str(exc))
            return DeliveryOutcome(
                subscription_id=subscription.id,
                channel=self.channel_type,
                status="configuration_error",
                endpoint=target.endpoint,
                error=str(exc),
            )
        except DeliveryFailed as exc:
            log.warning(
                "slack_delivery_failed",
                endpoint=target.endpoint,
                status_code=exc.status_code,
                error=str(exc),
            )
            return DeliveryOutcome(
                subscription_id=subscription.id,
                channel=self.channel_type,
                status="delivery_failed",
                endpoint=target.endpoint,
                status_code=exc.status_code,
                error=str(exc),
            )

        log.info("notification_sent", endpoint=target.endpoint, status_code=response.status_code)
        return DeliveryOutcome(
            subscription_id=subscription.id,
            channel=self.channel_type,
            status="sent",
            endpoint=target.endpoint,
            status_code=response.status_code,
        )
