from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AlertType(str, Enum):
    UNKNOWN = "UNKNOWN"
    OK = "OK"
    WARN = "WARN"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


class SubscriptionType(str, Enum):
    SLACK = "SLACK"
    EMAIL = "EMAIL"

    def __str__(self) -> str:
        return self.value


class Check(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str | None = None
    state: AlertType = AlertType.UNKNOWN

    @property
    def url_fragment(self) -> str:
        return f"#/checks/{self.id}"


class Subscription(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    check_id: str
    type: SubscriptionType
    target: str
    enabled: bool = True
    ignore_ok: bool = False
    ignore_warn: bool = False
    ignore_error: bool = False

    def should_notify(self, alert: Alert) -> bool:
        if not self.enabled:
            return False
        if alert.to_type == AlertType.OK:
            return not self.ignore_ok
        if alert.to_type == AlertType.WARN:
            return not self.ignore_warn
        if alert.to_type == AlertType.ERROR:
            return not self.ignore_error
        return True


class Alert(BaseModel):
    model_config = ConfigDict(frozen=True)

    target: str
    value: float
    from_type: AlertType
    to_type: AlertType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class MessageField(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    value: str
    short: bool = False


class NotificationMessage(BaseModel):
    """Channel-agnostic rendering of one notification."""

    model_config = ConfigDict(frozen=True)

    title: str
    color: str = Field(pattern=r"^#[0-9A-Fa-f]{6}$")
    link: str
    fields: tuple[MessageField, ...]
    mention: bool = False


DeliveryStatus = Literal["sent", "configuration_error", "delivery_failed", "skipped", "error"]


class DeliveryOutcome(BaseModel):
    subscription_id: str
    channel: SubscriptionType
    status: DeliveryStatus
    endpoint: str | None = None
    status_code: int | None = None
    error: str | None = None

    @property
    def delivered(self) -> bool:
        return self.status == "sent"
