from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from seyren_notify.models import Alert, Check, DeliveryOutcome, Subscription, SubscriptionType


class NotificationService(Protocol):
    """A delivery channel for check notifications.

    ``deliver`` reports expected failures (bad targets, transport errors) as a
    ``DeliveryOutcome`` instead of raising. ``InvalidInputError`` still propagates.
    """

    channel_type: SubscriptionType

    def can_handle(self, channel_type: SubscriptionType) -> bool: ...

    async def deliver(
        self,
        check: Check,
        subscription: Subscription,
        alerts: Sequence[Alert],
    ) -> DeliveryOutcome: ...
