from __future__ import annotations

from collections.abc import Iterable

import httpx

from seyren_notify.config import Settings
from seyren_notify.errors import ConfigurationError
from seyren_notify.models import SubscriptionType
from seyren_notify.notifiers import EmailNotificationService, NotificationService, SlackNotificationService


class NotifierRegistry:
    """Maps every ``SubscriptionType`` to exactly one notification service.

    Gaps and overlaps are rejected when the registry is built, so dispatch never
    has to discover a missing channel at delivery time.
    """

    def __init__(self, services: Iterable[NotificationService]) -> None:
        self._services = list(services)
        by_type: dict[SubscriptionType, NotificationService] = {}
        for channel_type in SubscriptionType:
            handlers = [service for service in self._services if service.can_handle(channel_type)]
            if not handlers:
                raise ConfigurationError(f"No notification service handles {channel_type}")
            if len(handlers) > 1:
                names = ", ".join(type(service).__name__ for service in handlers)
                raise ConfigurationError(f"Multiple notification services handle {channel_type}: {names}")
            by_type[channel_type] = handlers[0]
        self._by_type = by_type

    def service_for(self, channel_type: SubscriptionType) -> NotificationService:
        return self._by_type[channel_type]

    @property
    def services(self) -> list[NotificationService]:
        return list(self._services)


def build_registry(settings: Settings, http_transport: httpx.AsyncBaseTransport | None = None) -> NotifierRegistry:
    return NotifierRegistry(
        [
            SlackNotificationService(settings, transport=http_transport),
            EmailNotificationService(settings),
        ]
    )
