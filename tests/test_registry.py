from __future__ import annotations

import pytest

from seyren_notify.config import Settings
from seyren_notify.errors import ConfigurationError
from seyren_notify.models import SubscriptionType
from seyren_notify.notifiers import EmailNotificationService, SlackNotificationService
from seyren_notify.registry import NotifierRegistry, build_registry


def test_every_channel_has_exactly_one_service(settings: Settings) -> None:
    registry = build_registry(settings)
    for channel_type in SubscriptionType:
        handlers = [service for service in registry.services if service.can_handle(channel_type)]
        assert len(handlers) == 1
        assert registry.service_for(channel_type) is handlers[0]


def test_missing_channel_is_rejected(settings: Settings) -> None:
    with pytest.raises(ConfigurationError, match="EMAIL"):
        NotifierRegistry([SlackNotificationService(settings)])


def test_overlapping_channels_are_rejected(settings: Settings) -> None:
    with pytest.raises(ConfigurationError, match="Multiple"):
        NotifierRegistry(
            [
                SlackNotificationService(settings),
                SlackNotificationService(settings),
                EmailNotificationService(settings),
            ]
        )
