from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from seyren_notify.config import Settings
from seyren_notify.models import Alert, AlertType, Check, Subscription, SubscriptionType


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url="https://seyren.example")


@pytest.fixture
def check() -> Check:
    return Check(id="c1", name="CPU", description="Load on web tier", state=AlertType.ERROR)


@pytest.fixture
def alerts() -> list[Alert]:
    start = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    return [
        Alert(target="cpu.load", value=9.5, from_type=AlertType.OK, to_type=AlertType.WARN, timestamp=start),
        Alert(
            target="cpu.load",
            value=12.1,
            from_type=AlertType.WARN,
            to_type=AlertType.ERROR,
            timestamp=start + timedelta(minutes=1),
        ),
    ]


@pytest.fixture
def slack_subscription() -> Subscription:
    return Subscription(
        id="s1",
        check_id="c1",
        type=SubscriptionType.SLACK,
        target="https://hooks.example/T?channel=ops!&username=bot",
    )
