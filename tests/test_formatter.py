from __future__ import annotations

import pytest

from seyren_notify.errors import InvalidInputError
from seyren_notify.formatter import (
    COLOR_ERROR,
    COLOR_OK,
    COLOR_WARN,
    format_alert_lines,
    format_message,
    format_plain_text,
    format_value,
    state_color,
)
from seyren_notify.models import Alert, AlertType, Check, Subscription


def test_state_colors() -> None:
    assert state_color(AlertType.ERROR) == COLOR_ERROR
    assert state_color(AlertType.OK) == COLOR_OK
    assert state_color(AlertType.WARN) == COLOR_WARN


def test_unknown_state_falls_back_to_warning_color() -> None:
    assert state_color(AlertType.UNKNOWN) == COLOR_WARN


def test_format_message_uses_last_alert(check: Check, slack_subscription: Subscription, alerts: list[Alert]) -> None:
    message = format_message(check, slack_subscription, alerts, "https://seyren.example/")
    assert message.title == "CPU"
    assert message.color == COLOR_ERROR
    assert message.link == "https://seyren.example/#/checks/c1"
    assert [(field.title, field.value, field.short) for field in message.fields] == [
        ("New State Value", "ERROR", True),
        ("Old State Value", "WARN", True),
        ("Description", "cpu.load = 12.1", False),
    ]
    assert message.mention is True


def test_format_message_ignores_earlier_alerts(check: Check, slack_subscription: Subscription) -> None:
    alerts = [
        Alert(target="a", value=1, from_type=AlertType.OK, to_type=AlertType.ERROR),
        Alert(target="b", value=2, from_type=AlertType.ERROR, to_type=AlertType.OK),
    ]
    message = format_message(check, slack_subscription, alerts, "https://seyren.example")
    assert message.fields[0].value == "OK"
    assert message.fields[1].value == "ERROR"
    assert message.fields[2].value == "b = 2"


def test_format_message_rejects_empty_alerts(check: Check, slack_subscription: Subscription) -> None:
    with pytest.raises(InvalidInputError):
        format_message(check, slack_subscription, [], "https://seyren.example")


def test_format_value() -> None:
    assert format_value(12.1) == "12.1"
    assert format_value(12.0) == "12"
    assert format_value(0.25) == "0.25"


def test_plain_text_lists_every_alert(check: Check, alerts: list[Alert]) -> None:
    assert format_alert_lines(alerts) == [
        "cpu.load = 9.5 (OK to WARN)",
        "cpu.load = 12.1 (WARN to ERROR)",
    ]
    text = format_plain_text(check, alerts, "https://seyren.example")
    assert "> Load on web tier" in text
    assert text.endswith("https://seyren.example/#/checks/c1")


def test_plain_text_rejects_empty_alerts(check: Check) -> None:
    with pytest.raises(InvalidInputError):
        format_plain_text(check, [], "https://seyren.example")
