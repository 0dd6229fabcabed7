from __future__ import annotations

from collections.abc import Sequence

from seyren_notify.errors import InvalidInputError
from seyren_notify.models import Alert, AlertType, Check, MessageField, NotificationMessage, Subscription
from seyren_notify.targets import mention_requested

COLOR_ERROR = "#d93240"
COLOR_WARN = "#FFD801"
COLOR_OK = "#5bb12f"


def state_color(state: AlertType) -> str:
    if state == AlertType.ERROR:
        return COLOR_ERROR
    if state == AlertType.OK:
        return COLOR_OK
    return COLOR_WARN


def check_link(base_url: str, check: Check) -> str:
    return f"{base_url.rstrip('/')}/{check.url_fragment}"


def format_value(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def describe_alert(alert: Alert) -> str:
    return f"{alert.target} = {format_value(alert.value)}"


def latest_alert(alerts: Sequence[Alert]) -> Alert:
    if not alerts:
        raise InvalidInputError("Cannot format a notification without alerts")
    return alerts[-1]


def format_message(
    check: Check,
    subscription: Subscription,
    alerts: Sequence[Alert],
    base_url: str,
) -> NotificationMessage:
    alert = latest_alert(alerts)
    return NotificationMessage(
        title=check.name,
        color=state_color(check.state),
        link=check_link(base_url, check),
        fields=(
            MessageField(title="New State Value", value=str(alert.to_type), short=True),
            MessageField(title="Old State Value", value=str(alert.from_type), short=True),
            MessageField(title="Description", value=describe_alert(alert)),
        ),
        mention=mention_requested(subscription.target),
    )


def format_alert_lines(alerts: Sequence[Alert]) -> list[str]:
    return [f"{describe_alert(alert)} ({alert.from_type} to {alert.to_type})" for alert in alerts]


def format_plain_text(check: Check, alerts: Sequence[Alert], base_url: str) -> str:
    latest_alert(alerts)
    lines = [f"Check: {check.name} ({check.state})"]
    if check.description and check.description.strip():
        lines.append(f"> {check.description.strip()}")
    lines.append("")
    lines.extend(format_alert_lines(alerts))
    lines.append("")
    lines.append(check_link(base_url, check))
    return "\n".join(lines)
