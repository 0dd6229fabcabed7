from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import parse_qsl, unquote_plus, urlsplit, urlunsplit

from seyren_notify.errors import ConfigurationError

MENTION_SUFFIX = "!"


@dataclass(frozen=True)
class SubscriptionTarget:
    endpoint: str
    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SlackTarget:
    endpoint: str
    channel: str
    username: str
    mention_everyone: bool


def _decode(component: str, raw: str) -> str:
    try:
        return unquote_plus(component, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise ConfigurationError(f"Cannot decode {component!r} in subscription target {raw!r}") from exc


def parse_target(raw: str) -> SubscriptionTarget:
    """Split a webhook-style target into its endpoint and decoded query parameters.

    ``https://hooks.slack.com/services/T/B/X?channel=ops&username=bot`` yields the
    endpoint ``https://hooks.slack.com/services/T/B/X`` and
    ``{"channel": "ops", "username": "bot"}``. Repeated keys keep the last value.
    """
    try:
        parts = urlsplit(raw.strip())
        _ = parts.port
    except ValueError as exc:
        raise ConfigurationError(f"Subscription target is not a valid URL: {raw!r}") from exc
    if parts.scheme not in {"http", "https"} or not parts.hostname:
        raise ConfigurationError(f"Subscription target is not an http(s) URL: {raw!r}")
    if not parts.query:
        raise ConfigurationError(f"Subscription target has no query parameters: {raw!r}")

    params: dict[str, str] = {}
    for pair in parts.query.split("&"):
        if pair == "":
            continue
        if "=" not in pair:
            raise ConfigurationError(f"Malformed query parameter {pair!r} in subscription target {raw!r}")
        key, value = pair.split("=", 1)
        params[_decode(key, raw)] = _decode(value, raw)

    endpoint = urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
    return SubscriptionTarget(endpoint=endpoint, params=params)


def split_mention(channel: str) -> tuple[str, bool]:
    if channel.endswith(MENTION_SUFFIX):
        return channel[: -len(MENTION_SUFFIX)], True
    return channel, False


def parse_slack_target(raw: str, default_channel: str, default_username: str) -> SlackTarget:
    target = parse_target(raw)
    channel, mention = split_mention(target.params.get("channel") or default_channel)
    channel = channel.lstrip("#")
    if not channel:
        raise ConfigurationError(f"Slack subscription target has an empty channel: {raw!r}")
    return SlackTarget(
        endpoint=target.endpoint,
        channel=channel,
        username=target.params.get("username") or default_username,
        mention_everyone=mention,
    )


def mention_requested(raw: str) -> bool:
    """Lenient check for the mention marker; never raises on malformed targets."""
    try:
        query = urlsplit(raw.strip()).query
        pairs = parse_qsl(query, keep_blank_values=True)
    except ValueError:
        return False
    channel = dict(pairs).get("channel", "")
    return split_mention(channel)[1]


def parse_email_target(raw: str) -> list[str]:
    recipients = [item.strip() for item in raw.split(",") if item.strip()]
    if not recipients:
        raise ConfigurationError("Email subscription target has no recipients")
    invalid = [item for item in recipients if "@" not in item or "\r" in item or "\n" in item]
    if invalid:
        raise ConfigurationError(f"Invalid email recipients in subscription target: {invalid!r}")
    return recipients
