from __future__ import annotations

import pytest
from pydantic import ValidationError

from seyren_notify.config import Settings


def test_defaults() -> None:
    settings = Settings()
    assert settings.slack_default_channel == "dev-ops"
    assert settings.slack_username == "Seyren"
    assert settings.slack_icon_emoji == ":seyren:"


def test_env_aliases(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEYREN_URL", "https://seyren.internal/")
    monkeypatch.setenv("SLACK_DEFAULT_CHANNEL", "alerts")
    settings = Settings()
    assert settings.public_url == "https://seyren.internal"
    assert settings.slack_default_channel == "alerts"


def test_base_url_must_be_http() -> None:
    with pytest.raises(ValidationError):
        Settings(base_url="seyren.internal")


def test_smtp_port_range() -> None:
    with pytest.raises(ValidationError):
        Settings(smtp_port=0)
