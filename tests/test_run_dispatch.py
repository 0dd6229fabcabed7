from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from seyren_notify.run_dispatch import load_request, main


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


def test_load_request_orders_alerts(tmp_path: Path) -> None:
    request_path = tmp_path / "request.json"
    request_path.write_text(
        json.dumps(
            {
                "check": {"id": "c1", "name": "CPU", "state": "ERROR"},
                "subscriptions": [
                    {"id": "s1", "check_id": "c1", "type": "SLACK", "target": "https://hooks.example/T?channel=ops"}
                ],
                "alerts": [
                    {
                        "target": "cpu.load",
                        "value": 12.1,
                        "from_type": "WARN",
                        "to_type": "ERROR",
                        "timestamp": "2024-05-01T12:01:00+00:00",
                    },
                    {
                        "target": "cpu.load",
                        "value": 9.5,
                        "from_type": "OK",
                        "to_type": "WARN",
                        "timestamp": "2024-05-01T12:00:00+00:00",
                    },
                ],
            }
        ),
        encoding="utf-8",
    )

    request = load_request(request_path)

    assert [alert.to_type.value for alert in request.alerts] == ["WARN", "ERROR"]
    assert request.subscriptions[0].type.value == "SLACK"


def test_main_rejects_missing_request(tmp_path: Path) -> None:
    assert main([str(tmp_path / "missing.json")]) == 2
