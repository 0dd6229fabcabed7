from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, Field, ValidationError

from seyren_notify.config import get_settings
from seyren_notify.dispatch import dispatch_check
from seyren_notify.errors import NotificationError
from seyren_notify.models import Alert, Check, DeliveryOutcome, Subscription
from seyren_notify.registry import build_registry


class DispatchRequest(BaseModel):
    check: Check
    subscriptions: list[Subscription] = Field(default_factory=list)
    alerts: list[Alert] = Field(default_factory=list)


def configure_logging() -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ]
    )


def load_request(path: Path) -> DispatchRequest:
    raw: Any = json.loads(path.read_text(encoding="utf-8"))
    request = DispatchRequest.model_validate(raw)
    alerts = sorted(request.alerts, key=lambda alert: alert.timestamp)
    return request.model_copy(update={"alerts": alerts})


async def run(path: Path) -> list[DeliveryOutcome]:
    settings = get_settings()
    request = load_request(path)
    registry = build_registry(settings)
    subscriptions = [item for item in request.subscriptions if item.check_id == request.check.id]
    return await dispatch_check(request.check, subscriptions, request.alerts, registry)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send notifications for one check transition.")
    parser.add_argument("request", type=Path, help="JSON file with check, subscriptions and alerts")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    log = structlog.get_logger().bind(service="seyren-notify")
    args = parse_args(argv)
    try:
        outcomes = asyncio.run(run(args.request))
    except (OSError, json.JSONDecodeError, ValidationError, NotificationError) as exc:
        log.error("dispatch_aborted", request=str(args.request), error=str(exc))
        return 2
    for outcome in outcomes:
        sys.stdout.write(outcome.model_dump_json() + "\n")
    return 0 if all(outcome.status in {"sent", "skipped"} for outcome in outcomes) else 1


if __name__ == "__main__":
    raise SystemExit(main())
