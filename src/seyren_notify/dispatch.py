from __future__ import annotations

import asyncio
from collections.abc import Sequence

import structlog

from seyren_notify.errors import InvalidInputError
from seyren_notify.models import Alert, Check, DeliveryOutcome, Subscription
from seyren_notify.registry import NotifierRegistry


async def dispatch_check(
    check: Check,
    subscriptions: Sequence[Subscription],
    alerts: Sequence[Alert],
    registry: NotifierRegistry,
) -> list[DeliveryOutcome]:
    """Notify every subscription of a check, one delivery attempt each.

    A failing subscription never stops the others. Only an empty alert history
    raises, before any delivery is attempted.
    """
    if not alerts:
        raise InvalidInputError(f"Check {check.id} has no alerts to notify")
    log = structlog.get_logger().bind(check_id=check.id)
    trigger = alerts[-1]

    outcomes: list[DeliveryOutcome] = []
    for subscription in subscriptions:
        if not subscription.should_notify(trigger):
            log.debug("subscription_skipped", subscription_id=subscription.id, to_type=str(trigger.to_type))
            outcomes.append(
                DeliveryOutcome(subscription_id=subscription.id, channel=subscription.type, status="skipped")
            )
            continue
        service = registry.service_for(subscription.type)
        try:
            outcome = await service.deliver(check, subscription, alerts)
        except InvalidInputError:
            raise
        except Exception as exc:
            log.exception("notification_service_crashed", subscription_id=subscription.id, error=str(exc))
            outcome = DeliveryOutcome(
                subscription_id=subscription.id,
                channel=subscription.type,
                status="error",
                error=str(exc),
            )
        outcomes.append(outcome)

    delivered = sum(1 for outcome in outcomes if outcome.delivered)
    log.info("check_dispatched", subscriptions=len(subscriptions), delivered=delivered)
    return outcomes


async def dispatch_checks(
    batches: Sequence[tuple[Check, Sequence[Subscription], Sequence[Alert]]],
    registry: NotifierRegistry,
) -> list[list[DeliveryOutcome]]:
    return list(
        await asyncio.gather(
            *(dispatch_check(check, subscriptions, alerts, registry) for check, subscriptions, alerts in batches)
        )
    )
