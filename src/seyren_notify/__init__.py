from seyren_notify.dispatch import dispatch_check, dispatch_checks
from seyren_notify.errors import ConfigurationError, DeliveryFailed, InvalidInputError, NotificationError
from seyren_notify.models import Alert, AlertType, Check, DeliveryOutcome, Subscription, SubscriptionType
from seyren_notify.registry import NotifierRegistry, build_registry

__all__ = [
    "Alert",
    "AlertType",
    "Check",
    "ConfigurationError",
    "DeliveryFailed",
    "DeliveryOutcome",
    "InvalidInputError",
    "NotificationError",
    "NotifierRegistry",
    "Subscription",
    "SubscriptionType",
    "build_registry",
    "dispatch_check",
    "dispatch_checks",
]
