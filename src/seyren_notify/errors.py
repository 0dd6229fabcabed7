from __future__ import annotations


class NotificationError(Exception):
    pass


class ConfigurationError(NotificationError):
    """Subscription or service wiring that no retry will fix."""


class InvalidInputError(NotificationError):
    """The caller broke the dispatch contract, e.g. an empty alert history."""


class DeliveryFailed(NotificationError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
