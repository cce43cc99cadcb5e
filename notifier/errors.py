"""Exceptions raised by the notification core."""

from __future__ import annotations


class NotifierError(Exception):
    """Base class for notifier failures."""


class DuplicateSubscriberError(NotifierError, ValueError):
    def __init__(self, identity: str) -> None:
        super().__init__(f"Subscriber '{identity}' already registered")
        self.identity = identity


class UnknownSubscriberError(NotifierError, KeyError):
    def __init__(self, identity: str) -> None:
        super().__init__(identity)
        self.identity = identity

    def __str__(self) -> str:
        return f"Subscriber '{self.identity}' is not registered"


class DeliveryError(NotifierError):
    """A subscriber could not hand a message to its render sink."""

    def __init__(self, subscriber_id: str, message: str, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(f"Delivery to '{subscriber_id}' failed{detail}")
        self.subscriber_id = subscriber_id
        self.message = message
