"""Notification core: dispatcher, shell contract and the event relay."""

from .dispatcher import BroadcastResult, Dispatcher
from .errors import (
    DeliveryError,
    DuplicateSubscriberError,
    NotifierError,
    UnknownSubscriberError,
)
from .feed import FeedEvent, NotificationFeed

__all__ = [
    "BroadcastResult",
    "DeliveryError",
    "Dispatcher",
    "DuplicateSubscriberError",
    "FeedEvent",
    "NotificationFeed",
    "NotifierError",
    "UnknownSubscriberError",
]
