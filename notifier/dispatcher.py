"""Dispatcher that fans event messages out to registered subscribers."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional, Union

from .errors import DuplicateSubscriberError, UnknownSubscriberError
from .feed import NotificationFeed

if TYPE_CHECKING:
    from subscribers.base import Subscriber

logger = logging.getLogger("notifier.dispatcher")

EVENT_PREFIX = "New event: "


@dataclass
class BroadcastResult:
    """Diagnostic summary returned by `Dispatcher.broadcast`."""

    message: str
    attempted: int = 0
    delivered: int = 0
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def failed(self) -> int:
        return len(self.failures)

    def as_dict(self) -> Dict[str, object]:
        return {
            "message": self.message,
            "attempted": self.attempted,
            "delivered": self.delivered,
            "failed": self.failed,
            "failures": dict(self.failures),
        }


class Dispatcher:
    """Owns the subscriber set and broadcasts messages to every member."""

    def __init__(self, *, feed: Optional[NotificationFeed] = None) -> None:
        self.feed = feed
        self._subscribers: Dict[str, Subscriber] = {}
        self._lock = threading.Lock()
        self._stats = {"broadcasts": 0, "attempted": 0, "failed": 0}

    @property
    def subscribers(self) -> Dict[str, Subscriber]:
        """Expose registered subscribers in registration order (read-only)."""
        with self._lock:
            return dict(self._subscribers)

    def __contains__(self, identity: object) -> bool:
        with self._lock:
            return identity in self._subscribers

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def get(self, identity: str) -> Subscriber:
        with self._lock:
            subscriber = self._subscribers.get(identity)
        if subscriber is None:
            raise UnknownSubscriberError(identity)
        return subscriber

    def register(self, subscriber: Subscriber) -> None:
        identity = subscriber.identity
        with self._lock:
            if identity in self._subscribers:
                raise DuplicateSubscriberError(identity)
            self._subscribers[identity] = subscriber
        logger.info({"evt": "subscriber_registered", "id": identity, "online": subscriber.is_online()})

    def unregister(self, subscriber: Union[Subscriber, str]) -> None:
        """Remove a subscriber; unknown subscribers are ignored."""
        identity = subscriber if isinstance(subscriber, str) else subscriber.identity
        with self._lock:
            current = self._subscribers.get(identity)
            # Only drop the exact instance when an object is passed.
            if current is None or (not isinstance(subscriber, str) and current is not subscriber):
                return
            del self._subscribers[identity]
        logger.info({"evt": "subscriber_unregistered", "id": identity})

    def broadcast(self, message: str) -> BroadcastResult:
        """Call `receive` once on every registered subscriber.

        Failures raised by a subscriber are logged and counted in the
        returned result; they never abort the fan-out and never propagate.
        """
        with self._lock:
            targets = list(self._subscribers.values())
        result = BroadcastResult(message=message)
        for subscriber in targets:
            result.attempted += 1
            try:
                subscriber.receive(message)
            except Exception as exc:
                result.failures[subscriber.identity] = str(exc)
                logger.warning(
                    {"evt": "delivery_failed", "id": subscriber.identity, "error": str(exc)}
                )
                continue
            result.delivered += 1

        with self._lock:
            self._stats["broadcasts"] += 1
            self._stats["attempted"] += result.attempted
            self._stats["failed"] += result.failed
        logger.debug({"evt": "broadcast", **result.as_dict()})
        if self.feed is not None:
            self.feed.broadcast(result.as_dict())
        return result

    def raise_event(self, description: str) -> BroadcastResult:
        return self.broadcast(EVENT_PREFIX + description)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._stats)


__all__ = ["BroadcastResult", "Dispatcher", "EVENT_PREFIX"]
