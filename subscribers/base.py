"""Base classes for notification subscribers."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Dict, List, Protocol

from notifier.errors import DeliveryError

if TYPE_CHECKING:
    from notifier.shell import NotificationSink

logger = logging.getLogger("notifier.subscribers")

REALTIME_PREFIX = "Real-time: "
STORED_PREFIX = "Delivered from storage: "


def status_label(online: bool) -> str:
    return "Status: " + ("Online" if online else "Offline")


class Subscriber(Protocol):
    """Protocol describing the interface the dispatcher expects from subscribers."""

    identity: str

    def receive(self, message: str) -> None: ...

    def set_online(self, status: bool) -> None: ...

    def is_online(self) -> bool: ...

    def toggle(self) -> bool: ...

    def snapshot(self) -> Dict[str, Any]: ...


class BaseSubscriber:
    """Online/offline state machine with a FIFO queue of undelivered messages.

    Offline subscribers store every message they receive. Switching back
    online flushes the stored messages to the sink in arrival order before
    any later message is delivered in real time.
    """

    def __init__(self, identity: str, online: bool = False, *, sink: "NotificationSink") -> None:
        if not identity:
            raise ValueError("Subscriber identity must be a non-empty string")
        self.identity = identity
        self._sink = sink
        self._online = bool(online)
        self._pending: List[str] = []
        # Re-entrant: sinks may read the subscriber while being called.
        self._lock = threading.RLock()

    # State ---------------------------------------------------------------
    def is_online(self) -> bool:
        with self._lock:
            return self._online

    @property
    def online(self) -> bool:
        return self.is_online()

    @property
    def pending(self) -> List[str]:
        with self._lock:
            return list(self._pending)

    def set_online(self, status: bool) -> None:
        target = bool(status)
        with self._lock:
            changed = target != self._online
            self._online = target
            self._notify_status(target)
            if changed and target:
                self._flush_stored_messages()
        if changed:
            logger.info({"evt": "status_changed", "id": self.identity, "online": target})

    def toggle(self) -> bool:
        """Flip the online state atomically and return the new state."""
        with self._lock:
            target = not self._online
            self.set_online(target)
        return target

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "id": self.identity,
                "online": self._online,
                "status": status_label(self._online),
                "pending": list(self._pending),
            }

    # Delivery ------------------------------------------------------------
    def receive(self, message: str) -> None:
        with self._lock:
            if not self._online:
                self._pending.append(message)
                logger.info(
                    {"evt": "notification_stored", "id": self.identity, "pending": len(self._pending)}
                )
                return
            try:
                self._sink.on_delivered(self.identity, REALTIME_PREFIX + message)
            except Exception as exc:
                raise DeliveryError(self.identity, message, str(exc)) from exc

    def _flush_stored_messages(self) -> None:
        stored, self._pending = self._pending, []
        for message in stored:
            try:
                self._sink.on_delivered(self.identity, STORED_PREFIX + message)
            except Exception as exc:
                logger.error(
                    {"evt": "flush_delivery_failed", "id": self.identity, "error": str(exc)}
                )
        if stored:
            logger.info({"evt": "stored_flushed", "id": self.identity, "count": len(stored)})

    def _notify_status(self, online: bool) -> None:
        try:
            self._sink.on_status_changed(self.identity, online)
        except Exception as exc:
            logger.warning({"evt": "status_sink_failed", "id": self.identity, "error": str(exc)})

    def __repr__(self) -> str:
        with self._lock:
            state = "online" if self._online else "offline"
            pending = len(self._pending)
        return f"{type(self).__name__}({self.identity!r}, {state}, pending={pending})"
