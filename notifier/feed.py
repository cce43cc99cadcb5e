"""Live feed of notifier activity for shell listeners (SSE clients)."""

from __future__ import annotations

import json
import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List

logger = logging.getLogger("notifier.feed")

DELIVERED = "delivered"
STATUS_CHANGED = "status_changed"
BROADCAST = "broadcast"


@dataclass(frozen=True)
class FeedEvent:
    kind: str
    payload: Dict[str, Any]
    ts: float = field(default_factory=time.time)

    def to_sse(self) -> str:
        return f"event: {self.kind}\ndata: {json.dumps(self.payload)}\n\n"


class NotificationFeed:
    """Fans deliveries, status flips and broadcast summaries out to listeners.

    Every listener owns a queue bounded by ``maxsize`` (0 means unbounded).
    A listener whose queue is full misses the event; publishers never wait.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._maxsize = max(0, int(maxsize))
        self._listeners: List[queue.Queue] = []
        self._lock = threading.Lock()
        self._dropped = 0

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    @property
    def dropped(self) -> int:
        with self._lock:
            return self._dropped

    def subscribe(self) -> queue.Queue:
        listener: queue.Queue = queue.Queue(maxsize=self._maxsize)
        with self._lock:
            self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: queue.Queue) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def publish(self, event: FeedEvent) -> None:
        with self._lock:
            listeners = list(self._listeners)
        missed = 0
        for listener in listeners:
            try:
                listener.put_nowait(event)
            except queue.Full:
                missed += 1
        if missed:
            with self._lock:
                self._dropped += missed
            logger.debug({"evt": "feed_event_dropped", "kind": event.kind, "listeners": missed})

    # Typed helpers ---------------------------------------------------------
    def delivered(self, subscriber_id: str, rendered_text: str) -> None:
        self.publish(FeedEvent(DELIVERED, {"id": subscriber_id, "text": rendered_text}))

    def status_changed(self, subscriber_id: str, online: bool) -> None:
        self.publish(FeedEvent(STATUS_CHANGED, {"id": subscriber_id, "online": online}))

    def broadcast(self, summary: Dict[str, Any]) -> None:
        self.publish(FeedEvent(BROADCAST, summary))

    def stream(self, initial: Callable[[], Iterable[FeedEvent]]) -> Iterator[str]:
        """Yield SSE frames: the events from ``initial()`` first, then live ones.

        ``initial`` runs after the listener is registered, so an event
        published while the snapshot is taken is never lost. The listener
        is removed on every exit path.
        """
        listener = self.subscribe()
        try:
            for event in initial():
                yield event.to_sse()
            while True:
                yield listener.get().to_sse()
        finally:
            self.unsubscribe(listener)
