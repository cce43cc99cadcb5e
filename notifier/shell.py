"""Contract between the notification core and a presentation shell.

The shell renders what the core hands to a `NotificationSink` and drives
the core through `ControlPanel` command handlers. The shell owns its own
event loop; every call here is synchronous.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Protocol

from .dispatcher import BroadcastResult, Dispatcher
from .feed import NotificationFeed

logger = logging.getLogger("notifier.shell")

DEFAULT_PRESETS = ("Feedback submitted by User", "Monthly report is ready")


class NotificationSink(Protocol):
    """Receives rendered notifications and status changes from subscribers."""

    def on_delivered(self, subscriber_id: str, rendered_text: str) -> None: ...

    def on_status_changed(self, subscriber_id: str, online: bool) -> None: ...


class FeedSink:
    """Sink that relays core output to shell listeners through a `NotificationFeed`."""

    def __init__(self, feed: NotificationFeed) -> None:
        self.feed = feed

    def on_delivered(self, subscriber_id: str, rendered_text: str) -> None:
        self.feed.delivered(subscriber_id, rendered_text)

    def on_status_changed(self, subscriber_id: str, online: bool) -> None:
        self.feed.status_changed(subscriber_id, online)


class ControlPanel:
    """Command handlers invoked by the shell's toggle and trigger controls."""

    def __init__(self, dispatcher: Dispatcher, presets: Iterable[str] = DEFAULT_PRESETS) -> None:
        self.dispatcher = dispatcher
        self.presets: List[str] = list(presets)

    def toggle(self, subscriber_id: str) -> bool:
        """Flip a subscriber's online state and return the new state."""
        return self.dispatcher.get(subscriber_id).toggle()

    def trigger(self, description: str) -> BroadcastResult:
        logger.info({"evt": "event_triggered", "description": description})
        return self.dispatcher.raise_event(description)

    def trigger_preset(self, index: int) -> BroadcastResult:
        if not 0 <= index < len(self.presets):
            raise IndexError(f"No preset event at index {index}")
        return self.trigger(self.presets[index])
