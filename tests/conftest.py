import threading

import pytest

from notifier.dispatcher import Dispatcher
from notifier.feed import NotificationFeed


class RecordingSink:
    """Collects everything the core hands to the shell."""

    def __init__(self):
        self.delivered = []
        self.statuses = []
        self._lock = threading.Lock()

    def on_delivered(self, subscriber_id, rendered_text):
        with self._lock:
            self.delivered.append((subscriber_id, rendered_text))

    def on_status_changed(self, subscriber_id, online):
        with self._lock:
            self.statuses.append((subscriber_id, online))

    def texts(self, subscriber_id):
        return [text for sid, text in self.delivered if sid == subscriber_id]


class FailingSink(RecordingSink):
    def on_delivered(self, subscriber_id, rendered_text):
        raise RuntimeError("panel closed")


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def failing_sink():
    return FailingSink()


@pytest.fixture
def feed():
    return NotificationFeed()


@pytest.fixture
def dispatcher(feed):
    return Dispatcher(feed=feed)
