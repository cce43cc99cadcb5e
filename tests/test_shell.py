import threading

import pytest

from notifier.errors import UnknownSubscriberError
from notifier.shell import DEFAULT_PRESETS, ControlPanel
from subscribers import Admin


@pytest.fixture
def control(dispatcher, sink):
    dispatcher.register(Admin("Hamid", True, sink=sink))
    dispatcher.register(Admin("Mudassir", False, sink=sink))
    return ControlPanel(dispatcher)


def test_toggle_flips_state(control, dispatcher):
    assert control.toggle("Hamid") is False
    assert dispatcher.get("Hamid").is_online() is False
    assert control.toggle("Hamid") is True


def test_toggle_unknown_raises(control):
    with pytest.raises(UnknownSubscriberError):
        control.toggle("nobody")


def test_trigger_then_toggle_delivers_stored(control, sink):
    result = control.trigger("Monthly report is ready")
    assert result.attempted == 2
    assert sink.texts("Hamid") == ["Real-time: New event: Monthly report is ready"]
    control.toggle("Mudassir")
    assert sink.texts("Mudassir") == ["Delivered from storage: New event: Monthly report is ready"]


def test_presets(control, sink):
    assert control.presets == list(DEFAULT_PRESETS)
    control.trigger_preset(0)
    assert sink.texts("Hamid") == ["Real-time: New event: Feedback submitted by User"]
    with pytest.raises(IndexError):
        control.trigger_preset(5)


def test_concurrent_panel_toggles_alternate(control, dispatcher):
    results = []
    lock = threading.Lock()
    start = threading.Barrier(4)

    def press():
        start.wait()
        for _ in range(10):
            value = control.toggle("Mudassir")
            with lock:
                results.append(value)

    threads = [threading.Thread(target=press) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 20
    assert results.count(False) == 20
    assert dispatcher.get("Mudassir").is_online() is False
