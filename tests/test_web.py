import pytest

from main import build_dispatcher
from notifier.config import NotifierConfig
from notifier.feed import NotificationFeed
from notifier.shell import ControlPanel
from web.app import create_app


@pytest.fixture
def client(feed, sink):
    dispatcher = build_dispatcher(NotifierConfig(), feed, sink=sink)
    control = ControlPanel(dispatcher)
    app = create_app(dispatcher, control, feed)
    app.testing = True
    return app.test_client()


def test_list_subscribers(client):
    data = client.get("/api/subscribers").get_json()
    assert [s["id"] for s in data] == ["Hamid", "Mudassir"]
    assert data[0]["status"] == "Status: Online"
    assert data[1]["pending"] == []


def test_trigger_and_toggle(client, sink):
    resp = client.post("/api/events", json={"description": "X ready"})
    assert resp.status_code == 200
    assert resp.get_json()["attempted"] == 2
    data = client.get("/api/subscribers").get_json()
    assert data[1]["pending"] == ["New event: X ready"]

    resp = client.post("/api/subscribers/Mudassir/toggle")
    assert resp.get_json() == {"id": "Mudassir", "online": True}
    assert sink.texts("Mudassir") == ["Delivered from storage: New event: X ready"]


def test_trigger_requires_description(client):
    assert client.post("/api/events", json={}).status_code == 400
    assert client.post("/api/events", json={"description": "  "}).status_code == 400


def test_toggle_unknown_is_404(client):
    assert client.post("/api/subscribers/nobody/toggle").status_code == 404


def test_presets(client, sink):
    assert client.get("/api/presets").get_json() == list(NotifierConfig().presets)
    assert client.post("/api/presets/1").status_code == 200
    assert sink.texts("Hamid") == ["Real-time: New event: Monthly report is ready"]
    assert client.post("/api/presets/9").status_code == 404


def test_stats(client):
    client.post("/api/events", json={"description": "x"})
    assert client.get("/api/stats").get_json()["broadcasts"] == 1


def test_stream_with_more_admins_than_queue_bound():
    feed = NotificationFeed(maxsize=1)
    config = NotifierConfig(admins=(("Hamid", True), ("Mudassir", False), ("Aisha", False)))
    dispatcher = build_dispatcher(config, feed)
    control = ControlPanel(dispatcher)
    app = create_app(dispatcher, control, feed)

    resp = app.test_client().get("/api/stream", buffered=False)
    assert resp.mimetype == "text/event-stream"
    chunks = iter(resp.response)
    statuses = [next(chunks) for _ in range(3)]
    assert statuses[0] == b'event: status_changed\ndata: {"id": "Hamid", "online": true}\n\n'
    assert statuses[2] == b'event: status_changed\ndata: {"id": "Aisha", "online": false}\n\n'
    assert feed.listener_count == 1

    control.trigger("X ready")
    frame = next(chunks)
    assert frame == b'event: delivered\ndata: {"id": "Hamid", "text": "Real-time: New event: X ready"}\n\n'

    resp.close()
    assert feed.listener_count == 0
