#!/usr/bin/env python
"""Flask presentation shell: admin panels, control panel and a live feed."""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from notifier.dispatcher import Dispatcher
from notifier.errors import UnknownSubscriberError
from notifier.feed import STATUS_CHANGED, FeedEvent, NotificationFeed
from notifier.shell import ControlPanel

logger = logging.getLogger("notifier.web")


def create_app(dispatcher: Dispatcher, control: ControlPanel, feed: NotificationFeed) -> Flask:
    app = Flask(__name__)
    CORS(app, supports_credentials=True)

    @app.route('/api/subscribers')
    def list_subscribers():
        return jsonify([s.snapshot() for s in dispatcher.subscribers.values()])

    @app.route('/api/subscribers/<subscriber_id>/toggle', methods=['POST'])
    def toggle_subscriber(subscriber_id):
        try:
            online = control.toggle(subscriber_id)
        except UnknownSubscriberError as exc:
            return jsonify({"error": str(exc)}), 404
        return jsonify({"id": subscriber_id, "online": online})

    @app.route('/api/events', methods=['POST'])
    def trigger_event():
        payload = request.get_json(silent=True) or {}
        description = payload.get("description")
        if not isinstance(description, str) or not description.strip():
            return jsonify({"error": "Field 'description' is required"}), 400
        result = control.trigger(description.strip())
        return jsonify(result.as_dict())

    @app.route('/api/presets')
    def list_presets():
        return jsonify(list(control.presets))

    @app.route('/api/presets/<int:index>', methods=['POST'])
    def trigger_preset(index):
        try:
            result = control.trigger_preset(index)
        except IndexError as exc:
            return jsonify({"error": str(exc)}), 404
        return jsonify(result.as_dict())

    @app.route('/api/stats')
    def stats():
        return jsonify(dispatcher.stats())

    @app.route('/api/stream')
    def sse_events():
        """Server-sent events stream of deliveries and status changes."""
        def current_statuses():
            return [
                FeedEvent(STATUS_CHANGED, {"id": s.identity, "online": s.is_online()})
                for s in dispatcher.subscribers.values()
            ]

        return Response(feed.stream(current_statuses), mimetype='text/event-stream')

    logger.debug({"evt": "app_created", "subscribers": len(dispatcher)})
    return app
