#!/usr/bin/env python3
"""Project entry point. Wires the dispatcher, admins and the web shell."""

from __future__ import annotations

import logging
from typing import Optional

from notifier.config import NotifierConfig, load_config
from notifier.dispatcher import Dispatcher
from notifier.feed import NotificationFeed
from notifier.shell import ControlPanel, FeedSink, NotificationSink
from subscribers import Admin

logger = logging.getLogger("notifier")


def build_dispatcher(
    config: NotifierConfig,
    feed: NotificationFeed,
    *,
    sink: Optional[NotificationSink] = None,
) -> Dispatcher:
    """Create the dispatcher and register the configured admins."""
    dispatcher = Dispatcher(feed=feed)
    sink = sink or FeedSink(feed)
    for name, online in config.admins:
        dispatcher.register(Admin(name, online, sink=sink))
    return dispatcher


def build_app(config: NotifierConfig):
    from web.app import create_app

    feed = NotificationFeed(maxsize=config.stream_queue_size)
    dispatcher = build_dispatcher(config, feed)
    control = ControlPanel(dispatcher, config.presets)
    return create_app(dispatcher, control, feed)


def main() -> None:
    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s %(levelname)s %(message)s',
    )
    logger.info({"evt": "startup", "component": "notifier", "log_level": config.log_level})
    app = build_app(config)
    app.run(host=config.host, port=config.port, threaded=True)


if __name__ == "__main__":
    main()
