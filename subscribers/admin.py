"""Administrator subscriber shown in its own panel by the shell."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import BaseSubscriber, status_label

if TYPE_CHECKING:
    from notifier.shell import NotificationSink


class Admin(BaseSubscriber):
    def __init__(self, name: str, online: bool = False, *, sink: "NotificationSink") -> None:
        super().__init__(name, online, sink=sink)

    @property
    def name(self) -> str:
        return self.identity

    @property
    def status_label(self) -> str:
        return status_label(self.is_online())
