"""Subscriber implementations that receive dispatcher broadcasts."""

from .admin import Admin
from .base import BaseSubscriber, Subscriber, status_label

__all__ = ["Admin", "BaseSubscriber", "Subscriber", "status_label"]
