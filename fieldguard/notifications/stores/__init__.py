"""Notification stores."""

from fieldguard.notifications.store import NotificationStore
from fieldguard.notifications.stores.inmemory import InMemoryNotificationStore

__all__ = [
    "NotificationStore",
    "InMemoryNotificationStore",
]
