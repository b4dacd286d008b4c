"""Transition events, sinks, and per-user privacy notification inboxes."""

from fieldguard.notifications.models import NotificationType, PrivacyNotification
from fieldguard.notifications.sink import (
    InboxNotificationSink,
    NotificationSink,
    NullSink,
    RecordingSink,
)
from fieldguard.notifications.store import NotificationStore
from fieldguard.notifications.stores.inmemory import InMemoryNotificationStore

__all__ = [
    "NotificationType",
    "PrivacyNotification",
    "NotificationSink",
    "NullSink",
    "RecordingSink",
    "InboxNotificationSink",
    "NotificationStore",
    "InMemoryNotificationStore",
]
