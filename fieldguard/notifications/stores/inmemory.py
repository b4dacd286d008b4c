"""In-memory implementation of NotificationStore."""

from datetime import datetime

from fieldguard.clock import Clock, utc_now
from fieldguard.errors import NotFoundError
from fieldguard.notifications.models import PrivacyNotification
from fieldguard.notifications.store import NotificationStore


class InMemoryNotificationStore(NotificationStore):
    """In-memory implementation of NotificationStore for testing and development."""

    def __init__(self, clock: Clock = utc_now) -> None:
        """Initialize empty storage."""
        self._notifications: dict[str, PrivacyNotification] = {}
        self._clock = clock

    async def add(self, notification: PrivacyNotification) -> str:
        """Store a notification, returning its ID."""
        self._notifications[notification.id] = notification
        return notification.id

    async def list_for(
        self,
        user_id: str,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> list[PrivacyNotification]:
        """Notifications for a user, newest first."""
        results = [n for n in self._notifications.values() if n.user_id == user_id]
        results.sort(key=lambda n: n.created_at, reverse=True)
        return results[offset:offset + limit]

    async def unread_count(self, user_id: str) -> int:
        """Number of unread notifications for a user."""
        return sum(
            1 for n in self._notifications.values()
            if n.user_id == user_id and not n.read
        )

    async def mark_read(
        self, notification_id: str, user_id: str
    ) -> PrivacyNotification:
        """Mark one of the user's notifications read."""
        notification = self._notifications.get(notification_id)
        if notification is None or notification.user_id != user_id:
            raise NotFoundError(f"Notification {notification_id} not found")
        if notification.read:
            return notification
        updated = notification.model_copy(update={"read": True, "read_at": self._clock()})
        self._notifications[notification_id] = updated
        return updated

    async def purge_older_than(self, cutoff: datetime) -> int:
        """Remove notifications created before cutoff."""
        doomed = [nid for nid, n in self._notifications.items() if n.created_at < cutoff]
        for nid in doomed:
            del self._notifications[nid]
        return len(doomed)
