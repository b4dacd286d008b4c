"""NotificationStore abstract interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from fieldguard.notifications.models import PrivacyNotification


class NotificationStore(ABC):
    """Abstract interface for per-user privacy notification inboxes."""

    @abstractmethod
    async def add(self, notification: PrivacyNotification) -> str:
        """Store a notification, returning its ID."""
        pass

    @abstractmethod
    async def list_for(
        self,
        user_id: str,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> list[PrivacyNotification]:
        """Notifications for a user, newest first."""
        pass

    @abstractmethod
    async def unread_count(self, user_id: str) -> int:
        """Number of unread notifications for a user."""
        pass

    @abstractmethod
    async def mark_read(
        self, notification_id: str, user_id: str
    ) -> PrivacyNotification:
        """Mark one of the user's notifications read.

        Raises NotFoundError when the notification does not exist or
        belongs to someone else.
        """
        pass

    @abstractmethod
    async def purge_older_than(self, cutoff: datetime) -> int:
        """Remove notifications created before cutoff."""
        pass
