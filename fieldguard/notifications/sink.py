"""Sinks receiving workflow transition events.

The workflow calls emit() after every successful transition. A sink
that raises does not undo the transition; the workflow logs the failure
and carries on.
"""

from abc import ABC, abstractmethod

from fieldguard.notifications.models import NotificationType, PrivacyNotification
from fieldguard.notifications.store import NotificationStore
from fieldguard.workflow.enums import RequestStatus
from fieldguard.workflow.models import RequestTransitionEvent


class NotificationSink(ABC):
    """Receiver of request transition events."""

    @abstractmethod
    async def emit(self, event: RequestTransitionEvent) -> None:
        """Deliver one event."""
        pass


class NullSink(NotificationSink):
    """Sink that drops every event."""

    async def emit(self, event: RequestTransitionEvent) -> None:
        return None


class RecordingSink(NotificationSink):
    """Sink that keeps events in memory, in emission order."""

    def __init__(self) -> None:
        self.events: list[RequestTransitionEvent] = []

    async def emit(self, event: RequestTransitionEvent) -> None:
        self.events.append(event)

    def statuses(self) -> list[RequestStatus]:
        return [event.new_status for event in self.events]


class InboxNotificationSink(NotificationSink):
    """Turns transition events into inbox notifications.

    New requests notify the owner; answers and expiries notify the
    requester.
    """

    def __init__(self, store: NotificationStore) -> None:
        self._store = store

    async def emit(self, event: RequestTransitionEvent) -> None:
        await self._store.add(self._to_notification(event))

    def _to_notification(self, event: RequestTransitionEvent) -> PrivacyNotification:
        data = {
            "requestId": event.request_id,
            "requesterId": event.requester_id,
            "ownerId": event.owner_id,
            "status": event.new_status.value,
        }
        match event.new_status:
            case RequestStatus.PENDING:
                return PrivacyNotification(
                    user_id=event.owner_id,
                    type=NotificationType.INFO_REQUEST,
                    message="You have a new information request",
                    data=data,
                    created_at=event.occurred_at,
                )
            case RequestStatus.APPROVED:
                return PrivacyNotification(
                    user_id=event.requester_id,
                    type=NotificationType.INFO_REQUEST_RESPONSE,
                    message="Your information request has been approved",
                    data={**data, "sharedFields": list(event.shared_fields)},
                    created_at=event.occurred_at,
                )
            case RequestStatus.DENIED:
                return PrivacyNotification(
                    user_id=event.requester_id,
                    type=NotificationType.INFO_REQUEST_RESPONSE,
                    message="Your information request has been denied",
                    data={**data, "sharedFields": []},
                    created_at=event.occurred_at,
                )
            case RequestStatus.EXPIRED:
                return PrivacyNotification(
                    user_id=event.requester_id,
                    type=NotificationType.INFO_REQUEST_EXPIRED,
                    message="Your information request expired without a response",
                    data=data,
                    created_at=event.occurred_at,
                )
        raise AssertionError(f"Unhandled request status: {event.new_status}")
