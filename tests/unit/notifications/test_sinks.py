"""Tests for notification sinks."""

from datetime import UTC, datetime

import pytest

from fieldguard.notifications.models import NotificationType
from fieldguard.notifications.sink import InboxNotificationSink, NullSink, RecordingSink
from fieldguard.notifications.stores.inmemory import InMemoryNotificationStore
from fieldguard.workflow.engine import RequestWorkflow
from fieldguard.workflow.enums import RequestStatus
from fieldguard.workflow.models import RequestTransitionEvent

OCCURRED_AT = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


def make_event(status: RequestStatus, shared_fields=None) -> RequestTransitionEvent:
    return RequestTransitionEvent(
        request_id="req-1",
        requester_id="viewer",
        owner_id="owner",
        new_status=status,
        shared_fields=shared_fields or [],
        occurred_at=OCCURRED_AT,
    )


@pytest.fixture
def inbox() -> InMemoryNotificationStore:
    return InMemoryNotificationStore()


class TestSimpleSinks:
    @pytest.mark.asyncio
    async def test_null_sink(self):
        assert await NullSink().emit(make_event(RequestStatus.PENDING)) is None

    @pytest.mark.asyncio
    async def test_recording_sink_keeps_order(self):
        sink = RecordingSink()
        await sink.emit(make_event(RequestStatus.PENDING))
        await sink.emit(make_event(RequestStatus.DENIED))
        assert sink.statuses() == [RequestStatus.PENDING, RequestStatus.DENIED]


class TestInboxSink:
    """Tests for mapping transitions to inbox notifications."""

    @pytest.mark.asyncio
    async def test_new_request_notifies_owner(self, inbox):
        await InboxNotificationSink(inbox).emit(make_event(RequestStatus.PENDING))

        [notification] = await inbox.list_for("owner")
        assert notification.type is NotificationType.INFO_REQUEST
        assert notification.created_at == OCCURRED_AT
        assert notification.data == {
            "requestId": "req-1",
            "requesterId": "viewer",
            "ownerId": "owner",
            "status": "pending",
        }
        assert await inbox.list_for("viewer") == []

    @pytest.mark.asyncio
    async def test_approval_notifies_requester(self, inbox):
        await InboxNotificationSink(inbox).emit(
            make_event(RequestStatus.APPROVED, ["phone"])
        )

        [notification] = await inbox.list_for("viewer")
        assert notification.type is NotificationType.INFO_REQUEST_RESPONSE
        assert "approved" in notification.message
        assert notification.data["sharedFields"] == ["phone"]

    @pytest.mark.asyncio
    async def test_denial_notifies_requester(self, inbox):
        await InboxNotificationSink(inbox).emit(make_event(RequestStatus.DENIED))

        [notification] = await inbox.list_for("viewer")
        assert "denied" in notification.message
        assert notification.data["sharedFields"] == []

    @pytest.mark.asyncio
    async def test_expiry_notifies_requester(self, inbox):
        await InboxNotificationSink(inbox).emit(make_event(RequestStatus.EXPIRED))

        [notification] = await inbox.list_for("viewer")
        assert notification.type is NotificationType.INFO_REQUEST_EXPIRED

    @pytest.mark.asyncio
    async def test_wired_into_workflow(self, inbox, request_store, grant_store, clock):
        workflow = RequestWorkflow(
            request_store, grant_store, InboxNotificationSink(inbox), clock=clock
        )
        request = await workflow.create("viewer", "owner", ["phone"], "Booking")
        await workflow.respond(request.id, "owner", approved=True)

        assert await inbox.unread_count("owner") == 1
        assert await inbox.unread_count("viewer") == 1
        [answer] = await inbox.list_for("viewer")
        assert answer.data["requestId"] == request.id
