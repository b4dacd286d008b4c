"""In-memory implementation of RequestStore."""

from collections.abc import Sequence
from datetime import datetime

from fieldguard.errors import ValidationError
from fieldguard.locks import KeyedLocks
from fieldguard.workflow.enums import RequestStatus
from fieldguard.workflow.models import InformationRequest
from fieldguard.workflow.store import RequestStore


class InMemoryRequestStore(RequestStore):
    """In-memory implementation of RequestStore for testing and development.

    Uses simple dict storage with linear scan for queries.
    Not suitable for production use.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._requests: dict[str, InformationRequest] = {}
        self._locks = KeyedLocks()

    async def save(self, request: InformationRequest) -> str:
        """Insert a new request, returning its ID."""
        if request.id in self._requests:
            raise ValidationError(f"Request {request.id} already exists")
        self._requests[request.id] = request
        return request.id

    async def get(self, request_id: str) -> InformationRequest | None:
        """Get a request by ID."""
        return self._requests.get(request_id)

    async def transition(
        self,
        request_id: str,
        expected: RequestStatus,
        new_status: RequestStatus,
        *,
        responded_at: datetime | None = None,
        shared_fields: Sequence[str] | None = None,
    ) -> InformationRequest | None:
        """Compare-and-set the status of a request."""
        async with self._locks.hold(request_id):
            current = self._requests.get(request_id)
            if current is None or current.status is not expected:
                return None
            update: dict = {"status": new_status}
            if responded_at is not None:
                update["responded_at"] = responded_at
            if shared_fields is not None:
                update["shared_fields"] = list(shared_fields)
            updated = current.model_copy(update=update)
            self._requests[request_id] = updated
            return updated

    async def list_by_target(
        self,
        target_user_id: str,
        *,
        status: RequestStatus | None = None,
    ) -> list[InformationRequest]:
        """Requests addressed to an owner, newest first."""
        return self._query(
            lambda r: r.target_user_id == target_user_id
            and (status is None or r.status is status)
        )

    async def list_by_requester(
        self,
        requester_id: str,
        *,
        status: RequestStatus | None = None,
    ) -> list[InformationRequest]:
        """Requests sent by a requester, newest first."""
        return self._query(
            lambda r: r.requester_id == requester_id
            and (status is None or r.status is status)
        )

    async def find_pending(
        self, requester_id: str, target_user_id: str
    ) -> list[InformationRequest]:
        """Pending requests from requester to owner."""
        return self._query(
            lambda r: r.requester_id == requester_id
            and r.target_user_id == target_user_id
            and r.status is RequestStatus.PENDING
        )

    async def list_due(self, now: datetime) -> list[InformationRequest]:
        """Pending requests whose expires_at is at or before now."""
        return self._query(lambda r: r.is_due(now))

    async def delete_expired(self, before: datetime) -> int:
        """Remove expired requests whose expires_at is before a cutoff."""
        doomed = [
            request_id
            for request_id, request in self._requests.items()
            if request.status is RequestStatus.EXPIRED and request.expires_at < before
        ]
        for request_id in doomed:
            del self._requests[request_id]
        return len(doomed)

    def _query(self, predicate) -> list[InformationRequest]:
        results = [r for r in self._requests.values() if predicate(r)]
        results.sort(key=lambda r: r.requested_at, reverse=True)
        return results
