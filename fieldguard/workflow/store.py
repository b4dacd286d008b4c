"""RequestStore abstract interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime

from fieldguard.workflow.enums import RequestStatus
from fieldguard.workflow.models import InformationRequest


class RequestStore(ABC):
    """Abstract interface for information request storage.

    transition() is the only way a stored request changes status and
    must be a compare-and-set on the current status, so concurrent
    writers cannot both move a request out of pending.
    Implementations raise DependencyUnavailableError on backend failure.
    """

    @abstractmethod
    async def save(self, request: InformationRequest) -> str:
        """Insert a new request, returning its ID."""
        pass

    @abstractmethod
    async def get(self, request_id: str) -> InformationRequest | None:
        """Get a request by ID."""
        pass

    @abstractmethod
    async def transition(
        self,
        request_id: str,
        expected: RequestStatus,
        new_status: RequestStatus,
        *,
        responded_at: datetime | None = None,
        shared_fields: Sequence[str] | None = None,
    ) -> InformationRequest | None:
        """Move a request from expected to new_status.

        Returns the updated request, or None when the request is
        missing or its status is no longer expected.
        """
        pass

    @abstractmethod
    async def list_by_target(
        self,
        target_user_id: str,
        *,
        status: RequestStatus | None = None,
    ) -> list[InformationRequest]:
        """Requests addressed to an owner, newest first."""
        pass

    @abstractmethod
    async def list_by_requester(
        self,
        requester_id: str,
        *,
        status: RequestStatus | None = None,
    ) -> list[InformationRequest]:
        """Requests sent by a requester, newest first."""
        pass

    @abstractmethod
    async def find_pending(
        self, requester_id: str, target_user_id: str
    ) -> list[InformationRequest]:
        """Pending requests from requester to owner."""
        pass

    @abstractmethod
    async def list_due(self, now: datetime) -> list[InformationRequest]:
        """Pending requests whose expires_at is at or before now."""
        pass

    @abstractmethod
    async def delete_expired(self, before: datetime) -> int:
        """Remove expired requests whose expires_at is before a cutoff."""
        pass
