"""GrantStore abstract interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import timedelta

from fieldguard.classification.enums import ClassificationLevel
from fieldguard.grants.models import Grant, GrantSet


class GrantStore(ABC):
    """Abstract interface for per-viewer field grants.

    Keyed by (owner_id, viewer_id, field) with upsert semantics. Reads
    ignore lapsed grants. Unknown owners and viewers are not errors:
    has() returns False and list_for() returns an empty list.
    Implementations raise DependencyUnavailableError on backend failure.
    """

    @abstractmethod
    async def grant(
        self,
        owner_id: str,
        viewer_id: str,
        fields: Sequence[str],
        expires_in: timedelta | float | None = None,
        *,
        source_request_id: str | None = None,
    ) -> GrantSet:
        """Upsert grants for fields, returning the grants written."""
        pass

    @abstractmethod
    async def revoke(
        self,
        owner_id: str,
        viewer_id: str,
        fields: Sequence[str] | None = None,
    ) -> None:
        """Remove grants for fields, or every grant to viewer when None."""
        pass

    @abstractmethod
    async def restore(
        self,
        owner_id: str,
        viewer_id: str,
        fields: Sequence[str],
        previous: Sequence[Grant],
    ) -> None:
        """Put fields back to previous, dropping those with no previous grant."""
        pass

    @abstractmethod
    async def has(
        self,
        owner_id: str,
        viewer_id: str,
        field: str,
        level: ClassificationLevel | None = None,
    ) -> bool:
        """Check for an active direct grant or covering wildcard.

        level is the field's classification for the owner's role. When
        omitted, wildcards are matched against the field's levels under
        every role.
        """
        pass

    @abstractmethod
    async def list_for(self, owner_id: str, viewer_id: str) -> list[str]:
        """List the active grant entries of viewer over owner."""
        pass

    @abstractmethod
    async def get_grants(self, owner_id: str, viewer_id: str) -> list[Grant]:
        """Active grants of viewer over owner, with expiry details."""
        pass

    @abstractmethod
    async def purge_expired(self) -> int:
        """Physically remove lapsed grants, returning how many."""
        pass
