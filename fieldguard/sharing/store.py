"""SharingSettingsStore abstract interface."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from fieldguard.sharing.models import SharingSettings


class SharingSettingsStore(ABC):
    """Abstract interface for per-owner sharing settings.

    Settings are created lazily: get() on an owner without a record
    returns the documented defaults. Records are updated, never deleted.
    Implementations raise DependencyUnavailableError on backend failure.
    """

    @abstractmethod
    async def get(self, owner_id: str) -> SharingSettings:
        """Get settings for owner, or defaults."""
        pass

    @abstractmethod
    async def update(
        self, owner_id: str, partial: Mapping[str, Any]
    ) -> SharingSettings:
        """Merge partial into the owner's settings and persist.

        The caller has already verified that owner_id is the
        authenticated user.
        """
        pass
