"""In-memory implementation of SharingSettingsStore."""

from collections.abc import Mapping
from typing import Any

from fieldguard.clock import Clock, utc_now
from fieldguard.locks import KeyedLocks
from fieldguard.observability.logging import get_logger
from fieldguard.sharing.models import SharingSettings, apply_update, default_settings
from fieldguard.sharing.store import SharingSettingsStore

logger = get_logger(__name__)


class InMemorySharingSettingsStore(SharingSettingsStore):
    """In-memory implementation of SharingSettingsStore for testing and development."""

    def __init__(self, clock: Clock = utc_now) -> None:
        """Initialize empty storage."""
        self._settings: dict[str, SharingSettings] = {}
        self._locks = KeyedLocks()
        self._clock = clock

    async def get(self, owner_id: str) -> SharingSettings:
        """Get settings for owner, or defaults."""
        stored = self._settings.get(owner_id)
        if stored is None:
            return default_settings(owner_id)
        return stored

    async def update(
        self, owner_id: str, partial: Mapping[str, Any]
    ) -> SharingSettings:
        """Merge partial into the owner's settings and persist."""
        async with self._locks.hold(owner_id):
            current = await self.get(owner_id)
            updated = apply_update(current, partial, self._clock())
            self._settings[owner_id] = updated

        logger.info(
            "sharing_settings_updated",
            owner_id=owner_id,
            changed=sorted(partial),
        )
        return updated
