"""Per-owner sharing settings for PRIVATE field groups."""

from fieldguard.sharing.models import (
    TOGGLE_NAMES,
    SharingSettings,
    apply_update,
    default_settings,
)
from fieldguard.sharing.store import SharingSettingsStore
from fieldguard.sharing.stores.inmemory import InMemorySharingSettingsStore

__all__ = [
    "SharingSettings",
    "SharingSettingsStore",
    "InMemorySharingSettingsStore",
    "TOGGLE_NAMES",
    "apply_update",
    "default_settings",
]
