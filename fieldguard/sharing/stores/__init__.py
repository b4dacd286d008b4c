"""Sharing settings stores."""

from fieldguard.sharing.store import SharingSettingsStore
from fieldguard.sharing.stores.inmemory import InMemorySharingSettingsStore

__all__ = [
    "SharingSettingsStore",
    "InMemorySharingSettingsStore",
]
