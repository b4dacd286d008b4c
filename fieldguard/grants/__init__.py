"""Per-viewer, per-field access grants with optional expiry."""

from fieldguard.grants.models import WILDCARD_LEVELS, Grant, GrantSet
from fieldguard.grants.store import GrantStore
from fieldguard.grants.stores.inmemory import InMemoryGrantStore

__all__ = [
    "Grant",
    "GrantSet",
    "GrantStore",
    "InMemoryGrantStore",
    "WILDCARD_LEVELS",
]
