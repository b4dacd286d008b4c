"""Grant stores."""

from fieldguard.grants.store import GrantStore
from fieldguard.grants.stores.inmemory import InMemoryGrantStore

__all__ = [
    "GrantStore",
    "InMemoryGrantStore",
]
