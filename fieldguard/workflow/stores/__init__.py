"""Information request stores."""

from fieldguard.workflow.store import RequestStore
from fieldguard.workflow.stores.inmemory import InMemoryRequestStore

__all__ = [
    "RequestStore",
    "InMemoryRequestStore",
]
