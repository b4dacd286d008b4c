"""Information request workflow: pending -> approved | denied | expired.

The engine lives in fieldguard.workflow.engine and the periodic sweep
in fieldguard.workflow.sweeper; this package exports the models and
stores they share with the notification layer.
"""

from fieldguard.workflow.enums import RequestStatus
from fieldguard.workflow.models import (
    DEFAULT_REQUEST_TTL,
    REASON_MAX_LENGTH,
    InformationRequest,
    RequestTransitionEvent,
)
from fieldguard.workflow.store import RequestStore
from fieldguard.workflow.stores.inmemory import InMemoryRequestStore

__all__ = [
    "RequestStatus",
    "InformationRequest",
    "RequestTransitionEvent",
    "RequestStore",
    "InMemoryRequestStore",
    "DEFAULT_REQUEST_TTL",
    "REASON_MAX_LENGTH",
]
