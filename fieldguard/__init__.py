"""fieldguard: field-level privacy and consent engine.

Decides, per profile field and per viewer, whether the real value or a
placeholder is shown, and runs the information request workflow through
which viewers ask owners for access.
"""

from fieldguard.classification import ClassificationLevel, ClassificationRegistry, UserRole
from fieldguard.errors import (
    AlreadyRespondedError,
    AuthorizationError,
    DependencyUnavailableError,
    DuplicateRequestError,
    ErrorCode,
    FieldGuardError,
    NotFoundError,
    SelfRequestError,
    ValidationError,
)
from fieldguard.grants import Grant, GrantSet, GrantStore, InMemoryGrantStore
from fieldguard.sharing import InMemorySharingSettingsStore, SharingSettings, SharingSettingsStore
from fieldguard.visibility import Placeholder, VisibilityResolver
from fieldguard.workflow import (
    InformationRequest,
    InMemoryRequestStore,
    RequestStatus,
    RequestStore,
    RequestTransitionEvent,
)
from fieldguard.workflow.engine import RequestWorkflow
from fieldguard.workflow.sweeper import ExpirySweeper

__version__ = "0.1.0"

__all__ = [
    "ClassificationLevel",
    "ClassificationRegistry",
    "UserRole",
    "ErrorCode",
    "FieldGuardError",
    "ValidationError",
    "DuplicateRequestError",
    "NotFoundError",
    "AuthorizationError",
    "SelfRequestError",
    "AlreadyRespondedError",
    "DependencyUnavailableError",
    "Grant",
    "GrantSet",
    "GrantStore",
    "InMemoryGrantStore",
    "SharingSettings",
    "SharingSettingsStore",
    "InMemorySharingSettingsStore",
    "Placeholder",
    "VisibilityResolver",
    "InformationRequest",
    "RequestStatus",
    "RequestStore",
    "InMemoryRequestStore",
    "RequestTransitionEvent",
    "RequestWorkflow",
    "ExpirySweeper",
]
