"""Error hierarchy for the privacy engine.

All engine errors inherit from FieldGuardError, which carries an
error_code so callers (HTTP layers, UIs) can tell "not found" apart
from "not allowed" and "already answered" without string matching.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    """Input failed validation (empty fields, blank reason, bad subset)."""

    DUPLICATE_REQUEST = "DUPLICATE_REQUEST"
    """A pending request already exists for this requester and owner."""

    NOT_FOUND = "NOT_FOUND"
    """The referenced request does not exist or is not visible."""

    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    """The caller may not perform this operation."""

    SELF_REQUEST = "SELF_REQUEST"
    """A user asked for their own information."""

    ALREADY_RESPONDED = "ALREADY_RESPONDED"
    """The request is no longer pending."""

    DEPENDENCY_UNAVAILABLE = "DEPENDENCY_UNAVAILABLE"
    """A backing store could not be reached."""


class FieldGuardError(Exception):
    """Base exception for all engine errors."""

    error_code: ErrorCode = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(FieldGuardError):
    """Raised when operation input is invalid."""

    error_code = ErrorCode.VALIDATION_FAILED


class DuplicateRequestError(ValidationError):
    """Raised when a requester already has a pending request to the owner."""

    error_code = ErrorCode.DUPLICATE_REQUEST

    def __init__(self, message: str, existing_request_id: str | None = None) -> None:
        super().__init__(message)
        self.existing_request_id = existing_request_id


class NotFoundError(FieldGuardError):
    """Raised when a request id is unknown to the caller."""

    error_code = ErrorCode.NOT_FOUND


class AuthorizationError(FieldGuardError):
    """Raised when the caller is not allowed to act on the target."""

    error_code = ErrorCode.NOT_AUTHORIZED


class SelfRequestError(AuthorizationError):
    """Raised when a user requests information from themselves."""

    error_code = ErrorCode.SELF_REQUEST


class AlreadyRespondedError(FieldGuardError):
    """Raised when responding to a request that is no longer pending."""

    error_code = ErrorCode.ALREADY_RESPONDED

    def __init__(self, message: str, status: str | None = None) -> None:
        super().__init__(message)
        self.status = status


class DependencyUnavailableError(FieldGuardError):
    """Raised by stores when their backend cannot be reached."""

    error_code = ErrorCode.DEPENDENCY_UNAVAILABLE

    def __init__(self, message: str, dependency: str | None = None) -> None:
        super().__init__(message)
        self.dependency = dependency
