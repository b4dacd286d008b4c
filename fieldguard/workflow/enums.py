"""Enums for the information request workflow."""

from enum import Enum


class RequestStatus(str, Enum):
    """Lifecycle of an information request.

    pending -> approved | denied | expired. Every non-pending status is
    terminal: no transition leaves it.
    """

    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not RequestStatus.PENDING
