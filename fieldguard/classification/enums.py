"""Enums for field classification."""

from enum import Enum


class ClassificationLevel(str, Enum):
    """How strongly a profile field is protected.

    PUBLIC fields are always visible, PRIVATE fields are owner-controlled
    through sharing settings or grants, SENSITIVE fields need an explicit
    per-viewer grant.
    """

    PUBLIC = "public"
    PRIVATE = "private"
    SENSITIVE = "sensitive"


class UserRole(str, Enum):
    """Marketplace role of a profile owner."""

    CAREGIVER = "caregiver"
    PARENT = "parent"


class GrantScope(str, Enum):
    """Wildcard grant entries covering a whole classification level."""

    ALL_PRIVATE = "all_private"
    ALL_SENSITIVE = "all_sensitive"
