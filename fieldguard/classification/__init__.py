"""Field classification: which profile fields are public, private or sensitive."""

from fieldguard.classification.enums import ClassificationLevel, GrantScope, UserRole
from fieldguard.classification.registry import (
    CAREGIVER_FIELDS,
    PARENT_FIELDS,
    SETTINGS_TOGGLES,
    ClassificationRegistry,
    default_registry,
)

__all__ = [
    "ClassificationLevel",
    "GrantScope",
    "UserRole",
    "ClassificationRegistry",
    "CAREGIVER_FIELDS",
    "PARENT_FIELDS",
    "SETTINGS_TOGGLES",
    "default_registry",
]
