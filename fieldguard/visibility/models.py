"""Visibility resolver models."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from fieldguard.classification.enums import ClassificationLevel


class Placeholder(str, Enum):
    """Masked values returned in place of hidden fields."""

    PRIVATE = "[Private - Request Access]"
    SENSITIVE = "[Sensitive - Requires Explicit Permission]"

    @classmethod
    def for_level(cls, level: ClassificationLevel) -> "Placeholder":
        """Placeholder for a hidden field of the given level."""
        if level is ClassificationLevel.PRIVATE:
            return cls.PRIVATE
        return cls.SENSITIVE


DecisionReason = Literal[
    "self", "public", "grant", "settings", "no_permission", "unavailable"
]


class FieldDecision(BaseModel):
    """Why one field is visible or masked for a viewer."""

    model_config = ConfigDict(frozen=True)

    field: str
    level: ClassificationLevel
    visible: bool
    reason: DecisionReason

    @property
    def placeholder(self) -> Placeholder | None:
        if self.visible:
            return None
        return Placeholder.for_level(self.level)
