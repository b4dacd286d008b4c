"""Per-viewer filtering of owner profiles."""

from fieldguard.visibility.models import FieldDecision, Placeholder
from fieldguard.visibility.resolver import VisibilityResolver

__all__ = ["FieldDecision", "Placeholder", "VisibilityResolver"]
