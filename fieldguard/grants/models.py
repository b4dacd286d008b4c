"""Grant models.

A Grant lets one viewer see one field (or a whole level through a
wildcard) of one owner's profile, optionally until expires_at. Grants
past their expiry are treated as absent whether or not they have been
physically removed.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field

from fieldguard.classification.enums import ClassificationLevel, GrantScope
from fieldguard.clock import utc_now
from fieldguard.errors import ValidationError

WILDCARD_LEVELS: dict[str, ClassificationLevel] = {
    GrantScope.ALL_PRIVATE.value: ClassificationLevel.PRIVATE,
    GrantScope.ALL_SENSITIVE.value: ClassificationLevel.SENSITIVE,
}


class Grant(BaseModel):
    """Permission for viewer_id to see field of owner_id."""

    model_config = ConfigDict(frozen=True)

    owner_id: str = Field(..., description="Profile owner")
    viewer_id: str = Field(..., description="Viewer allowed to see the field")
    field: str = Field(..., description="Field name or all_private/all_sensitive")
    granted_at: datetime = Field(default_factory=utc_now, description="Grant time")
    expires_at: datetime | None = Field(
        default=None, description="Expiry, None until explicitly revoked"
    )
    source_request_id: str | None = Field(
        default=None, description="Information request that produced the grant"
    )

    @property
    def is_wildcard(self) -> bool:
        return self.field in WILDCARD_LEVELS

    def is_active(self, now: datetime) -> bool:
        """True while the grant has not lapsed."""
        return self.expires_at is None or self.expires_at > now

    def covers(self, field: str, level: ClassificationLevel | None = None) -> bool:
        """Whether this grant reveals field at the given level.

        A wildcard only covers fields of its own level, so without a
        level it covers nothing but its own name.
        """
        if self.field == field:
            return True
        return level is not None and WILDCARD_LEVELS.get(self.field) is level


class GrantSet(BaseModel):
    """Grants held by one viewer over one owner."""

    model_config = ConfigDict(frozen=True)

    owner_id: str
    viewer_id: str
    grants: list[Grant] = Field(default_factory=list)

    @property
    def fields(self) -> list[str]:
        return [grant.field for grant in self.grants]


def normalize_fields(fields: Iterable[str]) -> list[str]:
    """Strip, de-duplicate (keeping order) and validate field names."""
    if isinstance(fields, str):
        raise ValidationError("fields must be a list of field names, not a string")
    result: list[str] = []
    for field in fields:
        if not isinstance(field, str) or not field.strip():
            raise ValidationError("Field names must be non-empty strings")
        name = field.strip()
        if name not in result:
            result.append(name)
    return result


def validate_expiry(expires_in: timedelta | None) -> timedelta | None:
    """Reject non-positive expiry windows."""
    if expires_in is not None and expires_in <= timedelta(0):
        raise ValidationError("expires_in must be positive")
    return expires_in
