"""Sharing settings models.

One SharingSettings record exists per owner. Each share_* toggle opens a
PRIVATE field group to every viewer; toggles never unlock SENSITIVE
fields on their own.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from fieldguard.clock import utc_now
from fieldguard.errors import ValidationError


class SharingSettings(BaseModel):
    """Per-owner global sharing toggles, default-deny."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    owner_id: str = Field(..., description="Owner the settings belong to")
    share_phone: StrictBool = Field(default=False, description="Phone visible to all viewers")
    share_address: StrictBool = Field(default=False, description="Address visible to all viewers")
    share_emergency_contact: StrictBool = Field(default=False)
    share_child_medical_info: StrictBool = Field(default=False)
    share_child_allergies: StrictBool = Field(default=False)
    share_child_behavior_notes: StrictBool = Field(default=False)
    share_financial_info: StrictBool = Field(default=False)
    auto_approve_basic_info: StrictBool = Field(
        default=True, description="Stored preference; not interpreted by the workflow"
    )
    updated_at: datetime | None = Field(default=None, description="Last owner update")

    def toggle(self, name: str | None) -> bool:
        """Value of a share_* toggle, False for unknown or missing names."""
        if name is None or name not in TOGGLE_NAMES:
            return False
        return bool(getattr(self, name))


TOGGLE_NAMES: frozenset[str] = frozenset(
    name
    for name in SharingSettings.model_fields
    if name not in ("owner_id", "updated_at")
)

_ALIASES: dict[str, str] = {
    info.alias: name
    for name, info in SharingSettings.model_fields.items()
    if info.alias and name in TOGGLE_NAMES
}


def default_settings(owner_id: str) -> SharingSettings:
    """Settings used for an owner who never saved any."""
    return SharingSettings(owner_id=owner_id)


def apply_update(
    current: SharingSettings,
    partial: Mapping[str, Any],
    now: datetime | None = None,
) -> SharingSettings:
    """Merge a partial update into current settings.

    Keys may be snake_case (share_phone) or camelCase (sharePhone).
    Unknown keys and non-boolean values raise ValidationError.
    """
    changes: dict[str, Any] = {}
    for key, value in partial.items():
        name = _ALIASES.get(key, key)
        if name not in TOGGLE_NAMES:
            raise ValidationError(f"Unknown sharing setting: {key}")
        changes[name] = value

    data = current.model_dump()
    data.update(changes)
    data["updated_at"] = now or utc_now()
    try:
        return SharingSettings.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid sharing settings: {exc.error_count()} error(s)") from exc
