"""Static, role-aware field classification.

Maps each profile field of a role to its ClassificationLevel. The maps
are fixed at construction; lookups never perform I/O and never raise.
Anything the registry does not know about is treated as SENSITIVE.
"""

from collections.abc import Mapping
from types import MappingProxyType

from fieldguard.classification.enums import ClassificationLevel, UserRole

PUBLIC = ClassificationLevel.PUBLIC
PRIVATE = ClassificationLevel.PRIVATE
SENSITIVE = ClassificationLevel.SENSITIVE

CAREGIVER_FIELDS: dict[str, ClassificationLevel] = {
    "name": PUBLIC,
    "email": PUBLIC,
    "bio": PUBLIC,
    "experience": PUBLIC,
    "skills": PUBLIC,
    "certifications": PUBLIC,
    "hourlyRate": PUBLIC,
    "phone": PRIVATE,
    "address": PRIVATE,
    "profileImage": PRIVATE,
    "portfolio": PRIVATE,
    "availability": PRIVATE,
    "languages": PRIVATE,
    "emergencyContacts": SENSITIVE,
    "documents": SENSITIVE,
    "backgroundCheck": SENSITIVE,
    "ageCareRanges": SENSITIVE,
}

PARENT_FIELDS: dict[str, ClassificationLevel] = {
    "name": PUBLIC,
    "email": PUBLIC,
    "location": PUBLIC,
    "profileImage": PUBLIC,
    "phone": PRIVATE,
    "address": PRIVATE,
    "emergencyContact": SENSITIVE,
    "childMedicalInfo": SENSITIVE,
    "childAllergies": SENSITIVE,
    "childBehaviorNotes": SENSITIVE,
    "financialInfo": SENSITIVE,
}

# Sharing-settings toggle guarding each field group
SETTINGS_TOGGLES: dict[str, str] = {
    "phone": "share_phone",
    "address": "share_address",
    "emergencyContact": "share_emergency_contact",
    "emergencyContacts": "share_emergency_contact",
    "childMedicalInfo": "share_child_medical_info",
    "childAllergies": "share_child_allergies",
    "childBehaviorNotes": "share_child_behavior_notes",
    "financialInfo": "share_financial_info",
}


class ClassificationRegistry:
    """Immutable role -> field -> level lookup.

    Example:
        >>> registry = ClassificationRegistry()
        >>> registry.level_of(UserRole.PARENT, "phone")
        <ClassificationLevel.PRIVATE: 'private'>
        >>> registry.level_of("parent", "shoeSize")
        <ClassificationLevel.SENSITIVE: 'sensitive'>
    """

    def __init__(
        self,
        fields_by_role: Mapping[UserRole, Mapping[str, ClassificationLevel]] | None = None,
        toggles: Mapping[str, str] | None = None,
    ) -> None:
        if fields_by_role is None:
            fields_by_role = {
                UserRole.CAREGIVER: CAREGIVER_FIELDS,
                UserRole.PARENT: PARENT_FIELDS,
            }
        self._fields = MappingProxyType(
            {
                UserRole(role): MappingProxyType(dict(fields))
                for role, fields in fields_by_role.items()
            }
        )
        self._toggles = MappingProxyType(dict(SETTINGS_TOGGLES if toggles is None else toggles))

    def level_of(self, role: UserRole | str, field: str) -> ClassificationLevel:
        """Return the level of field for role, SENSITIVE when unknown."""
        fields = self._fields_for(role)
        return fields.get(field, SENSITIVE)

    def fields_at(
        self, role: UserRole | str, level: ClassificationLevel
    ) -> list[str]:
        """List the known fields of role classified at level."""
        return [name for name, lvl in self._fields_for(role).items() if lvl is level]

    def levels_of(self, field: str) -> frozenset[ClassificationLevel]:
        """Levels field has under any role; SENSITIVE when no role knows it."""
        levels = frozenset(
            fields[field] for fields in self._fields.values() if field in fields
        )
        return levels or frozenset({SENSITIVE})

    def settings_toggle_for(self, field: str) -> str | None:
        """Name of the sharing toggle for field's group, if it has one."""
        return self._toggles.get(field)

    def _fields_for(self, role: UserRole | str) -> Mapping[str, ClassificationLevel]:
        try:
            key = UserRole(role)
        except (TypeError, ValueError):
            return MappingProxyType({})
        return self._fields.get(key, MappingProxyType({}))


default_registry = ClassificationRegistry()
