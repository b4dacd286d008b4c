"""Visibility resolution for one (owner, viewer) pair.

For every field of the owner's profile the resolver picks the real
value or a Placeholder:

- PUBLIC: always the real value.
- PRIVATE: real value when the viewer holds a grant for the field (or
  all_private), or when the owner's sharing toggle for the field's
  group is on. Otherwise Placeholder.PRIVATE.
- SENSITIVE: real value only with a grant for the field (or
  all_sensitive). Toggles are never consulted. Otherwise
  Placeholder.SENSITIVE.

The owner viewing their own profile gets everything. Nothing is cached
between calls. A store that raises DependencyUnavailableError masks the
fields whose decision depended on it; the resolver never falls back to
the real value.
"""

import time
from collections.abc import Mapping
from typing import Any

from fieldguard.classification.enums import ClassificationLevel, UserRole
from fieldguard.classification.registry import ClassificationRegistry, default_registry
from fieldguard.errors import DependencyUnavailableError
from fieldguard.grants.store import GrantStore
from fieldguard.observability.logging import get_logger
from fieldguard.observability.metrics import (
    DEPENDENCY_FAILURES,
    FIELD_DECISIONS,
    RESOLVE_LATENCY,
)
from fieldguard.sharing.models import SharingSettings
from fieldguard.sharing.store import SharingSettingsStore
from fieldguard.visibility.models import FieldDecision, Placeholder

logger = get_logger(__name__)


class VisibilityResolver:
    """Filters an owner's profile for one viewer."""

    def __init__(
        self,
        settings_store: SharingSettingsStore,
        grant_store: GrantStore,
        registry: ClassificationRegistry | None = None,
    ) -> None:
        self._settings = settings_store
        self._grants = grant_store
        self._registry = registry or default_registry

    async def resolve(
        self,
        owner_profile: Mapping[str, Any],
        owner_role: UserRole | str,
        owner_id: str,
        viewer_id: str,
    ) -> dict[str, Any]:
        """Return owner_profile as viewer_id may see it."""
        decisions = await self.explain(owner_profile, owner_role, owner_id, viewer_id)
        return {
            field: owner_profile[field] if decision.visible else decision.placeholder
            for field, decision in decisions.items()
        }

    async def explain(
        self,
        owner_profile: Mapping[str, Any],
        owner_role: UserRole | str,
        owner_id: str,
        viewer_id: str,
    ) -> dict[str, FieldDecision]:
        """Per-field decisions behind resolve(), without the values."""
        started = time.perf_counter()
        if viewer_id == owner_id:
            return {
                field: FieldDecision(
                    field=field,
                    level=self._registry.level_of(owner_role, field),
                    visible=True,
                    reason="self",
                )
                for field in owner_profile
            }

        lookup = _SettingsLookup(self._settings, owner_id)
        decisions: dict[str, FieldDecision] = {}
        for field in owner_profile:
            level = self._registry.level_of(owner_role, field)
            decision = await self._decide(field, level, owner_id, viewer_id, lookup)
            FIELD_DECISIONS.labels(
                level=level.value,
                outcome="visible" if decision.visible else "masked",
            ).inc()
            decisions[field] = decision

        RESOLVE_LATENCY.observe(time.perf_counter() - started)
        return decisions

    async def _decide(
        self,
        field: str,
        level: ClassificationLevel,
        owner_id: str,
        viewer_id: str,
        lookup: "_SettingsLookup",
    ) -> FieldDecision:
        match level:
            case ClassificationLevel.PUBLIC:
                return FieldDecision(field=field, level=level, visible=True, reason="public")
            case ClassificationLevel.PRIVATE:
                granted = await self._has_grant(field, level, owner_id, viewer_id)
                if granted:
                    return FieldDecision(field=field, level=level, visible=True, reason="grant")
                unavailable = granted is None
                toggle = self._registry.settings_toggle_for(field)
                if toggle is not None:
                    settings = await lookup.get()
                    if settings is None:
                        unavailable = True
                    elif settings.toggle(toggle):
                        return FieldDecision(
                            field=field, level=level, visible=True, reason="settings"
                        )
                return FieldDecision(
                    field=field,
                    level=level,
                    visible=False,
                    reason="unavailable" if unavailable else "no_permission",
                )
            case ClassificationLevel.SENSITIVE:
                granted = await self._has_grant(field, level, owner_id, viewer_id)
                if granted:
                    return FieldDecision(field=field, level=level, visible=True, reason="grant")
                return FieldDecision(
                    field=field,
                    level=level,
                    visible=False,
                    reason="unavailable" if granted is None else "no_permission",
                )
        raise AssertionError(f"Unhandled classification level: {level}")

    async def _has_grant(
        self,
        field: str,
        level: ClassificationLevel,
        owner_id: str,
        viewer_id: str,
    ) -> bool | None:
        """Grant lookup; None when the grant store is unavailable."""
        try:
            return await self._grants.has(owner_id, viewer_id, field, level)
        except DependencyUnavailableError as exc:
            DEPENDENCY_FAILURES.labels(dependency="grants").inc()
            logger.warning(
                "field_masked_dependency_unavailable",
                dependency="grants",
                owner_id=owner_id,
                viewer_id=viewer_id,
                field=field,
                error=exc.message,
            )
            return None


class _SettingsLookup:
    """Reads an owner's sharing settings at most once per resolution."""

    def __init__(self, store: SharingSettingsStore, owner_id: str) -> None:
        self._store = store
        self._owner_id = owner_id
        self._loaded = False
        self._settings: SharingSettings | None = None

    async def get(self) -> SharingSettings | None:
        if not self._loaded:
            self._loaded = True
            try:
                self._settings = await self._store.get(self._owner_id)
            except DependencyUnavailableError as exc:
                DEPENDENCY_FAILURES.labels(dependency="sharing_settings").inc()
                logger.warning(
                    "field_masked_dependency_unavailable",
                    dependency="sharing_settings",
                    owner_id=self._owner_id,
                    error=exc.message,
                )
        return self._settings
