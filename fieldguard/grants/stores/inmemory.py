"""In-memory implementation of GrantStore."""

from collections.abc import Sequence
from datetime import datetime, timedelta

from fieldguard.classification.enums import ClassificationLevel
from fieldguard.classification.registry import ClassificationRegistry, default_registry
from fieldguard.clock import Clock, to_timedelta, utc_now
from fieldguard.errors import ValidationError
from fieldguard.grants.models import Grant, GrantSet, normalize_fields, validate_expiry
from fieldguard.grants.store import GrantStore
from fieldguard.locks import KeyedLocks
from fieldguard.observability.logging import get_logger
from fieldguard.observability.metrics import GRANT_WRITES

logger = get_logger(__name__)


class InMemoryGrantStore(GrantStore):
    """In-memory implementation of GrantStore for testing and development.

    Layout is owner -> viewer -> field -> Grant, so one upsert per
    (owner, viewer, field). Writes for one owner are serialized.
    """

    def __init__(
        self,
        clock: Clock = utc_now,
        registry: ClassificationRegistry | None = None,
    ) -> None:
        """Initialize empty storage."""
        self._grants: dict[str, dict[str, dict[str, Grant]]] = {}
        self._locks = KeyedLocks()
        self._clock = clock
        self._registry = registry or default_registry

    async def grant(
        self,
        owner_id: str,
        viewer_id: str,
        fields: Sequence[str],
        expires_in: timedelta | float | None = None,
        *,
        source_request_id: str | None = None,
    ) -> GrantSet:
        """Upsert grants for fields, returning the grants written."""
        names = normalize_fields(fields)
        if not names:
            raise ValidationError("At least one field is required to grant access")
        window = validate_expiry(to_timedelta(expires_in))

        async with self._locks.hold(owner_id):
            now = self._clock()
            expires_at = now + window if window is not None else None
            by_field = self._grants.setdefault(owner_id, {}).setdefault(viewer_id, {})
            written: list[Grant] = []
            for name in names:
                grant = Grant(
                    owner_id=owner_id,
                    viewer_id=viewer_id,
                    field=name,
                    granted_at=now,
                    expires_at=expires_at,
                    source_request_id=source_request_id,
                )
                by_field[name] = grant
                written.append(grant)

        GRANT_WRITES.labels(operation="grant").inc(len(written))
        logger.info(
            "grants_written",
            owner_id=owner_id,
            viewer_id=viewer_id,
            fields=names,
            expires_at=expires_at.isoformat() if expires_at else None,
        )
        return GrantSet(owner_id=owner_id, viewer_id=viewer_id, grants=written)

    async def revoke(
        self,
        owner_id: str,
        viewer_id: str,
        fields: Sequence[str] | None = None,
    ) -> None:
        """Remove grants for fields, or every grant to viewer when None."""
        async with self._locks.hold(owner_id):
            viewers = self._grants.get(owner_id)
            if not viewers or viewer_id not in viewers:
                return
            if fields is None:
                removed = len(viewers.pop(viewer_id))
            else:
                by_field = viewers[viewer_id]
                removed = 0
                for name in normalize_fields(fields):
                    if by_field.pop(name, None) is not None:
                        removed += 1
                if not by_field:
                    del viewers[viewer_id]
            if not viewers:
                del self._grants[owner_id]

        GRANT_WRITES.labels(operation="revoke").inc(removed)
        logger.info(
            "grants_revoked",
            owner_id=owner_id,
            viewer_id=viewer_id,
            fields=list(fields) if fields is not None else "all",
            removed=removed,
        )

    async def restore(
        self,
        owner_id: str,
        viewer_id: str,
        fields: Sequence[str],
        previous: Sequence[Grant],
    ) -> None:
        """Put fields back to previous, dropping those with no previous grant."""
        prior = {grant.field: grant for grant in previous}
        async with self._locks.hold(owner_id):
            by_field = self._grants.setdefault(owner_id, {}).setdefault(viewer_id, {})
            for name in normalize_fields(fields):
                if name in prior:
                    by_field[name] = prior[name]
                else:
                    by_field.pop(name, None)
            if not by_field:
                del self._grants[owner_id][viewer_id]
            if not self._grants[owner_id]:
                del self._grants[owner_id]

        GRANT_WRITES.labels(operation="restore").inc(len(fields))
        logger.info(
            "grants_restored",
            owner_id=owner_id,
            viewer_id=viewer_id,
            fields=list(fields),
            restored=sorted(set(prior) & set(fields)),
        )

    async def has(
        self,
        owner_id: str,
        viewer_id: str,
        field: str,
        level: ClassificationLevel | None = None,
    ) -> bool:
        """Check for an active direct grant or covering wildcard.

        Without level, a wildcard covers field when the registry puts
        field at the wildcard's level under any role.
        """
        levels = (level,) if level is not None else self._registry.levels_of(field)
        return any(
            grant.covers(field, lvl)
            for grant in self._active(owner_id, viewer_id, self._clock())
            for lvl in levels
        )

    async def list_for(self, owner_id: str, viewer_id: str) -> list[str]:
        """List the active grant entries of viewer over owner."""
        return [grant.field for grant in await self.get_grants(owner_id, viewer_id)]

    async def get_grants(self, owner_id: str, viewer_id: str) -> list[Grant]:
        """Active grants of viewer over owner, with expiry details."""
        return self._active(owner_id, viewer_id, self._clock())

    async def purge_expired(self) -> int:
        """Physically remove lapsed grants, returning how many."""
        now = self._clock()
        purged = 0
        for owner_id in list(self._grants):
            async with self._locks.hold(owner_id):
                viewers = self._grants.get(owner_id, {})
                for viewer_id in list(viewers):
                    by_field = viewers[viewer_id]
                    for name in [n for n, g in by_field.items() if not g.is_active(now)]:
                        del by_field[name]
                        purged += 1
                    if not by_field:
                        del viewers[viewer_id]
                if not viewers:
                    self._grants.pop(owner_id, None)
        if purged:
            logger.info("expired_grants_purged", count=purged)
        return purged

    def _active(self, owner_id: str, viewer_id: str, now: datetime) -> list[Grant]:
        by_field = self._grants.get(owner_id, {}).get(viewer_id, {})
        return [grant for grant in by_field.values() if grant.is_active(now)]
