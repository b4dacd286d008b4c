"""Tests for InMemoryGrantStore."""

import asyncio
from datetime import timedelta

import pytest

from fieldguard.classification import ClassificationLevel, ClassificationRegistry, UserRole
from fieldguard.errors import ValidationError
from fieldguard.grants.stores.inmemory import InMemoryGrantStore


class TestGrant:
    """Tests for writing grants."""

    @pytest.mark.asyncio
    async def test_grant_and_has(self, grant_store):
        """Should record a grant visible through has()."""
        grant_set = await grant_store.grant("owner", "viewer", ["phone"])
        assert grant_set.fields == ["phone"]
        assert await grant_store.has("owner", "viewer", "phone")

    @pytest.mark.asyncio
    async def test_viewer_scoped(self, grant_store):
        """A grant for one viewer does not reveal to another."""
        await grant_store.grant("owner", "viewer", ["phone"])
        assert not await grant_store.has("owner", "other-viewer", "phone")
        assert not await grant_store.has("other-owner", "viewer", "phone")

    @pytest.mark.asyncio
    async def test_upsert_is_idempotent(self, grant_store, clock):
        """Granting twice keeps one entry and refreshes the expiry."""
        await grant_store.grant("owner", "viewer", ["phone"], timedelta(hours=1))
        clock.advance(minutes=30)
        await grant_store.grant("owner", "viewer", ["phone"], timedelta(hours=1))

        grants = await grant_store.get_grants("owner", "viewer")
        assert len(grants) == 1
        assert grants[0].expires_at == clock.now + timedelta(hours=1)

    @pytest.mark.asyncio
    async def test_upsert_can_remove_expiry(self, grant_store, clock):
        await grant_store.grant("owner", "viewer", ["phone"], 60)
        await grant_store.grant("owner", "viewer", ["phone"])
        clock.advance(days=365)
        assert await grant_store.has("owner", "viewer", "phone")

    @pytest.mark.asyncio
    async def test_expires_in_seconds(self, grant_store, clock):
        """expires_in may be given in seconds."""
        await grant_store.grant("owner", "viewer", ["phone"], 60)
        clock.advance(seconds=59)
        assert await grant_store.has("owner", "viewer", "phone")
        clock.advance(seconds=1)
        assert not await grant_store.has("owner", "viewer", "phone")

    @pytest.mark.asyncio
    async def test_empty_fields_rejected(self, grant_store):
        with pytest.raises(ValidationError):
            await grant_store.grant("owner", "viewer", [])

    @pytest.mark.asyncio
    async def test_non_positive_expiry_rejected(self, grant_store):
        with pytest.raises(ValidationError):
            await grant_store.grant("owner", "viewer", ["phone"], timedelta(seconds=-5))
        assert await grant_store.list_for("owner", "viewer") == []

    @pytest.mark.asyncio
    async def test_source_request_recorded(self, grant_store):
        await grant_store.grant("owner", "viewer", ["phone"], source_request_id="req-1")
        grants = await grant_store.get_grants("owner", "viewer")
        assert grants[0].source_request_id == "req-1"


class TestWildcards:
    """Tests for all_private / all_sensitive grants."""

    @pytest.mark.asyncio
    async def test_all_private_covers_private_fields(self, grant_store):
        await grant_store.grant("owner", "viewer", ["all_private"])
        assert await grant_store.has("owner", "viewer", "address", ClassificationLevel.PRIVATE)
        assert not await grant_store.has(
            "owner", "viewer", "emergencyContact", ClassificationLevel.SENSITIVE
        )

    @pytest.mark.asyncio
    async def test_all_sensitive_covers_sensitive_fields(self, grant_store):
        await grant_store.grant("owner", "viewer", ["all_sensitive"])
        assert await grant_store.has(
            "owner", "viewer", "financialInfo", ClassificationLevel.SENSITIVE
        )

    @pytest.mark.asyncio
    async def test_expired_wildcard_covers_nothing(self, grant_store, clock):
        await grant_store.grant("owner", "viewer", ["all_private"], timedelta(minutes=5))
        clock.advance(minutes=5)
        assert not await grant_store.has("owner", "viewer", "phone", ClassificationLevel.PRIVATE)

    @pytest.mark.asyncio
    async def test_wildcard_without_level_uses_registry(self, grant_store):
        """Callers that omit the level still get wildcard coverage."""
        await grant_store.grant("owner", "viewer", ["all_private"])

        assert await grant_store.has("owner", "viewer", "phone")
        assert await grant_store.has("owner", "viewer", "portfolio")
        assert not await grant_store.has("owner", "viewer", "childAllergies")
        assert not await grant_store.has("owner", "viewer", "name")

    @pytest.mark.asyncio
    async def test_sensitive_wildcard_without_level(self, grant_store):
        await grant_store.grant("owner", "viewer", ["all_sensitive"])

        assert await grant_store.has("owner", "viewer", "emergencyContact")
        assert await grant_store.has("owner", "viewer", "shoeSize")
        assert not await grant_store.has("owner", "viewer", "address")

    @pytest.mark.asyncio
    async def test_custom_registry(self, clock):
        registry = ClassificationRegistry(
            {UserRole.PARENT: {"nickname": ClassificationLevel.PRIVATE}}, toggles={}
        )
        store = InMemoryGrantStore(clock=clock, registry=registry)
        await store.grant("owner", "viewer", ["all_private"])

        assert await store.has("owner", "viewer", "nickname")
        assert not await store.has("owner", "viewer", "phone")


class TestRevoke:
    """Tests for revoking grants."""

    @pytest.mark.asyncio
    async def test_revoke_selected_fields(self, grant_store):
        await grant_store.grant("owner", "viewer", ["phone", "address"])
        await grant_store.revoke("owner", "viewer", ["phone"])
        assert await grant_store.list_for("owner", "viewer") == ["address"]

    @pytest.mark.asyncio
    async def test_revoke_everything(self, grant_store):
        await grant_store.grant("owner", "viewer", ["phone", "all_sensitive"])
        await grant_store.revoke("owner", "viewer")
        assert await grant_store.list_for("owner", "viewer") == []

    @pytest.mark.asyncio
    async def test_revoke_unknown_is_noop(self, grant_store):
        await grant_store.revoke("nobody", "viewer")
        await grant_store.revoke("nobody", "viewer", ["phone"])


class TestRestore:
    """Tests for putting fields back to earlier grants."""

    @pytest.mark.asyncio
    async def test_restore_previous_and_drop_new(self, grant_store, clock):
        await grant_store.grant("owner", "viewer", ["phone"])
        previous = await grant_store.get_grants("owner", "viewer")
        clock.advance(minutes=1)
        await grant_store.grant(
            "owner", "viewer", ["phone", "address"], 60, source_request_id="req-1"
        )

        await grant_store.restore("owner", "viewer", ["phone", "address"], previous)

        assert await grant_store.get_grants("owner", "viewer") == previous

    @pytest.mark.asyncio
    async def test_restore_leaves_other_fields(self, grant_store):
        await grant_store.grant("owner", "viewer", ["email", "phone"])

        await grant_store.restore("owner", "viewer", ["phone"], [])

        assert await grant_store.list_for("owner", "viewer") == ["email"]

    @pytest.mark.asyncio
    async def test_restore_everything_away(self, grant_store):
        await grant_store.grant("owner", "viewer", ["phone"])
        await grant_store.restore("owner", "viewer", ["phone"], [])
        assert await grant_store.list_for("owner", "viewer") == []


class TestReads:
    """Tests for list_for and unknown owners."""

    @pytest.mark.asyncio
    async def test_unknown_owner(self, grant_store):
        assert await grant_store.has("nobody", "viewer", "phone") is False
        assert await grant_store.list_for("nobody", "viewer") == []

    @pytest.mark.asyncio
    async def test_list_for_skips_expired(self, grant_store, clock):
        await grant_store.grant("owner", "viewer", ["phone"], timedelta(hours=1))
        await grant_store.grant("owner", "viewer", ["address"])
        clock.advance(hours=2)
        assert await grant_store.list_for("owner", "viewer") == ["address"]

    @pytest.mark.asyncio
    async def test_purge_expired(self, grant_store, clock):
        await grant_store.grant("owner", "viewer", ["phone"], timedelta(hours=1))
        await grant_store.grant("owner", "viewer", ["address"])
        clock.advance(hours=2)

        assert await grant_store.purge_expired() == 1
        assert await grant_store.purge_expired() == 0
        assert await grant_store.list_for("owner", "viewer") == ["address"]

    @pytest.mark.asyncio
    async def test_concurrent_grants_distinct_owners(self, grant_store):
        await asyncio.gather(
            *(grant_store.grant(f"owner-{i}", "viewer", ["phone"]) for i in range(10))
        )
        for i in range(10):
            assert await grant_store.has(f"owner-{i}", "viewer", "phone")
