"""Tests for bootstrap wiring."""

import pytest

from fieldguard.bootstrap import bootstrap
from fieldguard.classification.enums import UserRole
from fieldguard.config.models.workflow import SweeperConfig, WorkflowConfig
from fieldguard.config.settings import Settings
from fieldguard.notifications.models import NotificationType
from fieldguard.visibility.models import Placeholder
from tests.factories import parent_profile


class TestBootstrap:
    def test_sweeper_created_not_started(self, clock):
        guard = bootstrap(Settings(), clock=clock, configure_logging=False)
        assert guard.sweeper is not None
        assert not guard.sweeper.running

    def test_sweeper_disabled(self, clock):
        settings = Settings(sweeper=SweeperConfig(enabled=False))
        assert bootstrap(settings, clock=clock, configure_logging=False).sweeper is None

    @pytest.mark.asyncio
    async def test_components_share_stores(self, clock):
        settings = Settings(workflow=WorkflowConfig(request_ttl_days=3))
        guard = bootstrap(settings, clock=clock, configure_logging=False)

        request = await guard.workflow.create("viewer", "owner", ["childAllergies"], "Allergy check")
        assert request.expires_at == clock().replace(day=18)

        await guard.workflow.respond(request.id, "owner", approved=True)
        view = await guard.resolver.resolve(parent_profile(), UserRole.PARENT, "owner", "viewer")

        assert view["childAllergies"] == "Peanuts"
        assert view["childMedicalInfo"] == Placeholder.SENSITIVE
        [notification] = await guard.notification_store.list_for("viewer")
        assert notification.type is NotificationType.INFO_REQUEST_RESPONSE
