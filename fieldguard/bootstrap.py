"""Wire a complete in-memory engine from configuration.

Example usage:

    from fieldguard.bootstrap import bootstrap

    guard = bootstrap()

    request = await guard.workflow.create(
        "viewer-1", "owner-1", ["emergencyContact"], "safety check"
    )
    await guard.workflow.respond(request.id, "owner-1", approved=True)
    view = await guard.resolver.resolve(profile, "parent", "owner-1", "viewer-1")
"""

from dataclasses import dataclass

from prometheus_client import start_http_server

from fieldguard.classification.registry import ClassificationRegistry, default_registry
from fieldguard.clock import Clock, utc_now
from fieldguard.config import get_settings
from fieldguard.config.settings import Settings
from fieldguard.grants.stores.inmemory import InMemoryGrantStore
from fieldguard.notifications.sink import InboxNotificationSink, NotificationSink
from fieldguard.notifications.stores.inmemory import InMemoryNotificationStore
from fieldguard.observability.logging import get_logger, setup_logging
from fieldguard.sharing.stores.inmemory import InMemorySharingSettingsStore
from fieldguard.visibility.resolver import VisibilityResolver
from fieldguard.workflow.engine import RequestWorkflow
from fieldguard.workflow.stores.inmemory import InMemoryRequestStore
from fieldguard.workflow.sweeper import ExpirySweeper

logger = get_logger(__name__)


@dataclass
class FieldGuard:
    """Every component of a wired engine."""

    settings: Settings
    registry: ClassificationRegistry
    settings_store: InMemorySharingSettingsStore
    grant_store: InMemoryGrantStore
    request_store: InMemoryRequestStore
    notification_store: InMemoryNotificationStore
    resolver: VisibilityResolver
    workflow: RequestWorkflow
    sweeper: ExpirySweeper | None


def bootstrap(
    settings: Settings | None = None,
    *,
    clock: Clock = utc_now,
    sink: NotificationSink | None = None,
    configure_logging: bool = True,
    serve_metrics: bool = False,
) -> FieldGuard:
    """Build in-memory stores, the resolver, the workflow and the sweeper.

    Args:
        settings: Configuration (default: get_settings())
        clock: Time source shared by every component
        sink: Event sink (default: an inbox sink over the notification store)
        configure_logging: Apply the logging section of settings
        serve_metrics: Start the Prometheus HTTP exporter when metrics are enabled

    The sweeper is created but not started; call guard.sweeper.start()
    from inside a running event loop.
    """
    settings = settings or get_settings()
    observability = settings.observability

    if configure_logging:
        setup_logging(
            level=observability.logging.level,
            format=observability.logging.format,
            redact_pii=observability.logging.redact_pii,
        )
    if serve_metrics and observability.metrics.enabled:
        start_http_server(observability.metrics.port)

    settings_store = InMemorySharingSettingsStore(clock=clock)
    grant_store = InMemoryGrantStore(clock=clock, registry=default_registry)
    request_store = InMemoryRequestStore()
    notification_store = InMemoryNotificationStore(clock=clock)

    workflow = RequestWorkflow(
        request_store,
        grant_store,
        sink or InboxNotificationSink(notification_store),
        clock=clock,
        config=settings.workflow,
    )
    sweeper = None
    if settings.sweeper.enabled:
        sweeper = ExpirySweeper(
            workflow,
            settings.sweeper.interval_seconds,
            grant_store=grant_store,
            purge=settings.sweeper.purge_expired,
        )

    logger.info(
        "fieldguard_bootstrapped",
        app_name=settings.app_name,
        sweeper_enabled=sweeper is not None,
    )
    return FieldGuard(
        settings=settings,
        registry=default_registry,
        settings_store=settings_store,
        grant_store=grant_store,
        request_store=request_store,
        notification_store=notification_store,
        resolver=VisibilityResolver(settings_store, grant_store, default_registry),
        workflow=workflow,
        sweeper=sweeper,
    )
