"""Periodic expiry sweep.

A single long-running asyncio task that moves due pending requests to
expired. It runs alongside lazy expiry on read; both go through the
workflow's compare-and-set, so overlapping runs are harmless.
"""

import asyncio
from dataclasses import dataclass

from fieldguard.errors import DependencyUnavailableError
from fieldguard.grants.store import GrantStore
from fieldguard.observability.logging import get_logger
from fieldguard.observability.metrics import SWEEP_EXPIRED
from fieldguard.workflow.engine import RequestWorkflow

logger = get_logger(__name__)


@dataclass
class SweepResult:
    """Outcome of one sweep."""

    expired_count: int
    purged_requests: int = 0
    purged_grants: int = 0
    success: bool = True
    error: str | None = None


class ExpirySweeper:
    """Runs RequestWorkflow.expire_all() every interval_seconds.

    Idempotent: a request is expired at most once because the status
    transition is one-way. A sweep that cannot reach a store is logged
    and the loop keeps going.
    """

    def __init__(
        self,
        workflow: RequestWorkflow,
        interval_seconds: float = 300.0,
        *,
        grant_store: GrantStore | None = None,
        purge: bool = False,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._workflow = workflow
        self._interval = interval_seconds
        self._grant_store = grant_store
        self._purge = purge
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> SweepResult:
        """Execute a single sweep."""
        try:
            expired = await self._workflow.expire_all()
            purged_requests = purged_grants = 0
            if self._purge:
                purged_requests = await self._workflow.purge_expired()
                if self._grant_store is not None:
                    purged_grants = await self._grant_store.purge_expired()
        except DependencyUnavailableError as exc:
            logger.error("expiry_sweep_failed", error=exc.message)
            return SweepResult(expired_count=0, success=False, error=exc.message)

        SWEEP_EXPIRED.inc(len(expired))
        return SweepResult(
            expired_count=len(expired),
            purged_requests=purged_requests,
            purged_grants=purged_grants,
        )

    def start(self) -> None:
        """Start the background loop on the running event loop."""
        if self.running:
            return
        self._stopping.clear()
        self._task = asyncio.create_task(self._loop(), name="fieldguard-expiry-sweeper")
        logger.info("expiry_sweeper_started", interval_seconds=self._interval)

    async def stop(self) -> None:
        """Stop the loop and wait for the current sweep to finish.

        A loop that crashed re-raises its error here.
        """
        if self._task is None:
            return
        self._stopping.set()
        try:
            await self._task
        finally:
            self._task = None
            logger.info("expiry_sweeper_stopped")

    async def _loop(self) -> None:
        while not self._stopping.is_set():
            try:
                result = await self.run_once()
            except Exception:
                logger.exception("expiry_sweep_crashed")
                raise
            if result.expired_count:
                logger.info("expiry_sweep_completed", expired=result.expired_count)
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self._interval)
            except TimeoutError:
                continue
