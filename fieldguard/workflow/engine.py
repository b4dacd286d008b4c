"""Information request workflow.

Runs the pending -> approved | denied | expired state machine on top of
a RequestStore and writes grants into a GrantStore on approval.

Every transition on one request id happens under that id's lock, and
the store-level transition() is a compare-and-set on the pending
status, so of two concurrent respond() calls exactly one wins and the
other gets AlreadyRespondedError.

On approval the grants are written first and the status flips second.
Between the two writes another reader may see the grants while the
request still reads pending; it never sees an approved request whose
grants are missing. If the flip loses to a writer outside this process,
the fields just written are put back to the grants they held before.
"""

from collections.abc import Sequence
from datetime import timedelta

from fieldguard.clock import Clock, to_timedelta, utc_now
from fieldguard.config.models.workflow import WorkflowConfig
from fieldguard.errors import (
    AlreadyRespondedError,
    AuthorizationError,
    DuplicateRequestError,
    NotFoundError,
    SelfRequestError,
    ValidationError,
)
from fieldguard.grants.models import normalize_fields, validate_expiry
from fieldguard.grants.store import GrantStore
from fieldguard.locks import KeyedLocks
from fieldguard.notifications.sink import NotificationSink, NullSink
from fieldguard.observability.logging import get_logger
from fieldguard.observability.metrics import REQUEST_TRANSITIONS
from fieldguard.workflow.enums import RequestStatus
from fieldguard.workflow.models import InformationRequest, RequestTransitionEvent
from fieldguard.workflow.store import RequestStore

logger = get_logger(__name__)


class RequestWorkflow:
    """Create, answer and expire information requests."""

    def __init__(
        self,
        request_store: RequestStore,
        grant_store: GrantStore,
        sink: NotificationSink | None = None,
        *,
        clock: Clock = utc_now,
        config: WorkflowConfig | None = None,
    ) -> None:
        self._requests = request_store
        self._grants = grant_store
        self._sink = sink or NullSink()
        self._clock = clock
        self._config = config or WorkflowConfig()
        self._request_locks = KeyedLocks()
        self._pair_locks = KeyedLocks()

    async def create(
        self,
        requester_id: str,
        owner_id: str,
        fields: Sequence[str],
        reason: str,
    ) -> InformationRequest:
        """Open a pending request from requester_id for owner_id's fields.

        Raises:
            ValidationError: fields empty, reason blank or too long
            SelfRequestError: requester_id == owner_id
            DuplicateRequestError: a pending request to this owner already
                exists and concurrent pending requests are not allowed
        """
        names = normalize_fields(fields)
        if not names:
            raise ValidationError("At least one field must be requested")
        if not isinstance(reason, str) or not reason.strip():
            raise ValidationError("A reason is required")
        reason = reason.strip()
        if len(reason) > self._config.reason_max_length:
            raise ValidationError(
                f"Reason must be at most {self._config.reason_max_length} characters"
            )
        if requester_id == owner_id:
            raise SelfRequestError("Cannot request information from yourself")

        async with self._pair_locks.hold((requester_id, owner_id)):
            if not self._config.allow_concurrent_pending:
                for existing in await self._requests.find_pending(requester_id, owner_id):
                    existing = await self._expire_locked(existing.id)
                    if existing is not None and existing.status is RequestStatus.PENDING:
                        raise DuplicateRequestError(
                            "You already have a pending request for this user",
                            existing_request_id=existing.id,
                        )

            now = self._clock()
            request = InformationRequest(
                requester_id=requester_id,
                target_user_id=owner_id,
                requested_fields=names,
                reason=reason,
                requested_at=now,
                expires_at=now + timedelta(days=self._config.request_ttl_days),
            )
            await self._requests.save(request)

        logger.info(
            "request_created",
            request_id=request.id,
            requester_id=requester_id,
            owner_id=owner_id,
            fields=names,
        )
        REQUEST_TRANSITIONS.labels(status=RequestStatus.PENDING.value, trigger="create").inc()
        await self._emit(request)
        return request

    async def respond(
        self,
        request_id: str,
        responder_id: str,
        approved: bool,
        shared_fields: Sequence[str] | None = None,
        expires_in: timedelta | float | None = None,
    ) -> InformationRequest:
        """Approve or deny a pending request as its owner.

        On approval shared_fields defaults to every requested field; a
        subset is allowed. The grants are written with the optional
        expires_in window. shared_fields is ignored on denial.

        Raises:
            NotFoundError: no such request
            AuthorizationError: responder is not the owner
            AlreadyRespondedError: the request is no longer pending,
                including when it has just expired
            ValidationError: shared_fields empty or not a subset of the
                requested fields, or a non-positive expires_in
        """
        async with self._request_locks.hold(request_id):
            request = await self._requests.get(request_id)
            if request is None:
                raise NotFoundError(f"Request {request_id} not found")
            if responder_id != request.target_user_id:
                raise AuthorizationError("Only the owner can respond to this request")

            request = await self._expire_if_due(request, trigger="lazy")
            if request.status is not RequestStatus.PENDING:
                raise AlreadyRespondedError(
                    f"Request {request_id} is already {request.status.value}",
                    status=request.status.value,
                )

            if approved:
                updated = await self._approve(request, shared_fields, expires_in)
            else:
                updated = await self._requests.transition(
                    request_id,
                    RequestStatus.PENDING,
                    RequestStatus.DENIED,
                    responded_at=self._clock(),
                    shared_fields=[],
                )
                if updated is None:
                    raise await self._lost_race(request_id)

        logger.info(
            "request_responded",
            request_id=request_id,
            owner_id=updated.target_user_id,
            requester_id=updated.requester_id,
            status=updated.status.value,
            shared_fields=updated.shared_fields,
        )
        REQUEST_TRANSITIONS.labels(status=updated.status.value, trigger="respond").inc()
        await self._emit(updated)
        return updated

    async def expire(self, request_id: str) -> InformationRequest | None:
        """Expire one request if it is pending and past its deadline.

        Returns the request's state after the check, or None when it
        does not exist. Terminal requests are returned unchanged, so
        calling this repeatedly is safe.
        """
        return await self._expire_locked(request_id)

    async def expire_all(self) -> list[InformationRequest]:
        """Sweep every due pending request into expired.

        Returns the requests this call moved to expired; requests
        another caller expired first are skipped.
        """
        expired: list[InformationRequest] = []
        for due in await self._requests.list_due(self._clock()):
            async with self._request_locks.hold(due.id):
                current = await self._requests.get(due.id)
                if current is None or not current.is_due(self._clock()):
                    continue
                updated = await self._expire_if_due(current, trigger="sweep")
                if updated.status is RequestStatus.EXPIRED:
                    expired.append(updated)
        if expired:
            logger.info("requests_swept", count=len(expired))
        return expired

    async def get(self, request_id: str, user_id: str) -> InformationRequest:
        """Get a request visible to user_id (its requester or owner)."""
        request = await self._expire_locked(request_id)
        if request is None or not request.involves(user_id):
            raise NotFoundError(f"Request {request_id} not found")
        return request

    async def list_pending_for(self, owner_id: str) -> list[InformationRequest]:
        """Requests awaiting owner_id's answer, newest first.

        Requests whose deadline passed are expired first and returned
        with status expired, so callers never see a stale pending.
        """
        pending = await self._requests.list_by_target(
            owner_id, status=RequestStatus.PENDING
        )
        return await self._refresh(pending)

    async def list_sent_by(self, requester_id: str) -> list[InformationRequest]:
        """Every request requester_id sent, newest first, lazily expired."""
        sent = await self._requests.list_by_requester(requester_id)
        return await self._refresh(sent)

    async def shared_fields_for(self, request_id: str, user_id: str) -> list[str]:
        """Fields shared through an approved request, for either party."""
        request = await self._requests.get(request_id)
        if (
            request is None
            or request.status is not RequestStatus.APPROVED
            or not request.involves(user_id)
        ):
            raise NotFoundError(f"Approved request {request_id} not found")
        return list(request.shared_fields)

    async def purge_expired(self, retention: timedelta | None = None) -> int:
        """Physically remove expired requests older than the retention window."""
        if retention is None:
            retention = timedelta(days=self._config.expired_retention_days)
        removed = await self._requests.delete_expired(self._clock() - retention)
        if removed:
            logger.info("expired_requests_purged", count=removed)
        return removed

    async def _approve(
        self,
        request: InformationRequest,
        shared_fields: Sequence[str] | None,
        expires_in: timedelta | float | None,
    ) -> InformationRequest:
        if shared_fields is None:
            shared = list(request.requested_fields)
        else:
            shared = normalize_fields(shared_fields)
            if not shared:
                raise ValidationError("Approval must share at least one field")
            extra = [name for name in shared if name not in request.requested_fields]
            if extra:
                raise ValidationError(
                    f"Shared fields were not requested: {', '.join(extra)}"
                )
        window = validate_expiry(to_timedelta(expires_in))

        previous = [
            grant
            for grant in await self._grants.get_grants(
                request.target_user_id, request.requester_id
            )
            if grant.field in shared
        ]
        await self._grants.grant(
            request.target_user_id,
            request.requester_id,
            shared,
            window,
            source_request_id=request.id,
        )
        updated = await self._requests.transition(
            request.id,
            RequestStatus.PENDING,
            RequestStatus.APPROVED,
            responded_at=self._clock(),
            shared_fields=shared,
        )
        if updated is None:
            await self._grants.restore(
                request.target_user_id, request.requester_id, shared, previous
            )
            raise await self._lost_race(request.id)
        return updated

    async def _lost_race(self, request_id: str) -> Exception:
        current = await self._requests.get(request_id)
        if current is None:
            return NotFoundError(f"Request {request_id} not found")
        logger.warning(
            "request_transition_conflict",
            request_id=request_id,
            status=current.status.value,
        )
        return AlreadyRespondedError(
            f"Request {request_id} is already {current.status.value}",
            status=current.status.value,
        )

    async def _refresh(
        self, requests: list[InformationRequest]
    ) -> list[InformationRequest]:
        now = self._clock()
        refreshed: list[InformationRequest] = []
        for request in requests:
            if request.is_due(now):
                current = await self._expire_locked(request.id)
                if current is None:
                    continue
                request = current
            refreshed.append(request)
        return refreshed

    async def _expire_locked(self, request_id: str) -> InformationRequest | None:
        async with self._request_locks.hold(request_id):
            request = await self._requests.get(request_id)
            if request is None:
                return None
            return await self._expire_if_due(request, trigger="lazy")

    async def _expire_if_due(
        self, request: InformationRequest, *, trigger: str
    ) -> InformationRequest:
        # Caller holds the request lock.
        if not request.is_due(self._clock()):
            return request
        updated = await self._requests.transition(
            request.id, RequestStatus.PENDING, RequestStatus.EXPIRED
        )
        if updated is None:
            current = await self._requests.get(request.id)
            return current if current is not None else request

        logger.info(
            "request_expired",
            request_id=updated.id,
            owner_id=updated.target_user_id,
            requester_id=updated.requester_id,
            trigger=trigger,
        )
        REQUEST_TRANSITIONS.labels(status=RequestStatus.EXPIRED.value, trigger=trigger).inc()
        await self._emit(updated)
        return updated

    async def _emit(self, request: InformationRequest) -> None:
        event = RequestTransitionEvent.from_request(request, self._clock())
        try:
            await self._sink.emit(event)
        except Exception:
            logger.warning(
                "notification_emit_failed",
                request_id=request.id,
                status=request.status.value,
                exc_info=True,
            )
