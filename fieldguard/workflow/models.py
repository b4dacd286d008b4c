"""Information request models."""

from datetime import datetime, timedelta
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from fieldguard.clock import utc_now
from fieldguard.workflow.enums import RequestStatus

DEFAULT_REQUEST_TTL = timedelta(days=30)
REASON_MAX_LENGTH = 500


def new_request_id() -> str:
    return str(uuid4())


class InformationRequest(BaseModel):
    """One requester's ask for named fields of one owner's profile.

    Instances are immutable; status changes produce a new copy through
    RequestStore.transition().
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(default_factory=new_request_id, description="Request identifier")
    requester_id: str = Field(..., description="User asking for the fields")
    target_user_id: str = Field(..., description="Owner of the requested fields")
    requested_fields: list[str] = Field(..., min_length=1, description="Fields asked for")
    reason: str = Field(..., min_length=1, max_length=REASON_MAX_LENGTH)
    status: RequestStatus = Field(default=RequestStatus.PENDING)
    requested_at: datetime = Field(default_factory=utc_now)
    responded_at: datetime | None = Field(default=None)
    shared_fields: list[str] = Field(default_factory=list, description="Fields approved")
    expires_at: datetime = Field(..., description="Deadline for the owner's answer")

    @model_validator(mode="before")
    @classmethod
    def _default_expiry(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("expires_at", data.get("expiresAt")) is None:
            data = dict(data)
            requested_at = data.get("requested_at", data.get("requestedAt"))
            if requested_at is None:
                requested_at = utc_now()
                data["requested_at"] = requested_at
            if isinstance(requested_at, str):
                requested_at = datetime.fromisoformat(requested_at)
            data["expires_at"] = requested_at + DEFAULT_REQUEST_TTL
        return data

    @property
    def owner_id(self) -> str:
        return self.target_user_id

    def is_due(self, now: datetime) -> bool:
        """Pending and past its answer deadline."""
        return self.status is RequestStatus.PENDING and self.expires_at <= now

    def involves(self, user_id: str) -> bool:
        return user_id in (self.requester_id, self.target_user_id)

    def to_wire(self) -> dict[str, Any]:
        """camelCase JSON-ready representation."""
        return self.model_dump(mode="json", by_alias=True)


class RequestTransitionEvent(BaseModel):
    """Emitted whenever a request is created or changes status."""

    model_config = ConfigDict(frozen=True)

    request_id: str
    requester_id: str
    owner_id: str
    new_status: RequestStatus
    shared_fields: list[str] = Field(default_factory=list)
    occurred_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def from_request(
        cls, request: InformationRequest, occurred_at: datetime | None = None
    ) -> "RequestTransitionEvent":
        return cls(
            request_id=request.id,
            requester_id=request.requester_id,
            owner_id=request.target_user_id,
            new_status=request.status,
            shared_fields=list(request.shared_fields),
            occurred_at=occurred_at or utc_now(),
        )
