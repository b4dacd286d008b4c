"""Privacy notification models."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from fieldguard.clock import utc_now


class NotificationType(str, Enum):
    """Kinds of privacy notifications delivered to a user's inbox."""

    INFO_REQUEST = "info_request"
    INFO_REQUEST_RESPONSE = "info_request_response"
    INFO_REQUEST_EXPIRED = "info_request_expired"


class PrivacyNotification(BaseModel):
    """Inbox entry telling a user about a request transition."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str = Field(..., description="Recipient")
    type: NotificationType
    message: str = Field(..., max_length=500)
    data: dict[str, Any] = Field(default_factory=dict)
    read: bool = False
    read_at: datetime | None = None
    created_at: datetime = Field(default_factory=utc_now)
