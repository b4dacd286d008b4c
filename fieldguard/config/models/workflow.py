"""Request workflow and expiry sweeper configuration models."""

from pydantic import BaseModel, Field


class WorkflowConfig(BaseModel):
    """Information request workflow policy."""

    request_ttl_days: int = Field(
        default=30,
        gt=0,
        description="Days an owner has to answer before a request expires",
    )
    reason_max_length: int = Field(
        default=500,
        gt=0,
        le=500,
        description="Maximum length of a request reason",
    )
    allow_concurrent_pending: bool = Field(
        default=False,
        description="Allow several pending requests from one requester to one owner",
    )
    expired_retention_days: int = Field(
        default=30,
        ge=0,
        description="Days an expired request is kept before purge_expired removes it",
    )


class SweeperConfig(BaseModel):
    """Periodic expiry sweep."""

    enabled: bool = Field(default=True, description="Run the background sweep")
    interval_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Seconds between sweeps",
    )
    purge_expired: bool = Field(
        default=False,
        description="Also purge expired requests and lapsed grants on each sweep",
    )
