"""Configuration section models."""

from fieldguard.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from fieldguard.config.models.workflow import SweeperConfig, WorkflowConfig

__all__ = [
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "SweeperConfig",
    "WorkflowConfig",
]
