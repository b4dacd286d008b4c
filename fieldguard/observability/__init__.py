"""Observability: structured logging and Prometheus metrics."""

from fieldguard.observability.logging import PIIRedactor, get_logger, setup_logging

__all__ = ["PIIRedactor", "get_logger", "setup_logging"]
