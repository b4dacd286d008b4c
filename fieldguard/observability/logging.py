"""Structured logging configuration using structlog.

JSON output for production, console output for development. Profile
field values must never reach the logs, so a redaction processor masks
known personal-data keys (in snake_case or camelCase) and scrubs
email/phone patterns that slip into free-text values.
"""

import re
import sys
from collections.abc import MutableMapping
from typing import Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

# Normalized key names: lowercase, underscores removed
SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password",
    "secret",
    "token",
    "apikey",
    "authorization",
    "email",
    "phone",
    "address",
    "emergencycontact",
    "emergencycontacts",
    "childmedicalinfo",
    "childallergies",
    "childbehaviornotes",
    "financialinfo",
    "backgroundcheck",
    "documents",
    "value",
    "profile",
})

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"\+?\d[\d\s\-\(\)]{8,}\d")

LEVELS: dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


def _normalize_key(key: str) -> str:
    return key.replace("_", "").replace("-", "").lower()


class PIIRedactor:
    """Processor that redacts personal data from log events.

    Key names are checked first (normalized so share_phone-style and
    emergencyContact-style keys both match); string values are then
    scanned for email and phone patterns.
    """

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """Redact personal data from event dictionary."""
        return cast(EventDict, self._redact_dict(event_dict))

    def _redact_dict(self, data: MutableMapping[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in data.items():
            if key != "event" and _normalize_key(key) in SENSITIVE_KEYS:
                result[key] = "[REDACTED]"
            else:
                result[key] = self._redact_value(value)
        return result

    def _redact_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self._redact_dict(value)
        if isinstance(value, str):
            value = EMAIL_PATTERN.sub("[EMAIL]", value)
            return PHONE_PATTERN.sub("[PHONE]", value)
        if isinstance(value, list | tuple):
            return [self._redact_value(item) for item in value]
        return value


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    redact_pii: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: "json" for production, "console" for development
        redact_pii: Whether to redact personal data from logs
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    if redact_pii:
        processors.append(PIIRedactor())

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LEVELS.get(level.upper(), 20)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        A bound structlog logger
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
