"""
Logging configuration for the communications service.

Centralized logging setup with:
- Structured JSON output
- Correlation ID tracking
- Timing helper for sends and batches
- Contact details truncated before they reach the logs
"""

import logging
import sys
import time
from contextvars import ContextVar
from uuid import uuid4

import structlog

# Context variable for request correlation
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def configure_logging(service_name: str, level: int = logging.INFO) -> None:
    """
    Configure structured logging for the service.

    Args:
        service_name: Name of the service for log context
        level: Minimum stdlib log level
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _add_service_name(service_name),
            _add_correlation_id,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def _add_service_name(service_name: str):
    """Processor to add service name to all logs."""

    def processor(logger, method_name, event_dict):
        event_dict["service"] = service_name
        return event_dict

    return processor


def _add_correlation_id(logger, method_name, event_dict):
    """Processor to add correlation ID if present."""
    cid = correlation_id.get()
    if cid:
        event_dict["correlation_id"] = cid
    return event_dict


def get_correlation_id() -> str:
    """Get current correlation ID or generate new one."""
    cid = correlation_id.get()
    if not cid:
        cid = str(uuid4())
        correlation_id.set(cid)
    return cid


def set_correlation_id(cid: str) -> None:
    """Set correlation ID for current context."""
    correlation_id.set(cid)


class Timer:
    """
    Context manager for timing operations.

    Usage:
        with Timer() as t:
            await expensive_operation()
        logger.info("Operation completed", duration_ms=t.duration_ms)
    """

    def __init__(self):
        self._start: float = 0
        self._end: float = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self._end = time.perf_counter()

    @property
    def duration_ms(self) -> float:
        """Duration in milliseconds, rounded to 2 decimal places."""
        return round((self._end - self._start) * 1000, 2)


def sanitize_for_logging(value: str | None, visible_chars: int = 4) -> str:
    """
    Truncate a contact value (email, phone) for logging.

    Args:
        value: The sensitive value
        visible_chars: Number of characters to show

    Returns:
        Truncated value with ellipsis
    """
    if not value:
        return ""
    if len(value) <= visible_chars:
        return value
    return value[:visible_chars] + "..."
