"""Correlation ids for tracing one request across async boundaries.

The id lives in a ContextVar, so it follows the request through awaited
service calls without being passed explicitly. Background serial checks
started during a request inherit it when their task is created.

Usage:
    correlation_id = request.headers.get("X-Correlation-ID") or generate_correlation_id()
    set_correlation_id(correlation_id)
"""

from contextvars import ContextVar
from typing import Any

from uuid6 import uuid7

# Empty string means "no correlation id in this context"
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Generate a new time-ordered correlation id."""
    return str(uuid7())


def get_correlation_id() -> str:
    """Return the current correlation id, or "" if none was set."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation id for the current context."""
    _correlation_id.set(correlation_id)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding correlation_id to every log entry.

    Args:
        logger: The logger instance (unused, required by structlog).
        method_name: The logging method name (unused, required by structlog).
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with correlation_id added when one is set.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict
