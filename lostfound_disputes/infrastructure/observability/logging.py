"""Structured logging configuration with structlog.

Production emits one JSON object per line for log aggregation; other
environments get a readable console renderer. The level comes from the
LOG_LEVEL environment variable.

Log Entry Format:
    {
        "timestamp": "2026-01-01T00:00:00.000000Z",
        "level": "info",
        "event": "dispute_mutated",
        "correlation_id": "...",
        "component": "dispute_resolution_service",
        "dispute_id": "...",
        "version": 3,
        "status": "UNDER_REVIEW"
    }
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from lostfound_disputes.infrastructure.observability.correlation import (
    correlation_id_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    """Return the logging level configured in the environment."""
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_structlog(environment: str = "production") -> None:
    """Configure structlog once at startup.

    Args:
        environment: 'production' for JSON output, anything else for the
            console renderer.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
