"""Observability infrastructure: structured logging and correlation ids.

Usage:
    from lostfound_disputes.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")
"""

from lostfound_disputes.infrastructure.observability.correlation import (
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from lostfound_disputes.infrastructure.observability.logging import (
    configure_structlog,
)

__all__: list[str] = [
    "configure_structlog",
    "correlation_id_processor",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
]
