"""Dispute service dependencies.

FastAPI dependency injection for the dispute resolution service.
"""

from lostfound_disputes.application.services.dispute_resolution_service import (
    DisputeResolutionService,
)

# Singleton instance (initialized at startup)
_dispute_service: DisputeResolutionService | None = None


def get_dispute_service() -> DisputeResolutionService:
    """Get the dispute resolution service singleton.

    Raises:
        RuntimeError: If service not initialized (startup error).
    """
    if _dispute_service is None:
        raise RuntimeError(
            "DisputeResolutionService not initialized. "
            "Call set_dispute_service() during startup."
        )
    return _dispute_service


def set_dispute_service(service: DisputeResolutionService | None) -> None:
    """Set the dispute resolution service singleton.

    Called during application startup; tests use it to inject a service
    wired with stubs, and pass None to reset.
    """
    global _dispute_service
    _dispute_service = service


def is_dispute_service_set() -> bool:
    return _dispute_service is not None


__all__ = [
    "get_dispute_service",
    "is_dispute_service_set",
    "set_dispute_service",
]
