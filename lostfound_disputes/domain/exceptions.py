"""Base exception classes for the dispute resolution domain layer."""

from __future__ import annotations


class DisputeEngineError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class so callers
    can handle engine failures uniformly.

    Attributes:
        violation: Short machine-readable name of the violated invariant.
        dispute_id: Dispute the error relates to, if any.
        status: Dispute status at the time of the error, if known.
        version: Dispute version at the time of the error, if known.
    """

    violation: str = "dispute_engine_error"

    def __init__(
        self,
        message: str = "",
        *,
        dispute_id: str | None = None,
        status: str | None = None,
        version: int | None = None,
    ) -> None:
        """Initialize the exception with an optional message and case context.

        Args:
            message: Human-readable error description.
            dispute_id: Dispute the error relates to.
            status: Current dispute status value.
            version: Current dispute version.
        """
        super().__init__(message)
        self.dispute_id = dispute_id
        self.status = status
        self.version = version

    def to_dict(self) -> dict[str, str | int | None]:
        """Render the error context for callers and problem responses."""
        return {
            "violation": self.violation,
            "detail": str(self),
            "dispute_id": self.dispute_id,
            "status": self.status,
            "version": self.version,
        }
