"""Fatal integrity errors and lookup failures.

Corrupted persisted state is never auto-repaired. The dispute is frozen
against further mutation and the findings go to the operator channel.
"""

from __future__ import annotations

from lostfound_disputes.domain.exceptions import DisputeEngineError


class DisputeNotFoundError(DisputeEngineError):
    """Raised when a dispute id is not known to the store."""

    violation = "known_dispute"

    def __init__(self, dispute_id: str) -> None:
        super().__init__(f"Dispute {dispute_id} not found", dispute_id=dispute_id)


class CorruptedDisputeStateError(DisputeEngineError):
    """Raised when a persisted dispute violates its structural invariants.

    Example: status RESOLVED with no winning claimant.

    Attributes:
        violations: Human-readable list of integrity findings.
    """

    violation = "dispute_integrity"

    def __init__(
        self,
        violations: list[str],
        *,
        dispute_id: str | None = None,
        status: str | None = None,
        version: int | None = None,
    ) -> None:
        self.violations = list(violations)
        super().__init__(
            f"Dispute {dispute_id} state is corrupted: " + "; ".join(self.violations),
            dispute_id=dispute_id,
            status=status,
            version=version,
        )


class DisputeFrozenError(DisputeEngineError):
    """Raised when mutating a dispute frozen after an integrity failure."""

    violation = "frozen_dispute"

    def __init__(self, dispute_id: str) -> None:
        super().__init__(
            f"Dispute {dispute_id} is frozen pending operator review",
            dispute_id=dispute_id,
        )
