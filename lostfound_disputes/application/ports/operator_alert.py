"""Operator alert port.

Receives fatal integrity findings. Corrupted disputes are never repaired
automatically; an operator reviews them.
"""

from __future__ import annotations

from typing import Protocol


class OperatorAlertProtocol(Protocol):
    """Protocol for alerting operators to corrupted dispute state."""

    async def report_corruption(self, dispute_id: str, violations: list[str]) -> None:
        """Report a dispute whose stored state violates its invariants.

        Args:
            dispute_id: The corrupted dispute.
            violations: Integrity findings.
        """
        ...
