"""Escalation channel port.

Notified whenever a dispute enters ESCALATED. For police escalations this
is the law-enforcement hand-off; delivery failures never roll back the
escalation itself.
"""

from __future__ import annotations

from typing import Protocol

from lostfound_disputes.domain.models.dispute_case import DisputeCase


class EscalationChannelProtocol(Protocol):
    """Protocol for escalation notifications."""

    async def notify_escalated(self, case: DisputeCase) -> None:
        """Deliver an escalation notice.

        Args:
            case: The dispute snapshot in ESCALATED state.
        """
        ...
