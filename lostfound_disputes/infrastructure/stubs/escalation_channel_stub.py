"""Escalation channel stub implementation."""

from __future__ import annotations

from lostfound_disputes.application.ports.escalation_channel import (
    EscalationChannelProtocol,
)
from lostfound_disputes.domain.models.dispute_case import DisputeCase


class EscalationChannelStub(EscalationChannelProtocol):
    """Records escalation notices in memory.

    Attributes:
        notices: Escalated dispute snapshots, in delivery order.
        failing: When True every delivery raises ConnectionError.
    """

    def __init__(self) -> None:
        self.notices: list[DisputeCase] = []
        self.failing = False

    async def notify_escalated(self, case: DisputeCase) -> None:
        if self.failing:
            raise ConnectionError("escalation channel unavailable")
        self.notices.append(case)
