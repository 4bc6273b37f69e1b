"""Staffing stub implementation."""

from __future__ import annotations

from lostfound_disputes.application.ports.staffing import StaffingProtocol
from lostfound_disputes.domain.models.dispute_case import DisputeCase
from lostfound_disputes.domain.models.panel_member import PanelMember


class StaffingStub(StaffingProtocol):
    """Returns a fixed candidate list, skipping claimants' own enterprises.

    Attributes:
        failing: When True every call raises ConnectionError.
    """

    def __init__(self, candidates: list[PanelMember] | None = None) -> None:
        self._candidates = list(candidates or [])
        self.failing = False
        self.calls = 0

    async def get_panel_candidates(self, dispute: DisputeCase) -> list[PanelMember]:
        self.calls += 1
        if self.failing:
            raise ConnectionError("staffing service unavailable")
        involved = set(dispute.involved_enterprises)
        neutral = [m for m in self._candidates if m.enterprise_name not in involved]
        # Not enough neutral staff: fall back to everyone
        return neutral if len(neutral) >= 3 else list(self._candidates)
