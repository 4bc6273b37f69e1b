"""Staffing port.

Panel members are owned by the staffing collaborator; the engine asks it
for candidates when a panel is convened without an explicit member list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from lostfound_disputes.domain.models.panel_member import PanelMember

if TYPE_CHECKING:
    from lostfound_disputes.domain.models.dispute_case import DisputeCase


class StaffingProtocol(Protocol):
    """Protocol for selecting verification panel candidates."""

    async def get_panel_candidates(self, dispute: DisputeCase) -> list[PanelMember]:
        """Return panel candidates for a dispute.

        Implementations should avoid members from the claimants' own
        enterprises where possible.

        Args:
            dispute: The dispute needing a panel.

        Returns:
            Candidate panel members (the engine rejects fewer than 3).
        """
        ...
