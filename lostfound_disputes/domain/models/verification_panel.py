"""Verification panel assigned to a dispute.

The panel is assigned once; its size and the votes required are fixed at
that moment. A panel with no members means "not yet assigned".
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from lostfound_disputes.domain.errors.dispute import (
    DuplicatePanelMemberError,
    PanelTooSmallError,
    UnknownPanelMemberError,
)
from lostfound_disputes.domain.models.panel_member import PanelMember

# Minimum number of panel members
MIN_PANEL_SIZE = 3


def votes_required_for(panel_size: int) -> int:
    """Non-abstaining votes needed for quorum: ceil(n / 2)."""
    return math.ceil(panel_size / 2)


@dataclass(frozen=True, eq=True)
class VerificationPanel:
    """A dispute's adjudicators and their current votes.

    Attributes:
        members: Panel members in assignment order.
        votes_required: Quorum size, fixed at assignment (0 when unassigned).
        assigned_at: When the panel was assigned.
    """

    members: tuple[PanelMember, ...] = field(default_factory=tuple)
    votes_required: int = 0
    assigned_at: datetime | None = None

    @classmethod
    def assign(
        cls, members: list[PanelMember], assigned_at: datetime
    ) -> VerificationPanel:
        """Create the panel for a dispute.

        Raises:
            PanelTooSmallError: If fewer than MIN_PANEL_SIZE members.
            DuplicatePanelMemberError: If a member id is listed twice.
        """
        seen: set[str] = set()
        for member in members:
            if member.member_id in seen:
                raise DuplicatePanelMemberError(member.member_id)
            seen.add(member.member_id)
        if len(members) < MIN_PANEL_SIZE:
            raise PanelTooSmallError(len(members), MIN_PANEL_SIZE)
        return cls(
            members=tuple(members),
            votes_required=votes_required_for(len(members)),
            assigned_at=assigned_at,
        )

    @property
    def is_assigned(self) -> bool:
        return len(self.members) > 0

    @property
    def size(self) -> int:
        return len(self.members)

    def member(self, member_id: str) -> PanelMember:
        """Look up a member.

        Raises:
            UnknownPanelMemberError: If member_id is not on the panel.
        """
        for member in self.members:
            if member.member_id == member_id:
                return member
        raise UnknownPanelMemberError(member_id)

    def record_vote(
        self,
        member_id: str,
        vote: str,
        reason: str | None,
        voted_at: datetime,
    ) -> VerificationPanel:
        """Return a panel with the member's current vote replaced."""
        current = self.member(member_id)
        updated = current.with_vote(vote, reason, voted_at)
        return VerificationPanel(
            members=tuple(updated if m is current else m for m in self.members),
            votes_required=self.votes_required,
            assigned_at=self.assigned_at,
        )

    def non_abstaining_votes(self) -> dict[str, str]:
        """Map of member_id to claimant_id for members backing a claimant."""
        return {
            m.member_id: m.vote
            for m in self.members
            if m.has_voted and not m.is_abstaining and m.vote is not None
        }

    @property
    def voted_count(self) -> int:
        return sum(1 for m in self.members if m.has_voted)

    @property
    def pending_count(self) -> int:
        return self.size - self.voted_count

    @property
    def is_exhausted(self) -> bool:
        """True once every member has cast a vote (abstentions included)."""
        return self.is_assigned and self.pending_count == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "members": [m.to_dict() for m in self.members],
            "votes_required": self.votes_required,
            "assigned_at": self.assigned_at.isoformat() if self.assigned_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VerificationPanel:
        assigned_at = data.get("assigned_at")
        return cls(
            members=tuple(PanelMember.from_dict(m) for m in data.get("members", ())),
            votes_required=int(data.get("votes_required", 0)),
            assigned_at=datetime.fromisoformat(assigned_at) if assigned_at else None,
        )
