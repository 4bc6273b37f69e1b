"""Verification panel member.

Panel members are referenced by id; the staffing collaborator owns them.
Within a dispute a member holds at most one current vote. Resubmitting
replaces it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

# Sentinel vote value for a member who declines to back any claimant
ABSTAIN = "abstain"


@dataclass(frozen=True, eq=True)
class PanelMember:
    """An adjudicator assigned to a dispute's verification panel.

    Attributes:
        member_id: Staffing identity of the member.
        name: Display name.
        role: Role on the panel (e.g. "CAMPUS_COORDINATOR").
        enterprise_name: Enterprise the member represents.
        has_voted: True once any vote (including abstain) is recorded.
        vote: Claimant id voted for, ABSTAIN, or None.
        vote_reason: Free-text justification.
        voted_at: When the current vote was recorded.
    """

    member_id: str
    name: str
    role: str = "PANELIST"
    enterprise_name: str = ""
    has_voted: bool = False
    vote: str | None = None
    vote_reason: str | None = None
    voted_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate member invariants."""
        if not self.member_id or not self.member_id.strip():
            raise ValueError("member_id must not be blank")
        if self.has_voted != (self.vote is not None):
            raise ValueError("has_voted must be True exactly when a vote is recorded")

    @property
    def is_abstaining(self) -> bool:
        return self.vote == ABSTAIN

    def has_same_vote(self, vote: str, reason: str | None) -> bool:
        """True when (vote, reason) matches the vote already on record."""
        return self.has_voted and self.vote == vote and self.vote_reason == reason

    def with_vote(self, vote: str, reason: str | None, voted_at: datetime) -> PanelMember:
        return replace(
            self,
            has_voted=True,
            vote=vote,
            vote_reason=reason,
            voted_at=voted_at,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for storage."""
        return {
            "member_id": self.member_id,
            "name": self.name,
            "role": self.role,
            "enterprise_name": self.enterprise_name,
            "has_voted": self.has_voted,
            "vote": self.vote,
            "vote_reason": self.vote_reason,
            "voted_at": self.voted_at.isoformat() if self.voted_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PanelMember:
        """Deserialize from storage."""
        voted_at = data.get("voted_at")
        return cls(
            member_id=data["member_id"],
            name=data["name"],
            role=data.get("role", "PANELIST"),
            enterprise_name=data.get("enterprise_name", ""),
            has_voted=bool(data.get("has_voted", False)),
            vote=data.get("vote"),
            vote_reason=data.get("vote_reason"),
            voted_at=datetime.fromisoformat(voted_at) if voted_at else None,
        )
