"""Claimant registry for a single dispute.

Identities are unique per dispute: the claimant id is compared
case-insensitively, and a non-blank contact email is a fallback match.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from lostfound_disputes.domain.errors.dispute import (
    DuplicateClaimantError,
    UnknownClaimantError,
)
from lostfound_disputes.domain.models.claimant import (
    Claimant,
    ClaimStatus,
    normalize_identity,
)


@dataclass(frozen=True, eq=True)
class ClaimantRegistry:
    """Ordered, immutable collection of a dispute's claimants.

    Registration order is preserved and is the order in which tallies and
    views list claimants.
    """

    claimants: tuple[Claimant, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.claimants)

    def __iter__(self) -> Iterator[Claimant]:
        return iter(self.claimants)

    def find(self, claimant_id: str) -> Claimant | None:
        """Look up a claimant by id, case-insensitively."""
        key = normalize_identity(claimant_id)
        for claimant in self.claimants:
            if claimant.identity_key == key:
                return claimant
        return None

    def get(self, claimant_id: str) -> Claimant:
        """Look up a claimant by id.

        Raises:
            UnknownClaimantError: If no claimant matches.
        """
        claimant = self.find(claimant_id)
        if claimant is None:
            raise UnknownClaimantError(claimant_id)
        return claimant

    def duplicate_match(self, candidate: Claimant) -> str | None:
        """Return "id" or "email" if candidate collides with a registered claimant."""
        for claimant in self.claimants:
            if claimant.identity_key == candidate.identity_key:
                return "id"
            if candidate.email_key and claimant.email_key == candidate.email_key:
                return "email"
        return None

    def register(self, claimant: Claimant) -> ClaimantRegistry:
        """Return a registry with the claimant appended.

        Raises:
            DuplicateClaimantError: If the identity is already registered.
        """
        matched_on = self.duplicate_match(claimant)
        if matched_on is not None:
            raise DuplicateClaimantError(claimant.claimant_id, matched_on)
        return ClaimantRegistry(claimants=(*self.claimants, claimant))

    def link_evidence(self, claimant_id: str, evidence_id: str) -> ClaimantRegistry:
        owner = self.get(claimant_id)
        return ClaimantRegistry(
            claimants=tuple(
                c.with_evidence(evidence_id) if c is owner else c
                for c in self.claimants
            )
        )

    def mark_under_review(self) -> ClaimantRegistry:
        """Move every SUBMITTED claim to UNDER_REVIEW."""
        return ClaimantRegistry(
            claimants=tuple(
                c.with_status(ClaimStatus.UNDER_REVIEW)
                if c.claim_status == ClaimStatus.SUBMITTED
                else c
                for c in self.claimants
            )
        )

    def mark_decision(self, winner_id: str) -> ClaimantRegistry:
        """Approve the winner and reject every other claimant."""
        winner = self.get(winner_id)
        return ClaimantRegistry(
            claimants=tuple(
                c.with_status(
                    ClaimStatus.APPROVED if c is winner else ClaimStatus.REJECTED
                )
                for c in self.claimants
            )
        )

    def ids(self) -> list[str]:
        return [c.claimant_id for c in self.claimants]

    def involved_enterprises(self) -> list[str]:
        """Distinct enterprise names across claimants, in registration order."""
        seen: list[str] = []
        for claimant in self.claimants:
            if claimant.enterprise_name and claimant.enterprise_name not in seen:
                seen.append(claimant.enterprise_name)
        return seen

    def to_list(self) -> list[dict[str, Any]]:
        return [c.to_dict() for c in self.claimants]

    @classmethod
    def from_list(cls, data: list[dict[str, Any]]) -> ClaimantRegistry:
        return cls(claimants=tuple(Claimant.from_dict(item) for item in data))
