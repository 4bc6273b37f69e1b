"""Claimant domain model.

A claimant is a party asserting ownership of the disputed item. The trust
score is captured once, at registration, and never updated afterwards so
that a decision is reproducible from the recorded state alone.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

# Trust scores are reported on a 0-100 scale
MIN_TRUST_SCORE = 0.0
MAX_TRUST_SCORE = 100.0


class ClaimStatus(Enum):
    """Status of an individual claim within a dispute.

    Statuses:
        SUBMITTED: Registered, dispute not yet under review
        UNDER_REVIEW: Dispute has evidence or votes in progress
        APPROVED: Claimant won the dispute
        REJECTED: Another claimant won the dispute
    """

    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def normalize_identity(value: str) -> str:
    """Case-insensitive identity key used for uniqueness checks."""
    return value.strip().casefold()


@dataclass(frozen=True, eq=True)
class Claimant:
    """A party claiming ownership of the disputed item.

    Attributes:
        claimant_id: Stable user identity.
        name: Display name.
        enterprise_name: Enterprise the claimant belongs to.
        claim_description: Why the claimant believes the item is theirs.
        trust_score_snapshot: Trust score (0-100) captured at registration.
        email: Contact email, used as a fallback uniqueness key.
        enterprise_id: Enterprise identifier.
        organization_name: Organization within the enterprise.
        proof_description: What proof the claimant says they have.
        claim_status: Current claim status.
        evidence_ids: Ids of evidence this claimant owns (always initialized).
        submitted_at: Registration timestamp (UTC).
    """

    claimant_id: str
    name: str
    enterprise_name: str
    claim_description: str = ""
    trust_score_snapshot: float = 50.0
    email: str | None = None
    enterprise_id: str | None = None
    organization_name: str | None = None
    proof_description: str = ""
    claim_status: ClaimStatus = ClaimStatus.SUBMITTED
    evidence_ids: tuple[str, ...] = field(default_factory=tuple)
    submitted_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate claimant invariants."""
        if not self.claimant_id or not self.claimant_id.strip():
            raise ValueError("claimant_id must not be blank")
        if not MIN_TRUST_SCORE <= self.trust_score_snapshot <= MAX_TRUST_SCORE:
            raise ValueError(
                f"trust_score_snapshot must be between {MIN_TRUST_SCORE} and "
                f"{MAX_TRUST_SCORE}, got {self.trust_score_snapshot}"
            )

    @property
    def identity_key(self) -> str:
        return normalize_identity(self.claimant_id)

    @property
    def email_key(self) -> str | None:
        if not self.email or not self.email.strip():
            return None
        return normalize_identity(self.email)

    def with_status(self, status: ClaimStatus) -> Claimant:
        return replace(self, claim_status=status)

    def with_evidence(self, evidence_id: str) -> Claimant:
        return replace(self, evidence_ids=(*self.evidence_ids, evidence_id))

    def to_dict(self) -> dict[str, Any]:
        """Serialize for storage."""
        return {
            "claimant_id": self.claimant_id,
            "name": self.name,
            "enterprise_name": self.enterprise_name,
            "claim_description": self.claim_description,
            "trust_score_snapshot": self.trust_score_snapshot,
            "email": self.email,
            "enterprise_id": self.enterprise_id,
            "organization_name": self.organization_name,
            "proof_description": self.proof_description,
            "claim_status": self.claim_status.value,
            "evidence_ids": list(self.evidence_ids),
            "submitted_at": self.submitted_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Claimant:
        """Deserialize from storage."""
        return cls(
            claimant_id=data["claimant_id"],
            name=data["name"],
            enterprise_name=data["enterprise_name"],
            claim_description=data.get("claim_description", ""),
            trust_score_snapshot=float(data["trust_score_snapshot"]),
            email=data.get("email"),
            enterprise_id=data.get("enterprise_id"),
            organization_name=data.get("organization_name"),
            proof_description=data.get("proof_description", ""),
            claim_status=ClaimStatus(data["claim_status"]),
            evidence_ids=tuple(data.get("evidence_ids", ())),
            submitted_at=datetime.fromisoformat(data["submitted_at"]),
        )
