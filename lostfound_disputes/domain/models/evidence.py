"""Evidence domain models.

Evidence items are append-only. The only mutation an item ever sees is its
single verification; after that it is immutable. Stolen-property registry
checks for serial numbers are kept as separate audit records so a late
check result never touches a verified item.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from uuid6 import uuid7

from lostfound_disputes.domain.errors.dispute import MalformedEvidenceError


class EvidenceType(Enum):
    """Kind of supporting material."""

    RECEIPT = "RECEIPT"
    PHOTO = "PHOTO"
    SERIAL_NUMBER = "SERIAL_NUMBER"
    WITNESS = "WITNESS"
    OTHER = "OTHER"


class VerificationResult(Enum):
    """Ownership verification result for an evidence item."""

    PENDING = "PENDING"
    VALID = "VALID"
    INVALID = "INVALID"


class RegistryCheckOutcome(Enum):
    """Result of checking a serial number against the stolen-property registry.

    Outcomes:
        CLEAR: Registry returned no match
        MATCH: Serial number is registered as stolen
        UNVERIFIED: Registry unavailable or timed out; check stays unresolved
    """

    CLEAR = "CLEAR"
    MATCH = "MATCH"
    UNVERIFIED = "UNVERIFIED"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def new_evidence_id() -> str:
    """Generate a time-ordered evidence identifier."""
    return f"EV-{uuid7().hex}"


@dataclass(frozen=True, eq=True)
class EvidenceItem:
    """A piece of supporting material submitted toward a claim.

    Attributes:
        claimant_id: Claimant this evidence supports (owner).
        submitted_by_id: Who submitted it (the claimant or an investigator).
        submitted_by_name: Submitter display name.
        evidence_type: Kind of evidence.
        description: What the evidence shows.
        document_ref: Optional reference to an uploaded document.
        serial_number: Serial number (required for SERIAL_NUMBER evidence).
        evidence_id: Ledger-assigned id (empty until appended).
        submitted_at: Ledger-assigned timestamp (None until appended).
        verified: True once an investigator has verified the item.
        verification_result: PENDING until verified.
        verified_by: Who verified the item.
        verified_at: When the item was verified.
    """

    claimant_id: str
    submitted_by_id: str
    submitted_by_name: str
    evidence_type: EvidenceType
    description: str
    document_ref: str | None = None
    serial_number: str | None = None
    evidence_id: str = ""
    submitted_at: datetime | None = None
    verified: bool = False
    verification_result: VerificationResult = VerificationResult.PENDING
    verified_by: str | None = None
    verified_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate evidence payload."""
        if not self.claimant_id or not self.claimant_id.strip():
            raise MalformedEvidenceError("Evidence must name the claimant it supports")
        if not self.submitted_by_id or not self.submitted_by_id.strip():
            raise MalformedEvidenceError("Evidence must name its submitter")
        if not self.description or not self.description.strip():
            raise MalformedEvidenceError("Evidence description must not be blank")
        if self.evidence_type == EvidenceType.SERIAL_NUMBER and (
            not self.serial_number or not self.serial_number.strip()
        ):
            raise MalformedEvidenceError(
                "SERIAL_NUMBER evidence must carry the serial number"
            )
        if self.verified == (self.verification_result == VerificationResult.PENDING):
            raise MalformedEvidenceError(
                "verified flag and verification_result disagree "
                f"(verified={self.verified}, result={self.verification_result.value})"
            )

    @property
    def is_serial_number(self) -> bool:
        return self.evidence_type == EvidenceType.SERIAL_NUMBER

    def appended(self, evidence_id: str, submitted_at: datetime) -> EvidenceItem:
        """Stamp the ledger-assigned id and timestamp."""
        return replace(self, evidence_id=evidence_id, submitted_at=submitted_at)

    def with_verification(
        self,
        result: VerificationResult,
        verified_by: str,
        verified_at: datetime,
    ) -> EvidenceItem:
        """Record the single permitted verification."""
        return replace(
            self,
            verified=True,
            verification_result=result,
            verified_by=verified_by,
            verified_at=verified_at,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for storage."""
        return {
            "evidence_id": self.evidence_id,
            "claimant_id": self.claimant_id,
            "submitted_by_id": self.submitted_by_id,
            "submitted_by_name": self.submitted_by_name,
            "evidence_type": self.evidence_type.value,
            "description": self.description,
            "document_ref": self.document_ref,
            "serial_number": self.serial_number,
            "submitted_at": self.submitted_at.isoformat() if self.submitted_at else None,
            "verified": self.verified,
            "verification_result": self.verification_result.value,
            "verified_by": self.verified_by,
            "verified_at": self.verified_at.isoformat() if self.verified_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EvidenceItem:
        """Deserialize from storage."""
        submitted_at = data.get("submitted_at")
        verified_at = data.get("verified_at")
        return cls(
            evidence_id=data["evidence_id"],
            claimant_id=data["claimant_id"],
            submitted_by_id=data["submitted_by_id"],
            submitted_by_name=data["submitted_by_name"],
            evidence_type=EvidenceType(data["evidence_type"]),
            description=data["description"],
            document_ref=data.get("document_ref"),
            serial_number=data.get("serial_number"),
            submitted_at=datetime.fromisoformat(submitted_at) if submitted_at else None,
            verified=bool(data["verified"]),
            verification_result=VerificationResult(data["verification_result"]),
            verified_by=data.get("verified_by"),
            verified_at=datetime.fromisoformat(verified_at) if verified_at else None,
        )


@dataclass(frozen=True, eq=True)
class RegistryCheckRecord:
    """Audit record of one stolen-property registry check.

    Attributes:
        evidence_id: SERIAL_NUMBER evidence that was checked.
        serial_number: The serial number sent to the registry.
        outcome: CLEAR, MATCH or UNVERIFIED.
        reference_id: Registry reference for a match, if any.
        checked_at: When the result was recorded.
    """

    evidence_id: str
    serial_number: str
    outcome: RegistryCheckOutcome
    reference_id: str | None = None
    checked_at: datetime = field(default_factory=_utc_now)

    @property
    def is_match(self) -> bool:
        return self.outcome == RegistryCheckOutcome.MATCH

    def to_dict(self) -> dict[str, Any]:
        """Serialize for storage."""
        return {
            "evidence_id": self.evidence_id,
            "serial_number": self.serial_number,
            "outcome": self.outcome.value,
            "reference_id": self.reference_id,
            "checked_at": self.checked_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RegistryCheckRecord:
        """Deserialize from storage."""
        return cls(
            evidence_id=data["evidence_id"],
            serial_number=data["serial_number"],
            outcome=RegistryCheckOutcome(data["outcome"]),
            reference_id=data.get("reference_id"),
            checked_at=datetime.fromisoformat(data["checked_at"]),
        )
