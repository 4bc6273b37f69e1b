"""Append-only evidence ledger for a single dispute.

Items are never removed or reordered. Each item may be verified exactly
once. Serial-number registry checks are recorded alongside the items, at
most one per evidence item.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from lostfound_disputes.domain.errors.dispute import (
    AlreadyVerifiedError,
    EvidenceNotFoundError,
)
from lostfound_disputes.domain.models.evidence import (
    EvidenceItem,
    RegistryCheckRecord,
    VerificationResult,
    new_evidence_id,
)


@dataclass(frozen=True, eq=True)
class EvidenceLedger:
    """Ordered, append-only evidence store.

    Attributes:
        items: Evidence items in submission order.
        registry_checks: Stolen-property registry check records.
    """

    items: tuple[EvidenceItem, ...] = field(default_factory=tuple)
    registry_checks: tuple[RegistryCheckRecord, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.items)

    def find(self, evidence_id: str) -> EvidenceItem | None:
        for item in self.items:
            if item.evidence_id == evidence_id:
                return item
        return None

    def get(self, evidence_id: str) -> EvidenceItem:
        """Look up an evidence item.

        Raises:
            EvidenceNotFoundError: If the id is not in the ledger.
        """
        item = self.find(evidence_id)
        if item is None:
            raise EvidenceNotFoundError(evidence_id)
        return item

    def append(
        self, evidence: EvidenceItem, submitted_at: datetime
    ) -> tuple[EvidenceLedger, EvidenceItem]:
        """Append an item, assigning its id and timestamp.

        Returns:
            Tuple of (new ledger, stamped evidence item).
        """
        stamped = evidence.appended(new_evidence_id(), submitted_at)
        ledger = EvidenceLedger(
            items=(*self.items, stamped),
            registry_checks=self.registry_checks,
        )
        return ledger, stamped

    def verify(
        self,
        evidence_id: str,
        result: VerificationResult,
        verified_by: str,
        verified_at: datetime,
    ) -> EvidenceLedger:
        """Record the single verification of an evidence item.

        Args:
            evidence_id: Item to verify.
            result: VALID or INVALID.
            verified_by: Investigator recording the result.
            verified_at: Verification timestamp.

        Returns:
            New ledger with the item verified.

        Raises:
            EvidenceNotFoundError: If the id is not in the ledger.
            AlreadyVerifiedError: If the item was verified before.
            ValueError: If result is PENDING.
        """
        if result == VerificationResult.PENDING:
            raise ValueError("Verification result must be VALID or INVALID")
        current = self.get(evidence_id)
        if current.verified:
            raise AlreadyVerifiedError(
                evidence_id, current.verification_result.value
            )
        verified = current.with_verification(result, verified_by, verified_at)
        return EvidenceLedger(
            items=tuple(verified if i is current else i for i in self.items),
            registry_checks=self.registry_checks,
        )

    def registry_check_for(self, evidence_id: str) -> RegistryCheckRecord | None:
        for record in self.registry_checks:
            if record.evidence_id == evidence_id:
                return record
        return None

    def record_registry_check(self, record: RegistryCheckRecord) -> EvidenceLedger:
        """Append a registry check record.

        Raises:
            EvidenceNotFoundError: If the checked evidence is not in the ledger.
        """
        self.get(record.evidence_id)
        return EvidenceLedger(
            items=self.items,
            registry_checks=(*self.registry_checks, record),
        )

    def stolen_property_matches(self) -> list[RegistryCheckRecord]:
        return [r for r in self.registry_checks if r.is_match]

    def valid_count(self, claimant_id: str) -> int:
        """Number of VALID evidence items owned by a claimant."""
        return sum(
            1
            for item in self.items
            if item.claimant_id == claimant_id
            and item.verification_result == VerificationResult.VALID
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "registry_checks": [r.to_dict() for r in self.registry_checks],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EvidenceLedger:
        return cls(
            items=tuple(EvidenceItem.from_dict(i) for i in data.get("items", ())),
            registry_checks=tuple(
                RegistryCheckRecord.from_dict(r)
                for r in data.get("registry_checks", ())
            ),
        )
