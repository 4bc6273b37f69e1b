"""Dispute DTOs.

Architecture Note:
Application layer defines its own DTOs. API layer converts these to
Pydantic response models, so the application layer has no dependency
on the API layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from lostfound_disputes.domain.models.dispute_case import DisputeCase
from lostfound_disputes.domain.services.resolution_engine import tally_votes


@dataclass(frozen=True)
class MutationReceipt:
    """Result of an accepted mutation.

    Attributes:
        dispute_id: Dispute that was mutated.
        version: Version after the mutation.
        status: Status after the mutation.
        evidence_id: Ledger-assigned id, for evidence submissions.
    """

    dispute_id: str
    version: int
    status: str
    evidence_id: str | None = None

    @classmethod
    def for_case(cls, case: DisputeCase) -> MutationReceipt:
        return cls(
            dispute_id=case.dispute_id,
            version=case.version,
            status=case.status.value,
        )


@dataclass(frozen=True)
class ClaimantView:
    claimant_id: str
    name: str
    enterprise_name: str
    claim_status: str
    trust_score_snapshot: float
    evidence_ids: tuple[str, ...]


@dataclass(frozen=True)
class EvidenceView:
    evidence_id: str
    claimant_id: str
    evidence_type: str
    description: str
    verified: bool
    verification_result: str
    registry_check: str | None
    submitted_at: datetime | None


@dataclass(frozen=True)
class PanelMemberView:
    member_id: str
    name: str
    role: str
    has_voted: bool
    vote: str | None


@dataclass(frozen=True)
class DisputeView:
    """Immutable read snapshot of a dispute.

    Built from a single aggregate version, so every field reflects the same
    committed state.
    """

    dispute_id: str
    version: int
    status: str
    priority: str
    dispute_type: str
    item_id: str
    item_title: str
    involved_enterprises: tuple[str, ...]
    claimants: tuple[ClaimantView, ...]
    evidence: tuple[EvidenceView, ...]
    panel: tuple[PanelMemberView, ...]
    votes_required: int
    tally: dict[str, int]
    winning_claimant_id: str | None
    winning_claimant_name: str | None
    resolution_decision: str | None
    resolution_reason: str | None
    escalation_reason: str | None
    police_involved: bool
    police_officer_name: str | None
    case_notes: tuple[str, ...]
    summary: str
    created_at: datetime
    closed_at: datetime | None

    @classmethod
    def from_case(cls, case: DisputeCase) -> DisputeView:
        """Project a dispute aggregate into a view."""
        evidence = []
        for item in case.ledger.items:
            check = case.ledger.registry_check_for(item.evidence_id)
            evidence.append(
                EvidenceView(
                    evidence_id=item.evidence_id,
                    claimant_id=item.claimant_id,
                    evidence_type=item.evidence_type.value,
                    description=item.description,
                    verified=item.verified,
                    verification_result=item.verification_result.value,
                    registry_check=check.outcome.value if check else None,
                    submitted_at=item.submitted_at,
                )
            )
        return cls(
            dispute_id=case.dispute_id,
            version=case.version,
            status=case.status.value,
            priority=case.priority.value,
            dispute_type=case.dispute_type.value,
            item_id=case.item.item_id,
            item_title=case.item.title,
            involved_enterprises=tuple(case.involved_enterprises),
            claimants=tuple(
                ClaimantView(
                    claimant_id=c.claimant_id,
                    name=c.name,
                    enterprise_name=c.enterprise_name,
                    claim_status=c.claim_status.value,
                    trust_score_snapshot=c.trust_score_snapshot,
                    evidence_ids=c.evidence_ids,
                )
                for c in case.claimants
            ),
            evidence=tuple(evidence),
            panel=tuple(
                PanelMemberView(
                    member_id=m.member_id,
                    name=m.name,
                    role=m.role,
                    has_voted=m.has_voted,
                    vote=m.vote,
                )
                for m in case.panel.members
            ),
            votes_required=case.votes_required,
            tally=tally_votes(case.registry, case.panel),
            winning_claimant_id=case.winning_claimant_id,
            winning_claimant_name=case.winning_claimant_name,
            resolution_decision=(
                case.resolution_decision.value if case.resolution_decision else None
            ),
            resolution_reason=case.resolution_reason,
            escalation_reason=case.escalation_reason,
            police_involved=case.police_involved,
            police_officer_name=case.police_officer_name,
            case_notes=tuple(
                f"[{n.created_at.isoformat()}] {n.author}: {n.text}"
                for n in case.case_notes
            ),
            summary=case.status_summary(),
            created_at=case.created_at,
            closed_at=case.closed_at,
        )
