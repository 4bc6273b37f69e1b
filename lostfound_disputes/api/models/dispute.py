"""Dispute API request and response models.

Pydantic models for the /v1/disputes endpoints. Routes convert these to
domain objects and application DTOs back to responses; the application
layer never sees Pydantic types.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class DisputeTypeEnum(str, Enum):
    OWNERSHIP = "OWNERSHIP"
    PRIORITY = "PRIORITY"
    AUTHENTICITY = "AUTHENTICITY"


class DisputeStatusEnum(str, Enum):
    PENDING = "PENDING"
    UNDER_REVIEW = "UNDER_REVIEW"
    RESOLVED = "RESOLVED"
    ESCALATED = "ESCALATED"


class EvidenceTypeEnum(str, Enum):
    RECEIPT = "RECEIPT"
    PHOTO = "PHOTO"
    SERIAL_NUMBER = "SERIAL_NUMBER"
    WITNESS = "WITNESS"
    OTHER = "OTHER"


class VerificationResultEnum(str, Enum):
    VALID = "VALID"
    INVALID = "INVALID"


# =============================================================================
# Requests
# =============================================================================


class ItemSnapshotModel(BaseModel):
    """Disputed item, copied into the dispute at creation."""

    item_id: str = Field(..., min_length=1, description="Item identifier")
    title: str = Field(..., description="Short item name")
    description: str = Field("", description="Item description")
    category: str = Field("OTHER", description="Item category")
    estimated_value: float = Field(0.0, ge=0, description="Estimated value in dollars")
    current_location: str = Field("", description="Where the item is held")
    holding_enterprise_id: str | None = Field(None, description="Holding enterprise id")
    holding_enterprise_name: str | None = Field(
        None, description="Holding enterprise name"
    )


class ClaimantModel(BaseModel):
    """A claimant registration. The trust score is looked up server-side."""

    claimant_id: str = Field(..., min_length=1, description="Claimant user id")
    name: str = Field(..., description="Display name")
    enterprise_name: str = Field(..., description="Claimant's enterprise")
    claim_description: str = Field("", description="Why the item is theirs")
    email: str | None = Field(None, description="Contact email")
    enterprise_id: str | None = Field(None, description="Enterprise id")
    organization_name: str | None = Field(None, description="Organization")
    proof_description: str = Field("", description="Proof the claimant holds")


class CreateDisputeRequest(BaseModel):
    item: ItemSnapshotModel
    claimants: list[ClaimantModel] = Field(
        ..., description="Competing claimants (at least 2 distinct)"
    )
    dispute_type: DisputeTypeEnum = DisputeTypeEnum.OWNERSHIP
    dispute_reason: str | None = Field(None, description="Why the dispute was opened")
    initiated_by: str | None = Field(None, description="Initiator id")
    initiated_by_name: str | None = Field(None, description="Initiator name")


class AddClaimantRequest(BaseModel):
    claimant: ClaimantModel
    expected_version: int | None = Field(None, ge=1)


class SubmitEvidenceRequest(BaseModel):
    claimant_id: str = Field(..., description="Claimant the evidence supports")
    submitted_by_id: str = Field(..., description="Submitter id")
    submitted_by_name: str = Field(..., description="Submitter name")
    evidence_type: EvidenceTypeEnum
    description: str = Field(..., description="What the evidence shows")
    document_ref: str | None = None
    serial_number: str | None = Field(
        None, description="Required for SERIAL_NUMBER evidence"
    )
    expected_version: int | None = Field(None, ge=1)


class VerifyEvidenceRequest(BaseModel):
    result: VerificationResultEnum
    verified_by: str = Field(..., description="Investigator recording the result")
    expected_version: int | None = Field(None, ge=1)


class PanelMemberModel(BaseModel):
    member_id: str = Field(..., min_length=1)
    name: str
    role: str = "PANELIST"
    enterprise_name: str = ""


class AssignPanelRequest(BaseModel):
    members: list[PanelMemberModel] | None = Field(
        None, description="Explicit panel; omitted to request one from staffing"
    )
    expected_version: int | None = Field(None, ge=1)


class CastVoteRequest(BaseModel):
    member_id: str
    vote: str = Field(..., description="Claimant id or 'abstain'")
    reason: str | None = None
    expected_version: int | None = Field(None, ge=1)


class EscalateRequest(BaseModel):
    reason: str = Field(..., min_length=1)
    police_officer_name: str | None = None
    police_officer_id: str | None = None
    police_report_number: str | None = None
    expected_version: int | None = Field(None, ge=1)


class ResolveRequest(BaseModel):
    winner_id: str
    reason: str = Field(..., min_length=1)
    decided_by: str
    expected_version: int | None = Field(None, ge=1)


class AddNoteRequest(BaseModel):
    author: str
    text: str = Field(..., min_length=1)
    expected_version: int | None = Field(None, ge=1)


class PoliceFindingsRequest(BaseModel):
    report_number: str = Field(..., min_length=1)
    findings: str = Field(..., min_length=1)
    recorded_by: str


# =============================================================================
# Responses
# =============================================================================


class MutationReceiptResponse(BaseModel):
    dispute_id: str
    version: int
    status: DisputeStatusEnum
    evidence_id: str | None = None


class ClaimantResponse(BaseModel):
    claimant_id: str
    name: str
    enterprise_name: str
    claim_status: str
    trust_score_snapshot: float
    evidence_ids: list[str]


class EvidenceResponse(BaseModel):
    evidence_id: str
    claimant_id: str
    evidence_type: EvidenceTypeEnum
    description: str
    verified: bool
    verification_result: str
    registry_check: str | None
    submitted_at: datetime | None


class PanelMemberResponse(BaseModel):
    member_id: str
    name: str
    role: str
    has_voted: bool
    vote: str | None


class DisputeResponse(BaseModel):
    """Full read snapshot of a dispute at one version."""

    dispute_id: str
    version: int
    status: DisputeStatusEnum
    priority: str
    dispute_type: DisputeTypeEnum
    item_id: str
    item_title: str
    involved_enterprises: list[str]
    claimants: list[ClaimantResponse]
    evidence: list[EvidenceResponse]
    panel: list[PanelMemberResponse]
    votes_required: int
    tally: dict[str, int]
    winning_claimant_id: str | None
    winning_claimant_name: str | None
    resolution_decision: str | None
    resolution_reason: str | None
    escalation_reason: str | None
    police_involved: bool
    police_officer_name: str | None
    case_notes: list[str]
    summary: str
    created_at: datetime
    closed_at: datetime | None


class PoliceFindingsResponse(BaseModel):
    dispute_id: str
    report_number: str
    recorded_by: str
    recorded_at: datetime


class DisputeListResponse(BaseModel):
    items: list[DisputeResponse]
    total: int


class ProblemDetailResponse(BaseModel):
    """RFC 7807 problem details with dispute context."""

    type: str
    title: str
    status: int
    detail: str
    instance: str
    violation: str | None = None
    dispute_id: str | None = None
    dispute_status: str | None = None
    version: int | None = None
