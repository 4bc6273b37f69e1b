"""Dispute API routes.

FastAPI router for the dispute resolution engine:
- Open disputes and register late claimants
- Submit and verify evidence (serial numbers are checked in the background)
- Assign the verification panel and record votes
- Investigator escalation, administrative resolution and case notes
- Police findings on escalated disputes (audit log only)
- Read a single dispute or list disputes by status or participant

Every mutation accepts an optional expected_version; a stale version is
rejected with 409 and the current version in the problem body. Engine
errors are returned as RFC 7807 problem details carrying the violated
rule and the dispute's status and version.
"""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from lostfound_disputes.api.dependencies.disputes import get_dispute_service
from lostfound_disputes.api.models.dispute import (
    AddClaimantRequest,
    AddNoteRequest,
    AssignPanelRequest,
    CastVoteRequest,
    ClaimantModel,
    ClaimantResponse,
    CreateDisputeRequest,
    DisputeListResponse,
    DisputeResponse,
    DisputeStatusEnum,
    EscalateRequest,
    EvidenceResponse,
    EvidenceTypeEnum,
    MutationReceiptResponse,
    PanelMemberResponse,
    PoliceFindingsRequest,
    PoliceFindingsResponse,
    ProblemDetailResponse,
    ResolveRequest,
    SubmitEvidenceRequest,
    VerifyEvidenceRequest,
)
from lostfound_disputes.application.dtos.dispute import DisputeView, MutationReceipt
from lostfound_disputes.application.services.dispute_resolution_service import (
    DisputeResolutionService,
)
from lostfound_disputes.domain.errors import (
    CollaboratorUnavailableError,
    ConcurrentModificationError,
    CorruptedDisputeStateError,
    DisputeFrozenError,
    DisputeNotFoundError,
    DisputeStateError,
    DisputeValidationError,
    EvidenceNotFoundError,
)
from lostfound_disputes.domain.exceptions import DisputeEngineError
from lostfound_disputes.domain.models.claimant import Claimant
from lostfound_disputes.domain.models.dispute_case import (
    DEFAULT_DISPUTE_REASON,
    SYSTEM_INITIATOR,
    SYSTEM_INITIATOR_NAME,
    DisputeStatus,
    DisputeType,
)
from lostfound_disputes.domain.models.evidence import (
    EvidenceItem,
    EvidenceType,
    VerificationResult,
)
from lostfound_disputes.domain.models.item_snapshot import ItemSnapshot
from lostfound_disputes.domain.models.panel_member import PanelMember

router = APIRouter(prefix="/v1/disputes", tags=["disputes"])

PROBLEM_BASE = "https://lostfound.example.com/errors"

PROBLEM_RESPONSES = {
    400: {"model": ProblemDetailResponse, "description": "Request violates a dispute rule"},
    404: {"model": ProblemDetailResponse, "description": "Dispute or evidence not found"},
    409: {"model": ProblemDetailResponse, "description": "Stale version or terminal dispute"},
    500: {"model": ProblemDetailResponse, "description": "Dispute state corrupted or frozen"},
    503: {"model": ProblemDetailResponse, "description": "Collaborator unavailable"},
}


# =============================================================================
# Error Mapping
# =============================================================================


def _status_for(exc: DisputeEngineError) -> tuple[int, str]:
    """Map an engine error to an HTTP status and problem title."""
    if isinstance(exc, (DisputeNotFoundError, EvidenceNotFoundError)):
        return 404, "Not Found"
    if isinstance(exc, ConcurrentModificationError):
        return 409, "Concurrent Modification"
    if isinstance(exc, DisputeStateError):
        return 409, "Invalid Dispute State"
    if isinstance(exc, DisputeValidationError):
        return 400, "Invalid Request"
    if isinstance(exc, CollaboratorUnavailableError):
        return 503, "Collaborator Unavailable"
    if isinstance(exc, (CorruptedDisputeStateError, DisputeFrozenError)):
        return 500, "Dispute Integrity Failure"
    return 500, "Dispute Engine Error"


def _problem(exc: DisputeEngineError, request: Request) -> JSONResponse:
    """Render an engine error as RFC 7807 problem details."""
    status_code, title = _status_for(exc)
    return JSONResponse(
        status_code=status_code,
        content={
            "type": f"{PROBLEM_BASE}/{exc.violation.replace('_', '-')}",
            "title": title,
            "status": status_code,
            "detail": str(exc),
            "instance": request.url.path,
            "violation": exc.violation,
            "dispute_id": exc.dispute_id,
            "dispute_status": exc.status,
            "version": exc.version,
        },
    )


def _invalid(exc: ValueError, request: Request) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "type": f"{PROBLEM_BASE}/invalid-request",
            "title": "Invalid Request",
            "status": 400,
            "detail": str(exc),
            "instance": request.url.path,
        },
    )


# =============================================================================
# Type Mapping
# =============================================================================


def _claimant_from_api(model: ClaimantModel) -> Claimant:
    return Claimant(
        claimant_id=model.claimant_id,
        name=model.name,
        enterprise_name=model.enterprise_name,
        claim_description=model.claim_description,
        email=model.email,
        enterprise_id=model.enterprise_id,
        organization_name=model.organization_name,
        proof_description=model.proof_description,
    )


def _receipt_to_api(receipt: MutationReceipt) -> MutationReceiptResponse:
    return MutationReceiptResponse(
        dispute_id=receipt.dispute_id,
        version=receipt.version,
        status=DisputeStatusEnum(receipt.status),
        evidence_id=receipt.evidence_id,
    )


def _view_to_api(view: DisputeView) -> DisputeResponse:
    """Convert an application DisputeView to the API response model."""
    return DisputeResponse(
        dispute_id=view.dispute_id,
        version=view.version,
        status=DisputeStatusEnum(view.status),
        priority=view.priority,
        dispute_type=view.dispute_type,
        item_id=view.item_id,
        item_title=view.item_title,
        involved_enterprises=list(view.involved_enterprises),
        claimants=[
            ClaimantResponse(
                claimant_id=c.claimant_id,
                name=c.name,
                enterprise_name=c.enterprise_name,
                claim_status=c.claim_status,
                trust_score_snapshot=c.trust_score_snapshot,
                evidence_ids=list(c.evidence_ids),
            )
            for c in view.claimants
        ],
        evidence=[
            EvidenceResponse(
                evidence_id=e.evidence_id,
                claimant_id=e.claimant_id,
                evidence_type=EvidenceTypeEnum(e.evidence_type),
                description=e.description,
                verified=e.verified,
                verification_result=e.verification_result,
                registry_check=e.registry_check,
                submitted_at=e.submitted_at,
            )
            for e in view.evidence
        ],
        panel=[
            PanelMemberResponse(
                member_id=m.member_id,
                name=m.name,
                role=m.role,
                has_voted=m.has_voted,
                vote=m.vote,
            )
            for m in view.panel
        ],
        votes_required=view.votes_required,
        tally=dict(view.tally),
        winning_claimant_id=view.winning_claimant_id,
        winning_claimant_name=view.winning_claimant_name,
        resolution_decision=view.resolution_decision,
        resolution_reason=view.resolution_reason,
        escalation_reason=view.escalation_reason,
        police_involved=view.police_involved,
        police_officer_name=view.police_officer_name,
        case_notes=list(view.case_notes),
        summary=view.summary,
        created_at=view.created_at,
        closed_at=view.closed_at,
    )


# =============================================================================
# Creation and Claimants
# =============================================================================


@router.post(
    "",
    response_model=MutationReceiptResponse,
    status_code=201,
    responses=PROBLEM_RESPONSES,
)
async def create_dispute(
    body: CreateDisputeRequest,
    request: Request,
    service: DisputeResolutionService = Depends(get_dispute_service),
) -> MutationReceiptResponse | JSONResponse:
    """Open a dispute over an item with two or more competing claimants.

    Trust scores are snapshotted at creation. Items above the high-value
    threshold open as URGENT.
    """
    try:
        item = ItemSnapshot(**body.item.model_dump())
        claimants = [_claimant_from_api(c) for c in body.claimants]
        receipt = await service.create_dispute(
            item,
            claimants,
            dispute_type=DisputeType(body.dispute_type.value),
            dispute_reason=body.dispute_reason or DEFAULT_DISPUTE_REASON,
            initiated_by=body.initiated_by or SYSTEM_INITIATOR,
            initiated_by_name=body.initiated_by_name or SYSTEM_INITIATOR_NAME,
        )
    except DisputeEngineError as e:
        return _problem(e, request)
    except ValueError as e:
        return _invalid(e, request)
    return _receipt_to_api(receipt)


@router.post(
    "/{dispute_id}/claimants",
    response_model=MutationReceiptResponse,
    responses=PROBLEM_RESPONSES,
)
async def add_claimant(
    dispute_id: str,
    body: AddClaimantRequest,
    request: Request,
    service: DisputeResolutionService = Depends(get_dispute_service),
) -> MutationReceiptResponse | JSONResponse:
    try:
        receipt = await service.add_claimant(
            dispute_id,
            _claimant_from_api(body.claimant),
            expected_version=body.expected_version,
        )
    except DisputeEngineError as e:
        return _problem(e, request)
    except ValueError as e:
        return _invalid(e, request)
    return _receipt_to_api(receipt)


# =============================================================================
# Evidence
# =============================================================================


@router.post(
    "/{dispute_id}/evidence",
    response_model=MutationReceiptResponse,
    status_code=201,
    responses=PROBLEM_RESPONSES,
)
async def submit_evidence(
    dispute_id: str,
    body: SubmitEvidenceRequest,
    request: Request,
    service: DisputeResolutionService = Depends(get_dispute_service),
) -> MutationReceiptResponse | JSONResponse:
    """Append evidence to the ledger.

    SERIAL_NUMBER evidence triggers a background stolen-property registry
    check; a match escalates the dispute once the check completes.
    """
    try:
        evidence = EvidenceItem(
            claimant_id=body.claimant_id,
            submitted_by_id=body.submitted_by_id,
            submitted_by_name=body.submitted_by_name,
            evidence_type=EvidenceType(body.evidence_type.value),
            description=body.description,
            document_ref=body.document_ref,
            serial_number=body.serial_number,
        )
        receipt = await service.submit_evidence(
            dispute_id, evidence, expected_version=body.expected_version
        )
    except DisputeEngineError as e:
        return _problem(e, request)
    return _receipt_to_api(receipt)


@router.post(
    "/{dispute_id}/evidence/{evidence_id}/verification",
    response_model=MutationReceiptResponse,
    responses=PROBLEM_RESPONSES,
)
async def verify_evidence(
    dispute_id: str,
    evidence_id: str,
    body: VerifyEvidenceRequest,
    request: Request,
    service: DisputeResolutionService = Depends(get_dispute_service),
) -> MutationReceiptResponse | JSONResponse:
    """Record the one-time verification result of an evidence item."""
    try:
        receipt = await service.verify_evidence(
            dispute_id,
            evidence_id,
            VerificationResult(body.result.value),
            body.verified_by,
            expected_version=body.expected_version,
        )
    except DisputeEngineError as e:
        return _problem(e, request)
    return _receipt_to_api(receipt)


# =============================================================================
# Panel and Votes
# =============================================================================


@router.post(
    "/{dispute_id}/panel",
    response_model=MutationReceiptResponse,
    responses=PROBLEM_RESPONSES,
)
async def assign_panel(
    dispute_id: str,
    body: AssignPanelRequest,
    request: Request,
    service: DisputeResolutionService = Depends(get_dispute_service),
) -> MutationReceiptResponse | JSONResponse:
    """Assign the verification panel, from the body or from staffing."""
    try:
        members = (
            None
            if body.members is None
            else [PanelMember(**m.model_dump()) for m in body.members]
        )
        receipt = await service.assign_panel(
            dispute_id, members, expected_version=body.expected_version
        )
    except DisputeEngineError as e:
        return _problem(e, request)
    except ValueError as e:
        return _invalid(e, request)
    return _receipt_to_api(receipt)


@router.post(
    "/{dispute_id}/votes",
    response_model=MutationReceiptResponse,
    responses=PROBLEM_RESPONSES,
)
async def cast_vote(
    dispute_id: str,
    body: CastVoteRequest,
    request: Request,
    service: DisputeResolutionService = Depends(get_dispute_service),
) -> MutationReceiptResponse | JSONResponse:
    """Record a panel member's vote.

    Resubmitting an identical vote returns the current receipt unchanged.
    """
    try:
        receipt = await service.cast_vote(
            dispute_id,
            body.member_id,
            body.vote,
            body.reason,
            expected_version=body.expected_version,
        )
    except DisputeEngineError as e:
        return _problem(e, request)
    return _receipt_to_api(receipt)


# =============================================================================
# Investigator and Administrative Actions
# =============================================================================


@router.post(
    "/{dispute_id}/escalation",
    response_model=MutationReceiptResponse,
    responses=PROBLEM_RESPONSES,
)
async def escalate_dispute(
    dispute_id: str,
    body: EscalateRequest,
    request: Request,
    service: DisputeResolutionService = Depends(get_dispute_service),
) -> MutationReceiptResponse | JSONResponse:
    try:
        receipt = await service.force_escalate(
            dispute_id,
            body.reason,
            body.police_officer_name,
            body.police_officer_id,
            body.police_report_number,
            expected_version=body.expected_version,
        )
    except DisputeEngineError as e:
        return _problem(e, request)
    return _receipt_to_api(receipt)


@router.post(
    "/{dispute_id}/resolution",
    response_model=MutationReceiptResponse,
    responses=PROBLEM_RESPONSES,
)
async def resolve_dispute(
    dispute_id: str,
    body: ResolveRequest,
    request: Request,
    service: DisputeResolutionService = Depends(get_dispute_service),
) -> MutationReceiptResponse | JSONResponse:
    try:
        receipt = await service.resolve_manually(
            dispute_id,
            body.winner_id,
            body.reason,
            body.decided_by,
            expected_version=body.expected_version,
        )
    except DisputeEngineError as e:
        return _problem(e, request)
    return _receipt_to_api(receipt)


@router.post(
    "/{dispute_id}/notes",
    response_model=MutationReceiptResponse,
    responses=PROBLEM_RESPONSES,
)
async def add_note(
    dispute_id: str,
    body: AddNoteRequest,
    request: Request,
    service: DisputeResolutionService = Depends(get_dispute_service),
) -> MutationReceiptResponse | JSONResponse:
    try:
        receipt = await service.add_note(
            dispute_id,
            body.author,
            body.text,
            expected_version=body.expected_version,
        )
    except DisputeEngineError as e:
        return _problem(e, request)
    return _receipt_to_api(receipt)


@router.post(
    "/{dispute_id}/police-findings",
    response_model=PoliceFindingsResponse,
    status_code=201,
    responses=PROBLEM_RESPONSES,
)
async def record_police_findings(
    dispute_id: str,
    body: PoliceFindingsRequest,
    request: Request,
    service: DisputeResolutionService = Depends(get_dispute_service),
) -> PoliceFindingsResponse | JSONResponse:
    """File police findings against an escalated dispute."""
    try:
        entry = await service.record_police_findings(
            dispute_id,
            body.report_number,
            body.findings,
            body.recorded_by,
        )
    except DisputeEngineError as e:
        return _problem(e, request)
    return PoliceFindingsResponse(
        dispute_id=entry.dispute_id,
        report_number=body.report_number,
        recorded_by=body.recorded_by,
        recorded_at=entry.recorded_at,
    )


# =============================================================================
# Reads
# =============================================================================


@router.get(
    "/{dispute_id}",
    response_model=DisputeResponse,
    responses=PROBLEM_RESPONSES,
)
async def get_dispute(
    dispute_id: str,
    request: Request,
    service: DisputeResolutionService = Depends(get_dispute_service),
) -> DisputeResponse | JSONResponse:
    """Return a consistent snapshot of one dispute."""
    try:
        view = await service.get_dispute_view(dispute_id)
    except DisputeEngineError as e:
        return _problem(e, request)
    return _view_to_api(view)


@router.get("", response_model=DisputeListResponse)
async def list_disputes(
    status: DisputeStatusEnum | None = Query(None, description="Filter by status"),
    participant_id: str | None = Query(
        None,
        description="Filter by claimant, panel member or initiator",
    ),
    service: DisputeResolutionService = Depends(get_dispute_service),
) -> DisputeListResponse:
    """List disputes, optionally filtered by status and participant."""
    views = await service.list_disputes(
        status=DisputeStatus(status.value) if status is not None else None,
        participant_id=participant_id,
    )
    items = [_view_to_api(v) for v in views]
    return DisputeListResponse(items=items, total=len(items))
