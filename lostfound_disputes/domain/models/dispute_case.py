"""Dispute case aggregate root.

A DisputeCase owns a claimant registry, an evidence ledger and a
verification panel, and moves through a closed set of states:

    PENDING -> UNDER_REVIEW -> RESOLVED | ESCALATED
    PENDING -> RESOLVED | ESCALATED

RESOLVED and ESCALATED are terminal; every mutation on a terminal case
raises StaleStateError. The aggregate is immutable: each accepted mutation
returns a new case with version + 1. A vote identical to the one already on
record returns the same case unchanged.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from uuid6 import uuid7

from lostfound_disputes.domain.errors.dispute import (
    DisputeValidationError,
    InvalidDisputeError,
    MalformedEvidenceError,
    PanelAlreadyAssignedError,
    PanelNotAssignedError,
    StaleStateError,
)
from lostfound_disputes.domain.errors.integrity import CorruptedDisputeStateError
from lostfound_disputes.domain.exceptions import DisputeEngineError
from lostfound_disputes.domain.models.claimant import (
    Claimant,
    ClaimStatus,
    normalize_identity,
)
from lostfound_disputes.domain.models.claimant_registry import ClaimantRegistry
from lostfound_disputes.domain.models.escalation import (
    EscalationDecision,
    EscalationTrigger,
)
from lostfound_disputes.domain.models.evidence import (
    EvidenceItem,
    RegistryCheckRecord,
    VerificationResult,
)
from lostfound_disputes.domain.models.evidence_ledger import EvidenceLedger
from lostfound_disputes.domain.models.item_snapshot import ItemSnapshot
from lostfound_disputes.domain.models.panel_member import ABSTAIN, PanelMember
from lostfound_disputes.domain.models.resolution_outcome import OutcomeKind
from lostfound_disputes.domain.models.verification_panel import (
    MIN_PANEL_SIZE,
    VerificationPanel,
    votes_required_for,
)
from lostfound_disputes.domain.services.escalation_policy import EscalationPolicy
from lostfound_disputes.domain.services.resolution_engine import ResolutionEngine

# Items worth more than this open as URGENT disputes
DEFAULT_HIGH_VALUE_THRESHOLD = 500.0

DEFAULT_DISPUTE_REASON = "Multiple claimants for the same item"
SYSTEM_INITIATOR = "SYSTEM"
SYSTEM_INITIATOR_NAME = "Automatic Dispute Detection"


class DisputeStatus(Enum):
    """Dispute lifecycle status.

    Statuses:
        PENDING: Opened, no evidence or votes yet
        UNDER_REVIEW: Evidence submitted or voting in progress
        RESOLVED: Winner declared (terminal)
        ESCALATED: Handed to law enforcement or human review (terminal)
    """

    PENDING = "PENDING"
    UNDER_REVIEW = "UNDER_REVIEW"
    RESOLVED = "RESOLVED"
    ESCALATED = "ESCALATED"


TERMINAL_STATUSES: frozenset[DisputeStatus] = frozenset(
    {DisputeStatus.RESOLVED, DisputeStatus.ESCALATED}
)

VALID_TRANSITIONS: dict[DisputeStatus, frozenset[DisputeStatus]] = {
    DisputeStatus.PENDING: frozenset(
        {DisputeStatus.UNDER_REVIEW, DisputeStatus.RESOLVED, DisputeStatus.ESCALATED}
    ),
    DisputeStatus.UNDER_REVIEW: frozenset(
        {DisputeStatus.RESOLVED, DisputeStatus.ESCALATED}
    ),
    DisputeStatus.RESOLVED: frozenset(),
    DisputeStatus.ESCALATED: frozenset(),
}


class DisputeType(Enum):
    """What the claimants disagree about."""

    OWNERSHIP = "OWNERSHIP"
    PRIORITY = "PRIORITY"
    AUTHENTICITY = "AUTHENTICITY"


class DisputePriority(Enum):
    HIGH = "HIGH"
    URGENT = "URGENT"


class ResolutionDecision(Enum):
    """How a RESOLVED dispute was decided."""

    AWARDED = "AWARDED"
    ADMIN_DECISION = "ADMIN_DECISION"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


@dataclass(frozen=True, eq=True)
class CaseNote:
    """Timestamped investigator note on a dispute."""

    author: str
    text: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "author": self.author,
            "text": self.text,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CaseNote:
        return cls(
            author=data["author"],
            text=data["text"],
            created_at=datetime.fromisoformat(data["created_at"]),
        )


_engine = ResolutionEngine()
_policy = EscalationPolicy()


@dataclass(frozen=True, eq=True)
class DisputeCase:
    """Aggregate root for a multi-enterprise ownership dispute.

    Attributes:
        dispute_id: UUIDv7 identifier (immutable).
        item: Snapshot of the disputed item taken at creation.
        registry: Registered claimants (>= 2 distinct identities).
        dispute_type: OWNERSHIP, PRIORITY or AUTHENTICITY.
        dispute_reason: Why the dispute was opened.
        initiated_by: Who opened the dispute.
        initiated_by_name: Display name of the initiator.
        priority: URGENT for high-value items, HIGH otherwise.
        ledger: Append-only evidence ledger.
        panel: Verification panel (unassigned until assign_panel).
        status: Lifecycle status.
        winning_claimant_id: Set only on entry to RESOLVED.
        winning_claimant_name: Display name of the winner.
        resolution_decision: AWARDED or ADMIN_DECISION.
        resolution_reason: Why the winner was chosen.
        resolution_notes: Supplementary notes on the decision.
        escalation_reason: Set only on entry to ESCALATED.
        escalation_trigger: What caused the escalation.
        police_involved: True only for police escalations.
        police_officer_name: Officer assigned on a police escalation.
        police_officer_id: Officer identifier.
        police_report_number: Police report or registry reference.
        case_notes: Append-only investigator notes.
        created_at: When the dispute was opened.
        closed_at: When the dispute became terminal.
        version: Starts at 1, +1 on every accepted mutation.
    """

    dispute_id: str
    item: ItemSnapshot
    registry: ClaimantRegistry
    dispute_type: DisputeType = DisputeType.OWNERSHIP
    dispute_reason: str = DEFAULT_DISPUTE_REASON
    initiated_by: str = SYSTEM_INITIATOR
    initiated_by_name: str = SYSTEM_INITIATOR_NAME
    priority: DisputePriority = DisputePriority.HIGH
    ledger: EvidenceLedger = field(default_factory=EvidenceLedger)
    panel: VerificationPanel = field(default_factory=VerificationPanel)
    status: DisputeStatus = DisputeStatus.PENDING
    winning_claimant_id: str | None = None
    winning_claimant_name: str | None = None
    resolution_decision: ResolutionDecision | None = None
    resolution_reason: str | None = None
    resolution_notes: str | None = None
    escalation_reason: str | None = None
    escalation_trigger: EscalationTrigger | None = None
    police_involved: bool = False
    police_officer_name: str | None = None
    police_officer_id: str | None = None
    police_report_number: str | None = None
    case_notes: tuple[CaseNote, ...] = field(default_factory=tuple)
    created_at: datetime = field(default_factory=_utc_now)
    closed_at: datetime | None = None
    version: int = 1

    def __post_init__(self) -> None:
        """Reject structurally inconsistent state."""
        violations = self.integrity_violations()
        if violations:
            raise CorruptedDisputeStateError(
                violations,
                dispute_id=self.dispute_id,
                status=self.status.value,
                version=self.version,
            )

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def claimants(self) -> tuple[Claimant, ...]:
        return self.registry.claimants

    @property
    def evidence(self) -> tuple[EvidenceItem, ...]:
        return self.ledger.items

    @property
    def latest_evidence(self) -> EvidenceItem | None:
        return self.ledger.items[-1] if self.ledger.items else None

    @property
    def panel_members(self) -> tuple[PanelMember, ...]:
        return self.panel.members

    @property
    def votes_required(self) -> int:
        return self.panel.votes_required

    @property
    def panel_assigned_at(self) -> datetime | None:
        return self.panel.assigned_at

    @property
    def involved_enterprises(self) -> list[str]:
        """Distinct claimant enterprises; always derived from the registry."""
        return self.registry.involved_enterprises()

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def involves(self, participant_id: str) -> bool:
        """True if participant_id is a claimant, panel member or the initiator."""
        key = normalize_identity(participant_id)
        if normalize_identity(self.initiated_by) == key:
            return True
        if self.registry.find(participant_id) is not None:
            return True
        return any(m.member_id == participant_id for m in self.panel.members)

    def status_summary(self) -> str:
        """One-line human summary of the dispute."""
        resolution = self.resolution_reason or self.escalation_reason or "Pending"
        return (
            f"Dispute Status: {self.status.value} | "
            f"Claimants: {len(self.registry)} | "
            f"Panel Votes: {self.panel.voted_count}/{self.panel.size} | "
            f"Resolution: {resolution}"
        )

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    @classmethod
    def open(
        cls,
        item: ItemSnapshot,
        initial_claimants: Sequence[Claimant],
        *,
        dispute_type: DisputeType = DisputeType.OWNERSHIP,
        dispute_reason: str = DEFAULT_DISPUTE_REASON,
        initiated_by: str = SYSTEM_INITIATOR,
        initiated_by_name: str = SYSTEM_INITIATOR_NAME,
        high_value_threshold: float = DEFAULT_HIGH_VALUE_THRESHOLD,
        dispute_id: str | None = None,
        now: datetime | None = None,
    ) -> DisputeCase:
        """Open a dispute over an item.

        Duplicate identities among the initial claimants collapse to their
        first occurrence before the minimum is checked.

        Args:
            item: Snapshot of the disputed item.
            initial_claimants: Competing claimants.
            dispute_type: What the claimants disagree about.
            dispute_reason: Why the dispute was opened.
            initiated_by: Who opened the dispute.
            initiated_by_name: Display name of the initiator.
            high_value_threshold: Value above which the dispute is URGENT.
            dispute_id: Explicit id (a UUIDv7 is generated otherwise).
            now: Creation time.

        Returns:
            A PENDING dispute at version 1.

        Raises:
            InvalidDisputeError: If fewer than 2 distinct identities remain.
        """
        registry = ClaimantRegistry()
        for claimant in initial_claimants:
            if registry.duplicate_match(claimant) is None:
                registry = registry.register(claimant)
        if len(registry) < 2:
            raise InvalidDisputeError(len(registry))

        priority = (
            DisputePriority.URGENT
            if item.estimated_value > high_value_threshold
            else DisputePriority.HIGH
        )
        return cls(
            dispute_id=dispute_id or str(uuid7()),
            item=item,
            registry=registry,
            dispute_type=dispute_type,
            dispute_reason=dispute_reason,
            initiated_by=initiated_by,
            initiated_by_name=initiated_by_name,
            priority=priority,
            created_at=now or _utc_now(),
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_claimant(
        self,
        claimant: Claimant,
        *,
        now: datetime | None = None,
        sla: timedelta | None = None,
    ) -> DisputeCase:
        """Register a late claimant.

        The claimant is registered even when an escalation trigger fires;
        the returned case is then ESCALATED.

        Raises:
            StaleStateError: If the dispute is terminal.
            DuplicateClaimantError: If the identity is already registered.
        """
        self._guard("add claimant")
        with self._error_context():
            if self.status == DisputeStatus.UNDER_REVIEW:
                claimant = claimant.with_status(ClaimStatus.UNDER_REVIEW)
            registry = self.registry.register(claimant)
        return self._advance(now or _utc_now(), sla, resolve=False, registry=registry)

    def add_evidence(
        self,
        evidence: EvidenceItem,
        *,
        now: datetime | None = None,
        sla: timedelta | None = None,
    ) -> DisputeCase:
        """Append evidence for a registered claimant.

        The stamped item is available afterwards as ``latest_evidence``.

        Raises:
            StaleStateError: If the dispute is terminal.
            MalformedEvidenceError: If the owning claimant is not registered.
        """
        self._guard("add evidence")
        now = now or _utc_now()
        owner = self.registry.find(evidence.claimant_id)
        if owner is None:
            raise MalformedEvidenceError(
                f"Evidence references unregistered claimant {evidence.claimant_id}",
                **self._context(),
            )
        if evidence.verified:
            raise MalformedEvidenceError(
                "New evidence must be submitted unverified", **self._context()
            )
        evidence = replace(evidence, claimant_id=owner.claimant_id)
        ledger, stamped = self.ledger.append(evidence, now)
        registry = self.registry.link_evidence(owner.claimant_id, stamped.evidence_id)
        status, registry = self._enter_review(registry)
        return self._advance(
            now, sla, resolve=False, ledger=ledger, registry=registry, status=status
        )

    def verify_evidence(
        self,
        evidence_id: str,
        result: VerificationResult,
        verified_by: str,
        *,
        now: datetime | None = None,
        sla: timedelta | None = None,
    ) -> DisputeCase:
        """Record the single verification of an evidence item.

        Raises:
            StaleStateError: If the dispute is terminal.
            EvidenceNotFoundError: If the evidence is not in the ledger.
            AlreadyVerifiedError: If the evidence was verified before.
        """
        self._guard("verify evidence")
        now = now or _utc_now()
        with self._error_context():
            if result == VerificationResult.PENDING:
                raise DisputeValidationError(
                    "Verification result must be VALID or INVALID"
                )
            ledger = self.ledger.verify(evidence_id, result, verified_by, now)
        return self._advance(now, sla, resolve=False, ledger=ledger)

    def record_registry_check(
        self,
        record: RegistryCheckRecord,
        *,
        now: datetime | None = None,
        sla: timedelta | None = None,
    ) -> DisputeCase:
        """Record a stolen-property registry check for serial-number evidence.

        A MATCH escalates the dispute with police involvement. A second
        record for the same evidence is ignored.

        Raises:
            StaleStateError: If the dispute is terminal.
            EvidenceNotFoundError: If the checked evidence is not in the ledger.
        """
        self._guard("record registry check")
        if self.ledger.registry_check_for(record.evidence_id) is not None:
            return self
        with self._error_context():
            ledger = self.ledger.record_registry_check(record)
        return self._advance(now or _utc_now(), sla, resolve=False, ledger=ledger)

    def assign_panel(
        self,
        members: Sequence[PanelMember],
        *,
        now: datetime | None = None,
        sla: timedelta | None = None,
    ) -> DisputeCase:
        """Assign the verification panel; size and quorum are fixed here.

        Raises:
            StaleStateError: If the dispute is terminal.
            PanelAlreadyAssignedError: If a panel is already assigned.
            PanelTooSmallError: If fewer than 3 members are supplied.
            DuplicatePanelMemberError: If a member id repeats.
        """
        self._guard("assign panel")
        if self.panel.is_assigned:
            raise PanelAlreadyAssignedError(**self._context())
        now = now or _utc_now()
        with self._error_context():
            panel = VerificationPanel.assign(list(members), now)
        return self._advance(now, sla, resolve=False, panel=panel)

    def cast_vote(
        self,
        member_id: str,
        vote: str,
        reason: str | None = None,
        *,
        now: datetime | None = None,
        sla: timedelta | None = None,
    ) -> DisputeCase:
        """Record a panel member's vote and re-evaluate the outcome.

        Args:
            member_id: Voting panel member.
            vote: Claimant id, or ABSTAIN.
            reason: Free-text justification.
            now: Vote time.
            sla: Configured decision window from panel assignment.

        Returns:
            The updated dispute, possibly RESOLVED or ESCALATED. The same
            instance when the vote repeats the one already on record.

        Raises:
            StaleStateError: If the dispute is terminal.
            PanelNotAssignedError: If no panel has been assigned.
            UnknownPanelMemberError: If member_id is not on the panel.
            UnknownClaimantError: If vote names an unregistered claimant.
        """
        self._guard("cast vote")
        if not self.panel.is_assigned:
            raise PanelNotAssignedError(**self._context())
        with self._error_context():
            member = self.panel.member(member_id)
            if normalize_identity(vote) == ABSTAIN:
                vote = ABSTAIN
            else:
                vote = self.registry.get(vote).claimant_id

        if member.has_same_vote(vote, reason):
            return self

        now = now or _utc_now()
        panel = self.panel.record_vote(member_id, vote, reason, now)
        status, registry = self._enter_review(self.registry)
        return self._advance(
            now, sla, resolve=True, panel=panel, registry=registry, status=status
        )

    def force_escalate(
        self,
        reason: str,
        police_officer_name: str | None = None,
        police_officer_id: str | None = None,
        police_report_number: str | None = None,
        *,
        now: datetime | None = None,
    ) -> DisputeCase:
        """Escalate explicitly; naming an officer marks police involvement.

        Raises:
            StaleStateError: If the dispute is terminal.
        """
        self._guard("escalate")
        if not reason or not reason.strip():
            raise DisputeValidationError(
                "Escalation reason must not be blank", **self._context()
            )
        decision = _policy.override(
            reason, police_officer_name, police_officer_id, police_report_number
        )
        return self._evolve()._escalated(decision, now or _utc_now())

    def resolve_manually(
        self,
        winner_id: str,
        reason: str,
        decided_by: str,
        *,
        now: datetime | None = None,
        sla: timedelta | None = None,
    ) -> DisputeCase:
        """Administrative override: declare a winner without the panel.

        A pending escalation trigger wins over the override: the case is
        ESCALATED instead of RESOLVED.

        Raises:
            StaleStateError: If the dispute is terminal.
            UnknownClaimantError: If winner_id is not registered.
        """
        self._guard("resolve")
        with self._error_context():
            winner = self.registry.get(winner_id)
        now = now or _utc_now()
        candidate = self._evolve()
        decision = _policy.evaluate(candidate.ledger, candidate.panel, now, sla)
        if decision is not None:
            return candidate._escalated(decision, now)
        return candidate._resolved(
            winner.claimant_id,
            ResolutionDecision.ADMIN_DECISION,
            reason,
            f"Manual resolution by {decided_by}",
            now,
        )

    def add_note(
        self,
        author: str,
        text: str,
        *,
        now: datetime | None = None,
        sla: timedelta | None = None,
    ) -> DisputeCase:
        """Append an investigator note.

        Raises:
            StaleStateError: If the dispute is terminal.
        """
        self._guard("add note")
        if not text or not text.strip():
            raise DisputeValidationError("Note text must not be blank", **self._context())
        now = now or _utc_now()
        note = CaseNote(author=author, text=text, created_at=now)
        return self._advance(
            now, sla, resolve=False, case_notes=(*self.case_notes, note)
        )

    def check_escalation(
        self, *, now: datetime | None = None, sla: timedelta | None = None
    ) -> DisputeCase:
        """Evaluate escalation triggers without any other change.

        Returns the same instance when nothing fires or the case is terminal.
        """
        if self.is_terminal:
            return self
        now = now or _utc_now()
        decision = _policy.evaluate(self.ledger, self.panel, now, sla)
        if decision is None:
            return self
        return self._evolve()._escalated(decision, now)

    # ------------------------------------------------------------------
    # Integrity and serialization
    # ------------------------------------------------------------------

    def integrity_violations(self) -> list[str]:
        """Return findings for structurally inconsistent state.

        An empty list means the case is consistent.
        """
        findings: list[str] = []
        if self.version < 1:
            findings.append(f"version must be >= 1, got {self.version}")
        if len(self.registry) < 2:
            findings.append(
                f"dispute has {len(self.registry)} claimant(s), at least 2 required"
            )
        keys = [c.identity_key for c in self.registry]
        if len(keys) != len(set(keys)):
            findings.append("claimant identities are not unique")

        if self.status == DisputeStatus.RESOLVED:
            winner = (
                self.registry.find(self.winning_claimant_id)
                if self.winning_claimant_id
                else None
            )
            if not self.winning_claimant_id:
                findings.append("RESOLVED dispute has no winning claimant")
            elif winner is None:
                findings.append(
                    f"winning claimant {self.winning_claimant_id} is not registered"
                )
            elif winner.claim_status != ClaimStatus.APPROVED:
                findings.append(
                    f"winning claimant {self.winning_claimant_id} is not APPROVED"
                )
            if self.resolution_decision is None:
                findings.append("RESOLVED dispute has no resolution decision")
        else:
            if self.winning_claimant_id is not None:
                findings.append(f"winning claimant set while {self.status.value}")
            if self.resolution_decision is not None:
                findings.append(f"resolution decision set while {self.status.value}")

        if self.status == DisputeStatus.ESCALATED:
            if not self.escalation_reason:
                findings.append("ESCALATED dispute has no escalation reason")
        else:
            if self.escalation_reason is not None:
                findings.append(f"escalation reason set while {self.status.value}")
            if self.police_involved:
                findings.append(f"police involved while {self.status.value}")

        if self.panel.is_assigned:
            if self.panel.size < MIN_PANEL_SIZE:
                findings.append(f"panel has {self.panel.size} member(s)")
            if self.panel.votes_required != votes_required_for(self.panel.size):
                findings.append(
                    f"votes_required {self.panel.votes_required} does not match "
                    f"panel size {self.panel.size}"
                )
            for member in self.panel.members:
                if (
                    member.vote is not None
                    and member.vote != ABSTAIN
                    and self.registry.find(member.vote) is None
                ):
                    findings.append(
                        f"member {member.member_id} voted for unknown claimant "
                        f"{member.vote}"
                    )
        elif self.panel.votes_required != 0:
            findings.append("votes_required set without a panel")

        for item in self.ledger.items:
            if self.registry.find(item.claimant_id) is None:
                findings.append(
                    f"evidence {item.evidence_id} owned by unknown claimant "
                    f"{item.claimant_id}"
                )
        return findings

    def to_dict(self) -> dict[str, Any]:
        """Serialize every field, including version, for storage."""
        return {
            "dispute_id": self.dispute_id,
            "item": self.item.to_dict(),
            "claimants": self.registry.to_list(),
            "dispute_type": self.dispute_type.value,
            "dispute_reason": self.dispute_reason,
            "initiated_by": self.initiated_by,
            "initiated_by_name": self.initiated_by_name,
            "priority": self.priority.value,
            "ledger": self.ledger.to_dict(),
            "panel": self.panel.to_dict(),
            "status": self.status.value,
            "winning_claimant_id": self.winning_claimant_id,
            "winning_claimant_name": self.winning_claimant_name,
            "resolution_decision": (
                self.resolution_decision.value if self.resolution_decision else None
            ),
            "resolution_reason": self.resolution_reason,
            "resolution_notes": self.resolution_notes,
            "escalation_reason": self.escalation_reason,
            "escalation_trigger": (
                self.escalation_trigger.value if self.escalation_trigger else None
            ),
            "police_involved": self.police_involved,
            "police_officer_name": self.police_officer_name,
            "police_officer_id": self.police_officer_id,
            "police_report_number": self.police_report_number,
            "case_notes": [note.to_dict() for note in self.case_notes],
            "created_at": self.created_at.isoformat(),
            "closed_at": _iso(self.closed_at),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DisputeCase:
        """Deserialize from storage.

        Raises:
            CorruptedDisputeStateError: If the payload is unreadable or
                violates the aggregate's integrity rules.
        """
        try:
            decision = data.get("resolution_decision")
            trigger = data.get("escalation_trigger")
            return cls(
                dispute_id=data["dispute_id"],
                item=ItemSnapshot.from_dict(data["item"]),
                registry=ClaimantRegistry.from_list(data["claimants"]),
                dispute_type=DisputeType(data["dispute_type"]),
                dispute_reason=data["dispute_reason"],
                initiated_by=data["initiated_by"],
                initiated_by_name=data["initiated_by_name"],
                priority=DisputePriority(data["priority"]),
                ledger=EvidenceLedger.from_dict(data["ledger"]),
                panel=VerificationPanel.from_dict(data["panel"]),
                status=DisputeStatus(data["status"]),
                winning_claimant_id=data.get("winning_claimant_id"),
                winning_claimant_name=data.get("winning_claimant_name"),
                resolution_decision=ResolutionDecision(decision) if decision else None,
                resolution_reason=data.get("resolution_reason"),
                resolution_notes=data.get("resolution_notes"),
                escalation_reason=data.get("escalation_reason"),
                escalation_trigger=EscalationTrigger(trigger) if trigger else None,
                police_involved=bool(data.get("police_involved", False)),
                police_officer_name=data.get("police_officer_name"),
                police_officer_id=data.get("police_officer_id"),
                police_report_number=data.get("police_report_number"),
                case_notes=tuple(
                    CaseNote.from_dict(n) for n in data.get("case_notes", ())
                ),
                created_at=datetime.fromisoformat(data["created_at"]),
                closed_at=_parse(data.get("closed_at")),
                version=int(data["version"]),
            )
        except CorruptedDisputeStateError:
            raise
        except (KeyError, TypeError, ValueError, DisputeEngineError) as exc:
            raise CorruptedDisputeStateError(
                [f"unreadable dispute payload: {exc!r}"],
                dispute_id=data.get("dispute_id") if isinstance(data, dict) else None,
            ) from exc

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _context(self) -> dict[str, Any]:
        return {
            "dispute_id": self.dispute_id,
            "status": self.status.value,
            "version": self.version,
        }

    @contextmanager
    def _error_context(self) -> Iterator[None]:
        """Attach this dispute's id, status and version to domain errors."""
        try:
            yield
        except DisputeEngineError as exc:
            if exc.dispute_id is None:
                exc.dispute_id = self.dispute_id
                exc.status = self.status.value
                exc.version = self.version
            raise

    def _guard(self, operation: str) -> None:
        if self.is_terminal:
            raise StaleStateError(operation, **self._context())

    def _evolve(self, **changes: Any) -> DisputeCase:
        return replace(self, version=self.version + 1, **changes)

    def _enter_review(
        self, registry: ClaimantRegistry
    ) -> tuple[DisputeStatus, ClaimantRegistry]:
        if self.status == DisputeStatus.PENDING:
            return DisputeStatus.UNDER_REVIEW, registry.mark_under_review()
        return self.status, registry

    def _advance(
        self,
        now: datetime,
        sla: timedelta | None,
        *,
        resolve: bool,
        **changes: Any,
    ) -> DisputeCase:
        """Apply changes as one version step, then settle the outcome.

        Escalation triggers are evaluated before the resolution engine, so
        escalation wins when both fire in the same mutation.
        """
        candidate = self._evolve(**changes)
        decision = _policy.evaluate(candidate.ledger, candidate.panel, now, sla)
        if decision is not None:
            return candidate._escalated(decision, now)
        if not resolve:
            return candidate

        outcome = _engine.evaluate(candidate.registry, candidate.ledger, candidate.panel)
        if outcome.kind == OutcomeKind.RESOLVED and outcome.winner_id is not None:
            return candidate._resolved(
                outcome.winner_id,
                ResolutionDecision.AWARDED,
                outcome.reason,
                f"Decided by verification panel (tie-break: {outcome.tie_break.value})",
                now,
            )
        if outcome.kind == OutcomeKind.ESCALATED:
            return candidate._escalated(_policy.deadlock(outcome.reason), now)
        return candidate

    def _resolved(
        self,
        winner_id: str,
        decision: ResolutionDecision,
        reason: str,
        notes: str,
        now: datetime,
    ) -> DisputeCase:
        winner = self.registry.get(winner_id)
        return replace(
            self,
            status=DisputeStatus.RESOLVED,
            registry=self.registry.mark_decision(winner_id),
            winning_claimant_id=winner.claimant_id,
            winning_claimant_name=winner.name,
            resolution_decision=decision,
            resolution_reason=reason,
            resolution_notes=notes,
            closed_at=now,
        )

    def _escalated(self, decision: EscalationDecision, now: datetime) -> DisputeCase:
        return replace(
            self,
            status=DisputeStatus.ESCALATED,
            escalation_reason=decision.reason,
            escalation_trigger=decision.trigger,
            police_involved=decision.police_involved,
            police_officer_name=decision.police_officer_name,
            police_officer_id=decision.police_officer_id,
            police_report_number=decision.police_report_number,
            closed_at=now,
        )
