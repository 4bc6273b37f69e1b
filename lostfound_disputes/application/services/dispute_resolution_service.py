"""Dispute resolution application service.

Exposes the engine's operations to callers (HTTP routes, workers). Each
dispute has a single writer at a time: every mutation runs under that
dispute's asyncio.Lock, is checked against the caller's expected version,
and is persisted with a compare-and-swap on the stored version. Readers
get immutable snapshots and never see half-applied mutations.

Collaborator calls (trust score, staffing, stolen-property registry) run
outside the dispute lock so a slow collaborator never blocks other writers.
Serial-number checks run as background tasks; their results are recorded
under the lock, or only audited when the dispute has already closed.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import datetime, timezone

import structlog

from lostfound_disputes.application.dtos.dispute import DisputeView, MutationReceipt
from lostfound_disputes.application.ports.audit_log import (
    AuditEntry,
    DisputeAuditLogProtocol,
)
from lostfound_disputes.application.ports.dispute_repository import (
    DisputeRepositoryProtocol,
)
from lostfound_disputes.application.ports.escalation_channel import (
    EscalationChannelProtocol,
)
from lostfound_disputes.application.ports.operator_alert import OperatorAlertProtocol
from lostfound_disputes.application.ports.staffing import StaffingProtocol
from lostfound_disputes.application.services.collaborator_calls import (
    CollaboratorCalls,
)
from lostfound_disputes.application.services.serial_check_service import (
    SerialCheckService,
)
from lostfound_disputes.application.services.trust_score_gateway import (
    TrustScoreGateway,
)
from lostfound_disputes.config.dispute_config import (
    DEFAULT_DISPUTE_CONFIG,
    DisputeConfig,
)
from lostfound_disputes.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from lostfound_disputes.domain.errors.dependency import CollaboratorUnavailableError
from lostfound_disputes.domain.errors.dispute import (
    DisputeValidationError,
    MalformedEvidenceError,
    PoliceFindingsNotAcceptedError,
)
from lostfound_disputes.domain.errors.integrity import (
    CorruptedDisputeStateError,
    DisputeFrozenError,
    DisputeNotFoundError,
)
from lostfound_disputes.domain.exceptions import DisputeEngineError
from lostfound_disputes.domain.models.claimant import Claimant
from lostfound_disputes.domain.models.dispute_case import (
    DEFAULT_DISPUTE_REASON,
    SYSTEM_INITIATOR,
    SYSTEM_INITIATOR_NAME,
    DisputeCase,
    DisputeStatus,
    DisputeType,
)
from lostfound_disputes.domain.models.evidence import (
    EvidenceItem,
    RegistryCheckRecord,
    VerificationResult,
)
from lostfound_disputes.domain.models.item_snapshot import ItemSnapshot
from lostfound_disputes.domain.models.panel_member import PanelMember

logger = structlog.get_logger(__name__)

Mutation = Callable[[DisputeCase], DisputeCase]


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


class DisputeResolutionService:
    """Serialized, version-checked access to dispute aggregates.

    Example:
        >>> receipt = await service.create_dispute(item, [alice, bob])
        >>> await service.assign_panel(receipt.dispute_id, members)
        >>> await service.cast_vote(receipt.dispute_id, "m1", "alice")
    """

    def __init__(
        self,
        *,
        repository: DisputeRepositoryProtocol,
        trust_scores: TrustScoreGateway,
        serial_checks: SerialCheckService,
        staffing: StaffingProtocol,
        escalation_channel: EscalationChannelProtocol,
        operator_alerts: OperatorAlertProtocol,
        audit_log: DisputeAuditLogProtocol,
        calls: CollaboratorCalls,
        config: DisputeConfig = DEFAULT_DISPUTE_CONFIG,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Optimistic-concurrency dispute store.
            trust_scores: Trust score lookups with degradation.
            serial_checks: Stolen-property registry checks.
            staffing: Panel candidate source.
            escalation_channel: Escalation notifications.
            operator_alerts: Integrity failure alerts.
            audit_log: Append-only audit log.
            calls: Timeout and retry wrapper for collaborator calls.
            config: Engine configuration.
            clock: Source of "now" (injectable for SLA tests).
        """
        self._repository = repository
        self._trust_scores = trust_scores
        self._serial_checks = serial_checks
        self._staffing = staffing
        self._escalation_channel = escalation_channel
        self._operator_alerts = operator_alerts
        self._audit_log = audit_log
        self._calls = calls
        self._config = config
        self._clock = clock
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_holders: dict[str, int] = {}
        self._background: set[asyncio.Task[RegistryCheckRecord]] = set()
        self._log = logger.bind(component="dispute_resolution_service")

    @property
    def pending_serial_checks(self) -> int:
        return len(self._background)

    @property
    def active_locks(self) -> int:
        """Number of disputes with a writer holding or awaiting the lock."""
        return len(self._locks)

    # ------------------------------------------------------------------
    # Creation and claimants
    # ------------------------------------------------------------------

    async def create_dispute(
        self,
        item: ItemSnapshot,
        claimants: Sequence[Claimant],
        *,
        dispute_type: DisputeType = DisputeType.OWNERSHIP,
        dispute_reason: str = DEFAULT_DISPUTE_REASON,
        initiated_by: str = SYSTEM_INITIATOR,
        initiated_by_name: str = SYSTEM_INITIATOR_NAME,
    ) -> MutationReceipt:
        """Open a dispute, snapshotting each claimant's trust score.

        Raises:
            InvalidDisputeError: If fewer than 2 distinct claimants are supplied.
        """
        scores = await asyncio.gather(
            *(self._trust_scores.score_for(c.claimant_id) for c in claimants)
        )
        snapshots = [
            replace(c, trust_score_snapshot=score)
            for c, score in zip(claimants, scores)
        ]
        case = DisputeCase.open(
            item,
            snapshots,
            dispute_type=dispute_type,
            dispute_reason=dispute_reason,
            initiated_by=initiated_by,
            initiated_by_name=initiated_by_name,
            high_value_threshold=self._config.high_value_threshold,
            now=self._clock(),
        )
        await self._repository.add(case)
        self._log.info(
            "dispute_opened",
            dispute_id=case.dispute_id,
            item_id=item.item_id,
            claimants=len(case.claimants),
            priority=case.priority.value,
            involved_enterprises=case.involved_enterprises,
        )
        return MutationReceipt.for_case(case)

    async def add_claimant(
        self,
        dispute_id: str,
        claimant: Claimant,
        *,
        expected_version: int | None = None,
    ) -> MutationReceipt:
        """Register a late claimant with a fresh trust score snapshot."""
        score = await self._trust_scores.score_for(
            claimant.claimant_id, dispute_id=dispute_id
        )
        snapshot = replace(claimant, trust_score_snapshot=score)
        now = self._clock()
        case = await self._mutate(
            dispute_id,
            "add_claimant",
            lambda c: c.add_claimant(snapshot, now=now, sla=self._config.sla),
            expected_version,
        )
        return MutationReceipt.for_case(case)

    # ------------------------------------------------------------------
    # Evidence
    # ------------------------------------------------------------------

    async def submit_evidence(
        self,
        dispute_id: str,
        evidence: EvidenceItem,
        *,
        expected_version: int | None = None,
    ) -> MutationReceipt:
        """Append evidence; serial numbers are checked in the background.

        Returns:
            Receipt carrying the ledger-assigned evidence id.
        """
        now = self._clock()
        case = await self._mutate(
            dispute_id,
            "submit_evidence",
            lambda c: c.add_evidence(evidence, now=now, sla=self._config.sla),
            expected_version,
        )
        stamped = case.latest_evidence
        if stamped is not None and stamped.is_serial_number:
            self._schedule_serial_check(dispute_id, stamped.evidence_id)
        return MutationReceipt(
            dispute_id=case.dispute_id,
            version=case.version,
            status=case.status.value,
            evidence_id=stamped.evidence_id if stamped else None,
        )

    async def verify_evidence(
        self,
        dispute_id: str,
        evidence_id: str,
        result: VerificationResult,
        verified_by: str,
        *,
        expected_version: int | None = None,
    ) -> MutationReceipt:
        """Record the single verification of an evidence item."""
        now = self._clock()
        case = await self._mutate(
            dispute_id,
            "verify_evidence",
            lambda c: c.verify_evidence(
                evidence_id, result, verified_by, now=now, sla=self._config.sla
            ),
            expected_version,
        )
        return MutationReceipt.for_case(case)

    async def check_serial(self, dispute_id: str, evidence_id: str) -> RegistryCheckRecord:
        """Check a SERIAL_NUMBER evidence item against the stolen-property registry.

        The registry is queried without holding the dispute lock. The result
        is recorded under the lock; if the dispute closed in the meantime
        the result goes to the audit log only.

        Raises:
            EvidenceNotFoundError: If the evidence is not in the ledger.
            MalformedEvidenceError: If the evidence is not a serial number.
        """
        snapshot = await self._load(dispute_id)
        existing = snapshot.ledger.registry_check_for(evidence_id)
        if existing is not None:
            return existing
        try:
            evidence = snapshot.ledger.get(evidence_id)
        except DisputeEngineError as exc:
            exc.dispute_id = dispute_id
            raise
        if not evidence.is_serial_number or evidence.serial_number is None:
            raise MalformedEvidenceError(
                f"Evidence {evidence_id} is not SERIAL_NUMBER evidence",
                dispute_id=dispute_id,
            )

        record = await self._serial_checks.check(
            evidence_id, evidence.serial_number, dispute_id=dispute_id
        )

        async with self._exclusive(dispute_id):
            case = await self._load(dispute_id)
            if case.is_terminal:
                await self._audit_log.record(
                    AuditEntry(
                        dispute_id=dispute_id,
                        event_type="late_registry_result",
                        details={
                            "evidence_id": evidence_id,
                            "outcome": record.outcome.value,
                            "reference_id": record.reference_id,
                            "dispute_status": case.status.value,
                        },
                    )
                )
                self._log.info(
                    "late_registry_result_audited",
                    dispute_id=dispute_id,
                    evidence_id=evidence_id,
                    outcome=record.outcome.value,
                    status=case.status.value,
                )
                return record
            updated = case.record_registry_check(
                record, now=self._clock(), sla=self._config.sla
            )
            if updated is not case:
                await self._commit(case, updated, "record_registry_check")

        await self._after_commit(case, updated)
        return record

    async def drain_serial_checks(self) -> None:
        """Wait for every background serial check to finish."""
        while True:
            pending = [task for task in self._background if not task.done()]
            if not pending:
                break
            await asyncio.gather(*pending, return_exceptions=True)
        # let done callbacks run
        await asyncio.sleep(0)

    # ------------------------------------------------------------------
    # Panel and votes
    # ------------------------------------------------------------------

    async def assign_panel(
        self,
        dispute_id: str,
        members: Sequence[PanelMember] | None = None,
        *,
        expected_version: int | None = None,
    ) -> MutationReceipt:
        """Assign the verification panel.

        When no members are given, candidates come from the staffing
        collaborator.

        Raises:
            CollaboratorUnavailableError: If staffing keeps failing; the
                dispute is left unchanged.
        """
        if members is None:
            snapshot = await self._load(dispute_id)
            members = await self._calls.call(
                "staffing",
                lambda: self._staffing.get_panel_candidates(snapshot),
                dispute_id=dispute_id,
            )
        now = self._clock()
        panel = list(members)
        case = await self._mutate(
            dispute_id,
            "assign_panel",
            lambda c: c.assign_panel(panel, now=now, sla=self._config.sla),
            expected_version,
        )
        return MutationReceipt.for_case(case)

    async def cast_vote(
        self,
        dispute_id: str,
        member_id: str,
        vote: str,
        reason: str | None = None,
        *,
        expected_version: int | None = None,
    ) -> MutationReceipt:
        """Record a panel vote and settle the outcome if decided.

        An identical resubmission is accepted without a version change.
        """
        now = self._clock()
        case = await self._mutate(
            dispute_id,
            "cast_vote",
            lambda c: c.cast_vote(
                member_id, vote, reason, now=now, sla=self._config.sla
            ),
            expected_version,
        )
        return MutationReceipt.for_case(case)

    # ------------------------------------------------------------------
    # Investigator and administrative actions
    # ------------------------------------------------------------------

    async def force_escalate(
        self,
        dispute_id: str,
        reason: str,
        police_officer_name: str | None = None,
        police_officer_id: str | None = None,
        police_report_number: str | None = None,
        *,
        expected_version: int | None = None,
    ) -> MutationReceipt:
        """Escalate a dispute explicitly."""
        now = self._clock()
        case = await self._mutate(
            dispute_id,
            "force_escalate",
            lambda c: c.force_escalate(
                reason,
                police_officer_name,
                police_officer_id,
                police_report_number,
                now=now,
            ),
            expected_version,
        )
        return MutationReceipt.for_case(case)

    async def resolve_manually(
        self,
        dispute_id: str,
        winner_id: str,
        reason: str,
        decided_by: str,
        *,
        expected_version: int | None = None,
    ) -> MutationReceipt:
        """Declare a winner by administrative decision."""
        now = self._clock()
        case = await self._mutate(
            dispute_id,
            "resolve_manually",
            lambda c: c.resolve_manually(
                winner_id, reason, decided_by, now=now, sla=self._config.sla
            ),
            expected_version,
        )
        return MutationReceipt.for_case(case)

    async def add_note(
        self,
        dispute_id: str,
        author: str,
        text: str,
        *,
        expected_version: int | None = None,
    ) -> MutationReceipt:
        now = self._clock()
        case = await self._mutate(
            dispute_id,
            "add_note",
            lambda c: c.add_note(author, text, now=now, sla=self._config.sla),
            expected_version,
        )
        return MutationReceipt.for_case(case)

    async def record_police_findings(
        self,
        dispute_id: str,
        report_number: str,
        findings: str,
        recorded_by: str,
    ) -> AuditEntry:
        """File a police report's findings against an escalated dispute.

        The dispute itself is read-only once ESCALATED; findings go to the
        audit log and leave the aggregate and its version untouched.

        Raises:
            PoliceFindingsNotAcceptedError: If the dispute is not ESCALATED.
            DisputeValidationError: If the report number or findings are blank.
        """
        case = await self._load(dispute_id)
        context = {
            "dispute_id": dispute_id,
            "status": case.status.value,
            "version": case.version,
        }
        if case.status != DisputeStatus.ESCALATED:
            raise PoliceFindingsNotAcceptedError(**context)
        if not report_number.strip() or not findings.strip():
            raise DisputeValidationError(
                "Police report number and findings must not be blank", **context
            )
        entry = AuditEntry(
            dispute_id=dispute_id,
            event_type="police_findings_recorded",
            details={
                "report_number": report_number,
                "findings": findings,
                "recorded_by": recorded_by,
                "escalation_reason": case.escalation_reason,
            },
            recorded_at=self._clock(),
        )
        await self._audit_log.record(entry)
        self._log.info(
            "police_findings_recorded",
            dispute_id=dispute_id,
            report_number=report_number,
            recorded_by=recorded_by,
        )
        return entry

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_dispute(self, dispute_id: str) -> DisputeCase:
        """Return the current immutable aggregate snapshot."""
        return await self._load(dispute_id)

    async def get_dispute_view(self, dispute_id: str) -> DisputeView:
        """Return a consistent read snapshot of a dispute."""
        return DisputeView.from_case(await self._load(dispute_id))

    async def list_disputes(
        self,
        status: DisputeStatus | None = None,
        participant_id: str | None = None,
    ) -> list[DisputeView]:
        """List disputes, optionally filtered by status and participant."""
        views = []
        for case in await self._repository.list_all():
            if status is not None and case.status != status:
                continue
            if participant_id is not None and not case.involves(participant_id):
                continue
            views.append(DisputeView.from_case(case))
        return views

    # ------------------------------------------------------------------
    # SLA
    # ------------------------------------------------------------------

    async def sweep_sla(self) -> list[str]:
        """Escalate every open dispute whose SLA has elapsed.

        Returns:
            Ids of disputes escalated by this sweep.
        """
        sla = self._config.sla
        if sla is None:
            return []
        escalated: list[str] = []
        for snapshot in await self._repository.list_all():
            if snapshot.is_terminal:
                continue
            try:
                case = await self._mutate(
                    snapshot.dispute_id,
                    "sla_sweep",
                    lambda c: c.check_escalation(now=self._clock(), sla=sla),
                    None,
                )
            except DisputeEngineError as exc:
                self._log.warning(
                    "sla_sweep_skipped",
                    dispute_id=snapshot.dispute_id,
                    violation=exc.violation,
                    error=str(exc),
                )
                continue
            if case.status == DisputeStatus.ESCALATED and case.version != snapshot.version:
                escalated.append(case.dispute_id)
        if escalated:
            self._log.info("sla_sweep_escalated", dispute_ids=escalated)
        return escalated

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _exclusive(self, dispute_id: str) -> AsyncIterator[None]:
        """Hold a dispute's lock, dropping it once no writer holds or awaits it."""
        lock = self._locks.get(dispute_id)
        if lock is None:
            lock = self._locks[dispute_id] = asyncio.Lock()
        self._lock_holders[dispute_id] = self._lock_holders.get(dispute_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            remaining = self._lock_holders[dispute_id] - 1
            if remaining:
                self._lock_holders[dispute_id] = remaining
            else:
                del self._lock_holders[dispute_id]
                del self._locks[dispute_id]

    async def _load(self, dispute_id: str) -> DisputeCase:
        """Load a dispute, freezing it if its stored state is corrupted.

        Raises:
            DisputeFrozenError: If the dispute was frozen earlier.
            CorruptedDisputeStateError: If the stored state fails integrity checks.
            DisputeNotFoundError: If the dispute does not exist.
        """
        if await self._repository.is_frozen(dispute_id):
            raise DisputeFrozenError(dispute_id)
        try:
            case = await self._repository.get(dispute_id)
        except CorruptedDisputeStateError as exc:
            await self._freeze(dispute_id, exc.violations)
            raise
        if case is None:
            raise DisputeNotFoundError(dispute_id)
        return case

    async def _freeze(self, dispute_id: str, violations: list[str]) -> None:
        await self._repository.freeze(dispute_id, violations)
        self._log.error(
            "dispute_state_corrupted",
            dispute_id=dispute_id,
            violations=violations,
        )
        await self._audit_log.record(
            AuditEntry(
                dispute_id=dispute_id,
                event_type="dispute_frozen",
                details={"violations": list(violations)},
            )
        )
        try:
            await self._operator_alerts.report_corruption(dispute_id, list(violations))
        except Exception as exc:
            self._log.error(
                "operator_alert_failed",
                dispute_id=dispute_id,
                error=str(exc),
            )

    async def _mutate(
        self,
        dispute_id: str,
        operation: str,
        mutation: Mutation,
        expected_version: int | None,
    ) -> DisputeCase:
        """Apply a domain mutation under the dispute's lock.

        A mutation that returns the same aggregate is a no-op: nothing is
        written and the expected version is not checked.

        Raises:
            ConcurrentModificationError: If expected_version is stale.
        """
        async with self._exclusive(dispute_id):
            case = await self._load(dispute_id)
            updated = mutation(case)
            if updated is case:
                self._log.debug(
                    "mutation_noop",
                    dispute_id=dispute_id,
                    operation=operation,
                    version=case.version,
                )
                return case
            if expected_version is not None and expected_version != case.version:
                self._log.info(
                    "concurrent_modification_rejected",
                    dispute_id=dispute_id,
                    operation=operation,
                    expected_version=expected_version,
                    actual_version=case.version,
                )
                raise ConcurrentModificationError(
                    dispute_id,
                    expected_version,
                    case.version,
                    operation=operation,
                    status=case.status.value,
                )
            await self._commit(case, updated, operation)

        await self._after_commit(case, updated)
        return updated

    async def _commit(
        self, before: DisputeCase, after: DisputeCase, operation: str
    ) -> None:
        await self._repository.save(after, expected_version=before.version)
        self._log.info(
            "dispute_mutated",
            dispute_id=after.dispute_id,
            operation=operation,
            version=after.version,
            status=after.status.value,
        )

    async def _after_commit(self, before: DisputeCase, after: DisputeCase) -> None:
        """Fan out notifications for terminal transitions."""
        if before.status == after.status:
            return
        if after.status == DisputeStatus.RESOLVED:
            self._log.info(
                "dispute_resolved",
                dispute_id=after.dispute_id,
                winning_claimant_id=after.winning_claimant_id,
                decision=after.resolution_decision.value
                if after.resolution_decision
                else None,
                reason=after.resolution_reason,
            )
        elif after.status == DisputeStatus.ESCALATED:
            self._log.warning(
                "dispute_escalated",
                dispute_id=after.dispute_id,
                reason=after.escalation_reason,
                police_involved=after.police_involved,
            )
            try:
                await self._calls.call(
                    "escalation_channel",
                    lambda: self._escalation_channel.notify_escalated(after),
                    dispute_id=after.dispute_id,
                )
            except CollaboratorUnavailableError as exc:
                self._log.error(
                    "escalation_notice_failed",
                    dispute_id=after.dispute_id,
                    error=str(exc),
                )

    def _schedule_serial_check(self, dispute_id: str, evidence_id: str) -> None:
        task = asyncio.create_task(self.check_serial(dispute_id, evidence_id))
        self._background.add(task)
        task.add_done_callback(self._serial_check_done)
        self._log.debug(
            "serial_check_scheduled", dispute_id=dispute_id, evidence_id=evidence_id
        )

    def _serial_check_done(self, task: asyncio.Task[RegistryCheckRecord]) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._log.error(
                "serial_check_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
