"""Escalation policy domain service.

Cross-cutting triggers that take a dispute out of panel adjudication:
a stolen-property registry match (police involved) and the SLA timeout.
Tie deadlocks come from the resolution engine and explicit escalations
from investigators; both are expressed as EscalationDecision values too,
so every path records its reason the same way.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from lostfound_disputes.domain.models.escalation import (
    EscalationDecision,
    EscalationTrigger,
)
from lostfound_disputes.domain.models.evidence_ledger import EvidenceLedger
from lostfound_disputes.domain.models.verification_panel import VerificationPanel
from lostfound_disputes.domain.services.resolution_engine import NO_QUORUM_REASON

SLA_TIMEOUT_REASON = "SLA timeout"


class EscalationPolicy:
    """Evaluates escalation triggers against a dispute's current state.

    A stolen-property match outranks the SLA timeout; both outrank any
    resolution computed in the same mutation.
    """

    def evaluate(
        self,
        ledger: EvidenceLedger,
        panel: VerificationPanel,
        now: datetime,
        sla: timedelta | None = None,
    ) -> EscalationDecision | None:
        """Return the escalation that fires now, or None.

        Args:
            ledger: Evidence ledger with registry check records.
            panel: Verification panel (assignment time for the SLA).
            now: Evaluation time (UTC).
            sla: Allowed time from panel assignment to decision; None disables.
        """
        matches = ledger.stolen_property_matches()
        if matches:
            return self.stolen_property(matches[0].serial_number, matches[0].reference_id)

        if sla is not None and panel.assigned_at is not None:
            if now - panel.assigned_at >= sla:
                return EscalationDecision(
                    trigger=EscalationTrigger.SLA_TIMEOUT,
                    reason=SLA_TIMEOUT_REASON,
                )
        return None

    @staticmethod
    def stolen_property(serial_number: str, reference_id: str | None) -> EscalationDecision:
        reference = f" (registry reference {reference_id})" if reference_id else ""
        return EscalationDecision(
            trigger=EscalationTrigger.STOLEN_PROPERTY_MATCH,
            reason=f"stolen property match for serial {serial_number}{reference}",
            police_involved=True,
            police_report_number=reference_id,
        )

    @staticmethod
    def deadlock(reason: str) -> EscalationDecision:
        trigger = (
            EscalationTrigger.NO_QUORUM
            if reason == NO_QUORUM_REASON
            else EscalationTrigger.UNRESOLVED_TIE
        )
        return EscalationDecision(trigger=trigger, reason=reason)

    @staticmethod
    def override(
        reason: str,
        police_officer_name: str | None = None,
        police_officer_id: str | None = None,
        police_report_number: str | None = None,
    ) -> EscalationDecision:
        return EscalationDecision(
            trigger=EscalationTrigger.INVESTIGATOR_OVERRIDE,
            reason=reason,
            police_involved=police_officer_name is not None,
            police_officer_name=police_officer_name,
            police_officer_id=police_officer_id,
            police_report_number=police_report_number,
        )
