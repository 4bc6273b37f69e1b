"""Unit tests for the EscalationPolicy domain service."""

from datetime import timedelta

import pytest

from lostfound_disputes.domain.models.escalation import EscalationTrigger
from lostfound_disputes.domain.models.evidence import (
    EvidenceType,
    RegistryCheckOutcome,
    RegistryCheckRecord,
)
from lostfound_disputes.domain.models.evidence_ledger import EvidenceLedger
from lostfound_disputes.domain.models.verification_panel import VerificationPanel
from lostfound_disputes.domain.services.escalation_policy import (
    SLA_TIMEOUT_REASON,
    EscalationPolicy,
)
from lostfound_disputes.domain.services.resolution_engine import (
    NO_QUORUM_REASON,
    UNRESOLVED_TIE_REASON,
)
from tests.helpers import NOW, make_evidence, make_members

SLA = timedelta(hours=72)


@pytest.fixture
def policy() -> EscalationPolicy:
    return EscalationPolicy()


@pytest.fixture
def panel() -> VerificationPanel:
    return VerificationPanel.assign(make_members(3), NOW)


def _ledger_with_check(outcome: RegistryCheckOutcome) -> EvidenceLedger:
    ledger, stamped = EvidenceLedger().append(
        make_evidence("alice", EvidenceType.SERIAL_NUMBER, serial_number="SN-42"), NOW
    )
    return ledger.record_registry_check(
        RegistryCheckRecord(
            evidence_id=stamped.evidence_id,
            serial_number="SN-42",
            outcome=outcome,
            reference_id="NCIC-7" if outcome == RegistryCheckOutcome.MATCH else None,
            checked_at=NOW,
        )
    )


class TestEvaluate:
    def test_nothing_fires(self, policy: EscalationPolicy, panel: VerificationPanel) -> None:
        assert policy.evaluate(EvidenceLedger(), panel, NOW, SLA) is None

    def test_stolen_property_match(
        self, policy: EscalationPolicy, panel: VerificationPanel
    ) -> None:
        decision = policy.evaluate(_ledger_with_check(RegistryCheckOutcome.MATCH), panel, NOW)

        assert decision is not None
        assert decision.trigger == EscalationTrigger.STOLEN_PROPERTY_MATCH
        assert decision.police_involved is True
        assert decision.police_report_number == "NCIC-7"
        assert decision.reason == (
            "stolen property match for serial SN-42 (registry reference NCIC-7)"
        )

    @pytest.mark.parametrize(
        "outcome", [RegistryCheckOutcome.CLEAR, RegistryCheckOutcome.UNVERIFIED]
    )
    def test_non_match_does_not_escalate(
        self,
        policy: EscalationPolicy,
        panel: VerificationPanel,
        outcome: RegistryCheckOutcome,
    ) -> None:
        assert policy.evaluate(_ledger_with_check(outcome), panel, NOW) is None

    def test_sla_elapsed(self, policy: EscalationPolicy, panel: VerificationPanel) -> None:
        decision = policy.evaluate(EvidenceLedger(), panel, NOW + SLA, SLA)

        assert decision is not None
        assert decision.trigger == EscalationTrigger.SLA_TIMEOUT
        assert decision.reason == SLA_TIMEOUT_REASON
        assert decision.police_involved is False

    def test_sla_not_yet_elapsed(
        self, policy: EscalationPolicy, panel: VerificationPanel
    ) -> None:
        now = NOW + SLA - timedelta(seconds=1)
        assert policy.evaluate(EvidenceLedger(), panel, now, SLA) is None

    def test_sla_disabled(self, policy: EscalationPolicy, panel: VerificationPanel) -> None:
        assert policy.evaluate(EvidenceLedger(), panel, NOW + SLA * 10, None) is None

    def test_sla_needs_assigned_panel(self, policy: EscalationPolicy) -> None:
        assert policy.evaluate(EvidenceLedger(), VerificationPanel(), NOW + SLA, SLA) is None

    def test_match_outranks_sla(
        self, policy: EscalationPolicy, panel: VerificationPanel
    ) -> None:
        ledger = _ledger_with_check(RegistryCheckOutcome.MATCH)
        decision = policy.evaluate(ledger, panel, NOW + SLA, SLA)
        assert decision is not None
        assert decision.trigger == EscalationTrigger.STOLEN_PROPERTY_MATCH


class TestDecisions:
    def test_deadlock_triggers(self) -> None:
        assert (
            EscalationPolicy.deadlock(NO_QUORUM_REASON).trigger
            == EscalationTrigger.NO_QUORUM
        )
        assert (
            EscalationPolicy.deadlock(UNRESOLVED_TIE_REASON).trigger
            == EscalationTrigger.UNRESOLVED_TIE
        )

    def test_override_with_officer_involves_police(self) -> None:
        decision = EscalationPolicy.override("suspected fraud", "Officer Diaz", "B-12")
        assert decision.trigger == EscalationTrigger.INVESTIGATOR_OVERRIDE
        assert decision.police_involved is True
        assert decision.police_officer_id == "B-12"

    def test_override_without_officer(self) -> None:
        assert EscalationPolicy.override("needs human review").police_involved is False
