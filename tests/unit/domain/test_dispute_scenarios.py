"""Acceptance scenarios for panel adjudication on the DisputeCase aggregate.

Scenario A: 2-1 panel vote resolves for the majority.
Scenario B: a 2-member panel is rejected.
Scenario C: a split panel with two abstentions escalates as an unresolved tie.
Scenario D: a stolen-property match mid-vote escalates with police involved.
Scenario E: registering after resolution fails and leaves claimants unchanged.
"""

import pytest

from lostfound_disputes.domain.errors import PanelTooSmallError, StaleStateError
from lostfound_disputes.domain.models.dispute_case import DisputeCase, DisputeStatus
from lostfound_disputes.domain.models.evidence import (
    EvidenceType,
    RegistryCheckOutcome,
    RegistryCheckRecord,
)
from lostfound_disputes.domain.models.panel_member import ABSTAIN
from lostfound_disputes.domain.services.resolution_engine import UNRESOLVED_TIE_REASON
from tests.helpers import NOW, make_claimant, make_evidence, make_item, make_members


def _open(trust_a: float, trust_b: float) -> DisputeCase:
    return DisputeCase.open(
        make_item(),
        [make_claimant("alice", trust=trust_a), make_claimant("bob", trust=trust_b)],
        now=NOW,
    )


class TestScenarioA:
    def test_majority_wins(self) -> None:
        case = _open(80.0, 40.0).assign_panel(make_members(3), now=NOW)
        assert case.votes_required == 2

        case = case.cast_vote("m1", "alice", now=NOW)
        case = case.cast_vote("m2", "bob", now=NOW)
        assert case.status == DisputeStatus.UNDER_REVIEW
        case = case.cast_vote("m3", "alice", now=NOW)

        assert case.status == DisputeStatus.RESOLVED
        assert case.winning_claimant_id == "alice"


class TestScenarioB:
    def test_two_member_panel_rejected(self) -> None:
        case = _open(60.0, 60.0)
        with pytest.raises(PanelTooSmallError):
            case.assign_panel(make_members(2), now=NOW)
        assert case.panel.is_assigned is False


class TestScenarioC:
    def test_split_with_abstentions_escalates(self) -> None:
        case = _open(60.0, 60.0).assign_panel(make_members(4), now=NOW)
        assert case.votes_required == 2

        for member_id, vote in (("m1", "alice"), ("m2", "bob"), ("m3", ABSTAIN)):
            case = case.cast_vote(member_id, vote, now=NOW)
            assert case.status == DisputeStatus.UNDER_REVIEW
        case = case.cast_vote("m4", ABSTAIN, now=NOW)

        assert case.status == DisputeStatus.ESCALATED
        assert case.escalation_reason == UNRESOLVED_TIE_REASON
        assert case.winning_claimant_id is None


class TestScenarioD:
    def test_registry_match_before_quorum(self) -> None:
        case = _open(80.0, 40.0).assign_panel(make_members(5), now=NOW)
        case = case.add_evidence(
            make_evidence("alice", EvidenceType.SERIAL_NUMBER, serial_number="SN-42"),
            now=NOW,
        )
        evidence_id = case.latest_evidence.evidence_id
        case = case.cast_vote("m1", "alice", now=NOW)
        case = case.cast_vote("m2", "alice", now=NOW)

        case = case.record_registry_check(
            RegistryCheckRecord(
                evidence_id=evidence_id,
                serial_number="SN-42",
                outcome=RegistryCheckOutcome.MATCH,
                reference_id="NCIC-7",
                checked_at=NOW,
            ),
            now=NOW,
        )

        assert case.status == DisputeStatus.ESCALATED
        assert case.police_involved is True
        assert case.winning_claimant_id is None
        with pytest.raises(StaleStateError):
            case.cast_vote("m3", "alice", now=NOW)


class TestScenarioE:
    def test_register_after_resolution(self) -> None:
        case = _open(80.0, 40.0).assign_panel(make_members(3), now=NOW)
        case = case.cast_vote("m1", "bob", now=NOW).cast_vote("m2", "bob", now=NOW)
        assert case.status == DisputeStatus.RESOLVED

        with pytest.raises(StaleStateError):
            case.add_claimant(make_claimant("carol"))
        assert [c.claimant_id for c in case.claimants] == ["alice", "bob"]
