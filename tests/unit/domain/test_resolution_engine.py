"""Unit tests for the ResolutionEngine domain service.

Tests cover:
- Quorum on non-abstaining votes
- Early decision only when remaining votes cannot change the result
- Tie-break order: trust score, VALID evidence, then escalation
- Independence from vote arrival order
"""

from itertools import permutations

import pytest

from lostfound_disputes.domain.models.claimant_registry import ClaimantRegistry
from lostfound_disputes.domain.models.evidence import VerificationResult
from lostfound_disputes.domain.models.evidence_ledger import EvidenceLedger
from lostfound_disputes.domain.models.panel_member import ABSTAIN
from lostfound_disputes.domain.models.resolution_outcome import (
    OutcomeKind,
    TieBreakRule,
)
from lostfound_disputes.domain.models.verification_panel import VerificationPanel
from lostfound_disputes.domain.services.resolution_engine import (
    NO_QUORUM_REASON,
    UNRESOLVED_TIE_REASON,
    ResolutionEngine,
    tally_votes,
)
from tests.helpers import NOW, make_claimant, make_evidence, make_members


def _registry(trust_a: float = 80.0, trust_b: float = 40.0) -> ClaimantRegistry:
    return (
        ClaimantRegistry()
        .register(make_claimant("alice", trust=trust_a))
        .register(make_claimant("bob", trust=trust_b))
    )


def _panel(size: int, votes: list[tuple[str, str]]) -> VerificationPanel:
    panel = VerificationPanel.assign(make_members(size), NOW)
    for member_id, vote in votes:
        panel = panel.record_vote(member_id, vote, None, NOW)
    return panel


@pytest.fixture
def engine() -> ResolutionEngine:
    return ResolutionEngine()


class TestPending:
    def test_unassigned_panel_is_pending(self, engine: ResolutionEngine) -> None:
        outcome = engine.evaluate(_registry(), EvidenceLedger(), VerificationPanel())
        assert outcome.kind == OutcomeKind.PENDING

    def test_below_quorum_is_pending(self, engine: ResolutionEngine) -> None:
        panel = _panel(3, [("m1", "alice")])
        outcome = engine.evaluate(_registry(), EvidenceLedger(), panel)
        assert outcome.kind == OutcomeKind.PENDING
        assert outcome.tally == {"alice": 1, "bob": 0}

    def test_split_with_vote_outstanding_is_pending(
        self, engine: ResolutionEngine
    ) -> None:
        panel = _panel(3, [("m1", "alice"), ("m2", "bob")])
        outcome = engine.evaluate(_registry(), EvidenceLedger(), panel)
        assert outcome.kind == OutcomeKind.PENDING


class TestPlurality:
    def test_unassailable_lead_decides_early(self, engine: ResolutionEngine) -> None:
        panel = _panel(3, [("m1", "bob"), ("m2", "bob")])
        outcome = engine.evaluate(_registry(), EvidenceLedger(), panel)

        assert outcome.kind == OutcomeKind.RESOLVED
        assert outcome.winner_id == "bob"
        assert outcome.tie_break == TieBreakRule.NONE
        assert outcome.reason == "Panel voted 2-0 in favor of Bob"

    def test_two_to_one(self, engine: ResolutionEngine) -> None:
        panel = _panel(3, [("m1", "alice"), ("m2", "bob"), ("m3", "alice")])
        outcome = engine.evaluate(_registry(), EvidenceLedger(), panel)

        assert outcome.winner_id == "alice"
        assert outcome.reason == "Panel voted 2-1 in favor of Alice"

    def test_vote_order_does_not_matter(self, engine: ResolutionEngine) -> None:
        votes = [("m1", "alice"), ("m2", "bob"), ("m3", "alice"), ("m4", ABSTAIN)]
        outcomes = {
            engine.evaluate(_registry(), EvidenceLedger(), _panel(4, list(order))).winner_id
            for order in permutations(votes)
        }
        assert outcomes == {"alice"}


class TestTieBreak:
    def test_trust_score_breaks_tie(self, engine: ResolutionEngine) -> None:
        panel = _panel(4, [("m1", "alice"), ("m2", "bob"), ("m3", "alice"), ("m4", "bob")])
        outcome = engine.evaluate(_registry(40.0, 75.0), EvidenceLedger(), panel)

        assert outcome.kind == OutcomeKind.RESOLVED
        assert outcome.winner_id == "bob"
        assert outcome.tie_break == TieBreakRule.TRUST_SCORE
        assert "higher trust score (75.0)" in outcome.reason

    def test_valid_evidence_breaks_equal_trust(self, engine: ResolutionEngine) -> None:
        ledger, stamped = EvidenceLedger().append(make_evidence("alice"), NOW)
        ledger, other = ledger.append(make_evidence("bob"), NOW)
        ledger = ledger.verify(stamped.evidence_id, VerificationResult.VALID, "inv", NOW)
        ledger = ledger.verify(other.evidence_id, VerificationResult.INVALID, "inv", NOW)
        panel = _panel(4, [("m1", "alice"), ("m2", "bob"), ("m3", "alice"), ("m4", "bob")])

        outcome = engine.evaluate(_registry(60.0, 60.0), ledger, panel)

        assert outcome.winner_id == "alice"
        assert outcome.tie_break == TieBreakRule.VALID_EVIDENCE
        assert "1 valid item(s)" in outcome.reason

    def test_unbreakable_tie_escalates(self, engine: ResolutionEngine) -> None:
        panel = _panel(4, [("m1", "alice"), ("m2", "bob"), ("m3", ABSTAIN), ("m4", ABSTAIN)])
        outcome = engine.evaluate(_registry(60.0, 60.0), EvidenceLedger(), panel)

        assert outcome.kind == OutcomeKind.ESCALATED
        assert outcome.reason == UNRESOLVED_TIE_REASON
        assert outcome.winner_id is None


class TestNoQuorum:
    def test_all_abstain_escalates(self, engine: ResolutionEngine) -> None:
        panel = _panel(3, [("m1", "alice"), ("m2", ABSTAIN), ("m3", ABSTAIN)])
        outcome = engine.evaluate(_registry(), EvidenceLedger(), panel)

        assert outcome.kind == OutcomeKind.ESCALATED
        assert outcome.reason == NO_QUORUM_REASON


class TestTally:
    def test_every_claimant_listed(self) -> None:
        panel = _panel(3, [("m1", "bob"), ("m2", ABSTAIN)])
        assert tally_votes(_registry(), panel) == {"alice": 0, "bob": 1}

    def test_tally_never_exceeds_panel_size(self) -> None:
        panel = _panel(3, [("m1", "alice"), ("m1", "bob"), ("m1", "alice")])
        assert sum(tally_votes(_registry(), panel).values()) == 1
