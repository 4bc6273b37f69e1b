"""Unit tests for Claimant and ClaimantRegistry.

Tests cover:
- Case-insensitive identity lookup
- Duplicate rejection by id and by contact email
- Claim status transitions on review and decision
- Involved enterprise derivation
"""

import pytest

from lostfound_disputes.domain.errors import DuplicateClaimantError, UnknownClaimantError
from lostfound_disputes.domain.models.claimant import ClaimStatus, normalize_identity
from lostfound_disputes.domain.models.claimant_registry import ClaimantRegistry
from tests.helpers import make_claimant


@pytest.fixture
def registry() -> ClaimantRegistry:
    return (
        ClaimantRegistry()
        .register(make_claimant("alice", enterprise="City University", email="alice@uni.edu"))
        .register(make_claimant("bob", enterprise="Metro Transit"))
    )


class TestClaimant:
    def test_normalize_identity_strips_and_casefolds(self) -> None:
        assert normalize_identity("  Alice ") == "alice"

    def test_trust_score_out_of_range_rejected(self) -> None:
        with pytest.raises(ValueError, match="trust_score_snapshot"):
            make_claimant("carol", trust=101.0)

    def test_blank_id_rejected(self) -> None:
        with pytest.raises(ValueError):
            make_claimant("   ")

    def test_round_trip(self) -> None:
        claimant = make_claimant("alice", email="a@x.org").with_evidence("EV-1")
        assert type(claimant).from_dict(claimant.to_dict()) == claimant


class TestLookup:
    def test_find_is_case_insensitive(self, registry: ClaimantRegistry) -> None:
        found = registry.find("ALICE")
        assert found is not None
        assert found.claimant_id == "alice"

    def test_get_unknown_raises(self, registry: ClaimantRegistry) -> None:
        with pytest.raises(UnknownClaimantError):
            registry.get("mallory")

    def test_registration_order_preserved(self, registry: ClaimantRegistry) -> None:
        assert registry.ids() == ["alice", "bob"]
        assert len(registry) == 2

    def test_iterates_claimants_in_registration_order(
        self, registry: ClaimantRegistry
    ) -> None:
        claimants = list(registry)
        assert [c.claimant_id for c in claimants] == ["alice", "bob"]
        assert claimants[0] is registry.get("alice")


class TestRegister:
    def test_duplicate_id_rejected(self, registry: ClaimantRegistry) -> None:
        with pytest.raises(DuplicateClaimantError):
            registry.register(make_claimant("Alice"))

    def test_duplicate_email_rejected(self, registry: ClaimantRegistry) -> None:
        assert registry.duplicate_match(make_claimant("al", email="ALICE@uni.edu")) == "email"
        with pytest.raises(DuplicateClaimantError):
            registry.register(make_claimant("al", email="ALICE@uni.edu"))

    def test_register_returns_new_registry(self, registry: ClaimantRegistry) -> None:
        grown = registry.register(make_claimant("carol"))
        assert len(grown) == 3
        assert len(registry) == 2


class TestStatuses:
    def test_mark_under_review_moves_submitted_claims(
        self, registry: ClaimantRegistry
    ) -> None:
        reviewed = registry.mark_under_review()
        assert {c.claim_status for c in reviewed} == {ClaimStatus.UNDER_REVIEW}

    def test_mark_decision_approves_winner_only(self, registry: ClaimantRegistry) -> None:
        decided = registry.mark_decision("bob")
        assert decided.get("bob").claim_status == ClaimStatus.APPROVED
        assert decided.get("alice").claim_status == ClaimStatus.REJECTED

    def test_link_evidence(self, registry: ClaimantRegistry) -> None:
        linked = registry.link_evidence("BOB", "EV-9")
        assert linked.get("bob").evidence_ids == ("EV-9",)


class TestInvolvedEnterprises:
    def test_distinct_in_registration_order(self, registry: ClaimantRegistry) -> None:
        grown = registry.register(make_claimant("carol", enterprise="City University"))
        assert grown.involved_enterprises() == ["City University", "Metro Transit"]

    def test_round_trip(self, registry: ClaimantRegistry) -> None:
        assert ClaimantRegistry.from_list(registry.to_list()) == registry
