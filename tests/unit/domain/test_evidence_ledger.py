"""Unit tests for EvidenceItem and EvidenceLedger.

Tests cover:
- Evidence payload validation
- Append-only ordering and id assignment
- Verify-once semantics
- Registry check records and VALID counts
"""

from datetime import timedelta

import pytest

from lostfound_disputes.domain.errors import (
    AlreadyVerifiedError,
    EvidenceNotFoundError,
    MalformedEvidenceError,
)
from lostfound_disputes.domain.models.evidence import (
    EvidenceItem,
    EvidenceType,
    RegistryCheckOutcome,
    RegistryCheckRecord,
    VerificationResult,
)
from lostfound_disputes.domain.models.evidence_ledger import EvidenceLedger
from tests.helpers import NOW, make_evidence


@pytest.fixture
def ledger() -> EvidenceLedger:
    ledger, _ = EvidenceLedger().append(make_evidence("alice"), NOW)
    ledger, _ = ledger.append(
        make_evidence("bob", EvidenceType.SERIAL_NUMBER, serial_number="SN-42"),
        NOW + timedelta(minutes=1),
    )
    return ledger


class TestEvidenceItem:
    def test_blank_description_rejected(self) -> None:
        with pytest.raises(MalformedEvidenceError):
            EvidenceItem(
                claimant_id="alice",
                submitted_by_id="alice",
                submitted_by_name="Alice",
                evidence_type=EvidenceType.PHOTO,
                description="  ",
            )

    def test_serial_number_evidence_requires_serial(self) -> None:
        with pytest.raises(MalformedEvidenceError, match="serial number"):
            make_evidence("alice", EvidenceType.SERIAL_NUMBER)

    def test_verified_flag_must_match_result(self) -> None:
        with pytest.raises(MalformedEvidenceError):
            EvidenceItem(
                claimant_id="alice",
                submitted_by_id="alice",
                submitted_by_name="Alice",
                evidence_type=EvidenceType.RECEIPT,
                description="receipt",
                verified=True,
            )


class TestAppend:
    def test_assigns_ids_and_timestamps(self, ledger: EvidenceLedger) -> None:
        first, second = ledger.items
        assert first.evidence_id.startswith("EV-")
        assert first.evidence_id != second.evidence_id
        assert first.submitted_at == NOW
        assert second.is_serial_number

    def test_append_does_not_touch_original(self, ledger: EvidenceLedger) -> None:
        grown, stamped = ledger.append(make_evidence("alice"), NOW)
        assert len(grown) == 3
        assert len(ledger) == 2
        assert grown.items[-1] == stamped


class TestVerify:
    def test_verify_once(self, ledger: EvidenceLedger) -> None:
        evidence_id = ledger.items[0].evidence_id
        verified = ledger.verify(evidence_id, VerificationResult.VALID, "inv-1", NOW)

        item = verified.get(evidence_id)
        assert item.verified is True
        assert item.verification_result == VerificationResult.VALID
        assert item.verified_by == "inv-1"

    def test_second_verification_rejected(self, ledger: EvidenceLedger) -> None:
        evidence_id = ledger.items[0].evidence_id
        verified = ledger.verify(evidence_id, VerificationResult.INVALID, "inv-1", NOW)

        with pytest.raises(AlreadyVerifiedError):
            verified.verify(evidence_id, VerificationResult.VALID, "inv-2", NOW)
        assert verified.get(evidence_id).verification_result == VerificationResult.INVALID

    def test_pending_result_rejected(self, ledger: EvidenceLedger) -> None:
        with pytest.raises(ValueError):
            ledger.verify(ledger.items[0].evidence_id, VerificationResult.PENDING, "x", NOW)

    def test_unknown_evidence(self, ledger: EvidenceLedger) -> None:
        with pytest.raises(EvidenceNotFoundError):
            ledger.verify("EV-missing", VerificationResult.VALID, "inv-1", NOW)

    def test_valid_count(self, ledger: EvidenceLedger) -> None:
        evidence_id = ledger.items[0].evidence_id
        verified = ledger.verify(evidence_id, VerificationResult.VALID, "inv-1", NOW)
        assert verified.valid_count("alice") == 1
        assert verified.valid_count("bob") == 0


class TestRegistryChecks:
    def test_record_and_find_match(self, ledger: EvidenceLedger) -> None:
        evidence_id = ledger.items[1].evidence_id
        record = RegistryCheckRecord(
            evidence_id=evidence_id,
            serial_number="SN-42",
            outcome=RegistryCheckOutcome.MATCH,
            reference_id="NCIC-7",
            checked_at=NOW,
        )
        checked = ledger.record_registry_check(record)

        assert checked.registry_check_for(evidence_id) == record
        assert checked.stolen_property_matches() == [record]

    def test_unknown_evidence_rejected(self, ledger: EvidenceLedger) -> None:
        record = RegistryCheckRecord(
            evidence_id="EV-missing",
            serial_number="SN-1",
            outcome=RegistryCheckOutcome.CLEAR,
        )
        with pytest.raises(EvidenceNotFoundError):
            ledger.record_registry_check(record)

    def test_round_trip(self, ledger: EvidenceLedger) -> None:
        record = RegistryCheckRecord(
            evidence_id=ledger.items[1].evidence_id,
            serial_number="SN-42",
            outcome=RegistryCheckOutcome.UNVERIFIED,
            checked_at=NOW,
        )
        checked = ledger.record_registry_check(record)
        assert EvidenceLedger.from_dict(checked.to_dict()) == checked
