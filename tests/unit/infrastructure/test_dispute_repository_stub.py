"""Unit tests for DisputeRepositoryStub.

Tests:
- Add and load round trip through the serialized payload
- Compare-and-swap on save
- Corrupted payloads raise on load and are skipped by list_all
- Freeze bookkeeping
"""

from __future__ import annotations

import pytest

from lostfound_disputes.domain.errors import (
    ConcurrentModificationError,
    CorruptedDisputeStateError,
    DisputeNotFoundError,
)
from lostfound_disputes.domain.models.dispute_case import DisputeCase
from lostfound_disputes.infrastructure.stubs import DisputeRepositoryStub
from tests.helpers import NOW


@pytest.fixture
def repo() -> DisputeRepositoryStub:
    """Create a fresh repository for each test."""
    return DisputeRepositoryStub()


class TestAddAndGet:
    @pytest.mark.asyncio
    async def test_round_trip(
        self, repo: DisputeRepositoryStub, open_case: DisputeCase
    ) -> None:
        await repo.add(open_case)

        loaded = await repo.get(open_case.dispute_id)

        assert loaded == open_case
        assert loaded is not open_case

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, repo: DisputeRepositoryStub) -> None:
        assert await repo.get("nope") is None

    @pytest.mark.asyncio
    async def test_duplicate_add_rejected(
        self, repo: DisputeRepositoryStub, open_case: DisputeCase
    ) -> None:
        await repo.add(open_case)

        with pytest.raises(ValueError, match="already exists"):
            await repo.add(open_case)


class TestSave:
    @pytest.mark.asyncio
    async def test_save_with_current_version(
        self, repo: DisputeRepositoryStub, open_case: DisputeCase
    ) -> None:
        await repo.add(open_case)
        updated = open_case.add_note("inv-1", "called claimant", now=NOW)

        await repo.save(updated, expected_version=1)

        loaded = await repo.get(open_case.dispute_id)
        assert loaded is not None
        assert loaded.version == 2
        assert repo.save_count == 1

    @pytest.mark.asyncio
    async def test_save_with_stale_version(
        self, repo: DisputeRepositoryStub, open_case: DisputeCase
    ) -> None:
        await repo.add(open_case)
        first = open_case.add_note("inv-1", "first", now=NOW)
        second = open_case.add_note("inv-2", "second", now=NOW)
        await repo.save(first, expected_version=1)

        with pytest.raises(ConcurrentModificationError) as exc_info:
            await repo.save(second, expected_version=1)

        assert exc_info.value.expected_version == 1
        assert exc_info.value.actual_version == 2
        loaded = await repo.get(open_case.dispute_id)
        assert loaded is not None
        assert [n.text for n in loaded.case_notes] == ["first"]

    @pytest.mark.asyncio
    async def test_save_unknown_dispute(
        self, repo: DisputeRepositoryStub, open_case: DisputeCase
    ) -> None:
        with pytest.raises(DisputeNotFoundError):
            await repo.save(open_case, expected_version=1)


class TestCorruption:
    @pytest.mark.asyncio
    async def test_corrupted_payload_raises_on_get(
        self, repo: DisputeRepositoryStub, open_case: DisputeCase
    ) -> None:
        await repo.add(open_case)
        payload = repo.raw(open_case.dispute_id)
        payload["claimants"] = payload["claimants"][:1]
        repo.put_raw(open_case.dispute_id, payload)

        with pytest.raises(CorruptedDisputeStateError) as exc_info:
            await repo.get(open_case.dispute_id)

        assert exc_info.value.dispute_id == open_case.dispute_id

    @pytest.mark.asyncio
    async def test_list_all_skips_corrupted_and_frozen(
        self, repo: DisputeRepositoryStub, item, alice, bob
    ) -> None:
        cases = [
            DisputeCase.open(item, [alice, bob], dispute_id=f"D-{i}", now=NOW)
            for i in range(3)
        ]
        for case in cases:
            await repo.add(case)
        broken = repo.raw("D-1")
        broken["version"] = 0
        repo.put_raw("D-1", broken)
        await repo.freeze("D-2", ["operator hold"])

        listed = await repo.list_all()

        assert [c.dispute_id for c in listed] == ["D-0"]

    @pytest.mark.asyncio
    async def test_freeze_records_violations(self, repo: DisputeRepositoryStub) -> None:
        await repo.freeze("D-9", ["RESOLVED dispute has no winning claimant"])

        assert await repo.is_frozen("D-9")
        assert repo.frozen_violations("D-9") == [
            "RESOLVED dispute has no winning claimant"
        ]
        assert repo.frozen_violations("D-10") is None

    @pytest.mark.asyncio
    async def test_clear(
        self, repo: DisputeRepositoryStub, open_case: DisputeCase
    ) -> None:
        await repo.add(open_case)
        await repo.freeze(open_case.dispute_id, ["x"])

        repo.clear()

        assert await repo.get(open_case.dispute_id) is None
        assert not await repo.is_frozen(open_case.dispute_id)
