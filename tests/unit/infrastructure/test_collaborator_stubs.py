"""Unit tests for the collaborator stubs (staffing, registry, trust scores)."""

import asyncio

import pytest

from lostfound_disputes.domain.models.dispute_case import DisputeCase
from lostfound_disputes.infrastructure.stubs import (
    EscalationChannelStub,
    StaffingStub,
    StolenPropertyRegistryStub,
    TrustScoreStub,
)
from tests.helpers import make_members


class TestStaffingStub:
    @pytest.mark.asyncio
    async def test_prefers_neutral_enterprises(self, open_case: DisputeCase) -> None:
        staffing = StaffingStub(
            make_members(2, prefix="uni", enterprise="City University")
            + make_members(3, prefix="air", enterprise="Airport Security")
        )

        members = await staffing.get_panel_candidates(open_case)

        assert [m.member_id for m in members] == ["air1", "air2", "air3"]
        assert staffing.calls == 1

    @pytest.mark.asyncio
    async def test_falls_back_when_too_few_neutral(
        self, open_case: DisputeCase
    ) -> None:
        staffing = StaffingStub(
            make_members(2, prefix="uni", enterprise="City University")
            + make_members(2, prefix="air", enterprise="Airport Security")
        )

        members = await staffing.get_panel_candidates(open_case)

        assert len(members) == 4

    @pytest.mark.asyncio
    async def test_failing(self, open_case: DisputeCase) -> None:
        staffing = StaffingStub()
        staffing.failing = True

        with pytest.raises(ConnectionError):
            await staffing.get_panel_candidates(open_case)


class TestStolenPropertyRegistryStub:
    @pytest.mark.asyncio
    async def test_match_and_clear(self) -> None:
        registry = StolenPropertyRegistryStub({"SN-1": "NCIC-1"})

        hit = await registry.check_serial("SN-1")
        miss = await registry.check_serial("SN-2")

        assert hit.match is True and hit.reference_id == "NCIC-1"
        assert miss.match is False and miss.reference_id is None
        assert registry.checked == ["SN-1", "SN-2"]

    @pytest.mark.asyncio
    async def test_hold_blocks_until_release(self) -> None:
        registry = StolenPropertyRegistryStub()
        registry.report_stolen("SN-9", "NCIC-9")
        registry.hold()

        pending = asyncio.create_task(registry.check_serial("SN-9"))
        await asyncio.sleep(0.01)
        assert not pending.done()

        registry.release()
        result = await pending

        assert result.match is True


class TestTrustScoreStub:
    @pytest.mark.asyncio
    async def test_scores_and_default(self) -> None:
        stub = TrustScoreStub({"alice": 80.0}, default=45.0)

        assert await stub.get_trust_score("alice") == 80.0
        assert await stub.get_trust_score("zed") == 45.0
        assert stub.calls == ["alice", "zed"]

    @pytest.mark.asyncio
    async def test_fail_next(self) -> None:
        stub = TrustScoreStub({"alice": 80.0})
        stub.fail_next(1)

        with pytest.raises(ConnectionError):
            await stub.get_trust_score("alice")
        assert await stub.get_trust_score("alice") == 80.0


class TestEscalationChannelStub:
    @pytest.mark.asyncio
    async def test_records_and_fails(self, open_case: DisputeCase) -> None:
        channel = EscalationChannelStub()
        await channel.notify_escalated(open_case)
        channel.failing = True

        with pytest.raises(ConnectionError):
            await channel.notify_escalated(open_case)
        assert channel.notices == [open_case]
