"""Unit tests for SerialCheckService."""

import pytest

from lostfound_disputes.application.services.collaborator_calls import (
    CollaboratorCalls,
)
from lostfound_disputes.application.services.serial_check_service import (
    SerialCheckService,
)
from lostfound_disputes.domain.models.evidence import RegistryCheckOutcome
from lostfound_disputes.infrastructure.stubs import StolenPropertyRegistryStub


@pytest.fixture
def registry() -> StolenPropertyRegistryStub:
    return StolenPropertyRegistryStub({"SN-STOLEN": "NCIC-7"})


@pytest.fixture
def service(registry: StolenPropertyRegistryStub) -> SerialCheckService:
    calls = CollaboratorCalls(timeout_seconds=0.5, max_attempts=2, backoff_base_seconds=0.0)
    return SerialCheckService(registry, calls)


class TestCheck:
    @pytest.mark.asyncio
    async def test_match(self, service: SerialCheckService) -> None:
        record = await service.check("EV-1", "SN-STOLEN", dispute_id="D-1")

        assert record.outcome == RegistryCheckOutcome.MATCH
        assert record.reference_id == "NCIC-7"
        assert record.evidence_id == "EV-1"
        assert record.is_match

    @pytest.mark.asyncio
    async def test_clear(self, service: SerialCheckService) -> None:
        record = await service.check("EV-2", "SN-CLEAN")
        assert record.outcome == RegistryCheckOutcome.CLEAR
        assert record.reference_id is None

    @pytest.mark.asyncio
    async def test_unavailable_registry_is_unverified(
        self, service: SerialCheckService, registry: StolenPropertyRegistryStub
    ) -> None:
        registry.failing = True

        record = await service.check("EV-3", "SN-STOLEN")

        assert record.outcome == RegistryCheckOutcome.UNVERIFIED
        assert registry.checked == ["SN-STOLEN", "SN-STOLEN"]
