"""Unit tests for CollaboratorCalls (timeout, retry and backoff)."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from lostfound_disputes.application.services.collaborator_calls import (
    CollaboratorCalls,
)
from lostfound_disputes.config import DisputeConfig
from lostfound_disputes.domain.errors import CollaboratorUnavailableError


@pytest.fixture
def calls() -> CollaboratorCalls:
    return CollaboratorCalls(
        timeout_seconds=0.05, max_attempts=3, backoff_base_seconds=0.0
    )


class TestCall:
    @pytest.mark.asyncio
    async def test_returns_first_success(self, calls: CollaboratorCalls) -> None:
        collaborator = AsyncMock(return_value=72.5)

        result = await calls.call("trust_score", lambda: collaborator("alice"))

        assert result == 72.5
        collaborator.assert_awaited_once_with("alice")

    @pytest.mark.asyncio
    async def test_retries_transient_failures(self, calls: CollaboratorCalls) -> None:
        collaborator = AsyncMock(side_effect=[ConnectionError("down"), "ok"])

        result = await calls.call("staffing", lambda: collaborator())

        assert result == "ok"
        assert collaborator.await_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, calls: CollaboratorCalls) -> None:
        collaborator = AsyncMock(side_effect=ConnectionError("down"))

        with pytest.raises(CollaboratorUnavailableError) as exc_info:
            await calls.call("staffing", lambda: collaborator(), dispute_id="D-1")

        assert collaborator.await_count == 3
        assert exc_info.value.collaborator == "staffing"
        assert exc_info.value.attempts == 3
        assert exc_info.value.dispute_id == "D-1"
        assert "ConnectionError" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_slow_collaborator_times_out(self, calls: CollaboratorCalls) -> None:
        attempts = 0

        async def slow() -> str:
            nonlocal attempts
            attempts += 1
            await asyncio.sleep(1.0)
            return "late"

        with pytest.raises(CollaboratorUnavailableError, match="timed out"):
            await calls.call("stolen_property_registry", slow)
        assert attempts == 3


class TestBackoff:
    def test_exponential_with_ceiling(self) -> None:
        calls = CollaboratorCalls(
            timeout_seconds=1.0, backoff_base_seconds=0.5, backoff_max_seconds=8.0
        )
        assert 0.5 <= calls.backoff_delay(1) <= 0.55
        assert 1.0 <= calls.backoff_delay(2) <= 1.1
        assert 8.0 <= calls.backoff_delay(10) <= 8.8

    def test_zero_base_disables_backoff(self, calls: CollaboratorCalls) -> None:
        assert calls.backoff_delay(3) == 0.0

    def test_from_config(self) -> None:
        calls = CollaboratorCalls.from_config(
            DisputeConfig(collaborator_timeout_seconds=1.5, max_attempts=4)
        )
        assert calls.timeout_seconds == 1.5
        assert calls.max_attempts == 4
