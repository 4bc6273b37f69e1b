"""Unit tests for correlation id management and the structlog processor."""

import asyncio
import re

import pytest

from lostfound_disputes.infrastructure.observability.correlation import (
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def clean_correlation_id():
    set_correlation_id("")
    yield
    set_correlation_id("")


class TestGenerateCorrelationId:
    def test_uuid7_format(self) -> None:
        # version nibble 7, RFC 4122 variant
        uuid_pattern = re.compile(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-7[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
        )
        assert uuid_pattern.match(generate_correlation_id()) is not None

    def test_unique(self) -> None:
        ids = [generate_correlation_id() for _ in range(100)]
        assert len(set(ids)) == 100


class TestCorrelationIdContext:
    def test_empty_when_not_set(self) -> None:
        assert get_correlation_id() == ""

    def test_set_and_get(self) -> None:
        set_correlation_id("req-123")
        assert get_correlation_id() == "req-123"

    @pytest.mark.asyncio
    async def test_isolated_between_tasks(self) -> None:
        results: dict[str, str] = {}

        async def task_with_id(name: str, correlation_id: str) -> None:
            set_correlation_id(correlation_id)
            await asyncio.sleep(0.01)
            results[name] = get_correlation_id()

        await asyncio.gather(
            task_with_id("a", "id-a"),
            task_with_id("b", "id-b"),
        )

        assert results == {"a": "id-a", "b": "id-b"}

    @pytest.mark.asyncio
    async def test_inherited_by_child_tasks(self) -> None:
        set_correlation_id("parent-id")

        async def child() -> str:
            return get_correlation_id()

        assert await asyncio.create_task(child()) == "parent-id"


class TestCorrelationIdProcessor:
    def test_adds_id_when_set(self) -> None:
        set_correlation_id("req-1")

        event = correlation_id_processor(None, "info", {"event": "dispute_opened"})

        assert event == {"event": "dispute_opened", "correlation_id": "req-1"}

    def test_leaves_event_untouched_when_unset(self) -> None:
        event = correlation_id_processor(None, "info", {"event": "dispute_opened"})

        assert "correlation_id" not in event
