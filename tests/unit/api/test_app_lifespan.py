"""Unit tests for the application entry point wiring."""

from collections.abc import Iterator

import pytest
import structlog
from fastapi.testclient import TestClient

from lostfound_disputes.api.dependencies.disputes import (
    is_dispute_service_set,
    set_dispute_service,
)
from lostfound_disputes.api.main import app
from lostfound_disputes.bootstrap.disputes import reset_dispute_dependencies
from tests.helpers import FakeClock, ServiceHarness, build_harness


@pytest.fixture(autouse=True)
def clean_wiring() -> Iterator[None]:
    set_dispute_service(None)
    reset_dispute_dependencies()
    yield
    set_dispute_service(None)
    reset_dispute_dependencies()
    structlog.reset_defaults()


class TestLifespan:
    def test_wires_stub_service_when_unset(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DISPUTE_SLA_MONITOR_ENABLED", "false")

        with TestClient(app) as client:
            assert is_dispute_service_set()
            response = client.get("/v1/disputes")

        assert response.status_code == 200
        assert response.json() == {"items": [], "total": 0}

    def test_keeps_injected_service(
        self, monkeypatch: pytest.MonkeyPatch, fake_clock: FakeClock
    ) -> None:
        monkeypatch.setenv("DISPUTE_SLA_MONITOR_ENABLED", "false")
        harness: ServiceHarness = build_harness(fake_clock)
        set_dispute_service(harness.service)

        with TestClient(app) as client:
            created = client.post(
                "/v1/disputes",
                json={
                    "item": {"item_id": "ITEM-1", "title": "Umbrella"},
                    "claimants": [
                        {"claimant_id": "alice", "name": "Alice", "enterprise_name": "A"},
                        {"claimant_id": "bob", "name": "Bob", "enterprise_name": "B"},
                    ],
                },
            )

        assert created.status_code == 201
        assert len(harness.repository.raw(created.json()["dispute_id"])["claimants"]) == 2

    def test_runs_sla_monitor(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISPUTE_SLA_MONITOR_ENABLED", "true")

        with TestClient(app) as client:
            assert client.get("/v1/disputes").status_code == 200
