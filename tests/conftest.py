"""
Pytest configuration and shared fixtures for dispute engine tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Time-dependent tests use FakeClock from tests.helpers
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from datetime import datetime

import pytest

from lostfound_disputes.domain.models.claimant import Claimant
from lostfound_disputes.domain.models.dispute_case import DisputeCase
from lostfound_disputes.domain.models.item_snapshot import ItemSnapshot
from tests.helpers import NOW, FakeClock, make_claimant, make_item, make_members


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(frozen_at=NOW)


@pytest.fixture
def item() -> ItemSnapshot:
    return make_item()


@pytest.fixture
def alice() -> Claimant:
    return make_claimant(
        "alice", trust=80.0, enterprise="City University", email="alice@uni.edu"
    )


@pytest.fixture
def bob() -> Claimant:
    return make_claimant(
        "bob", trust=40.0, enterprise="Metro Transit", email="bob@metro.gov"
    )


@pytest.fixture
def open_case(item: ItemSnapshot, alice: Claimant, bob: Claimant) -> DisputeCase:
    """A PENDING dispute between alice and bob at version 1."""
    return DisputeCase.open(item, [alice, bob], dispute_id="D-1", now=NOW)


@pytest.fixture
def panel_case(open_case: DisputeCase) -> DisputeCase:
    """The open dispute with a 3-member panel assigned (version 2)."""
    return open_case.assign_panel(make_members(3), now=NOW)
