"""Fixtures for application service tests: a service wired to stubs."""

import pytest

from tests.helpers import FakeClock, ServiceHarness, build_harness


@pytest.fixture
def harness(fake_clock: FakeClock) -> ServiceHarness:
    return build_harness(fake_clock)
