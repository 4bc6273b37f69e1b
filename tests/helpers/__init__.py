"""Test helpers for dispute engine tests.

Helpers:
    FakeClock: Controllable clock for deterministic SLA tests
    ServiceHarness: Dispute service wired to in-memory stubs
    make_*: Domain object builders

Usage:
    from tests.helpers import FakeClock, make_claimant
"""

from tests.helpers.dispute_factories import (
    NOW,
    make_claimant,
    make_evidence,
    make_item,
    make_members,
)
from tests.helpers.fake_clock import FakeClock
from tests.helpers.service_harness import ServiceHarness, build_harness

__all__ = [
    "NOW",
    "FakeClock",
    "ServiceHarness",
    "build_harness",
    "make_claimant",
    "make_evidence",
    "make_item",
    "make_members",
]
