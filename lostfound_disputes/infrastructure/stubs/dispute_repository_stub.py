"""Dispute repository stub implementation.

In-memory implementation of DisputeRepositoryProtocol for development and
testing. Disputes are stored as serialized payloads, like a real store, so
every get() re-validates the aggregate's integrity rules on load.
"""

from __future__ import annotations

import asyncio
import copy
from typing import Any

import structlog

from lostfound_disputes.application.ports.dispute_repository import (
    DisputeRepositoryProtocol,
)
from lostfound_disputes.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from lostfound_disputes.domain.errors.integrity import (
    CorruptedDisputeStateError,
    DisputeNotFoundError,
)
from lostfound_disputes.domain.models.dispute_case import DisputeCase

logger = structlog.get_logger(__name__)


class DisputeRepositoryStub(DisputeRepositoryProtocol):
    """In-memory stub implementation of DisputeRepositoryProtocol.

    This stub is NOT suitable for production use.

    Attributes:
        _payloads: Dispute id to serialized dispute payload.
        _frozen: Dispute id to integrity findings for frozen disputes.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._payloads: dict[str, dict[str, Any]] = {}
        self._frozen: dict[str, list[str]] = {}
        # Lock for simulating atomic compare-and-swap
        self._cas_lock = asyncio.Lock()
        self.save_count = 0

    async def add(self, case: DisputeCase) -> None:
        """Store a new dispute.

        Raises:
            ValueError: If the dispute id already exists.
        """
        async with self._cas_lock:
            if case.dispute_id in self._payloads:
                raise ValueError(f"Dispute already exists: {case.dispute_id}")
            self._payloads[case.dispute_id] = case.to_dict()

    async def get(self, dispute_id: str) -> DisputeCase | None:
        """Retrieve and rebuild a dispute.

        Raises:
            CorruptedDisputeStateError: If the stored payload is inconsistent.
        """
        payload = self._payloads.get(dispute_id)
        if payload is None:
            return None
        return DisputeCase.from_dict(copy.deepcopy(payload))

    async def save(self, case: DisputeCase, expected_version: int) -> None:
        """Compare-and-swap the stored dispute on its version.

        Raises:
            DisputeNotFoundError: If the dispute does not exist.
            ConcurrentModificationError: If the stored version moved on.
        """
        async with self._cas_lock:
            stored = self._payloads.get(case.dispute_id)
            if stored is None:
                raise DisputeNotFoundError(case.dispute_id)
            actual_version = int(stored.get("version", 0))
            if actual_version != expected_version:
                raise ConcurrentModificationError(
                    case.dispute_id,
                    expected_version,
                    actual_version,
                    operation="save",
                    status=stored.get("status"),
                )
            self._payloads[case.dispute_id] = case.to_dict()
            self.save_count += 1

    async def list_all(self) -> list[DisputeCase]:
        """List readable disputes in creation order; corrupted ones are skipped."""
        cases: list[DisputeCase] = []
        for dispute_id in list(self._payloads):
            if dispute_id in self._frozen:
                continue
            try:
                case = await self.get(dispute_id)
            except CorruptedDisputeStateError as exc:
                logger.warning(
                    "unreadable_dispute_skipped",
                    dispute_id=dispute_id,
                    violations=exc.violations,
                )
                continue
            if case is not None:
                cases.append(case)
        cases.sort(key=lambda c: c.created_at)
        return cases

    async def freeze(self, dispute_id: str, violations: list[str]) -> None:
        self._frozen[dispute_id] = list(violations)

    async def is_frozen(self, dispute_id: str) -> bool:
        return dispute_id in self._frozen

    # Test helpers

    def put_raw(self, dispute_id: str, payload: dict[str, Any]) -> None:
        """Overwrite the stored payload directly (simulates external corruption)."""
        self._payloads[dispute_id] = copy.deepcopy(payload)

    def raw(self, dispute_id: str) -> dict[str, Any]:
        return copy.deepcopy(self._payloads[dispute_id])

    def frozen_violations(self, dispute_id: str) -> list[str] | None:
        return self._frozen.get(dispute_id)

    def clear(self) -> None:
        self._payloads.clear()
        self._frozen.clear()
        self.save_count = 0
