"""Dispute repository port.

Abstract optimistic-concurrency store for DisputeCase aggregates.

Developer Golden Rules:
1. CAS ON VERSION - save() only succeeds against the version the writer read
2. FAIL LOUD - Repository raises on errors, never returns partial state
3. VALIDATE ON LOAD - get() raises CorruptedDisputeStateError for bad payloads
"""

from __future__ import annotations

from typing import Protocol

from lostfound_disputes.domain.models.dispute_case import DisputeCase


class DisputeRepositoryProtocol(Protocol):
    """Protocol for dispute persistence.

    Methods:
        add: Store a newly opened dispute
        get: Retrieve a dispute by id
        save: Compare-and-swap an updated dispute
        list_all: List every stored dispute
        freeze: Mark a dispute as frozen after an integrity failure
        is_frozen: Check whether a dispute is frozen
    """

    async def add(self, case: DisputeCase) -> None:
        """Store a new dispute.

        Raises:
            ValueError: If a dispute with the same id already exists.
        """
        ...

    async def get(self, dispute_id: str) -> DisputeCase | None:
        """Retrieve a dispute by id.

        Returns:
            The dispute if found, None otherwise.

        Raises:
            CorruptedDisputeStateError: If the stored payload fails integrity checks.
        """
        ...

    async def save(self, case: DisputeCase, expected_version: int) -> None:
        """Replace a stored dispute if its version still matches.

        Args:
            case: The updated dispute (version expected_version + 1).
            expected_version: Version the writer read before mutating.

        Raises:
            DisputeNotFoundError: If the dispute does not exist.
            ConcurrentModificationError: If the stored version moved on.
        """
        ...

    async def list_all(self) -> list[DisputeCase]:
        """List all readable disputes, oldest first.

        Disputes whose payload fails integrity checks are skipped.
        """
        ...

    async def freeze(self, dispute_id: str, violations: list[str]) -> None:
        """Record that a dispute is frozen pending operator review."""
        ...

    async def is_frozen(self, dispute_id: str) -> bool:
        """Return True if the dispute is frozen."""
        ...
