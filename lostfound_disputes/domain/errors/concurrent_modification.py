"""Concurrent modification error for optimistic version checks.

Every mutating call may carry the version the caller last observed. When
the stored aggregate has moved on, the write is rejected rather than merged;
the caller re-reads and decides whether to retry.
"""

from __future__ import annotations

from lostfound_disputes.domain.exceptions import DisputeEngineError


class ConcurrentModificationError(DisputeEngineError):
    """Raised when the expected version does not match the current version.

    This is a recoverable error - the caller should re-read the dispute
    and decide whether to retry or abort.

    Attributes:
        expected_version: The version the caller expected to be current.
        actual_version: The version actually stored.
        operation: Description of the operation that failed.
    """

    violation = "version_match"

    def __init__(
        self,
        dispute_id: str,
        expected_version: int,
        actual_version: int,
        operation: str = "update",
        status: str | None = None,
    ) -> None:
        """Initialize concurrent modification error.

        Args:
            dispute_id: Dispute being modified.
            expected_version: Version supplied by the caller.
            actual_version: Version currently stored.
            operation: Description of the failed operation.
            status: Current dispute status.
        """
        self.expected_version = expected_version
        self.actual_version = actual_version
        self.operation = operation
        super().__init__(
            f"Concurrent modification detected for dispute {dispute_id} "
            f"during {operation}. Expected version {expected_version}, "
            f"current version is {actual_version}.",
            dispute_id=dispute_id,
            status=status,
            version=actual_version,
        )
