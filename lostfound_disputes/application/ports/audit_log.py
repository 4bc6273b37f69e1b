"""Dispute audit log port.

Records facts that do not mutate a dispute: registry results that arrived
after the dispute closed, integrity freezes, degraded collaborator calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AuditEntry:
    """A single audit log entry.

    Attributes:
        dispute_id: Dispute the entry relates to.
        event_type: Snake-case event name (e.g. "late_registry_result").
        details: Structured event details.
        recorded_at: When the entry was created.
    """

    dispute_id: str
    event_type: str
    details: dict[str, Any] = field(default_factory=dict)
    recorded_at: datetime = field(default_factory=_utc_now)


class DisputeAuditLogProtocol(Protocol):
    """Protocol for the append-only dispute audit log."""

    async def record(self, entry: AuditEntry) -> None:
        """Append an entry to the audit log."""
        ...

    async def entries_for(self, dispute_id: str) -> list[AuditEntry]:
        """Return audit entries for a dispute in recording order."""
        ...
