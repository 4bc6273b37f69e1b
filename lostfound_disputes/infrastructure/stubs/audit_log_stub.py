"""Dispute audit log stub implementation."""

from __future__ import annotations

from lostfound_disputes.application.ports.audit_log import (
    AuditEntry,
    DisputeAuditLogProtocol,
)


class DisputeAuditLogStub(DisputeAuditLogProtocol):
    """Append-only in-memory audit log."""

    def __init__(self) -> None:
        self._entries: list[AuditEntry] = []

    async def record(self, entry: AuditEntry) -> None:
        self._entries.append(entry)

    async def entries_for(self, dispute_id: str) -> list[AuditEntry]:
        return [e for e in self._entries if e.dispute_id == dispute_id]

    @property
    def entries(self) -> list[AuditEntry]:
        return list(self._entries)
