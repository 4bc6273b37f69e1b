"""Operator alert stub implementation."""

from __future__ import annotations

from lostfound_disputes.application.ports.operator_alert import OperatorAlertProtocol


class OperatorAlertStub(OperatorAlertProtocol):
    """Records corruption reports in memory."""

    def __init__(self) -> None:
        self.reports: list[tuple[str, list[str]]] = []

    async def report_corruption(self, dispute_id: str, violations: list[str]) -> None:
        self.reports.append((dispute_id, list(violations)))
