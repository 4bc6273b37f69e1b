"""Stolen-property registry stub implementation.

Results can be held back with hold() and released with release(), which
lets tests place a registry answer at an exact point in a vote sequence.
"""

from __future__ import annotations

import asyncio

from lostfound_disputes.application.ports.stolen_property_registry import (
    SerialCheckResult,
    StolenPropertyRegistryProtocol,
)


class StolenPropertyRegistryStub(StolenPropertyRegistryProtocol):
    """In-memory stolen-property registry.

    Attributes:
        checked: Serial numbers checked, in call order.
        failing: When True every call raises ConnectionError.
    """

    def __init__(self, stolen: dict[str, str] | None = None) -> None:
        """Initialize the stub.

        Args:
            stolen: Serial number to registry reference for stolen items.
        """
        self._stolen: dict[str, str] = dict(stolen or {})
        self._gate = asyncio.Event()
        self._gate.set()
        self.checked: list[str] = []
        self.failing = False

    def report_stolen(self, serial_number: str, reference_id: str) -> None:
        self._stolen[serial_number] = reference_id

    def hold(self) -> None:
        """Block answers until release() is called."""
        self._gate.clear()

    def release(self) -> None:
        self._gate.set()

    async def check_serial(self, serial_number: str) -> SerialCheckResult:
        self.checked.append(serial_number)
        await self._gate.wait()
        if self.failing:
            raise ConnectionError("stolen-property registry unavailable")
        reference = self._stolen.get(serial_number)
        return SerialCheckResult(match=reference is not None, reference_id=reference)
