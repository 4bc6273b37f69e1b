"""Stolen-property registry port.

Serial numbers submitted as evidence are checked against an external
law-enforcement registry. Checks are slow and may fail; callers run them
in the background with timeout and retry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class SerialCheckResult:
    """Answer from the stolen-property registry.

    Attributes:
        match: True if the serial number is registered as stolen.
        reference_id: Registry case reference for a match.
    """

    match: bool
    reference_id: str | None = None


class StolenPropertyRegistryProtocol(Protocol):
    """Protocol for stolen-property serial number lookups."""

    async def check_serial(self, serial_number: str) -> SerialCheckResult:
        """Check a serial number against the registry.

        Args:
            serial_number: Serial number from SERIAL_NUMBER evidence.

        Returns:
            SerialCheckResult with match flag and reference.
        """
        ...
