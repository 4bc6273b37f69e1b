"""Stolen-property serial number checks.

Looks up a serial number in the stolen-property registry through the
collaborator wrapper. An unavailable registry degrades to UNVERIFIED
instead of failing: the check stays unresolved and vote processing is
never blocked on it.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from lostfound_disputes.application.ports.stolen_property_registry import (
    StolenPropertyRegistryProtocol,
)
from lostfound_disputes.application.services.collaborator_calls import (
    CollaboratorCalls,
)
from lostfound_disputes.domain.errors.dependency import CollaboratorUnavailableError
from lostfound_disputes.domain.models.evidence import (
    RegistryCheckOutcome,
    RegistryCheckRecord,
)

logger = structlog.get_logger(__name__)


class SerialCheckService:
    """Produces RegistryCheckRecords for serial-number evidence."""

    def __init__(
        self,
        registry: StolenPropertyRegistryProtocol,
        calls: CollaboratorCalls,
    ) -> None:
        self._registry = registry
        self._calls = calls
        self._log = logger.bind(component="serial_check_service")

    async def check(
        self,
        evidence_id: str,
        serial_number: str,
        *,
        dispute_id: str | None = None,
    ) -> RegistryCheckRecord:
        """Check a serial number and build the audit record.

        Args:
            evidence_id: SERIAL_NUMBER evidence being checked.
            serial_number: Serial number to look up.
            dispute_id: Owning dispute, for logging.

        Returns:
            RegistryCheckRecord with CLEAR, MATCH or UNVERIFIED outcome.
        """
        try:
            result = await self._calls.call(
                "stolen_property_registry",
                lambda: self._registry.check_serial(serial_number),
                dispute_id=dispute_id,
            )
        except CollaboratorUnavailableError as exc:
            self._log.warning(
                "serial_check_unverified",
                dispute_id=dispute_id,
                evidence_id=evidence_id,
                error=str(exc),
            )
            return RegistryCheckRecord(
                evidence_id=evidence_id,
                serial_number=serial_number,
                outcome=RegistryCheckOutcome.UNVERIFIED,
                checked_at=datetime.now(timezone.utc),
            )

        outcome = (
            RegistryCheckOutcome.MATCH if result.match else RegistryCheckOutcome.CLEAR
        )
        self._log.info(
            "serial_check_completed",
            dispute_id=dispute_id,
            evidence_id=evidence_id,
            outcome=outcome.value,
        )
        return RegistryCheckRecord(
            evidence_id=evidence_id,
            serial_number=serial_number,
            outcome=outcome,
            reference_id=result.reference_id,
            checked_at=datetime.now(timezone.utc),
        )
