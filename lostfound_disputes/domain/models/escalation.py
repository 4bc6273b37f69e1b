"""Escalation triggers and decisions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EscalationTrigger(Enum):
    """Why a dispute left panel adjudication.

    Triggers:
        STOLEN_PROPERTY_MATCH: A serial number matched the stolen-property registry
        UNRESOLVED_TIE: Tie persisted after every tie-break rule
        NO_QUORUM: Every member voted and quorum was still not reached
        SLA_TIMEOUT: Panel did not decide within the configured window
        INVESTIGATOR_OVERRIDE: An investigator escalated explicitly
    """

    STOLEN_PROPERTY_MATCH = "STOLEN_PROPERTY_MATCH"
    UNRESOLVED_TIE = "UNRESOLVED_TIE"
    NO_QUORUM = "NO_QUORUM"
    SLA_TIMEOUT = "SLA_TIMEOUT"
    INVESTIGATOR_OVERRIDE = "INVESTIGATOR_OVERRIDE"


@dataclass(frozen=True)
class EscalationDecision:
    """A decision to move a dispute to ESCALATED.

    Attributes:
        trigger: What fired.
        reason: Human-readable escalation reason (recorded on the dispute).
        police_involved: True only for police-escalation paths.
        police_officer_name: Officer assigned, for police escalations.
        police_officer_id: Officer identifier.
        police_report_number: Police report reference.
    """

    trigger: EscalationTrigger
    reason: str
    police_involved: bool = False
    police_officer_name: str | None = None
    police_officer_id: str | None = None
    police_report_number: str | None = None
