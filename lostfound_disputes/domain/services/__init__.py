"""Domain services for the dispute resolution engine.

Domain services hold decision logic that does not belong to a single
value object. They are stateless and have no infrastructure dependencies.

Available services:
- ResolutionEngine: Quorum, tally and tie-break rules
- EscalationPolicy: Stolen-property and SLA escalation triggers
"""

from lostfound_disputes.domain.services.escalation_policy import (
    SLA_TIMEOUT_REASON,
    EscalationPolicy,
)
from lostfound_disputes.domain.services.resolution_engine import (
    NO_QUORUM_REASON,
    UNRESOLVED_TIE_REASON,
    ResolutionEngine,
    tally_votes,
)

__all__: list[str] = [
    "NO_QUORUM_REASON",
    "SLA_TIMEOUT_REASON",
    "UNRESOLVED_TIE_REASON",
    "EscalationPolicy",
    "ResolutionEngine",
    "tally_votes",
]
