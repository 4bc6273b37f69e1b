"""Application ports - Abstract interfaces for infrastructure.

Ports are typing.Protocol classes. Infrastructure adapters (and the
in-memory stubs) implement them; application services depend only on
the protocols.

Available ports:
- TrustScoreProtocol: Trust score lookups
- StolenPropertyRegistryProtocol: Serial number registry checks
- StaffingProtocol: Verification panel candidates
- DisputeRepositoryProtocol: Optimistic-concurrency dispute store
- EscalationChannelProtocol: Escalation notifications
- OperatorAlertProtocol: Integrity failure alerts
- DisputeAuditLogProtocol: Append-only audit log
"""

from lostfound_disputes.application.ports.audit_log import (
    AuditEntry,
    DisputeAuditLogProtocol,
)
from lostfound_disputes.application.ports.dispute_repository import (
    DisputeRepositoryProtocol,
)
from lostfound_disputes.application.ports.escalation_channel import (
    EscalationChannelProtocol,
)
from lostfound_disputes.application.ports.operator_alert import OperatorAlertProtocol
from lostfound_disputes.application.ports.staffing import StaffingProtocol
from lostfound_disputes.application.ports.stolen_property_registry import (
    SerialCheckResult,
    StolenPropertyRegistryProtocol,
)
from lostfound_disputes.application.ports.trust_score import TrustScoreProtocol

__all__: list[str] = [
    "AuditEntry",
    "DisputeAuditLogProtocol",
    "DisputeRepositoryProtocol",
    "EscalationChannelProtocol",
    "OperatorAlertProtocol",
    "SerialCheckResult",
    "StaffingProtocol",
    "StolenPropertyRegistryProtocol",
    "TrustScoreProtocol",
]
