"""In-memory stub implementations of every application port.

For development and testing only; NOT suitable for production use.
"""

from lostfound_disputes.infrastructure.stubs.audit_log_stub import DisputeAuditLogStub
from lostfound_disputes.infrastructure.stubs.dispute_repository_stub import (
    DisputeRepositoryStub,
)
from lostfound_disputes.infrastructure.stubs.escalation_channel_stub import (
    EscalationChannelStub,
)
from lostfound_disputes.infrastructure.stubs.operator_alert_stub import (
    OperatorAlertStub,
)
from lostfound_disputes.infrastructure.stubs.staffing_stub import StaffingStub
from lostfound_disputes.infrastructure.stubs.stolen_property_registry_stub import (
    StolenPropertyRegistryStub,
)
from lostfound_disputes.infrastructure.stubs.trust_score_stub import TrustScoreStub

__all__: list[str] = [
    "DisputeAuditLogStub",
    "DisputeRepositoryStub",
    "EscalationChannelStub",
    "OperatorAlertStub",
    "StaffingStub",
    "StolenPropertyRegistryStub",
    "TrustScoreStub",
]
