"""Application services - Use case orchestration.

Available services:
- DisputeResolutionService: Serialized, version-checked dispute operations
- CollaboratorCalls: Timeout and bounded retry for collaborator calls
- TrustScoreGateway: Trust score lookups with last-known-value degradation
- SerialCheckService: Stolen-property registry checks
- SlaMonitorService: Periodic SLA escalation sweep
"""

from lostfound_disputes.application.services.collaborator_calls import (
    CollaboratorCalls,
)
from lostfound_disputes.application.services.dispute_resolution_service import (
    DisputeResolutionService,
)
from lostfound_disputes.application.services.serial_check_service import (
    SerialCheckService,
)
from lostfound_disputes.application.services.sla_monitor_service import (
    SlaMonitorService,
)
from lostfound_disputes.application.services.trust_score_gateway import (
    TrustScoreGateway,
)

__all__: list[str] = [
    "CollaboratorCalls",
    "DisputeResolutionService",
    "SerialCheckService",
    "SlaMonitorService",
    "TrustScoreGateway",
]
