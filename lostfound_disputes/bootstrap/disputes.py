"""Bootstrap wiring for dispute resolution dependencies.

Builds the DisputeResolutionService from configuration and collaborator
adapters. Only in-memory adapters exist today, so every collaborator that
is not supplied explicitly falls back to its stub.
"""

from __future__ import annotations

from structlog import get_logger

from lostfound_disputes.application.ports.audit_log import DisputeAuditLogProtocol
from lostfound_disputes.application.ports.dispute_repository import (
    DisputeRepositoryProtocol,
)
from lostfound_disputes.application.ports.escalation_channel import (
    EscalationChannelProtocol,
)
from lostfound_disputes.application.ports.operator_alert import OperatorAlertProtocol
from lostfound_disputes.application.ports.staffing import StaffingProtocol
from lostfound_disputes.application.ports.stolen_property_registry import (
    StolenPropertyRegistryProtocol,
)
from lostfound_disputes.application.ports.trust_score import TrustScoreProtocol
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
from lostfound_disputes.config.dispute_config import DisputeConfig
from lostfound_disputes.infrastructure.stubs import (
    DisputeAuditLogStub,
    DisputeRepositoryStub,
    EscalationChannelStub,
    OperatorAlertStub,
    StaffingStub,
    StolenPropertyRegistryStub,
    TrustScoreStub,
)

logger = get_logger()

_dispute_service: DisputeResolutionService | None = None
_sla_monitor: SlaMonitorService | None = None


def build_dispute_service(
    config: DisputeConfig | None = None,
    *,
    repository: DisputeRepositoryProtocol | None = None,
    trust_scores: TrustScoreProtocol | None = None,
    stolen_property_registry: StolenPropertyRegistryProtocol | None = None,
    staffing: StaffingProtocol | None = None,
    escalation_channel: EscalationChannelProtocol | None = None,
    operator_alerts: OperatorAlertProtocol | None = None,
    audit_log: DisputeAuditLogProtocol | None = None,
) -> DisputeResolutionService:
    """Wire a DisputeResolutionService.

    Args:
        config: Engine configuration; read from the environment when omitted.
        repository: Dispute store (defaults to the in-memory stub).
        trust_scores: Trust score collaborator.
        stolen_property_registry: Serial-number registry collaborator.
        staffing: Panel candidate collaborator.
        escalation_channel: Escalation notification collaborator.
        operator_alerts: Integrity alert collaborator.
        audit_log: Append-only audit log.

    Returns:
        A service ready to accept requests.
    """
    config = config or DisputeConfig.from_environment()
    calls = CollaboratorCalls.from_config(config)

    stubbed = [
        name
        for name, adapter in (
            ("repository", repository),
            ("trust_scores", trust_scores),
            ("stolen_property_registry", stolen_property_registry),
            ("staffing", staffing),
            ("escalation_channel", escalation_channel),
            ("operator_alerts", operator_alerts),
            ("audit_log", audit_log),
        )
        if adapter is None
    ]
    if stubbed:
        logger.warning(
            "dispute_service_using_stubs",
            adapters=stubbed,
            message="In-memory adapters are for development and testing only",
        )

    service = DisputeResolutionService(
        repository=repository or DisputeRepositoryStub(),
        trust_scores=TrustScoreGateway(
            trust_scores or TrustScoreStub(default=config.default_trust_score),
            calls,
            default_score=config.default_trust_score,
        ),
        serial_checks=SerialCheckService(
            stolen_property_registry or StolenPropertyRegistryStub(), calls
        ),
        staffing=staffing or StaffingStub(),
        escalation_channel=escalation_channel or EscalationChannelStub(),
        operator_alerts=operator_alerts or OperatorAlertStub(),
        audit_log=audit_log or DisputeAuditLogStub(),
        calls=calls,
        config=config,
    )
    logger.info(
        "dispute_service_initialized",
        sla_seconds=config.sla_seconds,
        collaborator_timeout_seconds=config.collaborator_timeout_seconds,
        max_attempts=config.max_attempts,
    )
    return service


def get_dispute_service() -> DisputeResolutionService:
    """Get the process-wide dispute service, building it on first use."""
    global _dispute_service
    if _dispute_service is None:
        _dispute_service = build_dispute_service()
    return _dispute_service


def get_sla_monitor(
    service: DisputeResolutionService | None = None,
    config: DisputeConfig | None = None,
) -> SlaMonitorService:
    """Get the SLA monitor, bound to service or the process-wide dispute service."""
    global _sla_monitor
    if _sla_monitor is None:
        config = config or DisputeConfig.from_environment()
        _sla_monitor = SlaMonitorService(
            service or get_dispute_service(),
            interval_seconds=float(config.sla_sweep_interval_seconds),
        )
    return _sla_monitor


def reset_dispute_dependencies() -> None:
    """Reset singletons (for testing only)."""
    global _dispute_service, _sla_monitor
    _dispute_service = None
    _sla_monitor = None


__all__ = [
    "build_dispute_service",
    "get_dispute_service",
    "get_sla_monitor",
    "reset_dispute_dependencies",
]
