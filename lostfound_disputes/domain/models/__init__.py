"""Domain models for the dispute resolution engine.

Contains the immutable value objects a dispute is built from. The
aggregate root itself lives in ``models.dispute_case`` because it drives
the domain services, which in turn depend on these value objects.
"""

from lostfound_disputes.domain.models.claimant import Claimant, ClaimStatus
from lostfound_disputes.domain.models.claimant_registry import ClaimantRegistry
from lostfound_disputes.domain.models.escalation import (
    EscalationDecision,
    EscalationTrigger,
)
from lostfound_disputes.domain.models.evidence import (
    EvidenceItem,
    EvidenceType,
    RegistryCheckOutcome,
    RegistryCheckRecord,
    VerificationResult,
)
from lostfound_disputes.domain.models.evidence_ledger import EvidenceLedger
from lostfound_disputes.domain.models.item_snapshot import ItemSnapshot
from lostfound_disputes.domain.models.panel_member import ABSTAIN, PanelMember
from lostfound_disputes.domain.models.resolution_outcome import (
    OutcomeKind,
    ResolutionOutcome,
    TieBreakRule,
)
from lostfound_disputes.domain.models.verification_panel import (
    MIN_PANEL_SIZE,
    VerificationPanel,
)

__all__: list[str] = [
    "ABSTAIN",
    "MIN_PANEL_SIZE",
    "ClaimStatus",
    "Claimant",
    "ClaimantRegistry",
    "EscalationDecision",
    "EscalationTrigger",
    "EvidenceItem",
    "EvidenceLedger",
    "EvidenceType",
    "ItemSnapshot",
    "OutcomeKind",
    "PanelMember",
    "RegistryCheckOutcome",
    "RegistryCheckRecord",
    "ResolutionOutcome",
    "TieBreakRule",
    "VerificationPanel",
    "VerificationResult",
]
