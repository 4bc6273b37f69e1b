"""Domain errors for the dispute resolution engine.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from DisputeEngineError.
"""

from lostfound_disputes.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from lostfound_disputes.domain.errors.dependency import CollaboratorUnavailableError
from lostfound_disputes.domain.errors.dispute import (
    AlreadyVerifiedError,
    DisputeStateError,
    DisputeValidationError,
    DuplicateClaimantError,
    DuplicatePanelMemberError,
    EvidenceNotFoundError,
    InvalidDisputeError,
    MalformedEvidenceError,
    PanelAlreadyAssignedError,
    PanelNotAssignedError,
    PanelTooSmallError,
    PoliceFindingsNotAcceptedError,
    StaleStateError,
    UnknownClaimantError,
    UnknownPanelMemberError,
)
from lostfound_disputes.domain.errors.integrity import (
    CorruptedDisputeStateError,
    DisputeFrozenError,
    DisputeNotFoundError,
)
from lostfound_disputes.domain.exceptions import DisputeEngineError

__all__: list[str] = [
    "AlreadyVerifiedError",
    "CollaboratorUnavailableError",
    "ConcurrentModificationError",
    "CorruptedDisputeStateError",
    "DisputeEngineError",
    "DisputeFrozenError",
    "DisputeNotFoundError",
    "DisputeStateError",
    "DisputeValidationError",
    "DuplicateClaimantError",
    "DuplicatePanelMemberError",
    "EvidenceNotFoundError",
    "InvalidDisputeError",
    "MalformedEvidenceError",
    "PanelAlreadyAssignedError",
    "PanelNotAssignedError",
    "PanelTooSmallError",
    "PoliceFindingsNotAcceptedError",
    "StaleStateError",
    "UnknownClaimantError",
    "UnknownPanelMemberError",
]
