"""Dispute validation and state errors.

Validation errors are caller mistakes and are never retried automatically.
State errors signal an attempt to mutate a dispute (or a piece of evidence)
whose lifecycle no longer permits it.
"""

from __future__ import annotations

from typing import Any

from lostfound_disputes.domain.exceptions import DisputeEngineError


class DisputeValidationError(DisputeEngineError):
    """Base class for caller mistakes (never retried automatically)."""

    violation = "validation_error"


class InvalidDisputeError(DisputeValidationError):
    """Raised when a dispute is opened with fewer than 2 distinct claimants.

    Attributes:
        distinct_claimants: Number of distinct claimant identities supplied.
    """

    violation = "min_two_claimants"

    def __init__(self, distinct_claimants: int, message: str | None = None) -> None:
        self.distinct_claimants = distinct_claimants
        super().__init__(
            message
            or (
                "A dispute requires at least 2 distinct claimant identities, "
                f"got {distinct_claimants}"
            )
        )


class DuplicateClaimantError(DisputeValidationError):
    """Raised when a claimant identity is already registered on the dispute.

    Identity matching is case-insensitive on the claimant id, with the
    contact email used as a fallback match.

    Attributes:
        claimant_id: The identity that was rejected.
        matched_on: "id" or "email".
    """

    violation = "unique_claimant_identity"

    def __init__(
        self,
        claimant_id: str,
        matched_on: str = "id",
        *,
        dispute_id: str | None = None,
        status: str | None = None,
        version: int | None = None,
    ) -> None:
        self.claimant_id = claimant_id
        self.matched_on = matched_on
        super().__init__(
            f"Claimant {claimant_id} is already registered (matched on {matched_on})",
            dispute_id=dispute_id,
            status=status,
            version=version,
        )


class UnknownClaimantError(DisputeValidationError):
    """Raised when an operation references a claimant not on the dispute."""

    violation = "known_claimant"

    def __init__(self, claimant_id: str, **context: Any) -> None:
        self.claimant_id = claimant_id
        super().__init__(
            f"Claimant {claimant_id} is not registered on this dispute",
            **context,
        )


class PanelTooSmallError(DisputeValidationError):
    """Raised when a verification panel has fewer than the minimum members.

    Attributes:
        panel_size: Number of members supplied.
        minimum: Minimum panel size.
    """

    violation = "min_panel_size"

    def __init__(self, panel_size: int, minimum: int, **context: Any) -> None:
        self.panel_size = panel_size
        self.minimum = minimum
        super().__init__(
            f"Verification panel needs at least {minimum} members, got {panel_size}",
            **context,
        )


class PanelAlreadyAssignedError(DisputeValidationError):
    """Raised when a panel is assigned a second time."""

    violation = "panel_assigned_once"

    def __init__(self, **context: Any) -> None:
        super().__init__(
            "Verification panel is assigned once and its size is fixed",
            **context,
        )


class PanelNotAssignedError(DisputeValidationError):
    """Raised when a vote arrives before a panel has been assigned."""

    violation = "panel_required_for_voting"

    def __init__(self, **context: Any) -> None:
        super().__init__(
            "No verification panel has been assigned to this dispute",
            **context,
        )


class UnknownPanelMemberError(DisputeValidationError):
    """Raised when a vote is cast by someone who is not on the panel."""

    violation = "panel_member_only"

    def __init__(self, member_id: str, **context: Any) -> None:
        self.member_id = member_id
        super().__init__(
            f"{member_id} is not a member of this verification panel",
            **context,
        )


class DuplicatePanelMemberError(DisputeValidationError):
    """Raised when the same member id appears twice in a panel assignment."""

    violation = "unique_panel_member"

    def __init__(self, member_id: str, **context: Any) -> None:
        self.member_id = member_id
        super().__init__(
            f"Panel member {member_id} is listed more than once",
            **context,
        )


class MalformedEvidenceError(DisputeValidationError):
    """Raised when an evidence payload is incomplete or inconsistent."""

    violation = "well_formed_evidence"


class EvidenceNotFoundError(DisputeValidationError):
    """Raised when verifying evidence that is not in the ledger."""

    violation = "known_evidence"

    def __init__(self, evidence_id: str, **context: Any) -> None:
        self.evidence_id = evidence_id
        super().__init__(
            f"Evidence {evidence_id} is not in this dispute's ledger",
            **context,
        )


class DisputeStateError(DisputeEngineError):
    """Base class for mutations the current lifecycle state forbids."""

    violation = "state_error"


class StaleStateError(DisputeStateError):
    """Raised when mutating a dispute that is RESOLVED or ESCALATED.

    Terminal disputes are read-only. Callers should refresh their view;
    retrying will never succeed.

    Attributes:
        operation: The operation that was rejected.
    """

    violation = "terminal_dispute_read_only"

    def __init__(
        self,
        operation: str,
        *,
        dispute_id: str | None = None,
        status: str | None = None,
        version: int | None = None,
    ) -> None:
        self.operation = operation
        super().__init__(
            f"Cannot {operation}: dispute {dispute_id} is {status} and read-only",
            dispute_id=dispute_id,
            status=status,
            version=version,
        )


class AlreadyVerifiedError(DisputeStateError):
    """Raised when a piece of evidence is verified a second time.

    Attributes:
        evidence_id: The evidence item that is already verified.
        result: The verification result already on record.
    """

    violation = "verify_once"

    def __init__(self, evidence_id: str, result: str, **context: Any) -> None:
        self.evidence_id = evidence_id
        self.result = result
        super().__init__(
            f"Evidence {evidence_id} is already verified as {result}",
            **context,
        )


class PoliceFindingsNotAcceptedError(DisputeStateError):
    """Raised when police findings are filed for a dispute that is not ESCALATED."""

    violation = "findings_require_escalation"

    def __init__(self, **context: Any) -> None:
        super().__init__(
            "Police findings can only be recorded for an ESCALATED dispute",
            **context,
        )
