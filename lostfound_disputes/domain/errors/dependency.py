"""Collaborator (dependency) errors.

Failures of the trust-score, stolen-property or staffing collaborators are
recovered locally through retry-then-degrade wherever a degraded value
exists. This error surfaces only where no safe fallback exists, and it is
never fatal to the dispute itself.
"""

from __future__ import annotations

from typing import Any

from lostfound_disputes.domain.exceptions import DisputeEngineError


class CollaboratorUnavailableError(DisputeEngineError):
    """Raised when an external collaborator keeps failing after retries.

    Attributes:
        collaborator: Name of the collaborator ("staffing", "trust_score", ...).
        attempts: Number of attempts made before giving up.
    """

    violation = "collaborator_available"

    def __init__(
        self,
        collaborator: str,
        attempts: int,
        reason: str = "",
        **context: Any,
    ) -> None:
        self.collaborator = collaborator
        self.attempts = attempts
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"{collaborator} collaborator unavailable after {attempts} attempt(s){detail}",
            **context,
        )
