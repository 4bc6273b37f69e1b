"""Resolution outcome produced by the resolution engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutcomeKind(Enum):
    """What the engine concluded from the current votes."""

    PENDING = "PENDING"
    RESOLVED = "RESOLVED"
    ESCALATED = "ESCALATED"


class TieBreakRule(Enum):
    """Which rule decided the winner."""

    NONE = "NONE"
    TRUST_SCORE = "TRUST_SCORE"
    VALID_EVIDENCE = "VALID_EVIDENCE"


@dataclass(frozen=True)
class ResolutionOutcome:
    """Result of evaluating a dispute's panel votes.

    Attributes:
        kind: PENDING, RESOLVED or ESCALATED.
        winner_id: Winning claimant id (RESOLVED only).
        tally: Non-abstaining vote count per claimant id.
        tie_break: Rule that decided the winner.
        reason: Human-readable explanation.
    """

    kind: OutcomeKind
    winner_id: str | None = None
    tally: dict[str, int] = field(default_factory=dict)
    tie_break: TieBreakRule = TieBreakRule.NONE
    reason: str = ""

    @classmethod
    def pending(cls, tally: dict[str, int] | None = None) -> ResolutionOutcome:
        return cls(kind=OutcomeKind.PENDING, tally=dict(tally or {}))

    @classmethod
    def resolved(
        cls,
        winner_id: str,
        tally: dict[str, int],
        reason: str,
        tie_break: TieBreakRule = TieBreakRule.NONE,
    ) -> ResolutionOutcome:
        return cls(
            kind=OutcomeKind.RESOLVED,
            winner_id=winner_id,
            tally=dict(tally),
            tie_break=tie_break,
            reason=reason,
        )

    @classmethod
    def escalated(cls, reason: str, tally: dict[str, int]) -> ResolutionOutcome:
        return cls(kind=OutcomeKind.ESCALATED, tally=dict(tally), reason=reason)

    @property
    def is_decided(self) -> bool:
        return self.kind != OutcomeKind.PENDING
