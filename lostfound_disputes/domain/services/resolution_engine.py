"""Resolution engine domain service.

Computes a dispute's outcome from its panel votes. The engine is stateless
and deterministic: the same registry, ledger and panel always produce the
same outcome.

Decision rule:
1. Quorum: non-abstaining votes >= votes_required.
2. Tally non-abstaining votes per claimant.
3. Once quorum is met, decide only when the leader's margin over every
   other claimant exceeds the number of members still to vote, or when
   every member has voted. Until then later votes could still change the
   result, so the outcome stays PENDING.
4. Strict plurality wins. A tie falls back to the higher trust score
   snapshot, then to more VALID evidence, then escalates as an
   unresolved tie.
5. A panel that has fully voted without reaching quorum escalates.
"""

from __future__ import annotations

from lostfound_disputes.domain.models.claimant_registry import ClaimantRegistry
from lostfound_disputes.domain.models.evidence_ledger import EvidenceLedger
from lostfound_disputes.domain.models.resolution_outcome import (
    ResolutionOutcome,
    TieBreakRule,
)
from lostfound_disputes.domain.models.verification_panel import VerificationPanel

UNRESOLVED_TIE_REASON = "unresolved tie"
NO_QUORUM_REASON = "no quorum achievable"


def tally_votes(registry: ClaimantRegistry, panel: VerificationPanel) -> dict[str, int]:
    """Count non-abstaining votes per claimant, in registration order.

    Every registered claimant appears in the tally, with 0 when nobody
    voted for them.
    """
    tally = {claimant_id: 0 for claimant_id in registry.ids()}
    for vote in panel.non_abstaining_votes().values():
        tally[vote] = tally.get(vote, 0) + 1
    return tally


class ResolutionEngine:
    """Stateless evaluator of panel votes."""

    def evaluate(
        self,
        registry: ClaimantRegistry,
        ledger: EvidenceLedger,
        panel: VerificationPanel,
    ) -> ResolutionOutcome:
        """Evaluate the current votes.

        Args:
            registry: Registered claimants (trust scores, names).
            ledger: Evidence ledger (VALID counts for tie-break).
            panel: Panel with current votes.

        Returns:
            PENDING while undecided, RESOLVED with a winner, or ESCALATED.
        """
        if not panel.is_assigned:
            return ResolutionOutcome.pending()

        tally = tally_votes(registry, panel)
        cast = sum(tally.values())

        if cast < panel.votes_required:
            if panel.is_exhausted:
                return ResolutionOutcome.escalated(NO_QUORUM_REASON, tally)
            return ResolutionOutcome.pending(tally)

        counts = sorted(tally.values(), reverse=True)
        leader_count = counts[0]
        runner_up = counts[1] if len(counts) > 1 else 0
        if not panel.is_exhausted and leader_count - runner_up <= panel.pending_count:
            return ResolutionOutcome.pending(tally)

        leaders = [cid for cid, count in tally.items() if count == leader_count]
        if len(leaders) == 1:
            winner = leaders[0]
            return ResolutionOutcome.resolved(
                winner,
                tally,
                self._majority_reason(registry, winner, leader_count, cast),
            )
        return self._break_tie(registry, ledger, leaders, tally, leader_count)

    def _break_tie(
        self,
        registry: ClaimantRegistry,
        ledger: EvidenceLedger,
        leaders: list[str],
        tally: dict[str, int],
        leader_count: int,
    ) -> ResolutionOutcome:
        best_trust = max(registry.get(cid).trust_score_snapshot for cid in leaders)
        by_trust = [
            cid for cid in leaders
            if registry.get(cid).trust_score_snapshot == best_trust
        ]
        if len(by_trust) == 1:
            winner = by_trust[0]
            return ResolutionOutcome.resolved(
                winner,
                tally,
                f"Panel tied {leader_count}-{leader_count}; awarded to "
                f"{registry.get(winner).name} on higher trust score "
                f"({best_trust:.1f})",
                tie_break=TieBreakRule.TRUST_SCORE,
            )

        best_valid = max(ledger.valid_count(cid) for cid in by_trust)
        by_evidence = [cid for cid in by_trust if ledger.valid_count(cid) == best_valid]
        if len(by_evidence) == 1:
            winner = by_evidence[0]
            return ResolutionOutcome.resolved(
                winner,
                tally,
                f"Panel tied {leader_count}-{leader_count}; awarded to "
                f"{registry.get(winner).name} on more verified evidence "
                f"({best_valid} valid item(s))",
                tie_break=TieBreakRule.VALID_EVIDENCE,
            )

        return ResolutionOutcome.escalated(UNRESOLVED_TIE_REASON, tally)

    @staticmethod
    def _majority_reason(
        registry: ClaimantRegistry, winner: str, leader_count: int, cast: int
    ) -> str:
        return (
            f"Panel voted {leader_count}-{cast - leader_count} in favor of "
            f"{registry.get(winner).name}"
        )
