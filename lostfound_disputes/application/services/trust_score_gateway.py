"""Trust score gateway.

Wraps the trust-score collaborator with retry and degradation: when the
collaborator stays unavailable the last value observed for the identity
is used, and an identity never observed gets the configured default.
"""

from __future__ import annotations

import structlog

from lostfound_disputes.application.ports.trust_score import TrustScoreProtocol
from lostfound_disputes.application.services.collaborator_calls import (
    CollaboratorCalls,
)
from lostfound_disputes.domain.errors.dependency import CollaboratorUnavailableError

logger = structlog.get_logger(__name__)


class TrustScoreGateway:
    """Trust score lookups with last-known-value degradation."""

    def __init__(
        self,
        trust_scores: TrustScoreProtocol,
        calls: CollaboratorCalls,
        default_score: float = 50.0,
    ) -> None:
        self._trust_scores = trust_scores
        self._calls = calls
        self._default_score = default_score
        self._last_known: dict[str, float] = {}
        self._log = logger.bind(component="trust_score_gateway")

    def last_known(self, identity: str) -> float | None:
        return self._last_known.get(identity)

    async def score_for(self, identity: str, *, dispute_id: str | None = None) -> float:
        """Return the trust score for an identity, degrading on failure.

        Returned scores are clamped to 0-100.
        """
        try:
            score = await self._calls.call(
                "trust_score",
                lambda: self._trust_scores.get_trust_score(identity),
                dispute_id=dispute_id,
            )
        except CollaboratorUnavailableError as exc:
            fallback = self._last_known.get(identity, self._default_score)
            self._log.warning(
                "trust_score_degraded",
                identity=identity,
                dispute_id=dispute_id,
                fallback=fallback,
                used_last_known=identity in self._last_known,
                error=str(exc),
            )
            return fallback

        score = max(0.0, min(float(score), 100.0))
        self._last_known[identity] = score
        return score
