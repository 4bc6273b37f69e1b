"""Trust score stub implementation."""

from __future__ import annotations

from lostfound_disputes.application.ports.trust_score import TrustScoreProtocol


class TrustScoreStub(TrustScoreProtocol):
    """In-memory trust scores with injectable failures.

    Attributes:
        calls: Identities looked up, in call order.
        failures_remaining: Number of upcoming calls that raise.
    """

    def __init__(
        self, scores: dict[str, float] | None = None, default: float = 50.0
    ) -> None:
        self._scores: dict[str, float] = dict(scores or {})
        self._default = default
        self.calls: list[str] = []
        self.failures_remaining = 0

    def set_score(self, identity: str, score: float) -> None:
        self._scores[identity] = score

    def fail_next(self, count: int = 1) -> None:
        """Make the next `count` calls raise ConnectionError."""
        self.failures_remaining = count

    async def get_trust_score(self, identity: str) -> float:
        self.calls.append(identity)
        if self.failures_remaining > 0:
            self.failures_remaining -= 1
            raise ConnectionError("trust score service unavailable")
        return self._scores.get(identity, self._default)
