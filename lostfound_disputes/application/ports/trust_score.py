"""Trust score port.

The trust score is computed elsewhere in the lost-and-found network; the
dispute engine only consumes it, once per claimant, at registration.
"""

from __future__ import annotations

from typing import Protocol


class TrustScoreProtocol(Protocol):
    """Protocol for looking up a user's trust score (0-100)."""

    async def get_trust_score(self, identity: str) -> float:
        """Return the current trust score for an identity.

        Args:
            identity: Claimant identity (user id).

        Returns:
            Trust score between 0 and 100.

        Raises:
            Any exception on collaborator failure; callers retry and degrade.
        """
        ...
