"""Timeout and retry wrapper for external collaborator calls.

Every call to the trust-score, stolen-property and staffing collaborators
goes through CollaboratorCalls: each attempt is bounded by a timeout, and
failed attempts are retried with exponential backoff plus jitter up to a
fixed number of attempts. After the last attempt a
CollaboratorUnavailableError is raised; callers degrade where a safe
fallback exists.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from lostfound_disputes.config.dispute_config import DisputeConfig
from lostfound_disputes.domain.errors.dependency import CollaboratorUnavailableError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class CollaboratorCalls:
    """Executes collaborator coroutines with timeout and bounded retry.

    Attributes:
        timeout_seconds: Timeout for one attempt (0 disables).
        max_attempts: Attempts before giving up.
        backoff_base_seconds: Delay before the first retry.
        backoff_max_seconds: Ceiling for retry delays.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float,
        max_attempts: int = 3,
        backoff_base_seconds: float = 0.5,
        backoff_max_seconds: float = 8.0,
    ) -> None:
        self.timeout_seconds = max(0.0, float(timeout_seconds))
        self.max_attempts = max(1, int(max_attempts))
        self.backoff_base_seconds = max(0.0, float(backoff_base_seconds))
        self.backoff_max_seconds = max(
            self.backoff_base_seconds, float(backoff_max_seconds)
        )
        self._log = logger.bind(component="collaborator_calls")

    @classmethod
    def from_config(cls, config: DisputeConfig) -> CollaboratorCalls:
        return cls(
            timeout_seconds=config.collaborator_timeout_seconds,
            max_attempts=config.max_attempts,
            backoff_base_seconds=config.backoff_base_seconds,
            backoff_max_seconds=config.backoff_max_seconds,
        )

    def backoff_delay(self, attempt: int) -> float:
        """Delay before retrying after the given (1-based) attempt."""
        if self.backoff_base_seconds <= 0:
            return 0.0
        delay = min(
            self.backoff_base_seconds * (2 ** (attempt - 1)),
            self.backoff_max_seconds,
        )
        jitter = random.uniform(0, delay * 0.1)
        return delay + jitter

    async def call(
        self,
        collaborator: str,
        coro_factory: Callable[[], Awaitable[T]],
        *,
        dispute_id: str | None = None,
    ) -> T:
        """Run a collaborator call with timeout and retries.

        Args:
            collaborator: Collaborator name for logs and errors.
            coro_factory: Zero-argument callable returning a fresh awaitable.
            dispute_id: Dispute the call is made for, if any.

        Returns:
            The collaborator's result.

        Raises:
            CollaboratorUnavailableError: If every attempt failed or timed out.
        """
        last_error = ""
        for attempt in range(1, self.max_attempts + 1):
            try:
                if self.timeout_seconds > 0:
                    return await asyncio.wait_for(
                        coro_factory(), timeout=self.timeout_seconds
                    )
                return await coro_factory()
            except asyncio.TimeoutError:
                last_error = f"timed out after {self.timeout_seconds}s"
            except Exception as exc:
                last_error = f"{type(exc).__name__}: {exc}"

            self._log.warning(
                "collaborator_call_failed",
                collaborator=collaborator,
                dispute_id=dispute_id,
                attempt=attempt,
                max_attempts=self.max_attempts,
                error=last_error,
            )
            if attempt < self.max_attempts:
                delay = self.backoff_delay(attempt)
                if delay:
                    await asyncio.sleep(delay)

        raise CollaboratorUnavailableError(
            collaborator,
            self.max_attempts,
            last_error,
            dispute_id=dispute_id,
        )
