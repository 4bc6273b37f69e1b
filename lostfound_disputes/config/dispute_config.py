"""Dispute engine configuration.

This module defines the tunables of the dispute engine with environment
variable overrides for production tuning. Out-of-range environment values
are clamped; out-of-range constructor values are rejected.

Environment Variables:
- DISPUTE_SLA_SECONDS: Panel decision window from assignment (default: 259200, 0 disables)
- DISPUTE_SLA_SWEEP_INTERVAL_SECONDS: SLA sweep period (default: 60, min: 1, max: 3600)
- DISPUTE_COLLABORATOR_TIMEOUT_SECONDS: Per-call collaborator timeout (default: 5.0)
- DISPUTE_COLLABORATOR_MAX_ATTEMPTS: Attempts per collaborator call (default: 3, min: 1, max: 10)
- DISPUTE_BACKOFF_BASE_SECONDS: First retry delay (default: 0.5)
- DISPUTE_BACKOFF_MAX_SECONDS: Retry delay ceiling (default: 8.0)
- DISPUTE_DEFAULT_TRUST_SCORE: Trust score when none was ever observed (default: 50.0)
- DISPUTE_HIGH_VALUE_THRESHOLD: Item value above which disputes are URGENT (default: 500.0)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


# =============================================================================
# SLA Configuration
# =============================================================================

# Default decision window after panel assignment (72 hours)
DEFAULT_SLA_SECONDS = 72 * 3600

# 0 disables the SLA trigger
MIN_SLA_SECONDS = 0

# Maximum window (30 days)
MAX_SLA_SECONDS = 30 * 24 * 3600

DEFAULT_SLA_SWEEP_INTERVAL_SECONDS = 60
MIN_SLA_SWEEP_INTERVAL_SECONDS = 1
MAX_SLA_SWEEP_INTERVAL_SECONDS = 3600

# =============================================================================
# Collaborator Call Configuration
# =============================================================================

DEFAULT_COLLABORATOR_TIMEOUT_SECONDS = 5.0
MIN_COLLABORATOR_TIMEOUT_SECONDS = 0.01
MAX_COLLABORATOR_TIMEOUT_SECONDS = 60.0

DEFAULT_MAX_ATTEMPTS = 3
MIN_MAX_ATTEMPTS = 1
MAX_MAX_ATTEMPTS = 10

DEFAULT_BACKOFF_BASE_SECONDS = 0.5
DEFAULT_BACKOFF_MAX_SECONDS = 8.0
MAX_BACKOFF_SECONDS = 60.0

# =============================================================================
# Domain Defaults
# =============================================================================

# Trust score used when the trust collaborator never answered for an identity
DEFAULT_TRUST_SCORE = 50.0

# Items worth more than this open as URGENT disputes
DEFAULT_HIGH_VALUE_THRESHOLD = 500.0


@dataclass(frozen=True)
class DisputeConfig:
    """Configuration for the dispute engine.

    All values can be overridden via environment variables for production tuning.

    Attributes:
        sla_seconds: Decision window from panel assignment; 0 disables.
        sla_sweep_interval_seconds: How often the SLA monitor sweeps.
        collaborator_timeout_seconds: Timeout for a single collaborator call.
        max_attempts: Attempts per collaborator call before degrading.
        backoff_base_seconds: Delay before the first retry.
        backoff_max_seconds: Ceiling for exponential backoff delays.
        default_trust_score: Fallback trust score (0-100).
        high_value_threshold: Value above which disputes open as URGENT.
    """

    sla_seconds: int = DEFAULT_SLA_SECONDS
    sla_sweep_interval_seconds: int = DEFAULT_SLA_SWEEP_INTERVAL_SECONDS
    collaborator_timeout_seconds: float = DEFAULT_COLLABORATOR_TIMEOUT_SECONDS
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    backoff_base_seconds: float = DEFAULT_BACKOFF_BASE_SECONDS
    backoff_max_seconds: float = DEFAULT_BACKOFF_MAX_SECONDS
    default_trust_score: float = DEFAULT_TRUST_SCORE
    high_value_threshold: float = DEFAULT_HIGH_VALUE_THRESHOLD

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not MIN_SLA_SECONDS <= self.sla_seconds <= MAX_SLA_SECONDS:
            raise ValueError(
                f"sla_seconds must be between {MIN_SLA_SECONDS} "
                f"and {MAX_SLA_SECONDS}, got {self.sla_seconds}"
            )
        if (
            not MIN_SLA_SWEEP_INTERVAL_SECONDS
            <= self.sla_sweep_interval_seconds
            <= MAX_SLA_SWEEP_INTERVAL_SECONDS
        ):
            raise ValueError(
                "sla_sweep_interval_seconds must be between "
                f"{MIN_SLA_SWEEP_INTERVAL_SECONDS} and "
                f"{MAX_SLA_SWEEP_INTERVAL_SECONDS}, got {self.sla_sweep_interval_seconds}"
            )
        if (
            not MIN_COLLABORATOR_TIMEOUT_SECONDS
            <= self.collaborator_timeout_seconds
            <= MAX_COLLABORATOR_TIMEOUT_SECONDS
        ):
            raise ValueError(
                "collaborator_timeout_seconds must be between "
                f"{MIN_COLLABORATOR_TIMEOUT_SECONDS} and "
                f"{MAX_COLLABORATOR_TIMEOUT_SECONDS}, "
                f"got {self.collaborator_timeout_seconds}"
            )
        if not MIN_MAX_ATTEMPTS <= self.max_attempts <= MAX_MAX_ATTEMPTS:
            raise ValueError(
                f"max_attempts must be between {MIN_MAX_ATTEMPTS} "
                f"and {MAX_MAX_ATTEMPTS}, got {self.max_attempts}"
            )
        if not 0 <= self.backoff_base_seconds <= self.backoff_max_seconds:
            raise ValueError(
                "backoff_base_seconds must be between 0 and backoff_max_seconds, "
                f"got {self.backoff_base_seconds} > {self.backoff_max_seconds}"
            )
        if self.backoff_max_seconds > MAX_BACKOFF_SECONDS:
            raise ValueError(
                f"backoff_max_seconds must be <= {MAX_BACKOFF_SECONDS}, "
                f"got {self.backoff_max_seconds}"
            )
        if not 0.0 <= self.default_trust_score <= 100.0:
            raise ValueError(
                f"default_trust_score must be between 0 and 100, "
                f"got {self.default_trust_score}"
            )
        if self.high_value_threshold < 0:
            raise ValueError(
                f"high_value_threshold must be >= 0, got {self.high_value_threshold}"
            )

    @property
    def sla(self) -> timedelta | None:
        """SLA as a timedelta, or None when disabled."""
        if self.sla_seconds == 0:
            return None
        return timedelta(seconds=self.sla_seconds)

    @classmethod
    def from_environment(cls) -> DisputeConfig:
        """Create config from environment variables with defaults.

        Returns:
            DisputeConfig with values from environment or defaults.
        """
        sla = int(
            _clamp(
                _get_int_env("DISPUTE_SLA_SECONDS", DEFAULT_SLA_SECONDS),
                MIN_SLA_SECONDS,
                MAX_SLA_SECONDS,
            )
        )
        sweep = int(
            _clamp(
                _get_int_env(
                    "DISPUTE_SLA_SWEEP_INTERVAL_SECONDS",
                    DEFAULT_SLA_SWEEP_INTERVAL_SECONDS,
                ),
                MIN_SLA_SWEEP_INTERVAL_SECONDS,
                MAX_SLA_SWEEP_INTERVAL_SECONDS,
            )
        )
        timeout = _clamp(
            _get_float_env(
                "DISPUTE_COLLABORATOR_TIMEOUT_SECONDS",
                DEFAULT_COLLABORATOR_TIMEOUT_SECONDS,
            ),
            MIN_COLLABORATOR_TIMEOUT_SECONDS,
            MAX_COLLABORATOR_TIMEOUT_SECONDS,
        )
        attempts = int(
            _clamp(
                _get_int_env("DISPUTE_COLLABORATOR_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
                MIN_MAX_ATTEMPTS,
                MAX_MAX_ATTEMPTS,
            )
        )
        backoff_max = _clamp(
            _get_float_env("DISPUTE_BACKOFF_MAX_SECONDS", DEFAULT_BACKOFF_MAX_SECONDS),
            0.0,
            MAX_BACKOFF_SECONDS,
        )
        backoff_base = _clamp(
            _get_float_env("DISPUTE_BACKOFF_BASE_SECONDS", DEFAULT_BACKOFF_BASE_SECONDS),
            0.0,
            backoff_max,
        )
        trust = _clamp(
            _get_float_env("DISPUTE_DEFAULT_TRUST_SCORE", DEFAULT_TRUST_SCORE),
            0.0,
            100.0,
        )
        threshold = max(
            0.0,
            _get_float_env(
                "DISPUTE_HIGH_VALUE_THRESHOLD", DEFAULT_HIGH_VALUE_THRESHOLD
            ),
        )
        return cls(
            sla_seconds=sla,
            sla_sweep_interval_seconds=sweep,
            collaborator_timeout_seconds=timeout,
            max_attempts=attempts,
            backoff_base_seconds=backoff_base,
            backoff_max_seconds=backoff_max,
            default_trust_score=trust,
            high_value_threshold=threshold,
        )


# Pre-defined configurations for common use cases

# Default production config
DEFAULT_DISPUTE_CONFIG = DisputeConfig()

# Testing config: no SLA, fast timeouts, no backoff sleeps
TEST_DISPUTE_CONFIG = DisputeConfig(
    sla_seconds=MIN_SLA_SECONDS,  # SLA disabled
    sla_sweep_interval_seconds=MIN_SLA_SWEEP_INTERVAL_SECONDS,
    collaborator_timeout_seconds=0.05,
    max_attempts=DEFAULT_MAX_ATTEMPTS,
    backoff_base_seconds=0.0,
    backoff_max_seconds=0.0,
)
