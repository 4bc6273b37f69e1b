"""Unit tests for DisputeConfig.

Tests cover:
- Defaults and predefined configurations
- Constructor validation
- Environment overrides with clamping
"""

from datetime import timedelta

import pytest

from lostfound_disputes.config import (
    DEFAULT_DISPUTE_CONFIG,
    TEST_DISPUTE_CONFIG,
    DisputeConfig,
)


class TestDefaults:
    def test_default_values(self) -> None:
        config = DisputeConfig()
        assert config.sla_seconds == 72 * 3600
        assert config.max_attempts == 3
        assert config.default_trust_score == 50.0
        assert config.high_value_threshold == 500.0

    def test_sla_property(self) -> None:
        assert DEFAULT_DISPUTE_CONFIG.sla == timedelta(hours=72)
        assert TEST_DISPUTE_CONFIG.sla is None

    def test_test_config_has_no_backoff(self) -> None:
        assert TEST_DISPUTE_CONFIG.backoff_base_seconds == 0.0
        assert TEST_DISPUTE_CONFIG.backoff_max_seconds == 0.0


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"sla_seconds": -1},
            {"sla_seconds": 31 * 24 * 3600},
            {"sla_sweep_interval_seconds": 0},
            {"collaborator_timeout_seconds": 0.0},
            {"max_attempts": 0},
            {"max_attempts": 11},
            {"backoff_base_seconds": 9.0, "backoff_max_seconds": 8.0},
            {"backoff_max_seconds": 120.0},
            {"default_trust_score": 101.0},
            {"high_value_threshold": -5.0},
        ],
    )
    def test_out_of_range_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            DisputeConfig(**kwargs)


class TestFromEnvironment:
    def test_no_env_uses_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in (
            "DISPUTE_SLA_SECONDS",
            "DISPUTE_COLLABORATOR_MAX_ATTEMPTS",
            "DISPUTE_DEFAULT_TRUST_SCORE",
        ):
            monkeypatch.delenv(key, raising=False)
        assert DisputeConfig.from_environment().max_attempts == 3

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISPUTE_SLA_SECONDS", "3600")
        monkeypatch.setenv("DISPUTE_COLLABORATOR_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("DISPUTE_HIGH_VALUE_THRESHOLD", "1000")

        config = DisputeConfig.from_environment()

        assert config.sla == timedelta(hours=1)
        assert config.collaborator_timeout_seconds == 2.5
        assert config.high_value_threshold == 1000.0

    def test_env_values_are_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISPUTE_COLLABORATOR_MAX_ATTEMPTS", "50")
        monkeypatch.setenv("DISPUTE_DEFAULT_TRUST_SCORE", "-10")
        monkeypatch.setenv("DISPUTE_SLA_SWEEP_INTERVAL_SECONDS", "0")

        config = DisputeConfig.from_environment()

        assert config.max_attempts == 10
        assert config.default_trust_score == 0.0
        assert config.sla_sweep_interval_seconds == 1

    def test_invalid_env_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISPUTE_SLA_SECONDS", "three days")
        assert DisputeConfig.from_environment().sla_seconds == 72 * 3600

    def test_zero_sla_disables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISPUTE_SLA_SECONDS", "0")
        assert DisputeConfig.from_environment().sla is None
