"""Configuration module for the dispute engine.

Available Configurations:
- DisputeConfig: SLA, collaborator retry and domain defaults
"""

from lostfound_disputes.config.dispute_config import (
    DEFAULT_DISPUTE_CONFIG,
    TEST_DISPUTE_CONFIG,
    DisputeConfig,
)

__all__ = [
    "DisputeConfig",
    "DEFAULT_DISPUTE_CONFIG",
    "TEST_DISPUTE_CONFIG",
]
