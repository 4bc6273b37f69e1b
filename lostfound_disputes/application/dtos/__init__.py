"""Application DTOs.

Application-layer snapshots handed to the API layer, which converts them
to Pydantic response models.
"""

from lostfound_disputes.application.dtos.dispute import (
    ClaimantView,
    DisputeView,
    EvidenceView,
    MutationReceipt,
    PanelMemberView,
)

__all__: list[str] = [
    "ClaimantView",
    "DisputeView",
    "EvidenceView",
    "MutationReceipt",
    "PanelMemberView",
]
