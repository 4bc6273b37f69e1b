"""Disputed item snapshot.

The item reference is copied into the dispute when it is opened and never
mutated afterwards, so later edits to the item record (location changes,
re-valuation) cannot contaminate a decision mid-flight.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, eq=True)
class ItemSnapshot:
    """Immutable copy of the recovered item under dispute.

    Attributes:
        item_id: Identifier of the item in the lost-and-found network.
        title: Short item name (e.g. "MacBook Pro 14").
        description: Free-text description.
        category: Item category (ELECTRONICS, KEYS, ...).
        estimated_value: Estimated value in dollars (>= 0).
        current_location: Where the item is physically held.
        holding_enterprise_id: Enterprise currently holding the item.
        holding_enterprise_name: Display name of the holding enterprise.
    """

    item_id: str
    title: str
    description: str = ""
    category: str = "OTHER"
    estimated_value: float = 0.0
    current_location: str = ""
    holding_enterprise_id: str | None = None
    holding_enterprise_name: str | None = None

    def __post_init__(self) -> None:
        """Validate snapshot invariants."""
        if not self.item_id or not self.item_id.strip():
            raise ValueError("item_id must not be blank")
        if self.estimated_value < 0:
            raise ValueError(
                f"estimated_value must be >= 0, got {self.estimated_value}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for storage."""
        return {
            "item_id": self.item_id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "estimated_value": self.estimated_value,
            "current_location": self.current_location,
            "holding_enterprise_id": self.holding_enterprise_id,
            "holding_enterprise_name": self.holding_enterprise_name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ItemSnapshot:
        """Deserialize from storage."""
        return cls(
            item_id=data["item_id"],
            title=data["title"],
            description=data.get("description", ""),
            category=data.get("category", "OTHER"),
            estimated_value=float(data.get("estimated_value", 0.0)),
            current_location=data.get("current_location", ""),
            holding_enterprise_id=data.get("holding_enterprise_id"),
            holding_enterprise_name=data.get("holding_enterprise_name"),
        )
