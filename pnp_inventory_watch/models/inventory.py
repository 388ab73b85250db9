"""
Inventory data models for the Pick-n-Pull inventory watch.
"""

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass
class InventoryItem:
    """One vehicle listed on the inventory search page."""

    id: str
    make: str = ""
    model: str = ""
    year: str = ""
    color: str = ""
    location: str = ""
    date_added: str = ""

    def validate(self) -> bool:
        """Validate the inventory item."""
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("Inventory item id cannot be empty")

        for name in ("make", "model", "year", "color", "location", "date_added"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"Inventory item {name} must be a string")

        return True

    def to_dict(self) -> Dict[str, str]:
        """Serialize using the persisted record's key names."""
        return {
            "id": self.id,
            "make": self.make,
            "model": self.model,
            "year": self.year,
            "color": self.color,
            "location": self.location,
            "dateAdded": self.date_added,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InventoryItem":
        """
        Build an item from a persisted record entry.

        Raises:
            ValueError: If the entry is not an object with an id.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Inventory entry must be an object, got {type(data).__name__}")

        if data.get("id") is None:
            raise ValueError("Inventory entry is missing 'id'")

        def text(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            id=str(data["id"]),
            make=text("make"),
            model=text("model"),
            year=text("year"),
            color=text("color"),
            location=text("location"),
            date_added=text("dateAdded"),
        )


# All items visible on the source at one point in time, in source order.
Snapshot = List[InventoryItem]
