from dataclasses import dataclass
from datetime import datetime
from typing import Any

from cardvault.models.rarity import Rarity


@dataclass(slots=True)
class CollectionEntry:
    """
    One card the player has drawn at least once.

    Count is the number of copies held at the current rarity. The entry
    survives a count of zero after an upgrade consumes every copy.
    """

    card_id: str
    count: int
    current_rarity: Rarity
    first_obtained_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "current_rarity": self.current_rarity.value,
            "first_obtained_at": self.first_obtained_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, card_id: str, data: dict[str, Any]) -> "CollectionEntry":
        return cls(
            card_id=card_id,
            count=int(data["count"]),
            current_rarity=Rarity(data["current_rarity"]),
            first_obtained_at=datetime.fromisoformat(data["first_obtained_at"]),
        )
