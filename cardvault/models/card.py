from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from cardvault.models.rarity import Rarity


class Theme(str, Enum):
    """Card themes available in the catalog."""

    MINECRAFT = "minecraft"
    SPACE = "space"
    DINOSAURS = "dinosaurs"


THEME_NAMES: dict[Theme, str] = {
    Theme.MINECRAFT: "Minecraft",
    Theme.SPACE: "Astronomy",
    Theme.DINOSAURS: "Dinosaurs",
}


@dataclass(frozen=True, slots=True)
class Card:
    """
    A catalog card. Seed data, never mutated after creation.

    Attributes:
        id: Unique card identifier (e.g., "mc_01")
        name: Display name
        theme: Theme the card belongs to
        base_rarity: Tier whose draw pool contains this card
        description: Flavor text
        emoji: Fallback visual when no image is available
        image: Relative path to the card artwork
    """

    id: str
    name: str
    theme: Theme
    base_rarity: Rarity
    description: str = ""
    emoji: str | None = None
    image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["theme"] = self.theme.value
        data["base_rarity"] = self.base_rarity.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Card":
        """Build a card from its stored form. Raises KeyError/ValueError on bad data."""
        return cls(
            id=data["id"],
            name=data["name"],
            theme=Theme(data["theme"]),
            base_rarity=Rarity(data["base_rarity"]),
            description=data.get("description", ""),
            emoji=data.get("emoji"),
            image=data.get("image"),
        )
