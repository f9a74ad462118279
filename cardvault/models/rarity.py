"""
Rarity tiers and the static rarity table.

Tiers are totally ordered from lowest to highest. Each tier carries a draw
weight (all weights sum to 1.0) and a point value used for scoring.

INVARIANTS:
- Tier order is fixed; next/previous are defined for all but the extremes
- Weights sum to 1.0 within WEIGHT_TOLERANCE (checked at construction)
- Upgrade cost doubles per tier, starting at 4 for the lowest tier
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

WEIGHT_TOLERANCE = 1e-9

# Cost of leaving the lowest tier; doubles for each tier above it
BASE_UPGRADE_COST = 4


class Rarity(str, Enum):
    """Rarity tier keys, lowest to highest."""

    COMMON = "common"
    RARE = "rare"
    VERY_RARE = "very_rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


@dataclass(frozen=True, slots=True)
class RarityTier:
    """
    A single rarity tier descriptor.

    Attributes:
        key: Tier identifier
        name: Display name
        weight: Draw probability (0-1)
        points: Score value of a card held at this tier
    """

    key: Rarity
    name: str
    weight: float
    points: int


class RarityTable:
    """
    Ordered rarity tiers with weighted sampling and the upgrade cost schedule.

    Raises ValueError at construction if the tiers are empty, contain
    duplicate keys, or if their weights do not sum to 1.0.
    """

    def __init__(self, tiers: Iterable[RarityTier]) -> None:
        self._tiers = tuple(tiers)
        if not self._tiers:
            raise ValueError("Rarity table must contain at least one tier")

        keys = [tier.key for tier in self._tiers]
        if len(set(keys)) != len(keys):
            raise ValueError(f"Duplicate rarity keys: {keys}")

        total = math.fsum(tier.weight for tier in self._tiers)
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise ValueError(f"Rarity weights must sum to 1.0, got {total}")

        self._index = {tier.key: i for i, tier in enumerate(self._tiers)}

    def tiers(self) -> tuple[RarityTier, ...]:
        """All tiers, lowest first."""
        return self._tiers

    @property
    def lowest(self) -> Rarity:
        return self._tiers[0].key

    @property
    def highest(self) -> Rarity:
        return self._tiers[-1].key

    def get(self, key: Rarity | str) -> RarityTier:
        """Look up a tier descriptor by key."""
        return self._tiers[self.index_of(key)]

    def index_of(self, key: Rarity | str) -> int:
        """Position of a tier in the ladder. Raises ValueError for unknown keys."""
        try:
            return self._index[Rarity(key)]
        except (KeyError, ValueError):
            raise ValueError(f"Unknown rarity: {key!r}") from None

    def next(self, key: Rarity | str) -> Rarity | None:
        """Next-higher tier, or None at the ceiling."""
        index = self.index_of(key)
        if index + 1 >= len(self._tiers):
            return None
        return self._tiers[index + 1].key

    def previous(self, key: Rarity | str) -> Rarity | None:
        """Next-lower tier, or None at the floor."""
        index = self.index_of(key)
        if index == 0:
            return None
        return self._tiers[index - 1].key

    def is_terminal(self, key: Rarity | str) -> bool:
        return self.index_of(key) == len(self._tiers) - 1

    def points(self, key: Rarity | str) -> int:
        return self.get(key).points

    def upgrade_cost(self, key: Rarity | str) -> int | None:
        """
        Copies required to leave `key` for the next tier.

        Returns None for the terminal tier.
        """
        if self.is_terminal(key):
            return None
        return BASE_UPGRADE_COST * 2 ** self.index_of(key)

    def sample(self, roll: float) -> Rarity:
        """
        Map a uniform [0, 1) roll onto a tier by cumulative weight.

        Walks tiers in order and returns the first one whose cumulative
        weight reaches the roll. Float drift that leaves the cumulative sum
        just under the roll falls back to the lowest tier.
        """
        cumulative = 0.0
        for tier in self._tiers:
            cumulative += tier.weight
            if roll <= cumulative:
                return tier.key
        return self.lowest


DEFAULT_TIERS: tuple[RarityTier, ...] = (
    RarityTier(Rarity.COMMON, "Common", 0.60, 1),
    RarityTier(Rarity.RARE, "Rare", 0.25, 2),
    RarityTier(Rarity.VERY_RARE, "Very Rare", 0.10, 4),
    RarityTier(Rarity.EPIC, "Epic", 0.04, 8),
    RarityTier(Rarity.LEGENDARY, "Legendary", 0.01, 16),
)

DEFAULT_RARITY_TABLE = RarityTable(DEFAULT_TIERS)
