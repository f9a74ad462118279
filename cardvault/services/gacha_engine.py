"""
Gacha Engine: Weighted Card Draws.

A draw samples a rarity tier by weight first, then picks uniformly among
catalog cards whose base rarity is that tier. Odds within a tier are flat
and adding cards to a theme never shifts the overall rarity odds.

INVARIANTS:
- A draw costs exactly one credit
- Every precondition is checked before any state changes
- A drawn card always enters the collection at the lowest tier
- An empty draw pool is a configuration error, reported, never retried
"""

import logging
import random
from collections import Counter
from datetime import datetime

from cardvault.models.rarity import Rarity, RarityTable
from cardvault.models.results import (
    DrawResult,
    DrawSuccess,
    EmptyDrawPool,
    InsufficientCredit,
    NoCredit,
)
from cardvault.services.collection_store import CollectionStore
from cardvault.services.credit_ledger import CreditLedger

logger = logging.getLogger(__name__)


class GachaEngine:
    """Draws cards against a player's credits and collection."""

    def __init__(
        self,
        collection: CollectionStore,
        ledger: CreditLedger,
        rarity_table: RarityTable,
        rng: random.Random | None = None,
    ) -> None:
        self._collection = collection
        self._ledger = ledger
        self._rarities = rarity_table
        self._rng = rng or random.Random()

    def sample_rarity(self) -> Rarity:
        return self._rarities.sample(self._rng.random())

    def draw(self, now: datetime) -> DrawResult:
        if self._ledger.get_balance() <= 0:
            return NoCredit()

        rarity = self.sample_rarity()
        pool = self._collection.cards_by_base_rarity(rarity)
        if not pool:
            logger.error("Empty draw pool for rarity %s, catalog is misconfigured", rarity.value)
            return EmptyDrawPool(rarity=rarity)

        consumed = self._ledger.consume_one()
        if isinstance(consumed, InsufficientCredit):
            return NoCredit()

        card = self._rng.choice(pool)
        entry, is_new = self._collection.record_draw(card.id, now)
        self._ledger.record_draw(now)

        logger.info(
            "Drew %s (%s), count %d, %d credits left",
            card.id,
            rarity.value,
            entry.count,
            consumed.remaining,
        )
        return DrawSuccess(
            card=card,
            is_duplicate=not is_new,
            new_count=entry.count,
            credits_remaining=consumed.remaining,
        )

    def simulate_draws(self, count: int = 100) -> dict[Rarity, float]:
        """
        Sample rarities without touching any state.

        Returns:
            Percentage of samples per tier, every tier present.
        """
        if count <= 0:
            raise ValueError(f"Draw count must be positive, got {count}")

        tally = Counter(self.sample_rarity() for _ in range(count))
        return {tier.key: 100 * tally[tier.key] / count for tier in self._rarities.tiers()}
