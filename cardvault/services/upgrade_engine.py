"""
Upgrade Engine: Rarity Upgrade Ladder.

Copies of a card at its current tier are consumed to advance it one tier.
The cost doubles per tier: 4, 8, 16, 32.

Transition rules:
- Non-terminal target: exactly `cost` copies are consumed, the rest stay
- Terminal target: one copy is kept and every copy past the cost is
  converted into draw credits

A card's base rarity is NOT an upgrade ceiling. Every card can climb to
the highest tier; base rarity only decides which draw pool it belongs to.
"""

import logging

from cardvault.models.collection import CollectionEntry
from cardvault.models.rarity import Rarity, RarityTable
from cardvault.models.results import (
    CardNotOwned,
    InsufficientCopies,
    MaxRarityReached,
    UpgradeEvaluation,
    UpgradeResult,
    UpgradeSuccess,
)
from cardvault.services.collection_store import CollectionStore
from cardvault.services.credit_ledger import CreditLedger

logger = logging.getLogger(__name__)


class UpgradeEngine:
    """Evaluates and applies rarity upgrades for owned cards."""

    def __init__(
        self,
        collection: CollectionStore,
        ledger: CreditLedger,
        rarity_table: RarityTable,
    ) -> None:
        self._collection = collection
        self._ledger = ledger
        self._rarities = rarity_table

    def _preconditions(
        self, card_id: str
    ) -> tuple[CollectionEntry, int, Rarity] | CardNotOwned | MaxRarityReached | InsufficientCopies:
        """
        Run upgrade checks without mutating anything.

        Returns (entry, cost, next_rarity) when the upgrade may proceed,
        otherwise the failure that blocks it.
        """
        entry = self._collection.get_entry(card_id)
        if entry is None or self._collection.card_by_id(card_id) is None:
            return CardNotOwned(card_id=card_id)

        cost = self._rarities.upgrade_cost(entry.current_rarity)
        next_rarity = self._rarities.next(entry.current_rarity)
        if cost is None or next_rarity is None:
            return MaxRarityReached(card_id=card_id, max_rarity=self._rarities.highest)

        if entry.count < cost:
            return InsufficientCopies(card_id=card_id, required=cost, current=entry.count)

        return entry, cost, next_rarity

    def evaluate_upgrade(self, card_id: str) -> UpgradeEvaluation:
        """Side-effect free upgrade check for display."""
        checked = self._preconditions(card_id)

        if isinstance(checked, tuple):
            entry, cost, next_rarity = checked
            return UpgradeEvaluation(
                card_id=card_id,
                can_upgrade=True,
                cost=cost,
                current=entry.count,
                next_rarity=next_rarity,
            )

        if isinstance(checked, InsufficientCopies):
            return UpgradeEvaluation(
                card_id=card_id,
                can_upgrade=False,
                reason=checked.kind,
                cost=checked.required,
                current=checked.current,
                next_rarity=self._rarities.next(self._collection.current_rarity(card_id)),
            )

        if isinstance(checked, MaxRarityReached):
            return UpgradeEvaluation(
                card_id=card_id,
                can_upgrade=False,
                reason=checked.kind,
                current=self._collection.card_count(card_id),
                max_rarity=checked.max_rarity,
            )

        return UpgradeEvaluation(card_id=card_id, can_upgrade=False, reason=checked.kind)

    def upgrade(self, card_id: str) -> UpgradeResult:
        checked = self._preconditions(card_id)
        if not isinstance(checked, tuple):
            return checked

        entry, cost, next_rarity = checked
        entry.current_rarity = next_rarity
        excess = 0
        credits_earned = 0

        if self._rarities.is_terminal(next_rarity):
            excess = entry.count - cost
            credits_earned = excess * self._ledger.rules.excess_card_value
            entry.count = 1
        else:
            entry.count -= cost

        self._collection.save_entry(entry)
        if credits_earned:
            self._ledger.grant(credits_earned)

        logger.info(
            "Upgraded %s to %s for %d copies, %d credits earned",
            card_id,
            next_rarity.value,
            cost,
            credits_earned,
        )
        return UpgradeSuccess(
            card_id=card_id,
            new_rarity=next_rarity,
            cost=cost,
            credits_earned=credits_earned,
            excess_cards=excess,
        )

    def upgradeable_card_ids(self) -> list[str]:
        """Owned cards that can be upgraded right now."""
        return [
            entry.card_id
            for entry in self._collection.entries()
            if self.evaluate_upgrade(entry.card_id).can_upgrade
        ]
