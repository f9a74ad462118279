"""
Collection views, scoring, and statistics.

Read-only projections of the catalog and a player's collection for display.
"""

from dataclasses import dataclass, field

from cardvault.models.card import Card, Theme
from cardvault.models.rarity import Rarity, RarityTable
from cardvault.models.results import UpgradeEvaluation
from cardvault.services.collection_store import CollectionStore
from cardvault.services.upgrade_engine import UpgradeEngine


@dataclass(frozen=True, slots=True)
class CardView:
    """A catalog card joined with the player's ownership data."""

    card: Card
    owned: bool
    count: int
    current_rarity: Rarity
    points: int
    upgrade: UpgradeEvaluation

    @property
    def can_upgrade(self) -> bool:
        return self.upgrade.can_upgrade


@dataclass(frozen=True, slots=True)
class CompletionStats:
    total: int
    owned: int

    @property
    def percentage(self) -> int:
        if self.total == 0:
            return 0
        return round(self.owned / self.total * 100)


@dataclass(frozen=True, slots=True)
class CollectionStats:
    total_cards: int
    owned_cards: int
    completion_percentage: int
    by_theme: dict[Theme, CompletionStats] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DetailedStats:
    collection: CollectionStats
    total_score: int
    by_base_rarity: dict[Rarity, CompletionStats]
    highest_card: Card | None
    highest_rarity: Rarity | None


def _percentage(owned: int, total: int) -> int:
    return CompletionStats(total=total, owned=owned).percentage


class CollectionView:
    """Display-side queries over a player's collection."""

    def __init__(
        self,
        collection: CollectionStore,
        upgrades: UpgradeEngine,
        rarity_table: RarityTable,
    ) -> None:
        self._collection = collection
        self._upgrades = upgrades
        self._rarities = rarity_table

    def card_points(self, rarity: Rarity | str) -> int:
        return self._rarities.points(rarity)

    def cards_with_collection_info(
        self,
        theme: Theme | str | None = None,
        rarity: Rarity | str | None = None,
        search: str | None = None,
    ) -> list[CardView]:
        """
        Catalog cards with ownership info, filtered.

        All filters are ANDed. `rarity` matches the current rarity, and
        `search` matches name or description, case-insensitive.
        """
        cards = self._collection.all_cards()

        if theme:
            theme = Theme(theme)
            cards = [card for card in cards if card.theme == theme]

        if rarity:
            rarity = Rarity(rarity)
            cards = [card for card in cards if self._collection.current_rarity(card.id) == rarity]

        if search:
            term = search.lower()
            cards = [
                card
                for card in cards
                if term in card.name.lower() or term in card.description.lower()
            ]

        views = []
        for card in cards:
            entry = self._collection.get_entry(card.id)
            current = entry.current_rarity if entry else self._rarities.lowest
            views.append(
                CardView(
                    card=card,
                    owned=entry is not None and entry.count > 0,
                    count=entry.count if entry else 0,
                    current_rarity=current,
                    points=self.card_points(current),
                    upgrade=self._upgrades.evaluate_upgrade(card.id),
                )
            )
        return views

    def upgradeable_cards(self) -> list[CardView]:
        return [view for view in self.cards_with_collection_info() if view.can_upgrade]

    def total_score(self) -> int:
        """Sum of current-rarity points over every owned card."""
        catalog_ids = {card.id for card in self._collection.all_cards()}
        return sum(
            self.card_points(entry.current_rarity)
            for entry in self._collection.entries()
            if entry.count > 0 and entry.card_id in catalog_ids
        )

    def collection_stats(self) -> CollectionStats:
        cards = self._collection.all_cards()
        owned_ids = {card.id for card in cards if self._collection.has_card(card.id)}

        by_theme = {}
        for theme in Theme:
            theme_cards = [card for card in cards if card.theme == theme]
            owned = sum(1 for card in theme_cards if self._collection.has_card(card.id))
            by_theme[theme] = CompletionStats(total=len(theme_cards), owned=owned)

        return CollectionStats(
            total_cards=len(cards),
            owned_cards=len(owned_ids),
            completion_percentage=_percentage(len(owned_ids), len(cards)),
            by_theme=by_theme,
        )

    def detailed_stats(self) -> DetailedStats:
        cards = self._collection.all_cards()

        by_base_rarity = {}
        for tier in self._rarities.tiers():
            tier_cards = [card for card in cards if card.base_rarity == tier.key]
            owned = sum(1 for card in tier_cards if self._collection.has_card(card.id))
            by_base_rarity[tier.key] = CompletionStats(total=len(tier_cards), owned=owned)

        highest_card = None
        highest_rarity = None
        highest_index = -1
        for entry in self._collection.entries():
            index = self._rarities.index_of(entry.current_rarity)
            if entry.count > 0 and index > highest_index:
                card = self._collection.card_by_id(entry.card_id)
                if card is not None:
                    highest_index = index
                    highest_card = card
                    highest_rarity = entry.current_rarity

        return DetailedStats(
            collection=self.collection_stats(),
            total_score=self.total_score(),
            by_base_rarity=by_base_rarity,
            highest_card=highest_card,
            highest_rarity=highest_rarity,
        )
