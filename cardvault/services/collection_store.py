"""
Card catalog and player collection storage.

Pure data access over a KeyValueStore. The catalog is seed data written
once; the collection maps card IDs to CollectionEntry records.
"""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from cardvault.db.kv_store import KeyValueStore
from cardvault.models.card import Card, Theme
from cardvault.models.collection import CollectionEntry
from cardvault.models.rarity import Rarity, RarityTable

logger = logging.getLogger(__name__)


def _legacy_obtained_at(data: dict, fallback: datetime) -> datetime:
    """First-obtained time from an older entry's epoch-millisecond `firstObtained`."""
    millis = data.pop("firstObtained", None)
    if isinstance(millis, int | float) and not isinstance(millis, bool):
        try:
            return datetime.fromtimestamp(millis / 1000, UTC)
        except (OverflowError, OSError, ValueError):
            logger.warning("Ignoring out-of-range firstObtained value: %r", millis)
    return fallback


class StorageKeys:
    """Keys the game core reads and writes."""

    CATALOG = "all_cards"
    COLLECTION = "cards_collection"
    CREDITS = "draw_credits"
    LAST_DRAW = "last_draw_time"
    LAST_DAILY_CREDIT = "last_daily_credit"

    ALL = (CATALOG, COLLECTION, CREDITS, LAST_DRAW, LAST_DAILY_CREDIT)


class CollectionStore:
    """Catalog lookups and collection entries for a single player."""

    def __init__(self, store: KeyValueStore, rarity_table: RarityTable) -> None:
        self._store = store
        self._rarities = rarity_table

    # --- Catalog ---

    def all_cards(self) -> list[Card]:
        return [Card.from_dict(data) for data in self._store.get(StorageKeys.CATALOG, [])]

    def cards_by_theme(self, theme: Theme | str) -> list[Card]:
        theme = Theme(theme)
        return [card for card in self.all_cards() if card.theme == theme]

    def cards_by_base_rarity(self, rarity: Rarity | str) -> list[Card]:
        rarity = Rarity(rarity)
        return [card for card in self.all_cards() if card.base_rarity == rarity]

    def card_by_id(self, card_id: str) -> Card | None:
        for card in self.all_cards():
            if card.id == card_id:
                return card
        return None

    def seed_catalog(self, cards: Iterable[Card]) -> int:
        """
        Replace the catalog with the given cards.

        Raises ValueError on duplicate card IDs.
        """
        cards = list(cards)
        ids = [card.id for card in cards]
        if len(set(ids)) != len(ids):
            raise ValueError("Catalog contains duplicate card IDs")
        self._store.set(StorageKeys.CATALOG, [card.to_dict() for card in cards])
        return len(cards)

    # --- Collection ---

    def _load(self) -> dict[str, dict]:
        return self._store.get(StorageKeys.COLLECTION, {}) or {}

    def _save(self, collection: dict[str, dict]) -> None:
        self._store.set(StorageKeys.COLLECTION, collection)

    def entries(self) -> list[CollectionEntry]:
        return [
            CollectionEntry.from_dict(card_id, data) for card_id, data in self._load().items()
        ]

    def get_entry(self, card_id: str) -> CollectionEntry | None:
        data = self._load().get(card_id)
        if data is None:
            return None
        return CollectionEntry.from_dict(card_id, data)

    def save_entry(self, entry: CollectionEntry) -> None:
        collection = self._load()
        collection[entry.card_id] = entry.to_dict()
        self._save(collection)

    def record_draw(self, card_id: str, now: datetime) -> tuple[CollectionEntry, bool]:
        """
        Add one drawn copy of a card.

        New cards always start at the lowest tier, whatever their base rarity.

        Returns:
            Tuple of (entry, is_new) where is_new is True on first acquisition.
        """
        entry = self.get_entry(card_id)
        if entry is None:
            entry = CollectionEntry(
                card_id=card_id,
                count=1,
                current_rarity=self._rarities.lowest,
                first_obtained_at=now,
            )
            is_new = True
        else:
            entry.count += 1
            is_new = False

        self.save_entry(entry)
        return entry, is_new

    def set_rarity(self, card_id: str, rarity: Rarity | str) -> bool:
        """Set an owned card's current tier. Returns False if not owned."""
        self._rarities.index_of(rarity)
        entry = self.get_entry(card_id)
        if entry is None:
            return False
        entry.current_rarity = Rarity(rarity)
        self.save_entry(entry)
        return True

    def set_count(self, card_id: str, count: int) -> bool:
        """Set an owned card's copy count. Returns False if not owned."""
        if count < 0:
            raise ValueError(f"Count must be non-negative, got {count}")
        entry = self.get_entry(card_id)
        if entry is None:
            return False
        entry.count = count
        self.save_entry(entry)
        return True

    def remove_copies(self, card_id: str, count: int) -> bool:
        """
        Remove copies of a card, deleting the entry when none remain.

        Returns False without changes if fewer than `count` copies are held.
        """
        collection = self._load()
        data = collection.get(card_id)
        if data is None or data["count"] < count:
            return False

        data["count"] -= count
        if data["count"] <= 0:
            del collection[card_id]
        self._save(collection)
        return True

    def has_card(self, card_id: str) -> bool:
        """True if at least one copy is held."""
        return self.card_count(card_id) > 0

    def card_count(self, card_id: str) -> int:
        entry = self.get_entry(card_id)
        return entry.count if entry else 0

    def current_rarity(self, card_id: str) -> Rarity:
        """Current tier of a card; the lowest tier when not owned."""
        entry = self.get_entry(card_id)
        return entry.current_rarity if entry else self._rarities.lowest

    def cards_owned(self) -> int:
        """Number of distinct cards ever drawn."""
        return len(self._load())

    # --- Lifecycle ---

    def initialize(self, default_cards: Iterable[Card], now: datetime) -> None:
        """
        Prepare storage for play.

        Seeds the catalog when it is missing or predates base rarities,
        migrates entries written before rarity upgrades existed, and creates
        an empty collection on first run.
        """
        stored = self._store.get(StorageKeys.CATALOG)
        if not stored:
            count = self.seed_catalog(default_cards)
            logger.info("Seeded catalog with %d cards", count)
        elif any("base_rarity" not in card for card in stored):
            count = self.seed_catalog(default_cards)
            logger.warning("Catalog predates base rarities, reseeded %d cards", count)

        collection = self._store.get(StorageKeys.COLLECTION)
        if collection is None:
            self._save({})
            return

        migrated = 0
        for data in collection.values():
            if "current_rarity" not in data:
                data["current_rarity"] = self._rarities.lowest.value
                migrated += 1
            if "first_obtained_at" not in data:
                data["first_obtained_at"] = _legacy_obtained_at(data, now).isoformat()
                migrated += 1

        if migrated:
            logger.warning("Migrated %d collection fields to the rarity format", migrated)
            self._save(collection)

    def reset(self) -> None:
        """Remove every key the game owns."""
        for key in StorageKeys.ALL:
            self._store.remove(key)
