"""
Composition root for a player's game.

Wires the store, rarity table, ledger, collection and engines together.
Build one per player store; nothing here is shared module state.
"""

import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from cardvault.db.kv_store import KeyValueStore
from cardvault.models.card import Card
from cardvault.models.rarity import DEFAULT_RARITY_TABLE, RarityTable
from cardvault.services.card_catalog import DEFAULT_CARDS
from cardvault.services.collection_store import CollectionStore
from cardvault.services.collection_view import CollectionView
from cardvault.services.credit_ledger import CreditLedger, EconomyRules
from cardvault.services.gacha_engine import GachaEngine
from cardvault.services.upgrade_engine import UpgradeEngine


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class CardGame:
    store: KeyValueStore
    rarities: RarityTable
    collection: CollectionStore
    ledger: CreditLedger
    gacha: GachaEngine
    upgrades: UpgradeEngine
    view: CollectionView
    clock: Callable[[], datetime] = utc_now

    def now(self) -> datetime:
        return self.clock()


def build_game(
    store: KeyValueStore,
    rules: EconomyRules | None = None,
    rarity_table: RarityTable = DEFAULT_RARITY_TABLE,
    rng: random.Random | None = None,
    clock: Callable[[], datetime] = utc_now,
    catalog: Iterable[Card] = DEFAULT_CARDS,
) -> CardGame:
    """
    Build and initialize a game over a store.

    Seeds the catalog and migrates the collection if needed.
    """
    rules = rules or EconomyRules()
    collection = CollectionStore(store, rarity_table)
    ledger = CreditLedger(store, rules)
    upgrades = UpgradeEngine(collection, ledger, rarity_table)

    collection.initialize(catalog, clock())

    return CardGame(
        store=store,
        rarities=rarity_table,
        collection=collection,
        ledger=ledger,
        gacha=GachaEngine(collection, ledger, rarity_table, rng),
        upgrades=upgrades,
        view=CollectionView(collection, upgrades, rarity_table),
        clock=clock,
    )

