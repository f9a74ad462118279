from cardvault.services.card_catalog import DEFAULT_CARDS
from cardvault.services.card_game import CardGame, build_game, utc_now
from cardvault.services.collection_store import CollectionStore, StorageKeys
from cardvault.services.collection_view import (
    CardView,
    CollectionStats,
    CollectionView,
    CompletionStats,
    DetailedStats,
)
from cardvault.services.credit_ledger import CreditLedger, EconomyRules
from cardvault.services.gacha_engine import GachaEngine
from cardvault.services.upgrade_engine import UpgradeEngine

__all__ = [
    "DEFAULT_CARDS",
    "CardGame",
    "CardView",
    "CollectionStats",
    "CollectionStore",
    "CollectionView",
    "CompletionStats",
    "CreditLedger",
    "DetailedStats",
    "EconomyRules",
    "GachaEngine",
    "StorageKeys",
    "UpgradeEngine",
    "build_game",
    "utc_now",
]
