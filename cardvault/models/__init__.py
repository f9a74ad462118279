from cardvault.models.card import THEME_NAMES, Card, Theme
from cardvault.models.collection import CollectionEntry
from cardvault.models.failure import (
    ApiResponse,
    FailureDetail,
    FailureKind,
    OutcomeType,
    create_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from cardvault.models.rarity import (
    DEFAULT_RARITY_TABLE,
    DEFAULT_TIERS,
    Rarity,
    RarityTable,
    RarityTier,
)
from cardvault.models.results import (
    CardNotOwned,
    CooldownActive,
    CreditConsumed,
    DailyClaimed,
    DrawSuccess,
    EmptyDrawPool,
    InsufficientCopies,
    InsufficientCredit,
    MaxRarityReached,
    NoCredit,
    UpgradeEvaluation,
    UpgradeSuccess,
)

__all__ = [
    "DEFAULT_RARITY_TABLE",
    "DEFAULT_TIERS",
    "THEME_NAMES",
    "ApiResponse",
    "Card",
    "CardNotOwned",
    "CollectionEntry",
    "CooldownActive",
    "CreditConsumed",
    "DailyClaimed",
    "DrawSuccess",
    "EmptyDrawPool",
    "FailureDetail",
    "FailureKind",
    "InsufficientCopies",
    "InsufficientCredit",
    "MaxRarityReached",
    "NoCredit",
    "OutcomeType",
    "Rarity",
    "RarityTable",
    "RarityTier",
    "Theme",
    "UpgradeEvaluation",
    "UpgradeSuccess",
    "create_failure",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
]
