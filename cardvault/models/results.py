"""
Result types returned by the game core.

Every core operation returns a tagged result instead of raising: a success
variant carrying the payload, or one failure variant per failure kind.
Failure variants share `success = False`, a `kind`, and a `message`.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import ClassVar

from cardvault.models.card import Card
from cardvault.models.failure import FailureKind
from cardvault.models.rarity import Rarity

CARD_DRAWN_MESSAGE = "New card obtained!"
DUPLICATE_FOUND_MESSAGE = "Duplicate! Card added to your collection"


# --- Failures ---


@dataclass(frozen=True, slots=True)
class NoCredit:
    """Draw attempted with a zero balance."""

    kind: ClassVar[FailureKind] = FailureKind.NO_CREDIT
    success: ClassVar[bool] = False
    message: str = "No draw credits available"


@dataclass(frozen=True, slots=True)
class InsufficientCredit:
    """Ledger asked to consume a credit it does not hold."""

    kind: ClassVar[FailureKind] = FailureKind.INSUFFICIENT_CREDIT
    success: ClassVar[bool] = False
    message: str = "Not enough credits"


@dataclass(frozen=True, slots=True)
class EmptyDrawPool:
    """Catalog holds no card for the sampled rarity."""

    rarity: Rarity
    kind: ClassVar[FailureKind] = FailureKind.EMPTY_DRAW_POOL
    success: ClassVar[bool] = False
    message: str = "No card available for this rarity"


@dataclass(frozen=True, slots=True)
class CooldownActive:
    """Daily claim attempted before the cooldown elapsed."""

    retry_after: timedelta
    kind: ClassVar[FailureKind] = FailureKind.COOLDOWN_ACTIVE
    success: ClassVar[bool] = False
    message: str = "Daily credits already claimed"


@dataclass(frozen=True, slots=True)
class CardNotOwned:
    card_id: str
    kind: ClassVar[FailureKind] = FailureKind.CARD_NOT_OWNED
    success: ClassVar[bool] = False
    message: str = "Card not owned"


@dataclass(frozen=True, slots=True)
class MaxRarityReached:
    card_id: str
    max_rarity: Rarity
    kind: ClassVar[FailureKind] = FailureKind.MAX_RARITY_REACHED
    success: ClassVar[bool] = False
    message: str = "This card has reached its maximum rarity"


@dataclass(frozen=True, slots=True)
class InsufficientCopies:
    card_id: str
    required: int
    current: int
    kind: ClassVar[FailureKind] = FailureKind.INSUFFICIENT_COPIES
    success: ClassVar[bool] = False
    message: str = "Not enough copies to upgrade"


# --- Successes ---


@dataclass(frozen=True, slots=True)
class CreditConsumed:
    remaining: int
    success: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class DailyClaimed:
    """
    Outcome of a daily claim.

    A first-ever claim only records the baseline: periods_elapsed and
    credits_added are both 0 and first_claim is True.
    """

    periods_elapsed: int
    credits_added: int
    total_credits: int
    first_claim: bool = False
    success: ClassVar[bool] = True

    @property
    def message(self) -> str:
        if self.first_claim:
            return "First visit recorded - daily credits available tomorrow"
        if self.periods_elapsed == 1:
            return f"+{self.credits_added} daily credits!"
        return f"+{self.credits_added} credits for {self.periods_elapsed} days away!"


@dataclass(frozen=True, slots=True)
class DrawSuccess:
    card: Card
    is_duplicate: bool
    new_count: int
    credits_remaining: int
    success: ClassVar[bool] = True

    @property
    def message(self) -> str:
        return DUPLICATE_FOUND_MESSAGE if self.is_duplicate else CARD_DRAWN_MESSAGE


@dataclass(frozen=True, slots=True)
class UpgradeSuccess:
    card_id: str
    new_rarity: Rarity
    cost: int
    credits_earned: int = 0
    excess_cards: int = 0
    success: ClassVar[bool] = True

    @property
    def message(self) -> str:
        return f"Card upgraded to {self.new_rarity.value}!"


@dataclass(frozen=True, slots=True)
class UpgradeEvaluation:
    """Read-only answer to "can this card be upgraded right now?"."""

    card_id: str
    can_upgrade: bool
    reason: FailureKind | None = None
    cost: int | None = None
    current: int = 0
    next_rarity: Rarity | None = None
    max_rarity: Rarity | None = None


ConsumeResult = CreditConsumed | InsufficientCredit
ClaimResult = DailyClaimed | CooldownActive
DrawResult = DrawSuccess | NoCredit | EmptyDrawPool
UpgradeResult = UpgradeSuccess | CardNotOwned | MaxRarityReached | InsufficientCopies
