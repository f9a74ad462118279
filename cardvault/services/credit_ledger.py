"""
Draw Credit Ledger: Balance, Cap, and Daily Claim.

INVARIANTS:
- Balance is always within [0, max_stored]; grants clamp silently
- A missing balance reads as the initial grant
- Daily claims use a rolling cooldown window, not calendar dates
- A claim after N whole windows awards N daily bonuses at once
- The first-ever claim records the baseline and awards nothing

Timestamps are stored as ISO 8601 strings in UTC.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from cardvault.config import Settings
from cardvault.db.kv_store import KeyValueStore
from cardvault.models.results import (
    ClaimResult,
    ConsumeResult,
    CooldownActive,
    CreditConsumed,
    DailyClaimed,
    InsufficientCredit,
)
from cardvault.services.collection_store import StorageKeys

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EconomyRules:
    """Constants of the draw credit economy."""

    initial_credits: int = 5
    daily_bonus: int = 5
    max_stored: int = 99
    excess_card_value: int = 1
    daily_cooldown: timedelta = timedelta(hours=24)

    @classmethod
    def from_settings(cls, settings: Settings) -> "EconomyRules":
        return cls(
            initial_credits=settings.initial_credits,
            daily_bonus=settings.daily_bonus,
            max_stored=settings.max_stored_credits,
            excess_card_value=settings.excess_card_value,
            daily_cooldown=timedelta(hours=settings.daily_cooldown_hours),
        )


def _as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class CreditLedger:
    """A player's draw credits and daily claim state."""

    def __init__(self, store: KeyValueStore, rules: EconomyRules) -> None:
        self._store = store
        self.rules = rules

    # --- Balance ---

    def get_balance(self) -> int:
        return int(self._store.get(StorageKeys.CREDITS, self.rules.initial_credits))

    def _save_balance(self, balance: int) -> int:
        balance = max(0, min(balance, self.rules.max_stored))
        self._store.set(StorageKeys.CREDITS, balance)
        return balance

    def grant(self, amount: int) -> int:
        """Add credits, clamped to the storage cap. Returns the new balance."""
        if amount < 0:
            raise ValueError(f"Grant amount must be non-negative, got {amount}")
        return self._save_balance(self.get_balance() + amount)

    def consume_one(self) -> ConsumeResult:
        balance = self.get_balance()
        if balance <= 0:
            return InsufficientCredit()
        return CreditConsumed(remaining=self._save_balance(balance - 1))

    # --- Daily claim ---

    def _read_timestamp(self, key: str) -> datetime | None:
        """Stored timestamp, or None when absent or unparseable."""
        raw = self._store.get(key)
        if not raw:
            return None
        try:
            # Calendar-date markers ("2024-05-01") parse as midnight UTC
            return _as_utc(datetime.fromisoformat(raw))
        except (TypeError, ValueError):
            logger.warning("Ignoring unparseable %s value: %r", key, raw)
            return None

    def last_claim_at(self) -> datetime | None:
        return self._read_timestamp(StorageKeys.LAST_DAILY_CREDIT)

    def can_claim_daily(self, now: datetime) -> bool:
        last = self.last_claim_at()
        return last is None or _as_utc(now) - last >= self.rules.daily_cooldown

    def time_until_next_claim(self, now: datetime) -> timedelta:
        """Time left before the next claim; zero when claimable now."""
        last = self.last_claim_at()
        if last is None:
            return timedelta(0)
        remaining = last + self.rules.daily_cooldown - _as_utc(now)
        return max(remaining, timedelta(0))

    def claim_daily(self, now: datetime) -> ClaimResult:
        """
        Claim daily credits for every whole cooldown window since the last claim.

        Records `now` as the new claim time on success.
        """
        now = _as_utc(now)
        last = self.last_claim_at()

        if last is None:
            self._store.set(StorageKeys.LAST_DAILY_CREDIT, now.isoformat())
            logger.info("First daily claim recorded as baseline")
            return DailyClaimed(
                periods_elapsed=0,
                credits_added=0,
                total_credits=self.get_balance(),
                first_claim=True,
            )

        if not self.can_claim_daily(now):
            return CooldownActive(retry_after=self.time_until_next_claim(now))

        periods = (now - last) // self.rules.daily_cooldown
        credits = periods * self.rules.daily_bonus
        total = self.grant(credits)
        self._store.set(StorageKeys.LAST_DAILY_CREDIT, now.isoformat())

        logger.info("Daily claim: %d period(s), +%d credits, balance %d", periods, credits, total)
        return DailyClaimed(periods_elapsed=periods, credits_added=credits, total_credits=total)

    # --- Draw timing ---

    def last_draw_at(self) -> datetime | None:
        return self._read_timestamp(StorageKeys.LAST_DRAW)

    def record_draw(self, now: datetime) -> None:
        self._store.set(StorageKeys.LAST_DRAW, _as_utc(now).isoformat())
