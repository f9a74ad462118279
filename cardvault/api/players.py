"""
Player gameplay API endpoints.

Draws, upgrades, credits and collection views for a single player. Each
request loads the player's keys, runs the game core synchronously, and
writes back the keys it changed.

Gameplay outcomes always answer HTTP 200 with the ApiResponse envelope;
game rule failures are refusals, catalog misconfiguration is a known failure.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from cardvault.config import settings
from cardvault.db import delete_player, load_player_store, save_player_store
from cardvault.db.database import get_session
from cardvault.models.card import Card, Theme
from cardvault.models.failure import ApiResponse, create_failure, create_success
from cardvault.models.rarity import Rarity
from cardvault.models.results import (
    CooldownActive,
    DailyClaimed,
    DrawSuccess,
    InsufficientCopies,
    UpgradeEvaluation,
    UpgradeSuccess,
)
from cardvault.services import CardGame, CardView, EconomyRules, build_game

router = APIRouter(prefix="/players", tags=["players"])


# --- Response models ---


class CardResponse(BaseModel):
    """Catalog card."""

    id: str
    name: str
    theme: Theme
    base_rarity: Rarity
    description: str = ""
    emoji: str | None = None
    image: str | None = None

    @classmethod
    def from_card(cls, card: Card) -> "CardResponse":
        return cls(**card.to_dict())


class DrawResponse(BaseModel):
    card: CardResponse
    is_duplicate: bool
    new_count: int
    credits_remaining: int
    message: str


class UpgradeResponse(BaseModel):
    card_id: str
    new_rarity: Rarity
    cost: int
    credits_earned: int = 0
    excess_cards: int = 0
    message: str


class UpgradeEvaluationResponse(BaseModel):
    card_id: str
    can_upgrade: bool
    reason: str | None = None
    cost: int | None = None
    current: int = 0
    next_rarity: Rarity | None = None
    max_rarity: Rarity | None = None

    @classmethod
    def from_evaluation(cls, evaluation: UpgradeEvaluation) -> "UpgradeEvaluationResponse":
        return cls(
            card_id=evaluation.card_id,
            can_upgrade=evaluation.can_upgrade,
            reason=evaluation.reason.value if evaluation.reason else None,
            cost=evaluation.cost,
            current=evaluation.current,
            next_rarity=evaluation.next_rarity,
            max_rarity=evaluation.max_rarity,
        )


class CreditsResponse(BaseModel):
    player_id: str
    balance: int
    max_stored: int
    can_claim_daily: bool
    seconds_until_claim: int = Field(
        ...,
        description="Seconds before daily credits can be claimed, 0 when claimable",
    )


class ClaimResponse(BaseModel):
    periods_elapsed: int
    credits_added: int
    total_credits: int
    first_claim: bool
    message: str


class CardViewResponse(BaseModel):
    card: CardResponse
    owned: bool
    count: int
    current_rarity: Rarity
    points: int
    upgrade: UpgradeEvaluationResponse

    @classmethod
    def from_view(cls, view: CardView) -> "CardViewResponse":
        return cls(
            card=CardResponse.from_card(view.card),
            owned=view.owned,
            count=view.count,
            current_rarity=view.current_rarity,
            points=view.points,
            upgrade=UpgradeEvaluationResponse.from_evaluation(view.upgrade),
        )


class CompletionResponse(BaseModel):
    total: int
    owned: int
    percentage: int


class StatsResponse(BaseModel):
    player_id: str
    total_cards: int
    owned_cards: int
    completion_percentage: int
    total_score: int
    by_theme: dict[str, CompletionResponse] = Field(default_factory=dict)
    by_base_rarity: dict[str, CompletionResponse] = Field(default_factory=dict)
    highest_card: CardResponse | None = None
    highest_rarity: Rarity | None = None


class DeleteResponse(BaseModel):
    player_id: str
    deleted: bool
    message: str = ""


# --- Helpers ---


@asynccontextmanager
async def _player_game(
    session: AsyncSession, player_id: str, persist: bool = True
) -> AsyncIterator[CardGame]:
    """
    Run the game core over a player's persisted state.

    Flushes the changes when `persist` is set. Read-only endpoints pass
    False so that looking at a player never creates rows for them.
    """
    store = await load_player_store(session, player_id)
    game = build_game(store, rules=EconomyRules.from_settings(settings))
    yield game
    if persist:
        await save_player_store(session, player_id, store)


def _validate_player_id(player_id: str) -> None:
    if not player_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Player ID cannot be empty",
        )


# --- Endpoints ---


@router.get("/{player_id}/credits", response_model=CreditsResponse)
async def get_credits(
    player_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CreditsResponse:
    """Current draw credit balance and daily claim availability."""
    _validate_player_id(player_id)
    async with _player_game(session, player_id, persist=False) as game:
        now = game.now()
        return CreditsResponse(
            player_id=player_id,
            balance=game.ledger.get_balance(),
            max_stored=game.ledger.rules.max_stored,
            can_claim_daily=game.ledger.can_claim_daily(now),
            seconds_until_claim=int(game.ledger.time_until_next_claim(now).total_seconds()),
        )


@router.post("/{player_id}/daily", response_model=ApiResponse[ClaimResponse])
async def claim_daily(
    player_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ApiResponse[Any]:
    """
    Claim daily credits.

    Awards the daily bonus once per elapsed 24h window since the last claim.
    The first claim only starts the clock.
    """
    _validate_player_id(player_id)
    async with _player_game(session, player_id) as game:
        result = game.ledger.claim_daily(game.now())

    if isinstance(result, CooldownActive):
        seconds = int(result.retry_after.total_seconds())
        return create_failure(result.kind, result.message, detail=f"retry_after_seconds={seconds}")

    if not isinstance(result, DailyClaimed):
        return create_failure(result.kind, result.message)

    return create_success(
        ClaimResponse(
            periods_elapsed=result.periods_elapsed,
            credits_added=result.credits_added,
            total_credits=result.total_credits,
            first_claim=result.first_claim,
            message=result.message,
        )
    )


@router.post("/{player_id}/draw", response_model=ApiResponse[DrawResponse])
async def draw_card(
    player_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ApiResponse[Any]:
    """Spend one credit to draw a card."""
    _validate_player_id(player_id)
    async with _player_game(session, player_id) as game:
        result = game.gacha.draw(game.now())

    if not isinstance(result, DrawSuccess):
        return create_failure(result.kind, result.message)

    return create_success(
        DrawResponse(
            card=CardResponse.from_card(result.card),
            is_duplicate=result.is_duplicate,
            new_count=result.new_count,
            credits_remaining=result.credits_remaining,
            message=result.message,
        )
    )


@router.get(
    "/{player_id}/cards/{card_id}/upgrade",
    response_model=UpgradeEvaluationResponse,
)
async def evaluate_upgrade(
    player_id: str,
    card_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UpgradeEvaluationResponse:
    """Whether a card can be upgraded now, and what it would cost."""
    _validate_player_id(player_id)
    async with _player_game(session, player_id, persist=False) as game:
        evaluation = game.upgrades.evaluate_upgrade(card_id)
    return UpgradeEvaluationResponse.from_evaluation(evaluation)


@router.post(
    "/{player_id}/cards/{card_id}/upgrade",
    response_model=ApiResponse[UpgradeResponse],
)
async def upgrade_card(
    player_id: str,
    card_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ApiResponse[Any]:
    """Consume copies of a card to raise its rarity one tier."""
    _validate_player_id(player_id)
    async with _player_game(session, player_id) as game:
        result = game.upgrades.upgrade(card_id)

    if isinstance(result, InsufficientCopies):
        return create_failure(
            result.kind,
            result.message,
            detail=f"required={result.required}, current={result.current}",
        )
    if not isinstance(result, UpgradeSuccess):
        return create_failure(result.kind, result.message, detail=f"card_id={card_id}")

    return create_success(
        UpgradeResponse(
            card_id=result.card_id,
            new_rarity=result.new_rarity,
            cost=result.cost,
            credits_earned=result.credits_earned,
            excess_cards=result.excess_cards,
            message=result.message,
        )
    )


@router.get("/{player_id}/collection", response_model=list[CardViewResponse])
async def get_collection(
    player_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    theme: Annotated[Theme | None, Query()] = None,
    rarity: Annotated[Rarity | None, Query(description="Filter on current rarity")] = None,
    search: Annotated[str | None, Query(max_length=100)] = None,
) -> list[CardViewResponse]:
    """Catalog cards joined with the player's ownership, filtered."""
    _validate_player_id(player_id)
    async with _player_game(session, player_id, persist=False) as game:
        views = game.view.cards_with_collection_info(theme=theme, rarity=rarity, search=search)
    return [CardViewResponse.from_view(view) for view in views]


@router.get("/{player_id}/stats", response_model=StatsResponse)
async def get_stats(
    player_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> StatsResponse:
    """Collection completion, score, and per-theme / per-rarity breakdowns."""
    _validate_player_id(player_id)
    async with _player_game(session, player_id, persist=False) as game:
        stats = game.view.detailed_stats()

    return StatsResponse(
        player_id=player_id,
        total_cards=stats.collection.total_cards,
        owned_cards=stats.collection.owned_cards,
        completion_percentage=stats.collection.completion_percentage,
        total_score=stats.total_score,
        by_theme={
            theme.value: CompletionResponse(
                total=item.total, owned=item.owned, percentage=item.percentage
            )
            for theme, item in stats.collection.by_theme.items()
        },
        by_base_rarity={
            rarity.value: CompletionResponse(
                total=item.total, owned=item.owned, percentage=item.percentage
            )
            for rarity, item in stats.by_base_rarity.items()
        },
        highest_card=CardResponse.from_card(stats.highest_card) if stats.highest_card else None,
        highest_rarity=stats.highest_rarity,
    )


@router.delete("/{player_id}", response_model=DeleteResponse)
async def reset_player(
    player_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """
    Delete all of a player's state.

    Irreversible. The next request starts the player from scratch.
    """
    _validate_player_id(player_id)
    deleted = await delete_player(session, player_id)

    if deleted:
        message = "Player state deleted."
    else:
        message = "No player state found to delete."

    return DeleteResponse(player_id=player_id, deleted=deleted, message=message)
