"""
Catalog API endpoints.

Read-only access to the default card catalog.
"""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from cardvault.api.players import CardResponse
from cardvault.models.card import THEME_NAMES, Theme
from cardvault.models.rarity import DEFAULT_RARITY_TABLE, Rarity
from cardvault.services.card_catalog import DEFAULT_CARDS

router = APIRouter(prefix="/catalog", tags=["catalog"])


class RarityResponse(BaseModel):
    key: Rarity
    name: str
    weight: float
    points: int
    upgrade_cost: int | None = None


class ThemeResponse(BaseModel):
    key: Theme
    name: str
    card_count: int


@router.get("", response_model=list[CardResponse])
async def list_cards(
    theme: Annotated[Theme | None, Query()] = None,
) -> list[CardResponse]:
    """All catalog cards, optionally restricted to one theme."""
    cards = [card for card in DEFAULT_CARDS if theme is None or card.theme == theme]
    return [CardResponse.from_card(card) for card in cards]


@router.get("/rarities", response_model=list[RarityResponse])
async def list_rarities() -> list[RarityResponse]:
    """Rarity tiers with draw weights, points and upgrade costs."""
    return [
        RarityResponse(
            key=tier.key,
            name=tier.name,
            weight=tier.weight,
            points=tier.points,
            upgrade_cost=DEFAULT_RARITY_TABLE.upgrade_cost(tier.key),
        )
        for tier in DEFAULT_RARITY_TABLE.tiers()
    ]


@router.get("/themes", response_model=list[ThemeResponse])
async def list_themes() -> list[ThemeResponse]:
    return [
        ThemeResponse(
            key=theme,
            name=THEME_NAMES[theme],
            card_count=sum(1 for card in DEFAULT_CARDS if card.theme == theme),
        )
        for theme in Theme
    ]


@router.get("/{card_id}", response_model=CardResponse)
async def get_card(card_id: str) -> CardResponse:
    for card in DEFAULT_CARDS:
        if card.id == card_id:
            return CardResponse.from_card(card)

    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Card '{card_id}' not found",
    )
