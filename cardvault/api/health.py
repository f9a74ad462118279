"""
Health check endpoints.

Liveness, plus a readiness probe that checks the database and that the
card catalog fills every rarity's draw pool.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cardvault.db.database import get_session
from cardvault.models.rarity import DEFAULT_RARITY_TABLE
from cardvault.services.card_catalog import DEFAULT_CARDS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    empty_draw_pools: list[str] | None = None


def find_empty_draw_pools() -> list[str]:
    """Rarity tiers with no catalog card to draw."""
    filled = {card.base_rarity for card in DEFAULT_CARDS}
    return [tier.key.value for tier in DEFAULT_RARITY_TABLE.tiers() if tier.key not in filled]


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. Does not check dependencies."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 if the database is unreachable or a draw pool is empty.
    """
    empty_pools = find_empty_draw_pools()

    try:
        await session.execute(text("SELECT 1"))
        database = "connected"
    except (SQLAlchemyError, OSError) as e:
        logger.error("Readiness check failed to reach database: %s", e)
        database = "disconnected"

    if database != "connected" or empty_pools:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database=database, empty_draw_pools=empty_pools)

    return HealthResponse(status="ready", database=database, empty_draw_pools=[])
