from cardvault.api.catalog import router as catalog_router
from cardvault.api.health import router as health_router
from cardvault.api.players import router as players_router

__all__ = [
    "catalog_router",
    "health_router",
    "players_router",
]
