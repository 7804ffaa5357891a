"""API routers package."""

from pumploss.api.routers.ingest import router as ingest_router
from pumploss.api.routers.leaderboard import router as leaderboard_router
from pumploss.api.routers.wallets import router as wallets_router
from pumploss.api.routers.wallets import trades_router
from pumploss.api.routers.admin import router as admin_router
from pumploss.api.routers.admin import tokens_router

__all__ = [
    "ingest_router",
    "leaderboard_router",
    "wallets_router",
    "trades_router",
    "admin_router",
    "tokens_router",
]
