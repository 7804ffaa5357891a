"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pumploss import __version__
from pumploss.config.settings import get_settings
from pumploss.config.logging_config import setup_logging
from pumploss.repositories.sqlalchemy.database import init_db
from pumploss.api.routers import (
    ingest_router,
    leaderboard_router,
    wallets_router,
    trades_router,
    tokens_router,
    admin_router,
)
from pumploss.core.exceptions import (
    AppError,
    NotFoundError,
    StorageError,
    TradeProcessingError,
    WriteConflictError,
)
from pumploss.services import KeyedLockArena


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    yield
    # Shutdown (nothing to clean up)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Swap-loss ledger and worst-performer leaderboard",
    version=__version__,
    lifespan=lifespan,
)

# One arena per process: every request's engine serializes on the same keys
app.state.lock_arena = KeyedLockArena()

# Include routers
app.include_router(ingest_router)
app.include_router(leaderboard_router)
app.include_router(wallets_router)
app.include_router(trades_router)
app.include_router(tokens_router)
app.include_router(admin_router)


def error_status(exc: AppError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, (StorageError, TradeProcessingError, WriteConflictError)):
        return 503
    return 400


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=error_status(exc),
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
