"""Leaderboard endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from pumploss.api.deps import get_leaderboard_cache
from pumploss.api.schemas import (
    LeaderboardEntryResponse,
    LeaderboardResponse,
    LeaderboardRefreshResponse,
)
from pumploss.domain.models import LeaderboardPeriod
from pumploss.services import LeaderboardCache

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("/{period}", response_model=LeaderboardResponse)
def get_leaderboard(
    period: LeaderboardPeriod,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    force_refresh: bool = Query(False),
    cache: LeaderboardCache = Depends(get_leaderboard_cache),
) -> LeaderboardResponse:
    """Worst realized performers for 24h, 7d or all time."""
    entries = cache.get_leaderboard(period, limit, force_refresh=force_refresh)
    record = cache.get_record(period)
    return LeaderboardResponse(
        period=period,
        entries=[LeaderboardEntryResponse.model_validate(e) for e in entries],
        last_updated=record.last_updated if record else None,
    )


@router.post("/refresh", response_model=list[LeaderboardRefreshResponse])
def refresh_all_leaderboards(
    cache: LeaderboardCache = Depends(get_leaderboard_cache),
) -> list[LeaderboardRefreshResponse]:
    """Recompute every period."""
    return [
        LeaderboardRefreshResponse(
            period=period,
            entry_count=len(record.entries),
            last_updated=record.last_updated,
        )
        for period, record in cache.refresh_all().items()
    ]


@router.post("/{period}/refresh", response_model=LeaderboardRefreshResponse)
def refresh_leaderboard(
    period: LeaderboardPeriod,
    cache: LeaderboardCache = Depends(get_leaderboard_cache),
) -> LeaderboardRefreshResponse:
    """Recompute one period regardless of staleness."""
    record = cache.refresh(period)
    return LeaderboardRefreshResponse(
        period=period,
        entry_count=len(record.entries),
        last_updated=record.last_updated,
    )
