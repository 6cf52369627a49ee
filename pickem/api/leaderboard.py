"""Leaderboard API endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query

from pickem.api.dependencies import get_period, get_repository
from pickem.config import settings
from pickem.exceptions import PickemError
from pickem.schemas.leaderboard import (
    SeasonLeaderboardResponse,
    StandingsEntryResponse,
    WeeklyLeaderboardResponse,
)
from pickem.services.period import Period
from pickem.services.standings import get_season_standings, get_weekly_standings

router = APIRouter(prefix="/leaderboard")


@router.get("/weekly", response_model=WeeklyLeaderboardResponse)
async def weekly_leaderboard(
    period: Period = Depends(get_period),
    repository=Depends(get_repository),
) -> WeeklyLeaderboardResponse:
    """
    Live standings for a week.

    Only completed games count; ranking uses the same tiebreaker as the
    weekly awards.
    """
    try:
        entries = await get_weekly_standings(repository, period)
    except PickemError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return WeeklyLeaderboardResponse(
        week=period.week,
        season=period.season,
        season_type=period.season_type,
        entries=[StandingsEntryResponse(**asdict(e)) for e in entries],
    )


@router.get("/season", response_model=SeasonLeaderboardResponse)
async def season_leaderboard(
    season: int | None = Query(None, description="Season year (defaults to current)"),
    repository=Depends(get_repository),
) -> SeasonLeaderboardResponse:
    """Season standings with current and longest correct-pick streaks."""
    season = season or settings.current_season
    try:
        entries = await get_season_standings(repository, season)
    except PickemError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return SeasonLeaderboardResponse(
        season=season,
        entries=[StandingsEntryResponse(**asdict(e)) for e in entries],
    )
