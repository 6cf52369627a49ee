"""Shared FastAPI dependencies."""

from fastapi import Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from pickem.config import settings
from pickem.database import get_db
from pickem.services.period import Period
from pickem.services.repository import SqlPickemRepository


async def get_repository(db: AsyncSession = Depends(get_db)) -> SqlPickemRepository:
    """Repository bound to the request's session."""
    return SqlPickemRepository(db)


def get_period(
    week: int = Query(..., ge=1, description="Week number"),
    season: int | None = Query(None, description="Season year (defaults to current)"),
    season_type: str | None = Query(None, description="preseason, regular or playoffs"),
) -> Period:
    """Build a Period from query params, filling in configured defaults."""
    try:
        return Period(
            week=week,
            season=season or settings.current_season,
            season_type=season_type or settings.default_season_type,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
