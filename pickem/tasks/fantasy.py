"""Fantasy points recalculation task."""

import asyncio

import structlog
from sqlalchemy import select

from pickem.celery_app import celery_app
from pickem.config import settings
from pickem.database import async_session
from pickem.models import FantasyPlayerStats
from pickem.services.scoring.fantasy import apply_fantasy_points

logger = structlog.get_logger()


async def _recalculate_fantasy_points_async(week: int, season: int, session=None) -> dict:
    """Recompute PPR, Half PPR and Standard points for every stat line of a week."""
    if session is None:
        async with async_session() as session:
            return await _recalculate_fantasy_points_async(week, season, session)

    result = await session.execute(
        select(FantasyPlayerStats)
        .where(FantasyPlayerStats.week == week)
        .where(FantasyPlayerStats.season == season)
    )
    rows = result.scalars().all()

    players_updated = 0
    errors = 0
    for row in rows:
        try:
            apply_fantasy_points(row)
            players_updated += 1
        except Exception as e:
            logger.error("Failed to score player", player_id=row.player_id, error=str(e))
            errors += 1

    await session.commit()

    return {
        "week": week,
        "season": season,
        "players_updated": players_updated,
        "errors": errors,
        "status": "completed",
    }


@celery_app.task(name="pickem.tasks.fantasy.recalculate_fantasy_points")
def recalculate_fantasy_points(week: int, season: int | None = None) -> dict:
    """Recalculate stored fantasy points after stat corrections for a week."""
    season = season or settings.current_season
    logger.info("Recalculating fantasy points", week=week, season=season)

    result = asyncio.run(_recalculate_fantasy_points_async(week, season))

    logger.info("Completed fantasy points recalculation", **result)
    return result
