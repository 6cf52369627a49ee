"""Weekly awards tasks."""

import asyncio

import structlog

from pickem.celery_app import celery_app
from pickem.config import settings
from pickem.database import async_session
from pickem.services.awards import WeeklyAwardsProcessor
from pickem.services.period import Period
from pickem.services.repository import SqlPickemRepository

logger = structlog.get_logger()


def _result_to_dict(result) -> dict:
    return {
        "period": str(result.period),
        "week": result.period.week,
        "season": result.period.season,
        "season_type": result.period.season_type,
        "status": result.status,
        "awards_created": len(result.awards),
        "users_ranked": result.users_ranked,
        "excluded_users": result.excluded_users,
        "error": result.error,
    }


async def _process_weekly_awards_async(period: Period, repository=None) -> dict:
    """
    Process awards for one period.

    Raises:
        PeriodNotCompletedError: if the period still has unfinished games
    """
    if repository is None:
        async with async_session() as session:
            return await _process_weekly_awards_async(period, SqlPickemRepository(session))

    processor = WeeklyAwardsProcessor(repository)
    result = await processor.process_period(period)
    return _result_to_dict(result)


async def _process_completed_weeks_async(season: int, repository=None) -> dict:
    """Process every completed week of a season that has no awards yet."""
    if repository is None:
        async with async_session() as session:
            return await _process_completed_weeks_async(season, SqlPickemRepository(session))

    processor = WeeklyAwardsProcessor(repository)
    results = await processor.process_completed_periods(season)

    return {
        "season": season,
        "periods_processed": sum(1 for r in results if r.status == "processed"),
        "periods_skipped": sum(1 for r in results if r.status == "skipped"),
        "errors": sum(1 for r in results if r.status == "failed"),
        "periods": [_result_to_dict(r) for r in results],
        "status": "completed",
    }


@celery_app.task(name="pickem.tasks.awards.process_weekly_awards")
def process_weekly_awards(week: int, season: int | None = None, season_type: str | None = None) -> dict:
    """Compute and store awards for one completed week."""
    period = Period(
        week=week,
        season=season or settings.current_season,
        season_type=season_type or settings.default_season_type,
    )
    logger.info("Processing weekly awards", period=str(period))

    result = asyncio.run(_process_weekly_awards_async(period))

    logger.info("Completed weekly awards", **result)
    return result


@celery_app.task(name="pickem.tasks.awards.process_completed_weeks")
def process_completed_weeks(season: int | None = None) -> dict:
    """
    Sweep a season for completed weeks without awards.

    Safe to run repeatedly: processed weeks are skipped.
    """
    season = season or settings.current_season
    logger.info("Starting completed-weeks sweep", season=season)

    result = asyncio.run(_process_completed_weeks_async(season))

    logger.info(
        "Completed-weeks sweep done",
        season=season,
        periods_processed=result["periods_processed"],
        errors=result["errors"],
    )
    return result
