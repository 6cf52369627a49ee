"""Liveness and readiness endpoints."""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from pickem.config import settings
from pickem.database import get_db
from pickem.models import Game

logger = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)) -> dict:
    """
    Report database connectivity and whether the current season has a schedule.

    The service is unhealthy when the database or the games table cannot be
    queried. An empty schedule is reported but does not fail the check.
    """
    report = {
        "status": "healthy",
        "environment": settings.environment,
        "season": settings.current_season,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {},
    }

    try:
        await db.execute(text("SELECT 1"))
        report["checks"]["database"] = "ok"
    except Exception as e:
        logger.warning("Health check failed", check="database", error=str(e))
        report["checks"]["database"] = f"error: {e}"
        report["status"] = "unhealthy"
        return report

    try:
        report["checks"]["season_games"] = await db.scalar(
            select(func.count()).select_from(Game).where(Game.season == settings.current_season)
        )
    except Exception as e:
        logger.warning("Health check failed", check="season_games", error=str(e))
        report["checks"]["season_games"] = f"error: {e}"
        report["status"] = "unhealthy"

    return report


@router.get("/ready")
async def readiness_check() -> dict:
    """Readiness check; no dependencies are consulted."""
    return {"status": "ready"}
