"""Scoring tasks: rescore a contest and audit stored pick points."""

import asyncio

import structlog

from pickem.celery_app import celery_app
from pickem.config import settings
from pickem.database import async_session
from pickem.services.repository import SqlPickemRepository
from pickem.services.scoring import audit_contest_scoring, score_contest_picks

logger = structlog.get_logger()


async def _rescore_contest_async(game_id: str, repository=None) -> dict:
    """
    Recompute rarity flags and points for every pick on a completed game.

    Raises:
        InvalidContestError: if the game is not final
    """
    if repository is None:
        async with async_session() as session:
            return await _rescore_contest_async(game_id, SqlPickemRepository(session))

    game = await repository.get_contest(game_id)
    if game is None:
        return {"game_id": game_id, "status": "not_found", "error": "Game not found"}

    picks = await repository.list_picks_for_contest(game_id)
    scored = score_contest_picks(game, picks, write_back=True)
    await repository.commit()

    return {
        "game_id": game_id,
        "status": "scored",
        "picks_scored": len(scored),
        "correct_picks": sum(1 for s in scored if s.score.is_correct),
        "voided": game.is_tie,
    }


async def _audit_season_scoring_async(season: int, fix: bool = False, repository=None) -> dict:
    """
    Compare stored pick points with the engine for every completed game of a season.

    Flow:
    1. Load the season's completed games
    2. Audit each game's picks
    3. With fix=True, rewrite the picks of games that have issues
    """
    if repository is None:
        async with async_session() as session:
            return await _audit_season_scoring_async(season, fix, SqlPickemRepository(session))

    games = await repository.list_contests_for_season(season)
    completed = [g for g in games if g.is_completed]

    games_with_issues = 0
    issues_found = 0
    games_fixed = 0
    errors = 0

    for game in completed:
        try:
            picks = await repository.list_picks_for_contest(game.game_id)
            issues = audit_contest_scoring(game, picks)
            if not issues:
                continue

            games_with_issues += 1
            issues_found += len(issues)
            logger.warning(
                "Incorrect scoring found",
                game_id=game.game_id,
                matchup=game.matchup,
                week=game.week,
                issues=issues,
            )

            if fix:
                score_contest_picks(game, picks, write_back=True)
                games_fixed += 1

        except Exception as e:
            logger.error("Failed to audit game", game_id=game.game_id, error=str(e))
            errors += 1

    if fix and games_fixed:
        await repository.commit()

    return {
        "season": season,
        "games_checked": len(completed),
        "games_with_issues": games_with_issues,
        "issues_found": issues_found,
        "games_fixed": games_fixed,
        "errors": errors,
        "status": "completed",
    }


@celery_app.task(name="pickem.tasks.scoring.rescore_contest")
def rescore_contest(game_id: str) -> dict:
    """
    Rescore all picks on one game.

    Run when a final score is entered or corrected.
    """
    logger.info("Rescoring contest", game_id=game_id)

    result = asyncio.run(_rescore_contest_async(game_id))

    logger.info("Completed contest rescoring", **result)
    return result


@celery_app.task(name="pickem.tasks.scoring.audit_season_scoring")
def audit_season_scoring(season: int | None = None, fix: bool = False) -> dict:
    """Audit (and optionally repair) stored pick points for a season."""
    season = season or settings.current_season
    logger.info("Starting scoring audit", season=season, fix=fix)

    result = asyncio.run(_audit_season_scoring_async(season, fix))

    logger.info("Completed scoring audit", **result)
    return result
