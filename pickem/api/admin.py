"""Admin API endpoints for manual tasks."""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from pickem.api.dependencies import get_period, get_repository
from pickem.config import settings
from pickem.exceptions import PickemError
from pickem.services.period import Period
from pickem.tasks.awards import _process_completed_weeks_async, _process_weekly_awards_async
from pickem.tasks.scoring import _audit_season_scoring_async, _rescore_contest_async

router = APIRouter(prefix="/admin", tags=["Admin"])


class TaskResult(BaseModel):
    """Task execution result."""
    task_id: str | None = None
    status: str
    message: str


@router.post("/contests/{game_id}/rescore", response_model=TaskResult)
async def trigger_contest_rescore(game_id: str, repository=Depends(get_repository)) -> TaskResult:
    """
    Recompute rarity flags and points for every pick on a completed game.

    Use after a final score is entered or corrected.
    """
    try:
        result = await _rescore_contest_async(game_id, repository)
    except PickemError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if result["status"] == "not_found":
        raise HTTPException(status_code=404, detail=result["error"])

    return TaskResult(
        status=result["status"],
        message=f"Scored {result['picks_scored']} picks, "
                f"{result['correct_picks']} correct."
                + (" Game ended in a tie." if result["voided"] else ""),
    )


@router.post("/awards/process", response_model=TaskResult)
async def trigger_weekly_awards(
    period: Period = Depends(get_period),
    repository=Depends(get_repository),
) -> TaskResult:
    """
    Compute and store awards for one completed week.

    Returns status "skipped" when the week already has awards.
    """
    try:
        result = await _process_weekly_awards_async(period, repository)
    except PickemError as e:
        raise HTTPException(status_code=409, detail=str(e))

    error_msg = result.get("error") or ""
    return TaskResult(
        status=result["status"],
        message=f"{result['period']}: {result['awards_created']} awards for "
                f"{result['users_ranked']} users, "
                f"{len(result['excluded_users'])} excluded."
                + (f" Error: {error_msg}" if error_msg else ""),
    )


@router.post("/awards/process-completed", response_model=TaskResult)
async def trigger_completed_weeks(
    season: int | None = Query(None, description="Season year (defaults to current)"),
    repository=Depends(get_repository),
) -> TaskResult:
    """Process every completed week of a season that has no awards yet."""
    result = await _process_completed_weeks_async(season or settings.current_season, repository)
    return TaskResult(
        status=result["status"],
        message=f"Processed {result['periods_processed']} weeks, "
                f"skipped {result['periods_skipped']}. "
                f"Errors: {result['errors']}",
    )


@router.post("/scoring/audit", response_model=TaskResult)
async def trigger_scoring_audit(
    season: int | None = Query(None, description="Season year (defaults to current)"),
    fix: bool = Query(False, description="Rewrite incorrect pick points"),
    repository=Depends(get_repository),
) -> TaskResult:
    """
    Compare stored pick points with a fresh computation for every completed game.

    With fix=true the picks of games with issues are rescored and saved.
    """
    result = await _audit_season_scoring_async(season or settings.current_season, fix, repository)
    return TaskResult(
        status=result["status"],
        message=f"Checked {result['games_checked']} games, "
                f"{result['issues_found']} issues in {result['games_with_issues']} games, "
                f"fixed {result['games_fixed']}. "
                f"Errors: {result['errors']}",
    )
