"""Fantasy points API endpoints."""

from fastapi import APIRouter

from pickem.schemas.fantasy import FantasyPointsRequest, FantasyPointsResponse
from pickem.services.scoring.fantasy import calculate_all_formats, calculate_fantasy_points

router = APIRouter(prefix="/fantasy")


@router.post("/points", response_model=FantasyPointsResponse)
async def fantasy_points(request: FantasyPointsRequest) -> FantasyPointsResponse:
    """
    Calculate fantasy points for a stat line.

    Returns all three formats unless `scoring_format` selects one.
    """
    if request.scoring_format:
        points = calculate_fantasy_points(request.stats, request.scoring_format)
        return FantasyPointsResponse(**{request.scoring_format: points})

    return FantasyPointsResponse(**calculate_all_formats(request.stats))
