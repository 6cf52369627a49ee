"""Awards API endpoints."""

from fastapi import APIRouter, Depends

from pickem.api.dependencies import get_period, get_repository
from pickem.schemas.awards import AwardResponse, PeriodAwardsResponse
from pickem.services.awards import AWARD_TYPES, WeeklyAwardsProcessor
from pickem.services.period import Period

router = APIRouter()


@router.get("/awards", response_model=PeriodAwardsResponse)
async def get_awards(
    period: Period = Depends(get_period),
    repository=Depends(get_repository),
) -> PeriodAwardsResponse:
    """Stored awards for a week along with its processing status."""
    processor = WeeklyAwardsProcessor(repository)
    status = await processor.get_period_status(period)
    awards = await repository.list_awards_for_period(period)

    return PeriodAwardsResponse(
        week=period.week,
        season=period.season,
        season_type=period.season_type,
        status=status.value,
        awards=[
            AwardResponse.model_validate(a).model_copy(
                update={"display_name": AWARD_TYPES.get(a.award_type, (None, None))[0]}
            )
            for a in awards
        ],
    )
