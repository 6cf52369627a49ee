"""Award Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AwardResponse(BaseModel):
    """A persisted award."""

    model_config = ConfigDict(from_attributes=True)

    award_id: str
    user_id: str
    week: int
    season: int
    season_type: str
    award_type: str
    display_name: str | None = None
    points: int
    record: str
    created_at: datetime | None = None


class PeriodAwardsResponse(BaseModel):
    """Awards for one week with its processing state."""

    week: int
    season: int
    season_type: str
    status: str = Field(description="pending, completed_unprocessed or processed")
    awards: list[AwardResponse]
