"""Leaderboard Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class StandingsEntryResponse(BaseModel):
    """One ranked user on a leaderboard."""

    model_config = ConfigDict(from_attributes=True)

    rank: int = Field(ge=1)
    user_id: str
    username: str | None = None
    points: int
    correct: int
    total: int = Field(description="Graded picks; ties excluded")
    losses: int
    win_pct: float = Field(ge=0, le=100, description="Correct picks as a percentage")
    record: str = Field(description="W-L")
    current_streak: int | None = None
    max_streak: int | None = None


class WeeklyLeaderboardResponse(BaseModel):
    """Live standings for one week."""

    week: int
    season: int
    season_type: str
    entries: list[StandingsEntryResponse]


class SeasonLeaderboardResponse(BaseModel):
    """Standings across a season."""

    season: int
    entries: list[StandingsEntryResponse]
