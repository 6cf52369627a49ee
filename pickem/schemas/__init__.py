"""Pydantic schemas for API request/response models."""

from pickem.schemas.leaderboard import (
    StandingsEntryResponse,
    WeeklyLeaderboardResponse,
    SeasonLeaderboardResponse,
)
from pickem.schemas.awards import AwardResponse, PeriodAwardsResponse
from pickem.schemas.fantasy import FantasyStatLine, FantasyPointsRequest, FantasyPointsResponse

__all__ = [
    "StandingsEntryResponse",
    "WeeklyLeaderboardResponse",
    "SeasonLeaderboardResponse",
    "AwardResponse",
    "PeriodAwardsResponse",
    "FantasyStatLine",
    "FantasyPointsRequest",
    "FantasyPointsResponse",
]
