"""Fantasy scoring Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class FantasyStatLine(BaseModel):
    """Raw counting stats for one player in one week. Missing stats count as 0."""

    passing_yards: int = 0
    passing_tds: int = 0
    interceptions: int = 0
    rushing_yards: int = 0
    rushing_tds: int = 0
    receptions: int = 0
    receiving_yards: int = 0
    receiving_tds: int = 0
    fumbles_lost: int = 0
    two_point_conversions: int = 0
    fg_made_0_39: int = 0
    fg_made_40_49: int = 0
    fg_made_50_plus: int = 0
    fg_missed: int = 0
    xp_made: int = 0
    xp_missed: int = 0
    dst_sacks: int = 0
    dst_interceptions: int = 0
    dst_fumble_recoveries: int = 0
    dst_safeties: int = 0
    dst_tds: int = 0
    dst_blocked_kicks: int = 0
    dst_points_allowed: int | None = Field(
        default=None, ge=0, description="Only set for team defenses"
    )


class FantasyPointsRequest(BaseModel):
    """Stat line to score, optionally for a single format."""

    stats: FantasyStatLine
    scoring_format: Literal["ppr", "half_ppr", "standard"] | None = None


class FantasyPointsResponse(BaseModel):
    """Fantasy points per scoring format."""

    ppr: float | None = None
    half_ppr: float | None = None
    standard: float | None = None
