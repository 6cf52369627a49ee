"""Fantasy football points for PPR, Half PPR and Standard formats."""

import math
from decimal import Decimal
from typing import Literal

ScoringFormat = Literal["ppr", "half_ppr", "standard"]

SCORING_FORMATS: tuple[str, ...] = ("ppr", "half_ppr", "standard")

# Passing
PASSING_YARDS_PER_POINT = 25
PASSING_TD = 4
INTERCEPTION = -2

# Rushing
RUSHING_YARDS_PER_POINT = 10
RUSHING_TD = 6

# Receiving
RECEIVING_YARDS_PER_POINT = 10
RECEIVING_TD = 6
RECEPTION_POINTS = {
    "ppr": 1.0,
    "half_ppr": 0.5,
    "standard": 0.0,
}

# Kicking
FG_0_39 = 3
FG_40_49 = 4
FG_50_PLUS = 5
FG_MISSED = -1
XP_MADE = 1
XP_MISSED = -1

# Defense / special teams
DST_SACK = 1
DST_INTERCEPTION = 2
DST_FUMBLE_RECOVERY = 2
DST_SAFETY = 2
DST_TD = 6
DST_BLOCKED_KICK = 2

# (max points allowed, fantasy points), ascending; first tier with max >= allowed wins
DST_POINTS_ALLOWED_TIERS: tuple[tuple[float, int], ...] = (
    (0, 10),          # shutout
    (6, 7),
    (13, 4),
    (20, 1),
    (27, 0),
    (34, -1),
    (math.inf, -4),   # 35+
)

# Misc
FUMBLE_LOST = -2
TWO_POINT_CONVERSION = 2


def _stat(stats, name: str) -> float:
    """Read a counting stat from a model, schema or dict; missing counts as 0."""
    if isinstance(stats, dict):
        value = stats.get(name)
    else:
        value = getattr(stats, name, None)
    return value or 0


def _passing_points(stats) -> float:
    return (
        _stat(stats, "passing_yards") / PASSING_YARDS_PER_POINT
        + _stat(stats, "passing_tds") * PASSING_TD
        + _stat(stats, "interceptions") * INTERCEPTION
    )


def _rushing_points(stats) -> float:
    return (
        _stat(stats, "rushing_yards") / RUSHING_YARDS_PER_POINT
        + _stat(stats, "rushing_tds") * RUSHING_TD
    )


def _receiving_points(stats, scoring_format: str) -> float:
    return (
        _stat(stats, "receiving_yards") / RECEIVING_YARDS_PER_POINT
        + _stat(stats, "receiving_tds") * RECEIVING_TD
        + _stat(stats, "receptions") * RECEPTION_POINTS[scoring_format]
    )


def _kicking_points(stats) -> float:
    return (
        _stat(stats, "fg_made_0_39") * FG_0_39
        + _stat(stats, "fg_made_40_49") * FG_40_49
        + _stat(stats, "fg_made_50_plus") * FG_50_PLUS
        + _stat(stats, "fg_missed") * FG_MISSED
        + _stat(stats, "xp_made") * XP_MADE
        + _stat(stats, "xp_missed") * XP_MISSED
    )


def points_allowed_score(points_allowed: int | None) -> int:
    """Fantasy points for a defense given the points it allowed (0 when unknown)."""
    if points_allowed is None:
        return 0
    for max_allowed, points in DST_POINTS_ALLOWED_TIERS:
        if points_allowed <= max_allowed:
            return points
    return 0


def _defense_points(stats) -> float:
    if isinstance(stats, dict):
        points_allowed = stats.get("dst_points_allowed")
    else:
        points_allowed = getattr(stats, "dst_points_allowed", None)

    return (
        _stat(stats, "dst_sacks") * DST_SACK
        + _stat(stats, "dst_interceptions") * DST_INTERCEPTION
        + _stat(stats, "dst_fumble_recoveries") * DST_FUMBLE_RECOVERY
        + _stat(stats, "dst_safeties") * DST_SAFETY
        + _stat(stats, "dst_tds") * DST_TD
        + _stat(stats, "dst_blocked_kicks") * DST_BLOCKED_KICK
        + points_allowed_score(points_allowed)
    )


def _misc_points(stats) -> float:
    return (
        _stat(stats, "fumbles_lost") * FUMBLE_LOST
        + _stat(stats, "two_point_conversions") * TWO_POINT_CONVERSION
    )


def calculate_fantasy_points(stats, scoring_format: ScoringFormat) -> float:
    """
    Calculate total fantasy points for a stat line in one format.

    Args:
        stats: Stat line (FantasyPlayerStats row, pydantic schema or dict)
        scoring_format: "ppr", "half_ppr" or "standard"

    Returns:
        Points rounded to 2 decimal places

    Raises:
        ValueError: for an unknown scoring format
    """
    if scoring_format not in RECEPTION_POINTS:
        raise ValueError(f"Unknown scoring format: {scoring_format}")

    total = (
        _passing_points(stats)
        + _rushing_points(stats)
        + _receiving_points(stats, scoring_format)
        + _kicking_points(stats)
        + _defense_points(stats)
        + _misc_points(stats)
    )
    return round(total, 2)


def calculate_all_formats(stats) -> dict[str, float]:
    """Calculate points in all three formats from one stat line."""
    return {fmt: calculate_fantasy_points(stats, fmt) for fmt in SCORING_FORMATS}


def apply_fantasy_points(row) -> dict[str, float]:
    """Store all three format totals on a FantasyPlayerStats row."""
    points = calculate_all_formats(row)
    row.points_ppr = Decimal(str(points["ppr"]))
    row.points_half_ppr = Decimal(str(points["half_ppr"]))
    row.points_standard = Decimal(str(points["standard"]))
    return points
