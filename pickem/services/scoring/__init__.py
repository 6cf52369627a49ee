"""Pick scoring, rarity classification, tiebreaker and fantasy point services."""

from pickem.services.scoring.validation import validate_game_for_scoring, determine_winner
from pickem.services.scoring.rarity import RarityFlags, compute_rarity, classify_contest_picks
from pickem.services.scoring.pick_score import (
    PickScore,
    ScoredPick,
    calculate_pick_score,
    score_pick,
    score_contest_picks,
)
from pickem.services.scoring.tiebreaker import (
    UserPeriodStats,
    compare_users,
    sort_users_by_tiebreaker,
)
from pickem.services.scoring.fantasy import calculate_fantasy_points, calculate_all_formats
from pickem.services.scoring.audit import audit_contest_scoring

__all__ = [
    "validate_game_for_scoring",
    "determine_winner",
    "RarityFlags",
    "compute_rarity",
    "classify_contest_picks",
    "PickScore",
    "ScoredPick",
    "calculate_pick_score",
    "score_pick",
    "score_contest_picks",
    "UserPeriodStats",
    "compare_users",
    "sort_users_by_tiebreaker",
    "calculate_fantasy_points",
    "calculate_all_formats",
    "audit_contest_scoring",
]
