"""Per-user aggregation and leaderboards.

Aggregates are rebuilt from picks and final scores on every call; nothing
here reads the stored pick points.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import structlog

from pickem.exceptions import ScoringError
from pickem.services.scoring.pick_score import ScoredPick, score_contest_picks
from pickem.services.scoring.tiebreaker import UserPeriodStats, sort_users_by_tiebreaker

logger = structlog.get_logger()


@dataclass
class UserAggregation:
    """Result of aggregating a set of games and picks per user."""

    # Users in order of their first pick
    stats: list[UserPeriodStats] = field(default_factory=list)
    excluded_users: list[str] = field(default_factory=list)
    scored_picks: dict[str, list[ScoredPick]] = field(default_factory=dict)


@dataclass
class StandingsEntry:
    """One row of a leaderboard."""

    rank: int
    user_id: str
    username: str | None
    points: int
    correct: int
    total: int
    losses: int
    win_pct: float
    record: str
    current_streak: int | None = None
    max_streak: int | None = None


@dataclass
class StreakSummary:
    current_streak: int = 0
    max_streak: int = 0


def aggregate_user_stats(
    games: Iterable,
    picks: Sequence,
    skip_unfinished: bool = False,
) -> UserAggregation:
    """
    Score every game from scratch and sum points and record per user.

    Picks on tied games add 0 points and count toward neither correct nor
    total. A failure while summing one user's picks excludes that user and
    is logged; the other users are still returned.

    Args:
        games: Games the picks may reference
        picks: Active picks for those games
        skip_unfinished: Ignore picks on games that are not completed yet
            (live standings). When False an unfinished game raises.

    Raises:
        InvalidContestError: if a game is not scoreable and skip_unfinished is False
    """
    games_by_id = {game.game_id: game for game in games}

    picks_by_game: dict[str, list] = defaultdict(list)
    picks_by_user: dict[str, list] = defaultdict(list)
    for pick in picks:
        picks_by_game[pick.game_id].append(pick)
        picks_by_user[pick.user_id].append(pick)

    # Pass 1: classify and score each game with its full set of picks
    scored_by_pick: dict[str, ScoredPick] = {}
    unfinished: set[str] = set()
    for game_id, game_picks in picks_by_game.items():
        game = games_by_id.get(game_id)
        if game is None:
            continue
        if skip_unfinished and not game.has_final_score:
            unfinished.add(game_id)
            continue
        for scored in score_contest_picks(game, game_picks):
            scored_by_pick[scored.pick.pick_id] = scored

    # Pass 2: per-user totals
    aggregation = UserAggregation()
    for user_id, user_picks in picks_by_user.items():
        try:
            stats = UserPeriodStats(user_id=user_id)
            user_scored = []
            for pick in user_picks:
                if pick.game_id in unfinished:
                    continue
                scored = scored_by_pick.get(pick.pick_id)
                if scored is None:
                    raise ScoringError(
                        f"Pick {pick.pick_id} references unknown game {pick.game_id}"
                    )
                user_scored.append(scored)
                if scored.voided:
                    continue
                stats.total += 1
                stats.points += scored.score.total_points
                if scored.score.is_correct:
                    stats.correct += 1

            aggregation.stats.append(stats)
            aggregation.scored_picks[user_id] = user_scored

        except Exception as e:
            logger.error("Failed to aggregate stats for user", user_id=user_id, error=str(e))
            aggregation.excluded_users.append(user_id)

    return aggregation


def calculate_streaks(scored_picks: Sequence[ScoredPick]) -> StreakSummary:
    """
    Current and longest run of correct picks, in game-time order.

    Picks on tied games neither extend nor break a streak.
    """
    ordered = sorted(
        (s for s in scored_picks if not s.voided),
        key=lambda s: s.game.game_time,
    )

    summary = StreakSummary()
    running = 0
    for scored in ordered:
        if scored.score.is_correct:
            running += 1
            summary.max_streak = max(summary.max_streak, running)
        else:
            running = 0
    summary.current_streak = running
    return summary


def build_standings(
    stats: Iterable[UserPeriodStats],
    profiles: dict | None = None,
    streaks: dict[str, StreakSummary] | None = None,
) -> list[StandingsEntry]:
    """Rank users with the shared tiebreaker and label them with usernames."""
    profiles = profiles or {}
    streaks = streaks or {}

    entries = []
    for rank, user_stats in enumerate(sort_users_by_tiebreaker(stats), start=1):
        profile = profiles.get(user_stats.user_id)
        streak = streaks.get(user_stats.user_id)
        entries.append(
            StandingsEntry(
                rank=rank,
                user_id=user_stats.user_id,
                username=profile.username if profile else None,
                points=user_stats.points,
                correct=user_stats.correct,
                total=user_stats.total,
                losses=user_stats.losses,
                win_pct=round(float(user_stats.win_pct) * 100, 2),
                record=user_stats.record,
                current_streak=streak.current_streak if streak else None,
                max_streak=streak.max_streak if streak else None,
            )
        )
    return entries


async def get_weekly_standings(repository, period) -> list[StandingsEntry]:
    """Live leaderboard for one period; games still in play are ignored."""
    games = await repository.list_contests_for_period(period)
    picks = await repository.list_picks_for_period(period)
    aggregation = aggregate_user_stats(games, picks, skip_unfinished=True)
    profiles = await repository.list_profiles(s.user_id for s in aggregation.stats)
    return build_standings(aggregation.stats, profiles)


async def get_season_standings(repository, season: int) -> list[StandingsEntry]:
    """Season leaderboard across all completed games, with streaks."""
    games = await repository.list_contests_for_season(season)
    picks = await repository.list_picks_for_season(season)
    aggregation = aggregate_user_stats(games, picks, skip_unfinished=True)

    streaks = {
        user_id: calculate_streaks(scored)
        for user_id, scored in aggregation.scored_picks.items()
    }
    profiles = await repository.list_profiles(s.user_id for s in aggregation.stats)
    return build_standings(aggregation.stats, profiles, streaks)
