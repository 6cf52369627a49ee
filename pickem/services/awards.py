"""Weekly awards: period state, award derivation and idempotent persistence."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence

import structlog

from pickem.exceptions import PeriodNotCompletedError
from pickem.services.period import Period
from pickem.services.scoring.tiebreaker import (
    UserPeriodStats,
    find_tiebreaker_violations,
    log_tiebreaker_analysis,
    sort_users_by_tiebreaker,
)
from pickem.services.standings import aggregate_user_stats

logger = structlog.get_logger()

# award_type -> (display name, description)
AWARD_TYPES: dict[str, tuple[str, str]] = {
    "top_scorer": ("1st Place", "Weekly Winner"),
    "second_scorer": ("2nd Place", "Runner Up"),
    "third_scorer": ("3rd Place", "Third Place"),
    "lowest_scorer": ("Lowest Score", "Last Place"),
    "perfect_week": ("Perfect Week", "All Correct"),
    "cold_week": ("Cold Week", "All Wrong"),
    "negative_points": ("Negative Points", "Scored Below Zero"),
}

# Placement awards, best first
RANK_AWARDS: tuple[str, ...] = ("top_scorer", "second_scorer", "third_scorer")

# Awards every qualifying user with at least one graded pick receives
CONDITION_AWARDS: dict[str, Callable[[UserPeriodStats], bool]] = {
    "perfect_week": lambda s: s.correct == s.total,
    "cold_week": lambda s: s.correct == 0,
    "negative_points": lambda s: s.points < 0,
}


class PeriodStatus(str, Enum):
    PENDING = "pending"
    COMPLETED_UNPROCESSED = "completed_unprocessed"
    PROCESSED = "processed"


@dataclass
class PeriodCompletion:
    total_games: int
    completed_games: int

    @property
    def all_completed(self) -> bool:
        # A period without games never completes
        return self.total_games > 0 and self.completed_games == self.total_games

    @property
    def pending_games(self) -> int:
        return self.total_games - self.completed_games


@dataclass(frozen=True)
class AwardCandidate:
    """An award decided for a user, not yet persisted."""

    user_id: str
    award_type: str
    points: int
    record: str


@dataclass
class PeriodAwardsResult:
    """Outcome of one processing run for a period."""

    period: Period
    status: str  # processed, skipped, failed
    awards: list = field(default_factory=list)
    excluded_users: list[str] = field(default_factory=list)
    users_ranked: int = 0
    error: str | None = None


def _candidate(stats: UserPeriodStats, award_type: str) -> AwardCandidate:
    return AwardCandidate(
        user_id=stats.user_id,
        award_type=award_type,
        points=stats.points,
        record=stats.record,
    )


def derive_awards(
    stats: Sequence[UserPeriodStats],
    ranked: Sequence[UserPeriodStats] | None = None,
) -> list[AwardCandidate]:
    """
    Decide the awards for a period.

    - 1st/2nd/3rd place go to the top of the tiebreaker order, only as many
      as there are users
    - Lowest score goes to the minimum points; on a points tie the user
      encountered first in `stats` wins it
    - Perfect week, cold week and negative points go to every qualifying user
      who had at least one graded pick

    Args:
        stats: Per-user aggregates in encounter order
        ranked: The same users already sorted by the tiebreaker (computed if omitted)
    """
    if not stats:
        return []

    if ranked is None:
        ranked = sort_users_by_tiebreaker(stats)

    awards = [
        _candidate(user_stats, award_type)
        for award_type, user_stats in zip(RANK_AWARDS, ranked)
    ]

    lowest = stats[0]
    for user_stats in stats[1:]:
        if user_stats.points < lowest.points:
            lowest = user_stats
    awards.append(_candidate(lowest, "lowest_scorer"))

    for award_type, qualifies in CONDITION_AWARDS.items():
        awards.extend(
            _candidate(user_stats, award_type)
            for user_stats in stats
            if user_stats.total > 0 and qualifies(user_stats)
        )

    return awards


class WeeklyAwardsProcessor:
    """
    Computes and persists weekly awards.

    A period moves PENDING -> COMPLETED_UNPROCESSED once all of its games are
    completed, and COMPLETED_UNPROCESSED -> PROCESSED when its awards are
    stored. Processing an already processed period is a no-op.

    Runs for the same period must not overlap; the repository's atomic
    insert turns an accidental overlap into a skipped run.
    """

    def __init__(self, repository):
        self.repository = repository

    async def check_period_completion(self, period: Period) -> PeriodCompletion:
        games = await self.repository.list_contests_for_period(period)
        return PeriodCompletion(
            total_games=len(games),
            completed_games=sum(1 for g in games if g.status == "completed"),
        )

    async def get_period_status(self, period: Period) -> PeriodStatus:
        completion = await self.check_period_completion(period)
        if not completion.all_completed:
            return PeriodStatus.PENDING
        if await self.repository.awards_exist_for_period(period):
            return PeriodStatus.PROCESSED
        return PeriodStatus.COMPLETED_UNPROCESSED

    async def process_period(self, period: Period) -> PeriodAwardsResult:
        """
        Compute and persist awards for a completed period.

        Flow:
        1. Verify every game is completed and awards do not exist yet
        2. Rescore every pick from scratch and aggregate per user
        3. Rank with the tiebreaker and derive awards
        4. Re-check for existing awards, then insert atomically

        Raises:
            PeriodNotCompletedError: if the period has no games or unfinished games
            InvalidContestError: if a completed game is missing its final score
        """
        games = await self.repository.list_contests_for_period(period)
        completion = PeriodCompletion(
            total_games=len(games),
            completed_games=sum(1 for g in games if g.status == "completed"),
        )
        if not completion.all_completed:
            raise PeriodNotCompletedError(
                period, completion.completed_games, completion.total_games
            )

        if await self.repository.awards_exist_for_period(period):
            logger.info("Awards already processed", period=str(period))
            return PeriodAwardsResult(period=period, status="skipped")

        picks = await self.repository.list_picks_for_period(period)
        aggregation = aggregate_user_stats(games, picks)

        if aggregation.excluded_users:
            logger.warning(
                "Users excluded from awards run",
                period=str(period),
                excluded_users=aggregation.excluded_users,
            )

        ranked = sort_users_by_tiebreaker(aggregation.stats)
        log_tiebreaker_analysis(ranked, period)

        violations = find_tiebreaker_violations(ranked)
        if violations:
            logger.error("Tiebreaker validation failed", period=str(period), violations=violations)

        candidates = derive_awards(aggregation.stats, ranked)

        result = PeriodAwardsResult(
            period=period,
            status="processed",
            excluded_users=aggregation.excluded_users,
            users_ranked=len(ranked),
        )

        # Re-check right before writing in case another run finished meanwhile
        if await self.repository.awards_exist_for_period(period):
            logger.info("Awards persisted by another run, skipping", period=str(period))
            result.status = "skipped"
            return result

        try:
            awards = await self.repository.insert_awards_if_absent(
                period, candidates, users_ranked=len(ranked)
            )
        except Exception as e:
            logger.error("Failed to persist awards", period=str(period), error=str(e))
            result.status = "failed"
            result.error = str(e)
            return result

        if awards is None:
            result.status = "skipped"
            return result

        result.awards = awards
        logger.info(
            "Processed weekly awards",
            period=str(period),
            awards_created=len(awards),
            users_ranked=len(ranked),
            excluded_users=len(aggregation.excluded_users),
        )
        return result

    async def process_completed_periods(self, season: int) -> list[PeriodAwardsResult]:
        """
        Process every completed, unprocessed period of a season in play order.

        A failure in one period is logged and does not stop the others.
        """
        results = []
        for period in await self.repository.list_periods(season):
            try:
                status = await self.get_period_status(period)
                if status is not PeriodStatus.COMPLETED_UNPROCESSED:
                    logger.debug("Skipping period", period=str(period), status=status.value)
                    continue

                results.append(await self.process_period(period))
            except Exception as e:
                logger.error("Error processing awards", period=str(period), error=str(e))
                results.append(PeriodAwardsResult(period=period, status="failed", error=str(e)))

        processed = sum(1 for r in results if r.status == "processed")
        logger.info("Completed-weeks sweep finished", season=season, periods_processed=processed)
        return results

    async def get_next_period(self, period: Period) -> Period | None:
        """The period after `period` in the same season, if it has games."""
        periods = await self.repository.list_periods(period.season)
        later = [p for p in periods if p.sort_key > period.sort_key]
        return later[0] if later else None
