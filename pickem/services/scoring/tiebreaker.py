"""
Tiebreaker ordering shared by live standings and weekly awards.

Users are ranked by, in order:
1. Points (descending)
2. Win percentage (descending, 0 when no picks were graded)
3. Correct picks (descending)
4. Losses (ascending)

Users equal on all four keep their input order.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable

import structlog

logger = structlog.get_logger()


@dataclass
class UserPeriodStats:
    """Points and record for one user over a period. Rebuilt on every run."""

    user_id: str
    points: int = 0
    correct: int = 0
    total: int = 0

    @property
    def losses(self) -> int:
        return self.total - self.correct

    @property
    def win_pct(self) -> Fraction:
        """Exact win percentage so equal ratios (2/4, 1/2) compare equal."""
        if self.total <= 0:
            return Fraction(0)
        return Fraction(self.correct, self.total)

    @property
    def record(self) -> str:
        return f"{self.correct}-{self.losses}"


def tiebreaker_key(stats: UserPeriodStats) -> tuple:
    """Sort key where smaller means better rank."""
    return (-stats.points, -stats.win_pct, -stats.correct, stats.losses)


def compare_users(a: UserPeriodStats, b: UserPeriodStats) -> int:
    """
    Compare two users for ranking.

    Returns:
        Negative if a ranks above b, positive if b ranks above a, 0 for a true tie
    """
    key_a = tiebreaker_key(a)
    key_b = tiebreaker_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_users_by_tiebreaker(stats: Iterable[UserPeriodStats]) -> list[UserPeriodStats]:
    """Return users best-first. The sort is stable, so true ties keep input order."""
    return sorted(stats, key=tiebreaker_key)


def find_tiebreaker_violations(sorted_stats: list[UserPeriodStats]) -> list[str]:
    """List adjacent pairs that are ranked out of tiebreaker order."""
    violations = []
    for current, following in zip(sorted_stats, sorted_stats[1:]):
        if compare_users(current, following) > 0:
            violations.append(
                f"{current.user_id} ({current.points}pts, {current.record}) ranked above "
                f"{following.user_id} ({following.points}pts, {following.record})"
            )
    return violations


def log_tiebreaker_analysis(sorted_stats: list[UserPeriodStats], period) -> None:
    """Log the ranked table for a period."""
    logger.info("Tiebreaker analysis", period=str(period), users=len(sorted_stats))
    for rank, stats in enumerate(sorted_stats, start=1):
        logger.debug(
            "Ranked user",
            period=str(period),
            rank=rank,
            user_id=stats.user_id,
            points=stats.points,
            record=stats.record,
            win_pct=round(float(stats.win_pct) * 100, 2),
        )
