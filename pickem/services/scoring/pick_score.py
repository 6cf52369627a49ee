"""Point values for individual picks."""

from dataclasses import dataclass
from typing import Sequence

import structlog

from pickem.exceptions import InvalidPickError
from pickem.services.scoring.rarity import RarityFlags, compute_rarity
from pickem.services.scoring.validation import determine_winner

logger = structlog.get_logger()

# Rarity bonuses are disabled for weeks 1-2
BONUS_START_WEEK = 3

# (is_correct, is_lock) -> base points
BASE_POINTS = {
    (True, False): 1,
    (True, True): 2,
    (False, False): 0,
    (False, True): -2,
}

SUPER_BONUS_POINTS = 5
SOLO_LOCK_BONUS_POINTS = 2
SOLO_PICK_BONUS_POINTS = 2


@dataclass(frozen=True)
class PickScore:
    """Scored value of one pick."""

    is_correct: bool
    base_points: int
    bonus_points: int
    total_points: int

    @property
    def breakdown(self) -> str:
        return (
            f"base={self.base_points}, bonus={self.bonus_points}, "
            f"total={self.total_points}, correct={self.is_correct}"
        )


# Score of any pick on a tied game
VOID_SCORE = PickScore(is_correct=False, base_points=0, bonus_points=0, total_points=0)


@dataclass
class ScoredPick:
    """A pick with its rarity classification and score."""

    pick: object
    game: object
    flags: RarityFlags
    score: PickScore
    voided: bool = False  # game ended in a tie


def calculate_pick_score(
    is_correct: bool,
    is_lock: bool,
    week: int,
    solo_pick: bool = False,
    solo_lock: bool = False,
    super_bonus: bool = False,
) -> PickScore:
    """
    Compute base + bonus points for a pick.

    Base points: correct 1, correct lock 2, wrong 0, wrong lock -2.
    Bonus points apply only to correct picks from BONUS_START_WEEK on:
    super bonus 5, otherwise solo lock 2, otherwise solo pick 2.
    """
    base_points = BASE_POINTS[(bool(is_correct), bool(is_lock))]

    bonus_points = 0
    if is_correct and week >= BONUS_START_WEEK:
        if super_bonus:
            bonus_points = SUPER_BONUS_POINTS
        elif solo_lock:
            bonus_points = SOLO_LOCK_BONUS_POINTS
        elif solo_pick:
            bonus_points = SOLO_PICK_BONUS_POINTS

    return PickScore(
        is_correct=bool(is_correct),
        base_points=base_points,
        bonus_points=bonus_points,
        total_points=base_points + bonus_points,
    )


def score_pick(pick, game) -> PickScore:
    """
    Score a pick against its completed game using the pick's stored rarity flags.

    Raises:
        InvalidContestError: if the game is not final
        InvalidPickError: if the pick belongs to another game
    """
    if pick.game_id != game.game_id:
        raise InvalidPickError(
            f"Pick {pick.pick_id} is for game {pick.game_id}, not {game.game_id}"
        )

    winner = determine_winner(game)
    if winner is None:
        return VOID_SCORE

    return calculate_pick_score(
        is_correct=pick.picked_team == winner,
        is_lock=bool(pick.is_lock),
        week=game.week,
        solo_pick=bool(pick.solo_pick),
        solo_lock=bool(pick.solo_lock),
        super_bonus=bool(pick.super_bonus),
    )


def apply_pick_score(pick, score: PickScore) -> None:
    """Write computed points back onto a pick."""
    pick.bonus_points = score.bonus_points
    pick.pick_points = score.total_points


def score_contest_picks(game, picks: Sequence, write_back: bool = False) -> list[ScoredPick]:
    """
    Classify and score every pick on a completed game.

    Args:
        game: Completed game
        picks: All active picks for the game
        write_back: Also set rarity flags and points on the pick objects

    Returns:
        ScoredPick for each pick, in input order
    """
    flags = compute_rarity(game, picks)
    voided = game.home_score == game.away_score

    scored = []
    for pick, pick_flags in zip(picks, flags):
        if voided:
            score = VOID_SCORE
        else:
            score = calculate_pick_score(
                is_correct=pick_flags.is_correct,
                is_lock=bool(pick.is_lock),
                week=game.week,
                solo_pick=pick_flags.solo_pick,
                solo_lock=pick_flags.solo_lock,
                super_bonus=pick_flags.super_bonus,
            )

        if write_back:
            pick.solo_pick = pick_flags.solo_pick
            pick.solo_lock = pick_flags.solo_lock
            pick.super_bonus = pick_flags.super_bonus
            apply_pick_score(pick, score)

        logger.debug(
            "Scored pick",
            pick_id=pick.pick_id,
            game_id=game.game_id,
            week=game.week,
            picked_team=pick.picked_team,
            is_lock=bool(pick.is_lock),
            breakdown=score.breakdown,
        )
        scored.append(ScoredPick(pick=pick, game=game, flags=pick_flags, score=score, voided=voided))

    return scored
