"""Rarity classification: solo picks, solo locks and super bonuses."""

from dataclasses import dataclass
from typing import Sequence

import structlog

from pickem.exceptions import InvalidPickError
from pickem.services.scoring.validation import determine_winner

logger = structlog.get_logger()


@dataclass(frozen=True)
class RarityFlags:
    """Correctness and rarity of one pick within its game."""

    is_correct: bool = False
    solo_pick: bool = False
    solo_lock: bool = False
    super_bonus: bool = False


# Every pick on a tied game
NO_RARITY = RarityFlags()


def compute_rarity(game, picks: Sequence) -> list[RarityFlags]:
    """
    Classify every pick on a completed game.

    Whether a pick is the only correct one cannot be known until all picks on
    the game have been seen, so the winners are counted in a first pass and
    the flags assigned in a second.

    - solo_pick: the pick is correct and no other pick on the game is correct
    - solo_lock: the pick is a correct lock and no other lock is correct
      (unlocked correct picks do not disqualify it)
    - super_bonus: both of the above

    Args:
        game: Completed game with final scores
        picks: All active picks submitted for the game

    Returns:
        RarityFlags for each pick, in input order

    Raises:
        InvalidContestError: if the game is not final
        InvalidPickError: if a pick belongs to another game
    """
    winner = determine_winner(game)

    for pick in picks:
        if pick.game_id != game.game_id:
            raise InvalidPickError(
                f"Pick {pick.pick_id} is for game {pick.game_id}, not {game.game_id}"
            )

    # Ties void the game: nobody is correct
    if winner is None:
        return [NO_RARITY for _ in picks]

    correct_count = sum(1 for p in picks if p.picked_team == winner)
    correct_lock_count = sum(1 for p in picks if p.picked_team == winner and p.is_lock)

    flags = []
    for pick in picks:
        is_correct = pick.picked_team == winner
        solo_pick = is_correct and correct_count == 1
        solo_lock = is_correct and bool(pick.is_lock) and correct_lock_count == 1
        flags.append(
            RarityFlags(
                is_correct=is_correct,
                solo_pick=solo_pick,
                solo_lock=solo_lock,
                super_bonus=solo_pick and solo_lock,
            )
        )

    return flags


def classify_contest_picks(game, picks: Sequence) -> list:
    """
    Attach rarity flags to each pick of a completed game.

    Safe to re-run: the same game and picks always produce the same flags.
    Persisting the updated picks is the caller's responsibility.
    """
    flags = compute_rarity(game, picks)

    for pick, pick_flags in zip(picks, flags):
        pick.solo_pick = pick_flags.solo_pick
        pick.solo_lock = pick_flags.solo_lock
        pick.super_bonus = pick_flags.super_bonus

    logger.debug(
        "Classified picks",
        game_id=game.game_id,
        picks=len(picks),
        correct=sum(1 for f in flags if f.is_correct),
        solo_picks=sum(1 for f in flags if f.solo_pick),
        solo_locks=sum(1 for f in flags if f.solo_lock),
    )
    return list(picks)
