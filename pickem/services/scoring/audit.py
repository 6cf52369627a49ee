"""Audit stored pick points against what the engine computes."""

from typing import Sequence

from pickem.services.scoring.pick_score import score_contest_picks


def _stored_rarity(pick) -> tuple:
    return (
        bool(pick.solo_pick),
        bool(pick.solo_lock),
        bool(pick.super_bonus),
        pick.bonus_points or 0,
    )


def audit_contest_scoring(game, picks: Sequence) -> list[str]:
    """
    Compare persisted pick points, bonus points and rarity flags with a fresh
    computation.

    Returns:
        Human-readable issues; empty when the stored scoring is correct

    Raises:
        InvalidContestError: if the game is not final
    """
    issues = []
    for scored in score_contest_picks(game, picks):
        pick = scored.pick
        stored = pick.pick_points or 0
        expected = scored.score.total_points
        stored_rarity = _stored_rarity(pick)
        expected_rarity = (
            scored.flags.solo_pick,
            scored.flags.solo_lock,
            scored.flags.super_bonus,
            scored.score.bonus_points,
        )

        if stored == expected and stored_rarity == expected_rarity:
            continue

        if scored.voided:
            issues.append(f"pick {pick.pick_id}: {stored} points on a tie game, expected 0")
        elif stored == expected:
            issues.append(
                f"pick {pick.pick_id}: stored solo_pick/solo_lock/super_bonus/bonus "
                f"{stored_rarity}, expected {expected_rarity}"
            )
        elif scored.score.is_correct and stored <= 0:
            issues.append(f"pick {pick.pick_id}: winning pick has {stored} points, expected {expected}")
        elif pick.is_lock and not scored.score.is_correct:
            issues.append(f"pick {pick.pick_id}: losing lock has {stored} points, expected {expected}")
        else:
            issues.append(f"pick {pick.pick_id}: has {stored} points, expected {expected}")

    return issues
