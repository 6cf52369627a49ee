"""Tests for rarity classification."""

import pytest

from pickem.exceptions import InvalidContestError, InvalidPickError
from pickem.services.scoring.rarity import NO_RARITY, classify_contest_picks, compute_rarity


class TestComputeRarity:
    """Two-pass solo pick / solo lock / super bonus detection."""

    def test_only_correct_pick_is_solo(self, make_game, make_pick):
        game = make_game(home_score=30, away_score=10)
        picks = [
            make_pick(game, "u1", "KC"),
            make_pick(game, "u2", "BUF"),
            make_pick(game, "u3", "BUF", is_lock=True),
        ]

        flags = compute_rarity(game, picks)

        assert flags[0].is_correct and flags[0].solo_pick
        assert not flags[0].solo_lock
        assert not flags[0].super_bonus
        assert not flags[1].is_correct and not flags[1].solo_pick
        assert not flags[2].is_correct and not flags[2].solo_lock

    def test_only_correct_locked_pick_is_super_bonus(self, make_game, make_pick):
        game = make_game(home_score=30, away_score=10)
        picks = [make_pick(game, "u1", "KC", is_lock=True), make_pick(game, "u2", "BUF")]

        flags = compute_rarity(game, picks)

        assert flags[0].solo_pick
        assert flags[0].solo_lock
        assert flags[0].super_bonus

    def test_solo_lock_ignores_unlocked_correct_picks(self, make_game, make_pick):
        game = make_game(home_score=30, away_score=10)
        picks = [
            make_pick(game, "u1", "KC", is_lock=True),
            make_pick(game, "u2", "KC"),
            make_pick(game, "u3", "KC"),
        ]

        flags = compute_rarity(game, picks)

        assert flags[0].solo_lock
        assert not flags[0].solo_pick
        assert not flags[0].super_bonus
        assert not flags[1].solo_lock

    def test_two_correct_locks_are_not_solo(self, make_game, make_pick):
        game = make_game(home_score=30, away_score=10)
        picks = [make_pick(game, "u1", "KC", is_lock=True), make_pick(game, "u2", "KC", is_lock=True)]

        flags = compute_rarity(game, picks)

        assert all(f.is_correct for f in flags)
        assert not any(f.solo_lock or f.solo_pick or f.super_bonus for f in flags)

    def test_order_does_not_change_flags(self, make_game, make_pick):
        """The lone winner is only known after every pick is seen."""
        game = make_game(home_score=30, away_score=10)
        winner = make_pick(game, "u1", "KC")
        losers = [make_pick(game, f"u{i}", "BUF") for i in range(2, 6)]

        first = compute_rarity(game, [winner, *losers])
        last = compute_rarity(game, [*losers, winner])

        assert first[0] == last[-1]
        assert last[-1].solo_pick

    def test_tie_clears_every_flag(self, make_game, make_pick):
        game = make_game(home_score=20, away_score=20)
        picks = [make_pick(game, "u1", "KC", is_lock=True), make_pick(game, "u2", "BUF")]

        assert compute_rarity(game, picks) == [NO_RARITY, NO_RARITY]

    def test_no_picks(self, make_game):
        game = make_game(home_score=30, away_score=10)
        assert compute_rarity(game, []) == []

    def test_unfinished_game_raises(self, make_game, make_pick):
        game = make_game(status="in_progress", home_score=14, away_score=7)
        with pytest.raises(InvalidContestError):
            compute_rarity(game, [make_pick(game, "u1", "KC")])

    def test_missing_score_raises(self, make_game, make_pick):
        game = make_game(home_score=21, away_score=None)
        with pytest.raises(InvalidContestError, match="missing away score"):
            compute_rarity(game, [make_pick(game, "u1", "KC")])

    def test_pick_for_other_game_raises(self, make_game, make_pick):
        game = make_game(home_score=30, away_score=10)
        other = make_game(home_score=30, away_score=10)
        with pytest.raises(InvalidPickError):
            compute_rarity(game, [make_pick(other, "u1", "KC")])


class TestClassifyContestPicks:
    """Flag write-back onto picks."""

    def test_sets_flags_on_picks(self, make_game, make_pick):
        game = make_game(home_score=10, away_score=30)
        picks = [make_pick(game, "u1", "BUF", is_lock=True), make_pick(game, "u2", "KC")]

        result = classify_contest_picks(game, picks)

        assert result == picks
        assert picks[0].solo_pick and picks[0].solo_lock and picks[0].super_bonus
        assert not (picks[1].solo_pick or picks[1].solo_lock or picks[1].super_bonus)

    def test_rerun_is_idempotent(self, make_game, make_pick):
        game = make_game(home_score=10, away_score=30)
        picks = [make_pick(game, "u1", "BUF"), make_pick(game, "u2", "KC", is_lock=True)]

        classify_contest_picks(game, picks)
        once = [(p.solo_pick, p.solo_lock, p.super_bonus) for p in picks]
        classify_contest_picks(game, picks)
        twice = [(p.solo_pick, p.solo_lock, p.super_bonus) for p in picks]

        assert once == twice

    def test_stale_flags_are_cleared(self, make_game, make_pick):
        game = make_game(home_score=10, away_score=30)
        pick = make_pick(game, "u1", "KC")
        pick.super_bonus = True
        pick.solo_pick = True

        classify_contest_picks(game, [pick])

        assert not pick.super_bonus
        assert not pick.solo_pick
