"""Tests for weekly award derivation and the awards processor."""

import pytest

from pickem.exceptions import InvalidContestError, PeriodNotCompletedError
from pickem.services.awards import PeriodStatus, WeeklyAwardsProcessor, derive_awards
from pickem.services.period import Period
from pickem.services.scoring.tiebreaker import UserPeriodStats

from conftest import InMemoryRepository


def stats(user_id, points, correct, total):
    return UserPeriodStats(user_id=user_id, points=points, correct=correct, total=total)


def awards_by_type(awards):
    grouped = {}
    for award in awards:
        grouped.setdefault(award.award_type, []).append(award.user_id)
    return grouped


class TestDeriveAwards:
    """Award rules on already aggregated stats."""

    def test_no_users(self):
        assert derive_awards([]) == []

    def test_placements_follow_tiebreaker(self):
        users = [stats("a", 3, 2, 3), stats("b", 5, 3, 3), stats("c", 3, 3, 4), stats("d", 1, 1, 3)]

        grouped = awards_by_type(derive_awards(users))

        assert grouped["top_scorer"] == ["b"]
        assert grouped["second_scorer"] == ["c"]
        assert grouped["third_scorer"] == ["a"]
        assert grouped["lowest_scorer"] == ["d"]

    def test_fewer_than_three_users(self):
        grouped = awards_by_type(derive_awards([stats("a", 2, 1, 2)]))

        assert grouped["top_scorer"] == ["a"]
        assert grouped["lowest_scorer"] == ["a"]
        assert "second_scorer" not in grouped
        assert "third_scorer" not in grouped

    def test_lowest_scorer_tie_goes_to_first_encountered(self):
        users = [stats("a", 4, 2, 2), stats("b", 0, 1, 3), stats("c", 0, 1, 3)]
        assert awards_by_type(derive_awards(users))["lowest_scorer"] == ["b"]

    def test_condition_awards_go_to_every_qualifier(self):
        users = [
            stats("perfect1", 4, 2, 2),
            stats("perfect2", 3, 3, 3),
            stats("cold_negative", -2, 0, 2),
            stats("cold", 0, 0, 1),
        ]

        grouped = awards_by_type(derive_awards(users))

        assert grouped["perfect_week"] == ["perfect1", "perfect2"]
        assert grouped["cold_week"] == ["cold_negative", "cold"]
        assert grouped["negative_points"] == ["cold_negative"]

    def test_no_condition_awards_without_graded_picks(self):
        grouped = awards_by_type(derive_awards([stats("a", 1, 1, 2), stats("ties_only", 0, 0, 0)]))

        assert grouped["lowest_scorer"] == ["ties_only"]
        assert "perfect_week" not in grouped
        assert "cold_week" not in grouped

    def test_award_snapshot(self):
        award = derive_awards([stats("a", -1, 1, 3)])[0]
        assert (award.points, award.record) == (-1, "1-2")


class TestProcessPeriod:
    """End-to-end processing against the in-memory repository."""

    async def test_processes_completed_week(self, week_three, period):
        processor = WeeklyAwardsProcessor(week_three)

        result = await processor.process_period(period)

        assert result.status == "processed"
        assert result.users_ranked == 4
        assert awards_by_type(result.awards) == {
            "top_scorer": ["alice"],
            "second_scorer": ["bob"],
            "third_scorer": ["dave"],
            "lowest_scorer": ["carol"],
            "perfect_week": ["alice", "bob"],
            "cold_week": ["carol"],
            "negative_points": ["carol"],
        }
        top = next(a for a in result.awards if a.award_type == "top_scorer")
        assert (top.points, top.record) == (5, "2-0")
        assert await processor.get_period_status(period) == PeriodStatus.PROCESSED

    async def test_second_run_is_skipped(self, week_three, period):
        processor = WeeklyAwardsProcessor(week_three)
        await processor.process_period(period)

        result = await processor.process_period(period)

        assert result.status == "skipped"
        assert result.awards == []
        assert len(week_three.awards) == 8

    async def test_insert_conflict_is_skipped(self, week_three, period):
        """Another run claimed the week between the check and the insert."""

        class RacingRepository(InMemoryRepository):
            async def awards_exist_for_period(self, period):
                return False

        repo = RacingRepository(games=week_three.games, picks=week_three.picks)
        repo.claimed.add(period)

        result = await WeeklyAwardsProcessor(repo).process_period(period)

        assert result.status == "skipped"
        assert repo.awards == []

    async def test_failed_insert_leaves_week_eligible(self, week_three, period):
        week_three.fail_inserts = True
        processor = WeeklyAwardsProcessor(week_three)

        result = await processor.process_period(period)

        assert result.status == "failed"
        assert result.error == "database unavailable"
        assert week_three.awards == []
        assert await processor.get_period_status(period) == PeriodStatus.COMPLETED_UNPROCESSED

        week_three.fail_inserts = False
        retry = await processor.process_period(period)
        assert retry.status == "processed"

    async def test_pending_week_raises(self, week_three, period, make_game):
        week_three.games.append(make_game(status="in_progress", home_score=3, away_score=0))
        processor = WeeklyAwardsProcessor(week_three)

        assert await processor.get_period_status(period) == PeriodStatus.PENDING
        with pytest.raises(PeriodNotCompletedError, match="2/3 games final"):
            await processor.process_period(period)
        assert week_three.awards == []

    async def test_week_without_games_is_pending(self, week_three):
        empty = Period(week=9, season=2025)
        processor = WeeklyAwardsProcessor(week_three)

        assert await processor.get_period_status(empty) == PeriodStatus.PENDING
        with pytest.raises(PeriodNotCompletedError):
            await processor.process_period(empty)

    async def test_missing_final_score_propagates(self, week_three, period, make_game, make_pick):
        broken = make_game(home_score=None, away_score=14)
        week_three.games.append(broken)
        week_three.picks.append(make_pick(broken, "alice", "KC"))

        with pytest.raises(InvalidContestError):
            await WeeklyAwardsProcessor(week_three).process_period(period)
        assert week_three.awards == []

    async def test_failing_user_excluded_from_awards(self, week_three, period, make_game, make_pick):
        orphan = make_pick(make_game(week=99, home_score=1, away_score=0), "eve", "KC")

        class OrphanRepository(InMemoryRepository):
            async def list_picks_for_period(self, period):
                return [*await super().list_picks_for_period(period), orphan]

        repo = OrphanRepository(games=week_three.games, picks=week_three.picks)

        result = await WeeklyAwardsProcessor(repo).process_period(period)

        assert result.status == "processed"
        assert result.excluded_users == ["eve"]
        assert all(a.user_id != "eve" for a in result.awards)
        assert result.users_ranked == 4

    async def test_no_rarity_bonus_in_week_one(self, make_game, make_pick):
        game = make_game(week=1, home_score=20, away_score=10)
        repo = InMemoryRepository(
            games=[game],
            picks=[make_pick(game, "u1", "KC", is_lock=True), make_pick(game, "u2", "BUF")],
        )

        result = await WeeklyAwardsProcessor(repo).process_period(Period(week=1, season=2025))

        top = next(a for a in result.awards if a.award_type == "top_scorer")
        assert (top.user_id, top.points) == ("u1", 2)


class TestCompletedPeriods:
    """Season sweep and period navigation."""

    @pytest.fixture
    def season_repo(self, make_game, make_pick):
        games = {
            "pre2": make_game(week=2, season_type="preseason", home_score=10, away_score=3),
            "reg1": make_game(week=1, home_score=24, away_score=17),
            "reg2": make_game(week=2, home_score=None, away_score=17),
            "reg3": make_game(week=3, home_score=31, away_score=28),
            "reg4": make_game(week=4, status="scheduled"),
        }
        picks = [make_pick(g, "u1", "KC") for g in games.values()]
        repo = InMemoryRepository(games=games.values(), picks=picks)
        repo.claimed.add(Period(week=1, season=2025))
        return repo

    async def test_sweep_processes_eligible_weeks_in_order(self, season_repo):
        results = await WeeklyAwardsProcessor(season_repo).process_completed_periods(2025)

        assert [(str(r.period), r.status) for r in results] == [
            ("Week 2 (preseason 2025)", "processed"),
            ("Week 2 (regular 2025)", "failed"),
            ("Week 3 (regular 2025)", "processed"),
        ]
        assert "missing home score" in results[1].error

    async def test_sweep_is_repeatable(self, season_repo):
        processor = WeeklyAwardsProcessor(season_repo)
        await processor.process_completed_periods(2025)
        awards_after_first = len(season_repo.awards)

        results = await processor.process_completed_periods(2025)

        assert [r.status for r in results] == ["failed"]
        assert len(season_repo.awards) == awards_after_first

    async def test_get_next_period(self, season_repo):
        processor = WeeklyAwardsProcessor(season_repo)

        assert await processor.get_next_period(Period(week=2, season=2025, season_type="preseason")) == Period(
            week=1, season=2025
        )
        assert await processor.get_next_period(Period(week=3, season=2025)) == Period(week=4, season=2025)
        assert await processor.get_next_period(Period(week=4, season=2025)) is None
