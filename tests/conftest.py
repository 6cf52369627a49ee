"""Shared fixtures: ORM object factories and an in-memory repository."""

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from pickem.models import Award, Game, Pick, Profile
from pickem.services.period import Period

KICKOFF = datetime(2025, 9, 21, 17, 0, tzinfo=timezone.utc)

_ids = count(1)


def build_game(
    week=3,
    season=2025,
    season_type="regular",
    home_team="KC",
    away_team="BUF",
    home_score=None,
    away_score=None,
    status="completed",
    game_id=None,
    game_time=None,
) -> Game:
    n = next(_ids)
    return Game(
        game_id=game_id or f"game-{n}",
        week=week,
        season=season,
        season_type=season_type,
        home_team=home_team,
        away_team=away_team,
        game_time=game_time or KICKOFF + timedelta(hours=n),
        home_score=home_score,
        away_score=away_score,
        status=status,
    )


def build_pick(game: Game, user_id: str, picked_team: str, is_lock=False, pick_points=0) -> Pick:
    n = next(_ids)
    return Pick(
        pick_id=f"pick-{n}",
        user_id=user_id,
        game_id=game.game_id,
        game=game,
        picked_team=picked_team,
        is_lock=is_lock,
        solo_pick=False,
        solo_lock=False,
        super_bonus=False,
        bonus_points=0,
        pick_points=pick_points,
        deleted_at=None,
        created_at=KICKOFF - timedelta(days=1) + timedelta(seconds=n),
    )


class InMemoryRepository:
    """PickemRepository over plain lists, for service-level tests."""

    def __init__(self, games=(), picks=(), profiles=()):
        self.games = list(games)
        self.picks = list(picks)
        self.profiles = {p.user_id: p for p in profiles}
        self.awards: list[Award] = []
        self.claimed: set[Period] = set()
        self.commits = 0
        self.fail_inserts = False

    def _in_period(self, game, period: Period) -> bool:
        return (
            game.week == period.week
            and game.season == period.season
            and game.season_type == period.season_type
        )

    def _active(self, picks):
        return sorted(
            (p for p in picks if p.deleted_at is None),
            key=lambda p: (p.game.game_time, p.created_at, p.pick_id),
        )

    async def get_contest(self, game_id):
        return next((g for g in self.games if g.game_id == game_id), None)

    async def list_picks_for_contest(self, game_id):
        return self._active(p for p in self.picks if p.game_id == game_id)

    async def list_contests_for_period(self, period):
        return sorted(
            (g for g in self.games if self._in_period(g, period)),
            key=lambda g: (g.game_time, g.game_id),
        )

    async def list_picks_for_period(self, period):
        ids = {g.game_id for g in self.games if self._in_period(g, period)}
        return self._active(p for p in self.picks if p.game_id in ids)

    async def list_contests_for_season(self, season):
        return sorted(
            (g for g in self.games if g.season == season),
            key=lambda g: (g.game_time, g.game_id),
        )

    async def list_picks_for_season(self, season):
        ids = {g.game_id for g in self.games if g.season == season}
        return self._active(p for p in self.picks if p.game_id in ids)

    async def list_periods(self, season):
        periods = {
            Period(week=g.week, season=g.season, season_type=g.season_type)
            for g in self.games
            if g.season == season
        }
        return sorted(periods, key=lambda p: p.sort_key)

    async def awards_exist_for_period(self, period):
        if period in self.claimed:
            return True
        return any(
            a.week == period.week and a.season == period.season and a.season_type == period.season_type
            for a in self.awards
        )

    async def insert_awards_if_absent(self, period, candidates, users_ranked):
        if self.fail_inserts:
            raise RuntimeError("database unavailable")
        if period in self.claimed:
            return None

        awards = [
            Award(
                award_id=f"award-{next(_ids)}",
                user_id=c.user_id,
                week=period.week,
                season=period.season,
                season_type=period.season_type,
                award_type=c.award_type,
                points=c.points,
                record=c.record,
                created_at=datetime.now(timezone.utc),
            )
            for c in candidates
        ]
        self.claimed.add(period)
        self.awards.extend(awards)
        return awards

    async def list_awards_for_period(self, period):
        return [
            a for a in self.awards
            if a.week == period.week and a.season == period.season and a.season_type == period.season_type
        ]

    async def list_profiles(self, user_ids):
        return {uid: self.profiles[uid] for uid in user_ids if uid in self.profiles}

    async def commit(self):
        self.commits += 1


@pytest.fixture
def make_game():
    return build_game


@pytest.fixture
def make_pick():
    return build_pick


@pytest.fixture
def period():
    return Period(week=3, season=2025, season_type="regular")


@pytest.fixture
def week_three(period):
    """
    Two final games in week 3 and four users.

    KC beat BUF 27-20, PHI won at DAL 24-17.
    alice: KC (lock, only correct lock), PHI   -> 4 + 1 = 5, 2-0
    bob:   KC, PHI                            -> 1 + 1 = 2, 2-0
    carol: BUF, DAL (lock)                    -> 0 - 2 = -2, 0-2
    dave:  BUF, PHI                           -> 0 + 1 = 1, 1-1
    """
    kc_buf = build_game(home_team="KC", away_team="BUF", home_score=27, away_score=20, game_id="kc-buf")
    dal_phi = build_game(home_team="DAL", away_team="PHI", home_score=17, away_score=24, game_id="dal-phi")

    picks = [
        build_pick(kc_buf, "alice", "KC", is_lock=True),
        build_pick(kc_buf, "bob", "KC"),
        build_pick(kc_buf, "carol", "BUF"),
        build_pick(kc_buf, "dave", "BUF"),
        build_pick(dal_phi, "alice", "PHI"),
        build_pick(dal_phi, "bob", "PHI"),
        build_pick(dal_phi, "carol", "DAL", is_lock=True),
        build_pick(dal_phi, "dave", "PHI"),
    ]
    profiles = [
        Profile(user_id=uid, username=uid.title(), email=f"{uid}@example.com", is_admin=False)
        for uid in ("alice", "bob", "carol", "dave")
    ]
    return InMemoryRepository(games=[kc_buf, dal_phi], picks=picks, profiles=profiles)
