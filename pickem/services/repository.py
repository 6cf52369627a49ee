"""Data access for the scoring engine.

`PickemRepository` is the interface the engine consumes; `SqlPickemRepository`
implements it on an async SQLAlchemy session.
"""

from typing import Iterable, Protocol

import structlog
from sqlalchemy import select, exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from pickem.models import Award, AwardPeriod, Game, Pick, Profile
from pickem.services.period import Period

logger = structlog.get_logger()


class PickemRepository(Protocol):
    """Storage operations the scoring engine depends on."""

    async def get_contest(self, game_id: str) -> Game | None: ...

    async def list_picks_for_contest(self, game_id: str) -> list[Pick]: ...

    async def list_contests_for_period(self, period: Period) -> list[Game]: ...

    async def list_picks_for_period(self, period: Period) -> list[Pick]: ...

    async def list_contests_for_season(self, season: int) -> list[Game]: ...

    async def list_picks_for_season(self, season: int) -> list[Pick]: ...

    async def list_periods(self, season: int) -> list[Period]: ...

    async def awards_exist_for_period(self, period: Period) -> bool: ...

    async def insert_awards_if_absent(
        self, period: Period, candidates: Iterable, users_ranked: int
    ) -> list[Award] | None: ...

    async def list_awards_for_period(self, period: Period) -> list[Award]: ...

    async def list_profiles(self, user_ids: Iterable[str]) -> dict[str, Profile]: ...

    async def commit(self) -> None: ...


def _period_filter(model, period: Period) -> tuple:
    return (
        model.week == period.week,
        model.season == period.season,
        model.season_type == period.season_type,
    )


class SqlPickemRepository:
    """PickemRepository backed by an AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_contest(self, game_id: str) -> Game | None:
        return await self.session.get(Game, game_id)

    async def list_picks_for_contest(self, game_id: str) -> list[Pick]:
        result = await self.session.execute(
            select(Pick)
            .where(Pick.game_id == game_id)
            .where(Pick.deleted_at.is_(None))
            .order_by(Pick.created_at, Pick.pick_id)
        )
        return list(result.scalars().all())

    async def list_contests_for_period(self, period: Period) -> list[Game]:
        result = await self.session.execute(
            select(Game)
            .where(*_period_filter(Game, period))
            .order_by(Game.game_time, Game.game_id)
        )
        return list(result.scalars().all())

    async def list_picks_for_period(self, period: Period) -> list[Pick]:
        """Active picks for the period with their game loaded."""
        result = await self.session.execute(
            select(Pick)
            .join(Pick.game)
            .options(contains_eager(Pick.game))
            .where(*_period_filter(Game, period))
            .where(Pick.deleted_at.is_(None))
            .order_by(Game.game_time, Pick.created_at, Pick.pick_id)
        )
        return list(result.scalars().all())

    async def list_contests_for_season(self, season: int) -> list[Game]:
        result = await self.session.execute(
            select(Game).where(Game.season == season).order_by(Game.game_time, Game.game_id)
        )
        return list(result.scalars().all())

    async def list_picks_for_season(self, season: int) -> list[Pick]:
        result = await self.session.execute(
            select(Pick)
            .join(Pick.game)
            .options(contains_eager(Pick.game))
            .where(Game.season == season)
            .where(Pick.deleted_at.is_(None))
            .order_by(Game.game_time, Pick.created_at, Pick.pick_id)
        )
        return list(result.scalars().all())

    async def list_periods(self, season: int) -> list[Period]:
        """Distinct periods with at least one game, in play order."""
        result = await self.session.execute(
            select(Game.week, Game.season_type)
            .where(Game.season == season)
            .distinct()
        )
        periods = [
            Period(week=week, season=season, season_type=season_type)
            for week, season_type in result.all()
        ]
        return sorted(periods, key=lambda p: p.sort_key)

    async def awards_exist_for_period(self, period: Period) -> bool:
        award_exists = await self.session.scalar(
            select(exists().where(*_period_filter(Award, period)))
        )
        if award_exists:
            return True
        claimed = await self.session.scalar(
            select(exists().where(*_period_filter(AwardPeriod, period)))
        )
        return bool(claimed)

    async def insert_awards_if_absent(
        self, period: Period, candidates: Iterable, users_ranked: int
    ) -> list[Award] | None:
        """
        Insert a period's awards together with its AwardPeriod claim.

        Both go in one transaction. If the period turns out to be already
        claimed the transaction is rolled back and None returned. Any other
        failure rolls back and re-raises, leaving the session usable.
        """
        awards = [
            Award(
                user_id=candidate.user_id,
                week=period.week,
                season=period.season,
                season_type=period.season_type,
                award_type=candidate.award_type,
                points=candidate.points,
                record=candidate.record,
            )
            for candidate in candidates
        ]

        self.session.add(
            AwardPeriod(
                week=period.week,
                season=period.season,
                season_type=period.season_type,
                awards_created=len(awards),
                users_ranked=users_ranked,
            )
        )
        self.session.add_all(awards)

        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            # Only a committed claim for this period means another run won
            if not await self.awards_exist_for_period(period):
                raise
            logger.info(
                "Awards already persisted for period, skipping insert",
                period=str(period),
                error=str(e.orig),
            )
            return None
        except Exception:
            await self.session.rollback()
            raise

        return awards

    async def list_awards_for_period(self, period: Period) -> list[Award]:
        result = await self.session.execute(
            select(Award)
            .where(*_period_filter(Award, period))
            .order_by(Award.award_type, Award.user_id)
        )
        return list(result.scalars().all())

    async def list_profiles(self, user_ids: Iterable[str]) -> dict[str, Profile]:
        ids = list(user_ids)
        if not ids:
            return {}
        result = await self.session.execute(select(Profile).where(Profile.user_id.in_(ids)))
        return {profile.user_id: profile for profile in result.scalars().all()}

    async def commit(self) -> None:
        await self.session.commit()
