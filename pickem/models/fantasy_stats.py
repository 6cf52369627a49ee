"""Fantasy player stat line database model."""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import String, Integer, Numeric, DateTime, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pickem.database import Base


class FantasyPlayerStats(Base):
    """Raw counting stats for one player in one week, with computed fantasy points."""

    __tablename__ = "fantasy_player_stats"

    stat_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    player_id: Mapped[str] = mapped_column(String(50), nullable=False)
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    season: Mapped[int] = mapped_column(Integer, nullable=False)
    game_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    # Passing
    passing_yards: Mapped[int] = mapped_column(Integer, default=0)
    passing_tds: Mapped[int] = mapped_column(Integer, default=0)
    interceptions: Mapped[int] = mapped_column(Integer, default=0)

    # Rushing
    rushing_yards: Mapped[int] = mapped_column(Integer, default=0)
    rushing_tds: Mapped[int] = mapped_column(Integer, default=0)

    # Receiving
    receptions: Mapped[int] = mapped_column(Integer, default=0)
    receiving_yards: Mapped[int] = mapped_column(Integer, default=0)
    receiving_tds: Mapped[int] = mapped_column(Integer, default=0)

    # Misc
    fumbles_lost: Mapped[int] = mapped_column(Integer, default=0)
    two_point_conversions: Mapped[int] = mapped_column(Integer, default=0)

    # Defense / special teams
    dst_points_allowed: Mapped[int | None] = mapped_column(Integer, nullable=True)
    dst_sacks: Mapped[int] = mapped_column(Integer, default=0)
    dst_interceptions: Mapped[int] = mapped_column(Integer, default=0)
    dst_fumble_recoveries: Mapped[int] = mapped_column(Integer, default=0)
    dst_safeties: Mapped[int] = mapped_column(Integer, default=0)
    dst_tds: Mapped[int] = mapped_column(Integer, default=0)
    dst_blocked_kicks: Mapped[int] = mapped_column(Integer, default=0)

    # Kicking
    fg_made_0_39: Mapped[int] = mapped_column(Integer, default=0)
    fg_made_40_49: Mapped[int] = mapped_column(Integer, default=0)
    fg_made_50_plus: Mapped[int] = mapped_column(Integer, default=0)
    fg_missed: Mapped[int] = mapped_column(Integer, default=0)
    xp_made: Mapped[int] = mapped_column(Integer, default=0)
    xp_missed: Mapped[int] = mapped_column(Integer, default=0)

    # Computed points per format
    points_ppr: Mapped[Decimal] = mapped_column(Numeric(6, 2), default=0)
    points_half_ppr: Mapped[Decimal] = mapped_column(Numeric(6, 2), default=0)
    points_standard: Mapped[Decimal] = mapped_column(Numeric(6, 2), default=0)

    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow
    )

    __table_args__ = (
        UniqueConstraint("player_id", "week", "season", name="uq_fantasy_stats_player_week"),
        Index("idx_fantasy_stats_week", "season", "week"),
    )
