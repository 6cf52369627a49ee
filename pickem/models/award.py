"""Weekly award database models."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import String, Integer, DateTime, Index, UniqueConstraint, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pickem.database import Base


class Award(Base):
    """An award earned by a user for one week of one season."""

    __tablename__ = "awards"

    award_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    season: Mapped[int] = mapped_column(Integer, nullable=False)
    season_type: Mapped[str] = mapped_column(String(20), nullable=False)
    award_type: Mapped[str] = mapped_column(String(30), nullable=False)

    # Snapshot of the user's week at processing time
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    record: Mapped[str] = mapped_column(String(20), default="0-0")  # "W-L"

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow
    )

    __table_args__ = (
        UniqueConstraint(
            "user_id", "week", "season", "season_type", "award_type",
            name="uq_awards_user_period_type",
        ),
        Index("idx_awards_period", "season", "season_type", "week"),
        Index("idx_awards_user", "user_id"),
    )


class AwardPeriod(Base):
    """Marks a (week, season, season_type) as processed.

    Inserted in the same transaction as the period's awards; the primary key
    makes a second insert for the same period fail instead of duplicating awards.
    """

    __tablename__ = "award_periods"

    week: Mapped[int] = mapped_column(Integer, nullable=False)
    season: Mapped[int] = mapped_column(Integer, nullable=False)
    season_type: Mapped[str] = mapped_column(String(20), nullable=False)

    awards_created: Mapped[int] = mapped_column(Integer, default=0)
    users_ranked: Mapped[int] = mapped_column(Integer, default=0)
    processed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow
    )

    __table_args__ = (
        PrimaryKeyConstraint("week", "season", "season_type", name="pk_award_periods"),
    )
