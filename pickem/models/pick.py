"""Pick database model."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pickem.database import Base

if TYPE_CHECKING:
    from pickem.models.game import Game


class Pick(Base):
    """A user's predicted winner for one game, optionally locked.

    The rarity flags and point columns are written only by the scoring
    engine once the game is final.
    """

    __tablename__ = "picks"

    pick_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    game_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("games.game_id", ondelete="CASCADE"), nullable=False
    )

    picked_team: Mapped[str] = mapped_column(String(10), nullable=False)
    is_lock: Mapped[bool] = mapped_column(Boolean, default=False)

    # Rarity flags (engine-assigned)
    solo_pick: Mapped[bool] = mapped_column(Boolean, default=False)
    solo_lock: Mapped[bool] = mapped_column(Boolean, default=False)
    super_bonus: Mapped[bool] = mapped_column(Boolean, default=False)

    # Computed points (engine-assigned)
    bonus_points: Mapped[int] = mapped_column(Integer, default=0)
    pick_points: Mapped[int] = mapped_column(Integer, default=0)

    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    game: Mapped["Game"] = relationship("Game", back_populates="picks")

    __table_args__ = (
        UniqueConstraint("user_id", "game_id", name="uq_picks_user_game"),
        Index("idx_picks_game", "game_id"),
        Index("idx_picks_user", "user_id"),
    )
