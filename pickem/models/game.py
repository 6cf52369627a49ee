"""Game database model."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import String, Integer, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pickem.database import Base

if TYPE_CHECKING:
    from pickem.models.pick import Pick


class Game(Base):
    """One matchup within a (week, season, season_type) period."""

    __tablename__ = "games"

    game_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    season: Mapped[int] = mapped_column(Integer, nullable=False)
    season_type: Mapped[str] = mapped_column(String(20), default="regular")

    home_team: Mapped[str] = mapped_column(String(10), nullable=False)
    away_team: Mapped[str] = mapped_column(String(10), nullable=False)
    game_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    home_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    away_score: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # scheduled, in_progress, completed
    status: Mapped[str] = mapped_column(String(20), default="scheduled")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    picks: Mapped[list["Pick"]] = relationship("Pick", back_populates="game")

    __table_args__ = (
        Index("idx_games_period", "season", "season_type", "week"),
    )

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @property
    def has_final_score(self) -> bool:
        return self.is_completed and self.home_score is not None and self.away_score is not None

    @property
    def is_tie(self) -> bool:
        """True only for a completed game with equal final scores."""
        return self.has_final_score and self.home_score == self.away_score

    @property
    def winner(self) -> str | None:
        """Winning team, or None while unresolved or tied."""
        if not self.has_final_score or self.home_score == self.away_score:
            return None
        return self.home_team if self.home_score > self.away_score else self.away_team

    @property
    def matchup(self) -> str:
        return f"{self.away_team} @ {self.home_team}"
