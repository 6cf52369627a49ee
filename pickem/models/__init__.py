"""SQLAlchemy database models."""

from pickem.models.game import Game
from pickem.models.pick import Pick
from pickem.models.profile import Profile
from pickem.models.award import Award, AwardPeriod
from pickem.models.fantasy_stats import FantasyPlayerStats

__all__ = [
    "Game",
    "Pick",
    "Profile",
    "Award",
    "AwardPeriod",
    "FantasyPlayerStats",
]
