"""Contest period (week, season, season type) value object."""

from dataclasses import dataclass
from typing import Literal

SeasonType = Literal["preseason", "regular", "playoffs"]

# Order periods are played within a season
SEASON_TYPE_ORDER: dict[str, int] = {
    "preseason": 0,
    "regular": 1,
    "playoffs": 2,
}


@dataclass(frozen=True)
class Period:
    """A (week, season, season_type) over which standings and awards are computed."""

    week: int
    season: int
    season_type: SeasonType = "regular"

    def __post_init__(self):
        if self.season_type not in SEASON_TYPE_ORDER:
            raise ValueError(f"Unknown season type: {self.season_type}")
        if self.week < 1:
            raise ValueError(f"Invalid week: {self.week}")

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return (self.season, SEASON_TYPE_ORDER[self.season_type], self.week)

    def __str__(self) -> str:
        return f"Week {self.week} ({self.season_type} {self.season})"
