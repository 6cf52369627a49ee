"""Custom exceptions for the pick'em scoring engine."""


class PickemError(Exception):
    """Base exception for pick'em application errors."""
    pass


class ScoringError(PickemError):
    """Exception raised when picks cannot be scored."""
    pass


class InvalidContestError(ScoringError):
    """Raised when a game is not in a scoreable state (not completed, missing scores)."""

    def __init__(self, game_id: str, reason: str):
        self.game_id = game_id
        self.reason = reason
        super().__init__(f"Game {game_id} cannot be scored: {reason}")


class InvalidPickError(ScoringError):
    """Raised when a pick does not belong to the game it is scored against."""
    pass


class AwardsError(PickemError):
    """Exception raised for awards processing errors."""
    pass


class PeriodNotCompletedError(AwardsError):
    """Raised when awards are requested for a period whose games are not all completed."""

    def __init__(self, period, completed_games: int, total_games: int):
        self.period = period
        self.completed_games = completed_games
        self.total_games = total_games
        super().__init__(
            f"{period} is not completed: {completed_games}/{total_games} games final"
        )
