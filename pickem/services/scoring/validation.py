"""Scoreability checks for games."""

from pickem.exceptions import InvalidContestError


def validate_game_for_scoring(game) -> None:
    """
    Ensure a game can be scored.

    Raises:
        InvalidContestError: if the game is not completed, a final score is
            missing, or the week number is invalid.
    """
    if game.status != "completed":
        raise InvalidContestError(game.game_id, f"game is {game.status}, not completed")
    if game.home_score is None:
        raise InvalidContestError(game.game_id, "missing home score")
    if game.away_score is None:
        raise InvalidContestError(game.game_id, "missing away score")
    if not game.week or game.week < 1:
        raise InvalidContestError(game.game_id, f"invalid week {game.week!r}")


def determine_winner(game) -> str | None:
    """
    Return the winning team of a completed game, or None for a tie.

    Raises:
        InvalidContestError: if the game is not in a scoreable state.
    """
    validate_game_for_scoring(game)
    if game.home_score == game.away_score:
        return None
    return game.home_team if game.home_score > game.away_score else game.away_team
