"""
Custom exceptions shared by all layers.

NOTE The rule engine itself never raises: an illegal move is `None` and a command issued out of turn is a no-op.
These exceptions are for the boundary layers (bad requests, unknown games, storage trouble).
"""


class GameError(Exception):
    """Top-level exception for anything this project raises on purpose."""


class InvalidRequestError(GameError):
    """A request could not be interpreted.

    NOTE not a ValueError on purpose: pydantic lets it propagate as-is instead of wrapping it in a ValidationError.
    """


class RepositoryError(GameError):
    """Something went wrong storing or fetching records."""


class GameNotFoundError(RepositoryError):
    """No live game is registered under the requested ID."""
