"""Errors raised while loading game data."""


class GameDataError(ValueError):
    """Level or dictionary data is malformed; the game cannot start."""
