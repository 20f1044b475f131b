"""
Custom exceptions.

Everything derives from GameError, so the layers above the service can catch a single type.
"""


class GameError(Exception):
    """Base class for all errors raised by this application."""


class InvalidRequestError(GameError):
    """A request could not be interpreted (raised during request model validation)."""


class RepositoryError(GameError):
    """Persistence layer could not find / store a record."""


class StaleGameStateError(RepositoryError):
    """Another move got stored in between reading and writing the game."""


class GameStateError(GameError):
    """The game is in a state that does not allow the requested operation."""


class PieceNotFoundError(GameStateError):
    """A piece update referenced an id that is not on the board (caller bug)."""


class InvalidStateError(GameStateError):
    """A serialized game state is structurally invalid."""


class IllegalMoveError(GameError):
    """The submitted transition is not a legal move."""
