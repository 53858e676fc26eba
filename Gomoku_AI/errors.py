"""Exception types shared by the board, rule engine, and move search."""


class GomokuError(Exception):
    """Base class for engine errors."""


class InvalidMoveError(GomokuError, ValueError):
    """Out-of-range coordinates, occupied cell, or an unknown stone value."""


class ForbiddenMoveError(InvalidMoveError):
    """Move is classified forbidden for a restricted stone."""

    def __init__(self, move, reason):
        super().__init__(f"Forbidden move {move} ({reason})")
        self.move = move
        self.reason = reason


class NoLegalMoveError(GomokuError, ValueError):
    """No empty, legal cell remains; the game is a draw."""


class PolicyUnavailableError(GomokuError, RuntimeError):
    """The external policy model could not be loaded or evaluated."""
