"""Error types raised by the rules engine."""


class GameConfigurationError(ValueError):
    """Raised when a game state cannot be built from the given pieces and setup."""
    pass


class IllegalMoveError(ValueError):
    """Raised when a move outside the current legal-move set is played."""

    def __init__(self, move: object, reason: str = "not a legal move"):
        self.move = move
        self.reason = reason
        super().__init__(f"Illegal move {move}: {reason}")


class ObserverError(ValueError):
    """Raised on observer registration misuse (None, duplicate or absent)."""
    pass
