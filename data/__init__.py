"""Board data loading for the Scotland Yard rules engine."""

from .loader import (
    BoardLoader,
    BoardLoadError,
    load_board,
    load_setup,
    load_default_board,
    load_default_setup,
    get_board_stats,
)

__all__ = [
    "BoardLoader",
    "BoardLoadError",
    "load_board",
    "load_setup",
    "load_default_board",
    "load_default_setup",
    "get_board_stats",
]
