"""Game engine for Scotland Yard.

This module provides the playable surface on top of the core rules:
- Game configuration and new game setup
- Observable model for UIs and agents
- Logging configuration
"""

from .config import GameConfig, DEFAULT_GAME_CONFIG

from .setup import (
    StartingPositions,
    choose_starting_positions,
    new_game,
)

from .model import (
    Model,
    BoardView,
    Event,
    Observer,
)

from .logger import configure_logging, get_logger

__all__ = [
    # Config
    "GameConfig",
    "DEFAULT_GAME_CONFIG",
    # Setup
    "StartingPositions",
    "choose_starting_positions",
    "new_game",
    # Model
    "Model",
    "BoardView",
    "Event",
    "Observer",
    # Logging
    "configure_logging",
    "get_logger",
]
