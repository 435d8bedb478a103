"""Game setup for Scotland Yard.

Places MrX and the detectives on distinct starting stations and hands out
their tickets, producing the opening GameState.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from core.board import GameSetup, NodeId
from core.constants import DETECTIVE_PIECES, Piece
from core.errors import GameConfigurationError
from core.game_state import GameState
from core.player import Player

from .config import DEFAULT_GAME_CONFIG, GameConfig
from .logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class StartingPositions:
    """Chosen starting stations.

    Attributes:
        mr_x: MrX's starting station.
        detectives: Starting station per detective piece, in seating order.
    """

    mr_x: NodeId
    detectives: dict[Piece, NodeId]


def choose_starting_positions(
    setup: GameSetup,
    num_detectives: int,
    rng: random.Random,
) -> StartingPositions:
    """Draw distinct starting stations for MrX and the detectives.

    Candidates come from the board's start location lists; a board without
    them allows any station.

    Raises:
        GameConfigurationError: If there are not enough candidate stations.
    """
    graph = setup.graph
    all_nodes = graph.nodes
    mr_x_candidates = sorted(set(graph.mr_x_start_locations or all_nodes))
    detective_candidates = sorted(set(graph.detective_start_locations or all_nodes))

    if not mr_x_candidates:
        raise GameConfigurationError("No starting station available for MrX")

    mr_x_location = rng.choice(mr_x_candidates)
    detective_candidates = [n for n in detective_candidates if n != mr_x_location]
    if len(detective_candidates) < num_detectives:
        raise GameConfigurationError(
            f"Board has {len(detective_candidates)} free detective start locations, "
            f"{num_detectives} needed"
        )

    chosen = rng.sample(detective_candidates, num_detectives)
    pieces = DETECTIVE_PIECES[:num_detectives]
    return StartingPositions(mr_x=mr_x_location, detectives=dict(zip(pieces, chosen)))


def new_game(
    setup: GameSetup,
    config: GameConfig = DEFAULT_GAME_CONFIG,
    seed: Optional[int] = None,
) -> GameState:
    """Create the opening state of a new game.

    Args:
        setup: The board and reveal schedule.
        config: Roster size and ticket allocations.
        seed: Seed for drawing starting stations; None draws at random.

    Returns:
        The initial GameState, MrX to move.

    Raises:
        GameConfigurationError: If the board cannot host the requested game.
    """
    rng = random.Random(seed)
    positions = choose_starting_positions(setup, config.num_detectives, rng)

    mr_x = Player(Piece.MRX, positions.mr_x, config.mr_x_tickets)
    detectives = [
        Player(piece, location, config.detective_tickets)
        for piece, location in positions.detectives.items()
    ]

    state = GameState.create_initial_state(setup, mr_x, detectives)
    logger.info(
        "New game: %d detectives at %s, %d rounds",
        len(detectives),
        {p.value: loc for p, loc in positions.detectives.items()},
        setup.round_count,
    )
    return state
