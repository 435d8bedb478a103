"""Win evaluation for the Scotland Yard rules engine.

Rules, checked in order:
1. Capture: a detective stands on MrX's station. Detectives win.
2. Rounds exhausted: the travel log is full and the rotation is back at
   MrX, so the detectives have played their final round. MrX wins.
3. MrX immobilized: it is MrX's turn and he has no legal move. Detectives win.
4. Detectives immobilized: it is the detectives' turn and no detective has
   a legal single move. MrX wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import Piece
from .movement import can_move

if TYPE_CHECKING:
    from .game_state import GameState


def is_captured(state: GameState) -> bool:
    """Check if any detective shares MrX's station."""
    return any(d.location == state.mr_x.location for d in state.detectives)


def rounds_exhausted(state: GameState) -> bool:
    """Check if MrX has used every round of the reveal schedule."""
    return len(state.log) >= len(state.setup.moves)


def any_detective_can_move(state: GameState) -> bool:
    """Check if at least one detective has a legal single move."""
    graph = state.setup.graph
    return any(can_move(graph, state.detectives, d) for d in state.detectives)


def determine_winner(state: GameState) -> frozenset[Piece]:
    """Decide who has won.

    Returns:
        The winning pieces: all detectives, MrX alone, or the empty set
        while the game continues.
    """
    detective_pieces = frozenset(d.piece for d in state.detectives)
    mr_x_only = frozenset({state.mr_x.piece})

    if is_captured(state):
        return detective_pieces

    if state.is_mr_x_turn:
        if rounds_exhausted(state):
            return mr_x_only
        if not state.mr_x_moves:
            return detective_pieces
        return frozenset()

    if not any_detective_can_move(state):
        return mr_x_only

    return frozenset()
