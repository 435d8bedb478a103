"""Interactive CLI driver for playing Scotland Yard.

This module provides a text-based hot-seat interface: MrX and the
detectives take turns at the same terminal. It also serves as the
reference for how a GUI would drive the Model.

The driver is designed to be extensible:
- GameRenderer handles all display logic (can be swapped for GUI)
- ActionPrompter handles all user input (can be swapped for GUI events)
- GameDriver orchestrates the game loop

Usage:
    python -m engine.driver --detectives 3 --seed 7

Or from code:
    from engine.driver import GameDriver
    driver = GameDriver(Model(new_game(load_default_setup())))
    driver.run()
"""

from __future__ import annotations

import argparse
import re
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from core.constants import MAX_DETECTIVES, MIN_DETECTIVES, Piece, Ticket
from core.errors import GameConfigurationError, IllegalMoveError
from core.moves import Move
from data.loader import BoardLoadError, load_default_setup, load_setup

from .config import DEFAULT_GAME_CONFIG
from .logger import configure_logging, get_logger
from .model import BoardView, Event, Model, Observer
from .setup import new_game

logger = get_logger(__name__)


# =============================================================================
# Display Formatters (GUI-ready abstraction)
# =============================================================================

class GameRenderer(ABC):
    """Abstract base class for rendering game state.

    Implement this interface to create a GUI renderer.
    The CLI renderer is provided as TextRenderer.
    """

    @abstractmethod
    def render_board(self, board: BoardView) -> None:
        """Render everything public about the game."""
        pass

    @abstractmethod
    def render_mr_x_location(self, location: int) -> None:
        """Show MrX's true station (only on MrX's own turn)."""
        pass

    @abstractmethod
    def render_message(self, message: str) -> None:
        """Render a message to the user."""
        pass

    @abstractmethod
    def render_error(self, error: str) -> None:
        """Render an error message."""
        pass

    @abstractmethod
    def render_game_over(self, board: BoardView) -> None:
        """Render the game over screen."""
        pass


class TextRenderer(GameRenderer):
    """CLI text-based renderer for the game state."""

    # Box drawing characters
    H_LINE = "─"
    V_LINE = "│"
    TL_CORNER = "┌"
    TR_CORNER = "┐"
    BL_CORNER = "└"
    BR_CORNER = "┘"

    # Piece colors (ANSI codes)
    PIECE_COLORS = {
        Piece.MRX: "\033[90m",
        Piece.RED: "\033[91m",
        Piece.GREEN: "\033[92m",
        Piece.BLUE: "\033[94m",
        Piece.WHITE: "\033[97m",
        Piece.YELLOW: "\033[93m",
    }
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    def __init__(self, use_colors: bool = True):
        """Initialize the renderer.

        Args:
            use_colors: Whether to use ANSI color codes.
        """
        self.use_colors = use_colors

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_colors:
            return f"{color}{text}{self.RESET}"
        return text

    def _piece_name(self, piece: Piece) -> str:
        name = "MrX" if piece.is_mr_x else piece.value.title()
        return self._color(name, self.PIECE_COLORS[piece])

    def _box(self, title: str, content: list[str], width: int = 60) -> str:
        """Create a box around content."""
        lines = []
        title_space = max(width - len(title) - 4, 0)
        lines.append(f"{self.TL_CORNER}{self.H_LINE}{self.H_LINE} {title} {self.H_LINE * title_space}{self.TR_CORNER}")

        for line in content:
            # Strip ANSI codes for padding calculation
            visible_len = len(self._strip_ansi(line))
            padding = max(width - visible_len - 2, 0)
            lines.append(f"{self.V_LINE} {line}{' ' * padding}{self.V_LINE}")

        lines.append(f"{self.BL_CORNER}{self.H_LINE * width}{self.BR_CORNER}")
        return "\n".join(lines)

    def _strip_ansi(self, text: str) -> str:
        """Strip ANSI escape codes from text."""
        return re.sub(r'\033\[[0-9;]*m', '', text)

    def _ticket_summary(self, board: BoardView, piece: Piece) -> str:
        tickets = board.get_player_tickets(piece)
        if tickets is None:
            return ""
        return " ".join(
            f"{ticket.value[:3].upper()}={tickets.count(ticket)}"
            for ticket in Ticket
            if piece.is_mr_x or not ticket.is_special
        )

    def render_board(self, board: BoardView) -> None:
        """Render the pieces and MrX's travel log."""
        rounds = len(board.setup.moves)
        played = len(board.mr_x_travel_log)
        turn = board.current_piece
        turn_str = "Detectives" if turn is None or turn.is_detective else "MrX"

        print("\n" + self._color("=" * 62, self.DIM))
        print(self._color(f"ROUND {min(played + 1, rounds)} of {rounds}".center(62), self.BOLD))
        print(f"To move: {turn_str}")

        content = [f"{self._piece_name(Piece.MRX)}: at ?  {self._ticket_summary(board, Piece.MRX)}"]
        for piece in sorted(board.players - {Piece.MRX}, key=lambda p: p.value):
            location = board.get_detective_location(piece)
            marker = " <--" if piece == turn else ""
            content.append(
                f"{self._piece_name(piece)}: at {location}  "
                f"{self._ticket_summary(board, piece)}{marker}"
            )
        print(self._box("Pieces", content))

        log_lines = []
        for index, revealed in enumerate(board.setup.moves):
            label = f"{index + 1:2d}{'*' if revealed else ' '}"
            if index < played:
                log_lines.append(f"{label} {board.mr_x_travel_log[index]}")
            elif index == played:
                log_lines.append(self._color(f"{label} ...", self.DIM))
        print(self._box("MrX travel log (* = reveal)", log_lines))

    def render_mr_x_location(self, location: int) -> None:
        print(self._color(f"MrX is secretly at {location}", self.BOLD))

    def render_message(self, message: str) -> None:
        print(f"\n{message}")

    def render_error(self, error: str) -> None:
        print(self._color(f"\n[ERROR] {error}", "\033[91m"))

    def render_game_over(self, board: BoardView) -> None:
        """Render the game over screen."""
        print("\n" + "=" * 62)
        print(self._color("GAME OVER".center(62), self.BOLD))
        print("=" * 62)
        if Piece.MRX in board.winner:
            print(f"\n{self._color('MrX escapes!', self.BOLD)}")
        else:
            print(f"\n{self._color('The detectives win!', self.BOLD)}")
        print("=" * 62)


class RendererObserver(Observer):
    """Forwards model notifications to a renderer."""

    def __init__(self, renderer: GameRenderer):
        self.renderer = renderer

    def on_model_changed(self, board: BoardView, event: Event) -> None:
        if event is Event.GAME_OVER:
            self.renderer.render_game_over(board)


# =============================================================================
# Action Prompter (GUI-ready abstraction)
# =============================================================================

@dataclass
class ActionChoice:
    """Represents a choice the player can make."""
    index: int
    description: str
    action: Any  # The move to play


class ActionPrompter(ABC):
    """Abstract base class for prompting player moves.

    Implement this interface to create a GUI move selector.
    The CLI prompter is provided as TextPrompter.
    """

    @abstractmethod
    def prompt_choice(
        self,
        message: str,
        choices: list[ActionChoice],
        allow_cancel: bool = False,
    ) -> Optional[ActionChoice]:
        """Prompt the player to make a choice.

        Args:
            message: The prompt message.
            choices: List of available choices.
            allow_cancel: Whether to allow canceling the choice.

        Returns:
            The selected choice, or None if canceled.
        """
        pass


class TextPrompter(ActionPrompter):
    """CLI text-based move prompter."""

    def prompt_choice(
        self,
        message: str,
        choices: list[ActionChoice],
        allow_cancel: bool = False,
    ) -> Optional[ActionChoice]:
        """Prompt the player to make a choice."""
        print(f"\n{message}")
        print("-" * 50)

        for choice in choices:
            print(f"  {choice.index}. {choice.description}")

        if allow_cancel:
            print("  q. Quit")

        print()
        while True:
            try:
                raw = input("Enter choice: ").strip().lower()

                if allow_cancel and raw == "q":
                    return None

                idx = int(raw)
                for choice in choices:
                    if choice.index == idx:
                        return choice

                print("Invalid choice. Please try again.")
            except ValueError:
                print("Invalid input. Please enter a number.")
            except (KeyboardInterrupt, EOFError):
                print("\nGame interrupted.")
                return None


# =============================================================================
# Game Driver
# =============================================================================

class GameDriver:
    """Main driver for running an interactive game session.

    This class orchestrates the game loop and delegates to:
    - Model for game logic
    - GameRenderer for display
    - ActionPrompter for user input
    """

    def __init__(
        self,
        model: Model,
        renderer: Optional[GameRenderer] = None,
        prompter: Optional[ActionPrompter] = None,
    ):
        self.model = model
        self.renderer = renderer or TextRenderer()
        self.prompter = prompter or TextPrompter()
        self.model.register_observer(RendererObserver(self.renderer))

    def run(self) -> bool:
        """Run the main game loop.

        Returns:
            True if the game reached a result, False if a player quit.
        """
        while not self.model.current_board.winner:
            board = self.model.current_board
            self.renderer.render_board(board)

            if not self._take_turn(board):
                self.renderer.render_message("Game abandoned.")
                return False

        return True

    def _take_turn(self, board: BoardView) -> bool:
        """Prompt for and play one move. Returns False if the player quit."""
        mr_x_turn = board.current_piece is not None and board.current_piece.is_mr_x
        if mr_x_turn:
            self.renderer.render_mr_x_location(self.model.state.mr_x.location)

        moves = sorted(board.available_moves, key=self._move_sort_key)
        choices = [
            ActionChoice(idx, self._describe(move), move)
            for idx, move in enumerate(moves, 1)
        ]
        who = "MrX" if mr_x_turn else "Detectives"
        choice = self.prompter.prompt_choice(f"{who}, choose a move:", choices, allow_cancel=True)
        if choice is None:
            return False

        try:
            self.model.choose_move(choice.action)
        except IllegalMoveError as e:
            self.renderer.render_error(str(e))
        return True

    @staticmethod
    def _move_sort_key(move: Move) -> tuple:
        return (move.mover.value, str(move))

    @staticmethod
    def _describe(move: Move) -> str:
        return str(move)


# =============================================================================
# Entry Point
# =============================================================================

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Scotland Yard in the terminal.")
    parser.add_argument("--board", type=str, default=None, help="Path to a JSON board file")
    parser.add_argument(
        "--detectives",
        type=int,
        default=DEFAULT_GAME_CONFIG.num_detectives,
        help=f"Number of detectives ({MIN_DETECTIVES}-{MAX_DETECTIVES})",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for starting positions")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI driver."""
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.log_level.upper())

    try:
        setup = load_setup(args.board) if args.board else load_default_setup()
        config = DEFAULT_GAME_CONFIG.with_detectives(args.detectives)
        state = new_game(setup, config, seed=args.seed)
    except (BoardLoadError, GameConfigurationError) as e:
        logger.error("Could not start game: %s", e)
        print(f"Could not start game: {e}", file=sys.stderr)
        return 1

    print("=" * 62)
    print("SCOTLAND YARD - Interactive CLI".center(62))
    print("=" * 62)

    driver = GameDriver(Model(state), renderer=TextRenderer(use_colors=not args.no_color))
    finished = driver.run()
    return 0 if finished else 2


if __name__ == "__main__":
    sys.exit(main())
