"""Board data loader for the Scotland Yard rules engine.

Loads and validates board topology and round schedules from JSON files,
converting them into BoardGraph and GameSetup instances ready for play.

Board file format::

    {
        "nodes": [{"id": 1, "position": {"x": 0, "y": 0}}, ...],
        "edges": [[1, 2, "taxi"], [1, 9, "bus"], ...],
        "rounds": 13,
        "reveal_rounds": [3, 8, 13],
        "start_locations": {"mr_x": [...], "detectives": [...]}
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import networkx as nx

from core.board import BoardGraph, GameSetup
from core.constants import (
    MAX_DETECTIVES,
    STANDARD_REVEAL_ROUNDS,
    STANDARD_ROUND_COUNT,
    Transport,
    make_reveal_schedule,
)

logger = logging.getLogger(__name__)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def resource_path(relative_path: str) -> Path:
    """Get the absolute path to a file shipped in the data/ directory."""
    return Path(__file__).parent / relative_path


class BoardLoadError(Exception):
    """Raised when board loading or validation fails."""
    pass


class BoardLoader:
    """Loads and validates board data from JSON files."""

    def __init__(self, strict: bool = True):
        """Initialize the loader.

        Args:
            strict: If True, require start locations for MrX and a full
                    detective roster. Set to False for test boards.
        """
        self.strict = strict

    def load_from_file(self, file_path: str | Path) -> GameSetup:
        """Load a board and its round schedule from a JSON file.

        Args:
            file_path: Path to the JSON board file.

        Returns:
            A GameSetup holding the loaded board and reveal schedule.

        Raises:
            BoardLoadError: If the file cannot be read or parsed.
            BoardLoadError: If validation fails.
        """
        path = Path(file_path)

        if not path.exists():
            raise BoardLoadError(f"Board file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise BoardLoadError(f"Invalid JSON in board file: {e}") from e
        except OSError as e:
            raise BoardLoadError(f"Error reading board file: {e}") from e

        setup = self.load_from_dict(data)
        logger.info(
            "Loaded board %s: %d nodes, %d edges, %d rounds",
            path.name,
            setup.graph.num_nodes(),
            setup.graph.num_edges(),
            setup.round_count,
        )
        return setup

    def load_from_dict(self, data: dict[str, Any]) -> GameSetup:
        """Load a board and its round schedule from a dictionary.

        Args:
            data: Dictionary containing 'nodes' and 'edges' keys, and
                  optionally 'rounds', 'reveal_rounds' and 'start_locations'.

        Returns:
            A GameSetup holding the loaded board and reveal schedule.

        Raises:
            BoardLoadError: If validation fails.
        """
        graph = self.load_graph(data)
        moves = self._create_schedule(data)
        return GameSetup(graph=graph, moves=moves)

    def load_graph(self, data: dict[str, Any]) -> BoardGraph:
        """Load only the board topology from a dictionary.

        Raises:
            BoardLoadError: If validation fails.
        """
        self._validate_structure(data)

        graph = BoardGraph()

        # Load nodes
        node_ids: set[int] = set()
        for node_data in data["nodes"]:
            node_id, position = self._parse_node(node_data)
            if node_id in node_ids:
                raise BoardLoadError(f"Duplicate node ID: {node_id}")
            node_ids.add(node_id)
            graph.add_node(node_id, position=position)

        # Load edges, merging transports between the same pair
        for edge_data in data["edges"]:
            if not isinstance(edge_data, list) or len(edge_data) != 3:
                raise BoardLoadError(f"Edge must be [node_a, node_b, transport]: {edge_data}")
            node_a, node_b, transport_name = edge_data

            if not _is_int(node_a) or not _is_int(node_b):
                raise BoardLoadError(f"Edge endpoints must be integer node IDs: {edge_data}")
            if node_a not in node_ids:
                raise BoardLoadError(f"Edge references unknown node: {node_a}")
            if node_b not in node_ids:
                raise BoardLoadError(f"Edge references unknown node: {node_b}")

            try:
                transport = Transport(transport_name)
            except (ValueError, TypeError):
                valid = ", ".join(t.value for t in Transport)
                raise BoardLoadError(
                    f"Invalid transport '{transport_name}' on edge [{node_a}, {node_b}]. "
                    f"Valid transports: {valid}"
                )

            try:
                graph.add_route(node_a, node_b, transport)
            except ValueError as e:
                raise BoardLoadError(str(e)) from e

        self._load_start_locations(graph, data, node_ids)

        self._validate_graph(graph)

        return graph

    def _validate_structure(self, data: dict[str, Any]) -> None:
        """Validate the basic structure of the board data."""
        if not isinstance(data, dict):
            raise BoardLoadError("Board data must be a dictionary")

        if "nodes" not in data:
            raise BoardLoadError("Board data missing 'nodes' key")

        if "edges" not in data:
            raise BoardLoadError("Board data missing 'edges' key")

        if not isinstance(data["nodes"], list):
            raise BoardLoadError("'nodes' must be a list")

        if not isinstance(data["edges"], list):
            raise BoardLoadError("'edges' must be a list")

        if len(data["nodes"]) == 0:
            raise BoardLoadError("Board must have at least one node")

    def _parse_node(self, node_data: Any) -> tuple[int, tuple[float, float] | None]:
        """Parse a node entry: either a bare ID or an object with 'id'."""
        if isinstance(node_data, int):
            node_id, position = node_data, None
        elif isinstance(node_data, dict):
            if "id" not in node_data:
                raise BoardLoadError("Node missing required field: id")
            node_id = node_data["id"]
            position = None
            if "position" in node_data:
                position_data = node_data["position"]
                if not isinstance(position_data, dict) or "x" not in position_data or "y" not in position_data:
                    raise BoardLoadError(f"Invalid position format for node {node_id}")
                position = (position_data["x"], position_data["y"])
        else:
            raise BoardLoadError(f"Invalid node entry: {node_data!r}")

        if not _is_int(node_id) or node_id < 0:
            raise BoardLoadError(f"Invalid node ID: {node_id}")

        return node_id, position

    def _create_schedule(self, data: dict[str, Any]) -> tuple[bool, ...]:
        """Build the reveal schedule, defaulting to the standard 24 rounds."""
        rounds = data.get("rounds", STANDARD_ROUND_COUNT)
        if "reveal_rounds" in data:
            reveal_rounds = data["reveal_rounds"]
        elif rounds == STANDARD_ROUND_COUNT:
            reveal_rounds = list(STANDARD_REVEAL_ROUNDS)
        else:
            reveal_rounds = []

        if not _is_int(rounds) or rounds < 1:
            raise BoardLoadError(f"'rounds' must be a positive integer, got {rounds!r}")
        if not isinstance(reveal_rounds, list) or not all(_is_int(r) for r in reveal_rounds):
            raise BoardLoadError(f"'reveal_rounds' must be a list of integers, got {reveal_rounds!r}")

        try:
            return make_reveal_schedule(rounds, reveal_rounds)
        except ValueError as e:
            raise BoardLoadError(str(e)) from e

    def _load_start_locations(
        self,
        graph: BoardGraph,
        data: dict[str, Any],
        node_ids: set[int],
    ) -> None:
        """Read the optional start location lists onto the graph."""
        starts = data.get("start_locations")
        if starts is None:
            if self.strict:
                raise BoardLoadError("Board data missing 'start_locations' key")
            return
        if not isinstance(starts, dict):
            raise BoardLoadError("'start_locations' must be a dictionary")

        mr_x_starts = starts.get("mr_x", [])
        detective_starts = starts.get("detectives", [])
        for key, locations in (("mr_x", mr_x_starts), ("detectives", detective_starts)):
            if not isinstance(locations, list) or not all(_is_int(n) for n in locations):
                raise BoardLoadError(f"'start_locations.{key}' must be a list of node IDs")
        for node_id in [*mr_x_starts, *detective_starts]:
            if node_id not in node_ids:
                raise BoardLoadError(f"Start location references unknown node: {node_id}")

        if self.strict:
            if not mr_x_starts:
                raise BoardLoadError("Expected at least one MrX start location")
            if len(set(detective_starts)) < MAX_DETECTIVES:
                raise BoardLoadError(
                    f"Expected at least {MAX_DETECTIVES} distinct detective start locations, "
                    f"found {len(set(detective_starts))}"
                )

        graph.set_start_locations(mr_x_starts, detective_starts)

    def _validate_graph(self, graph: BoardGraph) -> None:
        """Validate the complete graph structure."""
        # All stations must be reachable from any station
        if not graph.is_connected():
            unreachable = set(graph.nodes) - self._component_of(graph, graph.nodes[0])
            raise BoardLoadError(
                f"Graph is not connected. Unreachable nodes: {sorted(unreachable)}"
            )

    def _component_of(self, graph: BoardGraph, node_id: int) -> set[int]:
        return set(nx.node_connected_component(graph.graph, node_id))


def load_board(file_path: str | Path, strict: bool = True) -> BoardGraph:
    """Convenience function to load a board graph from a file.

    Args:
        file_path: Path to the JSON board file.
        strict: If True, enforce strict validation.

    Returns:
        A BoardGraph instance with the loaded topology.
    """
    return load_setup(file_path, strict=strict).graph


def load_setup(file_path: str | Path, strict: bool = True) -> GameSetup:
    """Convenience function to load a board and its reveal schedule."""
    loader = BoardLoader(strict=strict)
    return loader.load_from_file(file_path)


def load_default_setup() -> GameSetup:
    """Load the default board and its reveal schedule.

    Raises:
        BoardLoadError: If the default board file is missing or invalid.
    """
    return load_setup(resource_path("default_board.json"), strict=True)


def load_default_board() -> BoardGraph:
    """Load the default board.

    Returns:
        A BoardGraph instance with the default board topology.
    """
    return load_default_setup().graph


def get_board_stats(graph: BoardGraph) -> dict[str, Any]:
    """Get statistics about a board graph.

    Args:
        graph: The board graph to analyze.

    Returns:
        Dictionary with board statistics.
    """
    # Count edges carrying each transport kind
    transport_counts: dict[str, int] = {t.value: 0 for t in Transport}
    for _, transports in graph.edges():
        for transport in transports:
            transport_counts[transport.value] += 1

    degrees = [len(graph.adjacent_nodes(node_id)) for node_id in graph.nodes]

    return {
        "num_nodes": graph.num_nodes(),
        "num_edges": graph.num_edges(),
        "edges_by_transport": transport_counts,
        "max_degree": max(degrees, default=0),
        "dead_ends": sum(1 for degree in degrees if degree <= 1),
        "num_mr_x_starts": len(graph.mr_x_start_locations),
        "num_detective_starts": len(graph.detective_start_locations),
    }
