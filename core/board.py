"""Board graph model for the Scotland Yard rules engine.

The board is a static undirected graph:
- Nodes are numbered stations pieces can stand on
- Edges connect stations and are labelled with one or more transport kinds
- Topology is fixed once a game starts; only piece positions change

The graph is stored as a networkx Graph where each edge carries a
``transports`` attribute holding a frozenset of Transport values.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Optional

import networkx as nx

from .constants import Transport, make_reveal_schedule


# Type aliases for clarity
NodeId = int
EdgeId = tuple[int, int]  # Canonical form: (min_id, max_id)


def make_edge_id(node_a: int, node_b: int) -> EdgeId:
    """Create a canonical edge ID from two node IDs.

    Edge IDs are always stored with the smaller node ID first
    to ensure consistent lookups regardless of direction.
    """
    return (min(node_a, node_b), max(node_a, node_b))


class BoardGraph:
    """The game board represented as a transport-labelled graph.

    Attributes:
        graph: The underlying networkx graph. Edge attribute ``transports``
            holds the transport kinds available between the two nodes.
    """

    def __init__(self, graph: Optional[nx.Graph] = None):
        self.graph: nx.Graph = graph if graph is not None else nx.Graph()

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_node(self, node_id: NodeId, position: Optional[tuple[float, float]] = None) -> None:
        """Add a station to the board."""
        self.graph.add_node(node_id, position=position)

    def add_route(self, node_a: NodeId, node_b: NodeId, transport: Transport) -> None:
        """Connect two stations with a transport kind.

        Adding a second transport between the same pair extends the edge's
        label set. Missing endpoints are added as nodes.

        Raises:
            ValueError: On a self-loop or a repeated (pair, transport) route.
        """
        if node_a == node_b:
            raise ValueError(f"Self-loop route not allowed at node {node_a}")
        existing = self.edge_transports(node_a, node_b)
        if transport in existing:
            raise ValueError(
                f"Duplicate {transport.value} route between {node_a} and {node_b}"
            )
        for node_id in (node_a, node_b):
            if node_id not in self.graph:
                self.add_node(node_id)
        self.graph.add_edge(node_a, node_b, transports=existing | {transport})

    def set_start_locations(
        self,
        mr_x: Sequence[NodeId],
        detectives: Sequence[NodeId],
    ) -> None:
        """Record the candidate starting stations for each side."""
        self.graph.graph["mr_x_starts"] = tuple(mr_x)
        self.graph.graph["detective_starts"] = tuple(detectives)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> list[NodeId]:
        """All station IDs in ascending order."""
        return sorted(self.graph.nodes)

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self.graph

    def is_empty(self) -> bool:
        return self.graph.number_of_nodes() == 0

    def num_nodes(self) -> int:
        return self.graph.number_of_nodes()

    def num_edges(self) -> int:
        return self.graph.number_of_edges()

    def adjacent_nodes(self, node_id: NodeId) -> frozenset[NodeId]:
        """Get all stations one edge away from a node.

        Unknown nodes have no neighbours.
        """
        if node_id not in self.graph:
            return frozenset()
        return frozenset(self.graph.adj[node_id])

    def edge_transports(self, node_a: NodeId, node_b: NodeId) -> frozenset[Transport]:
        """Get the transport kinds between two nodes (empty if not adjacent)."""
        data = self.graph.get_edge_data(node_a, node_b)
        if data is None:
            return frozenset()
        return data["transports"]

    def edges(self) -> Iterator[tuple[EdgeId, frozenset[Transport]]]:
        """Iterate over (edge_id, transports) for every edge."""
        for node_a, node_b, transports in self.graph.edges(data="transports"):
            yield make_edge_id(node_a, node_b), transports

    def position(self, node_id: NodeId) -> Optional[tuple[float, float]]:
        """Get a station's drawing position, if the board defines one."""
        return self.graph.nodes[node_id].get("position")

    def is_connected(self) -> bool:
        """Check that every station is reachable from every other."""
        if self.num_nodes() <= 1:
            return True
        return nx.is_connected(self.graph)

    @property
    def mr_x_start_locations(self) -> tuple[NodeId, ...]:
        return self.graph.graph.get("mr_x_starts", ())

    @property
    def detective_start_locations(self) -> tuple[NodeId, ...]:
        return self.graph.graph.get("detective_starts", ())

    def __repr__(self) -> str:
        return f"BoardGraph(nodes={self.num_nodes()}, edges={self.num_edges()})"


@dataclass(frozen=True)
class GameSetup:
    """Fixed game configuration shared by every state of one game.

    Attributes:
        graph: The board.
        moves: Reveal schedule, one flag per MrX round; True means MrX's
            destination is disclosed in the travel log that round.
    """

    graph: BoardGraph
    moves: tuple[bool, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "moves", tuple(bool(flag) for flag in self.moves))

    @classmethod
    def with_reveal_rounds(
        cls,
        graph: BoardGraph,
        round_count: int,
        reveal_rounds: Sequence[int],
    ) -> GameSetup:
        """Create a setup from a round count and 1-indexed reveal rounds."""
        return cls(graph=graph, moves=make_reveal_schedule(round_count, list(reveal_rounds)))

    @property
    def round_count(self) -> int:
        return len(self.moves)

    def is_reveal_round(self, round_index: int) -> bool:
        """Check whether a 0-indexed round reveals MrX's destination."""
        return self.moves[round_index]
