"""
Undirected transaction adjacency graph.

Backed by a NetworkX graph. Vertices are txids; an edge links a parent
transaction to the child that spends one of its outputs. Mutations are
serialized with a lock so concurrent resolution tasks (or executor threads)
can share one graph.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

import networkx as nx

from txgraph.core.exceptions import UnknownVertexError


@dataclass(frozen=True)
class VertexReport:
    """One vertex of a snapshot: its txid and adjacent txids."""

    txid: str
    adjacent: tuple[str, ...]

    @property
    def degree(self) -> int:
        return len(self.adjacent)

    def to_dict(self) -> dict[str, Any]:
        return {"txid": self.txid, "degree": self.degree, "adjacent": list(self.adjacent)}


@dataclass(frozen=True)
class GraphSnapshot:
    """Read-only view of the graph at one point in time."""

    vertices: tuple[VertexReport, ...]
    edge_count: int

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    def adjacency(self) -> dict[str, list[str]]:
        return {v.txid: list(v.adjacent) for v in self.vertices}

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form."""
        return {
            "vertex_count": self.vertex_count,
            "edge_count": self.edge_count,
            "vertices": [v.to_dict() for v in self.vertices],
        }


class TransactionGraph:
    """
    Undirected adjacency graph of transactions.

    add_vertex is insert-if-absent: re-adding a vertex keeps its edges.
    add_edge requires both endpoints to exist and links them symmetrically.
    Adjacency order follows the order neighbours were first linked.
    """

    def __init__(self) -> None:
        self._g = nx.Graph()
        self._lock = threading.Lock()

    def add_vertex(self, txid: str) -> None:
        with self._lock:
            if txid not in self._g:
                self._g.add_node(txid)

    def add_edge(self, a: str, b: str) -> None:
        with self._lock:
            for v in (a, b):
                if v not in self._g:
                    raise UnknownVertexError(v)
            self._g.add_edge(a, b)

    def has_vertex(self, txid: str) -> bool:
        return txid in self._g

    def has_edge(self, a: str, b: str) -> bool:
        return self._g.has_edge(a, b)

    def neighbors(self, txid: str) -> list[str]:
        with self._lock:
            if txid not in self._g:
                raise UnknownVertexError(txid)
            return list(self._g.neighbors(txid))

    @property
    def vertex_count(self) -> int:
        return self._g.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._g.number_of_edges()

    def __len__(self) -> int:
        return self.vertex_count

    def __contains__(self, txid: object) -> bool:
        return txid in self._g

    def snapshot(self) -> GraphSnapshot:
        """Copy vertices (in insertion order) and their adjacency lists."""
        with self._lock:
            vertices = tuple(
                VertexReport(txid=node, adjacent=tuple(self._g.neighbors(node)))
                for node in self._g.nodes()
            )
            return GraphSnapshot(vertices=vertices, edge_count=self._g.number_of_edges())

    def to_dict(self) -> dict[str, Any]:
        return self.snapshot().to_dict()
