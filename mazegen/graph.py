# graph.py
# -----------------------------------------------------------------------------
# Vertex -> incident-edge container shared by the lattice builder, the
# spanning-tree generator and the renderer.
#
# Edge convention: connect(a, b) stores one directed record per endpoint
# (a->b in a's list, b->a in b's list). edge_count reports undirected
# connections, so a spanning tree over N vertices has edge_count == N - 1.
# -----------------------------------------------------------------------------
from collections import deque
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Tuple

from mazegen.errors import GraphError


class Vertex:
    """
    Identity-bearing node. Equality and hashing are by identity, so two
    vertices with the same key are still different vertices.

    `key` is the vertex's logical address (a lattice uses (row, column)) and is
    what positioning rules and maze signatures read.
    """

    def __init__(self, key: Hashable = None):
        self.key = key

    def __repr__(self):
        return f"Vertex({self.key!r})"


@dataclass(frozen=True)
class Edge:
    source: Vertex
    destination: Vertex
    weight: Optional[float] = None

    def reversed(self) -> "Edge":
        return Edge(self.destination, self.source, self.weight)

    def keys(self) -> Tuple[Hashable, Hashable]:
        return self.source.key, self.destination.key


class Graph:
    def __init__(self):
        self._vertices: List[Vertex] = []
        self._index: Dict[Vertex, int] = {}
        self._edges: Dict[Vertex, List[Edge]] = {}

    # ---------- construction ----------
    def add_vertex(self, vertex: Vertex) -> int:
        """Append `vertex` and return its index (its position in insertion order)."""
        if vertex in self._index:
            raise GraphError(f"{vertex!r} is already in the graph")
        index = len(self._vertices)
        self._vertices.append(vertex)
        self._index[vertex] = index
        self._edges[vertex] = []
        return index

    def connect(self, a: Vertex, b: Vertex, weight: Optional[float] = None) -> Edge:
        for v in (a, b):
            if v not in self._index:
                raise GraphError(f"{v!r} is not in the graph")
        if a is b:
            raise GraphError(f"Self-loop on {a!r}")
        if self.are_connected(a, b):
            raise GraphError(f"{a!r} and {b!r} are already connected")
        edge = Edge(a, b, weight)
        self._edges[a].append(edge)
        self._edges[b].append(edge.reversed())
        return edge

    def spanning(self, connections: Iterable[Edge]) -> "Graph":
        """
        New graph of the same kind holding this graph's vertices (same order,
        same indices) and only the given connections.
        """
        sub = self._blank()
        for v in self._vertices:
            sub.add_vertex(v)
        for e in connections:
            sub.connect(e.source, e.destination, e.weight)
        return sub

    def _blank(self) -> "Graph":
        return Graph()

    # ---------- queries ----------
    def vertices(self) -> List[Vertex]:
        return list(self._vertices)

    def edges(self, vertex: Vertex) -> List[Edge]:
        try:
            return list(self._edges[vertex])
        except KeyError:
            raise GraphError(f"{vertex!r} is not in the graph") from None

    def neighbours(self, vertex: Vertex) -> List[Vertex]:
        return [e.destination for e in self.edges(vertex)]

    def index_of(self, vertex: Vertex) -> int:
        try:
            return self._index[vertex]
        except KeyError:
            raise GraphError(f"{vertex!r} is not in the graph") from None

    def are_connected(self, a: Vertex, b: Vertex) -> bool:
        return any(e.destination is b for e in self._edges.get(a, ()))

    def connections(self) -> Iterator[Edge]:
        """Each undirected connection once, as the record stored at its lower-index endpoint."""
        for v in self._vertices:
            i = self._index[v]
            for e in self._edges[v]:
                if self._index[e.destination] > i:
                    yield e

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    @property
    def edge_count(self) -> int:
        return sum(len(es) for es in self._edges.values()) // 2

    def is_connected(self) -> bool:
        if not self._vertices:
            return False
        first = self._vertices[0]
        seen = {first}
        q = deque([first])
        while q:
            u = q.popleft()
            for e in self._edges[u]:
                if e.destination not in seen:
                    seen.add(e.destination)
                    q.append(e.destination)
        return len(seen) == len(self._vertices)

    def __contains__(self, vertex) -> bool:
        return vertex in self._index

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(list(self._vertices))


__all__ = ["Vertex", "Edge", "Graph"]
