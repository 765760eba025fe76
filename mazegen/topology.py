# topology.py
# -----------------------------------------------------------------------------
# Maze topology: a random spanning tree over the dual graph (the passages)
# and the unique tree path between two terminal vertices (the solution).
#
# All randomness comes from one random.Random(seed) passed down explicitly,
# so (dual graph, seed, algorithm) always yields the same tree and path.
# -----------------------------------------------------------------------------
import hashlib
import random
from collections import deque
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Optional, Tuple

from mazegen.embedded import EmbeddedGraph
from mazegen.errors import ConfigurationError, DisconnectedGraphError, GraphError, InconsistentTreeError
from mazegen.graph import Edge, Graph, Vertex
from mazegen.lattice import LatticeSpec

DEF_ALGORITHM = "kruskal"


# -------------------------
# Spanning-tree builders
# -------------------------

def kruskal_tree(graph: Graph, rng: random.Random) -> List[Edge]:
    """Shuffle all connections, keep each one that joins two different components."""
    edges = list(graph.connections())
    rng.shuffle(edges)
    parent: Dict[Vertex, Vertex] = {v: v for v in graph.vertices()}

    def find(v: Vertex) -> Vertex:
        root = v
        while parent[root] is not root:
            root = parent[root]
        while parent[v] is not root:
            parent[v], v = root, parent[v]
        return root

    target = graph.vertex_count - 1
    chosen: List[Edge] = []
    for e in edges:
        if len(chosen) == target:
            break
        ra, rb = find(e.source), find(e.destination)
        if ra is rb:
            continue
        parent[ra] = rb
        chosen.append(e)
    return chosen


def prim_tree(graph: Graph, rng: random.Random) -> List[Edge]:
    """Grow from a random root, each step taking a random frontier edge."""
    vertices = graph.vertices()
    root = vertices[rng.randrange(len(vertices))]
    in_tree = {root}
    frontier = graph.edges(root)
    chosen: List[Edge] = []
    while frontier:
        i = rng.randrange(len(frontier))
        frontier[i], frontier[-1] = frontier[-1], frontier[i]
        e = frontier.pop()
        if e.destination in in_tree:
            continue
        in_tree.add(e.destination)
        chosen.append(e)
        frontier.extend(x for x in graph.edges(e.destination) if x.destination not in in_tree)
    return chosen


def backtracker_tree(graph: Graph, rng: random.Random) -> List[Edge]:
    """Randomized depth-first carving with an explicit stack."""
    vertices = graph.vertices()
    root = vertices[rng.randrange(len(vertices))]
    visited = {root}
    stack = [root]
    chosen: List[Edge] = []
    while stack:
        options = [e for e in graph.edges(stack[-1]) if e.destination not in visited]
        if not options:
            stack.pop()
            continue
        e = rng.choice(options)
        visited.add(e.destination)
        chosen.append(e)
        stack.append(e.destination)
    return chosen


TREE_BUILDERS: Dict[str, Callable[[Graph, random.Random], List[Edge]]] = {
    "kruskal": kruskal_tree,
    "prim": prim_tree,
    "backtracker": backtracker_tree,
}


def tree_builder(name: str) -> Callable[[Graph, random.Random], List[Edge]]:
    try:
        return TREE_BUILDERS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown spanning-tree algorithm {name!r} (expected one of {sorted(TREE_BUILDERS)})"
        ) from None


# -------------------------
# Path extraction
# -------------------------

def tree_path(tree: Graph, start: Vertex, end: Vertex) -> List[Edge]:
    """
    Edges from start to end, one directed record per step. In a tree this is
    the only simple path, so BFS order does not matter.
    """
    q = deque([start])
    via: Dict[Vertex, Optional[Edge]] = {start: None}
    while q:
        u = q.popleft()
        if u is end:
            break
        for e in tree.edges(u):
            if e.destination not in via:
                via[e.destination] = e
                q.append(e.destination)
    if end not in via:
        raise InconsistentTreeError(f"{end!r} is unreachable from {start!r} in the spanning tree")
    path: List[Edge] = []
    cur = end
    while via[cur] is not None:
        e = via[cur]
        path.append(e)
        cur = e.source
    path.reverse()
    return path


def generate_topology(dual: Graph, seed: int,
                      start: Optional[Vertex] = None, end: Optional[Vertex] = None,
                      algorithm: str = DEF_ALGORITHM) -> Tuple[Graph, List[Edge]]:
    """
    Random spanning tree of `dual` plus the tree path start -> end.
    Terminals default to the first and last vertex of the dual graph.
    """
    build = tree_builder(algorithm)
    if dual.vertex_count == 0:
        raise GraphError("Cannot span an empty graph")
    if not dual.is_connected():
        raise DisconnectedGraphError(
            f"Dual graph with {dual.vertex_count} vertices is not connected; no spanning tree exists"
        )
    vertices = dual.vertices()
    start = vertices[0] if start is None else start
    end = vertices[-1] if end is None else end
    for v in (start, end):
        dual.index_of(v)

    rng = random.Random(seed)
    tree = dual.spanning(build(dual, rng))
    if tree.edge_count != dual.vertex_count - 1:
        raise InconsistentTreeError(
            f"{algorithm} produced {tree.edge_count} edges for {dual.vertex_count} vertices"
        )
    return tree, tree_path(tree, start, end)


# -------------------------
# Maze
# -------------------------

@dataclass
class Maze:
    """
    One generated maze: the full lattice, its spanning tree and the solution.
    Path length is counted in steps, so the path covers len(path) + 1 cells.
    """
    lattice: LatticeSpec
    dual_graph: EmbeddedGraph
    spanning_tree: EmbeddedGraph
    path: List[Edge]
    seed: int
    algorithm: str = DEF_ALGORITHM

    @property
    def vertex_count(self) -> int:
        return self.dual_graph.vertex_count

    @property
    def path_cell_count(self) -> int:
        return len(self.path) + 1

    @property
    def ratio(self) -> float:
        return self.path_cell_count / self.vertex_count

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return self.lattice.canvas_size

    def passages(self, vertex: Vertex) -> List[Edge]:
        """Incident edges of `vertex` restricted to the spanning tree."""
        return self.spanning_tree.edges(vertex)

    def path_keys(self) -> List[Tuple[Hashable, Hashable]]:
        return [e.keys() for e in self.path]

    def tree_keys(self) -> List[Tuple[Hashable, Hashable]]:
        return [e.keys() for e in self.spanning_tree.connections()]

    def signature(self) -> str:
        parts = sorted(f"{a}-{b}" for a, b in self.tree_keys())
        return hashlib.sha256(";".join(parts).encode("ascii")).hexdigest()


def generate_maze(lattice: LatticeSpec, seed: int, algorithm: str = DEF_ALGORITHM) -> Maze:
    """Build a fresh dual graph for `lattice` and carve it with `seed`."""
    dual = lattice.build()
    tree, path = generate_topology(dual, seed, algorithm=algorithm)
    return Maze(lattice=lattice, dual_graph=dual, spanning_tree=tree,
                path=path, seed=seed, algorithm=algorithm)


__all__ = [
    "DEF_ALGORITHM", "TREE_BUILDERS", "Maze",
    "kruskal_tree", "prim_tree", "backtracker_tree", "tree_builder",
    "tree_path", "generate_topology", "generate_maze",
]
