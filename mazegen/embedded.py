# embedded.py
# Graph whose vertices can be placed on a 2D canvas.
from typing import Callable, List, Tuple

from mazegen.graph import Graph, Vertex

Position = Tuple[float, float]
Positioning = Callable[[Vertex], Position]


class EmbeddedGraph(Graph):
    """
    A Graph plus a positioning rule. The rule maps a vertex to (x, y) using
    only the vertex's own attributes (its key); generation never reads it.
    """

    def __init__(self, positioning: Positioning):
        super().__init__()
        self.positioning = positioning

    def position(self, vertex: Vertex) -> Position:
        self.index_of(vertex)  # membership check
        return self.positioning(vertex)

    def positions(self) -> List[Position]:
        return [self.positioning(v) for v in self.vertices()]

    def bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) over all vertex positions."""
        pts = self.positions()
        if not pts:
            return 0.0, 0.0, 0.0, 0.0
        xs, ys = zip(*pts)
        return min(xs), min(ys), max(xs), max(ys)

    def _blank(self) -> "EmbeddedGraph":
        return EmbeddedGraph(self.positioning)


__all__ = ["Position", "Positioning", "EmbeddedGraph"]
