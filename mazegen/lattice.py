# lattice.py
# -----------------------------------------------------------------------------
# Lattice kinds and the dual-graph builders behind them. Only the rectangular
# lattice exists; new kinds register a builder and a positioning rule here.
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable, Dict, Tuple

from mazegen.embedded import EmbeddedGraph, Position, Positioning
from mazegen.errors import ConfigurationError
from mazegen.graph import Vertex

# ========= DEFAULT GEOMETRY =========
DEF_CELL_PX = 20   # cell width and height (px); cosmetic only
MIN_SIDE = 2       # a lattice needs more than one cell per side


class LatticeKind(Enum):
    RECTANGULAR = "rect"

    @classmethod
    def from_tag(cls, tag: str) -> "LatticeKind":
        for kind in cls:
            if kind.value == tag:
                return kind
        raise ConfigurationError(f"Unknown lattice kind tag: {tag!r}")


def rectangular_position(vertex: Vertex, cell_width: float, cell_height: float) -> Position:
    row, column = vertex.key
    return float(column * cell_width), float(row * cell_height)


POSITIONING: Dict[LatticeKind, Callable[..., Position]] = {
    LatticeKind.RECTANGULAR: rectangular_position,
}


def positioning_for(kind: LatticeKind, cell_width: float, cell_height: float) -> Positioning:
    return partial(POSITIONING[kind], cell_width=cell_width, cell_height=cell_height)


def _check_side(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an int, got {value!r}")
    if value < MIN_SIDE:
        raise ConfigurationError(f"{name} must be >= {MIN_SIDE}, got {value}")


def _check_cell(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive number, got {value!r}")


def build_rectangular_lattice(width: int, height: int,
                              cell_width: float = DEF_CELL_PX,
                              cell_height: float = DEF_CELL_PX) -> EmbeddedGraph:
    """
    height rows x width columns, row-major. Vertex keys are (row, column);
    each vertex is connected to its right and lower neighbour, which gives
    every cell its up/down/left/right links exactly once.
    """
    _check_side("width", width)
    _check_side("height", height)
    _check_cell("cell_width", cell_width)
    _check_cell("cell_height", cell_height)

    graph = EmbeddedGraph(positioning_for(LatticeKind.RECTANGULAR, cell_width, cell_height))
    grid = [[Vertex((r, c)) for c in range(width)] for r in range(height)]
    for row in grid:
        for v in row:
            graph.add_vertex(v)

    for r in range(height):
        for c in range(width):
            if c + 1 < width:
                graph.connect(grid[r][c], grid[r][c + 1])
            if r + 1 < height:
                graph.connect(grid[r][c], grid[r + 1][c])
    return graph


BUILDERS: Dict[LatticeKind, Callable[..., EmbeddedGraph]] = {
    LatticeKind.RECTANGULAR: build_rectangular_lattice,
}


def build_lattice(width: int, height: int,
                  cell_width: float = DEF_CELL_PX, cell_height: float = DEF_CELL_PX,
                  kind: LatticeKind = LatticeKind.RECTANGULAR) -> EmbeddedGraph:
    try:
        builder = BUILDERS[kind]
    except KeyError:
        raise ConfigurationError(f"No lattice builder for {kind!r}") from None
    return builder(width, height, cell_width, cell_height)


@dataclass(frozen=True)
class LatticeSpec:
    """Everything needed to rebuild the same dual graph: kind, size and cell scale."""
    width: int
    height: int
    cell_width: float = DEF_CELL_PX
    cell_height: float = DEF_CELL_PX
    kind: LatticeKind = LatticeKind.RECTANGULAR

    def __post_init__(self):
        _check_side("width", self.width)
        _check_side("height", self.height)
        _check_cell("cell_width", self.cell_width)
        _check_cell("cell_height", self.cell_height)

    def build(self) -> EmbeddedGraph:
        return build_lattice(self.width, self.height, self.cell_width, self.cell_height, self.kind)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return int(round(self.width * self.cell_width)), int(round(self.height * self.cell_height))


__all__ = [
    "DEF_CELL_PX", "MIN_SIDE", "LatticeKind", "LatticeSpec",
    "rectangular_position", "positioning_for",
    "build_rectangular_lattice", "build_lattice",
]
