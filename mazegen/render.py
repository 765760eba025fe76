# render.py
# -----------------------------------------------------------------------------
# Paints a generated maze with Pillow. Reads only vertex positions and edge
# lists: the dual graph, the spanning tree (passages) and the solution path.
# -----------------------------------------------------------------------------
from enum import Enum
from typing import Iterable, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from mazegen.embedded import EmbeddedGraph, Position
from mazegen.topology import Maze

# ========= STYLE =========
BACKGROUND = (255, 255, 255)
DUAL_COLOR = (220, 220, 220)
PASSAGE_COLOR = (0, 0, 0)
PATH_COLOR = (255, 0, 0)
CAPTION_COLOR = (0, 0, 0)

PASSAGE_PX = 2
PATH_PX = 3
DUAL_PX = 1
CAPTION_PAD_PX = 30   # extra rows added on top for the caption
CAPTION_FONT_PX = 20
CAPTION_FONTS = ("cour.ttf", "DejaVuSansMono.ttf", "DejaVuSans.ttf")
CAPTION_BASELINE = (10, 25)


class MazeLayer(Enum):
    DUAL_GRAPH = "dual"
    RESULTING_GRAPH = "tree"
    SHORTEST_PATH = "path"


DEFAULT_LAYERS = (MazeLayer.RESULTING_GRAPH, MazeLayer.SHORTEST_PATH)


# ---------- drawing primitives ----------
def _line(draw: ImageDraw.ImageDraw, p0: Position, p1: Position, w: int, color):
    draw.line([(int(p0[0]), int(p0[1])), (int(p1[0]), int(p1[1]))], fill=color, width=int(w))

def _load_font(size: int = CAPTION_FONT_PX):
    for name in CAPTION_FONTS:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    try:
        return ImageFont.load_default(size=size)
    except (TypeError, ImportError):
        # old Pillow or no FreeType: fixed-size bitmap font only
        return ImageFont.load_default()

def cell_offset(maze: Maze) -> Tuple[float, float]:
    """Positions sit on cell corners; shift by half a cell to draw at cell centres."""
    return maze.lattice.cell_width / 2.0, maze.lattice.cell_height / 2.0

def _shift(p: Position, off: Tuple[float, float]) -> Position:
    return p[0] + off[0], p[1] + off[1]


def paint_graph(draw: ImageDraw.ImageDraw, graph: EmbeddedGraph, off, width: int, color):
    """Every vertex as a point, every connection as a segment."""
    for v in graph.vertices():
        x, y = _shift(graph.position(v), off)
        draw.point((int(x), int(y)), fill=color)
    for e in graph.connections():
        _line(draw, _shift(graph.position(e.source), off),
              _shift(graph.position(e.destination), off), width, color)


def paint_path(draw: ImageDraw.ImageDraw, maze: Maze, off, width: int = PATH_PX, color=PATH_COLOR):
    g = maze.spanning_tree
    for e in maze.path:
        _line(draw, _shift(g.position(e.source), off), _shift(g.position(e.destination), off), width, color)


def paint_maze(maze: Maze, layers: Iterable[MazeLayer] = DEFAULT_LAYERS) -> Image.Image:
    w, h = maze.canvas_size
    im = Image.new("RGB", (w, h), BACKGROUND)
    dr = ImageDraw.Draw(im)
    off = cell_offset(maze)
    layers = set(layers)

    # Dual graph below passages, path on top
    if MazeLayer.DUAL_GRAPH in layers:
        paint_graph(dr, maze.dual_graph, off, DUAL_PX, DUAL_COLOR)
    if MazeLayer.RESULTING_GRAPH in layers:
        paint_graph(dr, maze.spanning_tree, off, PASSAGE_PX, PASSAGE_COLOR)
    if MazeLayer.SHORTEST_PATH in layers:
        paint_path(dr, maze, off)
    return im


def expand_to_top(img: Image.Image, new_w: int, new_h: int) -> Image.Image:
    """Paste `img` bottom-aligned on a larger white canvas."""
    result = Image.new("RGB", (new_w, new_h), BACKGROUND)
    result.paste(img, (0, new_h - img.size[1]))
    return result


def format_caption(title: str, width: int, height: int, desired_ratio: float, epsilon: float) -> str:
    return f"maze {title}, {width}x{height}, {desired_ratio:.2f}±{epsilon:.3f}"


def draw_caption(draw: ImageDraw.ImageDraw, caption: str, font=None):
    """Left-aligned text sitting on the CAPTION_BASELINE row."""
    font = _load_font() if font is None else font
    x, y = CAPTION_BASELINE
    if isinstance(font, ImageFont.FreeTypeFont):
        draw.text((x, y), caption, fill=CAPTION_COLOR, font=font, anchor="ls")
    else:
        # bitmap fonts take no anchor; put the bottom of the text box on the baseline
        bottom = draw.textbbox((0, 0), caption, font=font)[3]
        draw.text((x, y - bottom), caption, fill=CAPTION_COLOR, font=font)


def render_maze(maze: Maze, caption: Optional[str] = None,
                layers: Iterable[MazeLayer] = DEFAULT_LAYERS) -> Image.Image:
    im = paint_maze(maze, layers)
    if caption is None:
        return im
    w, h = im.size
    im = expand_to_top(im, w, h + CAPTION_PAD_PX)
    draw_caption(ImageDraw.Draw(im), caption)
    return im


def save_render(im: Image.Image, out_png: str) -> None:
    im.save(out_png, format="PNG")


__all__ = [
    "MazeLayer", "DEFAULT_LAYERS", "BACKGROUND", "PATH_COLOR", "PASSAGE_COLOR", "DUAL_COLOR",
    "CAPTION_PAD_PX", "paint_graph", "paint_path", "paint_maze", "expand_to_top",
    "CAPTION_FONT_PX", "CAPTION_BASELINE", "format_caption", "draw_caption", "render_maze", "save_render",
]
