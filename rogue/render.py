"""
Rasterizing the dungeon for display.

The grid helpers classify every cell of a region into a numpy array of
CellKind values; the ASCII and image helpers turn such a grid into something
a terminal or an image viewer can show.
"""

import logging
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from .entity import Entity
from .geometry import Rectangle
from .raycast import DEFAULT_Y_SCALE
from .world import CellKind, Map

logger = logging.getLogger(__name__)

# Type Definition
CellGrid = np.ndarray

CELL_TO_ASCII: Dict[CellKind, str] = {
    CellKind.OUT_OF_BOUNDS: " ",
    CellKind.WALL: "#",
    CellKind.FLOOR: ".",
    CellKind.NOT_VISIBLE: ":",
}

PLAYER_GLYPH = "@"
ENTITY_GLYPH = "O"
START_GLYPH = "<"
END_GLYPH = ">"

# BGR, as the image tool writes with OpenCV
CELL_TO_COLOR: Dict[CellKind, Tuple[int, int, int]] = {
    CellKind.OUT_OF_BOUNDS: (0, 0, 0),
    CellKind.WALL: (96, 96, 96),
    CellKind.FLOOR: (200, 200, 200),
    CellKind.NOT_VISIBLE: (64, 40, 40),
}


def render_viewport(
    dungeon: Map,
    viewport: Rectangle,
    viewer: Tuple[int, int],
    line_of_sight: bool = True,
    y_scale: float = DEFAULT_Y_SCALE,
    sight_radius: Optional[int] = None,
) -> CellGrid:
    """
    Classify every cell of viewport as seen from viewer.

    Returns:
        A (viewport.height, viewport.width) array of CellKind values, indexed
        [row, col] relative to the viewport's top-left corner.
    """
    grid: CellGrid = np.full(
        (viewport.height, viewport.width), int(CellKind.OUT_OF_BOUNDS), dtype=np.int8
    )
    viewer_x, viewer_y = viewer

    dungeon.set_active_region(viewport)
    try:
        for row in range(viewport.height):
            for col in range(viewport.width):
                grid[row, col] = dungeon.classify(
                    viewport.left + col,
                    viewport.top + row,
                    viewer_x,
                    viewer_y,
                    line_of_sight=line_of_sight,
                    y_scale=y_scale,
                    sight_radius=sight_radius,
                )
    finally:
        dungeon.clear_active_region()
    return grid


def rasterize_map(dungeon: Map) -> CellGrid:
    """The whole map, without line of sight."""
    start = dungeon.start
    return render_viewport(dungeon, dungeon.bounding_box, start.xy, line_of_sight=False)


def render_ascii(
    dungeon: Map,
    viewport: Rectangle,
    entities: Iterable[Entity] = (),
    player: Optional[Entity] = None,
    line_of_sight: bool = True,
    y_scale: float = DEFAULT_Y_SCALE,
    sight_radius: Optional[int] = None,
) -> str:
    """
    Draw viewport as text, one line per row.

    Entities are only drawn on visible floor. Line of sight is traced from the
    player when there is one, else from the map's start point.
    """
    viewer = player.xy if player is not None else dungeon.start.xy
    grid = render_viewport(dungeon, viewport, viewer, line_of_sight, y_scale, sight_radius)
    rows = [[CELL_TO_ASCII[CellKind(int(cell))] for cell in row] for row in grid]

    def put(x: int, y: int, glyph: str) -> None:
        row, col = y - viewport.top, x - viewport.left
        if 0 <= row < viewport.height and 0 <= col < viewport.width:
            if grid[row, col] == CellKind.FLOOR:
                rows[row][col] = glyph

    start, end = dungeon.start, dungeon.end
    put(start.x, start.y, START_GLYPH)
    put(end.x, end.y, END_GLYPH)
    for entity in entities:
        if entity is not player:
            put(entity.x, entity.y, ENTITY_GLYPH)
    if player is not None:
        put(player.x, player.y, PLAYER_GLYPH)

    return "\n".join("".join(row) for row in rows)


def grid_to_image(grid: CellGrid, cell_size: int = 8) -> np.ndarray:
    """
    Expand a cell grid into a BGR image with cell_size x cell_size pixel blocks.
    """
    if cell_size < 1:
        raise ValueError(f"cell_size must be >= 1, got {cell_size}")
    palette = np.zeros((len(CellKind), 3), dtype=np.uint8)
    for kind, color in CELL_TO_COLOR.items():
        palette[int(kind)] = color
    image = palette[grid.astype(np.intp)]
    image = np.repeat(np.repeat(image, cell_size, axis=0), cell_size, axis=1)
    logger.debug("Built %dx%d image from %r grid", image.shape[1], image.shape[0], grid.shape)
    return image
