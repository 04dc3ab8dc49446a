"""Tests for map classification and the rasterizers."""

import numpy as np
import pytest

from rogue.entity import Entity
from rogue.geometry import Rectangle
from rogue.render import (
    CELL_TO_COLOR,
    grid_to_image,
    rasterize_map,
    render_ascii,
    render_viewport,
)
from rogue.room import Room
from rogue.world import CellKind, Map


def side_by_side():
    """Two unlinked 5x5 rooms sharing a double wall at x = 4 and x = 5."""
    return Map([Room(0, 0, 5, 5), Room(5, 0, 5, 5)])


class TestClassify:
    """Per-cell classification."""

    def test_wall_floor_and_outside(self):
        dungeon = side_by_side()
        assert dungeon.classify(0, 0, 2, 2) == CellKind.WALL
        assert dungeon.classify(2, 2, 2, 2) == CellKind.FLOOR
        assert dungeon.classify(-1, 0, 2, 2) == CellKind.OUT_OF_BOUNDS

    def test_wall_hides_floor_behind_it(self):
        dungeon = side_by_side()
        assert dungeon.classify(7, 2, 2, 2, y_scale=1.0) == CellKind.NOT_VISIBLE
        assert dungeon.classify(7, 2, 2, 2, line_of_sight=False) == CellKind.FLOOR

    def test_active_region_limits_lookups(self):
        dungeon = side_by_side()
        dungeon.set_active_region(Rectangle(0, 0, 5, 5))
        assert dungeon.classify(7, 2, 7, 2) == CellKind.OUT_OF_BOUNDS
        dungeon.clear_active_region()
        assert dungeon.classify(7, 2, 7, 2) == CellKind.FLOOR

    def test_map_needs_rooms(self):
        with pytest.raises(ValueError):
            Map([])


class TestRasterize:
    """Grids of CellKind values."""

    def test_grid_shape_and_values(self):
        dungeon = Map([Room(0, 0, 5, 4)])
        grid = rasterize_map(dungeon)
        assert grid.shape == (4, 5)
        assert grid[0, 0] == CellKind.WALL
        assert grid[1, 1] == CellKind.FLOOR
        assert grid[3, 4] == CellKind.WALL

    def test_viewport_offsets(self):
        dungeon = Map([Room(0, 0, 5, 4)])
        grid = render_viewport(dungeon, Rectangle(-2, -2, 4, 4), (2, 2), line_of_sight=False)
        assert grid[0, 0] == CellKind.OUT_OF_BOUNDS
        assert grid[2, 2] == CellKind.WALL
        assert grid[3, 3] == CellKind.FLOOR

    def test_render_clears_active_region(self):
        dungeon = side_by_side()
        render_viewport(dungeon, Rectangle(0, 0, 5, 5), (2, 2))
        assert len(dungeon.rooms_at(7, 2)) == 1

    def test_grid_to_image(self):
        grid = rasterize_map(Map([Room(0, 0, 5, 4)]))
        image = grid_to_image(grid, cell_size=3)
        assert image.shape == (12, 15, 3)
        assert image.dtype == np.uint8
        assert tuple(image[0, 0]) == CELL_TO_COLOR[CellKind.WALL]
        assert tuple(image[4, 4]) == CELL_TO_COLOR[CellKind.FLOOR]

    def test_grid_to_image_rejects_bad_cell_size(self):
        grid = rasterize_map(Map([Room(0, 0, 5, 4)]))
        with pytest.raises(ValueError):
            grid_to_image(grid, cell_size=0)


class TestRenderAscii:
    """Text rendering."""

    def test_glyphs(self):
        dungeon = side_by_side()
        text = render_ascii(
            dungeon,
            dungeon.bounding_box,
            player=Entity(1, 1),
            entities=[Entity(3, 3)],
            line_of_sight=False,
        )
        rows = text.split("\n")
        assert len(rows) == 5
        assert all(len(row) == 10 for row in rows)
        assert rows[0] == "#" * 10
        assert rows[1][1] == "@"
        assert rows[3][3] == "O"
        assert rows[2][2] == "<"
        assert rows[2][7] == ">"

    def test_fog_behind_walls(self):
        dungeon = side_by_side()
        text = render_ascii(
            dungeon, dungeon.bounding_box, player=Entity(2, 2), y_scale=1.0
        )
        rows = text.split("\n")
        assert rows[2][7] == ":"
        assert rows[2][3] == "."

    def test_entities_on_walls_are_not_drawn(self):
        dungeon = side_by_side()
        text = render_ascii(
            dungeon, dungeon.bounding_box, entities=[Entity(0, 0)], line_of_sight=False
        )
        assert text.split("\n")[0][0] == "#"


class TestMapQueries:
    """Room lookups by region and by cell."""

    def test_rooms_overlapping_ignores_touching_rooms(self):
        dungeon = side_by_side()
        west, east = dungeon.rooms
        found = dungeon.rooms_overlapping(Rectangle(5, 0, 3, 3))
        assert found == [east]
        assert west.collides_with(Rectangle(5, 0, 3, 3))

    def test_rooms_overlapping_spanning_region(self):
        dungeon = side_by_side()
        assert dungeon.rooms_overlapping(Rectangle(4, 4, 2, 2)) == dungeon.rooms
        assert dungeon.rooms_overlapping(Rectangle(20, 20, 3, 3)) == []

    def test_rooms_at(self):
        dungeon = side_by_side()
        west, east = dungeon.rooms
        assert dungeon.rooms_at(4, 0) == [west]
        assert dungeon.rooms_at(5, 0) == [east]
        assert dungeon.rooms_at(10, 0) == []


class TestSightRadius:
    """Floor beyond the sight radius is fogged."""

    def test_classify_outside_radius(self):
        dungeon = Map([Room(0, 0, 9, 7)])
        assert dungeon.classify(5, 3, 4, 3, y_scale=1.0, sight_radius=2) == CellKind.FLOOR
        assert dungeon.classify(7, 3, 4, 3, y_scale=1.0, sight_radius=2) == CellKind.NOT_VISIBLE
        assert dungeon.classify(0, 3, 4, 3, y_scale=1.0, sight_radius=2) == CellKind.WALL

    def test_radius_needs_line_of_sight_on(self):
        dungeon = Map([Room(0, 0, 9, 7)])
        assert dungeon.classify(
            7, 3, 4, 3, line_of_sight=False, sight_radius=2
        ) == CellKind.FLOOR

    def test_y_scale_stretches_radius(self):
        dungeon = Map([Room(0, 0, 9, 7)])
        assert dungeon.classify(4, 5, 4, 3, y_scale=1.0, sight_radius=2) == CellKind.FLOOR
        assert dungeon.classify(4, 5, 4, 3, y_scale=2.0, sight_radius=2) == CellKind.NOT_VISIBLE

    def test_render_ascii_with_radius(self):
        dungeon = Map([Room(0, 0, 9, 7)])
        text = render_ascii(
            dungeon, dungeon.bounding_box, player=Entity(4, 3), y_scale=1.0, sight_radius=2
        )
        rows = text.split("\n")
        assert rows[3][4] == "@"
        assert rows[3][6] == "."
        assert rows[3][7] == ":"
