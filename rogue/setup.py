"""
Game-state setup: generate a dungeon and wire the index, player and movers.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .camera import Camera
from .dungeon_gen import DEFAULT_MAP_CONFIG, MapConfig, generate_dungeon
from .entity import Entity
from .errors import SpawnError
from .event_system import Event, EventBus
from .geometry import Point, Rectangle
from .movement import CollisionRules
from .quadtree import QuadTree
from .raycast import DEFAULT_Y_SCALE
from .render import render_ascii
from .world import Map

logger = logging.getLogger(__name__)

DEFAULT_TREE_DEPTH = 4
DEFAULT_TREE_CAPACITY = 4
DEFAULT_CAMERA_SIZE: Tuple[int, int] = (65, 23)


@dataclass
class GameState:
    """Everything one level needs, owned in one place."""

    dungeon: Map
    tree: QuadTree
    player: Entity
    rules: CollisionRules
    camera: Camera
    event_bus: EventBus
    mobs: List[Entity] = field(default_factory=list)
    follow_player: bool = True

    def move_player(self, dx: int, dy: int) -> bool:
        """Ask the player to step by (dx, dy); the camera follows if enabled."""
        moved = self.player.move_by(dx, dy)
        self.update_camera()
        return moved

    def update_camera(self) -> None:
        if self.follow_player:
            self.camera.move_to(self.player.x, self.player.y)

    def render(
        self,
        line_of_sight: bool = True,
        y_scale: float = DEFAULT_Y_SCALE,
        sight_radius: Optional[int] = None,
    ) -> str:
        """ASCII view of the camera's viewport."""
        self.update_camera()
        viewport = self.camera.viewport()
        visible = self.tree.query(viewport, cull=True)
        return render_ascii(
            self.dungeon,
            viewport,
            entities=visible,
            player=self.player,
            line_of_sight=line_of_sight,
            y_scale=y_scale,
            sight_radius=sight_radius,
        )


def free_floor_cells(dungeon: Map, tree: QuadTree) -> List[Point]:
    """
    Room interior cells with nobody on them, excluding the index border.
    """
    cells: List[Point] = []
    for room in dungeon.rooms:
        for cell in room.floor_cells():
            if tree.is_border(cell.x, cell.y):
                continue
            if tree.query(Rectangle(cell.x, cell.y, 1, 1), cull=True):
                continue
            cells.append(cell)
    return cells


def spawn_entities(
    state: GameState, count: int, rng: Optional[random.Random] = None
) -> List[Entity]:
    """
    Place count colliding entities on distinct free floor cells.

    Raises:
        SpawnError: If there are fewer free cells than count
    """
    if count <= 0:
        return []
    rng = rng or random.Random()

    cells = free_floor_cells(state.dungeon, state.tree)
    if len(cells) < count:
        raise SpawnError(f"asked for {count} entities but only {len(cells)} free cells")

    spawned: List[Entity] = []
    for i, cell in enumerate(rng.sample(cells, count)):
        mob = Entity(cell.x, cell.y, colliding=True, name=f"mob-{len(state.mobs) + i}")
        if not state.rules.add(mob):
            raise SpawnError(f"index refused {mob!r}")
        spawned.append(mob)

    state.mobs.extend(spawned)
    logger.debug("Spawned %d entities", len(spawned))
    return spawned


def create_game_state(
    config: MapConfig = DEFAULT_MAP_CONFIG,
    rng: Optional[random.Random] = None,
    tree_depth: int = DEFAULT_TREE_DEPTH,
    tree_capacity: int = DEFAULT_TREE_CAPACITY,
    num_entities: int = 0,
    camera_size: Tuple[int, int] = DEFAULT_CAMERA_SIZE,
    event_bus: Optional[EventBus] = None,
) -> GameState:
    """
    Generate a dungeon and set up a level on it.

    The quadtree covers the map's bounding box, the player stands on the
    start point, and num_entities colliding mobs are spread over free floor.

    Raises:
        ConfigurationError, DungeonUnsatisfiableError: From generation
        SpawnError: If the mobs do not fit
    """
    rng = rng or random.Random()
    bus = event_bus or EventBus()

    dungeon = generate_dungeon(config, rng)
    tree = QuadTree.covering(dungeon.bounding_box, tree_depth, tree_capacity)

    start = dungeon.start
    player = Entity(start.x, start.y, colliding=True, name="player")
    rules = CollisionRules(dungeon, tree, event_bus=bus, explorer=player)
    if not rules.add(player):
        raise SpawnError(f"could not place the player at {start}")

    camera = Camera(start.x, start.y, *camera_size)
    state = GameState(
        dungeon=dungeon,
        tree=tree,
        player=player,
        rules=rules,
        camera=camera,
        event_bus=bus,
    )
    spawn_entities(state, num_entities, rng)

    bus.emit(Event.LEVEL_START, rooms=len(dungeon.rooms), start=dungeon.start, end=dungeon.end)
    logger.info(
        "Level ready: %d rooms, %d entities, %d index nodes",
        len(dungeon.rooms),
        tree.total_objects(),
        tree.total_nodes(),
    )
    return state
