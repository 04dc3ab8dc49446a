"""Procedural room-graph dungeons, a quadtree entity index and line-of-sight raycasting."""

from rogue.geometry import Circle, Point, Rectangle
from rogue.room import Direction, Room
from rogue.world import CellKind, Map
from rogue.dungeon_gen import (
    DEFAULT_MAP_CONFIG,
    MapConfig,
    generate_dungeon,
)
from rogue.quadtree import QuadNode, QuadTree
from rogue.raycast import trace, line_cells, has_line_of_sight
from rogue.entity import Entity, MoveHandler
from rogue.movement import CollisionRules
from rogue.camera import Camera
from rogue.event_system import Event, EventBus, EventData
from rogue.errors import (
    RogueError,
    ConfigurationError,
    DungeonUnsatisfiableError,
    SpawnError,
    MovementError,
)
from rogue.setup import GameState, create_game_state, spawn_entities
