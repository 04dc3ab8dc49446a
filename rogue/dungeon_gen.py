"""
Dungeon Generation Algorithm
============================

We grow the dungeon as a graph of rooms, each new room pressed flush against
a side of an existing one.

1. Pick a target room count uniformly between the configured bounds
2. Place the start room at the origin with a random odd width and height
   - Odd sizes give every room a single center cell, so doors on both sides
     of a link line up exactly
3. Walk the room graph, starting from the most recently placed room:
   a. Shuffle the four directions of the current room
   b. If the current room already has a neighbor that way, walk to it
   c. Otherwise build a candidate room flush against that side, centered on
      the current room along the other axis
   d. If the candidate overlaps an existing room, try the next direction
   e. Link the candidate to any other room it sits flush against with a
      lined-up center, as long as both have fewer than 3 links (loops, not
      just a tree)
   f. Link the candidate to the current room and walk on from the candidate
   If every direction fails, the walk jumps to a random existing room
4. Every walk step spends one attempt; running out of attempts is an error
5. The start is the center of the first room, the end the center of the last
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import ConfigurationError, DungeonUnsatisfiableError
from .room import Direction, Room, flush_direction, link_rooms
from .world import Map

logger = logging.getLogger(__name__)

# Secondary links are only added between rooms with fewer links than this.
MAX_LINKS_FOR_SECONDARY = 3

# Default walk budget, per target room.
ATTEMPTS_PER_ROOM = 100


@dataclass(frozen=True)
class MapConfig:
    """
    Bounds for dungeon generation.

    Each min/max pair may be given in either order; the normalized accessors
    always return the smaller value as the minimum.
    """

    min_rooms: int
    max_rooms: int
    min_width: int
    max_width: int
    min_height: int
    max_height: int

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: If any bound is missing, not an integer, or not positive.
        """
        for name in (
            "min_rooms",
            "max_rooms",
            "min_width",
            "max_width",
            "min_height",
            "max_height",
        ):
            value = getattr(self, name)
            if value is None:
                raise ConfigurationError(f"{name} is required")
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")

    @property
    def room_count_range(self) -> Tuple[int, int]:
        return _ordered(self.min_rooms, self.max_rooms)

    @property
    def width_range(self) -> Tuple[int, int]:
        return _ordered(self.min_width, self.max_width)

    @property
    def height_range(self) -> Tuple[int, int]:
        return _ordered(self.min_height, self.max_height)


DEFAULT_MAP_CONFIG = MapConfig(
    min_rooms=20,
    max_rooms=20,
    min_width=14,
    max_width=14,
    min_height=7,
    max_height=7,
)


def _ordered(a: int, b: int) -> Tuple[int, int]:
    return (a, b) if a <= b else (b, a)


def _random_odd(rng: random.Random, bounds: Tuple[int, int]) -> int:
    """Random value in bounds, bumped up by one when it comes out even."""
    value = rng.randint(*bounds)
    if value % 2 == 0:
        value += 1
    return value


def _random_room_size(rng: random.Random, config: MapConfig) -> Tuple[int, int]:
    return _random_odd(rng, config.width_range), _random_odd(rng, config.height_range)


def _candidate_room(current: Room, direction: Direction, width: int, height: int) -> Room:
    """
    Build a room flush against the given side of current.

    The candidate's near edge touches current's far edge, and the candidate is
    centered on current along the other axis.
    """
    cx, cy = current.center()
    if direction == Direction.NORTH:
        return Room(cx - width // 2, current.top - height, width, height)
    if direction == Direction.SOUTH:
        return Room(cx - width // 2, current.bottom, width, height)
    if direction == Direction.EAST:
        return Room(current.right, cy - height // 2, width, height)
    return Room(current.left - width, cy - height // 2, width, height)


def _would_overlap(candidate: Room, rooms: List[Room]) -> bool:
    """Touching is fine; sharing a cell is not."""
    return any(candidate.overlaps(room) for room in rooms)


def _link_secondary_neighbors(
    candidate: Room, parent: Room, parent_side: Direction, rooms: List[Room]
) -> int:
    """
    Link candidate to the other rooms it sits flush against.

    A link needs a free slot on both rooms, fewer than MAX_LINKS_FOR_SECONDARY
    links on each, and matching centers along the shared edge so that both
    door spans open onto each other. The candidate's pending link to its
    parent counts toward its total.

    Returns:
        The number of links added.
    """
    added = 0
    for room in rooms:
        if room is parent:
            continue
        direction = flush_direction(candidate, room)
        if direction is None or direction == parent_side:
            continue
        if candidate.get_neighbor(direction) is not None:
            continue
        if room.get_neighbor(direction.opposite()) is not None:
            continue
        if candidate.neighbor_count() + 1 >= MAX_LINKS_FOR_SECONDARY:
            continue
        if room.neighbor_count() >= MAX_LINKS_FOR_SECONDARY:
            continue
        axis = 0 if direction.is_vertical else 1
        if candidate.center()[axis] != room.center()[axis]:
            continue
        link_rooms(candidate, direction, room)
        added += 1
    return added


def _grow_from(
    current: Room, rooms: List[Room], config: MapConfig, rng: random.Random
) -> Room:
    """
    Take one walk step from current.

    Returns:
        The room the walk continues from: an existing neighbor, a newly placed
        room (appended to rooms), or a random room when every side is blocked.
    """
    directions = list(Direction)
    rng.shuffle(directions)

    for direction in directions:
        neighbor = current.get_neighbor(direction)
        if neighbor is not None:
            return neighbor

        width, height = _random_room_size(rng, config)
        candidate = _candidate_room(current, direction, width, height)
        if _would_overlap(candidate, rooms):
            continue

        extra = _link_secondary_neighbors(candidate, current, direction.opposite(), rooms)
        link_rooms(current, direction, candidate)
        rooms.append(candidate)
        if extra:
            logger.debug("Room %d gained %d extra links", len(rooms) - 1, extra)
        return candidate

    return rng.choice(rooms)


def generate_dungeon(
    config: MapConfig,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = None,
) -> Map:
    """
    Generates a connected dungeon by growing rooms off each other.

    Uses the algorithm documented at the top of this file.

    Parameters:
        config: Room count and room size bounds
        rng: Random source; pass a seeded random.Random for reproducible maps
        max_attempts: Walk step budget; defaults to ATTEMPTS_PER_ROOM per target room

    Returns:
        The generated Map

    Raises:
        ConfigurationError: If the config is invalid
        DungeonUnsatisfiableError: If the walk budget runs out first
    """
    config.validate()
    rng = rng or random.Random()

    target = rng.randint(*config.room_count_range)
    budget = max_attempts if max_attempts is not None else ATTEMPTS_PER_ROOM * target
    logger.debug("Generating dungeon with %d rooms (budget %d)", target, budget)

    width, height = _random_room_size(rng, config)
    rooms: List[Room] = [Room(0, 0, width, height)]
    current = rooms[0]

    attempts = 0
    while len(rooms) < target:
        if attempts >= budget:
            logger.warning(
                "Gave up after %d attempts with %d of %d rooms",
                attempts,
                len(rooms),
                target,
            )
            raise DungeonUnsatisfiableError(
                f"placed {len(rooms)} of {target} rooms in {attempts} attempts"
            )
        attempts += 1
        current = _grow_from(current, rooms, config, rng)

    dungeon = Map(rooms)
    logger.info(
        "Generated %d rooms in %d attempts, bounds %r",
        len(rooms),
        attempts,
        dungeon.bounding_box,
    )
    return dungeon
