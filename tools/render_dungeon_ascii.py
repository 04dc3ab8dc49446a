#!/usr/bin/env python3
"""
Render a generated dungeon as ASCII art for debugging.

Usage:
    python tools/render_dungeon_ascii.py [--min-rooms N] [--max-rooms N] [--seed S]
    python tools/render_dungeon_ascii.py --view --entities 10   # camera view with line of sight
"""

import argparse
import logging
import random
import sys
from pathlib import Path

# Add parent directory to path so we can import rogue
sys.path.insert(0, str(Path(__file__).parent.parent))

from rogue.dungeon_gen import DEFAULT_MAP_CONFIG, MapConfig
from rogue.errors import RogueError
from rogue.log_utils import setup_logging
from rogue.render import render_ascii
from rogue.setup import create_game_state


def main() -> int:
    defaults = DEFAULT_MAP_CONFIG
    parser = argparse.ArgumentParser(description="Render dungeon as ASCII art")
    parser.add_argument("--min-rooms", type=int, default=defaults.min_rooms)
    parser.add_argument("--max-rooms", type=int, default=defaults.max_rooms)
    parser.add_argument("--min-width", type=int, default=defaults.min_width)
    parser.add_argument("--max-width", type=int, default=defaults.max_width)
    parser.add_argument("--min-height", type=int, default=defaults.min_height)
    parser.add_argument("--max-height", type=int, default=defaults.max_height)
    parser.add_argument("--seed", type=int, help="Random seed for reproducible generation")
    parser.add_argument("--entities", type=int, default=0, help="Mobs to spawn")
    parser.add_argument(
        "--view",
        action="store_true",
        help="Draw the player's camera viewport instead of the whole map",
    )
    parser.add_argument("--no-los", action="store_true", help="Disable line of sight")
    parser.add_argument("--radius", type=int, help="Limit sight to this many cells")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    config = MapConfig(
        min_rooms=args.min_rooms,
        max_rooms=args.max_rooms,
        min_width=args.min_width,
        max_width=args.max_width,
        min_height=args.min_height,
        max_height=args.max_height,
    )
    rng = random.Random(args.seed)

    try:
        state = create_game_state(config, rng, num_entities=args.entities)
    except RogueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.view:
        print(state.render(line_of_sight=not args.no_los, sight_radius=args.radius))
    else:
        dungeon = state.dungeon
        print(
            render_ascii(
                dungeon,
                dungeon.bounding_box,
                entities=state.tree.query(dungeon.bounding_box),
                player=state.player,
                line_of_sight=not args.no_los,
                sight_radius=args.radius,
            )
        )

    # Print some debug info
    dungeon = state.dungeon
    print("\n--- Debug Info ---")
    print(f"Map bounds: {dungeon.bounding_box!r}")
    print(f"Rooms generated: {len(dungeon.rooms)}")
    print(f"Start: {dungeon.start.xy}, End: {dungeon.end.xy}")
    print(f"Index: {state.tree.total_nodes()} nodes, {state.tree.total_objects()} objects")
    return 0


if __name__ == "__main__":
    sys.exit(main())
