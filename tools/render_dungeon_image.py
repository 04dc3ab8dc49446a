#!/usr/bin/env python3
"""
Render a dungeon to an image file for visual inspection.

Useful for:
- Checking room sizes and door placement
- Debugging dungeon generation
- Seeing how the quadtree partitions the map

Usage:
    python tools/render_dungeon_image.py                    # Default config, random seed
    python tools/render_dungeon_image.py --rooms 10         # 10 rooms
    python tools/render_dungeon_image.py --seed 42          # Reproducible dungeon
    python tools/render_dungeon_image.py --output my.png    # Custom output path
"""

import argparse
import logging
import random
import sys
from dataclasses import replace
from pathlib import Path

import cv2

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rogue.dungeon_gen import DEFAULT_MAP_CONFIG
from rogue.log_utils import setup_logging
from rogue.render import grid_to_image, rasterize_map
from rogue.room import Direction
from rogue.setup import create_game_state


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render a dungeon to an image file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--rooms", "-r",
        type=int,
        default=None,
        help="Exact number of rooms to generate (default: the built-in config)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducible dungeons",
    )
    parser.add_argument(
        "--entities", "-e",
        type=int,
        default=20,
        help="Mobs to spawn (default: 20)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=8,
        help="Pixels per map cell (default: 8)",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default="dungeon_render.png",
        help="Output image path (default: dungeon_render.png)",
    )
    parser.add_argument(
        "--show-tree",
        action="store_true",
        help="Overlay the quadtree leaf boundaries",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    config = DEFAULT_MAP_CONFIG
    if args.rooms is not None:
        config = replace(config, min_rooms=args.rooms, max_rooms=args.rooms)

    rng = random.Random(args.seed)
    if args.seed is not None:
        print(f"Using random seed: {args.seed}")

    print(f"Generating dungeon with {config.room_count_range} rooms...")
    state = create_game_state(config, rng, num_entities=args.entities)
    dungeon = state.dungeon
    bounds = dungeon.bounding_box
    print(f"Dungeon size: {bounds.width}x{bounds.height} cells")

    cs = args.cell_size
    image = grid_to_image(rasterize_map(dungeon), cs)

    def to_pixel(x: int, y: int) -> tuple:
        return ((x - bounds.left) * cs + cs // 2, (y - bounds.top) * cs + cs // 2)

    if args.show_tree:
        print("Adding quadtree overlay...")
        for node in state.tree.leaves():
            b = node.bounds
            top_left = ((b.left - bounds.left) * cs, (b.top - bounds.top) * cs)
            bottom_right = ((b.right - bounds.left) * cs - 1, (b.bottom - bounds.top) * cs - 1)
            cv2.rectangle(image, top_left, bottom_right, (0, 160, 255), 1)

    # Draw mobs and the player
    for mob in state.mobs:
        cv2.circle(image, to_pixel(mob.x, mob.y), max(1, cs // 3), (255, 128, 0), -1)
    cv2.circle(image, to_pixel(state.player.x, state.player.y), max(1, cs // 2), (0, 255, 255), -1)

    # Mark start and end
    cv2.circle(image, to_pixel(*dungeon.start.xy), max(1, cs // 2), (0, 255, 0), 1)  # Green ring at start
    cv2.circle(image, to_pixel(*dungeon.end.xy), max(1, cs // 2), (0, 0, 255), -1)  # Red dot at end

    # Save image
    output_path = Path(args.output)
    cv2.imwrite(str(output_path), image)
    print(f"Saved to: {output_path.absolute()}")

    # Print room info
    print(f"\nRooms ({len(dungeon.rooms)}):")
    room_ids = {id(room): i for i, room in enumerate(dungeon.rooms)}
    for room_id, room in enumerate(dungeon.rooms):
        links = ", ".join(
            f"{d.name.lower()}->{room_ids[id(room.get_neighbor(d))]}"
            for d in Direction
            if room.get_neighbor(d) is not None
        )
        print(f"  Room {room_id}: at ({room.x}, {room.y}), size {room.width}x{room.height}, links [{links}]")


if __name__ == "__main__":
    main()
