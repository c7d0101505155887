# tilesight/cli.py
"""Print a player's fog of war over a generated forest.

Handy for eyeballing shadowcasting changes::

    tilesight --width 40 --height 30 --density 0.15 --seed 7 --steps 5
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

import numpy as np
import structlog

from tilesight.config import load_fov_config
from tilesight.entities.components import Point
from tilesight.entities.snapshot import opaque_positions
from tilesight.utils.logging_utils import RENDERERS, parse_level, setup_logging
from tilesight.world.demo import create_forest_world, spawn_point
from tilesight.world.tick import build_all_awareness, recompute_all, register_player
from tilesight.world.visibility import TileVisibility

log = structlog.get_logger(__name__)

# --- Default Configuration ---
DEFAULT_WIDTH = 40
DEFAULT_HEIGHT = 30
DEFAULT_DENSITY = 0.12
DEFAULT_SEED = 42
PLAYER_ID = 0

GLYPH_OBSERVER = "@"
GLYPH_UNEXPLORED = " "
# (floor, opaque) glyphs per visibility state
GLYPHS = {
    TileVisibility.VISIBLE: (".", "T"),
    TileVisibility.REMEMBERED: (",", "t"),
}


def render_fog(
    states: np.ndarray, origin_xy: tuple[int, int], observer: Point, opaque
) -> list[str]:
    """Turn a window of visibility states into text rows."""
    x0, y0 = origin_xy
    lines = []
    for ly in range(states.shape[0]):
        row = []
        for lx in range(states.shape[1]):
            x, y = x0 + lx, y0 + ly
            if (x, y) == (observer.x, observer.y):
                row.append(GLYPH_OBSERVER)
                continue
            state = TileVisibility(int(states[ly, lx]))
            if state is TileVisibility.UNEXPLORED:
                row.append(GLYPH_UNEXPLORED)
            else:
                floor, blocker = GLYPHS[state]
                row.append(blocker if (x, y) in opaque else floor)
        lines.append("".join(row).rstrip())
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a player's field of view and fog of war as text."
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML or TOML file with an 'fov' section.")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    parser.add_argument("--density", type=float, default=DEFAULT_DENSITY,
                        help="Probability of a tree on any tile.")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    parser.add_argument("--radius", type=int, default=None,
                        help="FOV radius (default: from config).")
    parser.add_argument("--steps", type=int, default=0,
                        help="Walk the observer east this many tiles.")
    parser.add_argument("--log-level", default="warning")
    parser.add_argument("--log-format", choices=sorted(RENDERERS), default="console")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        setup_logging(parse_level(args.log_level), args.log_format)
        config = load_fov_config(args.config)
        snapshot = create_forest_world(args.width, args.height, args.density, args.seed)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    fov_map = {}
    try:
        pfov = register_player(fov_map, PLAYER_ID, args.radius, config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    observer = spawn_point(args.width, args.height)
    for step in range(args.steps + 1):
        if step:
            observer = observer + (1, 0)
        recompute_all(fov_map, {PLAYER_ID: observer}, snapshot, config=config)

    aware = build_all_awareness(fov_map, {PLAYER_ID: observer}, snapshot, config)[PLAYER_ID]
    states = pfov.visibility.window(0, 0, args.width, args.height)
    for line in render_fog(states, (0, 0), observer, opaque_positions(snapshot)):
        print(line)
    print(
        f"observer={tuple(observer)} radius={pfov.fov_radius} "
        f"visible={len(pfov.current_fov)} known={len(pfov.visibility)} "
        f"aware={len(aware)}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
