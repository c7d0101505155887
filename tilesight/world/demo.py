"""Small deterministic worlds for demos, tests and the CLI."""

from __future__ import annotations

import numpy as np
import structlog

from tilesight.entities.components import Entity, EntityKind, Point
from tilesight.entities.snapshot import EntitySnapshot

log = structlog.get_logger(__name__)

TEST_WORLD_TREES: tuple[Point, ...] = (
    Point(5, 5),
    Point(15, 5),
    Point(5, 15),
    Point(15, 15),
    Point(10, 5),
    Point(10, 15),
)

# Half-width of the square kept free of trees around the spawn point.
SPAWN_CLEAR_RADIUS: int = 3


def spawn_point(width: int, height: int) -> Point:
    return Point(width // 2, height // 2)


def create_test_world() -> EntitySnapshot:
    """Six trees around a 20x20 clearing."""
    return EntitySnapshot(
        {eid: Entity(pos, EntityKind.TREE) for eid, pos in enumerate(TEST_WORLD_TREES)}
    )


def create_forest_world(
    width: int, height: int, density: float, seed: int
) -> EntitySnapshot:
    """Scatter trees over ``width`` x ``height`` tiles.

    Each tile holds a tree with probability ``density``. The same seed always
    produces the same forest. The spawn area stays clear.
    """
    if width <= 0 or height <= 0:
        log.error("Invalid forest dimensions", width=width, height=height)
        raise ValueError("Forest width and height must be positive integers.")
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"Tree density must be within [0, 1], got {density}")

    rng = np.random.default_rng(seed)
    trees = rng.random((height, width)) < density

    spawn = spawn_point(width, height)
    y0 = max(0, spawn.y - SPAWN_CLEAR_RADIUS)
    x0 = max(0, spawn.x - SPAWN_CLEAR_RADIUS)
    trees[y0 : spawn.y + SPAWN_CLEAR_RADIUS + 1, x0 : spawn.x + SPAWN_CLEAR_RADIUS + 1] = False

    entities = {
        eid: Entity(Point(int(x), int(y)), EntityKind.TREE)
        for eid, (y, x) in enumerate(np.argwhere(trees))
    }
    log.info(
        "Forest generated",
        width=width,
        height=height,
        density=density,
        seed=seed,
        tree_count=len(entities),
    )
    return EntitySnapshot(entities)
