# tilesight/world/fov.py
"""Field-of-view calculations using symmetric recursive shadowcasting.

:func:`compute_fov` sweeps the eight octants around an origin and returns
the set of visible ``(x, y)`` tiles. Opacity is supplied as a callable, so
the engine works on an unbounded world with no map arrays of its own.
Opaque tiles are themselves visible but hide everything behind them.
"""

from __future__ import annotations

import math
import time
from typing import Callable, Collection, Mapping, Set, TypeAlias

import structlog

from tilesight.entities.components import Coord, Entity, Point
from tilesight.entities.snapshot import opaque_positions

log = structlog.get_logger(__name__)

OpacityTest: TypeAlias = Callable[[int, int], bool]

# Transformation coefficients (xx, xy, yx, yy) for the eight octants.
# World offset = (col * xx + row * xy, col * yx + row * yy).
_MULTIPLIERS: tuple[tuple[int, int, int, int], ...] = (
    (1, 0, 0, 1),
    (0, 1, 1, 0),
    (0, 1, -1, 0),
    (1, 0, 0, -1),
    (-1, 0, 0, -1),
    (0, -1, -1, 0),
    (0, -1, 1, 0),
    (-1, 0, 0, 1),
)


def transform_octant(col: int, row: int, octant: int) -> Coord:
    """Map octant-local ``(col, row)`` to a world-relative offset."""
    xx, xy, yx, yy = _MULTIPLIERS[octant]
    return col * xx + row * xy, col * yx + row * yy


def compute_fov(
    origin: Point | Coord, radius: int, is_opaque: OpacityTest
) -> Set[Coord]:
    """Return every tile visible from ``origin`` within ``radius``.

    ``is_opaque(x, y)`` must be free of side effects. The origin is always
    part of the result. A negative radius yields only the origin; callers
    are expected to reject it before getting here.
    """
    ox, oy = origin
    visible: Set[Coord] = {(ox, oy)}
    start_time = time.perf_counter()

    for octant in range(8):
        _cast_light(visible, is_opaque, ox, oy, radius, 1, 1.0, 0.0, octant)

    duration_ms = (time.perf_counter() - start_time) * 1000
    log.debug(
        "FOV computed",
        origin=(ox, oy),
        radius=radius,
        visible_count=len(visible),
        duration_ms=f"{duration_ms:.3f}",
    )
    return visible


def compute_fov_from_opaque(
    origin: Point | Coord, radius: int, opaque: Collection[Coord]
) -> Set[Coord]:
    """Shadowcast against a precomputed set of opaque positions."""
    return compute_fov(origin, radius, lambda x, y: (x, y) in opaque)


def compute_fov_from_entities(
    origin: Point | Coord, radius: int, entities: Mapping[int, Entity]
) -> Set[Coord]:
    """Shadowcast using every sight-blocking entity in ``entities``."""
    return compute_fov_from_opaque(origin, radius, opaque_positions(entities))


def _cast_light(
    visible: Set[Coord],
    is_opaque: OpacityTest,
    ox: int,
    oy: int,
    radius: int,
    row: int,
    start_slope: float,
    end_slope: float,
    octant: int,
) -> None:
    """Recursively cast light through one octant starting at ``row``."""

    if start_slope < end_slope or row > radius:
        return

    xx, xy, yx, yy = _MULTIPLIERS[octant]
    radius_sq = radius * radius
    blocked = False
    next_start_slope = start_slope

    for j in range(row, radius + 1):
        dy = -j
        # Columns left of this one lie outside the wedge for the current
        # start slope.
        col_min = max(dy, math.floor(-start_slope * (j + 0.5) - 0.5))

        for dx in range(col_min, 1):
            l_slope = (dx - 0.5) / (dy + 0.5)
            r_slope = (dx + 0.5) / (dy - 0.5)
            if start_slope < r_slope:
                continue
            if end_slope > l_slope:
                break

            wx = ox + dx * xx + dy * xy
            wy = oy + dx * yx + dy * yy

            if dx * dx + dy * dy <= radius_sq:
                visible.add((wx, wy))

            if blocked:
                if is_opaque(wx, wy):
                    next_start_slope = r_slope
                    continue
                blocked = False
                start_slope = next_start_slope
            elif j < radius and is_opaque(wx, wy):
                blocked = True
                _cast_light(
                    visible, is_opaque, ox, oy, radius,
                    j + 1, start_slope, l_slope, octant,
                )
                next_start_slope = r_slope

        if blocked:
            break
