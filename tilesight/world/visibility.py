"""Per-player tri-state tile visibility.

This module defines :class:`VisibilityGrid`, the persistent fog-of-war
memory of one player. Tiles move from ``UNEXPLORED`` to ``VISIBLE`` when
they enter the field of view and drop to ``REMEMBERED`` when they leave it.
A tile never returns to ``UNEXPLORED``.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Iterator, Mapping

import numpy as np

from tilesight.entities.components import Coord, Point


class TileVisibility(IntEnum):
    """Visibility of a single tile from one player's point of view."""

    UNEXPLORED = 0  # Never seen
    REMEMBERED = 1  # Seen before, currently outside FOV
    VISIBLE = 2  # Inside the current FOV


class VisibilityGrid:
    """Sparse mapping of tile coordinate to :class:`TileVisibility`.

    Absent tiles are ``UNEXPLORED``. The grid only grows; the one mutating
    operation is :meth:`update`, fed with a freshly computed FOV set.
    """

    def __init__(self, tiles: Mapping[Coord, TileVisibility] | None = None) -> None:
        self._tiles: dict[Coord, TileVisibility] = {}
        if tiles:
            for pos, state in tiles.items():
                state = TileVisibility(state)
                if state is not TileVisibility.UNEXPLORED:
                    self._tiles[(pos[0], pos[1])] = state

    def get(self, pos: Point | Coord) -> TileVisibility:
        x, y = pos
        return self._tiles.get((x, y), TileVisibility.UNEXPLORED)

    def update(self, fov_set: Iterable[Coord]) -> None:
        """Apply a new FOV result.

        Tiles in ``fov_set`` become ``VISIBLE``. Tiles that were ``VISIBLE``
        but are not in the set become ``REMEMBERED``. Everything else is
        left alone.
        """
        # Only values change here, so iteration order is irrelevant.
        for pos, state in self._tiles.items():
            if state is TileVisibility.VISIBLE:
                self._tiles[pos] = TileVisibility.REMEMBERED

        for x, y in fov_set:
            self._tiles[(x, y)] = TileVisibility.VISIBLE

    def __len__(self) -> int:
        return len(self._tiles)

    def __contains__(self, pos: object) -> bool:
        try:
            x, y = pos  # type: ignore[misc]
        except (TypeError, ValueError):
            return False
        return (x, y) in self._tiles

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VisibilityGrid):
            return NotImplemented
        return self._tiles == other._tiles

    def __repr__(self) -> str:
        return (
            f"VisibilityGrid(visible={self.count(TileVisibility.VISIBLE)}, "
            f"remembered={self.count(TileVisibility.REMEMBERED)})"
        )

    def items(self) -> Iterator[tuple[Coord, TileVisibility]]:
        return iter(self._tiles.items())

    def explored(self) -> Iterator[Coord]:
        """Every tile that has ever been seen."""
        return iter(self._tiles)

    def count(self, state: TileVisibility) -> int:
        if state is TileVisibility.UNEXPLORED:
            raise ValueError("Unexplored tiles are not stored and cannot be counted")
        return sum(1 for s in self._tiles.values() if s is state)

    def window(self, x0: int, y0: int, width: int, height: int) -> np.ndarray:
        """Return a ``(height, width)`` uint8 array of states for a viewport.

        Element ``[y, x]`` holds the :class:`TileVisibility` value of tile
        ``(x0 + x, y0 + y)``, ready for a fog-of-war render pass.
        """
        if width < 0 or height < 0:
            raise ValueError("Window width and height must be non-negative.")
        out = np.zeros((height, width), dtype=np.uint8, order="C")
        for (x, y), state in self._tiles.items():
            lx = x - x0
            ly = y - y0
            if 0 <= lx < width and 0 <= ly < height:
                out[ly, lx] = state
        return out
