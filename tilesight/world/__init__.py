"""Shadowcasting, visibility memory and per-player FOV state."""

from tilesight.world.fov import (
    compute_fov,
    compute_fov_from_entities,
    compute_fov_from_opaque,
)
from tilesight.world.player_fov import PlayerFov, PlayerFovMap
from tilesight.world.visibility import TileVisibility, VisibilityGrid

__all__ = [
    "PlayerFov",
    "PlayerFovMap",
    "TileVisibility",
    "VisibilityGrid",
    "compute_fov",
    "compute_fov_from_entities",
    "compute_fov_from_opaque",
]
