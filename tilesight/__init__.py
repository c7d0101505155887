"""Field of view, fog of war and entity awareness for tile worlds.

The usual per-tick flow for one player::

    pfov = PlayerFov(fov_radius=12)
    pfov.recompute(origin, snapshot)
    aware = pfov.awareness(origin, snapshot, config)

``pfov.current_fov`` and ``pfov.visibility`` then feed the renderer, and
``aware`` decides which entities go into the player's network update.
"""

from tilesight.config import FovConfig
from tilesight.entities import Entity, EntityKind, EntitySnapshot, Point
from tilesight.perception import AwareEntity, AwarenessSource, build_awareness
from tilesight.world import (
    PlayerFov,
    PlayerFovMap,
    TileVisibility,
    VisibilityGrid,
    compute_fov,
)

__version__ = "0.1.0"

__all__ = [
    "AwareEntity",
    "AwarenessSource",
    "Entity",
    "EntityKind",
    "EntitySnapshot",
    "FovConfig",
    "PlayerFov",
    "PlayerFovMap",
    "Point",
    "TileVisibility",
    "VisibilityGrid",
    "build_awareness",
    "compute_fov",
]
