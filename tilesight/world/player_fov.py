# tilesight/world/player_fov.py
"""Per-player FOV state carried across ticks."""

from __future__ import annotations

from typing import Collection, Dict, Mapping, Set

import structlog

from tilesight.config import FovConfig
from tilesight.constants import DEFAULT_FOV_RADIUS
from tilesight.entities.components import Coord, Entity, Point
from tilesight.entities.snapshot import opaque_positions
from tilesight.perception.awareness import AwareEntity, build_awareness
from tilesight.world.fov import compute_fov_from_opaque
from tilesight.world.visibility import VisibilityGrid

log = structlog.get_logger(__name__)


class PlayerFov:
    """Visibility grid, current FOV set and radius of one player.

    Callers read ``current_fov`` and ``visibility`` after :meth:`recompute`.
    """

    def __init__(
        self,
        fov_radius: int = DEFAULT_FOV_RADIUS,
        visibility: VisibilityGrid | None = None,
        current_fov: Set[Coord] | None = None,
    ) -> None:
        if isinstance(fov_radius, bool) or not isinstance(fov_radius, int):
            raise ValueError(f"FOV radius must be an integer, got {fov_radius!r}")
        if fov_radius < 0:
            log.error("Negative FOV radius rejected", radius=fov_radius)
            raise ValueError(f"FOV radius must be non-negative, got {fov_radius}")
        self.fov_radius = fov_radius
        self.visibility = visibility if visibility is not None else VisibilityGrid()
        self.current_fov: Set[Coord] = set(current_fov) if current_fov else set()

    def __repr__(self) -> str:
        return (
            f"PlayerFov(radius={self.fov_radius}, "
            f"current={len(self.current_fov)}, known={len(self.visibility)})"
        )

    def recompute(
        self,
        origin: Point | Coord,
        entities: Mapping[int, Entity],
        opaque: Collection[Coord] | None = None,
    ) -> None:
        """Recompute FOV from ``origin`` and fold it into the visibility grid.

        ``opaque`` may carry a set of sight-blocking positions already derived
        from ``entities`` so several players can share one per tick.
        """
        if opaque is None:
            opaque = opaque_positions(entities)
        self.current_fov = compute_fov_from_opaque(origin, self.fov_radius, opaque)
        self.visibility.update(self.current_fov)

    def awareness(
        self,
        observer: Point | Coord,
        entities: Mapping[int, Entity],
        config: FovConfig | None = None,
    ) -> list[AwareEntity]:
        """Sight awareness for this player based on the last recompute."""
        config = config or FovConfig()
        return build_awareness(
            self.current_fov,
            entities,
            config.network_margin,
            observer,
            window_radius=config.window_radius_for(self.fov_radius),
        )


PlayerFovMap = Dict[int, PlayerFov]
