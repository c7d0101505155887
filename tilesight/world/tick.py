"""Per-tick FOV pass over every tracked player.

The caller mutates the world, freezes it into a snapshot and then hands that
snapshot to :func:`recompute_all`. The opaque set is derived once and shared
read-only; each :class:`PlayerFov` is touched by exactly one worker, so
players can be processed in parallel without locking.
"""

from __future__ import annotations

from multiprocessing.dummy import Pool as ThreadPool
from typing import Dict, Mapping

import structlog

from tilesight.config import FovConfig
from tilesight.entities.components import Coord, Entity, Point
from tilesight.entities.snapshot import opaque_positions
from tilesight.perception.awareness import AwareEntity
from tilesight.world.player_fov import PlayerFov, PlayerFovMap

log = structlog.get_logger(__name__)


def register_player(
    fov_map: PlayerFovMap,
    player_id: int,
    radius: int | None = None,
    config: FovConfig | None = None,
) -> PlayerFov:
    """Return the player's FOV state, creating a fresh one if needed."""
    existing = fov_map.get(player_id)
    if existing is not None:
        return existing
    config = config or FovConfig()
    pfov = PlayerFov(config.default_radius if radius is None else radius)
    fov_map[player_id] = pfov
    log.info("Player registered for FOV tracking", player_id=player_id, radius=pfov.fov_radius)
    return pfov


def remove_player(fov_map: PlayerFovMap, player_id: int) -> PlayerFov | None:
    removed = fov_map.pop(player_id, None)
    if removed is not None:
        log.info("Player removed from FOV tracking", player_id=player_id)
    return removed


def recompute_all(
    fov_map: PlayerFovMap,
    origins: Mapping[int, Point | Coord],
    entities: Mapping[int, Entity],
    *,
    config: FovConfig | None = None,
) -> int:
    """Recompute FOV for every player that has both state and an origin.

    Returns the number of players recomputed.
    """
    config = config or FovConfig()
    opaque = opaque_positions(entities)

    jobs = []
    for player_id, pfov in fov_map.items():
        origin = origins.get(player_id)
        if origin is None:
            log.debug("No origin for player, FOV left unchanged", player_id=player_id)
            continue
        jobs.append((pfov, origin))

    def _invoke(job):
        pfov, origin = job
        pfov.recompute(origin, entities, opaque)

    batch_size = config.worker_batch_size
    if batch_size <= 1 or len(jobs) <= 1:
        for job in jobs:
            _invoke(job)
    else:
        for i in range(0, len(jobs), batch_size):
            batch = jobs[i : i + batch_size]
            with ThreadPool(len(batch)) as pool:
                pool.map(_invoke, batch)

    log.debug(
        "Tick FOV pass finished",
        players=len(jobs),
        opaque_count=len(opaque),
    )
    return len(jobs)


def build_all_awareness(
    fov_map: PlayerFovMap,
    origins: Mapping[int, Point | Coord],
    entities: Mapping[int, Entity],
    config: FovConfig | None = None,
) -> Dict[int, list[AwareEntity]]:
    """Awareness lists for every player that has both state and an origin."""
    config = config or FovConfig()
    return {
        player_id: pfov.awareness(origins[player_id], entities, config)
        for player_id, pfov in fov_map.items()
        if player_id in origins
    }
