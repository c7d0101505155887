"""Entity awareness built from perception channels.

Sight is the only channel implemented today: an entity is perceived when it
stands on a visible tile or inside a square margin window around the
observer. Other channels plug in as *sensors*, callables that turn a
:class:`SensorContext` into candidate :class:`AwareEntity` records. When
several sensors report the same entity, the strongest channel wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Collection, Iterable, Mapping, Sequence

import structlog

from tilesight.constants import DEFAULT_FOV_RADIUS, FOV_NETWORK_MARGIN
from tilesight.entities.components import Coord, Entity, Point

log = structlog.get_logger(__name__)


class AwarenessSource(Enum):
    """How an entity was perceived.

    ``precedence`` orders channels when merging; higher wins.
    """

    SIGHT = ("sight", 2)  # Full positional fidelity
    SOUND = ("sound", 1)  # Directional indicator only; no sensor yet

    def __init__(self, label: str, precedence: int) -> None:
        self.label = label
        self.precedence = precedence


@dataclass(frozen=True)
class AwareEntity:
    """Immutable record of one perceived entity for one tick."""

    entity_id: int
    position: Point
    source: AwarenessSource


@dataclass(frozen=True)
class SensorContext:
    """Inputs shared by every sensor for one player in one tick."""

    fov_set: Collection[Coord]
    entities: Mapping[int, Entity]
    observer: Point
    margin: int = FOV_NETWORK_MARGIN
    window_radius: int = DEFAULT_FOV_RADIUS


Sensor = Callable[[SensorContext], Iterable[AwareEntity]]


def build_awareness(
    fov_set: Collection[Coord],
    entities: Mapping[int, Entity],
    margin: int,
    observer: Point | Coord,
    *,
    window_radius: int = DEFAULT_FOV_RADIUS,
) -> list[AwareEntity]:
    """Return the entities a player at ``observer`` perceives by sight.

    An entity qualifies when its tile is in ``fov_set`` or when it lies
    within ``window_radius + margin`` of the observer on both axes. The
    window is deliberately looser than the FOV shape so entities near the
    edge do not flicker between ticks. Result order is unspecified.
    """
    ox, oy = observer
    reach = window_radius + margin
    aware: list[AwareEntity] = []
    for eid, entity in entities.items():
        p = entity.position
        in_fov = (p.x, p.y) in fov_set
        in_margin = abs(p.x - ox) <= reach and abs(p.y - oy) <= reach
        if in_fov or in_margin:
            aware.append(AwareEntity(eid, p, AwarenessSource.SIGHT))
    return aware


def sight_sensor(context: SensorContext) -> list[AwareEntity]:
    return build_awareness(
        context.fov_set,
        context.entities,
        context.margin,
        context.observer,
        window_radius=context.window_radius,
    )


def merge_awareness(*candidates: Iterable[AwareEntity]) -> list[AwareEntity]:
    """Collapse candidate lists to one record per entity.

    The record with the highest source precedence is kept; on a tie the
    first one seen stays.
    """
    best: dict[int, AwareEntity] = {}
    for candidate_list in candidates:
        for aware in candidate_list:
            current = best.get(aware.entity_id)
            if current is None or aware.source.precedence > current.source.precedence:
                best[aware.entity_id] = aware
    return list(best.values())


def gather_awareness(
    context: SensorContext, sensors: Sequence[Sensor] = (sight_sensor,)
) -> list[AwareEntity]:
    """Run every sensor against ``context`` and merge the results."""
    results = [list(sensor(context)) for sensor in sensors]
    merged = merge_awareness(*results)
    log.debug(
        "Awareness gathered",
        observer=tuple(context.observer),
        sensors=len(sensors),
        aware_count=len(merged),
    )
    return merged
