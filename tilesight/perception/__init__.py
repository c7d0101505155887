"""Perception channels that decide which entities a player is aware of."""

from tilesight.perception.awareness import (
    AwareEntity,
    AwarenessSource,
    Sensor,
    SensorContext,
    build_awareness,
    gather_awareness,
    merge_awareness,
    sight_sensor,
)

__all__ = [
    "AwareEntity",
    "AwarenessSource",
    "Sensor",
    "SensorContext",
    "build_awareness",
    "gather_awareness",
    "merge_awareness",
    "sight_sensor",
]
