"""Entity types and the read-only snapshot used by perception."""

from tilesight.entities.components import (
    KIND_CAPABILITIES,
    Coord,
    Entity,
    EntityKind,
    KindCapabilities,
    Point,
)
from tilesight.entities.snapshot import EntitySnapshot, opaque_positions

__all__ = [
    "KIND_CAPABILITIES",
    "Coord",
    "Entity",
    "EntityKind",
    "EntitySnapshot",
    "KindCapabilities",
    "Point",
    "opaque_positions",
]
