# tilesight/entities/snapshot.py
"""Read-only entity snapshot consumed by the perception code.

The entity store itself lives elsewhere (typically a polars-backed ECS
registry). Once per tick the world is frozen into an :class:`EntitySnapshot`
and every player's FOV and awareness pass reads from that same snapshot.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

import polars as pl
import structlog

from tilesight.entities.components import Coord, Entity, EntityKind, Point

log = structlog.get_logger(__name__)

# Columns required when building a snapshot from a registry frame.
SNAPSHOT_COLUMNS: tuple[str, ...] = ("entity_id", "x", "y", "kind")


class EntitySnapshot(Mapping[int, Entity]):
    """Immutable mapping of entity id to :class:`Entity`."""

    def __init__(self, entities: Mapping[int, Entity] | None = None) -> None:
        self._entities: Mapping[int, Entity] = MappingProxyType(dict(entities or {}))

    def __getitem__(self, entity_id: int) -> Entity:
        return self._entities[entity_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __repr__(self) -> str:
        return f"EntitySnapshot({len(self)} entities)"

    def positions_of(self, kind: EntityKind) -> list[Point]:
        return [e.position for e in self._entities.values() if e.kind is kind]

    @classmethod
    def from_frame(cls, df: pl.DataFrame) -> "EntitySnapshot":
        """Build a snapshot from an entity registry DataFrame.

        The frame must provide ``entity_id``, ``x``, ``y`` and ``kind``
        columns. ``name`` is used when present, and rows with a false
        ``is_active`` column are skipped.
        """
        missing = [c for c in SNAPSHOT_COLUMNS if c not in df.columns]
        if missing:
            log.error("Entity frame missing columns", missing=missing)
            raise ValueError(f"Entity frame is missing columns: {missing}")

        if "is_active" in df.columns:
            df = df.filter(pl.col("is_active"))

        has_name = "name" in df.columns
        entities: dict[int, Entity] = {}
        for row in df.iter_rows(named=True):
            entities[int(row["entity_id"])] = Entity(
                position=Point(int(row["x"]), int(row["y"])),
                kind=EntityKind.from_name(row["kind"]),
                name=row["name"] if has_name else None,
            )
        log.debug("Snapshot built from frame", entity_count=len(entities))
        return cls(entities)

    def to_frame(self) -> pl.DataFrame:
        """Export the snapshot in the registry's column layout."""
        rows = [
            {
                "entity_id": eid,
                "x": e.position.x,
                "y": e.position.y,
                "kind": e.kind.value,
                "name": e.name,
            }
            for eid, e in self._entities.items()
        ]
        schema = {
            "entity_id": pl.UInt64,
            "x": pl.Int32,
            "y": pl.Int32,
            "kind": pl.Utf8,
            "name": pl.Utf8,
        }
        return pl.DataFrame(rows, schema=schema)


def opaque_positions(entities: Mapping[int, Entity]) -> frozenset[Coord]:
    """Positions of all entities whose kind blocks line of sight."""
    return frozenset(
        (e.position.x, e.position.y) for e in entities.values() if e.blocks_sight
    )
