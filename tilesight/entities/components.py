from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, NamedTuple, Tuple, TypeAlias

Coord: TypeAlias = Tuple[int, int]


@dataclass(frozen=True)
class Point:
    """Tile coordinate on an unbounded grid."""

    x: int
    y: int

    def __iter__(self):
        yield self.x
        yield self.y

    def __add__(self, other: "Point | Coord") -> "Point":
        ox, oy = other
        return Point(self.x + ox, self.y + oy)

    def __sub__(self, other: "Point | Coord") -> "Point":
        ox, oy = other
        return Point(self.x - ox, self.y - oy)

    def as_tuple(self) -> Coord:
        return (self.x, self.y)

    @classmethod
    def of(cls, value: "Point | Coord") -> "Point":
        """Coerce an ``(x, y)`` pair into a :class:`Point`."""
        if isinstance(value, Point):
            return value
        x, y = value
        return cls(int(x), int(y))


class EntityKind(Enum):
    """Kinds of entities that can occupy a tile."""

    PLAYER = "player"
    TREE = "tree"
    ROCK = "rock"

    @property
    def blocks_sight(self) -> bool:
        return KIND_CAPABILITIES[self].blocks_sight

    @property
    def blocks_movement(self) -> bool:
        return KIND_CAPABILITIES[self].blocks_movement

    @classmethod
    def from_name(cls, name: str) -> "EntityKind":
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(f"Unknown entity kind '{name}'") from None


class KindCapabilities(NamedTuple):
    blocks_sight: bool
    blocks_movement: bool


KIND_CAPABILITIES: Final[dict[EntityKind, KindCapabilities]] = {
    EntityKind.PLAYER: KindCapabilities(blocks_sight=False, blocks_movement=False),
    EntityKind.TREE: KindCapabilities(blocks_sight=True, blocks_movement=True),
    EntityKind.ROCK: KindCapabilities(blocks_sight=True, blocks_movement=True),
    # Add other entity kinds here...
}


@dataclass(frozen=True)
class Entity:
    """Read-only view of one entity as seen by the perception code."""

    position: Point
    kind: EntityKind
    name: str | None = None

    @property
    def blocks_sight(self) -> bool:
        return self.kind.blocks_sight

    @property
    def blocks_movement(self) -> bool:
        return self.kind.blocks_movement
