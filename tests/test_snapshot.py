import polars as pl
import pytest

from tilesight.entities import (
    KIND_CAPABILITIES,
    Entity,
    EntityKind,
    EntitySnapshot,
    Point,
    opaque_positions,
)


def _registry_frame():
    return pl.DataFrame(
        {
            "entity_id": [1, 2, 3, 4],
            "is_active": [True, True, False, True],
            "x": [0, 3, 5, -2],
            "y": [0, 0, 1, 7],
            "kind": ["player", "tree", "rock", "ROCK"],
            "name": ["hero", None, None, None],
        }
    )


def test_capabilities_cover_every_kind():
    assert set(KIND_CAPABILITIES) == set(EntityKind)
    assert EntityKind.TREE.blocks_sight
    assert EntityKind.TREE.blocks_movement
    assert not EntityKind.PLAYER.blocks_sight
    assert not EntityKind.PLAYER.blocks_movement


def test_from_frame_skips_inactive_rows():
    snapshot = EntitySnapshot.from_frame(_registry_frame())
    assert set(snapshot) == {1, 2, 4}
    assert snapshot[1] == Entity(Point(0, 0), EntityKind.PLAYER, name="hero")
    assert snapshot[4].kind is EntityKind.ROCK


def test_from_frame_requires_columns():
    with pytest.raises(ValueError):
        EntitySnapshot.from_frame(pl.DataFrame({"entity_id": [1], "x": [0]}))


def test_from_frame_rejects_unknown_kind():
    df = pl.DataFrame({"entity_id": [1], "x": [0], "y": [0], "kind": ["dragon"]})
    with pytest.raises(ValueError):
        EntitySnapshot.from_frame(df)


def test_to_frame_round_trips():
    snapshot = EntitySnapshot.from_frame(_registry_frame())
    again = EntitySnapshot.from_frame(snapshot.to_frame())
    assert dict(again) == dict(snapshot)


def test_opaque_positions():
    snapshot = EntitySnapshot.from_frame(_registry_frame())
    assert opaque_positions(snapshot) == frozenset({(3, 0), (-2, 7)})
    assert opaque_positions(EntitySnapshot()) == frozenset()


def test_snapshot_is_read_only():
    source = {1: Entity(Point(0, 0), EntityKind.TREE)}
    snapshot = EntitySnapshot(source)
    source[2] = Entity(Point(1, 1), EntityKind.TREE)
    assert len(snapshot) == 1
    with pytest.raises(TypeError):
        snapshot[3] = Entity(Point(2, 2), EntityKind.TREE)


def test_positions_of():
    snapshot = EntitySnapshot.from_frame(_registry_frame())
    assert snapshot.positions_of(EntityKind.ROCK) == [Point(-2, 7)]


def test_point_arithmetic():
    p = Point(2, 3)
    assert p + (1, -1) == Point(3, 2)
    assert p - Point(2, 3) == Point(0, 0)
    x, y = p
    assert (x, y) == p.as_tuple() == (2, 3)
    assert Point.of((4, 5)) == Point(4, 5)
    assert Point.of(p) is p


def test_players_do_not_block_movement():
    hero = Entity(Point(1, 1), EntityKind.PLAYER)
    assert not hero.blocks_movement
    assert not hero.blocks_sight
