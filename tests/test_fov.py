import pytest

from tilesight.entities import Entity, EntityKind, Point
from tilesight.world.fov import (
    compute_fov,
    compute_fov_from_entities,
    compute_fov_from_opaque,
    transform_octant,
)


def _open(x: int, y: int) -> bool:
    return False


def _disk(radius: int) -> set[tuple[int, int]]:
    return {
        (dx, dy)
        for dx in range(-radius, radius + 1)
        for dy in range(-radius, radius + 1)
        if dx * dx + dy * dy <= radius * radius
    }


@pytest.mark.parametrize("radius", [0, 1, 5, 12])
def test_origin_always_visible(radius):
    assert (5, 5) in compute_fov((5, 5), radius, _open)
    # Even when the observer stands on an opaque tile
    assert (5, 5) in compute_fov((5, 5), radius, lambda x, y: True)


def test_fov_respects_radius():
    fov = compute_fov(Point(0, 0), 3, _open)
    assert (3, 0) in fov
    assert (4, 0) not in fov
    assert (0, -3) in fov
    assert (2, 2) in fov
    assert (3, 3) not in fov


@pytest.mark.parametrize("radius", range(1, 11))
def test_open_field_matches_disk(radius):
    assert compute_fov((0, 0), radius, _open) == _disk(radius)


def test_open_field_is_translated_with_origin():
    fov = compute_fov((-7, 40), 4, _open)
    assert fov == {(x - 7, y + 40) for x, y in _disk(4)}


def test_opaque_tile_visible_but_blocks_behind():
    fov = compute_fov((0, 0), 10, lambda x, y: (x, y) == (2, 0))
    assert (2, 0) in fov
    assert (3, 0) not in fov
    assert (5, 0) not in fov
    assert (9, 0) not in fov
    # The other directions are unaffected
    assert (-9, 0) in fov
    assert (0, 9) in fov


def test_compute_with_wall_blocks_visibility():
    wall = {(2, y) for y in range(-5, 6)}
    fov = compute_fov_from_opaque((0, 0), 8, wall)
    assert (2, 0) in fov
    assert (2, 2) in fov
    assert (3, 0) not in fov
    assert (4, 1) not in fov
    assert (3, 3) not in fov
    assert (-3, 0) in fov
    assert (0, 3) in fov


def test_compute_negative_range_only_origin_visible():
    assert compute_fov((2, 2), -5, _open) == {(2, 2)}


def test_zero_radius_only_origin_visible():
    assert compute_fov((2, 2), 0, _open) == {(2, 2)}


def test_compute_is_deterministic():
    opaque = {(1, 3), (2, 3), (-4, 0), (5, 5), (0, -2)}
    first = compute_fov_from_opaque((0, 0), 9, opaque)
    for _ in range(3):
        assert compute_fov_from_opaque((0, 0), 9, opaque) == first


def test_opacity_predicate_only_sees_world_coordinates():
    seen = []

    def is_opaque(x, y):
        seen.append((x, y))
        return False

    compute_fov((100, -100), 2, is_opaque)
    assert seen
    assert all(abs(x - 100) <= 2 and abs(y + 100) <= 2 for x, y in seen)


def test_compute_fov_from_entities_blocks_trees():
    entities = {
        1: Entity(Point(3, 0), EntityKind.TREE),
        2: Entity(Point(0, 3), EntityKind.PLAYER),
    }
    fov = compute_fov_from_entities(Point(0, 0), 10, entities)
    assert (3, 0) in fov
    assert (4, 0) not in fov
    # Players do not block sight
    assert (0, 3) in fov
    assert (0, 4) in fov


def test_transform_octants_cover_all_directions():
    offsets = {transform_octant(-1, -2, octant) for octant in range(8)}
    assert offsets == {
        (-1, -2), (-2, -1), (-2, 1), (-1, 2),
        (1, 2), (2, 1), (2, -1), (1, -2),
    }
