from tilesight.entities import Entity, EntityKind, Point
from tilesight.perception.awareness import (
    AwareEntity,
    AwarenessSource,
    SensorContext,
    build_awareness,
    gather_awareness,
    merge_awareness,
    sight_sensor,
)


def _player(x, y):
    return Entity(Point(x, y), EntityKind.PLAYER)


def test_awareness_includes_entities_in_fov():
    entities = {1: _player(1, 0)}
    aware = build_awareness({(1, 0)}, entities, 0, Point(0, 0))
    assert aware == [AwareEntity(1, Point(1, 0), AwarenessSource.SIGHT)]


def test_awareness_includes_far_entity_on_visible_tile():
    entities = {7: _player(40, 0)}
    aware = build_awareness({(40, 0)}, entities, 0, (0, 0), window_radius=3)
    assert {a.entity_id for a in aware} == {7}
    assert aware[0].source is AwarenessSource.SIGHT


def test_awareness_margin_window():
    entities = {
        1: _player(14, -14),  # corner of the 12 + 2 window
        2: _player(15, 0),  # just outside on x
        3: _player(0, 20),  # outside, not visible
        4: _player(-3, 2),
    }
    aware = build_awareness(set(), entities, 2, Point(0, 0))
    assert {a.entity_id for a in aware} == {1, 4}
    assert all(a.source is AwarenessSource.SIGHT for a in aware)


def test_awareness_window_radius_override():
    entities = {1: _player(6, 0), 2: _player(7, 0)}
    aware = build_awareness(set(), entities, 1, Point(0, 0), window_radius=5)
    assert {a.entity_id for a in aware} == {1}


def test_awareness_excludes_outside_everything():
    entities = {1: _player(100, 100)}
    assert build_awareness({(0, 0)}, entities, 2, Point(0, 0)) == []


def test_awareness_records_position_at_build_time():
    entities = {3: Entity(Point(2, 2), EntityKind.TREE)}
    aware = build_awareness({(2, 2)}, entities, 0, Point(0, 0))
    assert aware[0].position == Point(2, 2)


def test_merge_prefers_sight_over_sound():
    heard = [AwareEntity(1, Point(3, 3), AwarenessSource.SOUND)]
    seen = [AwareEntity(1, Point(3, 3), AwarenessSource.SIGHT)]
    only_heard = [AwareEntity(2, Point(9, 9), AwarenessSource.SOUND)]

    merged = merge_awareness(heard, seen, only_heard)
    by_id = {a.entity_id: a for a in merged}
    assert by_id[1].source is AwarenessSource.SIGHT
    assert by_id[2].source is AwarenessSource.SOUND

    # Order of the candidate lists does not matter
    merged_reversed = merge_awareness(seen, heard, only_heard)
    assert {a.entity_id: a.source for a in merged_reversed} == {
        a.entity_id: a.source for a in merged
    }


def test_gather_with_extra_sensor():
    entities = {1: _player(1, 0), 2: _player(50, 50)}

    def fake_hearing(context):
        return [
            AwareEntity(eid, e.position, AwarenessSource.SOUND)
            for eid, e in context.entities.items()
        ]

    context = SensorContext({(1, 0)}, entities, Point(0, 0), margin=0, window_radius=0)
    aware = gather_awareness(context, sensors=(sight_sensor, fake_hearing))
    assert {a.entity_id: a.source for a in aware} == {
        1: AwarenessSource.SIGHT,
        2: AwarenessSource.SOUND,
    }


def test_gather_defaults_to_sight_only():
    entities = {1: _player(1, 0), 2: _player(50, 50)}
    context = SensorContext({(1, 0)}, entities, Point(0, 0))
    aware = gather_awareness(context)
    assert {a.entity_id for a in aware} == {1}
