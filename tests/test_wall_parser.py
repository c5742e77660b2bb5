import pytest

from pslconvert.config import ReaderConfig
from pslconvert.errors import IndexOutOfRangeError, LinkError, PSLReadError
from pslconvert.level import Level, Segment, TriggerFlags, Wall, WallKeyFlags, WallType
from pslconvert.parsers import (
    WALL_RECORD_SIZE,
    ByteCursor,
    CrossReferenceLinker,
    read_psl_level,
    read_trigger,
    read_wall,
)
from pslconvert.utils import get_counts

from psl_builder import pack_reactor_targets, pack_side, pack_trigger, pack_wall, two_segment_image


def empty_level(segment_count: int = 2) -> Level:
    level = Level()
    level.segments = [Segment() for _ in range(segment_count)]
    return level


def test_wall_record():
    level = empty_level()
    linker = CrossReferenceLinker(level)
    data = pack_wall(1, 3, hit_points=7, wall_type=WallType.BLASTABLE, flags=0x08,
                     keys=WallKeyFlags.RED, cloak=12, clip=4)
    assert len(data) == WALL_RECORD_SIZE
    cursor = ByteCursor(data)

    wall = read_wall(cursor, level, linker)

    side = level.segments[1].sides[3]
    assert wall.side is side
    assert side.wall is wall
    assert wall.hit_points.raw == 7
    assert wall.type == WallType.BLASTABLE
    assert wall.keys == WallKeyFlags.RED
    assert wall.door_clip_number == 4
    assert wall.cloak_opacity == 12
    assert cursor.offset == WALL_RECORD_SIZE
    assert linker.resolve_wall_links() == 0
    assert linker.resolve_wall_triggers() == 0


def test_wall_on_missing_segment_is_fatal():
    level = empty_level(1)
    with pytest.raises(IndexOutOfRangeError) as exc_info:
        read_wall(ByteCursor(pack_wall(4, 0)), level, CrossReferenceLinker(level))
    assert isinstance(exc_info.value, IndexError)


def test_wall_link_is_symmetric_when_one_side_stores_it(corridor_image):
    corridor_image.walls = [pack_wall(0, 2, linked=1), pack_wall(1, 0, linked=-1)]

    level = read_psl_level(corridor_image.build())

    wall0, wall1 = level.walls
    assert wall0.linked_wall is wall1
    assert wall1.linked_wall is wall0


def test_wall_link_stored_on_both_walls(corridor_image):
    corridor_image.walls = [pack_wall(0, 2, linked=1), pack_wall(1, 0, linked=0)]

    level = read_psl_level(corridor_image.build())

    wall0, wall1 = level.walls
    assert wall0.linked_wall is wall1
    assert wall1.linked_wall is wall0
    assert get_counts() == (0, 0)


def test_wall_link_out_of_range(corridor_image):
    corridor_image.walls = [pack_wall(0, 2, linked=5)]
    with pytest.raises(IndexOutOfRangeError):
        read_psl_level(corridor_image.build())


def test_relinking_drops_previous_partner():
    level = empty_level()
    a = Wall(level.segments[0].sides[0])
    b = Wall(level.segments[0].sides[1])
    c = Wall(level.segments[1].sides[0])

    assert a.link_to(b) == []
    assert c.link_to(b) == [a]

    assert a.linked_wall is None
    assert b.linked_wall is c
    assert c.linked_wall is b
    with pytest.raises(LinkError):
        a.link_to(a)


def test_wall_trigger_back_references():
    image = two_segment_image()
    image.walls = [pack_wall(0, 1, trigger=2)]
    image.sides[1] = pack_side(wall=0)
    image.triggers = [
        pack_trigger([]),
        pack_trigger([(1, 5)]),
        pack_trigger([(0, 3), (0, 1)]),
    ]

    level = read_psl_level(image.build())

    wall = level.walls[0]
    trigger = level.triggers[2]
    assert wall.trigger is trigger
    assert trigger.connected_walls == [wall]
    assert wall.controlling_triggers == [(trigger, 1)]
    assert wall.side.controlling_triggers == [(trigger, 1)]
    assert level.triggers[0].connected_walls == []
    assert level.triggers[1].targets == [level.segments[1].sides[5]]


def test_wall_controlled_by_several_triggers():
    image = two_segment_image()
    image.walls = [pack_wall(1, 4)]
    image.triggers = [pack_trigger([(1, 4)]), pack_trigger([(0, 0), (1, 4)])]

    level = read_psl_level(image.build())

    t0, t1 = level.triggers
    assert level.walls[0].controlling_triggers == [(t0, 0), (t1, 1)]


def test_trigger_index_out_of_range():
    image = two_segment_image()
    image.walls = [pack_wall(0, 1, trigger=3)]
    image.triggers = [pack_trigger([])]

    with pytest.raises(IndexOutOfRangeError):
        read_psl_level(image.build())


def test_trigger_keeps_only_declared_targets():
    level = empty_level(1)
    targets = [(0, i % 6) for i in range(10)]
    data = pack_trigger(targets, num_links=3, flags=TriggerFlags.CONTROL_DOORS, value=65536, time=20)
    cursor = ByteCursor(data + pack_reactor_targets())

    trigger = read_trigger(cursor, level, ReaderConfig())

    sides = level.segments[0].sides
    assert trigger.targets == [sides[0], sides[1], sides[2]]
    assert trigger.flags == TriggerFlags.CONTROL_DOORS
    assert trigger.value.raw == 65536
    assert trigger.time == 20
    assert cursor.offset == 16 + 10 * 4


def test_trigger_target_count_above_capacity():
    level = empty_level(1)
    cursor = ByteCursor(pack_trigger([(0, 0)], num_links=11))
    with pytest.raises(PSLReadError):
        read_trigger(cursor, level, ReaderConfig())


def test_trigger_target_on_bad_side():
    level = empty_level(1)
    cursor = ByteCursor(pack_trigger([(0, 6)]))
    with pytest.raises(IndexOutOfRangeError):
        read_trigger(cursor, level, ReaderConfig())


def test_ignored_targets_are_not_resolved():
    level = empty_level(1)
    targets = [(0, 0), (99, 99)]
    trigger = read_trigger(ByteCursor(pack_trigger(targets, num_links=1)), level, ReaderConfig())
    assert trigger.targets == [level.segments[0].sides[0]]


def test_reactor_trigger_targets(corridor_image):
    corridor_image.reactor = pack_reactor_targets([(1, 3), (0, 5), (0, 0)], count=2)

    level = read_psl_level(corridor_image.build())

    assert level.reactor_trigger_targets == [level.segments[1].sides[3], level.segments[0].sides[5]]
