"""
Wall and trigger record parsers.

Wall record format (24 bytes):
- i32 segment, i32 side
- fix hit points
- i32 linked wall (-1 = none)
- u8 type, u8 flags, u8 state
- u8 trigger (0xFF = none)
- u8 door clip number, u8 keys
- u8 controlling trigger (discarded, rebuilt from the triggers)
- u8 cloak opacity

Trigger record format (16 + 4 * max_walls_per_link bytes):
- u8 type, u8 pad
- u16 flags
- fix value
- i32 time
- u8 link_num (unused), u8 pad
- i16 num_links
- i16[max_walls_per_link] target segments
- i16[max_walls_per_link] target sides

Reactor trigger (2 + 4 * max_reactor_trigger_targets bytes):
- i16 num_links
- target list laid out as above

Walls refer to other walls and to triggers by index before those tables
are complete, so those links are remembered as (wall, index) pairs and
resolved by CrossReferenceLinker once the target table has been read.
"""

from typing import List, Sequence, Tuple, TypeVar

from ..config import ReaderConfig
from ..errors import IndexOutOfRangeError, PSLReadError
from ..level import (
    Level,
    Side,
    Trigger,
    TriggerFlags,
    TriggerType,
    Wall,
    WallFlags,
    WallKeyFlags,
    WallState,
    WallType,
    coerce_enum,
)
from ..utils import logWarning
from .base import ByteCursor

WALL_RECORD_SIZE = 24
NO_LINKED_WALL = -1
NO_TRIGGER = 0xFF

T = TypeVar('T')


def resolve_index(table: Sequence[T], index: int, what: str) -> T:
    """Look up a structural reference, rejecting anything outside the table."""
    if not 0 <= index < len(table):
        raise IndexOutOfRangeError(what, index, len(table))
    return table[index]


def resolve_side(level: Level, segnum: int, sidenum: int) -> Side:
    segment = resolve_index(level.segments, segnum, "Segment")
    return resolve_index(segment.sides, sidenum, "Side")


class CrossReferenceLinker:
    """
    Deferred wall links.

    Usage:
        linker = CrossReferenceLinker(level)
        for _ in range(wall_count):
            level.walls.append(read_wall(cursor, level, linker))
        linker.resolve_wall_links()
        ...read triggers...
        linker.resolve_wall_triggers()
    """

    def __init__(self, level: Level):
        self.level = level
        self._wall_links: List[Tuple[Wall, int]] = []
        self._wall_triggers: List[Tuple[Wall, int]] = []

    def defer_wall_link(self, wall: Wall, linked_index: int):
        self._wall_links.append((wall, linked_index))

    def defer_wall_trigger(self, wall: Wall, trigger_index: int):
        self._wall_triggers.append((wall, trigger_index))

    def resolve_wall_links(self) -> int:
        """
        Link every remembered wall pair in both directions.

        Files usually store the link on one wall of the pair only, so
        linking is always symmetric regardless of which wall carried it.

        Returns:
            Number of links resolved
        """
        for wall, linked_index in self._wall_links:
            other = resolve_index(self.level.walls, linked_index, "Linked wall")
            for dropped in wall.link_to(other):
                logWarning(
                    f"Wall {self.level.walls.index(dropped)} lost its link: "
                    f"wall {self.level.walls.index(wall)} relinked to {linked_index}"
                )
        resolved = len(self._wall_links)
        self._wall_links = []
        return resolved

    def resolve_wall_triggers(self) -> int:
        """
        Attach every remembered wall to the trigger it fires.

        Returns:
            Number of links resolved
        """
        for wall, trigger_index in self._wall_triggers:
            trigger = resolve_index(self.level.triggers, trigger_index, "Trigger")
            trigger.connect_wall(wall)
        resolved = len(self._wall_triggers)
        self._wall_triggers = []
        return resolved


def read_wall(cursor: ByteCursor, level: Level, linker: CrossReferenceLinker) -> Wall:
    """
    Read one wall record and attach it to its side.

    Links to other walls and to triggers are handed to linker.
    """
    segnum = cursor.read_int32()
    sidenum = cursor.read_int32()
    side = resolve_side(level, segnum, sidenum)

    wall = Wall(side)
    wall.hit_points = cursor.read_fix()
    linked_wall = cursor.read_int32()
    if linked_wall != NO_LINKED_WALL:
        linker.defer_wall_link(wall, linked_wall)
    wall.type = coerce_enum(WallType, cursor.read_uint8())
    wall.flags = WallFlags(cursor.read_uint8())
    wall.state = coerce_enum(WallState, cursor.read_uint8())
    trigger_num = cursor.read_uint8()
    if trigger_num != NO_TRIGGER:
        linker.defer_wall_trigger(wall, trigger_num)
    wall.door_clip_number = cursor.read_uint8()
    wall.keys = WallKeyFlags(cursor.read_uint8())
    cursor.skip(1)  # controlling trigger
    wall.cloak_opacity = cursor.read_uint8()
    return wall


def read_target_sides(cursor: ByteCursor, level: Level, capacity: int, count: int) -> List[Side]:
    """
    Read a fixed-capacity target list and resolve its first count entries.

    The full capacity is consumed even when count is smaller.
    """
    targets = cursor.read_target_list(capacity)
    if not 0 <= count <= capacity:
        raise PSLReadError(f"Target count {count} outside list capacity {capacity}")
    return [resolve_side(level, segnum, sidenum) for segnum, sidenum in targets[:count]]


def read_trigger(cursor: ByteCursor, level: Level, config: ReaderConfig) -> Trigger:
    """
    Read one trigger record.

    Target sides must already exist; the walls on them, if any, get a
    back-reference to this trigger straight away.
    """
    trigger = Trigger(max_targets=config.max_walls_per_link)
    trigger.type = coerce_enum(TriggerType, cursor.read_uint8())
    cursor.skip(1)  # pad
    trigger.flags = TriggerFlags(cursor.read_uint16())
    trigger.value = cursor.read_fix()
    trigger.time = cursor.read_int32()
    cursor.skip(1)  # link_num
    cursor.skip(1)  # pad
    num_links = cursor.read_int16()

    for side in read_target_sides(cursor, level, config.max_walls_per_link, num_links):
        trigger.add_target(side)
    trigger.register_target_walls()
    return trigger


def read_reactor_trigger_targets(cursor: ByteCursor, level: Level, config: ReaderConfig) -> int:
    """
    Read the reactor trigger target list into level.

    Returns:
        Number of targets
    """
    num_targets = cursor.read_int16()
    capacity = config.max_reactor_trigger_targets
    for side in read_target_sides(cursor, level, capacity, num_targets):
        level.add_reactor_trigger_target(side)
    return num_targets
