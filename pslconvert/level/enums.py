"""
Enumerations shared by the level data model.

Tag values are the ones stored in level files; do not renumber.
"""

from enum import Enum, IntEnum, IntFlag
from typing import Type, TypeVar, Union

E = TypeVar('E', bound=IntEnum)


def coerce_enum(enum_cls: Type[E], value: int) -> Union[E, int]:
    """Return the enum member for value, or the raw int if it has none."""
    try:
        return enum_cls(value)
    except ValueError:
        return value


class ObjectType(IntEnum):
    NONE = -1
    WALL = 0
    FIREBALL = 1
    ROBOT = 2
    HOSTAGE = 3
    PLAYER = 4
    WEAPON = 5
    CAMERA = 6
    POWERUP = 7
    DEBRIS = 8
    CONTROL_CENTER = 9
    FLARE = 10
    CLUTTER = 11
    GHOST = 12
    LIGHT = 13
    COOP = 14


class MovementTypeID(IntEnum):
    NONE = 0
    PHYSICS = 1
    SPINNING = 3


class ControlTypeID(IntEnum):
    NONE = 0
    AI = 1
    EXPLOSION = 2
    FLYING = 4
    SLEW = 5
    FLYTHROUGH = 6
    WEAPON = 9
    REPAIRCEN = 10
    MORPH = 11
    DEBRIS = 12
    POWERUP = 13
    LIGHT = 14
    REMOTE = 15
    CONTROL_CENTER = 16


class RenderTypeID(IntEnum):
    NONE = 0
    POLYOBJ = 1
    FIREBALL = 2
    LASER = 3
    HOSTAGE = 4
    POWERUP = 5
    MORPH = 6
    WEAPON_VCLIP = 7


class PhysicsFlags(IntFlag):
    TURNROLL = 0x01
    LEVELLING = 0x02
    BOUNCE = 0x04
    WIGGLE = 0x08
    STICK = 0x10
    PERSISTENT = 0x20
    USES_THRUST = 0x40


class WallType(IntEnum):
    NORMAL = 0
    BLASTABLE = 1
    DOOR = 2
    ILLUSION = 3
    OPEN = 4
    CLOSED = 5


class WallFlags(IntFlag):
    BLASTED = 0x01
    DOOR_OPENED = 0x02
    DOOR_LOCKED = 0x08
    DOOR_AUTO = 0x10
    ILLUSION_OFF = 0x20


class WallState(IntEnum):
    DOOR_CLOSED = 0
    DOOR_OPENING = 1
    DOOR_WAITING = 2
    DOOR_CLOSING = 3


class WallKeyFlags(IntFlag):
    NONE = 0x01
    BLUE = 0x02
    RED = 0x04
    GOLD = 0x08


class TriggerType(IntEnum):
    OPEN_DOOR = 0
    CLOSE_DOOR = 1
    MATCEN = 2
    EXIT = 3
    SECRET_EXIT = 4
    ILLUSION_OFF = 5
    ILLUSION_ON = 6


class TriggerFlags(IntFlag):
    CONTROL_DOORS = 0x0001
    SHIELD_DAMAGE = 0x0002
    ENERGY_DRAIN = 0x0004
    EXIT = 0x0008
    ON = 0x0010
    ONE_SHOT = 0x0020
    MATCEN = 0x0040
    ILLUSION_OFF = 0x0080
    SECRET_EXIT = 0x0100
    ILLUSION_ON = 0x0200


class SegFunction(IntEnum):
    NONE = 0
    FUELCEN = 1
    REPAIRCEN = 2
    CONTROLCEN = 3
    ROBOTMAKER = 4


class OverlayRotation(IntEnum):
    ROTATE_0 = 0
    ROTATE_90 = 1
    ROTATE_180 = 2
    ROTATE_270 = 3


class SideConnection(Enum):
    """What lies behind a side."""
    SOLID = "solid"  # No neighbouring segment
    EXIT = "exit"  # Level exit on the exterior boundary
    SEGMENT = "segment"  # Open to connected_segment
