"""
Walls and triggers.

A wall always sits on exactly one side. Doors come in pairs (one wall on
each side of the opening) linked to each other; triggers reference the
sides they act on.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from ..errors import LinkError
from .enums import TriggerFlags, TriggerType, WallFlags, WallKeyFlags, WallState, WallType
from .fixed_point import FIX_ZERO, Fix
from .segments import Side


@dataclass(eq=False)
class Wall:
    """Wall placed on a side. Creating one attaches it to the side."""
    side: Side = field(repr=False)
    hit_points: Fix = FIX_ZERO
    type: Union[WallType, int] = WallType.NORMAL
    flags: WallFlags = WallFlags(0)
    state: Union[WallState, int] = WallState.DOOR_CLOSED
    door_clip_number: int = 0
    keys: WallKeyFlags = WallKeyFlags.NONE
    cloak_opacity: int = 0
    trigger: Optional['Trigger'] = field(default=None, repr=False)
    controlling_triggers: List[Tuple['Trigger', int]] = field(default_factory=list, repr=False)
    linked_wall: Optional['Wall'] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        self.side.wall = self

    def link_to(self, other: 'Wall') -> List['Wall']:
        """
        Link two walls to each other.

        A wall has at most one partner, so any earlier partner of either
        wall is unlinked.

        Returns:
            Walls that lost their previous partner
        """
        if other is self:
            raise LinkError("Wall cannot be linked to itself")

        dropped = []
        for wall in (self, other):
            previous = wall.linked_wall
            if previous is not None and previous is not self and previous is not other:
                previous.linked_wall = None
                dropped.append(previous)

        self.linked_wall = other
        other.linked_wall = self
        return dropped

    def unlink(self):
        if self.linked_wall is not None:
            self.linked_wall.linked_wall = None
            self.linked_wall = None


@dataclass(eq=False)
class Trigger:
    """Trigger acting on an ordered list of target sides."""
    type: Union[TriggerType, int] = TriggerType.OPEN_DOOR
    flags: TriggerFlags = TriggerFlags(0)
    value: Fix = FIX_ZERO
    time: int = 0
    max_targets: int = field(default=10, repr=False)
    targets: List[Side] = field(default_factory=list, repr=False)
    connected_walls: List[Wall] = field(default_factory=list, repr=False)

    def add_target(self, side: Side):
        if len(self.targets) >= self.max_targets:
            raise LinkError(f"Trigger already has the maximum of {self.max_targets} targets")
        self.targets.append(side)

    def connect_wall(self, wall: Wall):
        """Make this the trigger fired by wall."""
        wall.trigger = self
        self.connected_walls.append(wall)

    def register_target_walls(self):
        """Record this trigger on the wall of every target side that has one."""
        for target_num, side in enumerate(self.targets):
            if side.wall is not None:
                side.wall.controlling_triggers.append((self, target_num))
