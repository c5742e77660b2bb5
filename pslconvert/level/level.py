#!/usr/bin/env python3
"""
Level Data Structure

Root of the level graph. Holds every entity table and checks the
cross-reference invariants once a read has finished.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np

from ..errors import LinkError
from .objects import LevelObject
from .segments import LevelVertex, MatCenter, Segment, Side
from .walls import Trigger, Wall


@dataclass(eq=False)
class Level:
    """
    A fully cross-linked level.

    Built once by the reader and then handed to a writer unchanged.
    """

    name: str = ""
    vertices: List[LevelVertex] = field(default_factory=list, repr=False)
    segments: List[Segment] = field(default_factory=list, repr=False)
    objects: List[LevelObject] = field(default_factory=list, repr=False)
    walls: List[Wall] = field(default_factory=list, repr=False)
    triggers: List[Trigger] = field(default_factory=list, repr=False)
    matcens: List[MatCenter] = field(default_factory=list, repr=False)
    reactor_trigger_targets: List[Side] = field(default_factory=list, repr=False)
    max_reactor_trigger_targets: int = 10

    # Header counts with no table of their own
    door_count: int = 0
    normal_count: int = 0

    def add_reactor_trigger_target(self, side: Side):
        if len(self.reactor_trigger_targets) >= self.max_reactor_trigger_targets:
            raise LinkError(
                f"Reactor trigger already has the maximum of {self.max_reactor_trigger_targets} targets"
            )
        self.reactor_trigger_targets.append(side)

    # =========================================================================
    # Geometry
    # =========================================================================

    def vertex_positions(self) -> np.ndarray:
        """All vertex locations as an (N, 3) float64 array in world units."""
        if not self.vertices:
            return np.zeros((0, 3), dtype=np.float64)
        raw = np.array([v.location.raw for v in self.vertices], dtype=np.int64)
        return raw.astype(np.float64) / 65536.0

    def bounding_box(self):
        """Return (min, max) corners of the vertex cloud, or None for an empty level."""
        positions = self.vertex_positions()
        if len(positions) == 0:
            return None
        return tuple(positions.min(axis=0)), tuple(positions.max(axis=0))

    # =========================================================================
    # Invariants
    # =========================================================================

    def validate(self):
        """
        Check the cross references between entities.

        Raises:
            LinkError: on the first inconsistency found
        """
        for seg_num, segment in enumerate(self.segments):
            for side_num, side in enumerate(segment.sides):
                if side.segment is not segment or side.side_num != side_num:
                    raise LinkError(f"Side {side_num} of segment {seg_num} belongs to another segment")
                if side.wall is not None and side.wall.side is not side:
                    raise LinkError(f"Wall on segment {seg_num} side {side_num} sits on another side")
            for slot, vertex in enumerate(segment.vertices):
                if vertex is None:
                    raise LinkError(f"Segment {seg_num} vertex slot {slot} is empty")

        for wall_num, wall in enumerate(self.walls):
            if wall.side.wall is not wall:
                raise LinkError(f"Wall {wall_num} is not attached to its side")
            partner = wall.linked_wall
            if partner is not None and partner.linked_wall is not wall:
                raise LinkError(f"Wall {wall_num} link is one-directional")

        for trigger_num, trigger in enumerate(self.triggers):
            if len(trigger.targets) > trigger.max_targets:
                raise LinkError(
                    f"Trigger {trigger_num} has {len(trigger.targets)} targets (max {trigger.max_targets})"
                )
            for wall in trigger.connected_walls:
                if wall.trigger is not trigger:
                    raise LinkError(f"Trigger {trigger_num} lists a wall owned by another trigger")

        if len(self.reactor_trigger_targets) > self.max_reactor_trigger_targets:
            raise LinkError("Too many reactor trigger targets")

    # =========================================================================
    # Reporting
    # =========================================================================

    def summary(self) -> Dict[str, Any]:
        """Counts and extents suitable for printing or JSON output."""
        bbox = self.bounding_box()
        return {
            'name': self.name,
            'vertices': len(self.vertices),
            'segments': len(self.segments),
            'objects': len(self.objects),
            'walls': len(self.walls),
            'linked_walls': sum(1 for w in self.walls if w.linked_wall is not None),
            'triggers': len(self.triggers),
            'matcens': len(self.matcens),
            'reactor_trigger_targets': len(self.reactor_trigger_targets),
            'exits': sum(1 for s in self.segments for side in s.sides if side.is_exit),
            'bounding_box': None if bbox is None else {
                'min': [float(c) for c in bbox[0]],
                'max': [float(c) for c in bbox[1]],
            },
        }
