"""
Segment geometry: vertices, segments, sides and matter generators.

Segments are cubes with 6 sides and 8 corner vertices. Vertices are
shared between neighbouring segments and remember every (segment, slot)
and (side, corner) that uses them.
"""

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Tuple, TYPE_CHECKING

from ..errors import LinkError
from .enums import OverlayRotation, SegFunction, SideConnection
from .fixed_point import FIX_ZERO, Fix, FixVector

if TYPE_CHECKING:
    from .walls import Trigger, Wall


@dataclass(eq=False)
class LevelVertex:
    """A corner position shared by any number of segments."""
    location: FixVector
    connected_segments: List[Tuple['Segment', int]] = field(default_factory=list, repr=False)
    connected_sides: List[Tuple['Side', int]] = field(default_factory=list, repr=False)


@dataclass(frozen=True)
class Uvl:
    """Texture coordinate and light value at one side corner."""
    u: Fix = FIX_ZERO
    v: Fix = FIX_ZERO
    l: Fix = FIX_ZERO


@dataclass(eq=False)
class Side:
    """One face of a segment."""
    MAX_VERTICES: ClassVar[int] = 4

    segment: 'Segment' = field(repr=False)
    side_num: int
    base_texture_index: int = 0
    overlay_texture_index: int = 0
    overlay_rotation: OverlayRotation = OverlayRotation.ROTATE_0
    uvls: List[Uvl] = field(default_factory=lambda: [Uvl() for _ in range(Side.MAX_VERTICES)])
    wall: Optional['Wall'] = field(default=None, repr=False)
    connection: SideConnection = field(default=SideConnection.SOLID, init=False)
    _connected_segment: Optional['Segment'] = field(default=None, init=False, repr=False)

    @property
    def connected_segment(self) -> Optional['Segment']:
        return self._connected_segment

    @property
    def is_exit(self) -> bool:
        return self.connection is SideConnection.EXIT

    def connect_to(self, segment: 'Segment'):
        """Open this side onto a neighbouring segment."""
        self.connection = SideConnection.SEGMENT
        self._connected_segment = segment

    def mark_exit(self):
        self.connection = SideConnection.EXIT
        self._connected_segment = None

    def mark_solid(self):
        self.connection = SideConnection.SOLID
        self._connected_segment = None

    def get_num_vertices(self) -> int:
        return self.MAX_VERTICES

    def get_vertex(self, corner: int) -> Optional[LevelVertex]:
        """Vertex at a corner of this side, via the owning segment's slots."""
        return self.segment.vertices[Segment.SIDE_TO_VERTS[self.side_num][corner]]

    @property
    def vertices(self) -> List[Optional[LevelVertex]]:
        return [self.get_vertex(corner) for corner in range(self.get_num_vertices())]

    @property
    def controlling_triggers(self) -> List[Tuple['Trigger', int]]:
        """Triggers targeting this side's wall, with the target's position in each trigger."""
        if self.wall is None:
            return []
        return self.wall.controlling_triggers


@dataclass(eq=False)
class Segment:
    """A cube of level geometry."""
    MAX_SIDES: ClassVar[int] = 6
    MAX_VERTICES: ClassVar[int] = 8

    # Segment vertex slots of each side's corners (left, top, right, bottom, back, front)
    SIDE_TO_VERTS: ClassVar[Tuple[Tuple[int, int, int, int], ...]] = (
        (7, 6, 2, 3),
        (0, 4, 7, 3),
        (0, 1, 5, 4),
        (2, 6, 5, 1),
        (4, 5, 6, 7),
        (3, 2, 1, 0),
    )

    function: SegFunction = SegFunction.NONE
    light: Fix = FIX_ZERO
    matcen: Optional['MatCenter'] = field(default=None, repr=False)
    sides: List[Side] = field(default_factory=list, repr=False)
    vertices: List[Optional[LevelVertex]] = field(default_factory=list, repr=False)

    def __post_init__(self):
        if not self.sides:
            self.sides = [Side(self, side_num) for side_num in range(self.MAX_SIDES)]
        if not self.vertices:
            self.vertices = [None] * self.MAX_VERTICES
        if len(self.sides) != self.MAX_SIDES or len(self.vertices) != self.MAX_VERTICES:
            raise LinkError(f"Segment needs {self.MAX_SIDES} sides and {self.MAX_VERTICES} vertex slots")

    def set_vertex(self, slot: int, vertex: LevelVertex):
        """Place a vertex in a corner slot and record the back-reference."""
        self.vertices[slot] = vertex
        vertex.connected_segments.append((self, slot))

    @property
    def neighbours(self) -> List['Segment']:
        return [side.connected_segment for side in self.sides
                if side.connection is SideConnection.SEGMENT]


@dataclass(eq=False)
class MatCenter:
    """Robot matter generator placed in a segment."""
    MAX_ROBOT_IDS: ClassVar[int] = 32

    segment: Segment = field(repr=False)
    spawned_robot_ids: List[int] = field(default_factory=list)
    hit_points: Fix = FIX_ZERO
    interval: Fix = FIX_ZERO

    @classmethod
    def robot_ids_from_flags(cls, robot_flags: int) -> List[int]:
        return [i for i in range(cls.MAX_ROBOT_IDS) if robot_flags & (1 << i)]

    @property
    def robot_flags(self) -> int:
        flags = 0
        for robot_id in self.spawned_robot_ids:
            flags |= 1 << robot_id
        return flags
