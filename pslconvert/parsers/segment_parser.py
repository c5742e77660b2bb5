"""
Segment, side, vertex and matcen parsers.

Matcen record format (16 bytes):
- u32 robot flags (bit n = robot id n can be spawned)
- fix hit points, fix interval
- i16 segment, i16 fuel center (discarded)

Vertex record format (12 bytes):
- FixVector location

Raw segment record format (64 bytes):
- u16[6] normal indices (discarded, normals are recomputed from geometry)
- u16[6] indices into the raw side table
- i16[6] children (-2 = level exit, -1 = solid, >= 0 = neighbour segment)
- u16[8] vertex indices
- i16 object list head, u8 special, i8 matcen (-1 = none)
- fix light, i16 value, i16 pad

Raw side record format (26 bytes):
- i16 wall (-1 = none)
- u16 base texture
- u16 overlay texture (low 14 bits) and rotation (high 2 bits)
- i16[4] u, i16[4] v (texel units biased by 0x40)
- u8[4] light

Segments and their sides are allocated before anything else is read;
walls, triggers and matcens refer to them while the segment data itself
only comes at the end of the file.
"""

from typing import Optional, Tuple

import numpy as np

from ..level import (
    Fix,
    FixVector,
    Level,
    LevelVertex,
    MatCenter,
    OverlayRotation,
    SegFunction,
    Segment,
    Side,
    Uvl,
    coerce_enum,
)
from ..utils import logDebug, logWarning
from .base import ByteCursor
from .wall_parser import resolve_index

CHILD_EXIT = -2
CHILD_SOLID = -1
NO_WALL = -1
NO_MATCEN = -1

OVERLAY_INDEX_MASK = 0x3FFF
OVERLAY_ROTATION_SHIFT = 14
UV_BIAS = 0x40
UV_SHIFT = 10
LIGHT_SHIFT = 9

VERTEX_DTYPE = np.dtype('<i4')

RAW_SEGMENT_DTYPE = np.dtype([
    ('normals', '<u2', (6,)),
    ('sides', '<u2', (6,)),
    ('children', '<i2', (6,)),
    ('vertices', '<u2', (8,)),
    ('objects', '<i2'),
    ('special', 'u1'),
    ('matcen', 'i1'),
    ('light', '<i4'),
    ('value', '<i2'),
    ('pad', '<i2'),
])

RAW_SIDE_DTYPE = np.dtype([
    ('wall', '<i2'),
    ('tmap', '<u2'),
    ('tmap2', '<u2'),
    ('u', '<i2', (4,)),
    ('v', '<i2', (4,)),
    ('light', 'u1', (4,)),
])


def unpack_overlay(tmap2: int) -> Tuple[int, int]:
    """Split a packed overlay field into (texture index, rotation)."""
    return tmap2 & OVERLAY_INDEX_MASK, tmap2 >> OVERLAY_ROTATION_SHIFT


def rescale_uvls(raw_sides: np.ndarray) -> np.ndarray:
    """
    Convert raw side samples to fixed point.

    Returns:
        int64 array of shape (len(raw_sides), 4, 3) holding raw Fix
        values of (u, v, l) for each corner
    """
    u = (raw_sides['u'].astype(np.int64) - UV_BIAS) << UV_SHIFT
    v = (raw_sides['v'].astype(np.int64) - UV_BIAS) << UV_SHIFT
    l = raw_sides['light'].astype(np.int64) << LIGHT_SHIFT
    return np.stack([u, v, l], axis=-1)


class SegmentGraphBuilder:
    """
    Builds the segment/side/vertex graph of a level.

    Usage:
        builder = SegmentGraphBuilder(level)
        builder.allocate(segment_count)
        ...read objects, walls and triggers...
        builder.read_matcens(cursor, matcen_count)
        builder.read_vertices(cursor, vertex_count)
        builder.read_raw_segments(cursor, segment_count)
        builder.read_raw_sides(cursor, side_count)
        builder.build()
    """

    def __init__(self, level: Level):
        self.level = level
        self._raw_segments: Optional[np.ndarray] = None
        self._raw_sides: Optional[np.ndarray] = None

    def allocate(self, segment_count: int):
        """Create empty segments, each with its six sides."""
        self.level.segments = [Segment() for _ in range(segment_count)]

    # =========================================================================
    # Readers
    # =========================================================================

    def read_matcen(self, cursor: ByteCursor) -> MatCenter:
        robot_flags = cursor.read_uint32()
        hit_points = cursor.read_fix()
        interval = cursor.read_fix()
        segnum = cursor.read_int16()
        cursor.skip(2)  # fuel center

        segment = resolve_index(self.level.segments, segnum, "Matcen segment")
        return MatCenter(
            segment=segment,
            spawned_robot_ids=MatCenter.robot_ids_from_flags(robot_flags),
            hit_points=hit_points,
            interval=interval,
        )

    def read_matcens(self, cursor: ByteCursor, count: int):
        for _ in range(count):
            self.level.matcens.append(self.read_matcen(cursor))

    def read_vertices(self, cursor: ByteCursor, count: int):
        coords = cursor.read_array(VERTEX_DTYPE, count * 3).reshape(count, 3)
        self.level.vertices = [
            LevelVertex(FixVector.from_raw_values(x, y, z)) for x, y, z in coords.tolist()
        ]

    def read_raw_segments(self, cursor: ByteCursor, count: int):
        self._raw_segments = cursor.read_array(RAW_SEGMENT_DTYPE, count)

    def read_raw_sides(self, cursor: ByteCursor, count: int):
        self._raw_sides = cursor.read_array(RAW_SIDE_DTYPE, count)

    # =========================================================================
    # Translation
    # =========================================================================

    def build(self):
        """Fill the pre-allocated segments from the raw records."""
        if self._raw_segments is None or self._raw_sides is None:
            raise RuntimeError("Raw segment and side records must be read before build()")

        uvls = rescale_uvls(self._raw_sides)
        for seg_num, segment in enumerate(self.level.segments):
            self._build_segment(seg_num, segment, self._raw_segments[seg_num], uvls)

    def _build_segment(self, seg_num: int, segment: Segment, raw: np.void, uvls: np.ndarray):
        raw_side_indices = raw['sides'].tolist()
        children = raw['children'].tolist()

        for side_num, side in enumerate(segment.sides):
            side_index = raw_side_indices[side_num]
            raw_side = resolve_index(self._raw_sides, side_index, "Raw side")
            self._build_side(seg_num, side, raw_side, uvls[side_index], children[side_num])

        for slot, vertex_index in enumerate(raw['vertices'].tolist()):
            segment.set_vertex(slot, resolve_index(self.level.vertices, vertex_index, "Vertex"))

        for side in segment.sides:
            for corner in range(side.get_num_vertices()):
                side.get_vertex(corner).connected_sides.append((side, corner))

        segment.function = coerce_enum(SegFunction, int(raw['special']))
        segment.light = Fix(int(raw['light']))

        matcen_index = int(raw['matcen'])
        if 0 <= matcen_index < len(self.level.matcens):
            segment.matcen = self.level.matcens[matcen_index]
        elif matcen_index != NO_MATCEN:
            logWarning(f"Segment {seg_num} matcen {matcen_index} out of range, ignored")

    def _build_side(self, seg_num: int, side: Side, raw: np.void, uvls: np.ndarray, child: int):
        wall_index = int(raw['wall'])
        if wall_index != NO_WALL:
            wall = resolve_index(self.level.walls, wall_index, "Wall")
            if wall.side is side:
                side.wall = wall
            else:
                logWarning(
                    f"Segment {seg_num} side {side.side_num} names wall {wall_index}, "
                    f"which sits on another side; keeping the wall on its own side"
                )

        if child == CHILD_EXIT:
            side.mark_exit()
        elif child >= 0:
            side.connect_to(resolve_index(self.level.segments, child, "Child segment"))
        else:
            if child != CHILD_SOLID:
                logDebug(f"Segment {seg_num} side {side.side_num} child {child} treated as solid")
            side.mark_solid()

        side.base_texture_index = int(raw['tmap'])
        overlay_index, rotation = unpack_overlay(int(raw['tmap2']))
        side.overlay_texture_index = overlay_index
        side.overlay_rotation = OverlayRotation(rotation)
        side.uvls = [Uvl(Fix(u), Fix(v), Fix(l)) for u, v, l in uvls.tolist()]
