"""
Builders for synthetic PlayStation level images.

Every pack_* function returns the bytes of one record laid out exactly
as the reader expects; PSLImage assembles a whole file.
"""

import struct
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

OBJECT_HEADER_SIZE = 96
MOVEMENT_SLOT = 64
CONTROL_SLOT = 32
RENDER_SLOT = 76

UV_ZERO = 0x40


def pad_to(data: bytes, size: int, filler: int = 0) -> bytes:
    assert len(data) <= size, f"{len(data)} bytes do not fit in {size}"
    return data + bytes([filler]) * (size - len(data))


def pack_header(name: bytes = b"test level", objects: int = 1, walls: int = 0, doors: int = 0,
                triggers: int = 0, matcens: int = 0, vertices: int = 8, segments: int = 1,
                sides: int = 6, normals: int = 0) -> bytes:
    return pad_to(name, 36) + struct.pack(
        '<9i', objects - 1, walls, doors, triggers, matcens, vertices, segments, sides, normals
    )


def pack_object(obj_type: int = 4, subtype: int = 0, control: int = 0, movement: int = 0,
                render: int = 0, segnum: int = 0, position: Tuple[int, int, int] = (0, 0, 0),
                movement_data: bytes = b"", control_data: bytes = b"", render_data: bytes = b"",
                filler: int = 0) -> bytes:
    header = struct.pack('<ibB', 0x1234, obj_type, subtype)
    header += struct.pack('<hh', -1, -1)
    header += struct.pack('<BBBB', control, movement, render, 0)
    header += struct.pack('<hhh', segnum, -1, 0)
    header += struct.pack('<3i', *position)
    header += struct.pack('<9i', 65536, 0, 0, 0, 65536, 0, 0, 0, 65536)
    header += struct.pack('<ii', 5 * 65536, 100 * 65536)
    header += struct.pack('<3i', *position)
    header += struct.pack('<bBBb', -1, 0, 0, -1)
    header += struct.pack('<i', 0)
    assert len(header) == OBJECT_HEADER_SIZE
    return (header
            + pad_to(movement_data, MOVEMENT_SLOT, filler)
            + pad_to(control_data, CONTROL_SLOT, filler)
            + pad_to(render_data, RENDER_SLOT, filler))


def pack_wall(segnum: int, sidenum: int, hit_points: int = 100 * 65536, linked: int = -1,
              wall_type: int = 2, flags: int = 0, state: int = 0, trigger: int = 0xFF,
              clip: int = 1, keys: int = 1, cloak: int = 0) -> bytes:
    return struct.pack('<iiii8B', segnum, sidenum, hit_points, linked,
                       wall_type, flags, state, trigger, clip, keys, 0xFF, cloak)


def pack_target_list(targets: Sequence[Tuple[int, int]], capacity: int = 10) -> bytes:
    padded = list(targets) + [(0, 0)] * (capacity - len(targets))
    segs = [t[0] for t in padded]
    sides = [t[1] for t in padded]
    return struct.pack(f'<{capacity}h{capacity}h', *segs, *sides)


def pack_trigger(targets: Sequence[Tuple[int, int]], num_links: int = None, capacity: int = 10,
                 trigger_type: int = 0, flags: int = 1, value: int = 0, time: int = -1) -> bytes:
    if num_links is None:
        num_links = len(targets)
    return (struct.pack('<BBHiiBBh', trigger_type, 0, flags, value, time, 0, 0, num_links)
            + pack_target_list(targets, capacity))


def pack_reactor_targets(targets: Sequence[Tuple[int, int]] = (), capacity: int = 10,
                         count: int = None) -> bytes:
    if count is None:
        count = len(targets)
    return struct.pack('<h', count) + pack_target_list(targets, capacity)


def pack_matcen(robot_flags: int, segnum: int, hit_points: int = 500 * 65536,
                interval: int = 5 * 65536) -> bytes:
    return struct.pack('<Iiihh', robot_flags, hit_points, interval, segnum, -1)


def pack_vertex(x: int, y: int, z: int) -> bytes:
    return struct.pack('<3i', x, y, z)


def pack_segment(sides: Sequence[int], children: Sequence[int] = (-1,) * 6,
                 vertices: Sequence[int] = tuple(range(8)), special: int = 0,
                 matcen: int = -1, light: int = 0) -> bytes:
    return (struct.pack('<6H', *range(6))
            + struct.pack('<6H', *sides)
            + struct.pack('<6h', *children)
            + struct.pack('<8H', *vertices)
            + struct.pack('<hBbihh', -1, special, matcen, light, 0, 0))


def pack_side(wall: int = -1, tmap: int = 0, tmap2: int = 0,
              u: Sequence[int] = (UV_ZERO,) * 4, v: Sequence[int] = (UV_ZERO,) * 4,
              light: Sequence[int] = (0,) * 4) -> bytes:
    return struct.pack('<hHH4h4h4B', wall, tmap, tmap2, *u, *v, *light)


CUBE_VERTICES = [
    (0, 0, 0), (20, 0, 0), (20, 20, 0), (0, 20, 0),
    (0, 0, 20), (20, 0, 20), (20, 20, 20), (0, 20, 20),
]


@dataclass
class PSLImage:
    """Record lists for a whole level; build() lays them out in file order."""
    name: bytes = b"test level"
    objects: List[bytes] = field(default_factory=lambda: [pack_object()])
    walls: List[bytes] = field(default_factory=list)
    triggers: List[bytes] = field(default_factory=list)
    reactor: bytes = field(default_factory=pack_reactor_targets)
    matcens: List[bytes] = field(default_factory=list)
    vertices: List[bytes] = field(
        default_factory=lambda: [pack_vertex(*(c * 65536 for c in v)) for v in CUBE_VERTICES]
    )
    segments: List[bytes] = field(default_factory=lambda: [pack_segment(range(6))])
    sides: List[bytes] = field(default_factory=lambda: [pack_side() for _ in range(6)])
    normals: int = 0
    trailer: bytes = b""

    def build(self) -> bytes:
        header = pack_header(
            name=self.name, objects=len(self.objects), walls=len(self.walls),
            triggers=len(self.triggers), matcens=len(self.matcens),
            vertices=len(self.vertices), segments=len(self.segments),
            sides=len(self.sides), normals=self.normals,
        )
        return b"".join([
            header,
            *self.objects,
            *self.walls,
            *self.triggers,
            self.reactor,
            *self.matcens,
            *self.vertices,
            *self.segments,
            *self.sides,
            self.trailer,
        ])


def two_segment_image(**overrides) -> PSLImage:
    """
    Two segments joined through side 2 of segment 0 and side 0 of segment 1,
    with twelve sides in the raw side table.
    """
    children0 = [-1, -1, 1, -1, -1, -1]
    children1 = [0, -1, -1, -1, -1, -1]
    image = PSLImage(
        segments=[pack_segment(range(6), children0), pack_segment(range(6, 12), children1)],
        sides=[pack_side() for _ in range(12)],
    )
    for key, value in overrides.items():
        setattr(image, key, value)
    return image
