"""
PlayStation Level (.psl) Reader

Reads a PlayStation level image into a fully linked Level.

File format:
- Header (72 bytes):
  - char[36] level name (null terminated)
  - i32 object count - 1
  - i32 wall count
  - i32 door count (not needed for the graph)
  - i32 trigger count
  - i32 matcen count
  - i32 vertex count
  - i32 segment count
  - i32 side count
  - i32 normal count
- Objects (object count + 1 records, see object_parser)
- Walls (see wall_parser)
- Triggers (see wall_parser)
- Reactor trigger targets (see wall_parser)
- Matcens, vertices, raw segments, raw sides (see segment_parser)
- Normals (not read, recomputed from geometry)

Every table refers to earlier tables by index, and walls/triggers refer
to segments that are only described at the end, so the stages below
must run in exactly this order.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..config import ReaderConfig
from ..errors import PSLReadError
from ..level import Level
from ..utils import logDebug
from .base import ByteCursor, read_stringz_fixed
from .object_parser import read_object
from .segment_parser import SegmentGraphBuilder
from .wall_parser import CrossReferenceLinker, read_reactor_trigger_targets, read_trigger, read_wall


@dataclass
class PSLHeader:
    """Level header data."""
    level_name: str
    object_count: int
    wall_count: int
    door_count: int
    trigger_count: int
    matcen_count: int
    vertex_count: int
    segment_count: int
    side_count: int
    normal_count: int


class PSLReader:
    """
    Reader for PlayStation level images.

    A reader owns its cursor and can be used for a single read.

    Usage:
        reader = PSLReader.from_file(Path("level01.psl"))
        level = reader.read()
        print(f"{level.name}: {len(level.segments)} segments")
    """

    NAME_SIZE = 36
    HEADER_SIZE = NAME_SIZE + 9 * 4

    def __init__(self, data: bytes, config: Optional[ReaderConfig] = None):
        """
        Initialize reader with a level image.

        Args:
            data: Complete level file contents
            config: Format constants (defaults to ReaderConfig())
        """
        self.cursor = ByteCursor(data)
        self.config = config or ReaderConfig()
        self.header: Optional[PSLHeader] = None
        self._used = False

    @classmethod
    def from_file(cls, filepath: Union[str, Path], config: Optional[ReaderConfig] = None) -> 'PSLReader':
        with open(filepath, 'rb') as f:
            return cls(f.read(), config)

    @classmethod
    def from_stream(cls, stream: BinaryIO, config: Optional[ReaderConfig] = None) -> 'PSLReader':
        return cls(stream.read(), config)

    def read_header(self) -> PSLHeader:
        """Parse the level header."""
        cursor = self.cursor
        level_name = read_stringz_fixed(cursor.read_bytes(self.NAME_SIZE))
        object_count = cursor.read_int32() + 1
        counts = [cursor.read_int32() for _ in range(8)]

        header = PSLHeader(level_name, object_count, *counts)
        for name, value in vars(header).items():
            if name != 'level_name' and value < 0:
                raise PSLReadError(f"Negative {name.replace('_', ' ')} in header: {value}")
        return header

    def read(self) -> Level:
        """
        Read the whole level.

        Returns:
            Linked and validated Level

        Raises:
            TruncatedStreamError: file ends early
            IndexOutOfRangeError: a structural reference does not resolve
            LinkError: the finished graph is inconsistent
        """
        if self._used:
            raise RuntimeError("PSLReader instances can only read once")
        self._used = True

        cursor = self.cursor
        config = self.config

        header = self.read_header()
        self.header = header

        level = Level(
            name=header.level_name,
            max_reactor_trigger_targets=config.max_reactor_trigger_targets,
            door_count=header.door_count,
            normal_count=header.normal_count,
        )
        segments = SegmentGraphBuilder(level)
        linker = CrossReferenceLinker(level)

        # Sides must exist before walls and triggers can point at them
        segments.allocate(header.segment_count)
        logDebug(f"Allocated {header.segment_count} segments")

        for _ in range(header.object_count):
            level.objects.append(read_object(cursor, config))
        logDebug(f"Read {len(level.objects)} objects")

        for _ in range(header.wall_count):
            level.walls.append(read_wall(cursor, level, linker))
        logDebug(f"Read {len(level.walls)} walls, {linker.resolve_wall_links()} wall links")

        for _ in range(header.trigger_count):
            level.triggers.append(read_trigger(cursor, level, config))
        logDebug(f"Read {len(level.triggers)} triggers, {linker.resolve_wall_triggers()} wall triggers")

        reactor_targets = read_reactor_trigger_targets(cursor, level, config)
        logDebug(f"Read {reactor_targets} reactor trigger targets")

        segments.read_matcens(cursor, header.matcen_count)
        logDebug(f"Read {len(level.matcens)} matcens")

        segments.read_vertices(cursor, header.vertex_count)
        segments.read_raw_segments(cursor, header.segment_count)
        segments.read_raw_sides(cursor, header.side_count)
        logDebug(
            f"Read {header.vertex_count} vertices, {header.segment_count} segments, "
            f"{header.side_count} sides"
        )

        segments.build()
        level.validate()
        logDebug(f"Level '{level.name}' linked, {cursor.remaining_bytes} trailing bytes (normals)")

        return level


def read_psl_level(source: Union[str, Path, bytes, BinaryIO],
                   config: Optional[ReaderConfig] = None) -> Level:
    """
    Read a PlayStation level from a path, a bytes object or a binary stream.

    Args:
        source: Level file path, file contents, or an open binary stream
        config: Format constants (defaults to ReaderConfig())

    Returns:
        Linked Level
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        reader = PSLReader(bytes(source), config)
    elif isinstance(source, (str, Path)):
        reader = PSLReader.from_file(source, config)
    else:
        reader = PSLReader.from_stream(source, config)
    return reader.read()
