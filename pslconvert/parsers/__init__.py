"""
PlayStation Level Binary Parsers

This package reads PlayStation level images into the level graph:

- base: ByteCursor and fixed-point primitives
- object_parser: object records with movement/control/render slots
- wall_parser: wall and trigger records, deferred wall links
- segment_parser: matcens, vertices, raw segments/sides, graph building
- psl_reader: PSLReader, which runs all of the above in file order

Usage:
    from pslconvert.parsers import read_psl_level

    level = read_psl_level("level01.psl")
    for segment in level.segments:
        print(segment.function, [side.connection for side in segment.sides])
"""

# Base utilities
from .base import (
    ByteCursor,
    read_stringz_fixed,
)

# Object records
from .object_parser import (
    read_object,
    read_slot,
    read_movement,
    read_control,
    read_render,
    OBJECT_RECORD_SIZE,
    MOVEMENT_SLOT_SIZE,
    CONTROL_SLOT_SIZE,
    RENDER_SLOT_SIZE,
)

# Walls and triggers
from .wall_parser import (
    CrossReferenceLinker,
    read_wall,
    read_trigger,
    read_target_sides,
    read_reactor_trigger_targets,
    resolve_index,
    resolve_side,
    WALL_RECORD_SIZE,
)

# Segment graph
from .segment_parser import (
    SegmentGraphBuilder,
    rescale_uvls,
    unpack_overlay,
    RAW_SEGMENT_DTYPE,
    RAW_SIDE_DTYPE,
)

# Level reader
from .psl_reader import (
    PSLReader,
    PSLHeader,
    read_psl_level,
)

__all__ = [
    # Base
    'ByteCursor',
    'read_stringz_fixed',
    # Objects
    'read_object',
    'read_slot',
    'read_movement',
    'read_control',
    'read_render',
    'OBJECT_RECORD_SIZE',
    'MOVEMENT_SLOT_SIZE',
    'CONTROL_SLOT_SIZE',
    'RENDER_SLOT_SIZE',
    # Walls and triggers
    'CrossReferenceLinker',
    'read_wall',
    'read_trigger',
    'read_target_sides',
    'read_reactor_trigger_targets',
    'resolve_index',
    'resolve_side',
    'WALL_RECORD_SIZE',
    # Segment graph
    'SegmentGraphBuilder',
    'rescale_uvls',
    'unpack_overlay',
    'RAW_SEGMENT_DTYPE',
    'RAW_SIDE_DTYPE',
    # Reader
    'PSLReader',
    'PSLHeader',
    'read_psl_level',
]
