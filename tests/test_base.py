import struct

import numpy as np
import pytest

from pslconvert.errors import TruncatedStreamError
from pslconvert.level import Fix, FixAngles, FixVector
from pslconvert.parsers import ByteCursor, read_stringz_fixed

from psl_builder import pack_target_list


def test_integers_advance_by_width():
    data = struct.pack('<bBhHiI', -1, 255, -2, 65535, -3, 0xFFFFFFFF)
    cursor = ByteCursor(data)

    assert cursor.read_int8() == -1
    assert cursor.read_uint8() == 255
    assert cursor.read_int16() == -2
    assert cursor.read_uint16() == 65535
    assert cursor.offset == 6
    assert cursor.read_int32() == -3
    assert cursor.read_uint32() == 0xFFFFFFFF
    assert cursor.remaining_bytes == 0


def test_fixed_point_primitives():
    data = struct.pack('<i', 3 << 15)
    data += struct.pack('<3i', 65536, -65536, 1)
    data += struct.pack('<3h', 16384, -1, 0)
    cursor = ByteCursor(data)

    fix = cursor.read_fix()
    assert fix == Fix(3 << 15)
    assert float(fix) == 1.5

    vector = cursor.read_fix_vector()
    assert vector == FixVector.from_raw_values(65536, -65536, 1)
    assert vector.to_floats()[:2] == (1.0, -1.0)

    angles = cursor.read_fix_angles()
    assert angles == FixAngles(16384, -1, 0)
    assert angles.to_degrees()[0] == 90.0
    assert cursor.offset == 4 + 12 + 6


def test_matrix_is_right_up_forward():
    raw = list(range(1, 10))
    cursor = ByteCursor(struct.pack('<9i', *raw))

    matrix = cursor.read_fix_matrix()

    assert matrix.right.raw == (1, 2, 3)
    assert matrix.up.raw == (4, 5, 6)
    assert matrix.forward.raw == (7, 8, 9)
    assert cursor.offset == 36


def test_reading_past_end_is_fatal():
    cursor = ByteCursor(b'\x01\x02\x03')
    cursor.read_uint16()

    with pytest.raises(TruncatedStreamError) as exc_info:
        cursor.read_int32()

    assert exc_info.value.offset == 2
    assert exc_info.value.wanted == 4
    assert exc_info.value.available == 1


def test_skip_to_never_moves_backwards():
    cursor = ByteCursor(bytes(8))
    cursor.skip(4)

    with pytest.raises(ValueError):
        cursor.skip_to(2)
    cursor.skip_to(8)
    assert cursor.remaining_bytes == 0


def test_read_array_views_records():
    dtype = np.dtype([('a', '<u2'), ('b', '<i4')])
    data = struct.pack('<Hi', 7, -9) + struct.pack('<Hi', 8, 10)
    cursor = ByteCursor(data)

    records = cursor.read_array(dtype, 2)

    assert records['a'].tolist() == [7, 8]
    assert records['b'].tolist() == [-9, 10]
    assert len(cursor.read_array(dtype, 0)) == 0


def test_read_array_checks_length():
    cursor = ByteCursor(bytes(10))
    with pytest.raises(TruncatedStreamError):
        cursor.read_array(np.dtype('<i4'), 3)


def test_target_list_reads_segments_then_sides():
    cursor = ByteCursor(pack_target_list([(3, 1), (4, 5)], capacity=4) + b'\xAA')

    targets = cursor.read_target_list(4)

    assert targets == [(3, 1), (4, 5), (0, 0), (0, 0)]
    assert cursor.offset == 16


def test_fixed_name_stops_at_null():
    assert read_stringz_fixed(b'level 1\x00garbage') == 'level 1'
    assert read_stringz_fixed(b'x' * 36) == 'x' * 36
