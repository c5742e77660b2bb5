"""
Base utilities for PlayStation level parsing.

This module provides the byte cursor shared by all record parsers:
- fixed-width little-endian integers
- fixed-point scalars, vectors, angle triples and matrices
- numpy bulk reads for tables of fixed-size records
- fixed-capacity target lists
"""

import struct
from pathlib import Path
from typing import BinaryIO, List, Tuple, Union

import numpy as np

from ..errors import TruncatedStreamError
from ..level import Fix, FixAngles, FixMatrix, FixVector

_INT8 = struct.Struct('<b')
_UINT8 = struct.Struct('<B')
_INT16 = struct.Struct('<h')
_UINT16 = struct.Struct('<H')
_INT32 = struct.Struct('<i')
_UINT32 = struct.Struct('<I')
_VECTOR = struct.Struct('<3i')
_ANGLES = struct.Struct('<3h')


class ByteCursor:
    """
    Forward-only reader over an in-memory level image.

    Every read advances the cursor by the primitive's fixed width.
    Reading past the end raises TruncatedStreamError.

    Usage:
        cursor = ByteCursor.from_file(Path("level01.psl"))
        name = cursor.read_bytes(36)
        object_count = cursor.read_int32() + 1
        position = cursor.read_fix_vector()
    """

    def __init__(self, data: bytes, start_offset: int = 0):
        """
        Initialize cursor.

        Args:
            data: Level image
            start_offset: Offset to start reading from (default 0)
        """
        self.data = bytes(data)
        self.offset = start_offset

    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> 'ByteCursor':
        with open(filepath, 'rb') as f:
            return cls(f.read())

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> 'ByteCursor':
        return cls(stream.read())

    @property
    def remaining_bytes(self) -> int:
        """Number of bytes remaining to be read."""
        return max(0, len(self.data) - self.offset)

    def _claim(self, size: int) -> int:
        """Reserve size bytes and return their start offset."""
        if size < 0:
            raise ValueError(f"Negative read size {size}")
        if self.offset + size > len(self.data):
            raise TruncatedStreamError(self.offset, size, self.remaining_bytes)
        start = self.offset
        self.offset += size
        return start

    def _unpack(self, fmt: struct.Struct) -> tuple:
        return fmt.unpack_from(self.data, self._claim(fmt.size))

    def read_bytes(self, size: int) -> bytes:
        start = self._claim(size)
        return self.data[start:start + size]

    def skip(self, size: int):
        """Discard size bytes."""
        self._claim(size)

    def skip_to(self, offset: int):
        """Discard bytes up to an absolute offset at or after the cursor."""
        if offset < self.offset:
            raise ValueError(f"Cannot skip backwards from {self.offset} to {offset}")
        self._claim(offset - self.offset)

    def read_int8(self) -> int:
        return self._unpack(_INT8)[0]

    def read_uint8(self) -> int:
        return self._unpack(_UINT8)[0]

    def read_int16(self) -> int:
        return self._unpack(_INT16)[0]

    def read_uint16(self) -> int:
        return self._unpack(_UINT16)[0]

    def read_int32(self) -> int:
        return self._unpack(_INT32)[0]

    def read_uint32(self) -> int:
        return self._unpack(_UINT32)[0]

    def read_fix(self) -> Fix:
        return Fix(self.read_int32())

    def read_fix_vector(self) -> FixVector:
        return FixVector.from_raw_values(*self._unpack(_VECTOR))

    def read_fix_angles(self) -> FixAngles:
        return FixAngles.from_raw_values(*self._unpack(_ANGLES))

    def read_fix_matrix(self) -> FixMatrix:
        return FixMatrix(self.read_fix_vector(), self.read_fix_vector(), self.read_fix_vector())

    def read_array(self, dtype: np.dtype, count: int) -> np.ndarray:
        """
        Read count consecutive records of a numpy dtype.

        The returned array is a read-only view on the level image.
        """
        dtype = np.dtype(dtype)
        start = self._claim(dtype.itemsize * count)
        if count == 0:
            return np.zeros(0, dtype=dtype)
        return np.frombuffer(self.data, dtype=dtype, count=count, offset=start)

    def read_target_list(self, capacity: int) -> List[Tuple[int, int]]:
        """
        Read a fixed-capacity (segment, side) target list.

        All segment numbers come first, then all side numbers. The whole
        capacity is always consumed.
        """
        targets = self.read_array(np.dtype('<i2'), capacity * 2)
        segments = targets[:capacity].tolist()
        sides = targets[capacity:].tolist()
        return list(zip(segments, sides))


def read_stringz_fixed(data: bytes) -> str:
    """
    Decode a fixed-size name field, stopping at the first null byte.

    Args:
        data: Raw field bytes

    Returns:
        Decoded name (latin-1, so every byte maps to one character)
    """
    end = data.find(b'\x00')
    if end != -1:
        data = data[:end]
    return data.decode('latin-1')
