"""
Fixed-point value types.

Levels store positions, times and scalars as 16.16 fixed point (a raw
signed 32-bit integer) and angles as 16-bit fractions of a full turn.
The raw values are kept untouched so a writer can emit them bit-exact.
"""

from dataclasses import dataclass
from typing import Tuple

FIX_ONE = 1 << 16
ANGLE_ONE = 1 << 16


@dataclass(frozen=True)
class Fix:
    """16.16 fixed-point scalar."""
    raw: int

    def __float__(self) -> float:
        return self.raw / FIX_ONE

    @classmethod
    def from_float(cls, value: float) -> 'Fix':
        return cls(int(round(value * FIX_ONE)))


@dataclass(frozen=True)
class FixVector:
    """Three fixed-point components (x, y, z)."""
    x: Fix
    y: Fix
    z: Fix

    @classmethod
    def from_raw_values(cls, x: int, y: int, z: int) -> 'FixVector':
        return cls(Fix(x), Fix(y), Fix(z))

    @property
    def raw(self) -> Tuple[int, int, int]:
        return self.x.raw, self.y.raw, self.z.raw

    def to_floats(self) -> Tuple[float, float, float]:
        return float(self.x), float(self.y), float(self.z)


@dataclass(frozen=True)
class FixAngles:
    """Pitch, bank and heading as raw 16-bit angle values."""
    p: int
    b: int
    h: int

    @classmethod
    def from_raw_values(cls, p: int, b: int, h: int) -> 'FixAngles':
        return cls(p, b, h)

    def to_degrees(self) -> Tuple[float, float, float]:
        return tuple(v * 360.0 / ANGLE_ONE for v in (self.p, self.b, self.h))


@dataclass(frozen=True)
class FixMatrix:
    """Orientation matrix stored as right, up and forward vectors."""
    right: FixVector
    up: FixVector
    forward: FixVector

    @classmethod
    def identity(cls) -> 'FixMatrix':
        return cls(
            FixVector.from_raw_values(FIX_ONE, 0, 0),
            FixVector.from_raw_values(0, FIX_ONE, 0),
            FixVector.from_raw_values(0, 0, FIX_ONE),
        )


FIX_ZERO = Fix(0)
VECTOR_ZERO = FixVector(FIX_ZERO, FIX_ZERO, FIX_ZERO)
