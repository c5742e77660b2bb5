"""
Level Package

In-memory level graph: fixed-point types, enums and the entity classes
populated by the reader.
"""

from .fixed_point import Fix, FixVector, FixAngles, FixMatrix, FIX_ONE, FIX_ZERO, VECTOR_ZERO
from .enums import (
    coerce_enum,
    ObjectType,
    MovementTypeID,
    ControlTypeID,
    RenderTypeID,
    PhysicsFlags,
    WallType,
    WallFlags,
    WallState,
    WallKeyFlags,
    TriggerType,
    TriggerFlags,
    SegFunction,
    OverlayRotation,
    SideConnection,
)
from .segments import LevelVertex, Uvl, Side, Segment, MatCenter
from .walls import Wall, Trigger
from .objects import (
    LevelObject,
    NoMovement,
    PhysicsMovement,
    SpinningMovement,
    NoControl,
    BasicControl,
    AIControl,
    ExplosionControl,
    PowerupControl,
    WeaponControl,
    LightControl,
    NoRender,
    BasicRender,
    PolymodelRender,
    FireballRender,
)
from .level import Level
