"""
Level objects (robots, powerups, the player start, the reactor, ...).

Each object combines three independent behaviours, each chosen by its
own type id:
- movement: none, physics simulated or spinning
- control: none, AI, explosion, powerup, weapon, light, or an id with no data
- render: none, polygon model, animated vclip, or an id with no data
"""

from dataclasses import dataclass, field
from typing import List, Union

from .enums import ControlTypeID, MovementTypeID, ObjectType, PhysicsFlags, RenderTypeID
from .fixed_point import FIX_ZERO, VECTOR_ZERO, Fix, FixAngles, FixMatrix, FixVector


# Movement

@dataclass
class NoMovement:
    type_id: MovementTypeID = field(default=MovementTypeID.NONE, init=False)


@dataclass
class PhysicsMovement:
    velocity: FixVector = VECTOR_ZERO
    thrust: FixVector = VECTOR_ZERO
    mass: Fix = FIX_ZERO
    drag: Fix = FIX_ZERO
    brakes: Fix = FIX_ZERO
    angular_velocity: FixVector = VECTOR_ZERO
    rotational_thrust: FixVector = VECTOR_ZERO
    turnroll: int = 0
    flags: PhysicsFlags = PhysicsFlags(0)
    type_id: MovementTypeID = field(default=MovementTypeID.PHYSICS, init=False)


@dataclass
class SpinningMovement:
    spin_rate: FixVector = VECTOR_ZERO
    type_id: MovementTypeID = field(default=MovementTypeID.SPINNING, init=False)


MovementType = Union[NoMovement, PhysicsMovement, SpinningMovement]


# Control

@dataclass
class NoControl:
    type_id: ControlTypeID = field(default=ControlTypeID.NONE, init=False)


@dataclass
class BasicControl:
    """Control id that carries no data in the record (flying, slew, morph, ...)."""
    type_id: ControlTypeID


@dataclass
class AIControl:
    behavior: int = 0
    ai_flags: List[int] = field(default_factory=list)
    hide_segment: int = 0
    hide_index: int = 0
    path_length: int = 0
    cur_path_index: int = 0
    type_id: ControlTypeID = field(default=ControlTypeID.AI, init=False)


@dataclass
class ExplosionControl:
    spawn_time: Fix = FIX_ZERO
    delete_time: Fix = FIX_ZERO
    delete_object: int = 0
    type_id: ControlTypeID = field(default=ControlTypeID.EXPLOSION, init=False)


@dataclass
class PowerupControl:
    count: int = 1
    type_id: ControlTypeID = field(default=ControlTypeID.POWERUP, init=False)


@dataclass
class WeaponControl:
    parent_type: int = 0
    parent_num: int = 0
    parent_signature: int = 0
    type_id: ControlTypeID = field(default=ControlTypeID.WEAPON, init=False)


@dataclass
class LightControl:
    intensity: Fix = FIX_ZERO
    type_id: ControlTypeID = field(default=ControlTypeID.LIGHT, init=False)


ControlType = Union[NoControl, BasicControl, AIControl, ExplosionControl,
                    PowerupControl, WeaponControl, LightControl]


# Render

@dataclass
class NoRender:
    type_id: RenderTypeID = field(default=RenderTypeID.NONE, init=False)


@dataclass
class BasicRender:
    """Render id that carries no data in the record (laser)."""
    type_id: RenderTypeID


@dataclass
class PolymodelRender:
    type_id: RenderTypeID = RenderTypeID.POLYOBJ  # POLYOBJ or MORPH
    model_num: int = 0
    body_angles: List[FixAngles] = field(default_factory=list)
    flags: int = 0
    texture_override: int = -1


@dataclass
class FireballRender:
    """Animated vclip: fireballs, hostages, powerups and weapon vclips."""
    type_id: RenderTypeID = RenderTypeID.FIREBALL
    vclip_num: int = 0
    frame_time: Fix = FIX_ZERO
    frame_number: int = 0


RenderType = Union[NoRender, BasicRender, PolymodelRender, FireballRender]


@dataclass(eq=False)
class LevelObject:
    """An object placed in the level."""
    type: Union[ObjectType, int] = ObjectType.NONE
    subtype_id: int = 0
    flags: int = 0
    segnum: int = -1
    attached_object: int = -1
    multiplayer_only: bool = False
    position: FixVector = VECTOR_ZERO
    orientation: FixMatrix = field(default_factory=FixMatrix.identity)
    size: Fix = FIX_ZERO
    shields: Fix = FIX_ZERO
    last_pos: FixVector = VECTOR_ZERO
    contains_type: Union[ObjectType, int] = ObjectType.NONE
    contains_id: int = 0
    contains_count: int = 0
    move_type: MovementType = field(default_factory=NoMovement)
    control_type: ControlType = field(default_factory=NoControl)
    render_type: RenderType = field(default_factory=NoRender)
