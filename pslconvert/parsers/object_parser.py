"""
Object record parser.

Object record format (268 bytes):
- Common fields (96 bytes):
  - i32 signature
  - i8 type, u8 subtype id
  - i16 next, i16 prev (runtime list links, discarded)
  - u8 control type, u8 movement type, u8 render type, u8 flags
  - i16 segment, i16 attached object, i16 pad
  - FixVector position (12 bytes)
  - FixMatrix orientation (36 bytes)
  - fix size, fix shields
  - FixVector last position (12 bytes)
  - u8 contains type, u8 contains id, u8 contains count
  - u8 matcen creator (discarded)
  - fix lifeleft (discarded)
- Movement slot (64 bytes)
- Control slot (32 bytes)
- Render slot (76 bytes)

Each slot is a union sized for its largest variant. Only the active
variant's fields are decoded; the rest of the slot is skipped so the
next record always starts on its boundary, whatever the type id says.
"""

import functools
from typing import Callable, Dict, Type, TypeVar

from ..config import ReaderConfig
from ..errors import PSLReadError
from ..level import (
    AIControl,
    BasicControl,
    BasicRender,
    ControlTypeID,
    ExplosionControl,
    FireballRender,
    LevelObject,
    LightControl,
    MovementTypeID,
    NoControl,
    NoMovement,
    NoRender,
    ObjectType,
    PhysicsFlags,
    PhysicsMovement,
    PolymodelRender,
    PowerupControl,
    RenderTypeID,
    SpinningMovement,
    WeaponControl,
    coerce_enum,
)
from ..utils import logWarning
from .base import ByteCursor

OBJECT_HEADER_SIZE = 96
MOVEMENT_SLOT_SIZE = 64
CONTROL_SLOT_SIZE = 32
RENDER_SLOT_SIZE = 76
OBJECT_RECORD_SIZE = OBJECT_HEADER_SIZE + MOVEMENT_SLOT_SIZE + CONTROL_SLOT_SIZE + RENDER_SLOT_SIZE

E = TypeVar('E', MovementTypeID, ControlTypeID, RenderTypeID)
SlotReader = Callable[[ByteCursor, ReaderConfig, E], object]


# =============================================================================
# Movement variants
# =============================================================================

def _read_no_movement(cursor: ByteCursor, config: ReaderConfig, type_id: MovementTypeID) -> NoMovement:
    return NoMovement()


def _read_physics(cursor: ByteCursor, config: ReaderConfig, type_id: MovementTypeID) -> PhysicsMovement:
    return PhysicsMovement(
        velocity=cursor.read_fix_vector(),
        thrust=cursor.read_fix_vector(),
        mass=cursor.read_fix(),
        drag=cursor.read_fix(),
        brakes=cursor.read_fix(),
        angular_velocity=cursor.read_fix_vector(),
        rotational_thrust=cursor.read_fix_vector(),
        turnroll=cursor.read_int16(),
        flags=PhysicsFlags(cursor.read_uint16()),
    )


def _read_spinning(cursor: ByteCursor, config: ReaderConfig, type_id: MovementTypeID) -> SpinningMovement:
    return SpinningMovement(spin_rate=cursor.read_fix_vector())


MOVEMENT_READERS: Dict[MovementTypeID, SlotReader] = {
    MovementTypeID.NONE: _read_no_movement,
    MovementTypeID.PHYSICS: _read_physics,
    MovementTypeID.SPINNING: _read_spinning,
}


# =============================================================================
# Control variants
# =============================================================================

def _read_no_control(cursor: ByteCursor, config: ReaderConfig, type_id: ControlTypeID) -> NoControl:
    return NoControl()


def _read_basic_control(cursor: ByteCursor, config: ReaderConfig, type_id: ControlTypeID) -> BasicControl:
    return BasicControl(type_id)


def _read_ai(cursor: ByteCursor, config: ReaderConfig, type_id: ControlTypeID) -> AIControl:
    behavior = cursor.read_uint8()
    ai_flags = [cursor.read_uint8() for _ in range(config.num_ai_flags)]
    return AIControl(
        behavior=behavior,
        ai_flags=ai_flags,
        hide_segment=cursor.read_int16(),
        hide_index=cursor.read_int16(),
        path_length=cursor.read_int16(),
        cur_path_index=cursor.read_int16(),
    )


def _read_explosion(cursor: ByteCursor, config: ReaderConfig, type_id: ControlTypeID) -> ExplosionControl:
    return ExplosionControl(
        spawn_time=cursor.read_fix(),
        delete_time=cursor.read_fix(),
        delete_object=cursor.read_int16(),
    )


def _read_powerup(cursor: ByteCursor, config: ReaderConfig, type_id: ControlTypeID) -> PowerupControl:
    return PowerupControl(count=cursor.read_int32())


def _read_weapon(cursor: ByteCursor, config: ReaderConfig, type_id: ControlTypeID) -> WeaponControl:
    return WeaponControl(
        parent_type=cursor.read_int16(),
        parent_num=cursor.read_int16(),
        parent_signature=cursor.read_int32(),
    )


def _read_light(cursor: ByteCursor, config: ReaderConfig, type_id: ControlTypeID) -> LightControl:
    return LightControl(intensity=cursor.read_fix())


# Ids missing here have no data in the slot and decode as BasicControl
CONTROL_READERS: Dict[ControlTypeID, SlotReader] = {
    ControlTypeID.NONE: _read_no_control,
    ControlTypeID.AI: _read_ai,
    ControlTypeID.EXPLOSION: _read_explosion,
    ControlTypeID.POWERUP: _read_powerup,
    ControlTypeID.WEAPON: _read_weapon,
    ControlTypeID.LIGHT: _read_light,
}


# =============================================================================
# Render variants
# =============================================================================

def _read_no_render(cursor: ByteCursor, config: ReaderConfig, type_id: RenderTypeID) -> NoRender:
    return NoRender()


def _read_basic_render(cursor: ByteCursor, config: ReaderConfig, type_id: RenderTypeID) -> BasicRender:
    return BasicRender(type_id)


def _read_polymodel(cursor: ByteCursor, config: ReaderConfig, type_id: RenderTypeID) -> PolymodelRender:
    model_num = cursor.read_int32()
    body_angles = [cursor.read_fix_angles() for _ in range(config.max_submodels)]
    return PolymodelRender(
        type_id=type_id,
        model_num=model_num,
        body_angles=body_angles,
        flags=cursor.read_int32(),
        texture_override=cursor.read_int32(),
    )


def _read_fireball(cursor: ByteCursor, config: ReaderConfig, type_id: RenderTypeID) -> FireballRender:
    return FireballRender(
        type_id=type_id,
        vclip_num=cursor.read_int32(),
        frame_time=cursor.read_fix(),
        frame_number=cursor.read_uint8(),
    )


RENDER_READERS: Dict[RenderTypeID, SlotReader] = {
    RenderTypeID.NONE: _read_no_render,
    RenderTypeID.POLYOBJ: _read_polymodel,
    RenderTypeID.MORPH: _read_polymodel,
    RenderTypeID.FIREBALL: _read_fireball,
    RenderTypeID.HOSTAGE: _read_fireball,
    RenderTypeID.POWERUP: _read_fireball,
    RenderTypeID.WEAPON_VCLIP: _read_fireball,
    RenderTypeID.LASER: _read_basic_render,
}


# =============================================================================
# Slot decoding
# =============================================================================

def read_slot(cursor: ByteCursor, tag: int, id_enum: Type[E], readers: Dict[E, SlotReader],
              slot_size: int, config: ReaderConfig, default_reader: SlotReader = None):
    """
    Decode one fixed-size union slot.

    Args:
        cursor: Cursor positioned at the start of the slot
        tag: Type id byte from the record header
        id_enum: Closed enum of valid ids for this slot
        readers: Dispatch table from id to variant reader
        slot_size: Bytes the slot occupies in the record
        config: Reader constants
        default_reader: Reader for valid ids missing from the table

    Returns:
        The decoded variant. Unknown ids decode as the NONE variant.
    """
    start = cursor.offset

    try:
        type_id = id_enum(tag)
    except ValueError:
        logWarning(f"Unknown {id_enum.__name__} {tag} at offset {start}, treating as NONE")
        type_id = id_enum.NONE

    reader = readers.get(type_id, default_reader)
    if reader is None:
        raise PSLReadError(f"No reader for {id_enum.__name__}.{type_id.name}")
    variant = reader(cursor, config, type_id)

    used = cursor.offset - start
    if used > slot_size:
        raise PSLReadError(
            f"{id_enum.__name__}.{type_id.name} used {used} bytes of a {slot_size}-byte slot"
        )
    cursor.skip_to(start + slot_size)
    return variant


read_movement = functools.partial(read_slot, id_enum=MovementTypeID, readers=MOVEMENT_READERS,
                                  slot_size=MOVEMENT_SLOT_SIZE)
read_control = functools.partial(read_slot, id_enum=ControlTypeID, readers=CONTROL_READERS,
                                 slot_size=CONTROL_SLOT_SIZE, default_reader=_read_basic_control)
read_render = functools.partial(read_slot, id_enum=RenderTypeID, readers=RENDER_READERS,
                                slot_size=RENDER_SLOT_SIZE)


def read_object(cursor: ByteCursor, config: ReaderConfig) -> LevelObject:
    """
    Read one object record.

    Args:
        cursor: Cursor positioned at the start of the record
        config: Reader constants

    Returns:
        LevelObject with its movement, control and render variants
    """
    obj = LevelObject()

    cursor.read_int32()  # signature
    obj.type = coerce_enum(ObjectType, cursor.read_int8())
    obj.subtype_id = cursor.read_uint8()
    cursor.skip(4)  # next, prev
    control_tag = cursor.read_uint8()
    movement_tag = cursor.read_uint8()
    render_tag = cursor.read_uint8()
    obj.flags = cursor.read_uint8()
    obj.multiplayer_only = False
    obj.segnum = cursor.read_int16()
    obj.attached_object = cursor.read_int16()
    cursor.skip(2)  # pad
    obj.position = cursor.read_fix_vector()
    obj.orientation = cursor.read_fix_matrix()
    obj.size = cursor.read_fix()
    obj.shields = cursor.read_fix()
    obj.last_pos = cursor.read_fix_vector()
    obj.contains_type = coerce_enum(ObjectType, cursor.read_int8())
    obj.contains_id = cursor.read_uint8()
    obj.contains_count = cursor.read_uint8()
    cursor.skip(1)  # matcen creator
    cursor.skip(4)  # lifeleft

    obj.move_type = read_movement(cursor, movement_tag, config=config)
    obj.control_type = read_control(cursor, control_tag, config=config)
    obj.render_type = read_render(cursor, render_tag, config=config)

    return obj
