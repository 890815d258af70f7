"""Field and method flag bytes, device status objects and AML object types."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .errors import InvalidFieldFlags


class FieldAccessType(enum.Enum):
    """How a field unit is accessed within its region."""

    ANY = 0
    BYTE = 1
    WORD = 2
    DWORD = 3
    QWORD = 4
    BUFFER = 5


class FieldUpdateRule(enum.Enum):
    """What happens to the bits of a field's access unit that are not written."""

    PRESERVE = 0
    WRITE_AS_ONES = 1
    WRITE_AS_ZEROS = 2


@dataclass(frozen=True)
class FieldFlags:
    """The FieldFlags byte of a DefField."""

    value: int

    def access_type(self) -> FieldAccessType:
        try:
            return FieldAccessType(self.value & 0x0F)
        except ValueError:
            raise InvalidFieldFlags() from None

    def lock_rule(self) -> bool:
        return bool(self.value & 0x10)

    def field_update_rule(self) -> FieldUpdateRule:
        try:
            return FieldUpdateRule((self.value >> 5) & 0x03)
        except ValueError:
            raise InvalidFieldFlags() from None


@dataclass(frozen=True)
class MethodFlags:
    """The MethodFlags byte of a DefMethod."""

    value: int

    @classmethod
    def create(cls, arg_count: int, serialize: bool, sync_level: int) -> MethodFlags:
        """Build flags from their parts; arg_count is 0-7 and sync_level 0-15."""
        if not 0 <= arg_count <= 7:
            raise ValueError(f"argument count {arg_count} is out of range 0..7")
        if not 0 <= sync_level <= 15:
            raise ValueError(f"sync level {sync_level} is out of range 0..15")
        return cls(arg_count | (int(bool(serialize)) << 3) | (sync_level << 4))

    def arg_count(self) -> int:
        return self.value & 0x07

    def serialize(self) -> bool:
        return bool(self.value & 0x08)

    def sync_level(self) -> int:
        return (self.value >> 4) & 0x0F


@dataclass(frozen=True)
class StatusObject:
    """The result of a device's _STA method.

    The defaults are the values to use when a device has no _STA object.
    """

    present: bool = True
    enabled: bool = True
    show_in_ui: bool = True
    functional: bool = True
    battery_present: bool = True


class AmlType(enum.Enum):
    """The type of an AML object."""

    UNINITIALIZED = "Uninitialized"
    BUFFER = "Buffer"
    BUFFER_FIELD = "BufferField"
    DDB_HANDLE = "DdbHandle"
    DEBUG_OBJECT = "DebugObject"
    EVENT = "Event"
    FIELD_UNIT = "FieldUnit"
    DEVICE = "Device"
    INTEGER = "Integer"
    METHOD = "Method"
    MUTEX = "Mutex"
    OBJ_REFERENCE = "ObjReference"
    OP_REGION = "OpRegion"
    PACKAGE = "Package"
    POWER_RESOURCE = "PowerResource"
    PROCESSOR = "Processor"
    RAW_DATA_BUFFER = "RawDataBuffer"
    STRING = "String"
    THERMAL_ZONE = "ThermalZone"