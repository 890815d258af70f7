"""AML object values and their implicit conversions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, ClassVar, Iterable, Optional

from .errors import (
    BufferFieldIndexesOutOfBounds,
    IncompatibleValueConversion,
    InvalidArgAccess,
    InvalidSizeOfApplication,
    InvalidStatusObject,
    TooManyArgs,
    TypeCannotBeCompared,
    TypeCannotBeWrittenToBufferField,
)
from .flags import AmlType, MethodFlags, StatusObject

U64_MAX = (1 << 64) - 1
MAX_ARGS = 7

_CONCAT_LABELS = {
    AmlType.UNINITIALIZED: "[Uninitialized]",
    AmlType.BUFFER_FIELD: "[Buffer Field]",
    AmlType.DDB_HANDLE: "[Ddb Handle]",
    AmlType.DEBUG_OBJECT: "[Debug Object]",
    AmlType.EVENT: "[Event]",
    AmlType.FIELD_UNIT: "[Field]",
    AmlType.DEVICE: "[Device]",
    AmlType.METHOD: "[Control Method]",
    AmlType.MUTEX: "[Mutex]",
    AmlType.OBJ_REFERENCE: "[Obj Reference]",
    AmlType.OP_REGION: "[Operation Region]",
    AmlType.PACKAGE: "[Package]",
    AmlType.PROCESSOR: "[Processor]",
    AmlType.POWER_RESOURCE: "[Power Resource]",
    AmlType.RAW_DATA_BUFFER: "[Raw Data Buffer]",
    AmlType.THERMAL_ZONE: "[Thermal Zone]",
}


def _mask(width: int) -> int:
    return (1 << width) - 1


class AmlValue:
    """Base class of every AML value."""

    _type: ClassVar[AmlType]

    def type_of(self) -> AmlType:
        return self._type

    def size_of(self) -> int:
        """The result of applying SizeOf to this value."""
        raise InvalidSizeOfApplication(self.type_of())

    def as_bool(self) -> bool:
        raise IncompatibleValueConversion(self.type_of(), AmlType.INTEGER)

    def as_integer(self) -> int:
        raise IncompatibleValueConversion(self.type_of(), AmlType.INTEGER)

    def as_buffer(self) -> bytearray:
        raise IncompatibleValueConversion(self.type_of(), AmlType.BUFFER)

    def as_string(self) -> str:
        raise IncompatibleValueConversion(self.type_of(), AmlType.STRING)

    def as_concat_type(self) -> AmlValue:
        """The Integer, String or Buffer used when concatenating this value."""
        return AmlString(_CONCAT_LABELS[self.type_of()])

    def as_status(self) -> StatusObject:
        """Interpret this value as the result of a _STA method."""
        raise InvalidStatusObject()

    def as_type(self, desired_type: AmlType) -> AmlValue:
        """Apply the implicit conversion to ``desired_type``."""
        if self.type_of() is desired_type:
            return self
        if desired_type is AmlType.INTEGER:
            return Integer(self.as_integer())
        if desired_type is AmlType.BUFFER:
            return Buffer(self.as_buffer())
        raise IncompatibleValueConversion(self.type_of(), desired_type)

    def compare(self, other: AmlValue) -> int:
        """Compare logically; returns -1, 0 or 1. The type of ``self`` decides the rules."""
        value_type = self.type_of()
        if value_type is AmlType.INTEGER:
            left, right = self.as_integer(), other.as_integer()
        elif value_type is AmlType.BUFFER:
            left, right = bytes(self.as_buffer()), bytes(other.as_buffer())
        elif value_type is AmlType.STRING:
            left, right = self.as_string(), other.as_string()
        else:
            raise TypeCannotBeCompared(value_type)
        return (left > right) - (left < right)


@dataclass
class Uninitialized(AmlValue):
    _type: ClassVar[AmlType] = AmlType.UNINITIALIZED


@dataclass
class Boolean(AmlValue):
    value: bool
    _type: ClassVar[AmlType] = AmlType.INTEGER

    def as_bool(self) -> bool:
        return bool(self.value)

    def as_integer(self) -> int:
        return U64_MAX if self.value else 0

    def as_concat_type(self) -> AmlValue:
        return self


@dataclass
class Integer(AmlValue):
    value: int
    _type: ClassVar[AmlType] = AmlType.INTEGER

    def __post_init__(self) -> None:
        if not 0 <= self.value <= U64_MAX:
            raise ValueError(f"integer {self.value} does not fit in 64 bits")

    def as_bool(self) -> bool:
        return self.value != 0

    def as_integer(self) -> int:
        return self.value

    def as_concat_type(self) -> AmlValue:
        return self

    def as_status(self) -> StatusObject:
        if self.value >> 5:
            raise InvalidStatusObject()
        return StatusObject(
            present=bool(self.value & 0x01),
            enabled=bool(self.value & 0x02),
            show_in_ui=bool(self.value & 0x04),
            functional=bool(self.value & 0x08),
            battery_present=bool(self.value & 0x10),
        )


@dataclass
class AmlString(AmlValue):
    value: str
    _type: ClassVar[AmlType] = AmlType.STRING

    def size_of(self) -> int:
        return len(self.value.encode("utf-8"))

    def as_string(self) -> str:
        return self.value

    def as_concat_type(self) -> AmlValue:
        return self


@dataclass
class Buffer(AmlValue):
    """A buffer; its bytearray is shared with any buffer fields created over it."""

    data: bytearray = field(default_factory=bytearray)
    _type: ClassVar[AmlType] = AmlType.BUFFER

    def __post_init__(self) -> None:
        if not isinstance(self.data, bytearray):
            self.data = bytearray(self.data)

    def size_of(self) -> int:
        return len(self.data)

    def as_integer(self) -> int:
        # The first eight bytes, least significant first; an empty buffer gives zero.
        return int.from_bytes(self.data[:8], "little")

    def as_buffer(self) -> bytearray:
        return self.data

    def as_concat_type(self) -> AmlValue:
        return self


@dataclass
class BufferField(AmlValue):
    """A bit range of a buffer. ``offset`` and ``length`` are in bits."""

    buffer_data: bytearray
    offset: int
    length: int
    _type: ClassVar[AmlType] = AmlType.BUFFER_FIELD

    def __post_init__(self) -> None:
        if not isinstance(self.buffer_data, bytearray):
            self.buffer_data = bytearray(self.buffer_data)

    def as_integer(self) -> int:
        return self.read().as_integer()

    def as_buffer(self) -> bytearray:
        return self.read().as_buffer()

    def read(self) -> AmlValue:
        """Read the field: a Buffer if it is wider than 64 bits, else an Integer."""
        if self.offset + self.length > len(self.buffer_data) * 8:
            raise BufferFieldIndexesOutOfBounds()
        bits = (int.from_bytes(self.buffer_data, "little") >> self.offset) & _mask(self.length)
        if self.length > 64:
            return Buffer(bytearray(bits.to_bytes((self.length + 7) // 8, "little")))
        return Integer(bits)

    def write(self, value: AmlValue) -> None:
        """Store an Integer, Boolean or Buffer into the field, zero-extending or truncating."""
        if isinstance(value, Boolean):
            span, new_bits = 1, int(bool(value.value))
        elif isinstance(value, Integer):
            width = min(self.length, 64)
            span, new_bits = self.length, value.value & _mask(width)
        elif isinstance(value, Buffer):
            width = min(self.length, len(value.data) * 8)
            span, new_bits = self.length, int.from_bytes(value.data, "little") & _mask(width)
        else:
            raise TypeCannotBeWrittenToBufferField(value.type_of())

        size = len(self.buffer_data)
        if self.offset + span > size * 8:
            raise BufferFieldIndexesOutOfBounds()
        whole = int.from_bytes(self.buffer_data, "little")
        whole &= ~(_mask(span) << self.offset)
        whole |= new_bits << self.offset
        self.buffer_data[:] = whole.to_bytes(size, "little")


@dataclass
class Package(AmlValue):
    elements: list = field(default_factory=list)
    _type: ClassVar[AmlType] = AmlType.PACKAGE

    def size_of(self) -> int:
        return len(self.elements)


@dataclass
class Device(AmlValue):
    _type: ClassVar[AmlType] = AmlType.DEVICE


@dataclass(frozen=True)
class MethodCode:
    """The body of a control method: AML bytecode or a Python callable."""

    aml: Optional[bytes] = None
    native: Optional[Callable[..., AmlValue]] = None

    def __post_init__(self) -> None:
        if (self.aml is None) == (self.native is None):
            raise ValueError("a method body is either AML code or a native callable")

    @property
    def is_native(self) -> bool:
        return self.native is not None

    def __repr__(self) -> str:
        if self.native is not None:
            return "(native method)"
        return f"AML({self.aml.hex(' ')})"


@dataclass
class Method(AmlValue):
    flags: MethodFlags
    code: MethodCode
    _type: ClassVar[AmlType] = AmlType.METHOD


@dataclass
class Mutex(AmlValue):
    sync_level: int
    _type: ClassVar[AmlType] = AmlType.MUTEX


@dataclass
class Processor(AmlValue):
    id: int
    pblk_address: int
    pblk_len: int
    _type: ClassVar[AmlType] = AmlType.PROCESSOR


@dataclass
class PowerResource(AmlValue):
    system_level: int
    resource_order: int
    _type: ClassVar[AmlType] = AmlType.POWER_RESOURCE


@dataclass
class ThermalZone(AmlValue):
    _type: ClassVar[AmlType] = AmlType.THERMAL_ZONE


def zero() -> Integer:
    return Integer(0)


def one() -> Integer:
    return Integer(1)


def ones() -> Integer:
    return Integer(U64_MAX)


def native_method(
    arg_count: int, serialize: bool, sync_level: int, f: Callable[..., AmlValue]
) -> Method:
    """A method whose body is the Python callable ``f``."""
    return Method(MethodFlags.create(arg_count, serialize, sync_level), MethodCode(native=f))


@dataclass
class Args:
    """The seven argument slots of a control method invocation."""

    slots: list = field(default_factory=lambda: [None] * MAX_ARGS)

    def __post_init__(self) -> None:
        if len(self.slots) != MAX_ARGS:
            raise ValueError(f"a method has exactly {MAX_ARGS} argument slots")

    @classmethod
    def from_list(cls, values: Iterable[AmlValue]) -> Args:
        values = list(values)
        if len(values) > MAX_ARGS:
            raise TooManyArgs()
        return cls(values + [None] * (MAX_ARGS - len(values)))

    def arg(self, index: int) -> AmlValue:
        if not 0 <= index < MAX_ARGS:
            raise InvalidArgAccess(index)
        value = self.slots[index]
        if value is None:
            raise InvalidArgAccess(index)
        return value

    def store_arg(self, index: int, value: AmlValue) -> None:
        if not 0 <= index < MAX_ARGS:
            raise InvalidArgAccess(index)
        self.slots[index] = value