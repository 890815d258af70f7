"""Exceptions raised while decoding AML values, package lengths and resource descriptors."""

from __future__ import annotations

from typing import Any


class AmlError(Exception):
    """Base class for every AML decoding error."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AmlError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class UnexpectedEndOfStream(AmlError):
    """The input ended before a complete structure could be read."""


class InvalidPkgLength(AmlError):
    """A PkgLength claims more bytes than remain in the stream."""


class InvalidRegionPkgLength(AmlError):
    """A PkgLength claims more bits than the operation region holds."""

    def __init__(self, region_bit_length: int, raw_length: int) -> None:
        super().__init__(region_bit_length, raw_length)
        self.region_bit_length = region_bit_length
        self.raw_length = raw_length

    def __str__(self) -> str:
        return (
            f"region package length {self.raw_length} exceeds region of "
            f"{self.region_bit_length} bits"
        )


class IncompatibleValueConversion(AmlError):
    """A value cannot be converted to the requested type."""

    def __init__(self, current: Any, target: Any) -> None:
        super().__init__(current, target)
        self.current = current
        self.target = target

    def __str__(self) -> str:
        return f"cannot convert {self.current} to {self.target}"


class ReservedResourceType(AmlError):
    """A resource descriptor uses a reserved type code."""


class ResourceDescriptorTooShort(AmlError):
    """A resource descriptor has fewer bytes than its format needs."""


class ResourceDescriptorTooLong(AmlError):
    """A resource descriptor has more bytes than its format allows."""


class UnsupportedResourceDescriptor(AmlError):
    """A resource descriptor kind that is recognised but not decoded."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unsupported resource descriptor: {self.name}"


class InvalidFieldFlags(AmlError):
    """Field flags hold a reserved access type or update rule."""


class InvalidSizeOfApplication(AmlError):
    """SizeOf was applied to a value that has no size."""

    def __init__(self, value_type: Any) -> None:
        super().__init__(value_type)
        self.value_type = value_type

    def __str__(self) -> str:
        return f"SizeOf cannot be applied to {self.value_type}"


class InvalidStatusObject(AmlError):
    """A _STA result is not a valid status integer."""


class BufferFieldIndexesOutOfBounds(AmlError):
    """A buffer field reaches past the end of its buffer."""


class TypeCannotBeWrittenToBufferField(AmlError):
    """A value of this type cannot be stored in a buffer field."""

    def __init__(self, value_type: Any) -> None:
        super().__init__(value_type)
        self.value_type = value_type

    def __str__(self) -> str:
        return f"{self.value_type} cannot be written to a buffer field"


class TypeCannotBeCompared(AmlError):
    """Values of this type cannot be compared."""

    def __init__(self, value_type: Any) -> None:
        super().__init__(value_type)
        self.value_type = value_type

    def __str__(self) -> str:
        return f"{self.value_type} cannot be compared"


class TooManyArgs(AmlError):
    """More than seven arguments were passed to a method."""


class InvalidArgAccess(AmlError):
    """An argument slot is out of range or not set."""

    def __init__(self, arg: int) -> None:
        super().__init__(arg)
        self.arg = arg

    def __str__(self) -> str:
        return f"invalid access to Arg{self.arg}"