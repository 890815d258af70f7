"""The kinds of resource that a resource descriptor buffer describes."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union


class InterruptTrigger(enum.Enum):
    EDGE = "edge"
    LEVEL = "level"


class InterruptPolarity(enum.Enum):
    ACTIVE_HIGH = "active_high"
    ACTIVE_LOW = "active_low"


class AddressSpaceResourceType(enum.Enum):
    """The Resource Type byte of an address space descriptor."""

    MEMORY_RANGE = 0
    IO_RANGE = 1
    BUS_NUMBER_RANGE = 2


class AddressSpaceDecodeType(enum.Enum):
    ADDITIVE = 0
    SUBTRACTIVE = 1


@dataclass(frozen=True)
class AddressSpaceDescriptor:
    """A WORD, DWORD or QWORD address space descriptor."""

    resource_type: AddressSpaceResourceType
    is_maximum_address_fixed: bool
    is_minimum_address_fixed: bool
    decode_type: AddressSpaceDecodeType
    granularity: int
    address_range: tuple[int, int]
    translation_offset: int
    length: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "address_range", _pair(self.address_range))


@dataclass(frozen=True)
class FixedMemoryRangeDescriptor:
    """A 32-bit fixed memory range."""

    is_writable: bool
    base_address: int
    range_length: int


@dataclass(frozen=True)
class IrqDescriptor:
    """An interrupt; only descriptors holding a single interrupt number are supported."""

    is_consumer: bool
    trigger: InterruptTrigger
    polarity: InterruptPolarity
    is_shared: bool
    is_wake_capable: bool
    irq: int


class DMASupportedSpeed(enum.Enum):
    COMPATIBILITY_MODE = 0
    TYPE_A = 1
    TYPE_B = 2
    TYPE_F = 3


class DMATransferTypePreference(enum.Enum):
    EIGHT_BIT_ONLY = 0
    EIGHT_AND_SIXTEEN_BIT = 1
    SIXTEEN_BIT = 2


@dataclass(frozen=True)
class DMADescriptor:
    channel_mask: int
    supported_speeds: DMASupportedSpeed
    is_bus_master: bool
    transfer_type_preference: DMATransferTypePreference


@dataclass(frozen=True)
class IOPortDescriptor:
    decodes_full_address: bool
    memory_range: tuple[int, int]
    base_alignment: int
    range_length: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "memory_range", _pair(self.memory_range))


def _pair(value) -> tuple[int, int]:
    pair = tuple(value)
    if len(pair) != 2:
        raise ValueError(f"a range is a (minimum, maximum) pair, got {value!r}")
    return pair


Resource = Union[
    IrqDescriptor,
    AddressSpaceDescriptor,
    FixedMemoryRangeDescriptor,
    IOPortDescriptor,
    DMADescriptor,
]