"""Decoding of large resource descriptor items (memory, address space, interrupts)."""

from __future__ import annotations

from .errors import (
    ReservedResourceType,
    ResourceDescriptorTooLong,
    ResourceDescriptorTooShort,
    UnsupportedResourceDescriptor,
)
from .resource_types import (
    AddressSpaceDecodeType,
    AddressSpaceDescriptor,
    AddressSpaceResourceType,
    FixedMemoryRangeDescriptor,
    InterruptPolarity,
    InterruptTrigger,
    IrqDescriptor,
)

_ADDRESS_WIDTHS = (2, 4, 8)


def fixed_memory_descriptor(data: bytes) -> FixedMemoryRangeDescriptor:
    """Decode a 32-bit fixed memory range descriptor of exactly twelve bytes."""
    data = bytes(data)
    if len(data) < 12:
        raise ResourceDescriptorTooShort()
    if len(data) > 12:
        raise ResourceDescriptorTooLong()

    return FixedMemoryRangeDescriptor(
        is_writable=bool(data[3] & 0x01),
        base_address=int.from_bytes(data[4:8], "little"),
        range_length=int.from_bytes(data[8:12], "little"),
    )


def address_space_descriptor(data: bytes, width: int) -> AddressSpaceDescriptor:
    """Decode a WORD, DWORD or QWORD address space descriptor.

    ``width`` is the size in bytes of each address field: 2, 4 or 8.
    """
    if width not in _ADDRESS_WIDTHS:
        raise ValueError(f"address field width must be one of {_ADDRESS_WIDTHS}, got {width}")
    data = bytes(data)
    if len(data) < 6 + width * 5:
        raise ResourceDescriptorTooShort()

    type_byte = data[3]
    if type_byte >= 192:
        raise UnsupportedResourceDescriptor("Hardware vendor defined address space")
    if type_byte >= 3:
        raise ReservedResourceType()
    resource_type = AddressSpaceResourceType(type_byte)

    general_flags = data[4]
    granularity, minimum, maximum, translation_offset, length = (
        int.from_bytes(data[start : start + width], "little")
        for start in range(6, 6 + width * 5, width)
    )

    return AddressSpaceDescriptor(
        resource_type=resource_type,
        is_maximum_address_fixed=bool(general_flags & 0x08),
        is_minimum_address_fixed=bool(general_flags & 0x04),
        decode_type=(
            AddressSpaceDecodeType.SUBTRACTIVE
            if general_flags & 0x02
            else AddressSpaceDecodeType.ADDITIVE
        ),
        granularity=granularity,
        address_range=(minimum, maximum),
        translation_offset=translation_offset,
        length=length,
    )


def extended_interrupt_descriptor(data: bytes) -> IrqDescriptor:
    """Decode an extended interrupt descriptor holding a single interrupt number."""
    data = bytes(data)
    if len(data) < 9:
        raise ResourceDescriptorTooShort()

    if data[4] != 1:
        raise UnsupportedResourceDescriptor(
            f"Extended Interrupt Descriptor with {data[4]} interrupts"
        )

    flags = data[3]
    return IrqDescriptor(
        is_consumer=bool(flags & 0x01),
        trigger=InterruptTrigger.EDGE if flags & 0x02 else InterruptTrigger.LEVEL,
        polarity=InterruptPolarity.ACTIVE_LOW if flags & 0x04 else InterruptPolarity.ACTIVE_HIGH,
        is_shared=bool(flags & 0x08),
        is_wake_capable=bool(flags & 0x10),
        irq=int.from_bytes(data[5:9], "little"),
    )