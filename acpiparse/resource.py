"""Decoding of resource descriptor buffers such as those returned by _CRS."""

from __future__ import annotations

from typing import Callable, Iterator, Optional

from .errors import (
    IncompatibleValueConversion,
    ReservedResourceType,
    UnexpectedEndOfStream,
    UnsupportedResourceDescriptor,
)
from .flags import AmlType
from .large_descriptors import (
    address_space_descriptor,
    extended_interrupt_descriptor,
    fixed_memory_descriptor,
)
from .resource_types import Resource
from .small_descriptors import (
    dma_format_descriptor,
    io_port_descriptor,
    irq_format_descriptor,
)
from .value import AmlValue, Buffer

_LARGE_DECODERS: dict[int, Callable[[bytes], Resource]] = {
    0x06: fixed_memory_descriptor,
    0x07: lambda data: address_space_descriptor(data, 4),
    0x08: lambda data: address_space_descriptor(data, 2),
    0x09: extended_interrupt_descriptor,
    0x0A: lambda data: address_space_descriptor(data, 8),
}

_LARGE_UNSUPPORTED = {
    0x01: "24-bit Memory Range Descriptor",
    0x02: "Generic Register Descriptor",
    0x03: "0x03 Reserved",
    0x04: "Vendor-defined Descriptor",
    0x05: "32-bit Memory Range Descriptor",
    0x0B: "Extended Address Space Descriptor",
    0x0C: "GPIO Connection Descriptor",
    0x0D: "Pin Function Descriptor",
    0x0E: "GenericSerialBus Connection Descriptor",
    0x0F: "Pin Configuration Descriptor",
    0x10: "Pin Group Descriptor",
    0x11: "Pin Group Function Descriptor",
    0x12: "Pin Group Configuration Descriptor",
}

_SMALL_DECODERS: dict[int, Callable[[bytes], Resource]] = {
    0x04: irq_format_descriptor,
    0x05: dma_format_descriptor,
    0x08: io_port_descriptor,
}

_SMALL_UNSUPPORTED = {
    0x06: "Start Dependent Functions Descriptor",
    0x07: "End Dependent Functions Descriptor",
    0x09: "Fixed Location IO Port Descriptor",
    0x0A: "Fixed DMA Descriptor",
    0x0E: "Vendor Defined Descriptor",
}

_END_TAG = 0x0F


def _split(data: bytes, size: int) -> tuple[bytes, bytes]:
    if len(data) < size:
        raise UnexpectedEndOfStream()
    return data[:size], data[size:]


def resource_descriptor(data: bytes) -> tuple[Optional[Resource], bytes]:
    """Decode the descriptor at the start of ``data``.

    Returns the resource and the bytes after it, or ``(None, b"")`` at an end tag.
    """
    data = bytes(data)
    if not data:
        raise UnexpectedEndOfStream()
    head = data[0]

    if head & 0x80:
        descriptor_type = head & 0x7F
        if len(data) < 3:
            raise UnexpectedEndOfStream()
        length = int.from_bytes(data[1:3], "little")
        descriptor_bytes, rest = _split(data, length + 3)
        if descriptor_type in _LARGE_UNSUPPORTED:
            raise UnsupportedResourceDescriptor(_LARGE_UNSUPPORTED[descriptor_type])
        decoder = _LARGE_DECODERS.get(descriptor_type)
        if decoder is None:
            raise ReservedResourceType()
        return decoder(descriptor_bytes), rest

    descriptor_type = (head >> 3) & 0x0F
    length = head & 0x07
    if descriptor_type == _END_TAG:
        return None, b""
    descriptor_bytes, rest = _split(data, length + 1)
    if descriptor_type in _SMALL_UNSUPPORTED:
        raise UnsupportedResourceDescriptor(_SMALL_UNSUPPORTED[descriptor_type])
    decoder = _SMALL_DECODERS.get(descriptor_type)
    if decoder is None:
        raise ReservedResourceType()
    return decoder(descriptor_bytes), rest


def iter_resource_descriptors(data: bytes) -> Iterator[Resource]:
    """Yield each resource in ``data`` up to the end tag or the end of the data."""
    remaining = bytes(data)
    while remaining:
        resource, remaining = resource_descriptor(remaining)
        if resource is None:
            return
        yield resource


def resource_descriptor_list(descriptor: AmlValue) -> list[Resource]:
    """Decode a Buffer value holding a resource template into its resources."""
    if not isinstance(descriptor, Buffer):
        raise IncompatibleValueConversion(descriptor.type_of(), AmlType.BUFFER)
    return list(iter_resource_descriptors(bytes(descriptor.data)))