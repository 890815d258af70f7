"""Decoding of small resource descriptor items (IRQ, DMA and I/O port)."""

from __future__ import annotations

from .errors import (
    ResourceDescriptorTooLong,
    ResourceDescriptorTooShort,
    UnsupportedResourceDescriptor,
)
from .resource_types import (
    DMADescriptor,
    DMASupportedSpeed,
    DMATransferTypePreference,
    InterruptPolarity,
    InterruptTrigger,
    IOPortDescriptor,
    IrqDescriptor,
)


def _exact_length(data: bytes, expected: int) -> None:
    if len(data) < expected:
        raise ResourceDescriptorTooShort()
    if len(data) > expected:
        raise ResourceDescriptorTooLong()


def irq_format_descriptor(data: bytes) -> IrqDescriptor:
    """Decode an IRQ descriptor of two or three data bytes.

    ``irq`` is the 16-bit IRQ mask. Without the information byte the interrupt
    is edge-triggered and active-high.
    """
    data = bytes(data)
    if len(data) < 3:
        raise ResourceDescriptorTooShort()
    if len(data) > 4:
        raise ResourceDescriptorTooLong()

    irq = int.from_bytes(data[1:3], "little")
    if len(data) == 3:
        return IrqDescriptor(
            is_consumer=False,
            trigger=InterruptTrigger.EDGE,
            polarity=InterruptPolarity.ACTIVE_HIGH,
            is_shared=False,
            is_wake_capable=False,
            irq=irq,
        )

    information = data[3]
    return IrqDescriptor(
        is_consumer=False,
        trigger=InterruptTrigger.EDGE if information & 0x01 else InterruptTrigger.LEVEL,
        polarity=(
            InterruptPolarity.ACTIVE_LOW if information & 0x08 else InterruptPolarity.ACTIVE_HIGH
        ),
        is_shared=bool(information & 0x10),
        is_wake_capable=bool(information & 0x20),
        irq=irq,
    )


def dma_format_descriptor(data: bytes) -> DMADescriptor:
    """Decode a DMA descriptor of exactly three bytes."""
    data = bytes(data)
    _exact_length(data, 3)

    options = data[2]
    transfer_bits = options & 0x03
    if transfer_bits == 3:
        raise UnsupportedResourceDescriptor("Reserved DMA transfer type preference")

    return DMADescriptor(
        channel_mask=data[1],
        supported_speeds=DMASupportedSpeed((options >> 5) & 0x03),
        is_bus_master=bool(options & 0x04),
        transfer_type_preference=DMATransferTypePreference(transfer_bits),
    )


def io_port_descriptor(data: bytes) -> IOPortDescriptor:
    """Decode an I/O port descriptor of exactly eight bytes."""
    data = bytes(data)
    _exact_length(data, 8)

    return IOPortDescriptor(
        decodes_full_address=bool(data[1] & 0x01),
        memory_range=(
            int.from_bytes(data[2:4], "little"),
            int.from_bytes(data[4:6], "little"),
        ),
        base_alignment=data[6],
        range_length=data[7],
    )