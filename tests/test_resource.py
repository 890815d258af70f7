import pytest

from acpiparse.errors import (
    IncompatibleValueConversion,
    ReservedResourceType,
    UnexpectedEndOfStream,
    UnsupportedResourceDescriptor,
)
from acpiparse.flags import AmlType
from acpiparse.resource import (
    iter_resource_descriptors,
    resource_descriptor,
    resource_descriptor_list,
)
from acpiparse.resource_types import (
    AddressSpaceDecodeType,
    AddressSpaceDescriptor,
    AddressSpaceResourceType,
    DMADescriptor,
    DMASupportedSpeed,
    DMATransferTypePreference,
    FixedMemoryRangeDescriptor,
    InterruptPolarity,
    InterruptTrigger,
    IOPortDescriptor,
    IrqDescriptor,
)
from acpiparse.value import Buffer, Integer


def _addr(resource_type, minimum, maximum, length):
    return AddressSpaceDescriptor(
        resource_type=resource_type,
        is_maximum_address_fixed=True,
        is_minimum_address_fixed=True,
        decode_type=AddressSpaceDecodeType.ADDITIVE,
        granularity=0,
        address_range=(minimum, maximum),
        translation_offset=0,
        length=length,
    )


def _simple_irq(irq):
    return IrqDescriptor(
        is_consumer=False,
        trigger=InterruptTrigger.EDGE,
        polarity=InterruptPolarity.ACTIVE_HIGH,
        is_shared=False,
        is_wake_capable=False,
        irq=irq,
    )


def test_parses_keyboard_crs():
    data = bytes([
        0x47, 0x01, 0x60, 0x00, 0x60, 0x00, 0x01, 0x01,
        0x47, 0x01, 0x64, 0x00, 0x64, 0x00, 0x01, 0x01,
        0x22, 0x02, 0x00,
        0x79, 0x00,
    ])
    resources = resource_descriptor_list(Buffer(bytearray(data)))
    assert resources == [
        IOPortDescriptor(True, (0x60, 0x60), 1, 1),
        IOPortDescriptor(True, (0x64, 0x64), 1, 1),
        _simple_irq(1 << 1),
    ]


def test_pci_crs():
    data = bytes([
        0x88, 0x0D, 0x00, 0x02, 0x0C, 0x00, 0x00, 0x00, 0x00, 0x00, 0xFF, 0x00, 0x00, 0x00, 0x00, 0x01,
        0x47, 0x01, 0xF8, 0x0C, 0xF8, 0x0C, 0x01, 0x08,
        0x88, 0x0D, 0x00, 0x01, 0x0C, 0x03, 0x00, 0x00, 0x00, 0x00, 0xF7, 0x0C, 0x00, 0x00, 0xF8, 0x0C,
        0x88, 0x0D, 0x00, 0x01, 0x0C, 0x03, 0x00, 0x00, 0x00, 0x0D, 0xFF, 0xFF, 0x00, 0x00, 0x00, 0xF3,
        0x87, 0x17, 0x00, 0x00, 0x0C, 0x03, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x0A, 0x00, 0xFF, 0xFF, 0x0B,
        0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x02, 0x00,
        0x87, 0x17, 0x00, 0x00, 0x0C, 0x01, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0xE0, 0xFF, 0xFF, 0xBF,
        0xFE, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0xC0, 0x1E,
        0x79, 0x00,
    ])
    resources = resource_descriptor_list(Buffer(bytearray(data)))
    assert resources == [
        _addr(AddressSpaceResourceType.BUS_NUMBER_RANGE, 0x00, 0xFF, 0x100),
        IOPortDescriptor(True, (0xCF8, 0xCF8), 1, 8),
        _addr(AddressSpaceResourceType.IO_RANGE, 0x0000, 0x0CF7, 0xCF8),
        _addr(AddressSpaceResourceType.IO_RANGE, 0x0D00, 0xFFFF, 0xF300),
        _addr(AddressSpaceResourceType.MEMORY_RANGE, 0xA0000, 0xBFFFF, 0x20000),
        _addr(AddressSpaceResourceType.MEMORY_RANGE, 0xE0000000, 0xFEBFFFFF, 0x1EC00000),
    ]


def test_fdc_crs():
    data = bytes([
        0x47, 0x01, 0xF2, 0x03, 0xF2, 0x03, 0x00, 0x04,
        0x47, 0x01, 0xF7, 0x03, 0xF7, 0x03, 0x00, 0x01,
        0x22, 0x40, 0x00,
        0x2A, 0x04, 0x00,
        0x79, 0x00,
    ])
    resources = resource_descriptor_list(Buffer(bytearray(data)))
    assert resources == [
        IOPortDescriptor(True, (0x03F2, 0x03F2), 0, 4),
        IOPortDescriptor(True, (0x03F7, 0x03F7), 0, 1),
        _simple_irq(1 << 6),
        DMADescriptor(
            channel_mask=1 << 2,
            supported_speeds=DMASupportedSpeed.COMPATIBILITY_MODE,
            is_bus_master=False,
            transfer_type_preference=DMATransferTypePreference.EIGHT_BIT_ONLY,
        ),
    ]


def test_non_buffer_is_rejected():
    with pytest.raises(IncompatibleValueConversion) as excinfo:
        resource_descriptor_list(Integer(5))
    assert excinfo.value.current is AmlType.INTEGER
    assert excinfo.value.target is AmlType.BUFFER


def test_empty_buffer_gives_no_resources():
    assert resource_descriptor_list(Buffer(bytearray())) == []


def test_end_tag_stops_parsing_before_trailing_bytes():
    data = bytes([0x22, 0x08, 0x00, 0x79, 0x00, 0xFF, 0xFF])
    assert list(iter_resource_descriptors(data)) == [_simple_irq(8)]


def test_resource_descriptor_returns_rest():
    data = bytes([0x22, 0x02, 0x00, 0x79, 0x00])
    resource, rest = resource_descriptor(data)
    assert resource == _simple_irq(2)
    assert rest == bytes([0x79, 0x00])


def test_end_tag_returns_none():
    assert resource_descriptor(bytes([0x79, 0x00, 0x47])) == (None, b"")


def test_fixed_memory_large_item():
    data = bytes([0x86, 0x09, 0x00, 0x01, 0x00, 0x00, 0xC0, 0xFE, 0x00, 0x10, 0x00, 0x00])
    resource, rest = resource_descriptor(data)
    assert resource == FixedMemoryRangeDescriptor(True, 0xFEC00000, 0x1000)
    assert rest == b""


def test_extended_interrupt_large_item():
    data = bytes([0x89, 0x06, 0x00, 0x09, 0x01, 0x05, 0x00, 0x00, 0x00])
    resource, _ = resource_descriptor(data)
    assert resource == IrqDescriptor(
        is_consumer=True,
        trigger=InterruptTrigger.LEVEL,
        polarity=InterruptPolarity.ACTIVE_HIGH,
        is_shared=True,
        is_wake_capable=False,
        irq=5,
    )


@pytest.mark.parametrize("data", [bytes([0x00]), bytes([0x58]), bytes([0x80, 0x00, 0x00]), bytes([0x93, 0x00, 0x00])])
def test_reserved_types(data):
    with pytest.raises(ReservedResourceType):
        resource_descriptor(data)


@pytest.mark.parametrize("data", [b"", bytes([0x47, 0x01, 0x60]), bytes([0x88, 0x0D]), bytes([0x88, 0x0D, 0x00, 0x02])])
def test_truncated_data(data):
    with pytest.raises(UnexpectedEndOfStream):
        resource_descriptor(data)