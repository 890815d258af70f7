# acpiparse

A pure-Python library for decoding ACPI firmware structures. It has no
dependencies outside the standard library.

It covers:

- locating and validating the RSDP (Root System Description Pointer) —
  `acpiparse.rsdp`, using memory mappings from `acpiparse.physical`;
- decoding AML `PkgLength` encodings — `acpiparse.pkg_length`;
- AML values and their implicit conversions — `acpiparse.value`, with flag
  bytes, status objects and object types in `acpiparse.flags`;
- decoding resource templates (such as `_CRS` results) into IRQ, DMA, I/O
  port, fixed memory and address-space descriptors — `acpiparse.resource`,
  `acpiparse.small_descriptors`, `acpiparse.large_descriptors` and the
  result types in `acpiparse.resource_types`.

Decoding errors are subclasses of `acpiparse.errors.AmlError`; RSDP errors
are subclasses of `acpiparse.rsdp.RsdpError`.

## Installation

```
pip install acpiparse
```

## Decoding a resource template

```python
from acpiparse.value import Buffer
from acpiparse.resource import resource_descriptor_list

crs = Buffer(bytearray([
    0x47, 0x01, 0x60, 0x00, 0x60, 0x00, 0x01, 0x01,  # IO (Decode16, 0x60, 0x60, 1, 1)
    0x22, 0x02, 0x00,                                # IRQNoFlags () {1}
    0x79, 0x00,                                      # End tag
]))

for resource in resource_descriptor_list(crs):
    print(resource)
# IOPortDescriptor(decodes_full_address=True, memory_range=(96, 96), base_alignment=1, range_length=1)
# IrqDescriptor(is_consumer=False, trigger=<InterruptTrigger.EDGE: 'edge'>, ..., irq=2)
```

`resource_descriptor_list` takes a `Buffer` value and raises
`IncompatibleValueConversion` for anything else. For raw bytes,
`iter_resource_descriptors(data)` yields the resources one by one, stopping
at the end tag or the end of the data, and `resource_descriptor(data)`
decodes a single descriptor and returns it with the remaining bytes.

Malformed input raises `ResourceDescriptorTooShort`,
`ResourceDescriptorTooLong`, `ReservedResourceType` or
`UnexpectedEndOfStream`. Descriptor kinds that are recognised but not decoded
(for example GPIO connection or vendor-defined descriptors, or extended
interrupt descriptors holding more than one interrupt) raise
`UnsupportedResourceDescriptor`.

## Package lengths

```python
from acpiparse.pkg_length import raw_pkg_length, pkg_length, take_to_end_of_pkglength

length, rest = raw_pkg_length(bytes([0b01000101, 0x14]))
assert length == 325 and rest == b""

stream = bytes([0x05, 0x01, 0x02, 0x03, 0x04, 0xFF, 0xFF, 0xFF])
pkg, rest = pkg_length(stream)
body, after = take_to_end_of_pkglength(rest, pkg)
assert body == bytes([0x01, 0x02, 0x03, 0x04]) and after == b"\xff\xff\xff"
```

`region_pkg_length(stream, region_byte_length)` decodes a length measured in
bits against an operation region of the given size.

## AML values

`acpiparse.value` has one class per kind of value: `Integer`, `Boolean`,
`AmlString`, `Buffer`, `BufferField`, `Package`, `Device`, `Method`,
`Mutex`, `Processor`, `PowerResource`, `ThermalZone` and `Uninitialized`.
Each supports `type_of()`, `size_of()`, `as_integer()`, `as_bool()`,
`as_buffer()`, `as_string()`, `as_concat_type()`, `as_status()`,
`as_type(desired_type)` and `compare(other)` (returning -1, 0 or 1), raising
`IncompatibleValueConversion` and the like where a conversion is not allowed.

```python
from acpiparse.value import Buffer, BufferField, Integer

buf = Buffer(bytearray(4))
field = BufferField(buf.data, offset=8, length=16)   # shares the buffer's bytes
field.write(Integer(0xBEEF))
assert buf.data == bytearray([0x00, 0xEF, 0xBE, 0x00])
assert field.read() == Integer(0xBEEF)
```

`Args` holds the seven argument slots of a method call, and
`native_method(arg_count, serialize, sync_level, f)` builds a `Method` whose
body is a Python callable. `FieldFlags` and `MethodFlags` in
`acpiparse.flags` decode the flag bytes of fields and methods.

## Finding the RSDP

Subclass `acpiparse.physical.AcpiHandler` and implement
`map_physical_region(physical_address, size)`, returning a
`PhysicalMapping` whose `data` holds the bytes at that address, and
`unmap_physical_region(mapping)`. Mappings are context managers and are
unmapped once when closed.

```python
from acpiparse.physical import AcpiHandler, PhysicalMapping
from acpiparse.rsdp import search_for_on_bios

class MemoryImageHandler(AcpiHandler):
    def __init__(self, image: bytes):
        self.image = image

    def map_physical_region(self, physical_address, size):
        data = self.image[physical_address:physical_address + size]
        return PhysicalMapping(physical_address, data, size, size, self)

    def unmap_physical_region(self, mapping):
        pass

with search_for_on_bios(MemoryImageHandler(low_memory_image)) as mapping:
    rsdp = mapping.data
    print(rsdp.oem_id(), hex(rsdp.rsdt_address))
```

`find_search_areas(handler)` returns the two address ranges searched: the
BIOS area `0xE0000..0xFFFFF` and the EBDA. `search_for_on_bios` raises
`NoValidRsdp` if no valid structure is found. A structure read directly can
be checked with `Rsdp.from_bytes(data).validate()`, which raises
`IncorrectSignature`, `InvalidOemId` or `InvalidChecksum`. The extended
fields (`length()`, `xsdt_address()`, `ext_checksum()`) raise `ValueError`
on a revision 0 RSDP.

## What this package does not do

It decodes the structures listed above only. It does not parse or execute
AML bytecode (term lists, named objects, control flow or method bodies),
keeps no ACPI namespace, does not read operation-region fields, and has no
command-line tool for compiling or checking ASL/AML tables.

## Running the tests

```
pip install -e ".[test]"
pytest
```