"""The Root System Description Pointer and the BIOS search for it."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from typing import Optional

from .physical import AcpiHandler, PhysicalMapping

logger = logging.getLogger(__name__)

RSDP_SIGNATURE = b"RSD PTR "
_RSDP_FORMAT = struct.Struct("<8sB6sBIIQB3s")
RSDP_LENGTH = _RSDP_FORMAT.size
RSDP_V1_LENGTH = 20
RSDP_V2_EXT_LENGTH = RSDP_LENGTH - RSDP_V1_LENGTH

EBDA_START_SEGMENT_PTR = 0x40E
EBDA_EARLIEST_START = 0x80000
EBDA_END = 0x9FFFF
RSDP_BIOS_AREA_START = 0xE0000
RSDP_BIOS_AREA_END = 0xFFFFF


class RsdpError(Exception):
    """Base class for errors found while locating or checking an RSDP."""


class NoValidRsdp(RsdpError):
    """No valid RSDP was found in any search area."""


class IncorrectSignature(RsdpError):
    """The structure does not start with the RSDP signature."""


class InvalidOemId(RsdpError):
    """The OEM id is not valid UTF-8."""


class InvalidChecksum(RsdpError):
    """The bytes of the structure do not sum to zero."""


@dataclass(frozen=True)
class Rsdp:
    """The first ACPI table; it gives the address of the RSDT or XSDT.

    The extended fields are only meaningful when ``revision`` is above zero.
    ``raw`` keeps the bytes the structure was read from, which may run past
    the structure itself and are used for the checksum.
    """

    signature: bytes
    checksum: int
    oem_id_bytes: bytes
    revision: int
    rsdt_address: int
    extended_length: int = 0
    extended_xsdt_address: int = 0
    extended_checksum: int = 0
    reserved: bytes = b"\x00\x00\x00"
    raw: bytes = field(default=b"", repr=False, compare=False)

    @classmethod
    def from_bytes(cls, data: bytes) -> Rsdp:
        """Read an RSDP from its in-memory layout."""
        data = bytes(data)
        if len(data) < RSDP_V1_LENGTH:
            raise ValueError(
                f"an RSDP needs at least {RSDP_V1_LENGTH} bytes, got {len(data)}"
            )
        head = data[:RSDP_LENGTH].ljust(RSDP_LENGTH, b"\x00")
        fields = _RSDP_FORMAT.unpack(head)
        return cls(*fields, raw=data)

    def _pack(self) -> bytes:
        return _RSDP_FORMAT.pack(
            self.signature,
            self.checksum,
            self.oem_id_bytes,
            self.revision,
            self.rsdt_address,
            self.extended_length,
            self.extended_xsdt_address,
            self.extended_checksum,
            self.reserved,
        )

    def validate(self) -> None:
        """Check the signature, the OEM id and the checksum covering the structure."""
        if self.signature != RSDP_SIGNATURE:
            raise IncorrectSignature()
        try:
            self.oem_id_bytes.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidOemId() from None

        length = self.extended_length if self.revision > 0 else RSDP_V1_LENGTH
        data = self.raw or self._pack()
        if len(data) < length:
            raise InvalidChecksum()
        if sum(data[:length]) & 0xFF:
            raise InvalidChecksum()

    def oem_id(self) -> str:
        try:
            return self.oem_id_bytes.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidOemId() from None

    def _require_extended(self) -> None:
        if self.revision == 0:
            raise ValueError("Tried to read extended RSDP field with ACPI Version 1.0")

    def length(self) -> int:
        self._require_extended()
        return self.extended_length

    def xsdt_address(self) -> int:
        self._require_extended()
        return self.extended_xsdt_address

    def ext_checksum(self) -> int:
        self._require_extended()
        return self.extended_checksum


def find_search_areas(handler: AcpiHandler) -> list[range]:
    """The physical address ranges to search for the RSDP: the BIOS area, then the EBDA."""
    with handler.map_physical_region(EBDA_START_SEGMENT_PTR, 2) as mapping:
        segment = int.from_bytes(bytes(mapping.data)[:2], "little")
    ebda_start = segment << 4

    if EBDA_EARLIEST_START <= ebda_start < EBDA_END:
        ebda_area = range(ebda_start, ebda_start + 1024)
    else:
        ebda_area = range(EBDA_EARLIEST_START, EBDA_END + 1)

    return [range(RSDP_BIOS_AREA_START, RSDP_BIOS_AREA_END + 1), ebda_area]


def _scan_area(handler: AcpiHandler, area: range) -> Optional[int]:
    with handler.map_physical_region(area.start, len(area) + RSDP_V2_EXT_LENGTH) as mapping:
        data = bytes(mapping.data)[: mapping.region_length]
        for offset in range(0, len(data) - RSDP_LENGTH + 1, 16):
            if data[offset : offset + len(RSDP_SIGNATURE)] != RSDP_SIGNATURE:
                continue
            address = mapping.physical_start + offset
            try:
                Rsdp.from_bytes(data[offset:]).validate()
            except IncorrectSignature:
                continue
            except RsdpError as error:
                logger.warning(
                    "Invalid RSDP found at %#x: %s", address, type(error).__name__
                )
                continue
            return address
    return None


def search_for_on_bios(handler: AcpiHandler) -> PhysicalMapping:
    """Search the BIOS memory areas for a valid RSDP.

    Returns a mapping of the RSDP whose ``data`` is the decoded ``Rsdp``.
    """
    for area in find_search_areas(handler):
        address = _scan_area(handler, area)
        if address is not None:
            break
    else:
        raise NoValidRsdp()

    mapping = handler.map_physical_region(address, RSDP_LENGTH)
    try:
        mapping.data = Rsdp.from_bytes(bytes(mapping.data)[:RSDP_LENGTH])
    except Exception:
        mapping.close()
        raise
    return mapping