"""Decoding of AML PkgLength encodings."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidPkgLength, InvalidRegionPkgLength, UnexpectedEndOfStream


@dataclass(frozen=True)
class PkgLength:
    """A package length within the AML stream.

    ``end_offset`` is the number of bytes left in the stream once the package ends.
    """

    raw_length: int
    end_offset: int

    @classmethod
    def from_raw_length(cls, stream: bytes, raw_length: int) -> PkgLength:
        end_offset = len(stream) - raw_length
        if end_offset < 0:
            raise InvalidPkgLength()
        return cls(raw_length, end_offset)

    def still_parsing(self, stream: bytes) -> bool:
        """Whether ``stream`` still lies within the package."""
        return len(stream) > self.end_offset


@dataclass(frozen=True)
class RegionPkgLength:
    """A package length measured in bits within an operation region."""

    raw_length: int
    end_offset: int

    @classmethod
    def from_raw_length(cls, region_bit_length: int, raw_length: int) -> RegionPkgLength:
        end_offset = (region_bit_length & 0xFFFFFFFF) - raw_length
        if end_offset < 0:
            raise InvalidRegionPkgLength(region_bit_length, raw_length)
        return cls(raw_length, end_offset)


def raw_pkg_length(stream: bytes) -> tuple[int, bytes]:
    """Decode a PkgLength; returns the raw length and the rest of the stream.

    The raw length counts the bytes of the encoding itself.
    """
    stream = bytes(stream)
    if not stream:
        raise UnexpectedEndOfStream()
    lead = stream[0]
    byte_count = lead >> 6
    if byte_count == 0:
        return lead & 0x3F, stream[1:]

    extra = stream[1 : 1 + byte_count]
    if len(extra) < byte_count:
        raise UnexpectedEndOfStream()
    length = lead & 0x0F
    for index, byte in enumerate(extra):
        length += byte << (4 + index * 8)
    return length, stream[1 + byte_count :]


def pkg_length(stream: bytes) -> tuple[PkgLength, bytes]:
    """Decode a PkgLength measured against ``stream``."""
    stream = bytes(stream)
    raw_length, rest = raw_pkg_length(stream)
    return PkgLength.from_raw_length(stream, raw_length), rest


def region_pkg_length(stream: bytes, region_byte_length: int) -> tuple[RegionPkgLength, bytes]:
    """Decode a PkgLength measured in bits against a region of ``region_byte_length`` bytes."""
    raw_length, rest = raw_pkg_length(stream)
    return RegionPkgLength.from_raw_length(region_byte_length * 8, raw_length), rest


def take_to_end_of_pkglength(stream: bytes, length: PkgLength) -> tuple[bytes, bytes]:
    """Split ``stream`` at the end of the package; returns (body, rest)."""
    stream = bytes(stream)
    body_length = len(stream) - length.end_offset
    if body_length < 0:
        raise UnexpectedEndOfStream()
    return stream[:body_length], stream[body_length:]