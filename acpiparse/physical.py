"""Mappings of physical memory supplied by a platform handler."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Any


class AcpiHandler(abc.ABC):
    """Platform access used to read physical memory."""

    @abc.abstractmethod
    def map_physical_region(self, physical_address: int, size: int) -> PhysicalMapping:
        """Map at least ``size`` bytes starting at ``physical_address``."""

    @abc.abstractmethod
    def unmap_physical_region(self, mapping: PhysicalMapping) -> None:
        """Release a mapping; called by ``PhysicalMapping.close``."""


@dataclass(eq=False)
class PhysicalMapping:
    """A mapped region of physical memory.

    ``data`` holds the mapped bytes of the requested structure; ``region_length`` is
    the number of bytes requested and ``mapped_length`` the number actually mapped.
    Closing the mapping, directly or by leaving a ``with`` block, unmaps it once.
    """

    physical_start: int
    data: Any
    region_length: int
    mapped_length: int
    handler: AcpiHandler
    _closed: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.region_length < 0:
            raise ValueError("region length cannot be negative")
        if self.mapped_length < self.region_length:
            raise ValueError("mapped length cannot be smaller than the region length")

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.handler.unmap_physical_region(self)

    def __enter__(self) -> PhysicalMapping:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()