"""Physical frame allocation and a page-table mapping model."""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto

PAGE_SIZE = 4096

PRESENT = 0x1
WRITABLE = 0x2


class RegionType(Enum):
    Usable = auto()
    InUse = auto()
    Reserved = auto()
    AcpiReclaimable = auto()
    AcpiNvs = auto()
    BadMemory = auto()
    Kernel = auto()
    KernelStack = auto()
    PageTable = auto()
    Bootloader = auto()
    FrameZero = auto()
    Empty = auto()
    BootInfo = auto()
    Package = auto()


@dataclass(frozen=True)
class MemoryRegion:
    start_addr: int
    end_addr: int
    region_type: RegionType


class FrameAllocationFailed(MemoryError):
    """No physical frame was available for a mapping."""


def _containing_frame(addr: int) -> int:
    return addr - addr % PAGE_SIZE


class EmptyFrameAllocator:
    """A frame allocator that never has a frame to give."""

    def __init__(self) -> None:
        self.requests = 0

    def allocate_frame(self) -> int | None:
        """Record the request; there is never a frame to return."""
        self.requests += 1
        return None


class BootInfoFrameAllocator:
    """Hands out the usable frames of a boot memory map in order."""

    def __init__(self, memory_map: Iterable[MemoryRegion]) -> None:
        self.memory_map = list(memory_map)
        self.next = 0

    def usable_frames(self) -> Iterator[int]:
        """Start addresses of the frames in every usable region."""
        for region in self.memory_map:
            if region.region_type is not RegionType.Usable:
                continue
            for addr in range(region.start_addr, region.end_addr, PAGE_SIZE):
                yield _containing_frame(addr)

    def allocate_frame(self) -> int | None:
        frame = next(itertools.islice(self.usable_frames(), self.next, None), None)
        self.next += 1
        return frame


class PageMapper:
    """Maps virtual pages to physical frames."""

    def __init__(self) -> None:
        self._table: dict[int, tuple[int, int]] = {}

    def __len__(self) -> int:
        return len(self._table)

    def map_to(self, page: int, frame: int, flags: int) -> None:
        for name, addr in (("page", page), ("frame", frame)):
            if addr % PAGE_SIZE:
                raise ValueError(f"{name} address {addr:#x} is not page aligned")
        if page in self._table:
            raise ValueError(f"page {page:#x} is already mapped")
        self._table[page] = (frame, flags)

    def translate(self, page: int) -> int | None:
        """Physical address for a virtual address, or None if unmapped."""
        offset = page % PAGE_SIZE
        entry = self._table.get(page - offset)
        if entry is None:
            return None
        return entry[0] + offset

    def flags(self, page: int) -> int | None:
        entry = self._table.get(_containing_frame(page))
        return None if entry is None else entry[1]