"""Kernel heap: a first-fit fallback heap behind fixed-size block free lists."""

from __future__ import annotations

import bisect
import threading

from .memory import PAGE_SIZE, PRESENT, WRITABLE, FrameAllocationFailed

HEAP_START = 0x_4444_4444_0000
HEAP_SIZE = 100 * 1024

BLOCK_SIZES = (8, 16, 32, 64, 128, 256, 512, 1024, 2048)


class AllocationError(MemoryError):
    """The heap has no room for the requested allocation."""


def _check_layout(size: int, align: int) -> None:
    if size <= 0:
        raise ValueError(f"allocation size must be positive, got {size}")
    if align <= 0 or align & (align - 1):
        raise ValueError(f"alignment must be a power of two, got {align}")


def _align_up(addr: int, align: int) -> int:
    return (addr + align - 1) & ~(align - 1)


class FirstFitHeap:
    """Address-range allocator that hands out the first hole large enough."""

    def __init__(self, heap_start: int = 0, heap_size: int = 0) -> None:
        if heap_size < 0:
            raise ValueError("heap size must not be negative")
        self.heap_start = heap_start
        self.heap_size = heap_size
        self._holes: list[tuple[int, int]] = (
            [(heap_start, heap_size)] if heap_size else []
        )

    @property
    def free_bytes(self) -> int:
        return sum(size for _, size in self._holes)

    def allocate_first_fit(self, size: int, align: int) -> int:
        """Reserve ``size`` bytes aligned to ``align`` and return their address."""
        _check_layout(size, align)
        for position, (start, hole_size) in enumerate(self._holes):
            aligned = _align_up(start, align)
            end = aligned + size
            hole_end = start + hole_size
            if end > hole_end:
                continue
            pieces = []
            if aligned > start:
                pieces.append((start, aligned - start))
            if hole_end > end:
                pieces.append((end, hole_end - end))
            self._holes[position:position + 1] = pieces
            return aligned
        raise AllocationError(f"no hole for {size} bytes aligned to {align}")

    def deallocate(self, ptr: int, size: int, align: int) -> None:
        """Return a block to the heap, merging it with adjacent holes."""
        _check_layout(size, align)
        end = ptr + size
        if ptr < self.heap_start or end > self.heap_start + self.heap_size:
            raise ValueError(f"block at {ptr:#x} lies outside the heap")
        position = bisect.bisect_left(self._holes, (ptr, 0))
        if position > 0:
            prev_start, prev_size = self._holes[position - 1]
            if prev_start + prev_size > ptr:
                raise ValueError(f"block at {ptr:#x} is already free")
        if position < len(self._holes) and self._holes[position][0] < end:
            raise ValueError(f"block at {ptr:#x} is already free")

        start = ptr
        if position < len(self._holes) and self._holes[position][0] == end:
            end += self._holes[position][1]
            del self._holes[position]
        if position > 0:
            prev_start, prev_size = self._holes[position - 1]
            if prev_start + prev_size == start:
                start = prev_start
                position -= 1
                del self._holes[position]
        self._holes.insert(position, (start, end - start))


def list_index(size: int, align: int) -> int | None:
    """Index of the smallest block size that fits the layout, if any."""
    required = max(size, align)
    return next(
        (index for index, block in enumerate(BLOCK_SIZES) if block >= required),
        None,
    )


class FixedSizeBlockAllocator:
    """Serves small requests from per-size free lists, the rest from a fallback heap."""

    def __init__(self, heap_start: int = 0, heap_size: int = 0) -> None:
        self._lock = threading.Lock()
        self._free_lists: list[list[int]] = [[] for _ in BLOCK_SIZES]
        self.fallback = FirstFitHeap(heap_start, heap_size)

    def alloc(self, size: int, align: int) -> int:
        """Allocate a block and return its address."""
        _check_layout(size, align)
        with self._lock:
            index = list_index(size, align)
            if index is None:
                return self.fallback.allocate_first_fit(size, align)
            free = self._free_lists[index]
            if free:
                return free.pop()
            block = BLOCK_SIZES[index]
            return self.fallback.allocate_first_fit(block, block)

    def dealloc(self, ptr: int, size: int, align: int) -> None:
        """Release a block previously returned by :meth:`alloc`."""
        _check_layout(size, align)
        with self._lock:
            index = list_index(size, align)
            if index is None:
                self.fallback.deallocate(ptr, size, align)
            else:
                self._free_lists[index].append(ptr)


def heap_pages(heap_start: int, heap_size: int) -> range:
    """Start addresses of every page the heap range touches."""
    if heap_size <= 0:
        raise ValueError("heap size must be positive")
    first = heap_start - heap_start % PAGE_SIZE
    last_addr = heap_start + heap_size - 1
    last = last_addr - last_addr % PAGE_SIZE
    return range(first, last + 1, PAGE_SIZE)


def init_heap(mapper, frame_allocator) -> FixedSizeBlockAllocator:
    """Map every heap page to a fresh frame and return the ready allocator."""
    for page in heap_pages(HEAP_START, HEAP_SIZE):
        frame = frame_allocator.allocate_frame()
        if frame is None:
            raise FrameAllocationFailed(f"no frame left for page {page:#x}")
        mapper.map_to(page, frame, PRESENT | WRITABLE)
    return FixedSizeBlockAllocator(HEAP_START, HEAP_SIZE)