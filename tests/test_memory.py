import pytest

from textos.memory import (
    PAGE_SIZE,
    PRESENT,
    WRITABLE,
    BootInfoFrameAllocator,
    EmptyFrameAllocator,
    MemoryRegion,
    PageMapper,
    RegionType,
)


def test_empty_allocator_has_no_frames():
    allocator = EmptyFrameAllocator()
    assert allocator.allocate_frame() is None
    assert allocator.allocate_frame() is None


def _regions():
    return [
        MemoryRegion(0x1000, 0x3000, RegionType.Usable),
        MemoryRegion(0x3000, 0x5000, RegionType.Reserved),
        MemoryRegion(0x5000, 0x6000, RegionType.Usable),
    ]


def test_usable_frames_skip_reserved_regions():
    allocator = BootInfoFrameAllocator(_regions())
    assert list(allocator.usable_frames()) == [0x1000, 0x2000, 0x5000]


def test_allocate_frame_in_order_then_exhausted():
    allocator = BootInfoFrameAllocator(_regions())
    frames = [allocator.allocate_frame() for _ in range(3)]
    assert frames == list(allocator.usable_frames())
    assert allocator.allocate_frame() is None
    assert allocator.allocate_frame() is None


def test_unaligned_region_frames_are_aligned():
    allocator = BootInfoFrameAllocator(
        [MemoryRegion(0x1800, 0x3000, RegionType.Usable)]
    )
    frames = list(allocator.usable_frames())
    assert frames == [0x1000, 0x2000]
    assert all(frame % PAGE_SIZE == 0 for frame in frames)


def test_mapper_translate_with_offset():
    mapper = PageMapper()
    mapper.map_to(0x4000, 0x9000, PRESENT | WRITABLE)
    assert mapper.translate(0x4000) == 0x9000
    assert mapper.translate(0x4123) == 0x9123
    assert mapper.translate(0x5000) is None
    assert mapper.flags(0x4000) == PRESENT | WRITABLE


def test_mapper_rejects_double_mapping():
    mapper = PageMapper()
    mapper.map_to(0x4000, 0x9000, PRESENT)
    with pytest.raises(ValueError):
        mapper.map_to(0x4000, 0xA000, PRESENT)
    assert mapper.translate(0x4000) == 0x9000
    assert len(mapper) == 1


def test_mapper_rejects_unaligned():
    mapper = PageMapper()
    with pytest.raises(ValueError):
        mapper.map_to(0x4001, 0x9000, PRESENT)
    with pytest.raises(ValueError):
        mapper.map_to(0x4000, 0x9010, PRESENT)
    assert len(mapper) == 0