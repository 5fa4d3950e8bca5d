import pytest

from machlab.heap import HEADER_SIZE, HEAP_HEADER_SIZE, MIN_BLOCK_SIZE, Block, Heap

MB = 1024 * 1024


def assert_consistent(heap):
    blocks = list(heap.blocks())
    assert sum(b.size for b in blocks) == heap.size - heap.start
    assert blocks[0].start == heap.start
    for first, second in zip(blocks, blocks[1:]):
        assert first.start + first.size == second.start
        assert first.in_use or second.in_use
    return blocks


def test_fresh_heap_is_one_free_block():
    heap = Heap(4096)
    assert list(heap.blocks()) == [Block(HEAP_HEADER_SIZE, 4096 - HEAP_HEADER_SIZE, False)]


def test_first_allocation_is_at_front():
    heap = Heap(4096)
    payload = heap.malloc(16)
    assert payload == heap.start + HEADER_SIZE
    assert payload % 4 == 0


def test_allocated_block_holds_request():
    heap = Heap(4096)
    for request in (0, 1, 7, 8, 13, 100):
        payload = heap.malloc(request)
        block = next(b for b in heap.blocks() if b.payload == payload)
        assert block.in_use
        assert block.payload_size >= request
        assert block.payload_size % HEADER_SIZE == 0
    assert_consistent(heap)


def test_freed_block_is_reused():
    heap = Heap(MB)
    payload = heap.malloc(16)
    heap.free(payload)
    assert heap.malloc(16) == payload


def test_freeing_everything_coalesces():
    heap = Heap(MB)
    payloads = [heap.malloc(100) for _ in range(10)]
    for payload in payloads[::2] + payloads[1::2]:
        heap.free(payload)
        assert_consistent(heap)
    assert list(heap.blocks()) == [Block(heap.start, heap.size - heap.start, False)]


def test_adjacent_free_blocks_merge_for_large_request():
    heap = Heap(MB)
    size = 333 * 1024
    first, second, third = (heap.malloc(size) for _ in range(3))
    heap.free(second)
    heap.free(third)
    combined = heap.malloc(size * 2)
    assert combined == second
    heap.free(combined)
    heap.free(first)
    assert heap.malloc(size * 3) == first


def test_out_of_memory_raises():
    heap = Heap(1024)
    with pytest.raises(MemoryError):
        heap.malloc(4096)


def test_negative_size_rejected():
    heap = Heap(1024)
    with pytest.raises(ValueError):
        heap.malloc(-1)


def test_double_free_rejected():
    heap = Heap(1024)
    payload = heap.malloc(32)
    heap.malloc(32)
    heap.free(payload)
    with pytest.raises(ValueError):
        heap.free(payload)


def test_free_outside_heap_rejected():
    heap = Heap(1024)
    with pytest.raises(ValueError):
        heap.free(5000)


@pytest.mark.parametrize("size", [0, HEAP_HEADER_SIZE + MIN_BLOCK_SIZE - 8, 1001])
def test_bad_heap_size_rejected(size):
    with pytest.raises(ValueError):
        Heap(size)


def test_payload_writes_do_not_disturb_blocks():
    heap = Heap(4096)
    payloads = [heap.malloc(24) for _ in range(5)]
    for payload in payloads:
        heap.payload_view(payload, 24)[:] = b"\xcc" * 24
    blocks = assert_consistent(heap)
    assert [b.payload for b in blocks if b.in_use] == payloads
    assert bytes(heap.payload_view(payloads[2], 24)) == b"\xcc" * 24


def test_payload_view_out_of_range():
    heap = Heap(1024)
    with pytest.raises(ValueError):
        heap.payload_view(1020, 8)


def test_split_leaves_free_remainder():
    heap = Heap(4096)
    payload = heap.malloc(64)
    blocks = assert_consistent(heap)
    assert blocks[0].payload == payload and blocks[0].in_use
    assert not blocks[1].in_use