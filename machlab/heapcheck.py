"""Exercise the heap allocator with a set of allocation workloads."""

from __future__ import annotations

import random
import sys
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from machlab.heap import Heap

MB = 1024 * 1024
INT_SIZE = 4


class AllocationError(Exception):
    """Raised when the allocator hands out an unusable address."""


def check_alloc(
    heap: Heap,
    name: str,
    payload: Optional[int],
    size: int,
    live: Iterable[Tuple[Optional[int], int]],
) -> None:
    """Check a new allocation against the heap bounds and live allocations, then fill it."""
    if payload is None:
        raise AllocationError(
            f"{name}: myheap_malloc returned NULL (maybe it ran out of memory)"
        )
    if payload % INT_SIZE:
        raise AllocationError(
            f"{name}: myheap_malloc returned an unaligned pointer 0x{payload:x}"
        )
    if payload < 0 or payload + size > heap.size:
        raise AllocationError(
            f"{name}: myheap_malloc returned invalid pointer: 0x{payload:x} is out "
            f"of the bounds of the heap [0x0, 0x{heap.size:x}]"
        )
    for other, other_size in live:
        if other is not None and other <= payload < other + other_size:
            raise AllocationError(
                f"{name}: myheap_malloc returned an overlapping pointer: 0x{payload:x} "
                f"lies inside existing allocation [0x{other:x}, 0x{other + other_size:x}]"
            )
    heap.payload_view(payload, size)[:] = b"\xcc" * size


def _allocate(heap: Heap, name: str, size: int, live) -> int:
    try:
        payload: Optional[int] = heap.malloc(size)
    except MemoryError:
        payload = None
    check_alloc(heap, name, payload, size, live)
    return payload


def _churn(heap: Heap, name: str, sizes: List[int], indices: Iterable[int]) -> None:
    ptrs: List[Optional[int]] = [None] * len(sizes)
    for idx in indices:
        if ptrs[idx] is not None:
            heap.free(ptrs[idx])
            ptrs[idx] = None
        else:
            ptrs[idx] = _allocate(heap, name, sizes[idx], zip(ptrs, sizes))


def _sanity(heap: Heap, name: str) -> None:
    payload = _allocate(heap, name, 16, ())
    heap.free(payload)


def _freelist1(heap: Heap, name: str) -> None:
    first = _allocate(heap, name, 16, ())
    heap.free(first)
    second = _allocate(heap, name, 16, ())
    if first != second:
        raise AllocationError(
            f"{name}: myheap_malloc did not reuse free chunk 0x{first:x} "
            f"(returned 0x{second:x} instead)"
        )


def _freelist2(heap: Heap, name: str) -> None:
    size = 16
    p: List[Tuple[int, int]] = []
    for _ in range(2):
        p.append((_allocate(heap, name, size, p), size))
    first, second = p[0][0], p[1][0]
    heap.free(first)
    heap.free(second)
    q: List[Tuple[int, int]] = []
    for _ in range(2):
        payload = _allocate(heap, name, size, q)
        if payload not in (first, second):
            raise AllocationError(
                f"{name}: myheap_malloc did not reuse either free chunk 0x{first:x} "
                f"or 0x{second:x} (returned 0x{payload:x} instead)"
            )
        q.append((payload, size))
    for payload, _ in q:
        heap.free(payload)


def _simple(heap: Heap, name: str) -> None:
    buckets = 4
    _churn(heap, name, [i * 8 for i in range(buckets)], (i % buckets for i in range(16)))


def _fixedsize(heap: Heap, name: str) -> None:
    buckets = 128
    _churn(heap, name, [256] * buckets, (i % buckets for i in range(16384)))


def _random(heap: Heap, name: str) -> None:
    buckets, iterations, min_size, max_size = 512, 102400, 64, 4096
    rng = random.Random(0x31337)
    sizes = [rng.randrange(max_size - min_size) + min_size for _ in range(buckets)]
    _churn(heap, name, sizes, (rng.randrange(buckets) for _ in range(iterations)))


def _coalesce1(heap: Heap, name: str) -> None:
    size = 333 * 1024
    ptrs: List[Optional[int]] = [None] * 3
    sizes = [size] * 3
    for i in range(3):
        ptrs[i] = _allocate(heap, name, size, zip(ptrs, sizes))

    heap.free(ptrs[1])
    ptrs[1] = None
    heap.free(ptrs[2])
    ptrs[2] = None
    double = _allocate(heap, name, size * 2, zip(ptrs, sizes))

    heap.free(double)
    heap.free(ptrs[0])
    ptrs[0] = None
    triple = _allocate(heap, name, size * 3, zip(ptrs, sizes))
    heap.free(triple)


def _coalesce2(heap: Heap, name: str) -> None:
    count, size = 960, 1024
    rng = random.Random(0x1337)
    ptrs: List[Optional[int]] = [None] * count
    sizes = [size] * count
    for i in range(count):
        ptrs[i] = _allocate(heap, name, size, zip(ptrs, sizes))
    rng.shuffle(ptrs)
    for payload in ptrs:
        heap.free(payload)
    _allocate(heap, name, count * size, ())


@dataclass(frozen=True)
class HeapTest:
    """A named workload and the heap size it runs in."""

    name: str
    heapsize: int
    func: Callable[[Heap, str], None]


TESTS: Tuple[HeapTest, ...] = (
    HeapTest("sanity", 1 * MB, _sanity),
    HeapTest("freelist1", 1 * MB, _freelist1),
    HeapTest("freelist2", 1 * MB, _freelist2),
    HeapTest("simple", 1 * MB, _simple),
    HeapTest("fixedsize", 1 * MB, _fixedsize),
    HeapTest("random", 8 * MB, _random),
    HeapTest("coalesce1", 1 * MB, _coalesce1),
    HeapTest("coalesce2", 1 * MB, _coalesce2),
)


def run_test(test: HeapTest) -> bool:
    """Run one workload on a fresh heap, report the outcome and return whether it passed."""
    try:
        heap = Heap(test.heapsize)
    except ValueError:
        print(f"test {test.name}: failed to allocate heap!", file=sys.stderr)
        return False
    try:
        test.func(heap, test.name)
    except AllocationError as error:
        print(error, file=sys.stderr)
        print(f"test {test.name} failed", file=sys.stderr)
        return False
    print(f"test {test.name} passed!")
    return True


def find_test(name: str) -> HeapTest:
    """Return the workload with the given name; raise KeyError if there is none."""
    for test in TESTS:
        if test.name == name:
            return test
    raise KeyError(name)


def _usage() -> int:
    print("Usage: heapcheck <test|all>", file=sys.stderr)
    print("Available tests (all = run all tests sequentially):", file=sys.stderr)
    for test in TESTS:
        print(f"  {test.name}", file=sys.stderr)
    return 1


def main(argv=None) -> int:
    """Run one named workload, or all of them."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        return _usage()
    name = args[0]
    if name == "all":
        results = [run_test(test) for test in TESTS]
        if all(results):
            print("All tests passed!")
            return 0
        print("Some tests failed.", file=sys.stderr)
        return 1
    try:
        test = find_test(name)
    except KeyError:
        return _usage()
    return 0 if run_test(test) else 1