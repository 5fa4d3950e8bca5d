"""A boundary-tag heap allocator working inside a fixed-size byte region.

Addresses are offsets into the region. The first bytes of the region hold
the heap's own header, and blocks follow it. Every block carries a header
and a trailer word holding its size with the in-use flag in the low bit.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterator

HEADER_SIZE = 8
HEAP_HEADER_SIZE = 16
MIN_BLOCK_SIZE = 3 * HEADER_SIZE

_WORD = struct.Struct("<Q")
_HEAP_HEADER = struct.Struct("<qq")


@dataclass(frozen=True)
class Block:
    """One block of the heap: where it starts, its full size and whether it is used."""

    start: int
    size: int
    in_use: bool

    @property
    def payload(self) -> int:
        """Address of the first payload byte."""
        return self.start + HEADER_SIZE

    @property
    def payload_size(self) -> int:
        """Bytes between the header and the trailer."""
        return self.size - 2 * HEADER_SIZE


def _size_to_allocate(user_size: int) -> int:
    """Block size needed for a request, including header and trailer."""
    padded = user_size + HEADER_SIZE - user_size % HEADER_SIZE
    return padded + 2 * HEADER_SIZE


class Heap:
    """A first-fit allocator with splitting and coalescing of free blocks."""

    def __init__(self, size: int) -> None:
        if size < HEAP_HEADER_SIZE + MIN_BLOCK_SIZE:
            raise ValueError(f"heap of {size} bytes is too small")
        if size % HEADER_SIZE:
            raise ValueError(f"heap size must be a multiple of {HEADER_SIZE}")
        self.size = size
        self.start = HEAP_HEADER_SIZE
        self.memory = bytearray(size)
        _HEAP_HEADER.pack_into(self.memory, 0, size - HEAP_HEADER_SIZE, HEAP_HEADER_SIZE)
        self._set_header(self.start, size - HEAP_HEADER_SIZE, False)

    # -- block headers -------------------------------------------------------

    def _word(self, address: int) -> int:
        return _WORD.unpack_from(self.memory, address)[0]

    def _block_size(self, start: int) -> int:
        return self._word(start) & ~1

    def _in_use(self, start: int) -> bool:
        return bool(self._word(start) & 1)

    def _set_header(self, start: int, size: int, in_use: bool) -> None:
        value = size | int(in_use)
        _WORD.pack_into(self.memory, start, value)
        _WORD.pack_into(self.memory, start + size - HEADER_SIZE, value)

    def _next(self, start: int) -> int:
        return start + self._block_size(start)

    def _previous(self, start: int) -> int:
        return start - self._block_size(start - HEADER_SIZE)

    def _is_first(self, start: int) -> bool:
        return start == self.start

    def _is_last(self, start: int) -> bool:
        return self._next(start) == self.size

    def _coalesce(self, first: int) -> int:
        """Join ``first`` with the block after it when both are free."""
        if not self._is_last(first):
            second = self._next(first)
            if not self._in_use(first) and not self._in_use(second):
                self._set_header(
                    first, self._block_size(first) + self._block_size(second), False
                )
        return first

    def _split_and_mark_used(self, start: int, needed: int) -> int:
        block_size = self._block_size(start)
        rest = block_size - needed
        if rest >= MIN_BLOCK_SIZE:
            self._set_header(start + needed, rest, False)
            self._set_header(start, needed, True)
        else:
            self._set_header(start, block_size, True)
        return start + HEADER_SIZE

    # -- public interface ----------------------------------------------------

    def malloc(self, size: int) -> int:
        """Allocate ``size`` bytes and return the payload address.

        Raises MemoryError when no free block is large enough.
        """
        if size < 0:
            raise ValueError("allocation size must not be negative")
        needed = _size_to_allocate(size)
        start = self.start
        while start < self.size:
            if not self._in_use(start) and self._block_size(start) >= needed:
                return self._split_and_mark_used(start, needed)
            start = self._next(start)
        raise MemoryError(f"no free block of {needed} bytes")

    def free(self, payload: int) -> None:
        """Release an allocated payload and merge it with free neighbours."""
        start = payload - HEADER_SIZE
        if not self.start <= start <= self.size - MIN_BLOCK_SIZE:
            raise ValueError(f"address 0x{payload:x} is not an allocated payload")
        header = self._word(start)
        size = header & ~1
        if (
            size < MIN_BLOCK_SIZE
            or start + size > self.size
            or self._word(start + size - HEADER_SIZE) != header
            or not header & 1
        ):
            raise ValueError(f"address 0x{payload:x} is not an allocated payload")

        self._set_header(start, size, False)
        if self._is_first(start):
            self._coalesce(start)
        elif self._is_last(start):
            self._coalesce(self._previous(start))
        else:
            merged = self._coalesce(start)
            self._coalesce(self._previous(merged))

    def blocks(self) -> Iterator[Block]:
        """Yield every block from the front of the heap to the end."""
        start = self.start
        while start < self.size:
            size = self._block_size(start)
            yield Block(start, size, self._in_use(start))
            start += size

    def payload_view(self, payload: int, size: int) -> memoryview:
        """A writable view of ``size`` bytes at ``payload``."""
        if size < 0 or payload < 0 or payload + size > self.size:
            raise ValueError(f"range 0x{payload:x}+{size} lies outside the heap")
        return memoryview(self.memory)[payload:payload + size]