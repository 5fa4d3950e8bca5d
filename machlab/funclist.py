"""A list with map, filter, fold and for-each operations."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, List, Optional


class FuncList:
    """A growable sequence whose higher-order operations return new lists."""

    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._items: List[Any] = list(items)

    def append(self, item: Any) -> None:
        """Add an item at the end."""
        self._items.append(item)

    def extend(self, items: Iterable[Any]) -> None:
        """Add every item of an iterable at the end, in order."""
        self._items.extend(items)

    def insert(self, pos: int, item: Any) -> None:
        """Insert an item at position ``pos`` (0..len), shifting later items along."""
        if not 0 <= pos <= len(self._items):
            raise IndexError(f"insert position {pos} out of range")
        self._items.insert(pos, item)

    def remove(self, pos: int) -> None:
        """Remove the item at position ``pos`` (0..len-1)."""
        if not 0 <= pos < len(self._items):
            raise IndexError(f"remove position {pos} out of range")
        del self._items[pos]

    def __getitem__(self, pos: int) -> Any:
        return self._items[pos]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"FuncList({self._items!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FuncList):
            return self._items == other._items
        return NotImplemented

    def index(self, item: Any, equal: Optional[Callable[[Any, Any], bool]] = None) -> int:
        """Return the position of the first element equal to ``item``.

        ``equal`` decides equality; by default ``==`` is used.
        Raises ValueError when there is no such element.
        """
        same = equal if equal is not None else (lambda a, b: a == b)
        for position, element in enumerate(self._items):
            if same(element, item):
                return position
        raise ValueError(f"{item!r} is not in the list")

    def map1(self, f: Callable[[Any], Any]) -> "FuncList":
        """Return a new list of ``f(item)`` for every item."""
        return FuncList(f(item) for item in self._items)

    def map2(self, f: Callable[[Any, Any], Any], other: Iterable[Any]) -> "FuncList":
        """Return ``f(a, b)`` for pairs of items; as long as the shorter input."""
        return FuncList(f(a, b) for a, b in zip(self._items, other))

    def foldl(self, f: Callable[[Any, Any], Any], initial: Any) -> Any:
        """Fold from the left: ``f(...f(f(initial, x0), x1)..., xn)``."""
        accumulator = initial
        for item in self._items:
            accumulator = f(accumulator, item)
        return accumulator

    def filter(self, f: Callable[[Any], Any]) -> "FuncList":
        """Return a new list of the items for which ``f`` is true."""
        return FuncList(item for item in self._items if f(item))

    def foreach(self, f: Callable[[Any], Any]) -> None:
        """Call ``f`` on every item in order."""
        for item in self._items:
            f(item)


def demo() -> List[str]:
    """Run the filter, map and fold walk-through and return its output lines."""
    first = FuncList(range(1, 12))
    second = FuncList(range(11, 0, -1))

    lines: List[str] = []
    evens = first.filter(lambda value: not value & 1)
    lines.append("filter:")
    evens.foreach(lambda value: lines.append(str(value)))

    incremented = first.map1(lambda value: value + 1)
    lines.append("map1:")
    incremented.foreach(lambda value: lines.append(str(value)))

    sums = incremented.map2(lambda a, b: a + b, evens)
    lines.append("map2:")
    sums.foreach(lambda value: lines.append(str(value)))

    total = sums.foldl(lambda a, b: a + b, 0)
    lines.append(f"fold: {total}")
    del second
    return lines