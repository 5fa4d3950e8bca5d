"""Integer and string elements with a shared ordering, and a small sorting command."""

from __future__ import annotations

import re
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, List

_INTEGER = re.compile(r"[ \t\n\r\f\v]*([+-]?[0-9]+)")
_LONG_MIN = -(1 << 63)
_LONG_MAX = (1 << 63) - 1


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Element(ABC):
    """A value that can be printed and ordered against any other element.

    Integer elements always order before string elements.
    """

    value: object

    @abstractmethod
    def compare(self, other: "Element") -> int:
        """Return a negative number, zero or a positive number as self is less, equal or greater."""

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class IntElement(Element):
    """An element holding an integer."""

    value: int

    def compare(self, other: Element) -> int:
        if isinstance(other, IntElement):
            return _sign(self.value - other.value)
        return -1


@dataclass(frozen=True)
class StrElement(Element):
    """An element holding a string."""

    value: str

    def compare(self, other: Element) -> int:
        if isinstance(other, StrElement):
            return (self.value > other.value) - (self.value < other.value)
        return 1


def parse_string(text: str) -> Element:
    """Return an IntElement if the whole text is a decimal integer, else a StrElement."""
    match = _INTEGER.fullmatch(text)
    if match is None:
        return StrElement(text)
    value = max(_LONG_MIN, min(_LONG_MAX, int(match.group(1))))
    return IntElement(_to_int32(value))


def compare_elements(first: Element, second: Element) -> int:
    """Order two elements: integers by value, strings lexically, integers before strings."""
    return first.compare(second)


def sort_elements(elements: Iterable[Element]) -> List[Element]:
    """Return the elements in ascending order."""
    return sorted(elements, key=cmp_to_key(compare_elements))


def main(argv=None) -> int:
    """Parse the arguments as elements and print them sorted."""
    args = sys.argv[1:] if argv is None else list(argv)
    ordered = sort_elements(parse_string(arg) for arg in args)
    print("Sorted: " + "".join(f"{element} " for element in ordered))
    return 0