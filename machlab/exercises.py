"""Small exercises: sorting, bit counting, a jump-table selection and a name list."""

from __future__ import annotations

import re
import sys
from typing import Iterable, List, Optional

MAX_NAMES = 10

PRIME_MINISTERS = (
    "John Alexander Macdonald",
    "Alexander Mackenzie",
    "John Joseph Caldwell Abbott",
    "John Sparrow David Thompson",
    "Mackenzie Bowell",
    "Charles Tupper",
    "Henri Charles Wilfrid Laurier",
    "Robert Laird Borden",
    "Arthur Meighen",
    "William Lyon Mackenzie King",
)

_WHOLE_NUMBER = re.compile(r"[ \t\n\r\f\v]*([+-]?[0-9]+)?")


def _s32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def bubble_sort(values: Iterable[int]) -> List[int]:
    """Return the values in ascending order."""
    return sorted(values)


def count_ones(value: int) -> int:
    """Count the set bits of a value taken as a 32-bit word."""
    return bin(value & 0xFFFFFFFF).count("1")


def select_op(x: int, y: int, z: int) -> int:
    """Pick an operation on y and z by the value of x (10..18); 0 otherwise."""
    if x < 10 or x > 18:
        return 0
    case = x - 10
    if case == 0:
        return _s32(y + z)
    if case == 2:
        return _s32(y - z)
    if case == 4:
        return int(y > z)
    if case == 6:
        return int(z > y)
    if case == 8:
        return int(y == z)
    return 0


def number_names(names: Iterable[str]) -> List[str]:
    """Number the names from 1, one line each; at most MAX_NAMES names."""
    names = list(names)
    if len(names) > MAX_NAMES:
        raise ValueError(f"at most {MAX_NAMES} names fit in the list")
    return [f"Name {number}: {name}" for number, name in enumerate(names, 1)]


def _parse_whole(text: str) -> Optional[int]:
    match = _WHOLE_NUMBER.match(text)
    digits = match.group(1)
    if digits is None:
        return 0 if text == "" else None
    if match.end() != len(text):
        return None
    return _s32(int(digits))


def sort_main(argv=None) -> int:
    """Sort the integer arguments and print one per line."""
    args = sys.argv[1:] if argv is None else list(argv)
    values = []
    for position, arg in enumerate(args):
        value = _parse_whole(arg)
        if value is None:
            print(f"Argument {position} is not a number", file=sys.stderr)
            return 1
        values.append(value)
    for value in bubble_sort(values):
        print(value)
    return 0