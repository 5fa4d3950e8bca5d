"""Truncate the word arguments to the lengths given by the number arguments."""

from __future__ import annotations

import re
import sys
from typing import Iterable, List, Tuple

from machlab.funclist import FuncList

_NUMBER = re.compile(r"[ \t\n\r\f\v]*([+-]?[0-9]+)")
_LONG_MIN = -(1 << 63)
_LONG_MAX = (1 << 63) - 1


def _s32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def string_to_num(text: str) -> int:
    """Parse a leading decimal number; return -1 when the text starts with none."""
    match = _NUMBER.match(text)
    if match is None:
        return -1
    return max(_LONG_MIN, min(_LONG_MAX, int(match.group(1))))


def truncate(words: Iterable[str]) -> Tuple[List[str], int]:
    """Cut each non-numeric word to the length of the matching non-negative number.

    Returns the truncated words and the largest number seen (at least 0).
    """
    texts = FuncList(words)
    numbers = texts.map1(string_to_num)
    flagged = texts.map2(lambda word, number: word if number < 0 else None, numbers)
    lengths = numbers.filter(lambda number: number >= 0)
    names = flagged.filter(lambda word: word is not None)
    truncated = names.map2(lambda word, length: word[:length], lengths)
    largest = numbers.foldl(lambda a, b: a if a > b else b, 0)
    return list(truncated), largest


def main(argv=None) -> int:
    """Print the truncated words, then the largest number."""
    args = sys.argv[1:] if argv is None else list(argv)
    words, largest = truncate(args)
    for word in words:
        print(word)
    print(_s32(largest))
    return 0