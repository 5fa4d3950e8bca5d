"""Put command-line elements on a list and some of them on a tree, then report both."""

from __future__ import annotations

import itertools
import sys
from typing import Callable, Iterable, List, Optional

from machlab.elements import IntElement, StrElement, parse_string
from machlab.elementtree import ElementTree
from machlab.linkedlist import LinkedList


def alternate() -> Callable[[], bool]:
    """Return a selector that answers True, False, True, ... on successive calls."""
    counter = itertools.count(1)
    return lambda: next(counter) % 2 == 1


def run(args: Iterable[str], include: Optional[Callable[[], bool]] = None) -> List[str]:
    """Build the list and tree from the arguments and return the report lines."""
    if include is None:
        include = alternate()
    lines = [str(IntElement(42)), str(StrElement("Hello, World!"))]

    tree = ElementTree()
    items = LinkedList()
    for arg in args:
        items.append(parse_string(arg))

    for element in items:
        if include():
            tree.insert(element)
    lines.append("Tree:")
    lines.extend(tree.render())

    ints = "".join(f" {e.value}" for e in items if isinstance(e, IntElement))
    lines.append("List ints:" + ints)
    strings = "".join(f" {e.value}" for e in items if isinstance(e, StrElement))
    lines.append("List strings:" + strings)

    items.clear()
    lines.append("Tree after deleting list:")
    lines.extend(tree.render())
    tree.clear()
    return lines


def main(argv=None) -> int:
    """Print the report for the command-line arguments."""
    args = sys.argv[1:] if argv is None else list(argv)
    for line in run(args):
        print(line)
    return 0