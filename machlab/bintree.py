"""An integer binary search tree whose nodes know their parents."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

_INTEGER = re.compile(r"[ \t\n\r\f\v]*([+-]?[0-9]+)")


def _atoi(text: str) -> int:
    match = _INTEGER.match(text)
    if match is None:
        return 0
    value = int(match.group(1)) & 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


@dataclass(eq=False)
class Node:
    """A tree node holding an integer; smaller or equal values go left."""

    value: int
    left: Optional["Node"] = None
    right: Optional["Node"] = None
    parent: Optional["Node"] = None

    def insert(self, node: "Node") -> None:
        """Insert ``node`` into the tree rooted at this node."""
        current = self
        while True:
            if node.value <= current.value:
                if current.left is None:
                    current.left = node
                    break
                current = current.left
            else:
                if current.right is None:
                    current.right = node
                    break
                current = current.right
        node.parent = current

    def in_order(self) -> Iterator[int]:
        """Yield the values of this subtree in ascending order."""
        stack: List[Node] = []
        current: Optional[Node] = self
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.left
            current = stack.pop()
            yield current.value
            current = current.right

    def path(self) -> List[str]:
        """Describe the path from the root to this node, one line per step."""
        steps: List[Node] = []
        node: Optional[Node] = self
        while node is not None:
            steps.append(node)
            node = node.parent
        lines = []
        for step in reversed(steps):
            if step.parent is None:
                label = "from root"
            elif step.parent.left is step:
                label = "left to"
            else:
                label = "right to"
            lines.append(f"{label}: {step.value}")
        return lines


def build(values: Iterable[int]) -> Tuple[Node, Node]:
    """Build a tree from the values in order; return the root and the last node inserted."""
    root: Optional[Node] = None
    last: Optional[Node] = None
    for value in values:
        node = Node(value)
        if root is None:
            root = node
        else:
            root.insert(node)
        last = node
    if root is None or last is None:
        raise ValueError("no values to build a tree from")
    return root, last


def report(values: Iterable[int]) -> List[str]:
    """The sorted values and the path to the last value, or nothing for no values."""
    values = list(values)
    if not values:
        return []
    root, last = build(values)
    lines = ["In Order:"]
    lines.extend(str(value) for value in root.in_order())
    lines.append(f"Path to {last.value}:")
    lines.extend(last.path())
    return lines


def main(argv=None) -> int:
    """Build a tree from the integer arguments and print the report."""
    args = sys.argv[1:] if argv is None else list(argv)
    for line in report(_atoi(arg) for arg in args):
        print(line)
    return 0