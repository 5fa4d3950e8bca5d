"""An unbalanced binary search tree of elements."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from machlab.elements import Element


@dataclass(eq=False)
class _TreeNode:
    element: Element
    left: Optional["_TreeNode"] = None
    right: Optional["_TreeNode"] = None


class ElementTree:
    """Elements ordered by their compare method; equal elements go to the left."""

    def __init__(self) -> None:
        self._root: Optional[_TreeNode] = None

    def insert(self, element: Element) -> _TreeNode:
        """Insert an element and return the node that holds it."""
        node = _TreeNode(element)
        if self._root is None:
            self._root = node
            return node
        current = self._root
        while True:
            if element.compare(current.element) <= 0:
                if current.left is None:
                    current.left = node
                    return node
                current = current.left
            else:
                if current.right is None:
                    current.right = node
                    return node
                current = current.right

    def preorder(self) -> Iterator[Tuple[int, Element]]:
        """Yield (depth, element) in depth-first order: node, left subtree, right subtree."""
        stack: List[Tuple[int, _TreeNode]] = []
        if self._root is not None:
            stack.append((0, self._root))
        while stack:
            depth, node = stack.pop()
            yield depth, node.element
            if node.right is not None:
                stack.append((depth + 1, node.right))
            if node.left is not None:
                stack.append((depth + 1, node.left))

    def render(self) -> List[str]:
        """One line per element, indented by one space per level of depth."""
        return [" " * depth + str(element) for depth, element in self.preorder()]

    def clear(self) -> None:
        """Remove every element."""
        self._root = None