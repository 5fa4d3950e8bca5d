"""A doubly linked list of elements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional


@dataclass(eq=False)
class Node:
    """One link of a list, holding an element and its neighbours."""

    element: Any
    prev: Optional["Node"] = None
    next: Optional["Node"] = None
    owner: Optional["LinkedList"] = field(default=None, repr=False)


class LinkedList:
    """A doubly linked list that hands out its nodes for removal."""

    def __init__(self) -> None:
        self.head: Optional[Node] = None
        self.tail: Optional[Node] = None
        self._length = 0

    def append(self, element: Any) -> Node:
        """Add an element at the end and return its node."""
        node = Node(element, prev=self.tail, owner=self)
        if self.tail is None:
            self.head = node
        else:
            self.tail.next = node
        self.tail = node
        self._length += 1
        return node

    def remove(self, node: Node) -> None:
        """Unlink a node of this list; raise ValueError for a node of another list."""
        if node.owner is not self:
            raise ValueError("node does not belong to this list")
        if node is self.head:
            self.head = node.next
        else:
            node.prev.next = node.next
        if node is self.tail:
            self.tail = node.prev
        else:
            node.next.prev = node.prev
        node.prev = node.next = None
        node.owner = None
        self._length -= 1

    def clear(self) -> None:
        """Remove every node."""
        for node in list(self.nodes()):
            self.remove(node)

    def nodes(self) -> Iterator[Node]:
        """Yield the nodes from head to tail."""
        node = self.head
        while node is not None:
            following = node.next
            yield node
            node = following

    def __iter__(self) -> Iterator[Any]:
        return (node.element for node in self.nodes())

    def __len__(self) -> int:
        return self._length