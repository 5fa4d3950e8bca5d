import pytest

from machlab.linkedlist import LinkedList


def _filled(items):
    lst = LinkedList()
    nodes = [lst.append(item) for item in items]
    return lst, nodes


def test_append_keeps_order():
    lst, _ = _filled(["a", "b", "c"])
    assert list(lst) == ["a", "b", "c"]
    assert len(lst) == 3


def test_links_are_consistent():
    lst, nodes = _filled([1, 2, 3])
    assert lst.head is nodes[0]
    assert lst.tail is nodes[2]
    assert nodes[1].prev is nodes[0]
    assert nodes[1].next is nodes[2]
    assert nodes[0].prev is None
    assert nodes[2].next is None


@pytest.mark.parametrize("index, rest", [(0, [2, 3]), (1, [1, 3]), (2, [1, 2])])
def test_remove(index, rest):
    lst, nodes = _filled([1, 2, 3])
    lst.remove(nodes[index])
    assert list(lst) == rest
    assert len(lst) == 2
    assert [n.element for n in lst.nodes()] == rest
    assert lst.head.prev is None
    assert lst.tail.next is None


def test_remove_only_node_empties_list():
    lst, nodes = _filled(["x"])
    lst.remove(nodes[0])
    assert lst.head is None
    assert lst.tail is None
    assert len(lst) == 0


def test_remove_foreign_node_raises():
    first, _ = _filled([1])
    _, other_nodes = _filled([2])
    with pytest.raises(ValueError):
        first.remove(other_nodes[0])


def test_remove_twice_raises():
    lst, nodes = _filled([1, 2])
    lst.remove(nodes[0])
    with pytest.raises(ValueError):
        lst.remove(nodes[0])


def test_clear():
    lst, _ = _filled([1, 2, 3])
    lst.clear()
    assert list(lst) == []
    assert len(lst) == 0
    lst.append(4)
    assert list(lst) == [4]