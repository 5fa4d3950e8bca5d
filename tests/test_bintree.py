import pytest

from machlab.bintree import Node, build, main, report


def test_in_order_is_sorted():
    values = [7, 3, 9, 1, 5, 8, 10, 3]
    root, _ = build(values)
    assert list(root.in_order()) == sorted(values)


def test_equal_values_go_left():
    root, last = build([5, 5])
    assert root.left is last
    assert root.right is None
    assert last.parent is root


def test_insert_sets_parent():
    root = Node(10)
    child = Node(20)
    root.insert(child)
    assert root.right is child
    assert child.parent is root


def test_path_directions():
    root, last = build([5, 3, 8, 4])
    assert last.path() == ["from root: 5", "left to: 3", "right to: 4"]


def test_root_path_has_one_line():
    root, last = build([2])
    assert root is last
    assert root.path() == ["from root: 2"]


def test_build_empty_raises():
    with pytest.raises(ValueError):
        build([])


def test_report_layout():
    lines = report([5, 3, 8, 1])
    assert lines[0] == "In Order:"
    assert lines[1:5] == ["1", "3", "5", "8"]
    assert lines[5] == "Path to 1:"
    assert lines[6:] == ["from root: 5", "left to: 3", "left to: 1"]


def test_report_empty():
    assert report([]) == []


def test_main_parses_arguments(capsys):
    assert main(["4", "x", "2"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[:4] == ["In Order:", "0", "2", "4"]
    assert out[4] == "Path to 2:"


def test_main_without_arguments_prints_nothing(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == ""