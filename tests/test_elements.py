import pytest

from machlab.elements import (
    IntElement,
    StrElement,
    compare_elements,
    main,
    parse_string,
    sort_elements,
)


@pytest.mark.parametrize("text, value", [("12", 12), ("-4", -4), ("+5", 5), (" 7", 7)])
def test_parse_integers(text, value):
    assert parse_string(text) == IntElement(value)


@pytest.mark.parametrize("text", ["abc", "", "-", "12x", " ", "1 2"])
def test_parse_strings(text):
    assert parse_string(text) == StrElement(text)


def test_int_compare():
    assert IntElement(1).compare(IntElement(2)) < 0
    assert IntElement(2).compare(IntElement(1)) > 0
    assert IntElement(3).compare(IntElement(3)) == 0


def test_str_compare():
    assert StrElement("a").compare(StrElement("b")) < 0
    assert StrElement("b").compare(StrElement("a")) > 0
    assert StrElement("same").compare(StrElement("same")) == 0


def test_ints_order_before_strings():
    assert IntElement(99).compare(StrElement("a")) < 0
    assert StrElement("a").compare(IntElement(99)) > 0


def test_compare_elements_is_antisymmetric():
    items = [IntElement(-1), IntElement(3), StrElement("a"), StrElement("b")]
    for first in items:
        for second in items:
            assert compare_elements(first, second) == -compare_elements(second, first)


def test_sort_mixed():
    elements = [parse_string(t) for t in ["b", "3", "a", "-1"]]
    assert sort_elements(elements) == [
        IntElement(-1),
        IntElement(3),
        StrElement("a"),
        StrElement("b"),
    ]


def test_str_of_elements():
    assert str(IntElement(42)) == "42"
    assert str(StrElement("Hello, World!")) == "Hello, World!"


def test_main_prints_sorted(capsys):
    assert main(["b", "2", "a", "1"]) == 0
    assert capsys.readouterr().out == "Sorted: 1 2 a b \n"


def test_main_without_arguments(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "Sorted: \n"