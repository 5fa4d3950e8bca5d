from machlab.trunc import main, string_to_num, truncate


def test_string_to_num_plain():
    assert string_to_num("42") == 42


def test_string_to_num_not_a_number():
    assert string_to_num("apple") == -1
    assert string_to_num("") == -1
    assert string_to_num("-") == -1


def test_string_to_num_leading_part():
    assert string_to_num("12abc") == 12
    assert string_to_num("  7") == 7


def test_truncate_example():
    words, largest = truncate(["3", "hello", "2", "world"])
    assert words == ["hel", "wo"]
    assert largest == 3


def test_truncated_words_are_prefixes():
    args = ["1", "alpha", "10", "beta", "0", "gamma", "4"]
    words, largest = truncate(args)
    names = [a for a in args if string_to_num(a) < 0]
    lengths = [string_to_num(a) for a in args if string_to_num(a) >= 0]
    assert len(words) == min(len(names), len(lengths))
    for word, name, length in zip(words, names, lengths):
        assert name.startswith(word)
        assert len(word) == min(len(name), length)
    assert largest == max(lengths)


def test_no_numbers_gives_zero_maximum():
    words, largest = truncate(["only", "words"])
    assert words == []
    assert largest == 0


def test_empty_input():
    assert truncate([]) == ([], 0)


def test_main_prints_words_then_maximum(capsys):
    assert main(["2", "abc", "5"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["ab", "5"]