import pytest

from algokit.kmp import kmp_report, kmp_search, prefix_function


def test_search_finds_overlapping_matches():
    assert kmp_search("abababa", "aba") == [0, 2, 4]


def test_report_joins_positions():
    assert kmp_report("abababa", "aba") == "0;2;4"


def test_report_without_match():
    assert kmp_report("hello", "xyz") == "-1"
    assert kmp_report("ab", "abc") == "-1"


@pytest.mark.parametrize(
    "text, pattern",
    [("aaaaa", "aa"), ("mississippi", "issi"), ("abcabcabd", "abcabd"), ("xyz", "xyz")],
)
def test_every_position_is_a_match(text, pattern):
    positions = kmp_search(text, pattern)
    assert positions
    assert all(text.startswith(pattern, position) for position in positions)
    assert positions == sorted(set(positions))


def test_report_matches_search():
    text, pattern = "mississippi", "ss"
    assert kmp_report(text, pattern).split(";") == [str(p) for p in kmp_search(text, pattern)]


def test_whole_text_match_starts_at_zero():
    assert kmp_search("needle", "needle") == [0]


@pytest.mark.parametrize("pattern", ["aabaaab", "abcab", "aaaa", "abacaba"])
def test_prefix_function_values_are_borders(pattern):
    prefix = prefix_function(pattern)
    assert len(prefix) == len(pattern)
    assert prefix[0] == 0
    for i, border in enumerate(prefix):
        assert border <= i
        assert pattern[:border] == pattern[i - border + 1:i + 1]


def test_prefix_function_of_empty_pattern():
    assert prefix_function("") == []


def test_empty_pattern_is_rejected():
    with pytest.raises(ValueError):
        kmp_search("text", "")