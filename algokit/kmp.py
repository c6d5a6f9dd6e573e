"""Substring search with the Knuth-Morris-Pratt algorithm."""

from __future__ import annotations


def prefix_function(pattern: str) -> list[int]:
    """Return, for each prefix of pattern, the length of its longest proper border."""
    prefix = [0] * len(pattern)
    length = 0
    for i in range(1, len(pattern)):
        while length and pattern[i] != pattern[length]:
            length = prefix[length - 1]
        if pattern[i] == pattern[length]:
            length += 1
        prefix[i] = length
    return prefix


def kmp_search(text: str, pattern: str) -> list[int]:
    """Return the start of every occurrence of pattern in text, overlaps included."""
    if not pattern:
        raise ValueError("pattern must not be empty")
    prefix = prefix_function(pattern)
    positions: list[int] = []
    matched = 0
    for i, char in enumerate(text):
        while matched and char != pattern[matched]:
            matched = prefix[matched - 1]
        if char == pattern[matched]:
            matched += 1
        if matched == len(pattern):
            positions.append(i - matched + 1)
            matched = prefix[matched - 1]
    return positions


def kmp_report(text: str, pattern: str) -> str:
    """Return the match positions joined by ';', or '-1' when there are none."""
    positions = kmp_search(text, pattern)
    return ";".join(map(str, positions)) if positions else "-1"