"""Conversion of numbers between positional bases 2 to 36."""

from __future__ import annotations

import re
import sys

ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_DIGIT_VALUES = {char: index for index, char in enumerate(ALPHABET)}
_DECIMAL_PREFIX = re.compile(r"\s*[+-]?\d+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def to_decimal(digits: str, base: int) -> int:
    """Read digits written in base.

    Base 10 reads a leading signed integer and ignores what follows it.
    Other bases sum digit values; characters outside 0-9a-z count as zero.
    """
    if base == 10:
        match = _DECIMAL_PREFIX.match(digits)
        if match is None:
            raise ValueError(f"invalid decimal number: {digits!r}")
        value = int(match.group())
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise OverflowError(f"decimal number out of range: {digits!r}")
        return value
    return sum(
        _DIGIT_VALUES.get(char, 0) * base**position
        for position, char in enumerate(reversed(digits))
    )


def from_decimal(number: int, base: int) -> str:
    """Write a non-negative number in base, using lower-case letters above 9."""
    if not 2 <= base <= len(ALPHABET):
        raise ValueError(f"base must be between 2 and {len(ALPHABET)}: {base}")
    if number < 0:
        raise ValueError(f"number must not be negative: {number}")
    digits = []
    while number:
        number, remainder = divmod(number, base)
        digits.append(ALPHABET[remainder])
    return "".join(reversed(digits)) or "0"


def convert(digits: str, from_base: int, to_base: int) -> str:
    """Rewrite digits from one base in another."""
    return from_decimal(to_decimal(digits, from_base), to_base)


def main(argv: list[str] | None = None) -> int:
    """Read 'from to number' from standard input and print the converted number."""
    tokens = sys.stdin.read().split()
    if len(tokens) < 3:
        print("expected: <from base> <to base> <number>", file=sys.stderr)
        return 1
    try:
        result = convert(tokens[2], int(tokens[0]), int(tokens[1]))
    except (ValueError, OverflowError) as error:
        print(error, file=sys.stderr)
        return 1
    sys.stdout.write(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())