"""Chained integer division of space-separated numbers, one expression per line."""

from __future__ import annotations

import sys
from collections.abc import Iterator

_DIGITS = "0123456789"


class InvalidCharacterError(ValueError):
    """Raised when an expression holds something other than digits and spaces."""


def evaluate_line(line: str) -> int:
    """Divide the first number on the line by each following number in turn.

    Numbers are separated by single spaces. A divisor that is zero or missing
    (two spaces in a row, a trailing space) raises ZeroDivisionError. An empty
    line evaluates to 0.
    """
    result = 0
    divisor = 0
    first = True
    for char in line:
        if char in _DIGITS:
            if first:
                result = result * 10 + int(char)
            else:
                divisor = divisor * 10 + int(char)
        elif char == " ":
            if divisor == 0:
                if not first:
                    raise ZeroDivisionError("Division by zero!")
                first = False
            else:
                result //= divisor
                divisor = 0
        else:
            raise InvalidCharacterError(f"Invalid character: {char!r}")
    if divisor:
        result //= divisor
    elif not first:
        raise ZeroDivisionError("Division by zero!")
    return result


def evaluate_text(text: str) -> Iterator[int]:
    """Yield the result of every line of text, including a final empty line."""
    for line in text.split("\n"):
        yield evaluate_line(line)


def main(argv: list[str] | None = None) -> int:
    """Evaluate the expressions on standard input and print one result per line."""
    try:
        for value in evaluate_text(sys.stdin.read()):
            print(value)
    except ZeroDivisionError:
        sys.stdout.flush()
        print("Division by zero!", file=sys.stderr)
        return 1
    except InvalidCharacterError:
        sys.stdout.flush()
        print("Invalid character!", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())