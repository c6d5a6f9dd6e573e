"""Sieve of Eratosthenes."""

from __future__ import annotations

import math
import sys

DEFAULT_LIMIT = 5_000_000


def sieve(limit: int) -> bytearray:
    """Return flags for 0..limit where flags[i] is 1 exactly when i is prime."""
    if limit < 1:
        raise ValueError(f"limit must be at least 1: {limit}")
    flags = bytearray([1]) * (limit + 1)
    flags[0] = flags[1] = 0
    for i in range(2, math.isqrt(limit) + 1):
        if flags[i]:
            start = i * i
            flags[start::i] = bytes(len(range(start, limit + 1, i)))
    return flags


def main(argv: list[str] | None = None) -> int:
    """Sieve up to the default limit and print whether 13 is prime."""
    sys.stdout.write(str(sieve(DEFAULT_LIMIT)[13]))
    return 0


if __name__ == "__main__":
    sys.exit(main())