"""Two interchangeable implementations of prime counting and integer sorting."""

from __future__ import annotations

import math
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from algokit.sieve import sieve


def count_primes_naive(a: int, b: int) -> int:
    """Count primes in [a, b] by trial division."""
    return sum(
        1
        for i in range(max(a, 2), b + 1)
        if all(i % j for j in range(2, math.isqrt(i) + 1))
    )


def count_primes_sieve(a: int, b: int) -> int:
    """Count primes in [a, b] with a sieve of Eratosthenes."""
    if b < 2 or a > b:
        return 0
    return sum(sieve(b)[max(a, 0):b + 1])


def bubble_sort(values: Iterable[int]) -> list[int]:
    """Return the values in ascending order, sorted by bubble sort."""
    items = list(values)
    for done in range(len(items) - 1):
        for j in range(len(items) - done - 1):
            if items[j] > items[j + 1]:
                items[j], items[j + 1] = items[j + 1], items[j]
    return items


def _partition(items: list[int], low: int, high: int) -> int:
    pivot = items[low]
    left, right = low + 1, high
    while True:
        while left <= right and items[left] < pivot:
            left += 1
        while right >= left and items[right] > pivot:
            right -= 1
        if left <= right:
            items[left], items[right] = items[right], items[left]
            left += 1
            right -= 1
        else:
            break
    items[low], items[right] = items[right], items[low]
    return right


def quick_sort(values: Iterable[int]) -> list[int]:
    """Return the values in ascending order, sorted by quicksort."""
    items = list(values)
    pending = [(0, len(items) - 1)]
    while pending:
        low, high = pending.pop()
        if low < high:
            pivot = _partition(items, low, high)
            pending.append((low, pivot - 1))
            pending.append((pivot + 1, high))
    return items


@dataclass(frozen=True)
class Implementation:
    """A matching pair of prime-counting and sorting functions."""

    name: str
    count_primes: Callable[[int, int], int]
    sort: Callable[[Iterable[int]], list[int]]


_IMPLEMENTATIONS = {
    1: Implementation("trial division and bubble sort", count_primes_naive, bubble_sort),
    2: Implementation("sieve and quicksort", count_primes_sieve, quick_sort),
}


def get_implementation(number: int) -> Implementation:
    """Return implementation 1 or 2."""
    try:
        return _IMPLEMENTATIONS[number]
    except KeyError:
        raise ValueError("Error enter 1 or 2 to args") from None


def main(argv: list[str] | None = None) -> int:
    """Run 'function' with implementation 1, or 'library function'; read input from stdin."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) not in (1, 2):
        print("Syntax: mathlib [library(1/2)] function(1/2)")
        return 1
    try:
        numbers = [int(arg) for arg in args]
        implementation = get_implementation(numbers[0] if len(numbers) == 2 else 1)
    except ValueError as error:
        print(error)
        return 1
    function = numbers[-1]
    tokens = iter(sys.stdin.read().split())
    try:
        if function == 1:
            print("Enter the interval: ", end="")
            a, b = int(next(tokens)), int(next(tokens))
            print(f"Count of prime numbers: {implementation.count_primes(a, b)}")
        elif function == 2:
            print("Enter the length of array: ", end="")
            length = int(next(tokens))
            print(f"Enter {length} numbers of array: ", end="")
            values = [int(next(tokens)) for _ in range(length)]
            ordered = implementation.sort(values)
            print("\nSorted array: " + "".join(f"{value} " for value in ordered), end="")
    except (StopIteration, ValueError):
        print("\ninvalid input", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())