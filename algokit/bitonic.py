"""Bitonic sort, with chunks sorted on worker threads and then merged."""

from __future__ import annotations

import random
import sys
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor


def is_power_of_two(x: int) -> bool:
    """Return True when x is a positive power of two."""
    return x > 0 and x & (x - 1) == 0


def compare_and_swap(values: list[int], i: int, j: int, ascending: bool) -> None:
    """Swap values[i] and values[j] if they are out of the requested order."""
    if (values[i] > values[j]) if ascending else (values[i] < values[j]):
        values[i], values[j] = values[j], values[i]


def bitonic_merge(values: list[int], start: int, size: int, ascending: bool) -> None:
    """Sort the bitonic run values[start:start + size] in place."""
    if size > 1:
        half = size // 2
        for i in range(start, start + half):
            compare_and_swap(values, i, i + half, ascending)
        bitonic_merge(values, start, half, ascending)
        bitonic_merge(values, start + half, half, ascending)


def bitonic_sort(values: list[int], start: int, size: int, ascending: bool) -> None:
    """Sort values[start:start + size] in place; size must be a power of two."""
    if size > 1:
        half = size // 2
        bitonic_sort(values, start, half, True)
        bitonic_sort(values, start + half, half, False)
        bitonic_merge(values, start, size, ascending)


def parallel_bitonic_sort(values: Iterable[int], threads: int) -> list[int]:
    """Return the values in ascending order, sorting equal chunks on separate threads.

    The number of values and of threads must both be powers of two; the thread
    count is capped at the number of values.
    """
    items = list(values)
    size = len(items)
    if not is_power_of_two(size):
        raise ValueError("Size must be power of 2")
    if not is_power_of_two(threads):
        raise ValueError("Number of threads must be power of 2")
    threads = min(threads, size)
    chunk = size // threads

    with ThreadPoolExecutor(max_workers=threads) as pool:
        futures = [
            pool.submit(bitonic_sort, items, index * chunk, chunk, index % 2 == 0)
            for index in range(threads)
        ]
        for future in futures:
            future.result()

    width = chunk * 2
    while width <= size:
        for position, start in enumerate(range(0, size, width)):
            bitonic_merge(items, start, width, position % 2 == 0)
        width *= 2
    return items


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def main(argv: list[str] | None = None) -> int:
    """Sort random numbers: 'bitonic SIZE THREADS'; print the time it took."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        print("Syntax: bitonic <size of array> <max number of threads>")
        return 1
    size, threads = _to_int(args[0]), _to_int(args[1])
    if not is_power_of_two(size):
        print("Size must be power of 2")
        return 1
    values = [random.randrange(100) for _ in range(size)]
    started = time.perf_counter()
    try:
        parallel_bitonic_sort(values, threads)
    except ValueError as error:
        print(error)
        return 1
    print(f"Execution Time: {time.perf_counter() - started:f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())