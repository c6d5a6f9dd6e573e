"""Division calculator whose child process hands results back through shared memory."""

from __future__ import annotations

import mmap
import os
import struct
import subprocess
import sys
import tempfile
import time
from collections.abc import Iterator
from pathlib import Path

SEGMENT_SIZE = 4096
DIVISION_BY_ZERO = "Division by 0"

_STATE = struct.Struct("<i")
_PAYLOAD = struct.Struct("<iq")  # kind, value
_VALUE_READY = 0
_CHILD_TURN = 1
_FINISHED = 2
_KIND_VALUE = 0
_KIND_ZERO_DIVISION = 1
_POLL_INTERVAL = 0.0005
_DIGITS = "0123456789"


def evaluate_stream(text: str) -> Iterator[int]:
    """Yield the result of each newline-terminated expression in text.

    Only digits, spaces and newlines matter; other characters are ignored.
    A line holding a single number yields 0. An unterminated final line is
    reported only when it ends in a non-zero divisor. A zero divisor raises
    ZeroDivisionError and ends the stream. At most SEGMENT_SIZE characters
    are read.
    """
    result = 0
    divisor = 0
    first = True
    for char in text[:SEGMENT_SIZE]:
        if char in _DIGITS:
            divisor = divisor * 10 + int(char)
        elif char == " ":
            if divisor == 0:
                if not first:
                    raise ZeroDivisionError(DIVISION_BY_ZERO)
                first = False
            else:
                result = divisor if first else result // divisor
                divisor = 0
                first = False
        elif char == "\n":
            if divisor:
                result //= divisor
            elif not first:
                raise ZeroDivisionError(DIVISION_BY_ZERO)
            yield result
            result, divisor, first = 0, 0, True
    if divisor:
        yield result // divisor


def _state(shared: mmap.mmap) -> int:
    return _STATE.unpack_from(shared, 0)[0]


def _wait_turn(shared: mmap.mmap) -> None:
    while _state(shared) != _CHILD_TURN:
        time.sleep(_POLL_INTERVAL)


def _publish(shared: mmap.mmap, kind: int, value: int) -> None:
    _wait_turn(shared)
    _PAYLOAD.pack_into(shared, _STATE.size, kind, value)
    _STATE.pack_into(shared, 0, _VALUE_READY)


def _serve(segment: str, text: str) -> None:
    with open(segment, "r+b") as handle, mmap.mmap(handle.fileno(), SEGMENT_SIZE) as shared:
        try:
            for value in evaluate_stream(text):
                _publish(shared, _KIND_VALUE, value)
        except ZeroDivisionError:
            _publish(shared, _KIND_ZERO_DIVISION, 0)
        _wait_turn(shared)
        _STATE.pack_into(shared, 0, _FINISHED)


def _child_env() -> dict[str, str]:
    env = dict(os.environ)
    root = str(Path(__file__).resolve().parent.parent)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [root, env.get("PYTHONPATH")]))
    return env


def _collect(shared: mmap.mmap, child: subprocess.Popen) -> Iterator[str]:
    while True:
        state = _state(shared)
        if state == _FINISHED:
            return
        if state == _VALUE_READY:
            kind, value = _PAYLOAD.unpack_from(shared, _STATE.size)
            yield DIVISION_BY_ZERO if kind == _KIND_ZERO_DIVISION else str(value)
            _STATE.pack_into(shared, 0, _CHILD_TURN)
        elif child.poll() is not None and _state(shared) == _CHILD_TURN:
            raise ChildProcessError(
                f"calculator exited with status {child.returncode} before finishing"
            )
        else:
            time.sleep(_POLL_INTERVAL)


def run_shared(path: str) -> Iterator[str]:
    """Evaluate the file at path in a child process; yield each printed line."""
    with open(path, "rb") as source:
        descriptor, segment = tempfile.mkstemp(prefix="shmcalc-")
        try:
            with os.fdopen(descriptor, "r+b") as handle:
                handle.truncate(SEGMENT_SIZE)
                with mmap.mmap(handle.fileno(), SEGMENT_SIZE) as shared:
                    _STATE.pack_into(shared, 0, _CHILD_TURN)
                    child = subprocess.Popen(
                        [sys.executable, "-m", "algokit.shmcalc", "--child", segment],
                        stdin=source,
                        env=_child_env(),
                    )
                    try:
                        yield from _collect(shared, child)
                    finally:
                        if child.poll() is None:
                            child.kill()
                        child.wait()
        finally:
            os.unlink(segment)


def main(argv: list[str] | None = None) -> int:
    """Ask for a file name and print its results, or serve as the child with --child."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) == 2 and args[0] == "--child":
        _serve(args[1], sys.stdin.read())
        return 0
    print("Enter file name: ", end="", flush=True)
    words = sys.stdin.readline().split()
    if not words:
        print("Error read filename", file=sys.stderr)
        return 1
    try:
        for line in run_shared(words[0]):
            print(line)
    except OSError as error:
        print(f"Error opening file: {error}", file=sys.stderr)
        return 1
    except ChildProcessError as error:
        print(error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())