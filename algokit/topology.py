"""Controller for a tree of search nodes linked by publish/subscribe sockets."""

from __future__ import annotations

import os
import struct
import subprocess
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import TextIO

import zmq

DEFAULT_PORT = 4040
CONTROLLER_ID = -1
FIELD_SIZE = 256

_LAYOUT = struct.Struct(f"<{FIELD_SIZE}s{FIELD_SIZE}sii")
_LINGER_MS = 500


class Command(IntEnum):
    """What a message asks a node to do."""

    EXEC = 1
    PING = 2
    KILL = 3


def _encode(text: str) -> bytes:
    encoded = text.encode("utf-8")
    if len(encoded) >= FIELD_SIZE:
        raise ValueError(f"string longer than {FIELD_SIZE - 1} bytes: {text!r}")
    return encoded


def _decode(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


@dataclass(frozen=True)
class NodeMessage:
    """A fixed-size message passed down the node tree."""

    command: Command
    node: int = 0
    text: str = ""
    pattern: str = ""

    def pack(self) -> bytes:
        """Encode as two NUL-padded strings followed by the command and node numbers."""
        try:
            return _LAYOUT.pack(
                _encode(self.text), _encode(self.pattern), int(self.command), self.node
            )
        except struct.error as error:
            raise ValueError(f"cannot encode message: {error}") from error

    @classmethod
    def unpack(cls, data: bytes) -> NodeMessage:
        """Decode a message produced by pack."""
        if len(data) != _LAYOUT.size:
            raise ValueError(f"message must be {_LAYOUT.size} bytes, got {len(data)}")
        text, pattern, command, node = _LAYOUT.unpack(data)
        return cls(Command(command), node, _decode(text), _decode(pattern))


class Topology:
    """The set of live nodes and the parent of each one; the controller is node -1."""

    def __init__(self) -> None:
        self._nodes: dict[int, None] = {CONTROLLER_ID: None}
        self._relations: list[tuple[int, int]] = []

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def create(self, node: int, parent: int) -> None:
        """Add node under parent; ValueError if it exists, KeyError if parent does not."""
        if node in self._nodes:
            raise ValueError("Already exists")
        if parent not in self._nodes:
            raise KeyError(parent)
        self._relations.append((parent, node))
        self._nodes[node] = None

    def kill(self, node: int) -> list[int]:
        """Remove node and its direct children; return the removed ids."""
        if node not in self._nodes:
            raise KeyError(node)
        del self._nodes[node]
        removed = [node]
        for parent, child in self._relations:
            if parent == node and child in self._nodes:
                del self._nodes[child]
                removed.append(child)
        self._relations = [
            (parent, child) for parent, child in self._relations if child != node
        ]
        return removed

    def nodes(self) -> list[int]:
        """Return the live node ids in creation order."""
        return list(self._nodes)


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def _say(out: TextIO, text: str) -> None:
    out.write(text + "\n")
    out.flush()


def _child_env() -> dict[str, str]:
    env = dict(os.environ)
    root = str(Path(__file__).resolve().parent.parent)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [root, env.get("PYTHONPATH")]))
    return env


def _spawn(node: int, parent: int, port: int) -> subprocess.Popen:
    return subprocess.Popen(
        [sys.executable, "-m", "algokit.node", str(node), str(parent), str(port)],
        env=_child_env(),
    )


def run_controller(stream: TextIO, out: TextIO, port: int = DEFAULT_PORT) -> Topology:
    """Read controller commands from stream, publish them on port; return the final topology."""
    topology = Topology()
    children: list[subprocess.Popen] = []
    context = zmq.Context()
    publisher = context.socket(zmq.PUB)
    publisher.setsockopt(zmq.LINGER, _LINGER_MS)
    try:
        publisher.bind(f"tcp://*:{port}")
        tokens = _tokens(stream)
        for command in tokens:
            try:
                if command == "exec":
                    node = int(next(tokens))
                    if node not in topology:
                        _say(out, f"Error:{node}: Not found")
                        continue
                    text, pattern = next(tokens), next(tokens)
                    try:
                        payload = NodeMessage(Command.EXEC, node, text, pattern).pack()
                    except ValueError as error:
                        _say(out, f"Error: {error}")
                        continue
                    publisher.send(payload)
                elif command == "create":
                    node = int(next(tokens))
                    if node in topology:
                        _say(out, "Error: Already exists")
                        continue
                    parent = int(next(tokens))
                    if parent not in topology:
                        _say(out, "Error: Parent not found")
                        continue
                    topology.create(node, parent)
                    try:
                        child = _spawn(node, parent, port)
                    except OSError:
                        topology.kill(node)
                        _say(out, "Error in executing new node")
                        continue
                    children.append(child)
                    _say(out, f"OK: {child.pid}")
                elif command == "pingall":
                    publisher.send(NodeMessage(Command.PING).pack())
                elif command == "kill":
                    node = int(next(tokens))
                    if node not in topology:
                        _say(out, "ID not found")
                        continue
                    publisher.send(NodeMessage(Command.KILL, node).pack())
                    topology.kill(node)
                    if node == CONTROLLER_ID:
                        _say(out, "Programm stopped")
                        break
            except (StopIteration, ValueError):
                break
    finally:
        publisher.close()
        context.term()
    return topology


def main(argv: list[str] | None = None) -> int:
    """Run the controller on standard input: 'topology [port]'."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1:
        print("Syntax: topology [port]", file=sys.stderr)
        return 1
    try:
        port = int(args[0]) if args else DEFAULT_PORT
    except ValueError:
        print(f"invalid port: {args[0]}", file=sys.stderr)
        return 1
    run_controller(sys.stdin, sys.stdout, port)
    return 0


if __name__ == "__main__":
    sys.exit(main())