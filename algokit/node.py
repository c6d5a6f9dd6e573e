"""A search node: runs substring searches and passes messages on to its children."""

from __future__ import annotations

import sys
import time

import zmq

from algokit.kmp import kmp_report
from algokit.topology import CONTROLLER_ID, DEFAULT_PORT, Command, NodeMessage

EXEC_DELAY = 10.0
_LINGER_MS = 500


class Node:
    """How one node of the tree reacts to the messages that reach it."""

    def __init__(self, node_id: int, parent_id: int = CONTROLLER_ID) -> None:
        self.node_id = node_id
        self.parent_id = parent_id

    def handle(self, message: NodeMessage) -> tuple[str | None, NodeMessage | None, bool]:
        """Return what to print, what to pass to the children, and whether to stop."""
        if message.command is Command.EXEC:
            if message.node != self.node_id:
                return None, message, False
            try:
                report = kmp_report(message.text, message.pattern)
            except ValueError:
                report = "-1"
            return f"Ok:{self.node_id}:{report}", None, False
        if message.command is Command.PING:
            return f"Ok:{self.node_id}", message, False
        if message.command is Command.KILL:
            if message.node in (self.node_id, CONTROLLER_ID):
                return f"Ok:{self.node_id}", NodeMessage(Command.KILL, CONTROLLER_ID), True
            return None, message, False
        return None, None, False


def run_node(node_id: int, parent_id: int = CONTROLLER_ID, base_port: int = DEFAULT_PORT) -> None:
    """Serve as a node until a kill message addressed to it arrives."""
    node = Node(node_id, parent_id)
    upstream = base_port if parent_id == CONTROLLER_ID else base_port + parent_id
    context = zmq.Context()
    subscriber = context.socket(zmq.SUB)
    publisher = context.socket(zmq.PUB)
    subscriber.setsockopt(zmq.LINGER, _LINGER_MS)
    publisher.setsockopt(zmq.LINGER, _LINGER_MS)
    try:
        subscriber.connect(f"tcp://localhost:{upstream}")
        subscriber.setsockopt(zmq.SUBSCRIBE, b"")
        publisher.bind(f"tcp://*:{base_port + node_id}")
        while True:
            try:
                message = NodeMessage.unpack(subscriber.recv())
            except ValueError:
                continue
            if message.command is Command.EXEC and message.node == node_id:
                time.sleep(EXEC_DELAY)
            output, forward, stop = node.handle(message)
            if output is not None:
                print(output, flush=True)
            if forward is not None:
                publisher.send(forward.pack())
            if stop:
                break
    finally:
        subscriber.close()
        publisher.close()
        context.term()


def main(argv: list[str] | None = None) -> int:
    """Start a node: 'node NODE_ID PARENT_ID [BASE_PORT]'."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) not in (2, 3):
        print("Syntax: node <node id> <parent id> [base port]", file=sys.stderr)
        return 1
    try:
        numbers = [int(arg) for arg in args]
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1
    base_port = numbers[2] if len(numbers) == 3 else DEFAULT_PORT
    run_node(numbers[0], numbers[1], base_port)
    return 0


if __name__ == "__main__":
    sys.exit(main())