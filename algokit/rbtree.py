"""Red-black tree dictionary keyed by strings, with a binary file format and a command loop."""

from __future__ import annotations

import string
import struct
import sys
from collections.abc import Iterator
from typing import BinaryIO, TextIO

RED = True
BLACK = False

_U64 = struct.Struct("<Q")
_U64_LIMIT = 1 << 64
_TERMINATOR = _U64_LIMIT - 1
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def compare_keys(x: str, y: str) -> int:
    """Order keys by length first, then character by character; return -1, 0 or 1."""
    if len(x) != len(y):
        return 1 if len(x) > len(y) else -1
    if x == y:
        return 0
    return 1 if x > y else -1


class _Node:
    __slots__ = ("key", "value", "color", "parent", "left", "right")

    def __init__(self, key: str = "", value: int = 0, color: bool = BLACK) -> None:
        self.key = key
        self.value = value
        self.color = color
        self.parent: _Node | None = None
        self.left: _Node = self
        self.right: _Node = self


class RBTree:
    """A red-black tree mapping string keys to unsigned 64-bit values."""

    def __init__(self) -> None:
        self._nil = _Node()
        self._root = self._nil
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._find(key) is not self._nil

    def _find(self, key: str) -> _Node:
        current = self._root
        while current is not self._nil:
            order = compare_keys(current.key, key)
            if order > 0:
                current = current.left
            elif order < 0:
                current = current.right
            else:
                return current
        return self._nil

    def _rotate_left(self, x: _Node) -> None:
        y = x.right
        x.right = y.left
        if y.left is not self._nil:
            y.left.parent = x
        y.parent = x.parent
        if x.parent is None:
            self._root = y
        elif x is x.parent.left:
            x.parent.left = y
        else:
            x.parent.right = y
        y.left = x
        x.parent = y

    def _rotate_right(self, x: _Node) -> None:
        y = x.left
        x.left = y.right
        if y.right is not self._nil:
            y.right.parent = x
        y.parent = x.parent
        if x.parent is None:
            self._root = y
        elif x is x.parent.right:
            x.parent.right = y
        else:
            x.parent.left = y
        y.right = x
        x.parent = y

    def _minimum(self, node: _Node) -> _Node:
        while node.left is not self._nil:
            node = node.left
        return node

    def _fix_insert(self, x: _Node) -> None:
        while x.parent is not None and x.parent.color == RED:
            parent = x.parent
            grand = parent.parent
            if parent is grand.left:
                uncle = grand.right
                if uncle.color == RED:
                    uncle.color = BLACK
                    parent.color = BLACK
                    grand.color = RED
                    x = grand
                else:
                    if x is parent.right:
                        x = parent
                        self._rotate_left(x)
                    x.parent.color = BLACK
                    x.parent.parent.color = RED
                    self._rotate_right(x.parent.parent)
            else:
                uncle = grand.left
                if uncle.color == RED:
                    uncle.color = BLACK
                    parent.color = BLACK
                    grand.color = RED
                    x = grand
                else:
                    if x is parent.left:
                        x = parent
                        self._rotate_right(x)
                    x.parent.color = BLACK
                    x.parent.parent.color = RED
                    self._rotate_left(x.parent.parent)
        self._root.color = BLACK

    def _fix_delete(self, x: _Node) -> None:
        while x is not self._root and x.color == BLACK:
            if x is x.parent.left:
                sibling = x.parent.right
                if sibling.color == RED:
                    sibling.color = BLACK
                    x.parent.color = RED
                    self._rotate_left(x.parent)
                    sibling = x.parent.right
                if sibling.left.color == BLACK and sibling.right.color == BLACK:
                    sibling.color = RED
                    x = x.parent
                else:
                    if sibling.right.color == BLACK:
                        sibling.left.color = BLACK
                        sibling.color = RED
                        self._rotate_right(sibling)
                        sibling = x.parent.right
                    sibling.color = x.parent.color
                    x.parent.color = BLACK
                    sibling.right.color = BLACK
                    self._rotate_left(x.parent)
                    x = self._root
            else:
                sibling = x.parent.left
                if sibling.color == RED:
                    sibling.color = BLACK
                    x.parent.color = RED
                    self._rotate_right(x.parent)
                    sibling = x.parent.left
                if sibling.right.color == BLACK and sibling.left.color == BLACK:
                    sibling.color = RED
                    x = x.parent
                else:
                    if sibling.left.color == BLACK:
                        sibling.right.color = BLACK
                        sibling.color = RED
                        self._rotate_left(sibling)
                        sibling = x.parent.left
                    sibling.color = x.parent.color
                    x.parent.color = BLACK
                    sibling.left.color = BLACK
                    self._rotate_right(x.parent)
                    x = self._root
        x.color = BLACK

    def _replace(self, old: _Node, new: _Node) -> None:
        if old.parent is None:
            self._root = new
        elif old is old.parent.left:
            old.parent.left = new
        else:
            old.parent.right = new

    def insert(self, key: str, value: int) -> bool:
        """Add a key; return False, changing nothing, if it is already present."""
        nil = self._nil
        current = self._root
        parent: _Node | None = None
        while current is not nil:
            parent = current
            order = compare_keys(current.key, key)
            if order > 0:
                current = current.left
            elif order < 0:
                current = current.right
            else:
                return False

        node = _Node(key, value, RED)
        node.left = nil
        node.right = nil
        node.parent = parent
        if parent is None:
            self._root = node
        elif compare_keys(key, parent.key) > 0:
            parent.right = node
        else:
            parent.left = node
        self._size += 1

        if parent is None:
            node.color = BLACK
        elif parent.parent is not None:
            self._fix_insert(node)
        return True

    def delete(self, key: str) -> None:
        """Remove a key; raise KeyError if it is absent."""
        nil = self._nil
        removed = self._find(key)
        if removed is nil:
            raise KeyError(key)

        removed_color = removed.color
        if removed.left is nil:
            fix = removed.right
            self._replace(removed, removed.right)
            removed.right.parent = removed.parent
        elif removed.right is nil:
            fix = removed.left
            self._replace(removed, removed.left)
            removed.left.parent = removed.parent
        else:
            successor = self._minimum(removed.right)
            removed_color = successor.color
            fix = successor.right
            if successor.parent is removed:
                fix.parent = successor
            else:
                self._replace(successor, successor.right)
                successor.right.parent = successor.parent
                successor.right = removed.right
                successor.right.parent = successor
            self._replace(removed, successor)
            successor.parent = removed.parent
            successor.left = removed.left
            successor.left.parent = successor
            successor.color = removed.color

        self._size -= 1
        if removed_color == BLACK:
            self._fix_delete(fix)

    def get(self, key: str) -> int:
        """Return the value stored under key; raise KeyError if it is absent."""
        node = self._find(key)
        if node is self._nil:
            raise KeyError(key)
        return node.value

    def clear(self) -> None:
        """Remove every entry."""
        self._root = self._nil
        self._nil.parent = None
        self._size = 0

    def items(self) -> Iterator[tuple[str, int]]:
        """Yield (key, value) pairs in key order."""
        stack: list[_Node] = []
        node = self._root
        while stack or node is not self._nil:
            while node is not self._nil:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.key, node.value
            node = node.right

    def _preorder(self) -> Iterator[_Node]:
        stack = [self._root] if self._root is not self._nil else []
        while stack:
            node = stack.pop()
            yield node
            if node.right is not self._nil:
                stack.append(node.right)
            if node.left is not self._nil:
                stack.append(node.left)

    def describe(self) -> str:
        """Render the tree structure: 'level key value color' per node, then '--key--' after its subtree."""
        lines: list[str] = []

        def walk(node: _Node, level: int) -> None:
            if node is self._nil:
                return
            lines.append(f"{level} {node.key} {node.value} {int(node.color)}")
            walk(node.left, level + 1)
            walk(node.right, level + 1)
            lines.append(f"--{node.key}--")

        walk(self._root, 0)
        return "".join(line + "\n" for line in lines)

    def dump(self, stream: BinaryIO) -> None:
        """Write every entry in pre-order followed by the terminator record."""
        for node in self._preorder():
            encoded = node.key.encode("utf-8")
            stream.write(_U64.pack(len(encoded)) + encoded + _U64.pack(node.value))
        stream.write(_U64.pack(_TERMINATOR))

    def save(self, path: str) -> None:
        """Write the tree to a binary file."""
        with open(path, "wb") as stream:
            self.dump(stream)

    def load(self, path: str) -> None:
        """Replace the contents with those of a binary file written by save."""
        with open(path, "rb") as stream:
            data = stream.read()
        self.clear()
        if not data:
            return
        view = memoryview(data)
        offset = 0

        def take(count: int) -> bytes:
            nonlocal offset
            if offset + count > len(view):
                raise ValueError("Truncated dictionary file")
            chunk = bytes(view[offset:offset + count])
            offset += count
            return chunk

        while True:
            (length,) = _U64.unpack(take(_U64.size))
            if length == _TERMINATOR:
                break
            key = take(length).decode("utf-8")
            (value,) = _U64.unpack(take(_U64.size))
            self.insert(key, value)


def _lower(word: str) -> str:
    return word.translate(_ASCII_LOWER)


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def _parse_value(raw: str) -> int:
    value = int(raw)
    if value >= _U64_LIMIT:
        raise ValueError(raw)
    return value % _U64_LIMIT


def run(stream: TextIO, out: TextIO, tree: RBTree | None = None) -> RBTree:
    """Execute dictionary commands read from stream, writing the answers to out."""
    if tree is None:
        tree = RBTree()
    tokens = _tokens(stream)
    for command in tokens:
        try:
            if command == "+":
                key = next(tokens)
                value = _parse_value(next(tokens))
                inserted = tree.insert(_lower(key), value)
                out.write("OK\n" if inserted else "Exist\n")
            elif command == "-":
                key = _lower(next(tokens))
                try:
                    tree.delete(key)
                except KeyError:
                    out.write("NoSuchWord\n")
                else:
                    out.write("OK\n")
            elif command == "!":
                action = next(tokens)
                if action == "Save":
                    path = next(tokens)
                    try:
                        tree.save(path)
                    except OSError:
                        out.write("ERROR: Unable to open file for writing\n")
                    else:
                        out.write("OK\n")
                elif action == "Load":
                    path = next(tokens)
                    try:
                        tree.load(path)
                    except OSError:
                        out.write("ERROR: Unable to open file for reading\n")
                    except ValueError as error:
                        out.write(f"ERROR: {error}\n")
                    else:
                        out.write("OK\n")
            else:
                try:
                    out.write(f"OK: {tree.get(_lower(command))}\n")
                except KeyError:
                    out.write("NoSuchWord\n")
        except (StopIteration, ValueError):
            break
        except MemoryError:
            out.write("ERROR: Not enough memory\n")
    return tree


def main(argv: list[str] | None = None) -> int:
    """Run the dictionary command loop on standard input."""
    run(sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())