"""
Exceptions raised while building or querying an ancestor table.

Construction errors (EmptyTree, InvalidRoot, MalformedTree) are raised
before any table exists; query errors (IndexOutOfRange) are raised per call
and leave the table untouched.
"""

from typing import Sequence


class LCAError(Exception):
    """Base class for all ancestor-table errors."""


class EmptyTree(LCAError):
    """The tree input has no vertices."""

    def __str__(self):
        return "Cannot build an ancestor table for a tree with 0 vertices"


class InvalidRoot(LCAError, ValueError):
    """Root is not a vertex index in [0, n)."""

    def __init__(self, root, n: int):
        self.root = root
        self.n = n
        super().__init__(root, n)

    def __str__(self):
        return f"Invalid root {self.root!r}: expected a vertex in [0, {self.n})"


class MalformedTree(LCAError):
    """
    The tree input is not a single connected, acyclic component.

    `unreached` lists vertices the traversal from root never reached
    (empty when the failure was a cycle or a bad neighbour index).
    """

    def __init__(self, reason: str, unreached: Sequence[int] = ()):
        self.reason = reason
        self.unreached = tuple(unreached)
        super().__init__(reason)

    def __str__(self):
        return f"Malformed tree: {self.reason}"


class IndexOutOfRange(LCAError, IndexError):
    """Query vertex is not an index in [0, n)."""

    def __init__(self, vertex, n: int):
        self.vertex = vertex
        self.n = n
        super().__init__(vertex, n)

    def __str__(self):
        return f"Vertex {self.vertex!r} out of range [0, {self.n})"
