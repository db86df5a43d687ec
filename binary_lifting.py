"""
Binary Lifting Implementation for O(log n) LCA Queries

This module provides:
- AncestorTableBuilder: one BFS pass from the root that fills the depth
  array and the power-of-two jump table
- AncestorTable: the immutable index, answering lca(u, v) in O(log n)
- O(n log n) preprocessing time and space

jump_table[i][v] holds the ancestor 2^i steps above v, or None when v has
fewer than 2^i ancestors. Level 0 is the direct parent.
"""

import logging
import time
from collections import deque
from typing import Dict, List, Optional, Tuple

import numpy as np

from lca_errors import EmptyTree, IndexOutOfRange, InvalidRoot, MalformedTree
from tree_input import TreeInput

logger = logging.getLogger(__name__)

# Number of unreached vertices quoted in a MalformedTree message
_SAMPLE_SIZE = 10


def num_levels(n: int) -> int:
    """Base 2 logarithm of n rounded up; 0 when n <= 1."""
    levels = 0
    span = 1
    while span < n:
        span *= 2
        levels += 1
    return levels


def _is_vertex(v, n: int) -> bool:
    return (isinstance(v, (int, np.integer)) and not isinstance(v, (bool, np.bool_))
            and 0 <= v < n)


class AncestorTable:
    """
    Depth array + binary-lifting jump table for one rooted tree.

    Preprocessing: O(n log n) (see AncestorTableBuilder)
    Query: O(log n)

    Instances are never mutated after construction, so one table can be
    shared by any number of readers.
    """

    __slots__ = ('_root', '_depth', '_jump_table')

    def __init__(self, root: int, depth: np.ndarray,
                 jump_table: Tuple[Tuple[Optional[int], ...], ...]):
        self._root = root
        self._depth = depth
        self._jump_table = jump_table

    @property
    def n(self) -> int:
        return len(self._depth)

    @property
    def root(self) -> int:
        return self._root

    @property
    def levels(self) -> int:
        return len(self._jump_table)

    @property
    def depth(self) -> np.ndarray:
        """Read-only depth array, depth[root] == 0."""
        return self._depth

    @property
    def jump_table(self) -> Tuple[Tuple[Optional[int], ...], ...]:
        return self._jump_table

    def _check(self, v):
        if not _is_vertex(v, self.n):
            raise IndexOutOfRange(v, self.n)

    def _lift(self, v: Optional[int], k: int) -> Optional[int]:
        """Jump upwards k steps from v, one table lookup per set bit of k."""
        for i in range(self.levels - 1, -1, -1):
            if v is None:
                break
            if k & (1 << i):
                v = self._jump_table[i][v]
        return v

    def get_depth(self, v: int) -> int:
        """Get depth of a vertex."""
        self._check(v)
        return int(self._depth[v])

    def parent(self, v: int) -> Optional[int]:
        """Direct parent of v, None for the root."""
        self._check(v)
        if self.levels == 0:
            return None
        return self._jump_table[0][v]

    def kth_ancestor(self, v: int, k: int) -> Optional[int]:
        """
        Ancestor k steps above v.

        Args:
            v: Vertex
            k: Number of steps, k >= 0

        Returns:
            The ancestor, v itself when k == 0, None when k > depth(v)
        """
        self._check(v)
        if not isinstance(k, (int, np.integer)) or isinstance(k, (bool, np.bool_)):
            raise TypeError(f"Ancestor distance must be an integer, got {k!r}")
        if k < 0:
            raise ValueError(f"Ancestor distance must be non-negative, got {k}")
        if k > self._depth[v]:
            return None
        return self._lift(v, k)

    def query(self, u: int, v: int) -> int:
        """
        Find Lowest Common Ancestor of vertices u and v in O(log n) time.

        Args:
            u: First vertex
            v: Second vertex

        Returns:
            LCA vertex
        """
        self._check(u)
        self._check(v)
        depth = self._depth
        jump = self._jump_table

        # Bring the deeper vertex up to the depth of the shallower one
        if depth[u] > depth[v]:
            u, v = v, u
        v = self._lift(v, int(depth[v] - depth[u]))

        # One was an ancestor of the other
        if u == v:
            logger.debug(f"lca resolved by depth equalization: {u}")
            return int(u)

        # Binary search for the highest pair of distinct ancestors
        for i in range(self.levels - 1, -1, -1):
            pu = jump[i][u]
            pv = jump[i][v]
            if pu is not None and pv is not None and pu != pv:
                u = pu
                v = pv

        w = jump[0][u]
        logger.debug(f"lca resolved by binary search: {w}")
        return w

    lca = query

    def is_ancestor(self, a: int, v: int) -> bool:
        """True if a lies on the path from the root to v (a vertex is its own ancestor)."""
        self._check(a)
        self._check(v)
        if self._depth[a] > self._depth[v]:
            return False
        return self._lift(v, int(self._depth[v] - self._depth[a])) == a

    def path_length(self, u: int, v: int) -> int:
        """
        Number of edges on the path between u and v.

        Path length = depth(u) + depth(v) - 2 * depth(lca(u, v))
        """
        w = self.query(u, v)
        return int(self._depth[u] + self._depth[v] - 2 * self._depth[w])

    def stats(self) -> Dict:
        """Get statistics about the ancestor table."""
        return {
            'num_nodes': self.n,
            'root': self._root,
            'levels': self.levels,
            'max_depth': int(self._depth.max()),
            'avg_depth': float(self._depth.mean()),
        }

    def __repr__(self):
        return f"AncestorTable(n={self.n}, root={self._root}, levels={self.levels})"


class AncestorTableBuilder:
    """
    One-shot preprocessing pass producing an AncestorTable.

    Algorithm:
    1. Validate the vertex count and root
    2. BFS from the root with an explicit queue; when a vertex is discovered
       its parent is already final, so its whole jump-table column can be
       filled immediately from the parent's column
    3. Reject the input if the traversal met a cycle or missed any vertex

    Total: O(n log n)
    """

    def build(self, tree: TreeInput, root: int) -> AncestorTable:
        """
        Build the depth array and jump table for `tree` rooted at `root`.

        Args:
            tree: Symmetric adjacency over n vertices forming one tree
            root: Root vertex

        Returns:
            Immutable AncestorTable

        Raises:
            EmptyTree: the tree has no vertices
            InvalidRoot: root is not in [0, n)
            MalformedTree: the input is disconnected, has a cycle reachable
                from root, or lists a neighbour outside [0, n)
        """
        start_time = time.time()

        n = tree.vertex_count()
        if n == 0:
            raise EmptyTree()
        if not _is_vertex(root, n):
            raise InvalidRoot(root, n)
        root = int(root)

        levels = num_levels(n)
        depth: List[Optional[int]] = [None] * n
        parent: List[Optional[int]] = [None] * n
        jump: List[List[Optional[int]]] = [[None] * n for _ in range(levels)]

        depth[root] = 0
        queue = deque([root])
        while queue:
            u = queue.popleft()
            self._explore(tree, u, depth, parent, jump, queue)

        unreached = [v for v in range(n) if depth[v] is None]
        if unreached:
            sample = ', '.join(str(v) for v in unreached[:_SAMPLE_SIZE])
            if len(unreached) > _SAMPLE_SIZE:
                sample += ', ...'
            raise MalformedTree(
                f"{len(unreached)} of {n} vertices unreachable from root {root} ({sample})",
                unreached,
            )

        depth_array = np.array(depth, dtype=np.int64)
        depth_array.flags.writeable = False
        table = AncestorTable(root, depth_array, tuple(tuple(row) for row in jump))

        logger.info(f"Built ancestor table: {n} vertices, {levels} levels, "
                    f"max depth {int(depth_array.max())} "
                    f"in {(time.time() - start_time) * 1000:.2f}ms")
        return table

    @staticmethod
    def _explore(tree: TreeInput, u: int,
                 depth: List[Optional[int]],
                 parent: List[Optional[int]],
                 jump: List[List[Optional[int]]],
                 queue: deque):
        """Discover the unvisited neighbours of u and fill their columns."""
        n = len(depth)
        for v in tree.neighbors(u):
            if not _is_vertex(v, n):
                raise MalformedTree(f"vertex {u} lists neighbour {v!r} outside [0, {n})")
            v = int(v)

            if depth[v] is not None:
                if v != parent[u]:
                    raise MalformedTree(f"edge ({u}, {v}) closes a cycle reachable from the root")
                continue

            depth[v] = depth[u] + 1
            parent[v] = u
            if jump:
                jump[0][v] = u
            for i in range(1, len(jump)):
                ancestor = jump[i - 1][v]
                jump[i][v] = None if ancestor is None else jump[i - 1][ancestor]
            queue.append(v)


def build(tree: TreeInput, root: int) -> AncestorTable:
    """Build an AncestorTable for `tree` rooted at `root`."""
    return AncestorTableBuilder().build(tree, root)
