"""
Tree Input - Adjacency structures consumed by the ancestor table builder

This module provides:
- TreeInput protocol (vertex_count / neighbors)
- AdjacencyTree, a read-only symmetric adjacency list
- Constructors from edge lists and {parent: [children]} mappings
- Edge-list file parsing for the command line

The builder only borrows a TreeInput for the duration of the build; nothing
here validates connectivity or acyclicity (the builder does that during its
traversal).
"""

import logging
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

logger = logging.getLogger(__name__)


class TreeInput(Protocol):
    """Capability the builder needs from a tree."""

    def vertex_count(self) -> int:
        ...

    def neighbors(self, v: int) -> Sequence[int]:
        ...


class AdjacencyTree:
    """
    Undirected adjacency lists over dense vertex indices [0, n).

    Neighbour lists are frozen into tuples on construction, so the structure
    can be handed to any number of builds without being modified.
    """

    def __init__(self, adjacency: Sequence[Iterable[int]]):
        self._adjacency: Tuple[Tuple[int, ...], ...] = tuple(
            tuple(neighbors) for neighbors in adjacency
        )

    def vertex_count(self) -> int:
        return len(self._adjacency)

    def neighbors(self, v: int) -> Sequence[int]:
        return self._adjacency[v]

    def edge_count(self) -> int:
        """Number of undirected edges (each stored twice)."""
        return sum(len(nbrs) for nbrs in self._adjacency) // 2

    def __len__(self):
        return len(self._adjacency)

    def __repr__(self):
        return f"AdjacencyTree(n={self.vertex_count()}, edges={self.edge_count()})"


def from_edges(edges: Iterable[Tuple[int, int]], n: Optional[int] = None) -> AdjacencyTree:
    """
    Build a symmetric adjacency tree from undirected edges.

    Args:
        edges: (u, v) pairs
        n: Vertex count; defaults to the largest index seen plus one

    Returns:
        AdjacencyTree over n vertices
    """
    edges = [(int(u), int(v)) for u, v in edges]
    for u, v in edges:
        if u < 0 or v < 0:
            raise ValueError(f"Negative vertex index in edge ({u}, {v})")

    if n is None:
        n = max((max(u, v) for u, v in edges), default=-1) + 1
    elif edges and max(max(u, v) for u, v in edges) >= n:
        raise ValueError(f"Edge references a vertex outside [0, {n})")

    adjacency: List[List[int]] = [[] for _ in range(n)]
    for u, v in edges:
        adjacency[u].append(v)
        adjacency[v].append(u)

    return AdjacencyTree(adjacency)


def from_children(children: Dict[int, Iterable[int]], n: Optional[int] = None) -> AdjacencyTree:
    """
    Build an adjacency tree from a {parent_id: [child_ids]} mapping.

    Args:
        children: Parent to children mapping
        n: Vertex count; defaults to the largest index seen plus one

    Returns:
        AdjacencyTree over n vertices
    """
    edges = [(parent, child) for parent, kids in children.items() for child in kids]
    if n is None and children:
        # childless keys still count as vertices
        n = max(max(children), max((max(u, v) for u, v in edges), default=-1)) + 1
    return from_edges(edges, n)


def read_edge_list(path: str) -> AdjacencyTree:
    """
    Read an edge-list file into an adjacency tree.

    Format: one "u v" pair per line. Blank lines and anything after '#' are
    ignored. An optional "n <count>" line sets the vertex count, which is
    needed for single-vertex trees or trailing isolated vertices.

    Args:
        path: Path to the edge-list file

    Returns:
        AdjacencyTree built from the file
    """
    edges = []
    n = None

    with open(path, 'r') as f:
        for lineno, line in enumerate(f, 1):
            line = line.split('#', 1)[0].strip()
            if not line:
                continue

            fields = line.split()
            try:
                if fields[0] == 'n' and len(fields) == 2:
                    n = int(fields[1])
                elif len(fields) == 2:
                    edges.append((int(fields[0]), int(fields[1])))
                else:
                    raise ValueError(line)
            except ValueError:
                raise ValueError(f"{path}:{lineno}: expected 'u v' or 'n <count>', got {line!r}")

    logger.info(f"Read {len(edges)} edges from {path}")
    return from_edges(edges, n)
