"""Validated graph model shared by every algorithm.

A :class:`Graph` is a vertex count plus an immutable multiset of directed
:class:`Edge` records. It is rebuilt for every call from a raw description
(``vertex_count`` and a list of ``[from, to]`` / ``[from, to, weight]``
entries) by :func:`build_graph`, and then materialized into whichever
adjacency structure an algorithm needs.

Edge handling rules:
  - Entries with fewer than two endpoints (or a ``None`` endpoint) are
    skipped with a warning.
  - An endpoint outside ``[0, vertex_count)`` is a validation error.
  - Self-loops are kept in :attr:`Graph.edges` but excluded from every
    adjacency structure, so they never influence a result.
  - Duplicate edges: unweighted structures de-duplicate neighbors; in
    :meth:`Graph.weighted_adjacency` the last duplicate wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from graphkit.logging import get_logger
from graphkit.types.base import DEFAULT_WEIGHT, ErrorKind, Weight
from graphkit.types.result import fail

_logger = get_logger(__name__)


@dataclass(frozen=True)
class Edge:
    """Directed edge ``src -> dst`` with an integer weight or capacity."""

    src: int
    dst: int
    weight: Weight = DEFAULT_WEIGHT

    @property
    def is_self_loop(self) -> bool:
        return self.src == self.dst


@dataclass(frozen=True)
class Graph:
    """Immutable vertex count plus edge multiset.

    Attributes:
        vertex_count: Number of vertices; vertices are ``0 .. vertex_count-1``.
        edges: Edges in input order (after skipping incomplete entries).
    """

    vertex_count: int
    edges: Tuple[Edge, ...] = ()

    def __len__(self) -> int:
        return self.vertex_count

    def vertices(self) -> range:
        return range(self.vertex_count)

    def undirected_adjacency(
        self, collapse_parallel: bool = True
    ) -> List[List[Tuple[int, int]]]:
        """Return undirected adjacency with edge identities.

        Each vertex maps to a list of ``(neighbor, edge_id)`` in ascending
        neighbor order; both directions of an edge share one ``edge_id``.

        Args:
            collapse_parallel: If True, repeated unordered pairs (in either
                direction) become a single edge. If False, every entry is a
                distinct edge, as in a multigraph.

        Returns:
            Adjacency list indexed by vertex.
        """
        adjacency: List[List[Tuple[int, int]]] = [[] for _ in self.vertices()]
        seen: Set[Tuple[int, int]] = set()
        edge_id = 0
        for edge in self.edges:
            if edge.is_self_loop:
                continue
            pair = (min(edge.src, edge.dst), max(edge.src, edge.dst))
            if collapse_parallel:
                if pair in seen:
                    continue
                seen.add(pair)
            adjacency[edge.src].append((edge.dst, edge_id))
            adjacency[edge.dst].append((edge.src, edge_id))
            edge_id += 1
        for neighbors in adjacency:
            neighbors.sort()
        return adjacency

    def neighbor_sets(self) -> List[Set[int]]:
        """Return symmetric, de-duplicated neighbor sets without self-loops."""
        neighbors: List[Set[int]] = [set() for _ in self.vertices()]
        for edge in self.edges:
            if edge.is_self_loop:
                continue
            neighbors[edge.src].add(edge.dst)
            neighbors[edge.dst].add(edge.src)
        return neighbors

    def weighted_adjacency(self) -> List[Dict[int, Weight]]:
        """Return directed adjacency ``dst -> weight`` per vertex.

        Self-loops are dropped. When the same ``(src, dst)`` pair appears more
        than once, the last occurrence's weight is kept.
        """
        adjacency: List[Dict[int, Weight]] = [{} for _ in self.vertices()]
        for edge in self.edges:
            if edge.is_self_loop:
                continue
            adjacency[edge.src][edge.dst] = edge.weight
        return adjacency


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_vertex_count(vertex_count: Any, what: str = "vertex count") -> int:
    """Return ``vertex_count`` if it is a non-negative integer.

    Raises:
        GraphkitError: VALIDATION if the value is missing, not an integer or
            negative.
    """
    if vertex_count is None:
        raise fail(ErrorKind.VALIDATION, f"{what} is missing")
    if not _is_int(vertex_count):
        raise fail(
            ErrorKind.VALIDATION,
            f"{what} must be an integer, got {type(vertex_count).__name__}",
        )
    if vertex_count < 0:
        raise fail(ErrorKind.VALIDATION, f"{what} must be >= 0, got {vertex_count}")
    return vertex_count


def validate_vertex(vertex: Any, vertex_count: int, what: str = "vertex") -> int:
    """Return ``vertex`` if it is an integer index in ``[0, vertex_count)``."""
    if not _is_int(vertex):
        raise fail(
            ErrorKind.VALIDATION,
            f"{what} must be an integer, got {type(vertex).__name__}",
        )
    if not 0 <= vertex < vertex_count:
        raise fail(
            ErrorKind.VALIDATION,
            f"{what} {vertex} is out of range [0, {vertex_count})",
            vertex=vertex,
        )
    return vertex


def build_graph(
    vertex_count: Any,
    edges: Optional[Sequence[Any]],
    *,
    strict_entries: bool = False,
    entry_name: str = "edge",
    logger: Optional[logging.Logger] = None,
) -> Graph:
    """Validate a raw graph description and build a :class:`Graph`.

    Args:
        vertex_count: Number of vertices (``>= 0``).
        edges: List of ``[from, to]`` or ``[from, to, weight]`` entries.
            A missing weight (or ``None``) becomes ``DEFAULT_WEIGHT``.
        strict_entries: If True, a ``None`` or non-sequence entry is reported
            as an INTERNAL error instead of being skipped or rejected as
            validation failure. Used by callers for whom such an entry means
            an upstream precondition was violated.
        entry_name: Name used for entries in error messages.
        logger: Optional logger; defaults to this module's logger.

    Returns:
        The validated graph.

    Raises:
        GraphkitError: VALIDATION for a bad vertex count, a missing or
            non-list edge list, non-integer values or out-of-range endpoints;
            INTERNAL for null entries when ``strict_entries`` is set.
    """
    log = logger or _logger
    n = validate_vertex_count(vertex_count)
    if edges is None:
        raise fail(ErrorKind.VALIDATION, f"{entry_name} list is missing")
    if isinstance(edges, (str, bytes)) or not isinstance(edges, Sequence):
        raise fail(
            ErrorKind.VALIDATION,
            f"{entry_name} list must be a list, got {type(edges).__name__}",
        )

    built: List[Edge] = []
    for index, entry in enumerate(edges):
        if entry is None or isinstance(entry, (str, bytes)) or not isinstance(
            entry, Sequence
        ):
            if strict_entries:
                raise fail(
                    ErrorKind.INTERNAL,
                    f"{entry_name}[{index}] is null or not a sequence: {entry!r}",
                    index=index,
                )
            if entry is None:
                log.warning(f"Skipping null {entry_name} entry at index {index}")
                continue
            raise fail(
                ErrorKind.VALIDATION,
                f"{entry_name}[{index}] must be a list, got {type(entry).__name__}",
                index=index,
            )

        if len(entry) < 2 or entry[0] is None or entry[1] is None:
            log.warning(
                f"Skipping {entry_name}[{index}] with fewer than two endpoints: {list(entry)}"
            )
            continue
        if len(entry) > 3:
            raise fail(
                ErrorKind.VALIDATION,
                f"{entry_name}[{index}] has {len(entry)} elements; expected [from, to, weight?]",
                index=index,
            )

        src = validate_vertex(entry[0], n, what=f"{entry_name}[{index}] endpoint")
        dst = validate_vertex(entry[1], n, what=f"{entry_name}[{index}] endpoint")

        weight: Any = entry[2] if len(entry) == 3 else None
        if weight is None:
            weight = DEFAULT_WEIGHT
        elif not _is_int(weight):
            raise fail(
                ErrorKind.VALIDATION,
                f"{entry_name}[{index}] weight must be an integer, got {type(weight).__name__}",
                index=index,
            )
        built.append(Edge(src, dst, weight))

    log.debug(f"Built graph with {n} vertices and {len(built)} edges")
    return Graph(vertex_count=n, edges=tuple(built))


def graph_from_matrix(matrix: Any) -> Graph:
    """Build a directed graph from a dense square capacity matrix.

    Zero entries produce no edge. Values must be integers; the sign is not
    checked here.

    Raises:
        GraphkitError: VALIDATION if the matrix is missing, empty or not
            square, or holds non-integer values.
    """
    if matrix is None:
        raise fail(ErrorKind.VALIDATION, "capacity matrix is missing")
    if not isinstance(matrix, Sequence) or isinstance(matrix, (str, bytes)):
        raise fail(ErrorKind.VALIDATION, "capacity matrix must be a list of rows")
    n = len(matrix)
    if n == 0:
        raise fail(ErrorKind.VALIDATION, "graph must have at least one vertex")

    built: List[Edge] = []
    for u, row in enumerate(matrix):
        if row is None or not isinstance(row, Sequence) or len(row) != n:
            raise fail(
                ErrorKind.VALIDATION,
                f"capacity matrix must be square; row {u} has the wrong length",
                row=u,
            )
        for v, value in enumerate(row):
            if not _is_int(value):
                raise fail(
                    ErrorKind.VALIDATION,
                    f"capacity at ({u}, {v}) must be an integer",
                    edge=[u, v],
                )
            if value != 0:
                built.append(Edge(u, v, value))
    return Graph(vertex_count=n, edges=tuple(built))


def graph_from_capacity_map(
    vertex_count: Any, capacities: Optional[Mapping[Any, Mapping[Any, Any]]]
) -> Graph:
    """Build a directed graph from a sparse ``{u: {v: capacity}}`` mapping.

    Keys may be integers or their decimal string form (as decoded from JSON).

    Raises:
        GraphkitError: VALIDATION for a bad vertex count, a missing mapping,
            out-of-range vertices or non-integer capacities.
    """
    n = validate_vertex_count(vertex_count)
    if capacities is None:
        raise fail(ErrorKind.VALIDATION, "capacity mapping is missing")

    built: List[Edge] = []
    for raw_u, row in capacities.items():
        u = validate_vertex(_as_index(raw_u), n, what="capacity source")
        if not isinstance(row, Mapping):
            raise fail(
                ErrorKind.VALIDATION,
                f"capacities of vertex {u} must be a mapping",
                vertex=u,
            )
        for raw_v, value in row.items():
            v = validate_vertex(_as_index(raw_v), n, what="capacity target")
            if not _is_int(value):
                raise fail(
                    ErrorKind.VALIDATION,
                    f"capacity from {u} to {v} must be an integer",
                    edge=[u, v],
                )
            built.append(Edge(u, v, value))
    return Graph(vertex_count=n, edges=tuple(built))


def _as_index(key: Any) -> Any:
    if isinstance(key, str) and key.lstrip("-").isdigit():
        return int(key)
    return key
