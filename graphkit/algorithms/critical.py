"""Bridges and articulation points of an undirected graph.

One depth-first traversal assigns each vertex a discovery order ``disc`` and
a low-link ``low`` (the smallest discovery order reachable from the vertex's
subtree through at most one back edge). Then:

  - tree edge ``(u, v)`` is a bridge iff ``low[v] > disc[u]``;
  - the DFS root is an articulation point iff it has more than one tree child;
  - any other ``u`` is an articulation point iff some child ``v`` has
    ``low[v] >= disc[u]``.

The traversal is iterative (no recursion limit on long paths) and visits
roots and neighbors in ascending index order, so results are reproducible.
The edge used to enter a vertex is excluded by its identity rather than by
the parent vertex, which keeps genuinely parallel edges from being reported
as bridges when the graph is analyzed as a multigraph.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, List, Optional, Sequence, Set, Tuple

from graphkit.config import SizeLimits
from graphkit.graph.model import Graph, build_graph
from graphkit.logging import get_logger
from graphkit.types.base import VertexPair
from graphkit.types.dto import CriticalConnections
from graphkit.types.result import returns_result

_logger = get_logger(__name__)


def find_critical_connections(
    graph: Graph,
    *,
    multigraph: bool = False,
    logger: Optional[logging.Logger] = None,
) -> CriticalConnections:
    """Find bridges and articulation points in a single DFS pass.

    Edges are treated as undirected. Self-loops are ignored.

    Args:
        graph: Validated graph.
        multigraph: If False (default), repeated vertex pairs collapse into one
            edge, so duplicates have no effect. If True, each entry is a
            distinct edge and a doubled connection is never a bridge.
        logger: Optional logger; defaults to this module's logger.

    Returns:
        CriticalConnections with sorted bridges and articulation points.
    """
    log = logger or _logger
    n = graph.vertex_count
    adjacency = graph.undirected_adjacency(collapse_parallel=not multigraph)

    disc: List[int] = [-1] * n
    low: List[int] = [0] * n
    bridges: Set[VertexPair] = set()
    articulation: Set[int] = set()
    timer = 0

    for root in range(n):
        if disc[root] != -1:
            continue
        log.debug(f"Starting DFS at vertex {root}")
        disc[root] = low[root] = timer
        timer += 1
        root_children = 0
        # Frame: (vertex, id of the edge used to enter it, neighbor iterator)
        stack: List[Tuple[int, int, Iterator[Tuple[int, int]]]] = [
            (root, -1, iter(adjacency[root]))
        ]

        while stack:
            u, entry_edge, neighbors = stack[-1]
            descended = False
            for v, edge_id in neighbors:
                if edge_id == entry_edge:
                    continue
                if disc[v] == -1:
                    log.debug(f"Tree edge {u} -> {v}")
                    disc[v] = low[v] = timer
                    timer += 1
                    if u == root:
                        root_children += 1
                    stack.append((v, edge_id, iter(adjacency[v])))
                    descended = True
                    break
                # Back edge (or the far end of an already finished subtree)
                if disc[v] < low[u]:
                    low[u] = disc[v]
            if descended:
                continue

            stack.pop()
            if not stack:
                break
            parent = stack[-1][0]
            if low[u] < low[parent]:
                low[parent] = low[u]
            if low[u] > disc[parent]:
                log.debug(f"Bridge found between {parent} and {u}")
                bridges.add((min(parent, u), max(parent, u)))
            if parent != root and low[u] >= disc[parent]:
                log.debug(f"Articulation point found at {parent}")
                articulation.add(parent)

        if root_children > 1:
            log.debug(f"Articulation point found at DFS root {root}")
            articulation.add(root)

    log.info(
        f"Found {len(bridges)} bridges and {len(articulation)} articulation points "
        f"in graph with {n} vertices"
    )
    return CriticalConnections(
        bridges=tuple(sorted(bridges)),
        articulation_points=tuple(sorted(articulation)),
    )


@returns_result("critical_connections", _logger)
def critical_connections(
    vertex_count: Any,
    edges: Optional[Sequence[Any]],
    *,
    multigraph: bool = False,
    limits: Optional[SizeLimits] = None,
    logger: Optional[logging.Logger] = None,
) -> CriticalConnections:
    """Validate a raw description and find its bridges and articulation points.

    A ``None`` entry in ``edges`` means a caller let an unchecked edge through;
    it is reported as an INTERNAL error rather than skipped.

    Args:
        vertex_count: Number of vertices.
        edges: ``[u, v]`` pairs (a third element is accepted and ignored).
        multigraph: See :func:`find_critical_connections`.
        limits: Optional size limits checked before analysis.
        logger: Optional logger.

    Returns:
        Result holding CriticalConnections, or the error.
    """
    graph = build_graph(vertex_count, edges, strict_entries=True, logger=logger)
    if limits is not None:
        limits.check("critical_connections", graph.vertex_count, len(graph.edges))
    return find_critical_connections(graph, multigraph=multigraph, logger=logger)


def find_bridges(graph: Graph, *, multigraph: bool = False) -> Tuple[VertexPair, ...]:
    """Return only the bridges of ``graph``."""
    return find_critical_connections(graph, multigraph=multigraph).bridges


def find_articulation_points(graph: Graph, *, multigraph: bool = False) -> Tuple[int, ...]:
    """Return only the articulation points of ``graph``."""
    return find_critical_connections(graph, multigraph=multigraph).articulation_points
