"""All-pairs shortest paths with possibly negative weights (Johnson).

Steps:
  1. Add a virtual source with zero-weight edges to every vertex.
  2. Bellman-Ford from the virtual source yields potentials ``h``; an extra
     relaxation pass that still improves something means a negative cycle.
  3. Reweight ``w'(u, v) = w(u, v) + h(u) - h(v)`` (non-negative).
  4. Dijkstra from every vertex on the reweighted graph.
  5. Undo: ``d(s, t) = d'(s, t) - h(s) + h(t)``.

Distances to unreachable vertices are :data:`~graphkit.types.base.UNREACHABLE`.
Self-loops never take part, so every vertex is at distance 0 from itself.
"""

from __future__ import annotations

import logging
from heapq import heappop, heappush
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

from graphkit.config import SizeLimits
from graphkit.graph.convert import build_labeled_graph
from graphkit.graph.model import Graph, build_graph
from graphkit.logging import get_logger
from graphkit.types.base import UNREACHABLE, ErrorKind, Weight
from graphkit.types.dto import ShortestPaths
from graphkit.types.result import fail, returns_result

_logger = get_logger(__name__)


def bellman_ford_potentials(
    adjacency: List[Dict[int, Weight]],
    *,
    logger: Optional[logging.Logger] = None,
) -> List[int]:
    """Compute Johnson potentials from a virtual source.

    The virtual source reaches every vertex with weight 0, so after the
    first round every ``h(v) <= 0`` and no vertex stays at the sentinel.

    Args:
        adjacency: Directed ``dst -> weight`` maps, one per real vertex.
        logger: Optional logger.

    Returns:
        Potential ``h(v)`` per vertex.

    Raises:
        GraphkitError: NEGATIVE_CYCLE if a negative-weight cycle exists.
    """
    log = logger or _logger
    n = len(adjacency)
    # Relaxing the virtual source's zero-weight edges takes every potential
    # from the sentinel down to 0.
    h: List[int] = [0] * n

    # n + 1 vertices with the virtual source: any shortest path is one virtual
    # edge followed by at most n - 1 real edges.
    for round_no in range(1, n):
        changed = False
        for u in range(n):
            hu = h[u]
            for v, w in adjacency[u].items():
                if hu + w < h[v]:
                    h[v] = hu + w
                    changed = True
        if not changed:
            log.debug(f"Bellman-Ford converged after {round_no} rounds")
            break

    for u in range(n):
        for v, w in adjacency[u].items():
            if h[u] + w < h[v]:
                log.debug(f"Edge ({u}, {v}) still relaxes after {n} rounds")
                raise fail(
                    ErrorKind.NEGATIVE_CYCLE,
                    "graph contains a negative-weight cycle",
                    edge=[u, v],
                )
    return h[:n]


def reweight(adjacency: List[Dict[int, Weight]], h: Sequence[int]) -> List[Dict[int, int]]:
    """Return ``w'(u, v) = w(u, v) + h(u) - h(v)`` for every edge."""
    return [
        {v: w + h[u] - h[v] for v, w in adjacency[u].items()}
        for u in range(len(adjacency))
    ]


def dijkstra(adjacency: List[Dict[int, int]], source: int) -> List[int]:
    """Single-source distances over non-negative weights.

    Uses a binary heap keyed by tentative distance; stale heap entries are
    skipped on pop.

    Returns:
        Distance per vertex, ``UNREACHABLE`` where no path exists.
    """
    dist: List[int] = [UNREACHABLE] * len(adjacency)
    dist[source] = 0
    min_pq: List[Tuple[int, int]] = [(0, source)]

    while min_pq:
        current, u = heappop(min_pq)
        if current > dist[u]:
            continue
        for v, w in adjacency[u].items():
            new_dist = current + w
            if new_dist < dist[v]:
                dist[v] = new_dist
                heappush(min_pq, (new_dist, v))
    return dist


def johnson(graph: Graph, *, logger: Optional[logging.Logger] = None) -> ShortestPaths:
    """Compute all-pairs shortest paths of a directed weighted graph.

    Duplicate ``(u, v)`` edges keep the last weight; self-loops are ignored.

    Args:
        graph: Validated graph.
        logger: Optional logger.

    Returns:
        ShortestPaths with a distance for every ordered vertex pair.

    Raises:
        GraphkitError: NEGATIVE_CYCLE if a negative-weight cycle exists; no
            partial result is produced.
    """
    log = logger or _logger
    n = graph.vertex_count
    adjacency = graph.weighted_adjacency()
    log.info(f"Starting Johnson's algorithm on graph with {n} vertices")

    log.debug("Running Bellman-Ford to compute vertex potentials")
    h = bellman_ford_potentials(adjacency, logger=log)
    log.debug(f"Vertex potentials: {h}")

    reweighted = reweight(adjacency, h)

    distances: Dict[int, Dict[int, int]] = {}
    for source in range(n):
        reduced = dijkstra(reweighted, source)
        row: Dict[int, int] = {}
        for target in range(n):
            d = reduced[target]
            row[target] = UNREACHABLE if d == UNREACHABLE else d - h[source] + h[target]
        distances[source] = row
        log.debug(f"Distances from {source}: {row}")

    log.info("Johnson's algorithm completed")
    return ShortestPaths(distances=distances, potentials=tuple(h))


@returns_result("shortest_paths", _logger)
def shortest_paths(
    vertex_count: Any,
    edges: Optional[Sequence[Any]],
    *,
    limits: Optional[SizeLimits] = None,
    logger: Optional[logging.Logger] = None,
) -> ShortestPaths:
    """Validate a raw description and run Johnson's algorithm.

    Args:
        vertex_count: Number of vertices.
        edges: ``[from, to, weight?]`` entries; weights may be negative.
        limits: Optional size limits checked before any work.
        logger: Optional logger.

    Returns:
        Result holding ShortestPaths, or a VALIDATION / NEGATIVE_CYCLE error.
    """
    graph = build_graph(vertex_count, edges, logger=logger)
    if limits is not None:
        limits.check("shortest_paths", graph.vertex_count, len(graph.edges))
    return johnson(graph, logger=logger)


@returns_result("shortest_paths_by_label", _logger)
def shortest_paths_by_label(
    vertices: Optional[Sequence[Hashable]],
    edges: Optional[Sequence[Any]],
    *,
    limits: Optional[SizeLimits] = None,
    logger: Optional[logging.Logger] = None,
) -> Dict[Hashable, Dict[Hashable, int]]:
    """Run Johnson's algorithm on a graph whose vertices are named.

    Args:
        vertices: Distinct vertex labels.
        edges: Mappings ``{"from", "to", "weight"}`` or ``[from, to, weight]``
            sequences of labels.
        limits: Optional size limits.
        logger: Optional logger.

    Returns:
        Result holding label -> label -> distance.
    """
    graph, node_map = build_labeled_graph(vertices, edges, logger=logger)
    if limits is not None:
        limits.check("shortest_paths_by_label", graph.vertex_count, len(graph.edges))
    return node_map.relabel_rows(johnson(graph, logger=logger).distances)
