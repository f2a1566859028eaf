"""Maximum flow with Edmonds-Karp (BFS augmenting paths).

The residual network keeps, for every directed edge, its capacity and a
skew-symmetric flow value (``flow[v][u] == -flow[u][v]``), so pushing flow
along a reverse edge cancels earlier flow. Each round:

  a. BFS from the source over arcs with residual capacity > 0.
  b. Stop when the sink is unreachable.
  c. The bottleneck is the smallest residual capacity on the parent chain.
  d. Push the bottleneck along the path and add it to the total.

Shortest (fewest-arc) augmenting paths bound the number of rounds by
O(V*E) regardless of capacity values, giving O(V*E^2) overall.

Validation happens before any work: the graph must have at least one
vertex, capacities must be non-negative and source/sink must be in range.
When ``source == sink`` the flow is 0 and no search runs.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set

from graphkit.config import SizeLimits
from graphkit.graph.model import (
    Graph,
    build_graph,
    graph_from_capacity_map,
    graph_from_matrix,
    validate_vertex,
)
from graphkit.logging import get_logger
from graphkit.types.base import ErrorKind, VertexPair
from graphkit.types.dto import MaxFlowResult
from graphkit.types.result import fail, returns_result

_logger = get_logger(__name__)


def validate_flow_network(graph: Graph, source: Any, sink: Any) -> None:
    """Check the preconditions of :func:`edmonds_karp`.

    Raises:
        GraphkitError: VALIDATION if the graph is missing or empty, holds a
            negative capacity, or source/sink are out of range.
    """
    if graph is None:
        raise fail(ErrorKind.VALIDATION, "graph cannot be null")
    if graph.vertex_count <= 0:
        raise fail(ErrorKind.VALIDATION, "graph must have at least one vertex")
    for edge in graph.edges:
        if edge.weight < 0:
            raise fail(
                ErrorKind.VALIDATION,
                f"negative capacity from vertex {edge.src} to vertex {edge.dst}",
                edge=[edge.src, edge.dst],
            )
    validate_vertex(source, graph.vertex_count, what="source vertex")
    validate_vertex(sink, graph.vertex_count, what="sink vertex")


def _bfs_parents(
    neighbors: List[List[int]],
    capacity: List[Dict[int, int]],
    flow: List[Dict[int, int]],
    source: int,
    sink: int,
) -> Dict[int, int]:
    """Return BFS parent pointers over arcs with residual capacity.

    The search stops as soon as the sink is discovered. When the sink is not
    reachable, the keys are exactly the source side of the residual network.
    """
    parent: Dict[int, int] = {source: source}
    queue = deque([source])
    while queue:
        u = queue.popleft()
        cap_u, flow_u = capacity[u], flow[u]
        for v in neighbors[u]:
            if v not in parent and cap_u.get(v, 0) - flow_u[v] > 0:
                parent[v] = u
                if v == sink:
                    return parent
                queue.append(v)
    return parent


def edmonds_karp(
    graph: Graph,
    source: int,
    sink: int,
    *,
    logger: Optional[logging.Logger] = None,
) -> MaxFlowResult:
    """Compute the maximum flow from ``source`` to ``sink``.

    Duplicate ``(u, v)`` edges keep the last capacity; self-loops are ignored.

    Args:
        graph: Directed graph whose edge weights are capacities.
        source: Source vertex.
        sink: Sink vertex.
        logger: Optional logger.

    Returns:
        MaxFlowResult with the flow value, per-edge flows and a minimum cut.

    Raises:
        GraphkitError: VALIDATION if the network fails
            :func:`validate_flow_network`.
    """
    log = logger or _logger
    validate_flow_network(graph, source, sink)
    if source == sink:
        log.info("Source equals sink; returning 0 flow")
        return MaxFlowResult(
            total_flow=0, source=source, sink=sink, source_side=frozenset({source})
        )

    n = graph.vertex_count
    capacity = graph.weighted_adjacency()

    # Residual arcs: every edge plus its reverse.
    arc_sets: List[Set[int]] = [set(capacity[u]) for u in range(n)]
    for u in range(n):
        for v in capacity[u]:
            arc_sets[v].add(u)
    neighbors = [sorted(arcs) for arcs in arc_sets]
    flow: List[Dict[int, int]] = [dict.fromkeys(neighbors[u], 0) for u in range(n)]

    log.info(f"Starting Edmonds-Karp from source {source} to sink {sink}")
    total_flow = 0
    augmentations = 0
    while True:
        parent = _bfs_parents(neighbors, capacity, flow, source, sink)
        if sink not in parent:
            log.debug("No augmenting path found; terminating")
            break

        bottleneck: Optional[int] = None
        v = sink
        while v != source:
            u = parent[v]
            residual = capacity[u].get(v, 0) - flow[u][v]
            if bottleneck is None or residual < bottleneck:
                bottleneck = residual
            v = u
        assert bottleneck is not None

        v = sink
        while v != source:
            u = parent[v]
            flow[u][v] += bottleneck
            flow[v][u] -= bottleneck
            v = u

        total_flow += bottleneck
        augmentations += 1
        log.debug(
            f"Augmenting path {augmentations} carried {bottleneck}; total {total_flow}"
        )

    source_side = frozenset(parent)
    min_cut: List[VertexPair] = sorted(
        (u, v)
        for u in source_side
        for v, cap in capacity[u].items()
        if v not in source_side and cap > 0
    )
    edge_flows: Dict[VertexPair, int] = {
        (u, v): flow[u][v]
        for u in range(n)
        for v in capacity[u]
        if flow[u][v] > 0
    }

    log.info(
        f"Edmonds-Karp completed: max flow {total_flow} after {augmentations} augmenting paths"
    )
    return MaxFlowResult(
        total_flow=total_flow,
        source=source,
        sink=sink,
        edge_flows=edge_flows,
        min_cut=tuple(min_cut),
        source_side=source_side,
        augmentations=augmentations,
    )


@returns_result("max_flow", _logger)
def max_flow(
    vertex_count: Any,
    edges: Optional[Sequence[Any]],
    source: Any,
    sink: Any,
    *,
    limits: Optional[SizeLimits] = None,
    logger: Optional[logging.Logger] = None,
) -> MaxFlowResult:
    """Validate an edge-list network and compute its maximum flow.

    Args:
        vertex_count: Number of vertices (at least 1).
        edges: ``[from, to, capacity?]`` entries.
        source: Source vertex.
        sink: Sink vertex.
        limits: Optional size limits checked before any work.
        logger: Optional logger.

    Returns:
        Result holding MaxFlowResult, or a VALIDATION error.
    """
    graph = build_graph(vertex_count, edges, logger=logger)
    if limits is not None:
        limits.check("max_flow", graph.vertex_count, len(graph.edges))
    return edmonds_karp(graph, source, sink, logger=logger)


@returns_result("max_flow_from_matrix", _logger)
def max_flow_from_matrix(
    matrix: Optional[Sequence[Sequence[int]]],
    source: Any,
    sink: Any,
    *,
    limits: Optional[SizeLimits] = None,
    logger: Optional[logging.Logger] = None,
) -> MaxFlowResult:
    """Compute the maximum flow of a dense square capacity matrix.

    ``matrix[u][v]`` is the capacity of ``u -> v``; zeros mean no edge.
    """
    graph = graph_from_matrix(matrix)
    if limits is not None:
        limits.check("max_flow_from_matrix", graph.vertex_count, len(graph.edges))
    return edmonds_karp(graph, source, sink, logger=logger)


@returns_result("max_flow_from_capacities", _logger)
def max_flow_from_capacities(
    vertex_count: Any,
    capacities: Optional[Mapping[Any, Mapping[Any, int]]],
    source: Any,
    sink: Any,
    *,
    limits: Optional[SizeLimits] = None,
    logger: Optional[logging.Logger] = None,
) -> MaxFlowResult:
    """Compute the maximum flow of a sparse ``{u: {v: capacity}}`` network."""
    graph = graph_from_capacity_map(vertex_count, capacities)
    if limits is not None:
        limits.check("max_flow_from_capacities", graph.vertex_count, len(graph.edges))
    return edmonds_karp(graph, source, sink, logger=logger)
