"""graphkit: graph algorithms for connectivity, paths, flow and scheduling.

Every operation is a pure function of its input: it validates a graph
description, runs one algorithm and returns a :class:`Result` holding either
the value or a typed :class:`GraphError`.

Primary API:
    critical_connections() - Bridges and articulation points
    shortest_paths() - All-pairs shortest paths (Johnson's algorithm)
    max_flow() - Maximum flow (Edmonds-Karp)
    schedule_tasks() - Conflict-free slot assignment (greedy coloring)

Example:
    from graphkit import critical_connections

    result = critical_connections(5, [[0, 1], [1, 2], [2, 0], [1, 3], [3, 4]])
    if result.ok:
        print(result.value.bridge_labels())  # ('1-3', '3-4')
    else:
        print(result.error.kind, result.error.message)
"""

from __future__ import annotations

from graphkit import logging
from graphkit._version import __version__
from graphkit.algorithms import (
    critical_connections,
    edmonds_karp,
    find_critical_connections,
    greedy_coloring,
    johnson,
    max_flow,
    max_flow_from_capacities,
    max_flow_from_matrix,
    schedule_tasks,
    shortest_paths,
    shortest_paths_by_label,
)
from graphkit.config import DEFAULT_LIMITS, SizeLimits
from graphkit.graph import Edge, Graph, NodeMap, build_graph, from_networkx, to_networkx
from graphkit.types import (
    DEFAULT_WEIGHT,
    UNREACHABLE,
    ColoringStrategy,
    CriticalConnections,
    ErrorKind,
    GraphError,
    GraphkitError,
    MaxFlowResult,
    Result,
    Schedule,
    ShortestPaths,
)

__all__ = [
    # Version
    "__version__",
    # Operations (Result-returning)
    "critical_connections",
    "shortest_paths",
    "shortest_paths_by_label",
    "max_flow",
    "max_flow_from_matrix",
    "max_flow_from_capacities",
    "schedule_tasks",
    # Algorithms on built graphs
    "find_critical_connections",
    "johnson",
    "edmonds_karp",
    "greedy_coloring",
    # Model
    "Edge",
    "Graph",
    "NodeMap",
    "build_graph",
    "from_networkx",
    "to_networkx",
    # Types
    "DEFAULT_WEIGHT",
    "UNREACHABLE",
    "ColoringStrategy",
    "ErrorKind",
    "GraphError",
    "GraphkitError",
    "Result",
    "CriticalConnections",
    "ShortestPaths",
    "MaxFlowResult",
    "Schedule",
    # Configuration
    "DEFAULT_LIMITS",
    "SizeLimits",
    # Utilities
    "logging",
]
