"""Graph algorithms.

Each module exposes a lower-level function on a built :class:`~graphkit.graph.model.Graph`
that raises :class:`~graphkit.types.result.GraphkitError`, and a boundary
function on raw input that returns a :class:`~graphkit.types.result.Result`.
"""

from graphkit.algorithms.coloring import greedy_coloring, schedule_tasks
from graphkit.algorithms.critical import (
    critical_connections,
    find_articulation_points,
    find_bridges,
    find_critical_connections,
)
from graphkit.algorithms.johnson import johnson, shortest_paths, shortest_paths_by_label
from graphkit.algorithms.max_flow import (
    edmonds_karp,
    max_flow,
    max_flow_from_capacities,
    max_flow_from_matrix,
)

__all__ = [
    "critical_connections",
    "edmonds_karp",
    "find_articulation_points",
    "find_bridges",
    "find_critical_connections",
    "greedy_coloring",
    "johnson",
    "max_flow",
    "max_flow_from_capacities",
    "max_flow_from_matrix",
    "schedule_tasks",
    "shortest_paths",
    "shortest_paths_by_label",
]
