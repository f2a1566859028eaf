from graphkit.graph.convert import NodeMap, build_labeled_graph, from_networkx, to_networkx
from graphkit.graph.model import (
    Edge,
    Graph,
    build_graph,
    graph_from_capacity_map,
    graph_from_matrix,
)

__all__ = [
    "Edge",
    "Graph",
    "NodeMap",
    "build_graph",
    "build_labeled_graph",
    "from_networkx",
    "graph_from_capacity_map",
    "graph_from_matrix",
    "to_networkx",
]
