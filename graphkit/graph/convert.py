"""Label and NetworkX boundaries for the integer-indexed graph model.

Algorithms work on vertex indices ``0 .. V-1``. Callers that name vertices
(strings, tuples, any hashable) go through a :class:`NodeMap`, which assigns
contiguous indices and maps results back to labels.

Example:
    >>> import networkx as nx
    >>> G = nx.DiGraph()
    >>> G.add_edge("a", "b", weight=3)
    >>> graph, node_map = from_networkx(G)
    >>> node_map.to_index["b"]
    1
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Hashable, List, Optional, Sequence, Tuple, Union

from graphkit.graph.model import Edge, Graph
from graphkit.logging import get_logger
from graphkit.types.base import DEFAULT_WEIGHT, ErrorKind
from graphkit.types.result import fail

if TYPE_CHECKING:
    import networkx as nx

    NxGraph = Union[nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph]
else:
    NxGraph = Any

_logger = get_logger(__name__)


@dataclass
class NodeMap:
    """Bidirectional mapping between vertex labels and integer indices.

    Attributes:
        to_index: Maps labels to integer indices.
        to_name: Maps integer indices back to labels.

    Example:
        >>> node_map = NodeMap.from_names(["A", "B", "C"])
        >>> node_map.to_index["A"]
        0
        >>> node_map.to_name[1]
        'B'
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: Sequence[Hashable]) -> "NodeMap":
        """Create a NodeMap from labels in index order.

        Raises:
            GraphkitError: VALIDATION if a label is ``None`` or repeated.
        """
        to_index: Dict[Hashable, int] = {}
        for i, name in enumerate(names):
            if name is None:
                raise fail(ErrorKind.VALIDATION, f"vertex label at {i} is missing")
            if name in to_index:
                raise fail(
                    ErrorKind.VALIDATION, f"duplicate vertex label '{name}'", label=name
                )
            to_index[name] = i
        to_name = {i: name for name, i in to_index.items()}
        return cls(to_index=to_index, to_name=to_name)

    def __len__(self) -> int:
        return len(self.to_index)

    def index_of(self, name: Hashable, what: str = "vertex") -> int:
        """Return the index of ``name``.

        Raises:
            GraphkitError: VALIDATION if the label is unknown.
        """
        try:
            return self.to_index[name]
        except (KeyError, TypeError):
            raise fail(
                ErrorKind.VALIDATION, f"unknown {what} '{name}'", label=str(name)
            ) from None

    def relabel_rows(
        self, rows: Dict[int, Dict[int, Any]]
    ) -> Dict[Hashable, Dict[Hashable, Any]]:
        """Translate a nested index-keyed mapping into a label-keyed one."""
        return {
            self.to_name[u]: {self.to_name[v]: value for v, value in row.items()}
            for u, row in rows.items()
        }


def build_labeled_graph(
    vertices: Optional[Sequence[Hashable]],
    edges: Optional[Sequence[Any]],
    *,
    logger: Optional[logging.Logger] = None,
) -> Tuple[Graph, NodeMap]:
    """Build a graph whose vertices are named by labels.

    Each edge is either a mapping with ``from``/``to`` and optional ``weight``
    keys, or a ``[from, to, weight?]`` sequence of labels. ``None`` entries and
    edges missing an endpoint are skipped with a warning, as in
    :func:`~graphkit.graph.model.build_graph`.

    Returns:
        ``(graph, node_map)``.

    Raises:
        GraphkitError: VALIDATION for missing or duplicate labels, unknown
            endpoints or non-integer weights.
    """
    log = logger or _logger
    if vertices is None:
        raise fail(ErrorKind.VALIDATION, "vertex list is missing")
    if edges is None:
        raise fail(ErrorKind.VALIDATION, "edge list is missing")
    node_map = NodeMap.from_names(list(vertices))

    built: List[Edge] = []
    for index, entry in enumerate(edges):
        if entry is None:
            log.warning(f"Skipping null edge entry at index {index}")
            continue
        if isinstance(entry, dict):
            src_name, dst_name = entry.get("from"), entry.get("to")
            weight = entry.get("weight")
        elif isinstance(entry, (list, tuple)):
            src_name = entry[0] if len(entry) > 0 else None
            dst_name = entry[1] if len(entry) > 1 else None
            weight = entry[2] if len(entry) > 2 else None
        else:
            raise fail(
                ErrorKind.VALIDATION,
                f"edge[{index}] must be a mapping or a list",
                index=index,
            )
        if src_name is None or dst_name is None:
            log.warning(f"Skipping edge[{index}] with a missing endpoint: {entry!r}")
            continue
        if weight is None:
            weight = DEFAULT_WEIGHT
        elif not isinstance(weight, int) or isinstance(weight, bool):
            raise fail(
                ErrorKind.VALIDATION,
                f"edge[{index}] weight must be an integer",
                index=index,
            )
        built.append(
            Edge(
                node_map.index_of(src_name, what="edge endpoint"),
                node_map.index_of(dst_name, what="edge endpoint"),
                weight,
            )
        )
    return Graph(vertex_count=len(node_map), edges=tuple(built)), node_map


def from_networkx(
    G: NxGraph,
    *,
    weight_attr: str = "weight",
    default_weight: int = DEFAULT_WEIGHT,
) -> Tuple[Graph, NodeMap]:
    """Convert a NetworkX graph to ``(Graph, NodeMap)``.

    Node labels are sorted by their string form for deterministic indices.
    Undirected graphs yield one edge per NetworkX edge; algorithms that need
    symmetry add the reverse themselves. Multigraph parallel edges are kept.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph).
        weight_attr: Edge attribute holding the integer weight or capacity.
        default_weight: Value used when the attribute is missing.

    Raises:
        TypeError: If G is not a NetworkX graph.
    """
    import networkx as nx

    if not isinstance(G, (nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph)):
        raise TypeError(
            f"Expected NetworkX graph (DiGraph, MultiDiGraph, Graph, MultiGraph), "
            f"got {type(G).__name__}"
        )

    node_map = NodeMap.from_names(sorted(G.nodes(), key=str))
    edges = tuple(
        Edge(
            node_map.to_index[u],
            node_map.to_index[v],
            int(data.get(weight_attr, default_weight)),
        )
        for u, v, data in G.edges(data=True)
    )
    return Graph(vertex_count=len(node_map), edges=edges), node_map


def to_networkx(
    graph: Graph,
    node_map: Optional[NodeMap] = None,
    *,
    directed: bool = True,
    weight_attr: str = "weight",
) -> NxGraph:
    """Convert a Graph back into a NetworkX MultiDiGraph (or MultiGraph).

    Args:
        graph: Graph to convert.
        node_map: Optional label mapping; indices are used as labels when None.
        directed: Build a MultiDiGraph if True, otherwise a MultiGraph.
        weight_attr: Attribute name for edge weights.
    """
    import networkx as nx

    G = nx.MultiDiGraph() if directed else nx.MultiGraph()

    def label(i: int) -> Hashable:
        return node_map.to_name[i] if node_map is not None else i

    G.add_nodes_from(label(i) for i in graph.vertices())
    for edge in graph.edges:
        G.add_edge(label(edge.src), label(edge.dst), **{weight_attr: edge.weight})
    return G
