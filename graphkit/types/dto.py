"""Immutable result containers produced by the algorithms.

Each container has a ``to_dict`` that renders the boundary shape consumed by
callers (camelCase keys, JSON-friendly values).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Tuple

from graphkit.types.base import UNREACHABLE, VertexPair


@dataclass(frozen=True)
class CriticalConnections:
    """Bridges and articulation points of an undirected graph.

    Attributes:
        bridges: Bridge edges as ``(min, max)`` endpoint pairs, sorted.
        articulation_points: Articulation-point vertex indices, sorted.
    """

    bridges: Tuple[VertexPair, ...]
    articulation_points: Tuple[int, ...]

    def bridge_labels(self) -> Tuple[str, ...]:
        """Bridges rendered as ``"u-v"`` strings."""
        return tuple(f"{u}-{v}" for u, v in self.bridges)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bridges": list(self.bridge_labels()),
            "articulationPoints": list(self.articulation_points),
        }


@dataclass(frozen=True)
class ShortestPaths:
    """All-pairs shortest path distances.

    ``distances[s][t]`` is defined for every pair of vertices; unreachable
    pairs hold :data:`~graphkit.types.base.UNREACHABLE`.

    Attributes:
        distances: Source -> destination -> distance.
        potentials: Johnson potential ``h(v)`` per vertex.
    """

    distances: Dict[int, Dict[int, int]]
    potentials: Tuple[int, ...] = ()

    def distance(self, source: int, target: int) -> int:
        return self.distances[source][target]

    def is_reachable(self, source: int, target: int) -> bool:
        return self.distances[source][target] != UNREACHABLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shortestPaths": {
                str(src): {str(dst): d for dst, d in row.items()}
                for src, row in self.distances.items()
            }
        }


@dataclass(frozen=True)
class MaxFlowResult:
    """Outcome of a max-flow computation between a source/sink pair.

    Attributes:
        total_flow: Maximum flow value.
        source: Source vertex.
        sink: Sink vertex.
        edge_flows: Positive flow per original directed edge.
        min_cut: Saturated edges leaving the source side, sorted.
        source_side: Vertices reachable from the source in the final residual
            network.
        augmentations: Number of augmenting paths pushed.
    """

    total_flow: int
    source: int
    sink: int
    edge_flows: Dict[VertexPair, int] = field(default_factory=dict)
    min_cut: Tuple[VertexPair, ...] = ()
    source_side: FrozenSet[int] = frozenset()
    augmentations: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "maxFlow": self.total_flow,
            "source": self.source,
            "sink": self.sink,
            "minCut": [list(edge) for edge in self.min_cut],
            "edgeFlows": [[u, v, f] for (u, v), f in sorted(self.edge_flows.items())],
            "augmentations": self.augmentations,
        }


@dataclass(frozen=True)
class Schedule:
    """Conflict-free slot assignment.

    Attributes:
        assignments: Task index -> slot index.
        total_slots: Number of distinct slots used.
    """

    assignments: Dict[int, int]
    total_slots: int

    def tasks_in_slot(self, slot: int) -> Tuple[int, ...]:
        return tuple(t for t, s in sorted(self.assignments.items()) if s == slot)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "assignments": {str(t): s for t, s in sorted(self.assignments.items())},
            "totalSlots": self.total_slots,
        }
