"""Configuration classes for graphkit operations."""

from dataclasses import dataclass
from typing import Optional

from graphkit.types.base import ErrorKind
from graphkit.types.result import fail


@dataclass(frozen=True)
class SizeLimits:
    """Upper bounds on input size, checked before any algorithmic work.

    Johnson's algorithm is O(V*E log V) and Edmonds-Karp O(V*E^2), so callers
    serving untrusted input should bound both counts. ``None`` disables a bound.
    """

    # Maximum number of vertices (or tasks)
    max_vertices: Optional[int] = 10_000

    # Maximum number of edges (or conflict pairs)
    max_edges: Optional[int] = 100_000

    def check(self, operation: str, vertex_count: int, edge_count: int) -> None:
        """Raise a validation error if either count exceeds its bound."""
        if self.max_vertices is not None and vertex_count > self.max_vertices:
            raise fail(
                ErrorKind.VALIDATION,
                f"{operation}: {vertex_count} vertices exceeds limit of {self.max_vertices}",
                vertex_count=vertex_count,
            )
        if self.max_edges is not None and edge_count > self.max_edges:
            raise fail(
                ErrorKind.VALIDATION,
                f"{operation}: {edge_count} edges exceeds limit of {self.max_edges}",
                edge_count=edge_count,
            )


# Limits applied by the command-line front end
DEFAULT_LIMITS = SizeLimits()
