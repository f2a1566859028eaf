"""Base constants and enums shared by graph algorithms."""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence, Tuple

#: Integer edge weight (shortest paths) or capacity (max flow).
Weight = int

#: Raw boundary edge: ``[from, to]`` or ``[from, to, weight]``.
EdgeInput = Sequence[int]

#: Undirected endpoint pair, always stored as ``(min, max)``.
VertexPair = Tuple[int, int]

#: Distance reported for unreachable destinations. Half of the largest signed
#: 64-bit integer: dominates any real distance, and two of them still add up
#: to a representable value.
UNREACHABLE: int = (2**63 - 1) // 2

#: Weight (or capacity) assigned to an edge that omits its third element.
DEFAULT_WEIGHT: Weight = 1


class ErrorKind(IntEnum):
    """Categories of failure reported by toolkit operations."""

    #: Malformed, missing or out-of-range input; detected before any work.
    VALIDATION = 1
    #: Johnson's potential computation found a negative-weight cycle.
    NEGATIVE_CYCLE = 2
    #: Anything unanticipated; the original exception is kept as the cause.
    INTERNAL = 3


class ColoringStrategy(IntEnum):
    """Order in which the greedy scheduler visits tasks."""

    #: Ascending task index.
    SEQUENTIAL = 1
    #: Descending conflict degree, ties broken by ascending index (Welsh-Powell).
    LARGEST_FIRST = 2

    @classmethod
    def from_string(cls, value: str) -> "ColoringStrategy":
        """Parse a string into a ColoringStrategy enum value.

        Args:
            value: Case-insensitive name, with ``-`` accepted for ``_``.

        Returns:
            The corresponding ColoringStrategy member.

        Raises:
            ValueError: If the string doesn't match any member.
        """
        try:
            return cls[value.upper().replace("-", "_")]
        except KeyError:
            valid = ", ".join(e.name for e in cls)
            raise ValueError(
                f"Invalid coloring strategy '{value}'. Valid values are: {valid}"
            ) from None
