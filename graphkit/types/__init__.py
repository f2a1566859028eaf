"""Shared types: constants, the tagged result type and result containers."""

from graphkit.types.base import (
    DEFAULT_WEIGHT,
    UNREACHABLE,
    ColoringStrategy,
    ErrorKind,
)
from graphkit.types.dto import (
    CriticalConnections,
    MaxFlowResult,
    Schedule,
    ShortestPaths,
)
from graphkit.types.result import GraphError, GraphkitError, Result

__all__ = [
    "DEFAULT_WEIGHT",
    "UNREACHABLE",
    "ColoringStrategy",
    "ErrorKind",
    "CriticalConnections",
    "MaxFlowResult",
    "Schedule",
    "ShortestPaths",
    "GraphError",
    "GraphkitError",
    "Result",
]
