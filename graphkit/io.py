"""Boundary documents: loading, shape checks and result rendering.

Documents are mappings decoded from YAML or JSON (JSON is read through the
YAML loader). Keys use the camelCase boundary names; snake_case aliases are
accepted as well.

Graph document::

    vertexCount: 5
    edges: [[0, 1], [1, 2], [2, 0], [1, 3], [3, 4]]

Flow document (``edges``, a dense ``capacityMatrix`` or a sparse
``capacities`` mapping)::

    vertexCount: 4
    edges: [[0, 1, 3], [1, 3, 2], [0, 2, 2], [2, 3, 3]]
    source: 0
    sink: 3

Schedule document::

    taskCount: 4
    conflicts: [[0, 1], [1, 2], [2, 3]]

Labeled shortest-path document::

    vertices: [A, B, C]
    edges: [{from: A, to: B, weight: -2}, {from: B, to: C, weight: 3}]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

import yaml

from graphkit.algorithms.coloring import schedule_tasks
from graphkit.algorithms.critical import critical_connections
from graphkit.algorithms.johnson import shortest_paths, shortest_paths_by_label
from graphkit.algorithms.max_flow import (
    max_flow,
    max_flow_from_capacities,
    max_flow_from_matrix,
)
from graphkit.config import SizeLimits
from graphkit.types.base import ColoringStrategy, ErrorKind
from graphkit.types.result import GraphError, GraphkitError, Result, fail


def loads_document(text: str) -> Dict[str, Any]:
    """Parse a YAML or JSON string into a document mapping.

    Raises:
        GraphkitError: VALIDATION if the text does not parse or its top level
            is not a mapping.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise GraphkitError(
            GraphError(
                kind=ErrorKind.VALIDATION,
                message=f"document is not valid YAML/JSON: {exc}",
                cause=exc,
            )
        ) from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise fail(
            ErrorKind.VALIDATION, "the provided document must map to a dictionary"
        )
    return data


def load_document(path: Union[str, Path]) -> Dict[str, Any]:
    """Read and parse a YAML or JSON document from ``path``.

    Raises:
        FileNotFoundError: If the file does not exist.
        GraphkitError: VALIDATION as in :func:`loads_document`.
    """
    return loads_document(Path(path).read_text(encoding="utf-8"))


def _get(data: Mapping[str, Any], *names: str, required: bool = True) -> Any:
    for name in names:
        if name in data:
            return data[name]
    if required:
        raise fail(ErrorKind.VALIDATION, f"missing required field '{names[0]}'")
    return None


def _as_list(value: Any, field_name: str) -> List[Any]:
    if not isinstance(value, list):
        raise fail(ErrorKind.VALIDATION, f"'{field_name}' must be a list")
    return value


def parse_graph_document(data: Mapping[str, Any]) -> Tuple[Any, List[Any]]:
    """Return ``(vertex_count, edges)`` from a graph document."""
    vertex_count = _get(data, "vertexCount", "vertex_count")
    edges = _as_list(_get(data, "edges"), "edges")
    return vertex_count, edges


def parse_labeled_graph_document(data: Mapping[str, Any]) -> Tuple[List[Any], List[Any]]:
    """Return ``(vertices, edges)`` from a labeled graph document."""
    vertices = _as_list(_get(data, "vertices"), "vertices")
    edges = _as_list(_get(data, "edges"), "edges")
    return vertices, edges


@dataclass(frozen=True)
class FlowDocument:
    """Parsed max-flow document; exactly one network form is set."""

    source: Any
    sink: Any
    vertex_count: Any = None
    edges: Optional[List[Any]] = None
    capacity_matrix: Optional[List[Any]] = None
    capacities: Optional[Dict[Any, Any]] = None


def parse_flow_document(data: Mapping[str, Any]) -> FlowDocument:
    """Return the network and terminals of a max-flow document.

    The network is taken from ``capacityMatrix`` if present, then from a
    ``capacities`` mapping (with ``vertexCount``), then from ``vertexCount``
    and ``edges``.
    """
    source = _get(data, "source")
    sink = _get(data, "sink")
    matrix = _get(data, "capacityMatrix", "capacity_matrix", required=False)
    if matrix is not None:
        return FlowDocument(
            source=source, sink=sink, capacity_matrix=_as_list(matrix, "capacityMatrix")
        )
    capacities = _get(data, "capacities", required=False)
    if capacities is not None:
        if not isinstance(capacities, dict):
            raise fail(ErrorKind.VALIDATION, "'capacities' must be a mapping")
        return FlowDocument(
            source=source,
            sink=sink,
            vertex_count=_get(data, "vertexCount", "vertex_count"),
            capacities=capacities,
        )
    vertex_count, edges = parse_graph_document(data)
    return FlowDocument(source=source, sink=sink, vertex_count=vertex_count, edges=edges)


def parse_schedule_document(data: Mapping[str, Any]) -> Tuple[Any, List[Any]]:
    """Return ``(task_count, conflicts)`` from a schedule document."""
    task_count = _get(data, "taskCount", "task_count")
    conflicts = _as_list(_get(data, "conflicts"), "conflicts")
    return task_count, conflicts


def _run_critical(
    data: Mapping[str, Any], limits: Optional[SizeLimits], logger: Optional[logging.Logger]
) -> Result:
    vertex_count, edges = parse_graph_document(data)
    multigraph = _get(data, "multigraph", required=False)
    if multigraph is None:
        multigraph = False
    elif not isinstance(multigraph, bool):
        raise fail(
            ErrorKind.VALIDATION,
            f"'multigraph' must be a boolean, got {type(multigraph).__name__}",
        )
    return critical_connections(
        vertex_count, edges, multigraph=multigraph, limits=limits, logger=logger
    )


def _run_shortest_paths(
    data: Mapping[str, Any], limits: Optional[SizeLimits], logger: Optional[logging.Logger]
) -> Result:
    if "vertices" in data:
        vertices, edges = parse_labeled_graph_document(data)
        return shortest_paths_by_label(vertices, edges, limits=limits, logger=logger)
    vertex_count, edges = parse_graph_document(data)
    return shortest_paths(vertex_count, edges, limits=limits, logger=logger)


def _run_max_flow(
    data: Mapping[str, Any], limits: Optional[SizeLimits], logger: Optional[logging.Logger]
) -> Result:
    doc = parse_flow_document(data)
    if doc.capacity_matrix is not None:
        return max_flow_from_matrix(
            doc.capacity_matrix, doc.source, doc.sink, limits=limits, logger=logger
        )
    if doc.capacities is not None:
        return max_flow_from_capacities(
            doc.vertex_count, doc.capacities, doc.source, doc.sink, limits=limits, logger=logger
        )
    return max_flow(
        doc.vertex_count, doc.edges, doc.source, doc.sink, limits=limits, logger=logger
    )


def _run_schedule(
    data: Mapping[str, Any], limits: Optional[SizeLimits], logger: Optional[logging.Logger]
) -> Result:
    task_count, conflicts = parse_schedule_document(data)
    strategy = _get(data, "strategy", required=False)
    if strategy is None:
        strategy = ColoringStrategy.SEQUENTIAL
    return schedule_tasks(
        task_count, conflicts, strategy=strategy, limits=limits, logger=logger
    )


_RUNNERS: Dict[
    str,
    Callable[[Mapping[str, Any], Optional[SizeLimits], Optional[logging.Logger]], Result],
] = {
    "critical": _run_critical,
    "shortest-paths": _run_shortest_paths,
    "max-flow": _run_max_flow,
    "schedule": _run_schedule,
}

#: Operation names accepted by :func:`run_document`.
OPERATIONS: Tuple[str, ...] = tuple(_RUNNERS)


def run_document(
    operation: str,
    data: Mapping[str, Any],
    *,
    limits: Optional[SizeLimits] = None,
    logger: Optional[logging.Logger] = None,
) -> Result:
    """Run ``operation`` on a parsed document.

    Args:
        operation: One of :data:`OPERATIONS`.
        data: Parsed document mapping.
        limits: Optional size limits.
        logger: Optional logger.

    Returns:
        The operation's Result; document shape errors become VALIDATION
        failures.

    Raises:
        ValueError: If ``operation`` is unknown.
    """
    try:
        runner = _RUNNERS[operation]
    except KeyError:
        valid = ", ".join(OPERATIONS)
        raise ValueError(
            f"Unknown operation '{operation}'. Valid values are: {valid}"
        ) from None
    try:
        return runner(data, limits, logger)
    except GraphkitError as exc:
        return Result(error=exc.error)


def result_to_dict(result: Result) -> Dict[str, Any]:
    """Render a Result in the boundary output shape."""
    if not result.ok:
        assert result.error is not None
        return {"error": result.error.to_dict()}
    value = result.value
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        # Label-keyed shortest paths
        return {
            "shortestPaths": {
                str(src): {str(dst): d for dst, d in row.items()}
                for src, row in value.items()
            }
        }
    return {"value": value}
