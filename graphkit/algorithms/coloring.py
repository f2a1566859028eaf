"""Conflict-free slot assignment by greedy graph coloring.

Tasks are vertices; a declared conflict (two tasks sharing a resource) is an
undirected edge. Tasks are visited in a fixed order and each takes the
smallest slot not already held by a conflicting task.

This is a sequential greedy heuristic, not a chromatic-number solver. It
guarantees that conflicting tasks never share a slot and uses at most
``max_degree + 1`` slots, but the number of slots can exceed the optimum and
depends on the visiting order. That is the intended policy; there is no
backtracking.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Set, Union

from graphkit.config import SizeLimits
from graphkit.graph.model import Graph, build_graph, validate_vertex_count
from graphkit.logging import get_logger
from graphkit.types.base import ColoringStrategy, ErrorKind
from graphkit.types.dto import Schedule
from graphkit.types.result import fail, returns_result

_logger = get_logger(__name__)


def coloring_order(
    neighbors: List[Set[int]], strategy: ColoringStrategy = ColoringStrategy.SEQUENTIAL
) -> List[int]:
    """Return the order in which tasks receive slots."""
    order = list(range(len(neighbors)))
    if strategy == ColoringStrategy.LARGEST_FIRST:
        order.sort(key=lambda task: (-len(neighbors[task]), task))
    return order


def greedy_coloring(
    graph: Graph,
    *,
    strategy: ColoringStrategy = ColoringStrategy.SEQUENTIAL,
    logger: Optional[logging.Logger] = None,
) -> Schedule:
    """Assign each task the smallest slot unused by its conflicting tasks.

    The conflict relation is symmetric: an edge given in one direction binds
    both tasks. Self-loops and duplicate pairs have no effect.

    Args:
        graph: Conflict graph; vertices are task indices.
        strategy: Visiting order. ``SEQUENTIAL`` (ascending index) is the
            default policy.
        logger: Optional logger.

    Returns:
        Schedule with a slot for every task and the number of slots used.
    """
    log = logger or _logger
    neighbors = graph.neighbor_sets()
    assignments: Dict[int, int] = {}

    for task in coloring_order(neighbors, strategy):
        taken = {assignments[n] for n in neighbors[task] if n in assignments}
        slot = 0
        while slot in taken:
            slot += 1
        assignments[task] = slot
        log.debug(f"Assigned slot {slot} to task {task}")

    total_slots = len(set(assignments.values()))
    log.info(
        f"Scheduled {graph.vertex_count} tasks into {total_slots} slots "
        f"({strategy.name.lower()} order)"
    )
    return Schedule(
        assignments=dict(sorted(assignments.items())), total_slots=total_slots
    )


@returns_result("schedule_tasks", _logger)
def schedule_tasks(
    task_count: Any,
    conflicts: Optional[Sequence[Any]],
    *,
    strategy: Union[ColoringStrategy, str] = ColoringStrategy.SEQUENTIAL,
    limits: Optional[SizeLimits] = None,
    logger: Optional[logging.Logger] = None,
) -> Schedule:
    """Validate a conflict list and assign conflict-free slots.

    Pairs with fewer than two task indices are skipped; a pair naming a task
    outside ``[0, task_count)`` fails the whole call with no assignment.

    Args:
        task_count: Number of tasks (``0`` yields an empty schedule).
        conflicts: ``[i, j]`` pairs of tasks that cannot share a slot.
        strategy: Visiting order for the greedy pass, as a member or its
            name (``"largest-first"``).
        limits: Optional size limits.
        logger: Optional logger.

    Returns:
        Result holding the Schedule, or a VALIDATION error.
    """
    if not isinstance(strategy, ColoringStrategy):
        try:
            strategy = ColoringStrategy.from_string(str(strategy))
        except ValueError as exc:
            raise fail(ErrorKind.VALIDATION, str(exc)) from None
    validate_vertex_count(task_count, what="task count")
    graph = build_graph(task_count, conflicts, entry_name="conflict", logger=logger)
    if limits is not None:
        limits.check("schedule_tasks", graph.vertex_count, len(graph.edges))
    return greedy_coloring(graph, strategy=strategy, logger=logger)
