import random

import pytest

from graphkit.algorithms.coloring import coloring_order, greedy_coloring, schedule_tasks
from graphkit.graph.model import build_graph
from graphkit.types.base import ColoringStrategy, ErrorKind


def _assert_conflict_free(schedule, conflicts):
    for i, j in conflicts:
        if i != j:
            assert schedule.assignments[i] != schedule.assignments[j]


class TestScheduleTasks:
    def test_chain_alternates_two_slots(self, conflict_chain_4):
        schedule = schedule_tasks(*conflict_chain_4).unwrap()

        assert schedule.assignments == {0: 0, 1: 1, 2: 0, 3: 1}
        assert schedule.total_slots == 2

    def test_complete_graph_needs_k_slots(self, conflict_complete_5):
        k, conflicts = conflict_complete_5
        schedule = schedule_tasks(k, conflicts).unwrap()

        assert schedule.total_slots == k
        assert sorted(schedule.assignments.values()) == list(range(k))

    def test_no_conflicts_uses_one_slot(self):
        schedule = schedule_tasks(3, []).unwrap()

        assert schedule.assignments == {0: 0, 1: 0, 2: 0}
        assert schedule.total_slots == 1

    def test_zero_tasks(self):
        schedule = schedule_tasks(0, []).unwrap()

        assert schedule.assignments == {}
        assert schedule.total_slots == 0

    def test_one_direction_binds_both(self):
        schedule = schedule_tasks(2, [[1, 0]]).unwrap()

        assert schedule.assignments[0] != schedule.assignments[1]

    def test_self_loops_and_duplicates_have_no_effect(self, conflict_chain_4):
        n, conflicts = conflict_chain_4
        noisy = conflicts + [[0, 0], [2, 2], [1, 0], [0, 1], [3, 2]]

        assert schedule_tasks(n, noisy).value == schedule_tasks(n, conflicts).value

    def test_short_pairs_are_skipped(self):
        schedule = schedule_tasks(2, [[0], [0, 1]]).unwrap()

        assert schedule.total_slots == 2

    def test_greedy_is_order_dependent(self):
        # Crown graph on 6 vertices: 2-colorable, but ascending order pairs
        # 0/1, 2/3 and 4/5 so that the greedy pass needs 3 slots.
        conflicts = [[0, 3], [0, 5], [1, 2], [1, 4], [2, 5], [3, 4]]
        schedule = schedule_tasks(6, conflicts).unwrap()

        assert schedule.total_slots == 3
        _assert_conflict_free(schedule, conflicts)

    def test_tasks_in_slot(self, conflict_chain_4):
        schedule = schedule_tasks(*conflict_chain_4).unwrap()

        assert schedule.tasks_in_slot(0) == (0, 2)
        assert schedule.tasks_in_slot(1) == (1, 3)

    def test_to_dict_shape(self, conflict_chain_4):
        payload = schedule_tasks(*conflict_chain_4).unwrap().to_dict()

        assert payload == {
            "assignments": {"0": 0, "1": 1, "2": 0, "3": 1},
            "totalSlots": 2,
        }

    def test_idempotent(self, conflict_complete_5):
        first = schedule_tasks(*conflict_complete_5)
        second = schedule_tasks(*conflict_complete_5)

        assert first.value == second.value


class TestValidation:
    def test_out_of_range_task(self):
        result = schedule_tasks(3, [[0, 1], [1, 3]])

        assert not result.ok
        assert result.value is None
        assert result.error.kind == ErrorKind.VALIDATION
        assert "conflict[1] endpoint 3 is out of range [0, 3)" in result.error.message

    def test_negative_task(self):
        result = schedule_tasks(3, [[-1, 1]])

        assert result.error.kind == ErrorKind.VALIDATION

    def test_missing_task_count(self):
        result = schedule_tasks(None, [])

        assert result.error.kind == ErrorKind.VALIDATION
        assert result.error.message == "task count is missing"

    def test_missing_conflicts(self):
        result = schedule_tasks(2, None)

        assert result.error.kind == ErrorKind.VALIDATION
        assert result.error.message == "conflict list is missing"


class TestStrategies:
    def test_largest_first_order(self):
        neighbors = [{1}, {0, 2, 3}, {1}, {1}]

        assert coloring_order(neighbors) == [0, 1, 2, 3]
        assert coloring_order(neighbors, ColoringStrategy.LARGEST_FIRST) == [1, 0, 2, 3]

    def test_largest_first_is_conflict_free_on_crown(self):
        conflicts = [[0, 3], [0, 5], [1, 2], [1, 4], [2, 5], [3, 4]]
        schedule = schedule_tasks(
            6, conflicts, strategy=ColoringStrategy.LARGEST_FIRST
        ).unwrap()

        _assert_conflict_free(schedule, conflicts)
        assert sorted(schedule.assignments) == list(range(6))

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("sequential", ColoringStrategy.SEQUENTIAL),
            ("largest-first", ColoringStrategy.LARGEST_FIRST),
            ("LARGEST_FIRST", ColoringStrategy.LARGEST_FIRST),
        ],
    )
    def test_strategy_from_string(self, text, expected):
        assert ColoringStrategy.from_string(text) == expected

    def test_strategy_from_string_invalid(self):
        with pytest.raises(ValueError, match="Invalid coloring strategy"):
            ColoringStrategy.from_string("random")

    def test_schedule_accepts_strategy_name(self):
        conflicts = [[0, 3], [0, 5], [1, 2], [1, 4], [2, 5], [3, 4]]

        by_name = schedule_tasks(6, conflicts, strategy="largest-first")
        by_member = schedule_tasks(6, conflicts, strategy=ColoringStrategy.LARGEST_FIRST)

        assert by_name.ok
        assert by_name.value == by_member.value

    def test_schedule_rejects_unknown_strategy_name(self):
        result = schedule_tasks(2, [], strategy="optimal")

        assert result.error.kind == ErrorKind.VALIDATION
        assert "Invalid coloring strategy" in result.error.message


@pytest.mark.parametrize("seed", range(20))
def test_random_graphs_are_conflict_free_within_degree_bound(seed):
    rng = random.Random(seed)
    n = rng.randint(1, 30)
    conflicts = [[rng.randrange(n), rng.randrange(n)] for _ in range(rng.randint(0, 3 * n))]

    graph = build_graph(n, conflicts)
    for strategy in ColoringStrategy:
        schedule = greedy_coloring(graph, strategy=strategy)

        _assert_conflict_free(schedule, conflicts)
        max_degree = max(len(s) for s in graph.neighbor_sets())
        assert schedule.total_slots <= max_degree + 1
        assert set(schedule.assignments) == set(range(n))
