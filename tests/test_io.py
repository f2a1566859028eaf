import json
from pathlib import Path

import pytest

from graphkit.io import (
    OPERATIONS,
    load_document,
    loads_document,
    parse_flow_document,
    parse_graph_document,
    parse_labeled_graph_document,
    parse_schedule_document,
    result_to_dict,
    run_document,
)
from graphkit.types.base import UNREACHABLE, ErrorKind
from graphkit.types.result import GraphkitError, Result


class TestLoading:
    def test_yaml(self):
        data = loads_document(
            """
vertexCount: 3
edges:
  - [0, 1]
  - [1, 2]
"""
        )

        assert data == {"vertexCount": 3, "edges": [[0, 1], [1, 2]]}

    def test_json_is_accepted(self):
        data = loads_document(json.dumps({"taskCount": 2, "conflicts": [[0, 1]]}))

        assert data["conflicts"] == [[0, 1]]

    def test_empty_document(self):
        assert loads_document("") == {}

    def test_invalid_yaml(self):
        with pytest.raises(GraphkitError) as exc_info:
            loads_document("edges: [0, 1")
        assert exc_info.value.kind == ErrorKind.VALIDATION
        assert exc_info.value.error.cause is not None

    def test_top_level_must_be_mapping(self):
        with pytest.raises(GraphkitError, match="must map to a dictionary"):
            loads_document("- 1\n- 2\n")

    def test_load_from_file(self, tmp_path: Path):
        path = tmp_path / "g.yaml"
        path.write_text("vertexCount: 1\nedges: []\n")

        assert load_document(path) == {"vertexCount": 1, "edges": []}

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_document(tmp_path / "absent.yaml")


class TestParsing:
    def test_graph_document_aliases(self):
        assert parse_graph_document({"vertex_count": 2, "edges": []}) == (2, [])

    def test_graph_document_missing_field(self):
        with pytest.raises(GraphkitError, match="missing required field 'vertexCount'"):
            parse_graph_document({"edges": []})

    def test_edges_must_be_list(self):
        with pytest.raises(GraphkitError, match="'edges' must be a list"):
            parse_graph_document({"vertexCount": 2, "edges": {"a": 1}})

    def test_schedule_document(self):
        data = {"taskCount": 3, "conflicts": [[0, 1]]}

        assert parse_schedule_document(data) == (3, [[0, 1]])

    def test_labeled_document(self):
        data = {"vertices": ["A"], "edges": []}

        assert parse_labeled_graph_document(data) == (["A"], [])

    def test_flow_document_prefers_matrix(self):
        doc = parse_flow_document(
            {"capacityMatrix": [[0, 1], [0, 0]], "edges": [], "source": 0, "sink": 1}
        )

        assert doc.capacity_matrix == [[0, 1], [0, 0]]
        assert doc.edges is None

    def test_flow_document_edges(self):
        doc = parse_flow_document(
            {"vertexCount": 2, "edges": [[0, 1, 4]], "source": 0, "sink": 1}
        )

        assert (doc.vertex_count, doc.edges, doc.source, doc.sink) == (2, [[0, 1, 4]], 0, 1)


class TestRunDocument:
    def test_operations(self):
        assert OPERATIONS == ("critical", "shortest-paths", "max-flow", "schedule")

    def test_critical(self):
        data = {"vertexCount": 5, "edges": [[0, 1], [1, 2], [2, 0], [1, 3], [3, 4]]}

        payload = result_to_dict(run_document("critical", data))

        assert payload == {"bridges": ["1-3", "3-4"], "articulationPoints": [1, 3]}

    def test_critical_multigraph_flag(self):
        data = {"vertexCount": 2, "edges": [[0, 1], [0, 1]], "multigraph": True}

        assert run_document("critical", data).unwrap().bridges == ()

    @pytest.mark.parametrize("flag", [False, None])
    def test_critical_multigraph_flag_off(self, flag):
        data = {"vertexCount": 2, "edges": [[0, 1], [0, 1]], "multigraph": flag}

        assert run_document("critical", data).unwrap().bridges == ((0, 1),)

    @pytest.mark.parametrize("flag", ["false", "true", 1])
    def test_critical_multigraph_flag_must_be_boolean(self, flag):
        data = {"vertexCount": 2, "edges": [[0, 1], [0, 1]], "multigraph": flag}

        result = run_document("critical", data)

        assert result.error.kind == ErrorKind.VALIDATION
        assert "'multigraph' must be a boolean" in result.error.message

    def test_shortest_paths(self):
        data = {"vertexCount": 2, "edges": [[0, 1, -3]]}

        payload = result_to_dict(run_document("shortest-paths", data))

        assert payload["shortestPaths"]["0"]["1"] == -3
        assert payload["shortestPaths"]["1"]["0"] == UNREACHABLE

    def test_shortest_paths_labeled(self):
        data = {"vertices": ["A", "B"], "edges": [{"from": "A", "to": "B", "weight": 4}]}

        payload = result_to_dict(run_document("shortest-paths", data))

        assert payload == {"shortestPaths": {"A": {"A": 0, "B": 4}, "B": {"A": UNREACHABLE, "B": 0}}}

    def test_negative_cycle_payload(self):
        data = {"vertexCount": 2, "edges": [[0, 1, -1], [1, 0, -1]]}

        payload = result_to_dict(run_document("shortest-paths", data))

        assert payload["error"]["kind"] == "NEGATIVE_CYCLE"

    def test_max_flow_edges(self):
        data = {
            "vertexCount": 4,
            "edges": [[0, 1, 3], [0, 2, 2], [1, 3, 2], [2, 3, 3]],
            "source": 0,
            "sink": 3,
        }

        assert result_to_dict(run_document("max-flow", data))["maxFlow"] == 4

    def test_max_flow_matrix(self):
        data = {"capacityMatrix": [[0, 5], [0, 0]], "source": 0, "sink": 1}

        assert run_document("max-flow", data).unwrap().total_flow == 5

    def test_max_flow_capacities(self):
        data = {"vertexCount": 2, "capacities": {"0": {"1": 6}}, "source": 0, "sink": 1}

        assert run_document("max-flow", data).unwrap().total_flow == 6

    def test_max_flow_capacities_must_be_mapping(self):
        data = {"vertexCount": 2, "capacities": [1], "source": 0, "sink": 1}

        result = run_document("max-flow", data)

        assert result.error.kind == ErrorKind.VALIDATION

    def test_max_flow_missing_sink(self):
        data = {"vertexCount": 2, "edges": [], "source": 0}

        result = run_document("max-flow", data)

        assert result.error.kind == ErrorKind.VALIDATION
        assert "sink" in result.error.message

    def test_schedule(self):
        data = {"taskCount": 4, "conflicts": [[0, 1], [1, 2], [2, 3]]}

        payload = result_to_dict(run_document("schedule", data))

        assert payload == {"assignments": {"0": 0, "1": 1, "2": 0, "3": 1}, "totalSlots": 2}

    def test_schedule_strategy(self):
        data = {"taskCount": 2, "conflicts": [], "strategy": "largest-first"}

        assert run_document("schedule", data).ok

    def test_schedule_bad_strategy(self):
        data = {"taskCount": 2, "conflicts": [], "strategy": "optimal"}

        result = run_document("schedule", data)

        assert result.error.kind == ErrorKind.VALIDATION
        assert "Invalid coloring strategy" in result.error.message

    def test_unknown_operation(self):
        with pytest.raises(ValueError, match="Unknown operation 'bogus'"):
            run_document("bogus", {})


def test_result_to_dict_error_shape():
    result = Result.failure(ErrorKind.VALIDATION, "bad", index=2)

    assert result_to_dict(result) == {
        "error": {"kind": "VALIDATION", "message": "bad", "context": {"index": 2}}
    }
