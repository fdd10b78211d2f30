"""
Tests for GraphChecker - edge-by-edge type checks over a declared graph.

Tests cover:
- Valid graphs built from built-in and inline templates
- Per-edge reporting of unknown nodes, node types and fields
- The collect -> iterate exclusion on real node templates
- Drop-target listing for a dragged output
- Graph id propagation into log records
"""

import logging
import uuid

import pytest
from pydantic import ValidationError

from fieldlink.bootstrap import load_builtin_nodes
from fieldlink.core.contracts import FieldType
from fieldlink.graph_checker import GraphChecker, check_graph


def setup_function() -> None:
    load_builtin_nodes(reload=True)


def _edge(source: str, source_field: str, target: str, target_field: str) -> dict:
    return {
        "source": {"node_id": source, "field": source_field},
        "destination": {"node_id": target, "field": target_field},
    }


def _math_graph() -> dict:
    return {
        "graph_id": "math-graph",
        "nodes": [
            {"id": "a", "type": "integer"},
            {"id": "b", "type": "integer"},
            {"id": "sum", "type": "add"},
            {"id": "as_text", "type": "string_join"},
            {"id": "show", "type": "show_value"},
        ],
        "edges": [
            _edge("a", "value", "sum", "a"),
            _edge("b", "value", "sum", "b"),
            _edge("sum", "value", "as_text", "string_right"),
            _edge("sum", "value", "show", "value"),
        ],
    }


class TestValidGraphs:
    def test_builtin_math_graph_is_valid(self):
        report = GraphChecker().check(_math_graph())

        assert report.is_valid
        assert report.graph_id == "math-graph"
        assert len(report.results) == 4
        assert report.violations == []

    def test_results_record_types_and_rules(self):
        report = check_graph(_math_graph())

        exact, widened, anything = report.results[0], report.results[2], report.results[3]
        assert exact.reason == "ok"
        assert exact.matched_rules == ()
        assert widened.source_type == FieldType("IntegerField")
        assert widened.target_type == FieldType("StringField")
        assert widened.matched_rules == ("subtype_widening",)
        assert anything.matched_rules == ("target_accepts_any",)

    def test_inline_templates_shadow_registered_ones(self):
        graph = {
            "templates": {
                "integer": {"outputs": {"value": {"name": "ImageField", "isCollection": True}}},
                "blend": {"inputs": {"images": {"name": "ImageField", "isCollectionOrScalar": True}}},
            },
            "nodes": [{"id": "src", "type": "integer"}, {"id": "dst", "type": "blend"}],
            "edges": [_edge("src", "value", "dst", "images")],
        }

        report = GraphChecker().check(graph)

        assert report.is_valid
        assert report.results[0].source_type == FieldType.collection("ImageField")

    def test_empty_graph_is_valid(self):
        report = GraphChecker(graph_id="empty").check({})

        assert report.is_valid
        assert report.graph_id == "empty"
        assert report.results == []

    def test_generated_graph_id_is_uuid(self):
        report = GraphChecker().check({"nodes": [], "edges": []})

        uuid.UUID(report.graph_id)

    def test_accepts_validated_config_model(self):
        from fieldlink.models.graph_config import GraphConfig

        report = GraphChecker().check(GraphConfig.model_validate(_math_graph()))

        assert report.is_valid


class TestViolations:
    def test_collect_to_iterate_is_rejected(self):
        graph = {
            "nodes": [
                {"id": "n1", "type": "integer"},
                {"id": "collect", "type": "collect"},
                {"id": "iterate", "type": "iterate"},
            ],
            "edges": [
                _edge("n1", "value", "collect", "item"),
                _edge("collect", "collection", "iterate", "collection"),
            ],
        }

        report = GraphChecker().check(graph)

        assert not report.is_valid
        assert [v.reason for v in report.violations] == ["incompatible_types"]
        violation = report.violations[0]
        assert str(violation.edge) == "collect.collection -> iterate.collection"
        assert "excluded" in violation.message

    def test_float_to_integer_is_rejected(self):
        graph = {
            "nodes": [{"id": "f", "type": "float"}, {"id": "sum", "type": "add"}],
            "edges": [_edge("f", "value", "sum", "a")],
        }

        report = GraphChecker().check(graph)

        assert report.violations[0].reason == "incompatible_types"
        assert report.violations[0].message == "cannot connect FloatField to IntegerField (no_rule_matched)"

    def test_unknown_node_is_reported(self):
        graph = {
            "nodes": [{"id": "a", "type": "integer"}],
            "edges": [_edge("a", "value", "ghost", "value")],
        }

        report = GraphChecker().check(graph)

        assert report.violations[0].reason == "unknown_node"
        assert "'ghost'" in report.violations[0].message

    def test_unknown_node_type_is_reported(self):
        graph = {
            "nodes": [{"id": "a", "type": "integer"}, {"id": "b", "type": "no_such_node"}],
            "edges": [_edge("a", "value", "b", "value")],
        }

        report = GraphChecker().check(graph)

        assert report.violations[0].reason == "unknown_node_type"

    def test_unknown_fields_are_reported(self):
        graph = {
            "nodes": [{"id": "a", "type": "integer"}, {"id": "sum", "type": "add"}],
            "edges": [
                _edge("a", "missing", "sum", "a"),
                _edge("a", "value", "sum", "missing"),
            ],
        }

        report = GraphChecker().check(graph)

        assert [v.reason for v in report.violations] == ["unknown_field", "unknown_field"]
        assert "no output 'missing'" in report.violations[0].message
        assert "no input 'missing'" in report.violations[1].message
        assert report.violations[1].source_type == FieldType("IntegerField")

    def test_to_dict_summarizes_violations(self):
        graph = {
            "graph_id": "g1",
            "nodes": [{"id": "f", "type": "float"}, {"id": "sum", "type": "add"}],
            "edges": [_edge("f", "value", "sum", "a")],
        }

        summary = GraphChecker().check(graph).to_dict()

        assert summary == {
            "graph_id": "g1",
            "is_valid": False,
            "edge_count": 1,
            "violations": [
                {
                    "edge": "f.value -> sum.a",
                    "reason": "incompatible_types",
                    "source_type": "FloatField",
                    "target_type": "IntegerField",
                    "message": "cannot connect FloatField to IntegerField (no_rule_matched)",
                }
            ],
        }

    def test_invalid_config_raises_validation_error(self):
        with pytest.raises(ValidationError):
            GraphChecker().check({"nodes": [{"id": "a"}]})


class TestConnectableTargets:
    def test_lists_inputs_accepting_the_dragged_output(self):
        graph = {
            "nodes": [
                {"id": "f", "type": "float"},
                {"id": "sum", "type": "add"},
                {"id": "math", "type": "float_math"},
                {"id": "show", "type": "show_value"},
            ],
            "edges": [],
        }

        targets = GraphChecker().connectable_targets(graph, "f", "value")

        assert targets == [("math", "a"), ("math", "b"), ("math", "operation"), ("show", "value")]

    def test_skips_inputs_on_the_source_node(self):
        graph = {"nodes": [{"id": "i", "type": "integer"}], "edges": []}

        assert GraphChecker().connectable_targets(graph, "i", "value") == []

    def test_unknown_source_yields_nothing(self):
        graph = {"nodes": [{"id": "i", "type": "integer"}, {"id": "j", "type": "integer"}], "edges": []}

        assert GraphChecker().connectable_targets(graph, "ghost", "value") == []
        assert GraphChecker().connectable_targets(graph, "i", "missing") == []


def test_graph_id_is_attached_to_log_records(caplog):
    caplog.set_level(logging.INFO, logger="fieldlink")

    GraphChecker(graph_id="traced-graph").check(_math_graph())

    records = [r for r in caplog.records if r.name == "fieldlink.graph_checker"]
    assert records
    assert all(getattr(r, "graph_id", None) == "traced-graph" for r in records)


def test_bundled_example_graph_flags_only_collect_to_iterate():
    from pathlib import Path

    from fieldlink.cli import load_graph_file

    graph = load_graph_file(str(Path(__file__).parent.parent / "examples" / "collect_iterate_graph.json"))

    report = GraphChecker().check(graph)

    assert report.graph_id == "collect-iterate-demo"
    assert [str(v.edge) for v in report.violations] == ["collect.collection -> iterate.collection"]
