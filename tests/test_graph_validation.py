"""
tests/test_graph_validation.py

Construction-time checks for hand-authored relationship graphs.
"""

from __future__ import annotations

import pytest

from metrics_graph.queries import get_downstream_path, get_two_degrees_of_connections
from metrics_graph.validation import (
    MetricRelationship,
    MetricsGraphCycleError,
    MetricsGraphError,
    MetricsGraphReferenceError,
    build_metrics_graph,
    topological_order,
)


class TestBuildMetricsGraph:
    def test_valid_graph_is_frozen(self) -> None:
        graph = build_metrics_graph(
            {
                "a": {"inputs": [], "outputs": ["b"]},
                "b": {"inputs": ["a"], "outputs": []},
            }
        )
        assert graph["b"] == MetricRelationship(inputs=("a",), outputs=())
        with pytest.raises(TypeError):
            graph["c"] = MetricRelationship()  # type: ignore[index]

    def test_missing_keys_default_to_empty(self) -> None:
        graph = build_metrics_graph({"solo": {}})
        assert graph["solo"] == MetricRelationship()

    def test_rejects_output_cycle(self) -> None:
        with pytest.raises(MetricsGraphCycleError) as excinfo:
            build_metrics_graph(
                {
                    "a": {"outputs": ["b"]},
                    "b": {"outputs": ["c"]},
                    "c": {"outputs": ["a"]},
                }
            )
        assert set(excinfo.value.cycle) >= {"a", "b", "c"}

    def test_rejects_cycle_through_inputs(self) -> None:
        with pytest.raises(MetricsGraphCycleError):
            build_metrics_graph(
                {
                    "a": {"inputs": ["b"], "outputs": ["b"]},
                    "b": {},
                }
            )

    def test_rejects_dangling_reference(self) -> None:
        with pytest.raises(MetricsGraphReferenceError, match="a -> ghost"):
            build_metrics_graph({"a": {"outputs": ["ghost"]}})

    def test_errors_are_value_errors(self) -> None:
        assert issubclass(MetricsGraphCycleError, MetricsGraphError)
        assert issubclass(MetricsGraphReferenceError, MetricsGraphError)
        assert issubclass(MetricsGraphError, ValueError)


class TestAlternativeGraph:
    @pytest.fixture()
    def chain(self):
        return build_metrics_graph(
            {
                "a": {"outputs": ["b"]},
                "b": {"inputs": ["a"], "outputs": ["c"]},
                "c": {"inputs": ["b"], "outputs": ["d"]},
                "d": {"inputs": ["c"]},
            }
        )

    def test_topological_order(self, chain) -> None:
        assert topological_order(chain) == ("a", "b", "c", "d")

    def test_queries_accept_graph(self, chain) -> None:
        assert get_downstream_path("a", max_depth=2, graph=chain) == ["b", "c"]
        tiers = get_two_degrees_of_connections("b", graph=chain)
        assert tiers.primary == ("a", "c")
        assert tiers.secondary == ("d",)
