"""
metrics_graph/validation.py

Construction-time checks for the hand-authored relationship graph.

The traversal helpers bound their walks by depth and rely on the graph
being a DAG.  :func:`build_metrics_graph` therefore rejects, before the
graph is ever queried:

- references to ids that have no relationship entry, and
- any directed cycle over the union of ``inputs`` and ``outputs`` edges.
"""

from __future__ import annotations

from dataclasses import dataclass
from graphlib import CycleError, TopologicalSorter
from types import MappingProxyType
from typing import Iterable, Mapping


class MetricsGraphError(ValueError):
    """Raised when the relationship graph is malformed."""


class MetricsGraphReferenceError(MetricsGraphError):
    """Raised when a relationship references an undefined metric id."""


class MetricsGraphCycleError(MetricsGraphError):
    """Raised when the relationship graph contains a directed cycle."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__(f"Metrics graph contains a cycle: {' -> '.join(cycle)}")


@dataclass(frozen=True)
class MetricRelationship:
    """Metrics feeding into one metric, and metrics it feeds."""

    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()


MetricsGraph = Mapping[str, MetricRelationship]


def _predecessors(graph: MetricsGraph) -> dict[str, set[str]]:
    """Merge both edge directions into one predecessor map."""
    preds: dict[str, set[str]] = {metric_id: set() for metric_id in graph}
    for metric_id, relationship in graph.items():
        preds[metric_id].update(relationship.inputs)
        for output_id in relationship.outputs:
            preds[output_id].add(metric_id)
    return preds


def _check_references(graph: MetricsGraph) -> None:
    missing: list[str] = []
    for metric_id, relationship in graph.items():
        for ref in (*relationship.inputs, *relationship.outputs):
            if ref not in graph:
                missing.append(f"{metric_id} -> {ref}")
    if missing:
        raise MetricsGraphReferenceError(
            "Metrics graph references undefined metric ids: " + ", ".join(missing)
        )


def topological_order(graph: MetricsGraph) -> tuple[str, ...]:
    """
    Return the metric ids in a leaf-first (inputs before outputs) order.

    Raises
    ------
    MetricsGraphCycleError
        If any directed cycle exists.
    """
    sorter = TopologicalSorter(_predecessors(graph))
    try:
        return tuple(sorter.static_order())
    except CycleError as exc:
        raise MetricsGraphCycleError(list(exc.args[1])) from exc


def build_metrics_graph(
    raw: Mapping[str, Mapping[str, Iterable[str]]],
) -> Mapping[str, MetricRelationship]:
    """
    Freeze and validate a raw ``{id: {"inputs": [...], "outputs": [...]}}`` mapping.

    Parameters
    ----------
    raw:
        Hand-authored relationship data.

    Returns
    -------
    Mapping[str, MetricRelationship]
        Read-only mapping safe to share between callers.

    Raises
    ------
    MetricsGraphReferenceError
        If an edge points at an id without its own entry.
    MetricsGraphCycleError
        If the edges form a cycle.
    """
    graph = {
        metric_id: MetricRelationship(
            inputs=tuple(entry.get("inputs", ())),
            outputs=tuple(entry.get("outputs", ())),
        )
        for metric_id, entry in raw.items()
    }
    _check_references(graph)
    topological_order(graph)
    return MappingProxyType(graph)
