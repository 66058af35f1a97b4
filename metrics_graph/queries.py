"""
metrics_graph/queries.py

Read-only traversals over the metric relationship graph.

Every function accepts an optional ``graph`` argument so callers (and
tests) can query an alternative validated graph; it defaults to
:data:`metrics_graph.relationships.METRICS_RELATIONSHIPS`.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Literal, Optional

from metrics_graph.relationships import METRICS_RELATIONSHIPS
from metrics_graph.validation import MetricsGraph

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 3


@dataclass(frozen=True)
class DirectConnections:
    """Immediate neighbours of one metric."""

    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()


@dataclass(frozen=True)
class ConnectionTiers:
    """Direct neighbours (``primary``) and two-hop neighbours (``secondary``)."""

    primary: tuple[str, ...] = ()
    secondary: tuple[str, ...] = ()


@dataclass(frozen=True)
class MetricEdge:
    """One directed edge, source feeding target."""

    id: str
    source: str
    target: str


# ---------------------------------------------------------------------------
# Direct and two-degree neighbourhoods
# ---------------------------------------------------------------------------


def get_direct_connections(
    metric_id: str,
    graph: Optional[MetricsGraph] = None,
) -> DirectConnections:
    """
    Return the ``inputs`` and ``outputs`` lists of *metric_id*.

    Unknown ids return empty lists and log a warning.
    """
    graph = METRICS_RELATIONSHIPS if graph is None else graph
    relationship = graph.get(metric_id)
    if relationship is None:
        logger.warning("Metric %s not found in relationships graph", metric_id)
        return DirectConnections()
    return DirectConnections(inputs=relationship.inputs, outputs=relationship.outputs)


def get_two_degrees_of_connections(
    metric_id: str,
    graph: Optional[MetricsGraph] = None,
) -> ConnectionTiers:
    """
    Split the neighbourhood of *metric_id* into primary and secondary tiers.

    ``primary`` is ``inputs + outputs`` of the metric.  ``secondary`` is
    the inputs of every direct input followed by the outputs of every
    direct output, de-duplicated in first-seen order, with anything
    already in ``primary`` removed.  The metric itself may appear in
    ``secondary`` when two of its neighbours share it.
    """
    graph = METRICS_RELATIONSHIPS if graph is None else graph
    direct = get_direct_connections(metric_id, graph)
    primary = (*direct.inputs, *direct.outputs)

    candidates: list[str] = []
    for input_id in direct.inputs:
        upstream = graph.get(input_id)
        if upstream is not None:
            candidates.extend(upstream.inputs)
    for output_id in direct.outputs:
        downstream = graph.get(output_id)
        if downstream is not None:
            candidates.extend(downstream.outputs)

    primary_set = set(primary)
    secondary = [
        candidate
        for candidate in dict.fromkeys(candidates)
        if candidate not in primary_set
    ]
    return ConnectionTiers(primary=primary, secondary=tuple(secondary))


# ---------------------------------------------------------------------------
# Depth-bounded paths
# ---------------------------------------------------------------------------


def _walk(
    start_id: str,
    direction: Literal["inputs", "outputs"],
    max_depth: int,
    graph: MetricsGraph,
) -> list[str]:
    visited: set[str] = set()
    path: list[str] = []
    queue: deque[tuple[str, int]] = deque([(start_id, 0)])

    while queue:
        metric_id, depth = queue.popleft()
        if metric_id in visited or depth > max_depth:
            continue
        visited.add(metric_id)
        if metric_id != start_id:
            path.append(metric_id)

        relationship = graph.get(metric_id)
        if relationship is None:
            continue
        for neighbour in getattr(relationship, direction):
            if neighbour not in visited:
                queue.append((neighbour, depth + 1))

    return path


def get_upstream_path(
    metric_id: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    graph: Optional[MetricsGraph] = None,
) -> list[str]:
    """
    Breadth-first list of metrics feeding *metric_id*, at most *max_depth* hops away.

    The start metric is excluded and every id appears at most once.
    """
    graph = METRICS_RELATIONSHIPS if graph is None else graph
    return _walk(metric_id, "inputs", max_depth, graph)


def get_downstream_path(
    metric_id: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    graph: Optional[MetricsGraph] = None,
) -> list[str]:
    """Breadth-first list of metrics fed by *metric_id*; mirror of :func:`get_upstream_path`."""
    graph = METRICS_RELATIONSHIPS if graph is None else graph
    return _walk(metric_id, "outputs", max_depth, graph)


# ---------------------------------------------------------------------------
# Edges and lookup
# ---------------------------------------------------------------------------


def get_edges(graph: Optional[MetricsGraph] = None) -> list[MetricEdge]:
    """One edge per ``outputs`` entry, in graph declaration order."""
    graph = METRICS_RELATIONSHIPS if graph is None else graph
    return [
        MetricEdge(id=f"{source}-{target}", source=source, target=target)
        for source, relationship in graph.items()
        for target in relationship.outputs
    ]


def search_metric_ids(query: str, graph: Optional[MetricsGraph] = None) -> list[str]:
    """
    Case-insensitive substring search over metric ids.

    Hyphens and spaces are interchangeable, so ``"net new"`` matches
    ``net-new-arr``.  An empty query returns nothing.
    """
    graph = METRICS_RELATIONSHIPS if graph is None else graph
    needle = query.strip().lower().replace(" ", "-")
    if not needle:
        return []
    return [metric_id for metric_id in graph if needle in metric_id]
