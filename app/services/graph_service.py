"""
app/services/graph_service.py

Read-side service over the metric relationship graph.

The traversal helpers in :mod:`metrics_graph.queries` are lenient and
return empty results for unknown ids.  This service is the strict entry
point used by the API: unknown ids raise :class:`MetricNotFoundError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal, Optional

from app.config import get_focus_settings
from kpi.definitions import get_metric_label
from metrics_graph.focus import FocusState, get_metric_opacity, should_show_connection
from metrics_graph.queries import (
    DirectConnections,
    MetricEdge,
    get_direct_connections,
    get_downstream_path,
    get_edges,
    get_upstream_path,
)
from metrics_graph.relationships import METRICS_RELATIONSHIPS, MetricTier, get_metric_tier
from metrics_graph.validation import MetricsGraph

logger = logging.getLogger(__name__)


class MetricNotFoundError(ValueError):
    """
    Raised when a metric id has no node in the relationship graph.
    """

    def __init__(self, metric_id: str) -> None:
        self.metric_id = metric_id
        super().__init__(f"Metric '{metric_id}' is not part of the relationship graph.")


@dataclass(frozen=True)
class MetricNode:
    id: str
    label: str
    tier: MetricTier
    connections: DirectConnections


@dataclass(frozen=True)
class FocusView:
    """
    Focus state for one selected metric, resolved over every node and edge.
    """

    state: FocusState
    opacity: dict[str, float]
    visible_edges: list[MetricEdge]


class GraphService:
    """
    Strict lookups, paths and focus views over a validated graph.
    """

    def __init__(
        self,
        graph: Optional[MetricsGraph] = None,
        dimmed_opacity: float = 0.2,
        max_path_depth: int = 3,
    ) -> None:
        self._graph = METRICS_RELATIONSHIPS if graph is None else graph
        self._dimmed_opacity = dimmed_opacity
        self._max_path_depth = max_path_depth

    @property
    def default_max_depth(self) -> int:
        return self._max_path_depth

    def _require(self, metric_id: str) -> None:
        if metric_id not in self._graph:
            raise MetricNotFoundError(metric_id)

    def node(self, metric_id: str) -> MetricNode:
        self._require(metric_id)
        return MetricNode(
            id=metric_id,
            label=get_metric_label(metric_id),
            tier=get_metric_tier(metric_id),
            connections=get_direct_connections(metric_id, self._graph),
        )

    def nodes(self) -> list[MetricNode]:
        return [self.node(metric_id) for metric_id in self._graph]

    def edges(self) -> list[MetricEdge]:
        return get_edges(self._graph)

    def path(
        self,
        metric_id: str,
        direction: Literal["upstream", "downstream"],
        max_depth: Optional[int] = None,
    ) -> list[str]:
        """
        Upstream or downstream BFS path from *metric_id*.

        *max_depth* defaults to ``GRAPH_MAX_PATH_DEPTH``.
        """
        self._require(metric_id)
        depth = self._max_path_depth if max_depth is None else max_depth
        if direction == "upstream":
            return get_upstream_path(metric_id, depth, self._graph)
        return get_downstream_path(metric_id, depth, self._graph)

    def focus(self, metric_id: str) -> FocusView:
        """
        Focus view with per-node opacity and the edges left visible.
        """
        self._require(metric_id)
        state = FocusState.for_metric(metric_id, self._graph)
        opacity = {
            node_id: get_metric_opacity(node_id, state, self._dimmed_opacity)
            for node_id in self._graph
        }
        visible = [
            edge
            for edge in get_edges(self._graph)
            if should_show_connection(edge.source, edge.target, state)
        ]
        logger.debug(
            "Focus on %s: %d primary, %d secondary, %d visible edges",
            metric_id,
            len(state.primary_connections),
            len(state.secondary_connections),
            len(visible),
        )
        return FocusView(state=state, opacity=opacity, visible_edges=visible)


@lru_cache(maxsize=1)
def get_graph_service() -> GraphService:
    """
    Build and cache the graph service with env-driven focus settings.
    """
    settings = get_focus_settings()
    return GraphService(
        dimmed_opacity=settings.dimmed_opacity,
        max_path_depth=settings.max_path_depth,
    )
