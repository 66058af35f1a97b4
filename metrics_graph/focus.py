"""
metrics_graph/focus.py

Focus-mode highlighting for the metric map.

Selecting a metric lights up its direct neighbours (primary), its
two-hop neighbours (secondary) and dims everything else.  The state is a
plain immutable value; opacity and edge visibility are derived from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.config import get_focus_settings
from metrics_graph.queries import get_two_degrees_of_connections
from metrics_graph.validation import MetricsGraph

SELECTED_OPACITY = 1.0
PRIMARY_OPACITY = 0.8
SECONDARY_OPACITY = 0.6


@dataclass(frozen=True)
class FocusState:
    """Current selection and its highlighted neighbourhood."""

    selected_metric_id: Optional[str] = None
    primary_connections: tuple[str, ...] = ()
    secondary_connections: tuple[str, ...] = ()

    @classmethod
    def for_metric(
        cls,
        metric_id: Optional[str],
        graph: Optional[MetricsGraph] = None,
    ) -> "FocusState":
        """Build the focus state for *metric_id*; ``None`` clears the focus."""
        if metric_id is None:
            return cls()
        tiers = get_two_degrees_of_connections(metric_id, graph)
        return cls(
            selected_metric_id=metric_id,
            primary_connections=tiers.primary,
            secondary_connections=tiers.secondary,
        )

    @property
    def is_active(self) -> bool:
        return self.selected_metric_id is not None

    def highlighted(self) -> frozenset[str]:
        """Selected metric plus both connection tiers."""
        if self.selected_metric_id is None:
            return frozenset()
        return frozenset(
            {self.selected_metric_id, *self.primary_connections, *self.secondary_connections}
        )


def get_metric_opacity(
    metric_id: str,
    focus: FocusState,
    dimmed_opacity: Optional[float] = None,
) -> float:
    """
    Opacity for *metric_id* under *focus*.

    1.0 with no focus or for the selected metric, 0.8 for primary, 0.6
    for secondary, otherwise *dimmed_opacity* (``FOCUS_DIMMED_OPACITY``,
    0.2 by default).  Primary wins over secondary.
    """
    if not focus.is_active or metric_id == focus.selected_metric_id:
        return SELECTED_OPACITY
    if metric_id in focus.primary_connections:
        return PRIMARY_OPACITY
    if metric_id in focus.secondary_connections:
        return SECONDARY_OPACITY
    if dimmed_opacity is None:
        dimmed_opacity = get_focus_settings().dimmed_opacity
    return dimmed_opacity


def should_show_connection(source_id: str, target_id: str, focus: FocusState) -> bool:
    """An edge is drawn when there is no focus or both endpoints are highlighted."""
    if not focus.is_active:
        return True
    highlighted = focus.highlighted()
    return source_id in highlighted and target_id in highlighted
