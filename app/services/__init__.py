"""
app/services package marker.
"""

from app.services.graph_service import (
    GraphService,
    MetricNotFoundError,
    get_graph_service,
)
from app.services.metrics_service import (
    MetricsEvaluation,
    MetricsService,
    get_metrics_service,
)

__all__ = [
    "GraphService",
    "MetricNotFoundError",
    "get_graph_service",
    "MetricsEvaluation",
    "MetricsService",
    "get_metrics_service",
]
