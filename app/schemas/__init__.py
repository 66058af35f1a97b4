"""
app/schemas package marker.
"""

from app.schemas.graph import (
    MetricConnectionsResponse,
    MetricEdgeResponse,
    MetricFocusResponse,
    MetricPathResponse,
)
from app.schemas.metrics import (
    IndustryDefaultsResponse,
    InputsPayload,
    KeyMetricResponse,
    MetricsCalculationResponse,
)

__all__ = [
    "IndustryDefaultsResponse",
    "InputsPayload",
    "KeyMetricResponse",
    "MetricConnectionsResponse",
    "MetricEdgeResponse",
    "MetricFocusResponse",
    "MetricPathResponse",
    "MetricsCalculationResponse",
]
