"""
app/schemas/graph.py

Response schemas for metric relationship graph endpoints.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class MetricConnectionsResponse(BaseModel):
    metric_id: str
    label: str
    tier: Literal["budget", "activities", "acquisition", "revenue", "outcomes"]
    inputs: list[str]
    outputs: list[str]


class MetricEdgeResponse(BaseModel):
    id: str
    source: str
    target: str


class MetricPathResponse(BaseModel):
    """
    Breadth-first path away from one metric.
    """

    metric_id: str
    direction: Literal["upstream", "downstream"]
    max_depth: int = Field(..., ge=0)
    path: list[str]


class MetricFocusResponse(BaseModel):
    """
    Focus-mode highlighting for one selected metric.
    """

    metric_id: str
    primary: list[str]
    secondary: list[str]
    opacity: dict[str, float]
    visible_edges: list[MetricEdgeResponse]
