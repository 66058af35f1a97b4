"""
app/api/routers/graph_router.py

Read-only endpoints over the metric relationship graph.

Unknown metric ids return 404.
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.schemas.graph import (
    MetricConnectionsResponse,
    MetricEdgeResponse,
    MetricFocusResponse,
    MetricPathResponse,
)
from app.services.graph_service import GraphService, MetricNotFoundError, get_graph_service

router = APIRouter(prefix="/graph", tags=["graph"])


def _not_found(exc: MetricNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("/edges", response_model=list[MetricEdgeResponse])
def list_edges(
    service: GraphService = Depends(get_graph_service),
) -> list[MetricEdgeResponse]:
    """
    Every directed edge, one per ``outputs`` entry.
    """

    return [
        MetricEdgeResponse(id=edge.id, source=edge.source, target=edge.target)
        for edge in service.edges()
    ]


@router.get("/metrics", response_model=list[MetricConnectionsResponse])
def list_metrics(
    service: GraphService = Depends(get_graph_service),
) -> list[MetricConnectionsResponse]:
    """
    Every graph node with its label, tier and direct connections.
    """

    return [
        MetricConnectionsResponse(
            metric_id=node.id,
            label=node.label,
            tier=node.tier,
            inputs=list(node.connections.inputs),
            outputs=list(node.connections.outputs),
        )
        for node in service.nodes()
    ]


@router.get("/metrics/{metric_id}/connections", response_model=MetricConnectionsResponse)
def get_connections(
    metric_id: str,
    service: GraphService = Depends(get_graph_service),
) -> MetricConnectionsResponse:
    try:
        node = service.node(metric_id)
    except MetricNotFoundError as exc:
        raise _not_found(exc) from exc

    return MetricConnectionsResponse(
        metric_id=node.id,
        label=node.label,
        tier=node.tier,
        inputs=list(node.connections.inputs),
        outputs=list(node.connections.outputs),
    )


@router.get("/metrics/{metric_id}/focus", response_model=MetricFocusResponse)
def get_focus(
    metric_id: str,
    service: GraphService = Depends(get_graph_service),
) -> MetricFocusResponse:
    """
    Primary and secondary connections plus opacity for every node.
    """

    try:
        view = service.focus(metric_id)
    except MetricNotFoundError as exc:
        raise _not_found(exc) from exc

    return MetricFocusResponse(
        metric_id=metric_id,
        primary=list(view.state.primary_connections),
        secondary=list(view.state.secondary_connections),
        opacity=view.opacity,
        visible_edges=[
            MetricEdgeResponse(id=edge.id, source=edge.source, target=edge.target)
            for edge in view.visible_edges
        ],
    )


@router.get("/metrics/{metric_id}/upstream", response_model=MetricPathResponse)
def get_upstream(
    metric_id: str,
    max_depth: int | None = Query(default=None, ge=0, le=20),
    service: GraphService = Depends(get_graph_service),
) -> MetricPathResponse:
    return _path_response(service, metric_id, "upstream", max_depth)


@router.get("/metrics/{metric_id}/downstream", response_model=MetricPathResponse)
def get_downstream(
    metric_id: str,
    max_depth: int | None = Query(default=None, ge=0, le=20),
    service: GraphService = Depends(get_graph_service),
) -> MetricPathResponse:
    return _path_response(service, metric_id, "downstream", max_depth)


def _path_response(
    service: GraphService,
    metric_id: str,
    direction: Literal["upstream", "downstream"],
    max_depth: int | None,
) -> MetricPathResponse:
    try:
        path = service.path(metric_id, direction, max_depth)
    except MetricNotFoundError as exc:
        raise _not_found(exc) from exc

    return MetricPathResponse(
        metric_id=metric_id,
        direction=direction,
        max_depth=max_depth if max_depth is not None else service.default_max_depth,
        path=path,
    )
