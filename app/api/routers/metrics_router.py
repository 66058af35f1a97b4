"""
app/api/routers/metrics_router.py

Metric calculation and industry preset endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas.metrics import (
    IndustryDefaultsResponse,
    InputsPayload,
    KeyMetricResponse,
    MetricsCalculationResponse,
)
from app.services.metrics_service import MetricsService, get_metrics_service
from kpi.industries import UnknownIndustryError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.post(
    "/calculate",
    response_model=MetricsCalculationResponse,
    status_code=status.HTTP_200_OK,
)
def calculate_metrics(
    body: InputsPayload,
    service: MetricsService = Depends(get_metrics_service),
) -> MetricsCalculationResponse:
    """
    Compute every metric, the headline metrics and per-id statuses.
    """

    evaluation = service.evaluate(body.to_inputs())
    return MetricsCalculationResponse(
        metrics=evaluation.metrics.to_dict(),
        key_metrics=[
            KeyMetricResponse(
                name=km.name,
                value=km.value,
                target=km.target,
                status=km.status,
                tooltip=km.tooltip,
            )
            for km in evaluation.key_metrics
        ],
        values=evaluation.values,
        statuses=evaluation.statuses,
        formatted=evaluation.formatted,
    )


@router.get(
    "/defaults/{industry}",
    response_model=IndustryDefaultsResponse,
)
def get_industry_defaults(
    industry: str,
    service: MetricsService = Depends(get_metrics_service),
) -> IndustryDefaultsResponse:
    """
    Return the default inputs and labels for *industry*.
    """

    try:
        config = service.industry(industry)
    except UnknownIndustryError as exc:
        logger.warning("Unknown industry requested: %s", industry)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return IndustryDefaultsResponse(
        industry=config.id,
        display_name=config.display_name,
        inputs=InputsPayload.from_inputs(config.default_inputs),
        field_labels=dict(config.field_labels),
        metric_labels=dict(config.metric_labels),
        persona_labels=dict(config.persona_labels),
    )
