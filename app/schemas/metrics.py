"""
app/schemas/metrics.py

Request and response schemas for metric calculation.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from kpi.types import Inputs


class InputsPayload(BaseModel):
    """
    One month of business activity.

    Units match :class:`kpi.types.Inputs`; omitted fields default to 0.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    # Starting position
    beginning_arr: float = Field(0.0, description="ARR at start of month, $M")
    total_customers: float = 0.0

    # Monthly movement ($K / counts)
    expansion_arr: float = Field(0.0, description="$K")
    churned_arr: float = Field(0.0, description="$K")
    customers_churned: float = 0.0
    new_customers_added: float = 0.0

    # Pipeline funnel
    leads_generated: float = 0.0
    mqls_generated: float = 0.0
    mql_to_sql_conversion: float = Field(0.0, description="Percent, 0-100")
    sql_to_opp_conversion: float = Field(0.0, description="Percent, 0-100")
    win_rate: float = Field(0.0, description="Percent, 0-100")
    avg_deal_size: float = Field(0.0, description="$K")
    sales_cycle: float = Field(0.0, description="Months")

    # Channel mix
    paid_search_spend: float = 0.0
    paid_search_leads: float = 0.0
    paid_social_spend: float = 0.0
    paid_social_leads: float = 0.0
    events_spend: float = 0.0
    events_leads: float = 0.0
    content_spend: float = 0.0
    content_leads: float = 0.0
    partnerships_spend: float = 0.0
    partnerships_leads: float = 0.0

    # ABM
    target_accounts: float = 0.0
    engaged_accounts: float = 0.0
    abm_spend: float = 0.0

    # Paid media
    paid_impressions: float = 0.0
    paid_clicks: float = 0.0

    # Operating expenses ($K)
    total_sales_marketing: float = 0.0
    marketing_spend: float = 0.0
    rd_spend: float = 0.0
    ga_spend: float = 0.0

    # Customer value
    cogs_percent: float = Field(0.0, description="Percent, 0-100")
    avg_customer_lifetime: float = Field(0.0, description="Months")

    def to_inputs(self) -> Inputs:
        return Inputs(**self.model_dump())

    @classmethod
    def from_inputs(cls, inputs: Inputs) -> "InputsPayload":
        return cls(**inputs.to_dict())


class KeyMetricResponse(BaseModel):
    """
    Headline metric rendered for display.
    """

    name: str
    value: str
    target: str
    status: Literal["good", "warning", "bad"]
    tooltip: str | None = None


class MetricsCalculationResponse(BaseModel):
    """
    Full result of one calculation.
    """

    metrics: dict[str, float]
    """Every ``CalculatedMetrics`` field, in its native unit."""

    key_metrics: list[KeyMetricResponse]
    values: dict[str, float]
    statuses: dict[str, Literal["good", "warning", "bad", "neutral"]]
    formatted: dict[str, str]


class IndustryDefaultsResponse(BaseModel):
    """
    Preset inputs and labels for one industry.
    """

    industry: str
    display_name: str
    inputs: InputsPayload
    field_labels: dict[str, str]
    metric_labels: dict[str, str]
    persona_labels: dict[str, str]
