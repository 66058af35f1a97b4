"""
kpi/key_metrics.py

Headline metric selection for the dashboard summary strip.

Each headline metric is scored against two inclusive bands: a value at
or beyond the first band is ``"good"``, at or beyond the second is
``"warning"``, anything else ``"bad"``.  The headline bands differ from
the per-metric targets in :mod:`thresholds.targets` at several
boundaries (e.g. LTV:CAC of exactly 3 is good here, warning there).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from kpi.formatting import to_fixed
from kpi.types import CalculatedMetrics, KeyMetric, KeyMetricStatus


@dataclass(frozen=True)
class _HeadlineRule:
    name: str
    target: str
    tooltip: str
    value: Callable[[CalculatedMetrics], float]
    render: Callable[[float], str]
    good: float
    warning: float
    higher_is_better: bool = True

    def status(self, value: float) -> KeyMetricStatus:
        if self.higher_is_better:
            if value >= self.good:
                return "good"
            if value >= self.warning:
                return "warning"
            return "bad"
        if value <= self.good:
            return "good"
        if value <= self.warning:
            return "warning"
        return "bad"


_HEADLINE_RULES: tuple[_HeadlineRule, ...] = (
    _HeadlineRule(
        name="ARR Growth",
        target=">20%",
        tooltip="Annualized ARR growth rate",
        value=lambda m: m.annualized_growth_rate,
        render=lambda v: f"{to_fixed(v, 1)}%",
        good=20,
        warning=10,
    ),
    _HeadlineRule(
        name="GRR",
        target=">90%",
        tooltip="Gross Revenue Retention (annualized)",
        value=lambda m: m.annualized_grr,
        render=lambda v: f"{to_fixed(v, 1)}%",
        good=90,
        warning=80,
    ),
    _HeadlineRule(
        name="NRR",
        target=">110%",
        tooltip="Net Revenue Retention (annualized)",
        value=lambda m: m.annualized_nrr,
        render=lambda v: f"{to_fixed(v, 1)}%",
        good=110,
        warning=100,
    ),
    _HeadlineRule(
        name="LTV:CAC",
        target=">3.0x",
        tooltip="Customer lifetime value vs acquisition cost",
        value=lambda m: m.ltv_cac_ratio,
        render=lambda v: f"{to_fixed(v, 1)}x",
        good=3,
        warning=2,
    ),
    _HeadlineRule(
        name="CAC Payback",
        target="<18mo",
        tooltip="Months to recover customer acquisition cost",
        value=lambda m: m.cac_payback_period,
        render=lambda v: f"{to_fixed(v, 0)} mo",
        good=12,
        warning=18,
        higher_is_better=False,
    ),
    _HeadlineRule(
        name="Rule of 40",
        target=">40%",
        tooltip="Growth Rate + EBITDA Margin",
        value=lambda m: m.rule_of_40,
        render=lambda v: f"{to_fixed(v, 0)}%",
        good=40,
        warning=25,
    ),
    _HeadlineRule(
        name="Magic #",
        target=">0.75x",
        tooltip="S&M efficiency: Net New ARR / S&M Spend",
        value=lambda m: m.magic_number,
        render=lambda v: f"{to_fixed(v, 2)}x",
        good=1.0,
        warning=0.75,
    ),
    _HeadlineRule(
        name="Logo Churn",
        target="<1.5%",
        tooltip="Monthly customer churn rate",
        value=lambda m: m.logo_churn_rate,
        render=lambda v: f"{to_fixed(v, 1)}%",
        good=1.5,
        warning=3,
        higher_is_better=False,
    ),
    _HeadlineRule(
        name="Gross Margin",
        target=">75%",
        tooltip="Revenue minus cost of goods sold",
        value=lambda m: m.gross_margin,
        render=lambda v: f"{to_fixed(v, 0)}%",
        good=75,
        warning=65,
    ),
    _HeadlineRule(
        name="Quick Ratio",
        target=">4.0x",
        tooltip="(New + Expansion) / Churn - growth efficiency",
        value=lambda m: m.saas_quick_ratio,
        render=lambda v: f"{to_fixed(v, 1)}x",
        good=4,
        warning=2,
    ),
)


def get_key_metrics(metrics: CalculatedMetrics) -> list[KeyMetric]:
    """
    Return the ten headline metrics in fixed display order.

    Parameters
    ----------
    metrics:
        Output of :func:`kpi.saas.calculate_metrics`.

    Returns
    -------
    list[KeyMetric]
        ARR Growth, GRR, NRR, LTV:CAC, CAC Payback, Rule of 40, Magic #,
        Logo Churn, Gross Margin, Quick Ratio.
    """
    key_metrics: list[KeyMetric] = []
    for rule in _HEADLINE_RULES:
        value = rule.value(metrics)
        key_metrics.append(
            KeyMetric(
                name=rule.name,
                value=rule.render(value),
                target=rule.target,
                status=rule.status(value),
                tooltip=rule.tooltip,
            )
        )
    return key_metrics
