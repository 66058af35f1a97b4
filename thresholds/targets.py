"""
thresholds/targets.py

Declarative per-metric targets and status evaluation.

Each target holds two predicates.  A value satisfying ``good`` is
``"good"``; otherwise a value satisfying ``warning`` is ``"warning"``;
anything else is ``"bad"``.  Ids without a target evaluate to
``"neutral"``.

Boundary choices are exact: "lower is better" metrics use a strict
``<`` for good and a half-open ``[low, high)`` warning band, while
"higher is better" metrics use a strict ``>`` for good and a closed
``[low, high]`` warning band.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal

MetricStatus = Literal["good", "warning", "bad", "neutral"]

_Predicate = Callable[[float], bool]


@dataclass(frozen=True)
class MetricTarget:
    """Status predicates and the human-readable target for one metric."""

    good: _Predicate
    warning: _Predicate
    target_label: str

    def evaluate(self, value: float) -> MetricStatus:
        if self.good(value):
            return "good"
        if self.warning(value):
            return "warning"
        return "bad"


def _lower_is_better(good_below: float, warning_below: float, label: str) -> MetricTarget:
    return MetricTarget(
        good=lambda v: v < good_below,
        warning=lambda v: good_below <= v < warning_below,
        target_label=label,
    )


def _higher_is_better(good_above: float, warning_from: float, label: str) -> MetricTarget:
    return MetricTarget(
        good=lambda v: v > good_above,
        warning=lambda v: warning_from <= v <= good_above,
        target_label=label,
    )


# ---------------------------------------------------------------------------
# Target table
# ---------------------------------------------------------------------------

METRIC_TARGETS: dict[str, MetricTarget] = {
    # Efficiency, lower is better
    "cost-per-mql": _lower_is_better(100, 200, "< $100"),
    "cost-per-sql": _lower_is_better(200, 400, "< $200"),
    "cost-per-opp": _lower_is_better(500, 1000, "< $500"),
    "cost-per-won": _lower_is_better(2000, 5000, "< $2,000"),
    "cac-blended": _lower_is_better(5000, 10000, "< $5,000"),
    "cac-payback-period": _lower_is_better(12, 18, "< 12 months"),
    "burn-multiple": _lower_is_better(1.5, 3, "< 1.5x"),
    # Unit economics, higher is better
    "ltv-cac-ratio": _higher_is_better(3, 2, "> 3:1"),
    "ltv": _higher_is_better(30000, 20000, "> $30,000"),
    # Growth & efficiency
    "magic-number": _higher_is_better(0.75, 0.5, "> 0.75x"),
    "quick-ratio": _higher_is_better(4, 2, "> 4x"),
    "rule-of-40": _higher_is_better(40, 20, "> 40%"),
    # Retention
    "annualized-grr": _higher_is_better(95, 85, "> 95%"),
    "annualized-nrr": _higher_is_better(120, 100, "> 120%"),
    "logo-churn-rate": _lower_is_better(2, 5, "< 2%"),
    # Growth rate
    "arr-growth-rate": _higher_is_better(40, 20, "> 40%"),
    # Margins
    "gross-margin": _higher_is_better(80, 70, "> 80%"),
    "ebitda-margin": _higher_is_better(20, 0, "> 20%"),
    # Paid media, lower is better
    "cpm": _lower_is_better(10, 20, "< $10.00"),
    "cpc": _lower_is_better(2, 5, "< $2.00"),
    # Conversion rates, higher is better
    "ctr": _higher_is_better(2, 1, "> 2%"),
    "click-to-lead-rate": _higher_is_better(5, 2, "> 5%"),
    "lead-to-mql-rate": _higher_is_better(30, 20, "> 30%"),
}


def get_metric_status(metric_id: str, value: float) -> MetricStatus:
    """
    Evaluate *value* against the target registered for *metric_id*.

    Returns ``"neutral"`` when no target is registered.
    """
    target = METRIC_TARGETS.get(metric_id)
    if target is None:
        return "neutral"
    return target.evaluate(value)


def get_metric_target_label(metric_id: str) -> str | None:
    """Return the human-readable target for *metric_id*, if any."""
    target = METRIC_TARGETS.get(metric_id)
    return target.target_label if target is not None else None
