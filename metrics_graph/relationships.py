"""
metrics_graph/relationships.py

Static relationship graph between calculator metrics.

Node ids are stable kebab-case strings shared with the presentation
layer.  Each entry lists the metrics that feed into it (``inputs``) and
the metrics it influences (``outputs``).  The structure never depends on
input values.

Tiers, top to bottom
--------------------
budget       organisational spend lines
activities   marketing channel programmes
acquisition  funnel volumes, conversion rates and funnel costs
revenue      ARR movement, retention and customer counts
outcomes     unit economics and financial performance
"""

from __future__ import annotations

from typing import Literal

from metrics_graph.validation import build_metrics_graph, topological_order

MetricTier = Literal["budget", "activities", "acquisition", "revenue", "outcomes"]

TIER_ORDER: tuple[MetricTier, ...] = ("budget", "activities", "acquisition", "revenue", "outcomes")


_RAW_RELATIONSHIPS: dict[str, dict[str, list[str]]] = {
    # ------------------------------------------------------------------
    # Budget
    # ------------------------------------------------------------------
    "sales-marketing-spend": {
        "inputs": [],
        "outputs": ["marketing-spend", "sales-spend", "cac-blended", "magic-number"],
    },
    "marketing-spend": {
        "inputs": ["sales-marketing-spend"],
        "outputs": [
            "paid-search", "paid-social", "events", "content", "partnerships", "abm",
            "cost-per-mql", "cost-per-sql", "cost-per-opp", "cost-per-won",
        ],
    },
    "sales-spend": {"inputs": ["sales-marketing-spend"], "outputs": []},
    "rd-spend": {"inputs": [], "outputs": ["total-opex"]},
    "ga-spend": {"inputs": [], "outputs": ["total-opex"]},
    "total-opex": {"inputs": ["rd-spend", "ga-spend"], "outputs": ["ebitda"]},
    # ------------------------------------------------------------------
    # Activities
    # ------------------------------------------------------------------
    "paid-search": {"inputs": ["marketing-spend"], "outputs": ["impressions"]},
    "paid-social": {"inputs": ["marketing-spend"], "outputs": ["impressions"]},
    "events": {"inputs": ["marketing-spend"], "outputs": ["leads"]},
    "content": {"inputs": ["marketing-spend"], "outputs": ["leads"]},
    "partnerships": {"inputs": ["marketing-spend"], "outputs": ["leads"]},
    "abm": {"inputs": ["marketing-spend"], "outputs": ["leads"]},
    # ------------------------------------------------------------------
    # Acquisition
    # ------------------------------------------------------------------
    "impressions": {"inputs": ["paid-search", "paid-social"], "outputs": ["clicks", "cpm", "ctr"]},
    "clicks": {"inputs": ["impressions"], "outputs": ["leads", "ctr", "cpc"]},
    "cpm": {"inputs": ["impressions"], "outputs": []},
    "cpc": {"inputs": ["clicks"], "outputs": []},
    "ctr": {"inputs": ["impressions", "clicks"], "outputs": []},
    "leads": {
        "inputs": ["clicks", "events", "content", "partnerships", "abm"],
        "outputs": ["mqls"],
    },
    "mqls": {"inputs": ["leads"], "outputs": ["sqls", "cost-per-mql"]},
    "sqls": {"inputs": ["mqls"], "outputs": ["opportunities", "cost-per-sql"]},
    "opportunities": {"inputs": ["sqls"], "outputs": ["deals-won", "cost-per-opp"]},
    "deals-won": {
        "inputs": ["opportunities"],
        "outputs": ["new-bookings", "new-customers-added", "cost-per-won"],
    },
    "cost-per-mql": {"inputs": ["marketing-spend", "mqls"], "outputs": []},
    "cost-per-sql": {"inputs": ["marketing-spend", "sqls"], "outputs": []},
    "cost-per-opp": {"inputs": ["marketing-spend", "opportunities"], "outputs": []},
    "cost-per-won": {"inputs": ["marketing-spend", "deals-won"], "outputs": []},
    # ------------------------------------------------------------------
    # Revenue
    # ------------------------------------------------------------------
    "new-bookings": {
        "inputs": ["deals-won", "new-customers-added"],
        "outputs": ["net-new-arr", "quick-ratio"],
    },
    "new-customers-added": {
        "inputs": ["deals-won"],
        "outputs": ["new-bookings", "ending-customer-count", "cac-blended"],
    },
    "expansion-arr": {
        "inputs": [],
        "outputs": ["net-new-arr", "annualized-nrr", "quick-ratio"],
    },
    "churned-arr": {
        "inputs": [],
        "outputs": ["net-new-arr", "annualized-grr", "annualized-nrr", "quick-ratio"],
    },
    "net-new-arr": {
        "inputs": ["new-bookings", "expansion-arr", "churned-arr"],
        "outputs": ["ending-arr", "magic-number", "arr-growth-rate", "burn-multiple"],
    },
    "ending-arr": {"inputs": ["net-new-arr"], "outputs": ["mrr", "arr-growth-rate", "arpa"]},
    "mrr": {"inputs": ["ending-arr"], "outputs": ["gross-profit"]},
    "annualized-grr": {"inputs": ["churned-arr"], "outputs": []},
    "annualized-nrr": {"inputs": ["expansion-arr", "churned-arr"], "outputs": []},
    "logo-churn-rate": {"inputs": [], "outputs": []},
    "ending-customer-count": {"inputs": ["new-customers-added"], "outputs": ["arpa"]},
    "arr-growth-rate": {"inputs": ["net-new-arr", "ending-arr"], "outputs": ["rule-of-40"]},
    # ------------------------------------------------------------------
    # Outcomes
    # ------------------------------------------------------------------
    "arpa": {
        "inputs": ["ending-arr", "ending-customer-count"],
        "outputs": ["ltv", "cac-payback-period"],
    },
    "cac-blended": {
        "inputs": ["sales-marketing-spend", "new-customers-added"],
        "outputs": ["ltv-cac-ratio", "cac-payback-period"],
    },
    "ltv": {"inputs": ["arpa"], "outputs": ["ltv-cac-ratio"]},
    "ltv-cac-ratio": {"inputs": ["ltv", "cac-blended"], "outputs": []},
    "cac-payback-period": {"inputs": ["cac-blended", "arpa", "gross-margin"], "outputs": []},
    "magic-number": {"inputs": ["net-new-arr", "sales-marketing-spend"], "outputs": []},
    "quick-ratio": {"inputs": ["new-bookings", "expansion-arr", "churned-arr"], "outputs": []},
    "gross-profit": {"inputs": ["mrr"], "outputs": ["gross-margin", "ebitda"]},
    "gross-margin": {"inputs": ["gross-profit"], "outputs": ["cac-payback-period"]},
    "ebitda": {"inputs": ["gross-profit"], "outputs": ["ebitda-margin", "rule-of-40"]},
    "ebitda-margin": {"inputs": ["ebitda"], "outputs": ["rule-of-40"]},
    "rule-of-40": {"inputs": ["arr-growth-rate", "ebitda-margin", "ebitda"], "outputs": []},
    "burn-multiple": {"inputs": ["net-new-arr"], "outputs": []},
}

METRICS_RELATIONSHIPS = build_metrics_graph(_RAW_RELATIONSHIPS)
"""Validated, read-only relationship graph."""

METRICS_TOPOLOGICAL_ORDER = topological_order(METRICS_RELATIONSHIPS)


# ---------------------------------------------------------------------------
# Tiers
# ---------------------------------------------------------------------------

_TIER_MEMBERS: dict[MetricTier, frozenset[str]] = {
    "budget": frozenset(
        {"sales-marketing-spend", "marketing-spend", "sales-spend", "rd-spend", "ga-spend", "total-opex"}
    ),
    "activities": frozenset(
        {"paid-search", "paid-social", "events", "content", "partnerships", "abm"}
    ),
    "acquisition": frozenset(
        {
            "impressions", "clicks", "leads", "mqls", "sqls", "opportunities", "deals-won",
            "cpm", "cpc", "ctr",
            "cost-per-lead", "cost-per-mql", "cost-per-sql",
            "click-to-lead-rate", "lead-to-mql-rate", "mql-to-sql-rate", "sql-to-opp-rate",
            "win-rate",
            "pipeline-generated", "pipeline-velocity", "pipeline-conversion",
        }
    ),
    "revenue": frozenset(
        {
            "new-bookings", "new-customers-added", "expansion-arr", "churned-arr",
            "net-new-arr", "beginning-arr", "ending-arr", "mrr", "arr-growth-rate",
            "grr", "nrr", "annualized-grr", "annualized-nrr", "logo-churn-rate",
            "customers-churned", "ending-customer-count", "arpa",
        }
    ),
}


def get_metric_tier(metric_id: str) -> MetricTier:
    """Return the tier *metric_id* is drawn in; unlisted ids are outcomes."""
    for tier in ("budget", "activities", "acquisition", "revenue"):
        if metric_id in _TIER_MEMBERS[tier]:
            return tier
    return "outcomes"
