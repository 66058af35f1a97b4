"""Streamlit dashboard for the SaaS metrics calculator."""

from __future__ import annotations

import io
from typing import Any, Optional

import pandas as pd
import streamlit as st

from app.config import SUPPORTED_INDUSTRIES, get_app_settings, get_focus_settings
from kpi.definitions import get_metric_definition, get_metric_label
from kpi.industries import IndustryConfig, get_industry_config
from kpi.sparkline import (
    calculate_wow_change,
    generate_all_time_series,
    get_trend_direction,
    make_rng,
)
from kpi.types import Inputs
from metrics_graph.focus import FocusState, get_metric_opacity
from metrics_graph.relationships import METRICS_RELATIONSHIPS, TIER_ORDER, get_metric_tier
from thresholds.targets import get_metric_target_label

st.set_page_config(page_title="SaaS Metrics", page_icon="SM", layout="wide")

_STATUS_BADGE = {"good": "🟢", "warning": "🟡", "bad": "🔴", "neutral": "⚪"}

_INPUT_GROUPS: dict[str, tuple[str, ...]] = {
    "Starting Position": ("beginning_arr", "total_customers"),
    "Monthly Movement": (
        "expansion_arr",
        "churned_arr",
        "customers_churned",
        "new_customers_added",
    ),
    "Pipeline Funnel": (
        "leads_generated",
        "mqls_generated",
        "mql_to_sql_conversion",
        "sql_to_opp_conversion",
        "win_rate",
        "avg_deal_size",
        "sales_cycle",
    ),
    "Channel Mix": (
        "paid_search_spend",
        "paid_search_leads",
        "paid_social_spend",
        "paid_social_leads",
        "events_spend",
        "events_leads",
        "content_spend",
        "content_leads",
        "partnerships_spend",
        "partnerships_leads",
    ),
    "ABM": ("target_accounts", "engaged_accounts", "abm_spend"),
    "Paid Media": ("paid_impressions", "paid_clicks"),
    "Operating Expenses": ("total_sales_marketing", "marketing_spend", "rd_spend", "ga_spend"),
    "Customer Value": ("cogs_percent", "avg_customer_lifetime"),
}

_SPARKLINE_LABELS: dict[str, str] = {
    "new_bookings": "New Bookings ($K)",
    "net_new_arr": "Net New ARR ($K)",
    "ending_arr": "Ending ARR ($K)",
    "mqls_generated": "MQLs",
    "annualized_nrr": "NRR (Annual %)",
    "ltv_cac_ratio": "LTV:CAC",
    "rule_of_40": "Rule of 40 (%)",
    "saas_quick_ratio": "Quick Ratio",
}


@st.cache_resource(show_spinner=False)
def _load_backend_handles() -> dict[str, Any]:
    """Build backend services once per process."""
    from app.services.graph_service import get_graph_service  # noqa: PLC0415
    from app.services.metrics_service import get_metrics_service  # noqa: PLC0415

    return {
        "metrics_service": get_metrics_service(),
        "graph_service": get_graph_service(),
    }


def _init_state(config: IndustryConfig) -> None:
    """Seed session inputs from the industry preset on first load or industry switch."""
    if st.session_state.get("industry") != config.id:
        st.session_state.industry = config.id
        for name, value in config.default_inputs.to_dict().items():
            st.session_state[f"input_{name}"] = float(value)


def _collect_inputs() -> Inputs:
    """Read the current sidebar values into a fresh Inputs record."""
    return Inputs(
        **{name: float(st.session_state[f"input_{name}"]) for name in Inputs.field_names()}
    )


def _metric_frame(
    metric_ids: list[str],
    evaluation: Any,
    focus: FocusState,
    dimmed_opacity: float,
) -> pd.DataFrame:
    rows = []
    for metric_id in metric_ids:
        status = evaluation.statuses.get(metric_id, "neutral")
        rows.append(
            {
                "Metric": get_metric_label(metric_id),
                "Value": evaluation.formatted.get(metric_id, "-"),
                "Status": f"{_STATUS_BADGE[status]} {status}",
                "Target": get_metric_target_label(metric_id) or "",
                "Opacity": get_metric_opacity(metric_id, focus, dimmed_opacity),
            }
        )
    return pd.DataFrame(rows)


def _fade(frame: pd.DataFrame) -> Any:
    """Style rows with their focus opacity."""
    return frame.style.apply(
        lambda row: [f"opacity: {row['Opacity']}"] * len(row),
        axis=1,
    ).hide(axis="columns", subset=["Opacity"])


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

settings = get_app_settings()
focus_settings = get_focus_settings()
handles = _load_backend_handles()
metrics_service = handles["metrics_service"]

st.title("SaaS Metrics Calculator")

with st.sidebar:
    industry_id = st.selectbox(
        "Industry",
        options=list(SUPPORTED_INDUSTRIES),
        index=list(SUPPORTED_INDUSTRIES).index(settings.default_industry),
        format_func=lambda key: get_industry_config(key).display_name,
    )
    industry_config = get_industry_config(industry_id)
    _init_state(industry_config)

    if st.button("Reset to defaults", use_container_width=True):
        st.session_state.industry = None
        _init_state(industry_config)

    for group, names in _INPUT_GROUPS.items():
        with st.expander(group, expanded=group == "Starting Position"):
            for name in names:
                st.number_input(
                    industry_config.field_label(name),
                    key=f"input_{name}",
                    step=1.0,
                    format="%.2f",
                )

inputs = _collect_inputs()
evaluation = metrics_service.evaluate(inputs)


# ---------------------------------------------------------------------------
# Headline metrics
# ---------------------------------------------------------------------------

st.subheader("Key Metrics")
columns = st.columns(5)
for index, key_metric in enumerate(evaluation.key_metrics):
    with columns[index % 5]:
        definition = get_metric_definition(key_metric.name)
        st.metric(
            label=f"{_STATUS_BADGE[key_metric.status]} {key_metric.name}",
            value=key_metric.value,
            delta=f"target {key_metric.target}",
            delta_color="off",
            help=definition.formula if definition else key_metric.tooltip,
        )


# ---------------------------------------------------------------------------
# Metrics map
# ---------------------------------------------------------------------------

st.subheader("Metrics Map")
metric_options = ["(none)", *METRICS_RELATIONSHIPS.keys()]
selected: Optional[str] = st.selectbox(
    "Focus on metric",
    options=metric_options,
    format_func=lambda key: key if key == "(none)" else get_metric_label(key),
)
focus = FocusState.for_metric(None if selected == "(none)" else selected)

if focus.is_active:
    graph_service = handles["graph_service"]
    upstream = graph_service.path(focus.selected_metric_id, "upstream")
    downstream = graph_service.path(focus.selected_metric_id, "downstream")
    st.caption(
        "Upstream: "
        + (", ".join(get_metric_label(m) for m in upstream) or "none")
        + " | Downstream: "
        + (", ".join(get_metric_label(m) for m in downstream) or "none")
    )

tier_columns = st.columns(len(TIER_ORDER))
for tier, column in zip(TIER_ORDER, tier_columns):
    tier_ids = [m for m in METRICS_RELATIONSHIPS if get_metric_tier(m) == tier]
    with column:
        st.markdown(f"**{tier.title()}**")
        frame = _metric_frame(tier_ids, evaluation, focus, focus_settings.dimmed_opacity)
        st.dataframe(_fade(frame), hide_index=True, use_container_width=True)


# ---------------------------------------------------------------------------
# Trends
# ---------------------------------------------------------------------------

st.subheader("Weekly Trends (illustrative)")
series = generate_all_time_series(evaluation.metrics, inputs, rng=make_rng())
trend_columns = st.columns(4)
for index, (key, label) in enumerate(_SPARKLINE_LABELS.items()):
    data = series[key]
    wow = calculate_wow_change(data)
    with trend_columns[index % 4]:
        st.markdown(
            f"**{label}** · {get_trend_direction(data)}"
            + (f" · WoW {wow:+.1f}%" if wow is not None else "")
        )
        st.line_chart(pd.DataFrame({label: data}), height=120)


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

all_ids = list(evaluation.values)
export_frame = pd.DataFrame(
    {
        "metric_id": all_ids,
        "label": [get_metric_label(m) for m in all_ids],
        "value": [evaluation.values[m] for m in all_ids],
        "formatted": [evaluation.formatted[m] for m in all_ids],
        "status": [evaluation.statuses[m] for m in all_ids],
    }
)
csv_buffer = io.StringIO()
export_frame.to_csv(csv_buffer, index=False)
st.download_button(
    label="Download metrics CSV",
    data=csv_buffer.getvalue().encode("utf-8"),
    file_name="saas_metrics.csv",
    mime="text/csv",
)

with st.expander("All metrics by tier"):
    for tier in TIER_ORDER:
        tier_ids = [m for m in all_ids if get_metric_tier(m) == tier]
        st.markdown(f"**{tier.title()}**")
        st.dataframe(
            export_frame[export_frame["metric_id"].isin(tier_ids)],
            hide_index=True,
            use_container_width=True,
        )
