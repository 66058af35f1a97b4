"""
kpi/saas.py

SaaS KPI formula implementation.

Unit conventions
----------------
beginning_arr       $M, converted to $K (x 1000) before it is combined
                    with the $K monthly flows (bookings, expansion, churn).
ending_arr, mrr     computed in $K, returned in $M (/ 1000).
avg_deal_size       $K, so ``customers x avg_deal_size`` is a $K figure.
cac_blended,
cac_paid_only       returned in $K; multiplied by 1000 wherever they are
                    compared with $ quantities such as LTV or ARPA.

Formulas
--------
New Bookings   = new_customers_added * avg_deal_size
Net New ARR    = new_bookings + expansion_arr - churned_arr
Ending ARR     = beginning_arr * 1000 + net_new_arr
ARR Growth     = ((1 + monthly_growth / 100) ^ 12 - 1) * 100
GRR / NRR      = retained ARR / starting ARR, annualized as ratio ^ 12
LTV:CAC        = (arpa * avg_customer_lifetime) / (cac_blended * 1000)
Rule of 40     = annualized_growth_rate + ebitda_margin
Burn Multiple  = |ebitda| / net_new_arr while ebitda < 0, else 0

Zero denominators
-----------------
Where a denominator can legitimately be zero (an empty funnel stage, no
new customers, no churn) the formula divides by 1 instead.  Cost per MQL
with zero MQLs therefore equals the whole marketing spend.  Every other
denominator goes through :func:`_ratio`, which returns 0.0 for a zero
denominator.

Overflow
--------
Twelve-month compounding of an extreme monthly rate (a tiny beginning
ARR against ordinary bookings or churn) overflows a float.  Such results
saturate at ``sys.float_info.max``, and every float field of the returned
record passes through :func:`kpi.numeric.saturate`.  No formula returns
NaN or infinity and none raises.
"""

from __future__ import annotations

import logging
from dataclasses import fields, replace

from kpi.base import BaseKPIFormula
from kpi.numeric import FLOAT_MAX, round_half_up, saturate
from kpi.types import CalculatedMetrics, Inputs

logger = logging.getLogger(__name__)

_MONTHS_PER_YEAR = 12
_DAYS_PER_MONTH = 30


class SaaSKPIFormula(BaseKPIFormula):
    """
    Deterministic SaaS KPI calculations with fixed zero-denominator handling.

    All arithmetic is self-contained.  No I/O, no side effects; the
    evaluation order is fixed so identical inputs give identical outputs.
    """

    def calculate(self, inputs: Inputs) -> CalculatedMetrics:
        """
        Compute the full metrics record from *inputs*.

        Parameters
        ----------
        inputs:
            One month of business activity.

        Returns
        -------
        CalculatedMetrics
            Every KPI, in the units listed in :data:`kpi.types.METRIC_UNITS`.
        """
        paid_marketing_spend = inputs.paid_search_spend + inputs.paid_social_spend

        # ARR & growth
        new_bookings = inputs.new_customers_added * inputs.avg_deal_size
        net_new_arr = new_bookings + inputs.expansion_arr - inputs.churned_arr
        starting_arr_k = inputs.beginning_arr * 1000
        ending_arr_k = starting_arr_k + net_new_arr
        mrr_k = ending_arr_k / _MONTHS_PER_YEAR
        arr_growth_rate_monthly = _ratio(net_new_arr, starting_arr_k) * 100
        annualized_growth_rate = _annualize_growth(arr_growth_rate_monthly)

        # Retention
        grr = _ratio(starting_arr_k - inputs.churned_arr, starting_arr_k) * 100
        nrr = (
            _ratio(starting_arr_k - inputs.churned_arr + inputs.expansion_arr, starting_arr_k)
            * 100
        )
        annualized_grr = _annualize_retention(grr)
        annualized_nrr = _annualize_retention(nrr)
        logo_churn_rate = _ratio(inputs.customers_churned, inputs.total_customers) * 100
        ending_customer_count = (
            inputs.total_customers - inputs.customers_churned + inputs.new_customers_added
        )

        # Pipeline
        sqls_generated = round_half_up(
            inputs.mqls_generated * (inputs.mql_to_sql_conversion / 100)
        )
        opportunities_created = round_half_up(
            sqls_generated * (inputs.sql_to_opp_conversion / 100)
        )
        deals_closed_won = round_half_up(opportunities_created * (inputs.win_rate / 100))
        pipeline_generated = opportunities_created * inputs.avg_deal_size
        pipeline_conversion = deals_closed_won / _guard(inputs.mqls_generated) * 100
        pipeline_velocity = _ratio(
            opportunities_created * inputs.avg_deal_size * 1000 * (inputs.win_rate / 100),
            inputs.sales_cycle * _DAYS_PER_MONTH,
        )

        # Unit economics; ARPA deliberately uses beginning ARR.
        arpa = _ratio(inputs.beginning_arr * 1_000_000, inputs.total_customers) / _MONTHS_PER_YEAR
        cac_blended = inputs.total_sales_marketing / _guard(inputs.new_customers_added)
        cac_paid_only = paid_marketing_spend / _guard(inputs.new_customers_added)
        ltv = arpa * inputs.avg_customer_lifetime
        ltv_cac_ratio = _ratio(ltv, cac_blended * 1000)
        gross_margin = 100 - inputs.cogs_percent
        cac_payback_period = _ratio(cac_blended * 1000, arpa * (gross_margin / 100))

        # Funnel cost, in $
        marketing_spend_usd = inputs.marketing_spend * 1000
        cost_per_lead = marketing_spend_usd / _guard(inputs.leads_generated)
        cost_per_mql = marketing_spend_usd / _guard(inputs.mqls_generated)
        cost_per_sql = marketing_spend_usd / _guard(sqls_generated)
        cost_per_opp = marketing_spend_usd / _guard(opportunities_created)
        cost_per_won = marketing_spend_usd / _guard(deals_closed_won)

        # Paid media
        cpm = paid_marketing_spend / _guard(inputs.paid_impressions) * 1000
        cpc = paid_marketing_spend * 1000 / _guard(inputs.paid_clicks)
        ctr = inputs.paid_clicks / _guard(inputs.paid_impressions) * 100
        click_to_lead_rate = (
            inputs.leads_generated / inputs.paid_clicks * 100 if inputs.paid_clicks > 0 else 0.0
        )
        lead_to_mql_rate = (
            inputs.mqls_generated / inputs.leads_generated * 100
            if inputs.leads_generated > 0
            else 0.0
        )

        # Sales efficiency
        magic_number = _ratio(net_new_arr, inputs.total_sales_marketing)
        payback_period_sm = _ratio(
            cac_blended, net_new_arr / _guard(inputs.new_customers_added)
        )

        # Financial performance ($K)
        gross_profit = mrr_k * (gross_margin / 100)
        total_opex = inputs.total_sales_marketing + inputs.rd_spend + inputs.ga_spend
        ebitda = gross_profit - total_opex
        ebitda_margin = _ratio(ebitda, mrr_k) * 100
        rule_of_40 = annualized_growth_rate + ebitda_margin
        saas_quick_ratio = (new_bookings + inputs.expansion_arr) / _guard(inputs.churned_arr)
        burn_multiple = abs(ebitda) / _guard(net_new_arr) if ebitda < 0 else 0.0

        logger.debug(
            "SaaS metrics computed: net_new_arr=%.4f ending_arr_k=%.4f ebitda=%.4f",
            net_new_arr,
            ending_arr_k,
            ebitda,
        )

        metrics = CalculatedMetrics(
            new_bookings=new_bookings,
            net_new_arr=net_new_arr,
            ending_arr=ending_arr_k / 1000,
            mrr=mrr_k / 1000,
            arr_growth_rate_monthly=arr_growth_rate_monthly,
            annualized_growth_rate=annualized_growth_rate,
            grr=grr,
            nrr=nrr,
            annualized_grr=annualized_grr,
            annualized_nrr=annualized_nrr,
            logo_churn_rate=logo_churn_rate,
            ending_customer_count=ending_customer_count,
            sqls_generated=sqls_generated,
            opportunities_created=opportunities_created,
            deals_closed_won=deals_closed_won,
            pipeline_generated=pipeline_generated,
            pipeline_conversion=pipeline_conversion,
            pipeline_velocity=pipeline_velocity,
            cac_blended=cac_blended,
            cac_paid_only=cac_paid_only,
            ltv=ltv,
            ltv_cac_ratio=ltv_cac_ratio,
            cac_payback_period=cac_payback_period,
            cost_per_lead=cost_per_lead,
            cost_per_mql=cost_per_mql,
            cost_per_sql=cost_per_sql,
            cost_per_opp=cost_per_opp,
            cost_per_won=cost_per_won,
            cpm=cpm,
            cpc=cpc,
            ctr=ctr,
            click_to_lead_rate=click_to_lead_rate,
            lead_to_mql_rate=lead_to_mql_rate,
            magic_number=magic_number,
            payback_period_sm=payback_period_sm,
            gross_profit=gross_profit,
            gross_margin=gross_margin,
            total_opex=total_opex,
            ebitda=ebitda,
            ebitda_margin=ebitda_margin,
            rule_of_40=rule_of_40,
            saas_quick_ratio=saas_quick_ratio,
            burn_multiple=burn_multiple,
            arpa=arpa,
        )
        return _saturate_metrics(metrics)


_FORMULA = SaaSKPIFormula()


def calculate_metrics(inputs: Inputs) -> CalculatedMetrics:
    """Compute every SaaS KPI for *inputs* with the shared formula instance."""
    return _FORMULA.calculate(inputs)


# ---------------------------------------------------------------------------
# Pure formula helpers
# ---------------------------------------------------------------------------


def _guard(denominator: float) -> float:
    """Substitute 1 for a zero denominator."""
    return denominator or 1


def _ratio(numerator: float, denominator: float) -> float:
    """
    numerator / denominator.

    Returns 0.0 when the denominator is zero.
    """
    if denominator == 0:
        return 0.0
    return numerator / denominator


def _compound(base: float) -> float:
    """*base* to the 12th power; an overflow saturates (the exponent is even)."""
    try:
        return base**_MONTHS_PER_YEAR
    except OverflowError:
        return FLOAT_MAX


def _annualize_growth(monthly_rate_pct: float) -> float:
    """Compound a monthly growth percentage over twelve months."""
    return saturate((_compound(1 + monthly_rate_pct / 100) - 1) * 100)


def _annualize_retention(monthly_ratio_pct: float) -> float:
    """
    Compound a monthly retention percentage over twelve months.

    The retained ratio itself is raised to the 12th power, so moderately
    poor monthly retention compounds toward zero.
    """
    return saturate(_compound(monthly_ratio_pct / 100) * 100)


def _saturate_metrics(metrics: CalculatedMetrics) -> CalculatedMetrics:
    """Replace any overflowed or NaN float field with a finite value."""
    return replace(
        metrics,
        **{
            f.name: saturate(getattr(metrics, f.name))
            for f in fields(metrics)
            if isinstance(getattr(metrics, f.name), float)
        },
    )
