"""
Display Formatting

Turns a MetricsResult into the strings and good/ok/poor ratings rendered
by the calculator page and returned alongside the raw numbers by the API.
"""

import math
from typing import Any, Dict, List, NamedTuple, Optional

from strcalc.calculations.metrics import MetricsResult


class Thresholds(NamedTuple):
    """Lower bounds for the good and ok ratings."""

    good: float
    ok: float


MONTHLY_CASH_FLOW = Thresholds(good=200, ok=0)
ANNUAL_CASH_FLOW = Thresholds(good=2400, ok=0)
CASH_ON_CASH = Thresholds(good=8, ok=5)
CAP_RATE = Thresholds(good=6, ok=4)

METRIC_THRESHOLDS: Dict[str, Thresholds] = {
    "monthly_cash_flow": MONTHLY_CASH_FLOW,
    "cash_on_cash_return": CASH_ON_CASH,
    "cap_rate": CAP_RATE,
    "cash_flow": ANNUAL_CASH_FLOW,
    "after_tax_monthly_cash_flow": MONTHLY_CASH_FLOW,
    "after_tax_cash_on_cash_return": CASH_ON_CASH,
    "after_tax_annual_cash_flow": ANNUAL_CASH_FLOW,
}


class Assessment(NamedTuple):
    """Overall verdict on an investment."""

    rating: str
    message: str


EXCELLENT = Assessment("excellent", "Excellent investment opportunity")
MODERATE = Assessment("moderate", "Moderate investment potential")
POOR = Assessment("poor", "Consider alternative investments")


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def format_currency(amount: Any) -> str:
    """
    Format an amount as whole US dollars, e.g. -1234.5 -> "-$1,235".

    Missing or NaN amounts render as "$0"; infinities as "$∞" / "-$∞".
    """
    number = _as_float(amount)
    if number is None:
        return "$0"

    sign = "-" if number < 0 else ""
    if math.isinf(number):
        return f"{sign}$∞"

    # Half away from zero
    dollars = math.floor(abs(number) + 0.5)
    if dollars == 0:
        return "$0"
    return f"{sign}${dollars:,}"


def format_percent(percent: Any) -> str:
    """Format a 0-100 percentage with one decimal place, e.g. 7.25 -> "7.3%"."""
    number = _as_float(percent)
    if number is None:
        return "0.0%"
    if math.isinf(number):
        return "-∞%" if number < 0 else "∞%"
    return f"{number:.1f}%"


def classify(value: Any, thresholds: Thresholds) -> str:
    """Rate a metric as "good", "ok" or "poor"; NaN is always poor."""
    number = _as_float(value)
    if number is None:
        return "poor"
    if number >= thresholds.good:
        return "good"
    if number >= thresholds.ok:
        return "ok"
    return "poor"


def classify_metric(name: str, value: Any) -> Optional[str]:
    """Rate a named metric, or None when the metric has no thresholds."""
    thresholds = METRIC_THRESHOLDS.get(name)
    if thresholds is None:
        return None
    return classify(value, thresholds)


def assess_investment(metrics: MetricsResult) -> Assessment:
    """Combine cash-on-cash return and monthly cash flow into one verdict."""
    coc = metrics.cash_on_cash_return
    monthly = metrics.monthly_cash_flow
    if coc >= 8 and monthly >= 200:
        return EXCELLENT
    if coc >= 5 and monthly >= 0:
        return MODERATE
    return POOR


def _card(metrics: MetricsResult, name: str, label: str, percent: bool = False) -> Dict:
    value = getattr(metrics, name)
    return {
        "name": name,
        "label": label,
        "value": value,
        "formatted": format_percent(value) if percent else format_currency(value),
        "rating": classify_metric(name, value),
    }


def _line(label: str, value: float, **extra) -> Dict:
    line = {"label": label, "formatted": format_currency(value)}
    line.update(extra)
    return line


def build_display(metrics: MetricsResult) -> Dict[str, Any]:
    """
    Build every formatted block the calculator page shows.

    Returns:
        Dict with "key_metrics" and "after_tax" cards, the "assessment",
        and "revenue", "expenses", "financing" and "tax" breakdown lines
    """
    m = metrics
    assessment = assess_investment(m)

    key_metrics = [
        _card(m, "monthly_cash_flow", "Monthly Cash Flow"),
        _card(m, "cash_on_cash_return", "Cash-on-Cash Return", percent=True),
        _card(m, "cap_rate", "Cap Rate", percent=True),
        _card(m, "cash_flow", "Annual Cash Flow"),
    ]
    after_tax = [
        _card(m, "after_tax_monthly_cash_flow", "After-Tax Monthly CF"),
        _card(m, "after_tax_cash_on_cash_return", "After-Tax CoC Return", percent=True),
        _card(m, "after_tax_annual_cash_flow", "After-Tax Annual CF"),
    ]

    nights = m.occupied_nights
    revenue: List[Dict] = [
        {
            "label": "Occupied Nights/Year",
            "formatted": str(nights) if math.isfinite(nights) else "0",
        },
        _line("Gross Annual Revenue", m.gross_revenue, positive=True),
        _line("Revenue per Occupied Night", m.revenue_per_occupied_night),
    ]
    expenses = [
        _line("Principal & Interest", m.annual_pi),
        _line("Annual Interest (Year 1 Est.)", m.annual_interest, nested=True),
        _line("Property Taxes", m.property_taxes),
        _line("Insurance", m.insurance),
        _line("HOA Fees", m.hoa_fees),
        _line("Property Management", m.property_mgmt),
        _line("Cleaning Fees", m.cleaning_fees),
        _line("Platform Fees", m.platform_fees),
        _line("Transient Occupancy Tax", m.transient_occupancy_tax),
        _line("Other Expenses", m.other_operating_expenses),
        _line("Total Annual Expenses", m.total_expenses, total=True),
    ]
    financing = [
        _line("Down Payment Required", m.down_payment),
        _line("Loan Amount", m.loan_amount),
        _line("Monthly P&I Payment", m.monthly_pi),
    ]
    tax = [
        _line("Annual Interest", m.annual_interest),
        _line("Property Taxes", m.property_taxes),
        _line("Insurance", m.insurance),
        _line("Property Management", m.property_mgmt),
        _line("Cleaning & Platform Fees", m.cleaning_fees + m.platform_fees),
        _line("Transient Occupancy Tax", m.transient_occupancy_tax),
        _line("Other Expenses", m.other_operating_expenses),
        _line("HOA Fees", m.hoa_fees),
        _line("Depreciation (Year 1)", m.depreciation),
        _line("Total Annual Deductions", m.total_deductions, total=True),
        _line("Estimated Tax Savings", m.annual_tax_savings, positive=True),
        _line("Property Tax Savings", m.property_tax_savings),
    ]

    return {
        "key_metrics": key_metrics,
        "after_tax": after_tax,
        "assessment": {"rating": assessment.rating, "message": assessment.message},
        "revenue": revenue,
        "expenses": expenses,
        "financing": financing,
        "tax": tax,
    }
