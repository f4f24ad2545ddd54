"""
Short-Term Rental Investment Metrics

Maps a flat set of property, financing, revenue, expense and tax inputs to
the derived annual metrics shown by the calculator. Percent inputs use a
0-100 scale; money is in USD.

compute_metrics() is pure and total: missing or unparsable inputs count as
zero, negative inputs are accepted, and only the payment, return and
depreciation divisions are guarded. Other ratios follow IEEE semantics and
may come back as inf or nan.
"""

import math
import re
from dataclasses import asdict, dataclass
from numbers import Real
from typing import Any, Dict, Mapping, Optional

import numpy as np

from strcalc.calculations.amortization import (
    calculate_annual_interest,
    calculate_payment,
)
from strcalc.calculations.tax import (
    calculate_building_value,
    calculate_depreciation,
    calculate_tax_savings,
    calculate_total_deductions,
)

DAYS_PER_YEAR = 365

# Field name -> default value, in form order
DEFAULT_INPUTS: Dict[str, float] = {
    # Property & financing
    "property_value": 250000.0,
    "down_payment_percent": 25.0,
    "interest_rate": 7.12,
    "loan_term_years": 30.0,
    # Revenue
    "avg_nightly_rate": 200.0,
    "occupancy_rate": 51.0,
    # Fixed costs
    "insurance": 1000.0,
    "hoa_fees": 0.0,
    "utilities": 2400.0,
    "maintenance_percent": 1.0,
    "capex_percent": 0.5,
    "rehab_cost": 0.0,
    # Short-term rental costs
    "property_mgmt_percent": 13.0,
    "cleaning_fee_per_night": 50.0,
    "platform_fee_percent": 3.0,
    "transient_occupancy_tax_percent": 7.0,
    "str_licenses": 1300.0,
    "supplies_per_night": 15.0,
    "internet_annual": 600.0,
    # Tax assumptions
    "marginal_tax_rate": 25.0,
    "property_tax_rate": 1.25,
    "land_value_percent": 20.0,
    "depreciation_years": 27.5,
}

INPUT_FIELDS = tuple(DEFAULT_INPUTS)


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


# camelCase names used by saved browser snapshots
INPUT_ALIASES: Dict[str, str] = {_camel_case(name): name for name in INPUT_FIELDS}

_LEADING_NUMBER = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)


def to_number(value: Any) -> float:
    """
    Coerce a form value to a float the way a browser's parseFloat would.

    Numbers pass through, strings are parsed from their longest leading
    numeric literal ("12abc" -> 12.0), and anything else, including
    empty strings, booleans and NaN, becomes 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, Real):
        try:
            number = float(value)
        except OverflowError:
            # Integers past the float range, as parseFloat reads them
            return math.inf if value > 0 else -math.inf
    else:
        match = _LEADING_NUMBER.match(str(value).strip())
        if not match:
            return 0.0
        number = float(match.group(0).replace("Infinity", "inf"))

    if math.isnan(number) or number == 0:
        return 0.0
    return number


def resolve_field(key: str) -> Optional[str]:
    """Return the canonical field name for a snake_case or camelCase key."""
    if key in DEFAULT_INPUTS:
        return key
    return INPUT_ALIASES.get(key)


def default_inputs() -> Dict[str, float]:
    """Return a fresh copy of the default input set."""
    return dict(DEFAULT_INPUTS)


def coerce_inputs(
    raw: Mapping[str, Any], base: Optional[Mapping[str, Any]] = None
) -> Dict[str, float]:
    """
    Build a complete input set from a partial, loosely typed mapping.

    Args:
        raw: Field values keyed by snake_case or camelCase name; unknown
            keys are ignored
        base: Values for fields absent from raw (zero when omitted)

    Returns:
        Dict with every input field as a float
    """
    inputs = {name: 0.0 for name in INPUT_FIELDS}
    if base is not None:
        for key, value in base.items():
            name = resolve_field(key)
            if name is not None:
                inputs[name] = to_number(value)

    for key, value in raw.items():
        name = resolve_field(key)
        if name is not None:
            inputs[name] = to_number(value)

    return inputs


def round_half_up(value: float):
    """Round to the nearest integer, halves up; non-finite values pass through."""
    if not math.isfinite(value):
        return value
    return int(math.floor(value + 0.5))


def unguarded_divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE semantics: x/0 gives inf, -inf or nan instead of raising."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(numerator), np.float64(denominator)))


@dataclass(frozen=True)
class MetricsResult:
    """Derived annual metrics for one input set."""

    # Financing
    down_payment: float
    loan_amount: float
    monthly_pi: float
    annual_pi: float

    # Revenue
    occupied_nights: float
    gross_revenue: float
    revenue_per_occupied_night: float

    # Expenses
    property_taxes: float
    insurance: float
    hoa_fees: float
    maintenance: float
    capex: float
    rehab_cost: float
    property_mgmt: float
    cleaning_fees: float
    platform_fees: float
    transient_occupancy_tax: float
    supplies: float
    other_operating_expenses: float
    total_expenses: float

    # Returns
    noi: float
    cash_flow: float
    monthly_cash_flow: float
    total_cash_invested: float
    cash_on_cash_return: float
    cap_rate: float

    # Tax
    annual_interest: float
    building_value: float
    depreciation: float
    total_deductions: float
    annual_tax_savings: float
    property_tax_savings: float
    after_tax_annual_cash_flow: float
    after_tax_monthly_cash_flow: float
    after_tax_cash_on_cash_return: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def compute_metrics(inputs: Mapping[str, Any]) -> MetricsResult:
    """
    Compute investment metrics for a short-term rental.

    Args:
        inputs: Input set keyed by field name (snake_case or camelCase).
            Missing fields count as zero.

    Returns:
        MetricsResult with every derived figure
    """
    i = coerce_inputs(inputs)
    property_value = i["property_value"]

    property_taxes = property_value * (i["property_tax_rate"] / 100)

    # Financing
    down_payment = property_value * (i["down_payment_percent"] / 100)
    loan_amount = property_value - down_payment
    annual_rate = i["interest_rate"] / 100
    monthly_pi = calculate_payment(loan_amount, annual_rate, i["loan_term_years"] * 12)
    annual_pi = monthly_pi * 12

    # Revenue
    occupied_nights = round_half_up((i["occupancy_rate"] / 100) * DAYS_PER_YEAR)
    gross_revenue = i["avg_nightly_rate"] * occupied_nights

    # Variable costs
    maintenance = property_value * (i["maintenance_percent"] / 100)
    capex = property_value * (i["capex_percent"] / 100)
    property_mgmt = gross_revenue * (i["property_mgmt_percent"] / 100)
    cleaning_fees = occupied_nights * i["cleaning_fee_per_night"]
    platform_fees = gross_revenue * (i["platform_fee_percent"] / 100)
    transient_occupancy_tax = gross_revenue * (
        i["transient_occupancy_tax_percent"] / 100
    )
    supplies = occupied_nights * i["supplies_per_night"]

    other_operating_expenses = (
        i["utilities"]
        + maintenance
        + capex
        + i["rehab_cost"]
        + i["str_licenses"]
        + supplies
        + i["internet_annual"]
    )

    # Deductible operating costs, in display order
    operating_costs = [
        property_taxes,
        i["insurance"],
        i["hoa_fees"],
        i["utilities"],
        maintenance,
        capex,
        i["rehab_cost"],
        property_mgmt,
        cleaning_fees,
        platform_fees,
        transient_occupancy_tax,
        i["str_licenses"],
        supplies,
        i["internet_annual"],
    ]
    total_expenses = sum(operating_costs, annual_pi)

    noi = gross_revenue - (total_expenses - annual_pi)
    cash_flow = gross_revenue - total_expenses
    monthly_cash_flow = cash_flow / 12

    total_cash_invested = down_payment + i["rehab_cost"]
    if total_cash_invested > 0:
        cash_on_cash_return = (cash_flow / total_cash_invested) * 100
    else:
        cash_on_cash_return = 0.0
    cap_rate = (noi / property_value) * 100 if property_value > 0 else 0.0

    # Tax
    annual_interest = calculate_annual_interest(loan_amount, annual_rate)
    building_value = calculate_building_value(
        property_value, i["land_value_percent"] / 100
    )
    depreciation = calculate_depreciation(building_value, i["depreciation_years"])
    total_deductions = calculate_total_deductions(
        [annual_interest, *operating_costs, depreciation]
    )

    marginal_rate = i["marginal_tax_rate"] / 100
    annual_tax_savings = calculate_tax_savings(total_deductions, marginal_rate)
    property_tax_savings = calculate_tax_savings(property_taxes, marginal_rate)

    after_tax_annual_cash_flow = cash_flow + annual_tax_savings
    after_tax_monthly_cash_flow = after_tax_annual_cash_flow / 12
    if total_cash_invested > 0:
        after_tax_cash_on_cash_return = (
            after_tax_annual_cash_flow / total_cash_invested
        ) * 100
    else:
        after_tax_cash_on_cash_return = 0.0

    return MetricsResult(
        down_payment=down_payment,
        loan_amount=loan_amount,
        monthly_pi=monthly_pi,
        annual_pi=annual_pi,
        occupied_nights=occupied_nights,
        gross_revenue=gross_revenue,
        revenue_per_occupied_night=unguarded_divide(gross_revenue, occupied_nights),
        property_taxes=property_taxes,
        insurance=i["insurance"],
        hoa_fees=i["hoa_fees"],
        maintenance=maintenance,
        capex=capex,
        rehab_cost=i["rehab_cost"],
        property_mgmt=property_mgmt,
        cleaning_fees=cleaning_fees,
        platform_fees=platform_fees,
        transient_occupancy_tax=transient_occupancy_tax,
        supplies=supplies,
        other_operating_expenses=other_operating_expenses,
        total_expenses=total_expenses,
        noi=noi,
        cash_flow=cash_flow,
        monthly_cash_flow=monthly_cash_flow,
        total_cash_invested=total_cash_invested,
        cash_on_cash_return=cash_on_cash_return,
        cap_rate=cap_rate,
        annual_interest=annual_interest,
        building_value=building_value,
        depreciation=depreciation,
        total_deductions=total_deductions,
        annual_tax_savings=annual_tax_savings,
        property_tax_savings=property_tax_savings,
        after_tax_annual_cash_flow=after_tax_annual_cash_flow,
        after_tax_monthly_cash_flow=after_tax_monthly_cash_flow,
        after_tax_cash_on_cash_return=after_tax_cash_on_cash_return,
    )
