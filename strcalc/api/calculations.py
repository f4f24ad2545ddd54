"""
Metric calculation API endpoints.

These endpoints accept an input set and return calculated results without
touching the saved calculator state.
"""

import math
from typing import Any, Dict, Optional

from fastapi import APIRouter
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from strcalc.calculations.display import build_display
from strcalc.calculations.metrics import MetricsResult, coerce_inputs, compute_metrics

router = APIRouter()


class InputSetPayload(BaseModel):
    """
    Calculator inputs, any subset.

    Values may be numbers or numeric-looking strings; they are coerced, not
    validated. Fields accept snake_case or camelCase names.
    """

    # Property & financing
    property_value: Any = None
    down_payment_percent: Any = None
    interest_rate: Any = None
    loan_term_years: Any = None

    # Revenue
    avg_nightly_rate: Any = None
    occupancy_rate: Any = None

    # Fixed costs
    insurance: Any = None
    hoa_fees: Any = None
    utilities: Any = None
    maintenance_percent: Any = None
    capex_percent: Any = None
    rehab_cost: Any = None

    # Short-term rental costs
    property_mgmt_percent: Any = None
    cleaning_fee_per_night: Any = None
    platform_fee_percent: Any = None
    transient_occupancy_tax_percent: Any = None
    str_licenses: Any = None
    supplies_per_night: Any = None
    internet_annual: Any = None

    # Tax assumptions
    marginal_tax_rate: Any = None
    property_tax_rate: Any = None
    land_value_percent: Any = None
    depreciation_years: Any = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def provided(self) -> Dict[str, Any]:
        """Fields present in the request, keyed by snake_case name."""
        return self.model_dump(exclude_unset=True)


class MetricsResponse(BaseModel):
    """Coerced inputs with their derived metrics and display strings."""

    inputs: Dict[str, Optional[float]]
    metrics: Dict[str, Optional[float]]
    display: Dict[str, Any]


def json_safe(value: Any) -> Any:
    """Replace inf and nan (not representable in JSON) with None, recursively."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [json_safe(v) for v in value]
    return value


def metrics_response(inputs: Dict[str, float], metrics: MetricsResult) -> MetricsResponse:
    """Build the JSON response for an input set and its metrics."""
    return MetricsResponse(
        inputs=json_safe(inputs),
        metrics=json_safe(metrics.to_dict()),
        display=json_safe(build_display(metrics)),
    )


@router.post("/metrics", response_model=MetricsResponse)
async def calculate_metrics(inputs: InputSetPayload):
    """Calculate investment metrics; fields left out count as zero."""
    coerced = coerce_inputs(inputs.provided())
    return metrics_response(coerced, compute_metrics(coerced))
