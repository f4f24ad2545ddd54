"""
Tax Calculations

Depreciation and marginal-rate tax savings for a rental property.
"""

from typing import Iterable


def calculate_building_value(property_value: float, land_share: float) -> float:
    """
    Calculate the depreciable (non-land) portion of a property.

    Args:
        property_value: Total property value
        land_share: Land portion of value as decimal (e.g., 0.20 for 20%)
    """
    return property_value * (1 - land_share)


def calculate_depreciation(building_value: float, recovery_years: float) -> float:
    """
    Calculate straight-line annual depreciation.

    Args:
        building_value: Depreciable basis
        recovery_years: Recovery period (27.5 for US residential rental)

    Returns:
        Annual depreciation, or 0.0 when the recovery period is not positive
    """
    if recovery_years > 0:
        return building_value / recovery_years
    return 0.0


def calculate_total_deductions(deductions: Iterable[float]) -> float:
    """Sum deductible amounts, depreciation included."""
    return sum(deductions, 0.0)


def calculate_tax_savings(deductions: float, marginal_rate: float) -> float:
    """Calculate tax saved by a deduction at the given marginal rate (decimal)."""
    return deductions * marginal_rate
