"""
Loan Payment Calculations

Fixed-rate mortgage payment and the first-year interest estimate used by
the tax deduction figures.
"""

import numpy as np


def calculate_payment(
    principal: float, annual_rate: float, amortization_months: float
) -> float:
    """
    Calculate monthly principal and interest payment.

    Standard fixed-rate amortization formula. Unlike Excel's PMT(), a zero
    or negative rate yields no payment rather than straight-line principal.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as decimal (e.g., 0.07 for 7%)
        amortization_months: Total amortization period in months

    Returns:
        Monthly payment amount (0.0 when any input is not positive)
    """
    monthly_rate = annual_rate / 12

    if not (principal > 0 and monthly_rate > 0 and amortization_months > 0):
        return 0.0

    # Huge terms overflow to inf and the payment degrades to nan
    with np.errstate(over="ignore", invalid="ignore"):
        growth = np.power(1 + monthly_rate, amortization_months)
        payment = principal * (monthly_rate * growth) / (growth - 1)

    return float(payment)


def calculate_annual_interest(principal: float, annual_rate: float) -> float:
    """
    Estimate first-year interest as principal times the annual rate.

    This is a flat approximation, not the year-one sum of an amortization
    schedule, and overstates interest slightly for amortizing loans.
    """
    return principal * annual_rate
