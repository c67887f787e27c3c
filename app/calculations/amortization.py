"""
Loan Repayment Calculations

Principal-and-interest repayment per dollar borrowed.
"""


def calculate_repayment_factor(annual_rate: float, amortization_months: float) -> float:
    """
    Monthly repayment per dollar borrowed.

    r / (1 - (1 + r) ** -n) with r the monthly rate and n the term in months.

    Args:
        annual_rate: Annual interest rate as decimal (e.g., 0.065 for 6.5%)
        amortization_months: Total loan term in months

    Returns:
        Repayment factor, or 0 when the rate or term is not positive so
        capacity calculations that divide by it can guard on it
    """
    if annual_rate <= 0 or amortization_months <= 0:
        return 0.0

    monthly_rate = annual_rate / 12
    denominator = 1 - (1 + monthly_rate) ** -amortization_months

    # Rate too small to register against 1: repay principal evenly
    if denominator <= 0:
        return 1 / amortization_months

    return monthly_rate / denominator
