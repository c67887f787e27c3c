"""
Savings Planner Calculations

Projects a savings balance with monthly contributions and monthly
compounding, and estimates how long it takes to reach a target.
"""

import math
from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Dict, Optional

from dateutil.relativedelta import relativedelta

from app.calculations.rates import compound

MAX_MONTHS_TO_TARGET = 1000


@dataclass
class SavingsInputs:
    current_savings: float = 120000
    monthly_savings: float = 3500
    target_amount: float = 180000
    months: float = 12
    annual_interest_pct: float = 2.0  # Whole percent


@dataclass(frozen=True)
class SavingsOutputs:
    projected_balance: float
    months_to_target: Optional[int]  # None when the target is out of reach
    target_date: Optional[date]
    progress_now_pct: float
    progress_projected_pct: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _grow(balance: float, monthly_rate: float, contribution: float) -> float:
    return balance * (1 + monthly_rate) + contribution


def calculate_future_value(
    balance: float, monthly_rate: float, contribution: float, months: float
) -> float:
    """
    Balance after saving for a number of months.

    Interest is credited monthly, then the contribution is added. Part
    months count as a whole month.
    """
    months = max(0.0, months)
    if math.isfinite(months):
        months = math.ceil(months)

    if monthly_rate == 0:
        return balance + (contribution * months if contribution else 0.0)

    # Annuity future value of the contributions
    grown = compound(contribution, monthly_rate, months)
    contributions = (grown - contribution) / monthly_rate
    return compound(balance, monthly_rate, months) + contributions


def _progress_pct(amount: float, target: float) -> float:
    return max(0.0, min(100.0, amount / max(1.0, target) * 100))


def calculate_months_to_target(inputs: SavingsInputs, monthly_rate: float) -> Optional[int]:
    """
    Count whole months until the balance reaches the target.

    Returns None if savings never get there within MAX_MONTHS_TO_TARGET.
    """
    if inputs.monthly_savings <= 0 and inputs.current_savings < inputs.target_amount:
        return None

    balance = max(0.0, inputs.current_savings)
    months = 0
    while balance < inputs.target_amount and months < MAX_MONTHS_TO_TARGET:
        balance = _grow(balance, monthly_rate, inputs.monthly_savings)
        months += 1

    if balance < inputs.target_amount:
        return None
    return months


def project_savings(
    inputs: SavingsInputs, start_date: Optional[date] = None
) -> SavingsOutputs:
    """
    Project savings over the planning horizon.

    Args:
        inputs: Savings plan
        start_date: Date the plan starts, used to derive target_date

    Returns:
        SavingsOutputs
    """
    monthly_rate = max(0.0, inputs.annual_interest_pct) / 100 / 12

    balance = calculate_future_value(
        max(0.0, inputs.current_savings),
        monthly_rate,
        inputs.monthly_savings,
        inputs.months,
    )

    months_to_target = calculate_months_to_target(inputs, monthly_rate)

    target_date = None
    if start_date is not None and months_to_target is not None:
        target_date = start_date + relativedelta(months=months_to_target)

    return SavingsOutputs(
        projected_balance=balance,
        months_to_target=months_to_target,
        target_date=target_date,
        progress_now_pct=_progress_pct(inputs.current_savings, inputs.target_amount),
        progress_projected_pct=_progress_pct(balance, inputs.target_amount),
    )
