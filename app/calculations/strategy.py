"""
Strategy Simulator Calculations

Time to save a deposit, then equity and rent after holding the purchase.
"""

import math
from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, Optional

from app.calculations.rates import compound


@dataclass
class StrategyInputs:
    current_savings: float = 120000
    monthly_savings: float = 3500
    target_deposit: float = 180000
    purchase_price: float = 900000
    annual_growth_rate: float = 0.04  # As decimal
    gross_yield_pct: float = 3.6  # Whole percent
    years: float = 5
    lvr: float = 0.8  # As decimal


@dataclass(frozen=True)
class StrategyOutputs:
    deposit_gap: float
    months_to_deposit: Optional[int]  # None when the deposit is out of reach
    years_to_deposit: Optional[float]
    loan_amount: float
    initial_equity: float
    value_after_years: float
    equity_after_years: float
    rental_income_year: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


STRATEGY_PRESETS: Dict[str, Dict[str, float]] = {
    "buy_hold": {"lvr": 0.8, "annual_growth_rate": 0.04, "gross_yield_pct": 3.6},
    "rentvest": {"lvr": 0.9, "annual_growth_rate": 0.035, "gross_yield_pct": 4.2},
    "kdr": {
        "purchase_price": 1200000,
        "lvr": 0.75,
        "annual_growth_rate": 0.045,
        "gross_yield_pct": 3.4,
    },
}


def apply_preset(inputs: StrategyInputs, preset: str) -> StrategyInputs:
    """
    Return a copy of inputs with a named strategy preset applied.

    Raises:
        KeyError: If the preset is unknown
    """
    return replace(inputs, **STRATEGY_PRESETS[preset])


def simulate_strategy(inputs: StrategyInputs) -> StrategyOutputs:
    """Run the deposit and hold simulation."""
    deposit_gap = max(0.0, inputs.target_deposit - inputs.current_savings)

    months_to_deposit = None
    years_to_deposit = None
    if inputs.monthly_savings > 0:
        months = deposit_gap / inputs.monthly_savings
        if math.isfinite(months):
            months_to_deposit = math.ceil(months)
            years_to_deposit = months_to_deposit / 12

    loan_amount = inputs.purchase_price * inputs.lvr
    value_after_years = compound(
        inputs.purchase_price, inputs.annual_growth_rate, inputs.years
    )

    return StrategyOutputs(
        deposit_gap=deposit_gap,
        months_to_deposit=months_to_deposit,
        years_to_deposit=years_to_deposit,
        loan_amount=loan_amount,
        initial_equity=inputs.purchase_price - loan_amount,
        value_after_years=value_after_years,
        equity_after_years=value_after_years - loan_amount,
        rental_income_year=inputs.purchase_price * inputs.gross_yield_pct / 100,
    )
