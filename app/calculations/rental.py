"""
Rental ROI Calculations

Single-year yield and cashflow for a buy-and-hold rental property.
Debt service is interest-only; principal repayment is not modelled.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Mapping

WEEKS_PER_YEAR = 52

RATE_FIELDS = ("property_management_pct", "interest_rate", "marginal_tax_rate")


@dataclass
class RentalInputs:
    """Inputs for a rental property. Unset amounts default to 0."""

    purchase_price: float = 0.0
    stamp_duty: float = 0.0
    closing_costs: float = 0.0
    rent_per_week: float = 0.0
    vacancy_weeks: float = 0.0
    property_management_pct: float = 0.0  # Of gross rent, as decimal
    maintenance_per_year: float = 0.0
    insurance_per_year: float = 0.0
    rates_per_year: float = 0.0
    body_corp_per_year: float = 0.0
    loan_amount: float = 0.0
    interest_rate: float = 0.0  # Annual, as decimal
    marginal_tax_rate: float = 0.0
    depreciation_per_year: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RentalInputs":
        """Build inputs from a mapping, ignoring unknown keys and None values."""
        known = {f.name for f in fields(cls)}
        return cls(
            **{k: v for k, v in data.items() if k in known and v is not None}
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RentalOutputs:
    """Derived rental figures for one year."""

    gross_rental_income: float
    net_operating_income: float
    annual_debt_service: float
    cashflow_before_tax: float
    gross_yield_pct: float
    net_yield_pct: float
    cash_on_cash_pct: float
    total_initial_cash: float
    taxable_profit: float
    tax_effect: float
    cashflow_after_tax: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def _percent_of(numerator: float, denominator: float) -> float:
    """Ratio as a percentage, 0 when the denominator is not positive."""
    if denominator > 0:
        return numerator / denominator * 100
    return 0.0


def calculate_rental_roi(inputs: RentalInputs) -> RentalOutputs:
    """
    Calculate yield, cashflow and tax effect for a rental property.

    A negative taxable profit (negative gearing) gives a positive tax
    effect, i.e. a refund against other income.

    Args:
        inputs: Rental inputs with rates as decimals

    Returns:
        RentalOutputs for the year
    """
    gross_income = inputs.rent_per_week * (WEEKS_PER_YEAR - inputs.vacancy_weeks)

    operating_expenses = (
        inputs.maintenance_per_year
        + inputs.insurance_per_year
        + inputs.rates_per_year
        + inputs.body_corp_per_year
        + gross_income * inputs.property_management_pct
    )
    noi = gross_income - operating_expenses

    annual_debt_service = inputs.loan_amount * inputs.interest_rate
    cashflow_before_tax = noi - annual_debt_service

    # Depreciation is a paper deduction: it reduces tax, not cash
    taxable_profit = noi - annual_debt_service - inputs.depreciation_per_year
    tax_effect = -taxable_profit * inputs.marginal_tax_rate
    cashflow_after_tax = cashflow_before_tax + tax_effect

    total_initial_cash = (
        inputs.purchase_price
        + inputs.stamp_duty
        + inputs.closing_costs
        - inputs.loan_amount
    )

    return RentalOutputs(
        gross_rental_income=gross_income,
        net_operating_income=noi,
        annual_debt_service=annual_debt_service,
        cashflow_before_tax=cashflow_before_tax,
        gross_yield_pct=_percent_of(gross_income, inputs.purchase_price),
        net_yield_pct=_percent_of(noi, inputs.purchase_price),
        cash_on_cash_pct=_percent_of(cashflow_before_tax, total_initial_cash),
        total_initial_cash=total_initial_cash,
        taxable_profit=taxable_profit,
        tax_effect=tax_effect,
        cashflow_after_tax=cashflow_after_tax,
    )


# Prefilled scenario shown by the rental ROI and gearing calculators
DEFAULT_RENTAL_INPUTS = RentalInputs(
    purchase_price=900000,
    stamp_duty=35000,
    closing_costs=5000,
    rent_per_week=900,
    vacancy_weeks=2,
    property_management_pct=0.06,
    maintenance_per_year=1500,
    insurance_per_year=1200,
    rates_per_year=2500,
    body_corp_per_year=0,
    loan_amount=720000,
    interest_rate=0.065,
    marginal_tax_rate=0.37,
    depreciation_per_year=2500,
)
