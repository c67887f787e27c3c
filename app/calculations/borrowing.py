"""
Loan Readiness Calculations

Estimates borrowing capacity from income and expenses at a lender's
assessment rate, then caps it by the loan-to-value ratio.
"""

from dataclasses import dataclass, asdict
from typing import Dict

from app.calculations.amortization import calculate_repayment_factor

# Share of gross income assumed available for living costs and debt
SERVICEABLE_INCOME_RATIO = 0.7


@dataclass
class LoanReadinessInputs:
    gross_annual_income: float = 180000
    other_debt_repayments_per_month: float = 800
    living_expenses_per_month: float = 3800
    interest_rate: float = 0.065  # As decimal
    assessment_buffer_pct: float = 3  # Whole percent added to the rate
    loan_term_years: float = 30
    lvr: float = 0.8  # As decimal
    purchase_price: float = 900000
    deposit_available: float = 180000


@dataclass(frozen=True)
class LoanReadinessOutputs:
    assessment_rate: float
    monthly_rate: float
    repayment_factor: float
    serviceable_income_per_month: float
    available_for_debt_per_month: float
    borrowing_capacity: float
    max_loan_by_lvr: float
    eligible_loan: float
    deposit_required: float
    deposit_gap: float
    dti: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def assess_loan_readiness(inputs: LoanReadinessInputs) -> LoanReadinessOutputs:
    """
    Calculate how much a buyer can borrow and how far off the deposit is.

    Args:
        inputs: Income, expenses, loan terms and target purchase

    Returns:
        LoanReadinessOutputs
    """
    assessment_rate = inputs.interest_rate + inputs.assessment_buffer_pct / 100
    months = max(1, inputs.loan_term_years) * 12
    monthly_rate = assessment_rate / 12
    repayment_factor = calculate_repayment_factor(assessment_rate, months)

    serviceable = inputs.gross_annual_income / 12 * SERVICEABLE_INCOME_RATIO
    available_for_debt = max(
        0.0,
        serviceable
        - inputs.living_expenses_per_month
        - inputs.other_debt_repayments_per_month,
    )

    if repayment_factor > 0:
        borrowing_capacity = available_for_debt / repayment_factor
    else:
        borrowing_capacity = 0.0

    max_loan_by_lvr = inputs.purchase_price * inputs.lvr
    eligible_loan = max(0.0, min(borrowing_capacity, max_loan_by_lvr))

    deposit_required = inputs.purchase_price * (1 - inputs.lvr)
    deposit_gap = max(0.0, deposit_required - inputs.deposit_available)

    if inputs.gross_annual_income > 0:
        dti = eligible_loan / inputs.gross_annual_income
    else:
        dti = 0.0

    return LoanReadinessOutputs(
        assessment_rate=assessment_rate,
        monthly_rate=monthly_rate,
        repayment_factor=repayment_factor,
        serviceable_income_per_month=serviceable,
        available_for_debt_per_month=available_for_debt,
        borrowing_capacity=borrowing_capacity,
        max_loan_by_lvr=max_loan_by_lvr,
        eligible_loan=eligible_loan,
        deposit_required=deposit_required,
        deposit_gap=deposit_gap,
        dti=dti,
    )
