"""
Pathways API endpoints.

Loan readiness, savings planning and strategy simulation for buyers working
towards a purchase. Unset fields take the planner defaults.
"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException

from app.api.inputs import FormModel, FormNumber
from app.calculations.borrowing import (
    LoanReadinessInputs,
    LoanReadinessOutputs,
    assess_loan_readiness,
)
from app.calculations.savings import SavingsInputs, SavingsOutputs, project_savings
from app.calculations.strategy import (
    STRATEGY_PRESETS,
    StrategyInputs,
    StrategyOutputs,
    apply_preset,
    simulate_strategy,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class LoanReadinessRequest(FormModel):
    """Loan readiness form."""

    gross_annual_income: FormNumber = LoanReadinessInputs.gross_annual_income
    other_debt_repayments_per_month: FormNumber = (
        LoanReadinessInputs.other_debt_repayments_per_month
    )
    living_expenses_per_month: FormNumber = LoanReadinessInputs.living_expenses_per_month
    interest_rate: FormNumber = LoanReadinessInputs.interest_rate
    assessment_buffer_pct: FormNumber = LoanReadinessInputs.assessment_buffer_pct
    loan_term_years: FormNumber = LoanReadinessInputs.loan_term_years
    lvr: FormNumber = LoanReadinessInputs.lvr
    purchase_price: FormNumber = LoanReadinessInputs.purchase_price
    deposit_available: FormNumber = LoanReadinessInputs.deposit_available


class SavingsPlanRequest(FormModel):
    """Savings planner form."""

    current_savings: FormNumber = SavingsInputs.current_savings
    monthly_savings: FormNumber = SavingsInputs.monthly_savings
    target_amount: FormNumber = SavingsInputs.target_amount
    months: FormNumber = SavingsInputs.months
    annual_interest_pct: FormNumber = SavingsInputs.annual_interest_pct
    start_date: Optional[date] = None  # Defaults to today


class StrategyRequest(FormModel):
    """Strategy simulator form. A preset overrides the fields it sets."""

    current_savings: FormNumber = StrategyInputs.current_savings
    monthly_savings: FormNumber = StrategyInputs.monthly_savings
    target_deposit: FormNumber = StrategyInputs.target_deposit
    purchase_price: FormNumber = StrategyInputs.purchase_price
    annual_growth_rate: FormNumber = StrategyInputs.annual_growth_rate
    gross_yield_pct: FormNumber = StrategyInputs.gross_yield_pct
    years: FormNumber = StrategyInputs.years
    lvr: FormNumber = StrategyInputs.lvr
    preset: Optional[str] = None


@router.post("/loan-readiness", response_model=LoanReadinessOutputs)
async def loan_readiness(form: LoanReadinessRequest):
    """Estimate borrowing capacity and deposit gap."""
    outputs = assess_loan_readiness(LoanReadinessInputs(**form.model_dump()))
    logger.debug(f"Loan readiness: eligible loan={outputs.eligible_loan:.0f}")
    return outputs


@router.post("/savings-plan", response_model=SavingsOutputs)
def savings_plan(form: SavingsPlanRequest):
    """Project savings and time to reach the target."""
    data = form.model_dump(exclude={"start_date"})
    start_date = form.start_date or date.today()
    return project_savings(SavingsInputs(**data), start_date=start_date)


@router.post("/strategy", response_model=StrategyOutputs)
async def strategy(form: StrategyRequest):
    """Simulate saving a deposit then holding the purchase."""
    inputs = StrategyInputs(**form.model_dump(exclude={"preset"}))

    if form.preset is not None:
        if form.preset not in STRATEGY_PRESETS:
            raise HTTPException(
                status_code=400, detail=f"Unknown strategy preset: {form.preset}"
            )
        inputs = apply_preset(inputs, form.preset)

    return simulate_strategy(inputs)
