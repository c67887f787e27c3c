"""
Rental ROI calculator API endpoints.

Backs both the rental ROI form and the negative gearing simulator.
"""

import logging

from fastapi import APIRouter

from app.api.inputs import FormNumber, RateFormModel
from app.calculations.rental import (
    DEFAULT_RENTAL_INPUTS,
    RATE_FIELDS,
    RentalInputs,
    RentalOutputs,
    calculate_rental_roi,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class RentalRoiRequest(RateFormModel):
    """Rental ROI form. Unset amounts default to 0."""

    purchase_price: FormNumber = 0.0
    stamp_duty: FormNumber = 0.0
    closing_costs: FormNumber = 0.0
    rent_per_week: FormNumber = 0.0
    vacancy_weeks: FormNumber = 0.0
    property_management_pct: FormNumber = 0.0
    maintenance_per_year: FormNumber = 0.0
    insurance_per_year: FormNumber = 0.0
    rates_per_year: FormNumber = 0.0
    body_corp_per_year: FormNumber = 0.0
    loan_amount: FormNumber = 0.0
    interest_rate: FormNumber = 0.0
    marginal_tax_rate: FormNumber = 0.0
    depreciation_per_year: FormNumber = 0.0

    def to_inputs(self) -> RentalInputs:
        return RentalInputs.from_dict(self.to_engine_dict(RATE_FIELDS))


@router.get("/defaults", response_model=RentalInputs)
async def get_defaults():
    """Prefilled scenario for the rental ROI form."""
    return DEFAULT_RENTAL_INPUTS


@router.post("/calculate", response_model=RentalOutputs)
async def calculate_rental(form: RentalRoiRequest):
    """Calculate yield, cashflow and tax effect for a rental property."""
    inputs = form.to_inputs()
    outputs = calculate_rental_roi(inputs)

    logger.debug(
        f"Rental ROI: price={inputs.purchase_price} rent={inputs.rent_per_week}/wk "
        f"-> gross yield={outputs.gross_yield_pct:.2f}%"
    )

    return outputs
