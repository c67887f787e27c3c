"""
Build ROI calculator API endpoints.

Used by the build ROI form for real-time updates, and shared with the
export endpoints so every surface runs the same calculation.
"""

import logging
from typing import Optional

from fastapi import APIRouter

from app.api.inputs import FormBool, FormNumber, RateFormModel
from app.calculations.feasibility import (
    DEFAULT_FEASIBILITY_INPUTS,
    RATE_FIELDS,
    FeasibilityInputs,
    FeasibilityOutputs,
    calculate_feasibility,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Converted at the form boundary only; the engine uses the loan rate as given
BOUNDARY_RATE_FIELDS = RATE_FIELDS + ("loan_interest_rate",)


class BuildRoiRequest(RateFormModel):
    """
    Build ROI form. Unset amounts default to 0.

    Every rate, the loan interest rate included, follows rates_as_percent,
    so "6" means 6% here as it does on the rental form.
    """

    # Project basics
    land_price: FormNumber = 0.0
    existing_house_value: FormNumber = 0.0
    hold_years: FormNumber = 0.0
    annual_market_growth: FormNumber = 0.0

    # Construction & site
    build_cost: FormNumber = 0.0
    demolition_cost: FormNumber = 0.0
    excavation_cost: FormNumber = 0.0
    tree_removal_cost: FormNumber = 0.0
    rock_removal_cost: FormNumber = 0.0
    traffic_control_cost: FormNumber = 0.0
    site_remediation_cost: FormNumber = 0.0
    geotech_cost: FormNumber = 0.0
    basix_and_sustainability_cost: FormNumber = 0.0
    utility_connection_cost: FormNumber = 0.0
    driveway_landscaping_cost: FormNumber = 0.0
    allowance_variations: FormNumber = 0.0

    # Professional & approval
    architect_design_fees: FormNumber = 0.0
    engineering_fees: FormNumber = 0.0
    council_approval_costs: FormNumber = 0.0
    certifier_fees: FormNumber = 0.0
    surveyors_fees: FormNumber = 0.0
    legal_fees_purchase: FormNumber = 0.0

    # Tax, duty & GST
    gst_on_build: FormBool = False
    gst_rate: FormNumber = 0.0
    stamp_duty: FormNumber = 0.0

    # Finance
    deposit: FormNumber = 0.0
    loan_interest_rate: FormNumber = 0.0
    loan_term_years: FormNumber = 0.0
    interest_during_construction_months: FormNumber = 0.0
    bank_fee_upfront: FormNumber = 0.0
    valuation_fee: FormNumber = 0.0
    mortgage_insurance: FormNumber = 0.0

    # Holding & operating
    rates_per_year: FormNumber = 0.0
    insurance_per_year: FormNumber = 0.0
    utilities_per_month: FormNumber = 0.0
    property_management_per_year: FormNumber = 0.0

    # Selling
    agent_commission_pct: FormNumber = 0.0
    sales_legal_fees: FormNumber = 0.0
    marketing_costs: FormNumber = 0.0

    # Taxation
    is_owner_occupied: FormBool = False
    owner_occupied_share_pct: Optional[FormNumber] = None
    apply_cgt_discount: FormBool = True
    taxable_profit_rate: FormNumber = 0.0

    # Contingency
    contingency_pct: FormNumber = 0.0

    def to_inputs(self) -> FeasibilityInputs:
        """Convert the form into engine inputs with rates as fractions."""
        data = self.to_engine_dict()
        if data["owner_occupied_share_pct"] is None:
            data["owner_occupied_share_pct"] = 1.0 if self.is_owner_occupied else 0.0

        for name in BOUNDARY_RATE_FIELDS:
            data[name] = self.to_rate(data[name])

        return FeasibilityInputs.from_dict(data)


@router.get("/defaults", response_model=FeasibilityInputs)
async def get_defaults():
    """Prefilled scenario for the build ROI form."""
    return DEFAULT_FEASIBILITY_INPUTS


@router.post("/calculate", response_model=FeasibilityOutputs)
async def calculate_build_roi(form: BuildRoiRequest):
    """Calculate total project cost, resale, tax and ROI."""
    inputs = form.to_inputs()
    outputs = calculate_feasibility(inputs)

    logger.debug(
        f"Build ROI: land={inputs.land_price} build={inputs.build_cost} "
        f"hold={inputs.hold_years}y -> roi={outputs.roi_percent:.2f}%"
    )

    return outputs
