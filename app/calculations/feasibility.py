"""
Build Feasibility Calculations

Total project cost, resale value, capital gains tax and ROI for a
knockdown-rebuild or land development held for a number of years.

All amounts are in AUD. Rates may be entered as fractions or whole percents
and are normalized before use.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from app.calculations.rates import compound, normalize_fraction

# Direct construction and site costs. Contingency applies to these.
CONSTRUCTION_COST_FIELDS: Tuple[str, ...] = (
    "build_cost",
    "demolition_cost",
    "excavation_cost",
    "tree_removal_cost",
    "rock_removal_cost",
    "traffic_control_cost",
    "site_remediation_cost",
    "geotech_cost",
    "basix_and_sustainability_cost",
    "utility_connection_cost",
    "driveway_landscaping_cost",
    "allowance_variations",
)

PROFESSIONAL_FEE_FIELDS: Tuple[str, ...] = (
    "architect_design_fees",
    "engineering_fees",
    "council_approval_costs",
    "certifier_fees",
    "surveyors_fees",
    "legal_fees_purchase",
)

# Fields that hold a rate rather than an amount
RATE_FIELDS: Tuple[str, ...] = (
    "annual_market_growth",
    "gst_rate",
    "agent_commission_pct",
    "owner_occupied_share_pct",
    "taxable_profit_rate",
    "contingency_pct",
)

CGT_DISCOUNT = 0.5


@dataclass
class FeasibilityInputs:
    """Inputs for a build feasibility scenario. Unset amounts default to 0."""

    # Project basics
    land_price: float = 0.0
    existing_house_value: float = 0.0
    hold_years: float = 0.0
    annual_market_growth: float = 0.0

    # Construction & site costs
    build_cost: float = 0.0  # Ex GST
    demolition_cost: float = 0.0
    excavation_cost: float = 0.0
    tree_removal_cost: float = 0.0
    rock_removal_cost: float = 0.0
    traffic_control_cost: float = 0.0
    site_remediation_cost: float = 0.0
    geotech_cost: float = 0.0
    basix_and_sustainability_cost: float = 0.0
    utility_connection_cost: float = 0.0
    driveway_landscaping_cost: float = 0.0
    allowance_variations: float = 0.0

    # Professional & approval fees
    architect_design_fees: float = 0.0
    engineering_fees: float = 0.0
    council_approval_costs: float = 0.0
    certifier_fees: float = 0.0
    surveyors_fees: float = 0.0
    legal_fees_purchase: float = 0.0

    # Tax, duty & GST
    gst_on_build: bool = False
    gst_rate: float = 0.0
    stamp_duty: float = 0.0

    # Finance
    deposit: float = 0.0
    loan_interest_rate: float = 0.0  # Annual, as decimal
    loan_term_years: float = 0.0
    interest_during_construction_months: float = 0.0
    bank_fee_upfront: float = 0.0
    valuation_fee: float = 0.0
    mortgage_insurance: float = 0.0

    # Holding & operating
    rates_per_year: float = 0.0
    insurance_per_year: float = 0.0
    utilities_per_month: float = 0.0
    property_management_per_year: float = 0.0

    # Selling costs
    agent_commission_pct: float = 0.0
    sales_legal_fees: float = 0.0
    marketing_costs: float = 0.0

    # Taxation
    is_owner_occupied: bool = False
    owner_occupied_share_pct: Optional[float] = None  # None: follow is_owner_occupied
    apply_cgt_discount: bool = True
    taxable_profit_rate: float = 0.0

    # Contingency
    contingency_pct: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FeasibilityInputs":
        """Build inputs from a mapping, ignoring unknown keys and None values."""
        known = {f.name for f in fields(cls)}
        return cls(
            **{k: v for k, v in data.items() if k in known and v is not None}
        )

    def owner_occupied_share(self) -> float:
        """Raw owner-occupied share, derived from the flag when not given."""
        if self.owner_occupied_share_pct is not None:
            return self.owner_occupied_share_pct
        return 1.0 if self.is_owner_occupied else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FeasibilityOutputs:
    """Derived feasibility figures."""

    subtotal_construction: float
    subtotal_professional: float
    subtotal_site: float  # Always 0, site costs are part of construction
    gst_amount: float
    total_project_cost_before_finance: float
    total_finance_costs: float
    total_holding_costs: float
    total_project_cost_all_in: float

    resale_after_hold_years: float
    agent_commission: float
    net_sale_proceeds_before_tax: float
    taxable_gain: float
    estimated_tax: float
    net_profit_after_tax: float
    roi_percent: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def calculate_interest_during_construction(
    subtotal_construction: float, annual_rate: float, months: float
) -> float:
    """
    Estimate construction loan interest.

    The average drawn balance over a progressive build is taken as half
    of the construction subtotal.

    Args:
        subtotal_construction: Construction costs including contingency
        annual_rate: Annual interest rate as decimal
        months: Construction period in months

    Returns:
        Interest over the construction period
    """
    finance_base = subtotal_construction / 2
    return finance_base * (annual_rate / 12) * max(0.0, months)


def calculate_taxable_gain(
    net_sale_proceeds: float,
    project_basis: float,
    owner_occupied_share: float,
    hold_years: float,
    apply_cgt_discount: bool,
) -> float:
    """
    Capital gain left after the main residence exemption and CGT discount.

    The 50% discount applies when hold_years >= 1, a simplified stand-in
    for the "held more than 12 months" rule.
    """
    raw_gain = max(0.0, net_sale_proceeds - project_basis)
    exempt_share = min(max(owner_occupied_share, 0.0), 1.0)
    taxable_gain = raw_gain * (1 - exempt_share)

    if apply_cgt_discount and hold_years >= 1 and taxable_gain > 0:
        taxable_gain *= CGT_DISCOUNT

    return taxable_gain


def calculate_feasibility(inputs: FeasibilityInputs) -> FeasibilityOutputs:
    """
    Run a build feasibility scenario.

    Never raises for numeric input: zero deposits, negative growth and
    similar edge cases fall back to 0, and growth too large for a float
    comes back as infinity.

    Args:
        inputs: Scenario inputs with unset amounts already defaulted to 0

    Returns:
        Fully populated FeasibilityOutputs
    """
    annual_growth = normalize_fraction(inputs.annual_market_growth)
    gst_rate = normalize_fraction(inputs.gst_rate)
    agent_rate = normalize_fraction(inputs.agent_commission_pct)
    tax_rate = normalize_fraction(inputs.taxable_profit_rate)
    owner_share = normalize_fraction(inputs.owner_occupied_share())
    contingency_rate = normalize_fraction(inputs.contingency_pct)

    # === COSTS ===
    direct_costs = sum(getattr(inputs, name) for name in CONSTRUCTION_COST_FIELDS)
    contingency = direct_costs * contingency_rate
    subtotal_construction = direct_costs + contingency

    subtotal_professional = sum(
        getattr(inputs, name) for name in PROFESSIONAL_FEE_FIELDS
    )

    # GST on the raw build cost only, not contingency or site costs
    gst_amount = inputs.build_cost * gst_rate if inputs.gst_on_build else 0.0

    acquisition_costs = (
        inputs.land_price + inputs.stamp_duty + inputs.legal_fees_purchase
    )

    total_before_finance = (
        acquisition_costs + subtotal_construction + subtotal_professional + gst_amount
    )

    interest = calculate_interest_during_construction(
        subtotal_construction,
        inputs.loan_interest_rate,
        inputs.interest_during_construction_months,
    )
    total_finance_costs = (
        interest
        + inputs.bank_fee_upfront
        + inputs.valuation_fee
        + inputs.mortgage_insurance
    )

    total_holding_costs = (
        inputs.rates_per_year
        + inputs.insurance_per_year
        + inputs.utilities_per_month * 12
        + inputs.property_management_per_year
    ) * inputs.hold_years

    total_all_in = total_before_finance + total_finance_costs + total_holding_costs

    # === SALE ===
    # Only land and build appreciate; fees, finance and holding are sunk
    resale = compound(
        inputs.land_price + subtotal_construction, annual_growth, inputs.hold_years
    )

    agent_commission = resale * agent_rate
    selling_costs = agent_commission + inputs.sales_legal_fees + inputs.marketing_costs
    net_sale_proceeds = resale - selling_costs

    # === TAX ===
    # Financed portion of the cost counts towards the basis
    project_basis = total_all_in - inputs.deposit
    taxable_gain = calculate_taxable_gain(
        net_sale_proceeds,
        project_basis,
        owner_share,
        inputs.hold_years,
        inputs.apply_cgt_discount,
    )

    if owner_share >= 1:
        estimated_tax = 0.0
    else:
        estimated_tax = taxable_gain * tax_rate

    net_profit_after_tax = net_sale_proceeds - total_all_in - estimated_tax

    # Leveraged return on the cash deposit
    if inputs.deposit > 0:
        roi_percent = net_profit_after_tax / inputs.deposit * 100
    else:
        roi_percent = 0.0

    return FeasibilityOutputs(
        subtotal_construction=subtotal_construction,
        subtotal_professional=subtotal_professional,
        subtotal_site=0.0,
        gst_amount=gst_amount,
        total_project_cost_before_finance=total_before_finance,
        total_finance_costs=total_finance_costs,
        total_holding_costs=total_holding_costs,
        total_project_cost_all_in=total_all_in,
        resale_after_hold_years=resale,
        agent_commission=agent_commission,
        net_sale_proceeds_before_tax=net_sale_proceeds,
        taxable_gain=taxable_gain,
        estimated_tax=estimated_tax,
        net_profit_after_tax=net_profit_after_tax,
        roi_percent=roi_percent,
    )


# Prefilled scenario shown by the build ROI calculator
DEFAULT_FEASIBILITY_INPUTS = FeasibilityInputs(
    land_price=800000,
    hold_years=3,
    annual_market_growth=0.05,
    build_cost=750000,
    demolition_cost=20000,
    driveway_landscaping_cost=20000,
    allowance_variations=10000,
    stamp_duty=44000,
    deposit=300000,
    loan_interest_rate=0.06,
    loan_term_years=30,
    interest_during_construction_months=12,
    rates_per_year=2200,
    insurance_per_year=1800,
    utilities_per_month=250,
    agent_commission_pct=0.02,
    sales_legal_fees=2500,
    marketing_costs=4000,
    is_owner_occupied=True,
    owner_occupied_share_pct=1,
    apply_cgt_discount=True,
    taxable_profit_rate=0.25,
    contingency_pct=0.1,
)
