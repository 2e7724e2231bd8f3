"""Pydantic schemas for API request/response models.

Percent fields are on a 0-100 scale, as in the engine. Decimal fields
serialize as strings. A ratio that is unbounded (DSCR without debt)
is returned as null.
"""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


# ---- Request schemas ----

class AnalyzeRequest(BaseModel):
    purchase_price: Decimal = Field(..., ge=0)
    imt: Decimal = Decimal("0")
    notary_fees: Decimal = Decimal("0")
    renovation_costs: Decimal = Decimal("0")
    furnishing_costs: Decimal = Decimal("0")

    # Financing: give ltv_pct or down_payment, not both
    ltv_pct: Decimal | None = Field(None, description="Loan as % of purchase price")
    down_payment: Decimal | None = None
    manual_monthly_payment: Decimal | None = Field(
        None, description="Overrides the calculated mortgage payment"
    )
    interest_rate: Decimal = Field(Decimal("0"), description="Annual %")
    loan_term_years: int = 30

    rental_type: Literal["longterm", "shortterm", "mixed"] = "longterm"
    monthly_rent: Decimal = Decimal("0")
    st_occupancy: Decimal = Field(Decimal("0"), description="Short-term occupancy %")
    st_adr: Decimal = Field(Decimal("0"), description="Short-term average daily rate")

    management_pct: Decimal = Decimal("0")
    maintenance_yearly: Decimal = Decimal("0")
    imi_yearly: Decimal = Decimal("0")
    insurance_yearly: Decimal = Decimal("0")
    condo_monthly: Decimal = Decimal("0")
    utilities_monthly: Decimal = Decimal("0")

    rent_growth: Decimal = Decimal("0")
    cost_growth: Decimal = Decimal("0")
    value_growth: Decimal = Decimal("0")
    years: int = Field(10, gt=0)


class UnitRequest(BaseModel):
    id: str
    name: str
    area_m2: Decimal = Decimal("0")
    monthly_rent: Decimal = Decimal("0")
    verdelingsfactor_pct: Decimal
    energy_label: Literal["A", "B", "C", "D", "E", "F"] = "C"
    tenant_retention_months: Decimal = Decimal("0")
    renovation_score: int = Field(1, ge=1, le=10)
    occupancy_pct: Decimal = Decimal("100")
    tenant_type: Literal["langdurig", "toerisme", "student"] = "langdurig"


class SharedCostsRequest(BaseModel):
    gas_monthly: Decimal = Decimal("0")
    water_monthly: Decimal = Decimal("0")
    vve_monthly: Decimal = Decimal("0")
    maintenance_yearly: Decimal = Decimal("0")
    insurance_yearly: Decimal = Decimal("0")


class MultiUnitRequest(BaseModel):
    property_name: str = ""
    purchase_price: Decimal = Field(..., ge=0)
    imt: Decimal = Decimal("0")
    imt_automatic: bool = False
    property_use: Literal["woning", "niet-woning"] = "niet-woning"
    notary_fees: Decimal = Decimal("0")
    renovation_costs: Decimal = Decimal("0")
    own_capital: Decimal = Decimal("0")
    loan_amount: Decimal = Decimal("0")
    manual_monthly_payment: Decimal | None = None
    interest_rate: Decimal = Decimal("0")
    loan_term_years: int = 30
    market_value: Decimal = Decimal("0")
    units: list[UnitRequest] = []
    shared_costs: SharedCostsRequest = SharedCostsRequest()
    irs_year: int = 2026
    contract_years: int = 1


class MortgageRequest(BaseModel):
    principal: Decimal
    interest_rate: Decimal = Field(..., description="Annual %")
    loan_term_years: int


class IMTRequest(BaseModel):
    price: Decimal
    property_use: Literal["woning", "niet-woning"] = "niet-woning"


class IMIRequest(BaseModel):
    assessed_value: Decimal
    municipality_type: Literal["standaard", "grote_stad", "landelijk"] = "standaard"
    custom_rate: Decimal | None = Field(None, description="% of VPT")


class IRSRequest(BaseModel):
    income_year: int
    monthly_rent: Decimal
    contract_years: int | None = None
    renewals: int = 0
    englobamento: bool = False
    dhd_contract: bool = False


class TaxSummaryRequest(BaseModel):
    price: Decimal
    assessed_value: Decimal
    irs: IRSRequest
    property_use: Literal["woning", "niet-woning"] = "niet-woning"
    municipality_type: Literal["standaard", "grote_stad", "landelijk"] = "standaard"


class SnowballPropertyRequest(BaseModel):
    id: str
    name: str = ""
    debt: Decimal
    monthly_payment: Decimal
    net_cashflow: Decimal
    interest_rate: Decimal


class SnowballRequest(BaseModel):
    properties: list[SnowballPropertyRequest]
    extra_monthly_cash: Decimal = Decimal("0")
    strategy: Literal["smallest", "highest_interest"] = "smallest"


class SnowballImpactRequest(BaseModel):
    existing: list[SnowballPropertyRequest]
    candidate: SnowballPropertyRequest
    extra_monthly_cash: Decimal = Decimal("0")
    strategy: Literal["smallest", "highest_interest"] = "smallest"


class SellOrKeepRequest(BaseModel):
    current_market_value: Decimal = Field(..., ge=0)
    original_purchase_price: Decimal = Field(..., ge=0)
    cadastral_value: Decimal = Field(Decimal("0"), description="VPT")

    remaining_mortgage: Decimal = Decimal("0")
    mortgage_rate: Decimal = Field(Decimal("3.8"), description="Annual %")
    mortgage_type: Literal["annuity", "interest_only"] = "annuity"
    remaining_years: int = 25

    monthly_rent: Decimal = Decimal("0")
    maintenance_monthly: Decimal = Decimal("300")
    renovation_reserve_pct: Decimal = Decimal("6")
    vacancy_pct: Decimal = Decimal("5")
    property_manager: Literal["self", "longterm", "shortterm"] = "self"

    imi_rate: Decimal = Field(Decimal("0.4"), description="% of VPT")
    rental_tax_regime: Literal["autonomous", "progressive"] = "autonomous"
    sales_costs_pct: Decimal = Decimal("7")
    capital_gains_regime: Literal["autonomous", "progressive"] = "autonomous"
    reinvest_in_eu_residence: bool = False
    resident: bool = True

    annual_growth: Decimal = Decimal("3.4")
    alternative_return: Decimal = Decimal("7.5")
    horizon_years: Literal[10, 30] = 10
    primary_goal: Literal["cashflow", "wealth", "retirement", "legacy"] = "wealth"
    risk_profile: Literal["low", "medium", "high"] = "medium"


# ---- Response schemas ----

class YearlyCashflowResponse(BaseModel):
    year: int
    gross_rent: Decimal
    opex: Decimal
    noi: Decimal
    debt_service: Decimal
    net_cashflow: Decimal
    cumulative_cashflow: Decimal


class ExitAnalysisResponse(BaseModel):
    market_value: Decimal
    remaining_debt: Decimal
    net_exit: Decimal
    total_return: Decimal


class RiskResponse(BaseModel):
    level: str
    score: int
    reasons: list[str]


class AnalysisResponse(BaseModel):
    total_investment: Decimal
    own_capital: Decimal
    loan_amount: Decimal
    monthly_payment: Decimal
    bar: Decimal
    nar: Decimal
    cash_on_cash: Decimal
    dscr: Decimal | None
    irr: Decimal
    break_even_occupancy: Decimal
    yearly_cashflows: list[YearlyCashflowResponse]
    exit_analysis: ExitAnalysisResponse
    risk: RiskResponse


class UnitAnalysisResponse(BaseModel):
    id: str
    name: str
    area_m2: Decimal
    gross_rent: Decimal
    allocated_costs: Decimal
    noi: Decimal
    mortgage_share: Decimal
    cashflow: Decimal
    cashflow_after_tax: Decimal
    yield_per_m2: Decimal
    opex_ratio: Decimal
    occupancy_pct: Decimal
    tenant_retention_months: Decimal
    cash_on_cash: Decimal
    dscr: Decimal | None
    energy_label: str
    renovation_score: int
    tenant_type: str


class TenantTypeShareResponse(BaseModel):
    tenant_type: str
    count: int
    percentage: Decimal


class MultiUnitResponse(BaseModel):
    total_gross_rent: Decimal
    total_noi: Decimal
    total_cashflow: Decimal
    total_cashflow_after_tax: Decimal
    avg_cash_on_cash: Decimal
    avg_dscr: Decimal | None
    avg_opex_ratio: Decimal
    avg_occupancy: Decimal
    avg_tenant_retention: Decimal
    total_investment: Decimal
    own_capital: Decimal
    monthly_payment: Decimal
    irs_rate: Decimal
    cap_rate: Decimal
    annual_cashflow: Decimal
    irr_10_years: Decimal
    break_even_occupancy: Decimal
    renovation_estimate_3_years: Decimal
    tenant_diversity: list[TenantTypeShareResponse]
    units: list[UnitAnalysisResponse]
    warnings: list[str] = []


class MortgageYearResponse(BaseModel):
    year: int
    principal: Decimal
    interest: Decimal
    debt_service: Decimal
    ending_balance: Decimal


class MortgageResponse(BaseModel):
    monthly_payment: Decimal
    total_interest: Decimal
    years: list[MortgageYearResponse]


class IMTResponse(BaseModel):
    amount: Decimal
    marginal_rate: Decimal
    average_rate: Decimal
    taxa_unica: bool
    explanation: str


class IMIResponse(BaseModel):
    annual_amount: Decimal
    monthly_amount: Decimal
    rate: Decimal
    explanation: str
    next_payment: str


class IRSResponse(BaseModel):
    annual_amount: Decimal
    monthly_amount: Decimal
    gross_annual_rent: Decimal
    net_annual_rent: Decimal
    net_monthly_rent: Decimal
    rate: Decimal
    regime: str
    explanation: str
    saving: Decimal | None = None
    warning: str | None = None


class TaxSummaryResponse(BaseModel):
    imt: IMTResponse
    imi: IMIResponse
    irs: IRSResponse
    total_one_time: Decimal
    total_annual: Decimal
    total_monthly: Decimal


class SnowballResultResponse(BaseModel):
    id: str
    name: str
    months_to_payoff: int
    paid_off: bool


class SnowballImpactResponse(BaseModel):
    months_without: int
    months_with: int
    months_saved: int
    candidate_is_profitable: bool
    results_without: list[SnowballResultResponse]
    results_with: list[SnowballResultResponse]


class SensitivityScenarioResponse(BaseModel):
    label: str
    interest_rate: Decimal
    st_occupancy: Decimal
    rent_change_pct: Decimal
    monthly_payment: Decimal
    irr: Decimal
    dscr: Decimal | None
    year_one_cashflow: Decimal
    irr_change: Decimal
    dscr_change: Decimal | None
    year_one_cashflow_change: Decimal


class ScenarioDetailResponse(BaseModel):
    label: str
    value: Decimal
    description: str


class ScenarioResponse(BaseModel):
    code: str
    name: str
    monthly_income: Decimal
    net_worth_10_years: Decimal
    net_worth_30_years: Decimal
    cashflow_stability: str
    fiscal_predictability: str
    operational_complexity: str
    legacy_years: int
    details: list[ScenarioDetailResponse]


class StressTestResponse(BaseModel):
    scenario: str
    impact: Decimal
    description: str


class RecommendationResponse(BaseModel):
    best_scenario: str
    reasoning: str
    tradeoffs: list[str]


class SellOrKeepResponse(BaseModel):
    scenario_a: ScenarioResponse
    scenario_b: ScenarioResponse
    scenario_c: ScenarioResponse
    keep_irr: Decimal
    stress_tests: list[StressTestResponse]
    recommendation: RecommendationResponse
