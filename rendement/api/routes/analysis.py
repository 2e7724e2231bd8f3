"""Analysis routes: single property, sensitivity, multi-unit building, mortgage."""

from dataclasses import asdict
from decimal import Decimal

from fastapi import APIRouter, HTTPException

from rendement.api.schemas import (
    AnalysisResponse,
    AnalyzeRequest,
    ExitAnalysisResponse,
    MortgageRequest,
    MortgageResponse,
    MortgageYearResponse,
    MultiUnitRequest,
    MultiUnitResponse,
    RiskResponse,
    SensitivityScenarioResponse,
    TenantTypeShareResponse,
    UnitAnalysisResponse,
    YearlyCashflowResponse,
)
from rendement.models.analysis import (
    AnalysisInputs,
    CalculatedPayment,
    DownPayment,
    LoanToValue,
    ManualPayment,
    RentalType,
)
from rendement.models.multi_unit import MultiUnitInputs, SharedCosts, TenantType, UnitInput
from rendement.models.tax import PropertyUse
from rendement.engine.debt import amortization_schedule, yearly_debt_summary
from rendement.engine.investment import analyze_investment, assess_risk, sensitivity
from rendement.engine.multi_unit import analyze_multi_unit

router = APIRouter(prefix="/api/v1", tags=["analysis"])


def _finite(value: Decimal) -> Decimal | None:
    return None if value.is_infinite() else value


def _build_inputs(req: AnalyzeRequest) -> AnalysisInputs:
    """Map the flat request onto the engine's financing variants."""
    if req.ltv_pct is not None and req.down_payment is not None:
        raise ValueError("Give either ltv_pct or down_payment, not both")
    if req.down_payment is not None:
        loan = DownPayment(req.down_payment)
    else:
        loan = LoanToValue(req.ltv_pct or Decimal("0"))

    if req.manual_monthly_payment is not None:
        payment = ManualPayment(req.manual_monthly_payment)
    else:
        payment = CalculatedPayment()

    return AnalysisInputs(
        purchase_price=req.purchase_price,
        imt=req.imt,
        notary_fees=req.notary_fees,
        renovation_costs=req.renovation_costs,
        furnishing_costs=req.furnishing_costs,
        loan=loan,
        payment=payment,
        interest_rate=req.interest_rate,
        loan_term_years=req.loan_term_years,
        rental_type=RentalType(req.rental_type),
        monthly_rent=req.monthly_rent,
        st_occupancy=req.st_occupancy,
        st_adr=req.st_adr,
        management_pct=req.management_pct,
        maintenance_yearly=req.maintenance_yearly,
        imi_yearly=req.imi_yearly,
        insurance_yearly=req.insurance_yearly,
        condo_monthly=req.condo_monthly,
        utilities_monthly=req.utilities_monthly,
        rent_growth=req.rent_growth,
        cost_growth=req.cost_growth,
        value_growth=req.value_growth,
        years=req.years,
    )


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze(req: AnalyzeRequest):
    """Single-property projection, KPIs, exit and risk traffic light."""
    try:
        inputs = _build_inputs(req)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = analyze_investment(inputs)
    risk = assess_risk(result)

    return AnalysisResponse(
        total_investment=result.total_investment,
        own_capital=result.own_capital,
        loan_amount=result.loan_amount,
        monthly_payment=result.monthly_payment,
        bar=result.bar,
        nar=result.nar,
        cash_on_cash=result.cash_on_cash,
        dscr=_finite(result.dscr),
        irr=result.irr,
        break_even_occupancy=result.break_even_occupancy,
        yearly_cashflows=[YearlyCashflowResponse(**asdict(y)) for y in result.yearly_cashflows],
        exit_analysis=ExitAnalysisResponse(**asdict(result.exit_analysis)),
        risk=RiskResponse(level=risk.level, score=risk.score, reasons=risk.reasons),
    )


@router.post("/analyze/sensitivity", response_model=list[SensitivityScenarioResponse])
async def analyze_sensitivity(req: AnalyzeRequest):
    """The analysis under preset rate, occupancy and rent shocks."""
    try:
        inputs = _build_inputs(req)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    responses = []
    for s in sensitivity(inputs):
        rows = s.analysis.yearly_cashflows
        responses.append(SensitivityScenarioResponse(
            label=s.label,
            interest_rate=s.interest_rate,
            st_occupancy=s.st_occupancy,
            rent_change_pct=s.rent_change_pct,
            monthly_payment=s.analysis.monthly_payment,
            irr=s.analysis.irr,
            dscr=_finite(s.analysis.dscr),
            year_one_cashflow=rows[0].net_cashflow if rows else Decimal("0"),
            irr_change=s.irr_change,
            dscr_change=_finite(s.dscr_change),
            year_one_cashflow_change=s.year_one_cashflow_change,
        ))
    return responses


@router.post("/analyze/multi-unit", response_model=MultiUnitResponse)
async def analyze_building(req: MultiUnitRequest):
    """Building with several units sharing costs and one mortgage."""
    inputs = MultiUnitInputs(
        property_name=req.property_name,
        purchase_price=req.purchase_price,
        own_capital=req.own_capital,
        loan_amount=req.loan_amount,
        interest_rate=req.interest_rate,
        loan_term_years=req.loan_term_years,
        imt=req.imt,
        imt_automatic=req.imt_automatic,
        property_use=PropertyUse(req.property_use),
        notary_fees=req.notary_fees,
        renovation_costs=req.renovation_costs,
        payment=(
            ManualPayment(req.manual_monthly_payment)
            if req.manual_monthly_payment is not None
            else CalculatedPayment()
        ),
        market_value=req.market_value,
        units=[
            UnitInput(
                id=u.id,
                name=u.name,
                area_m2=u.area_m2,
                monthly_rent=u.monthly_rent,
                verdelingsfactor_pct=u.verdelingsfactor_pct,
                energy_label=u.energy_label,
                tenant_retention_months=u.tenant_retention_months,
                renovation_score=u.renovation_score,
                occupancy_pct=u.occupancy_pct,
                tenant_type=TenantType(u.tenant_type),
            )
            for u in req.units
        ],
        shared_costs=SharedCosts(**req.shared_costs.model_dump()),
        irs_year=req.irs_year,
        contract_years=req.contract_years,
    )
    result = analyze_multi_unit(inputs)

    units = []
    for u in result.units:
        fields = asdict(u)
        fields["dscr"] = _finite(u.dscr)
        fields["tenant_type"] = u.tenant_type.value
        units.append(UnitAnalysisResponse(**fields))

    return MultiUnitResponse(
        total_gross_rent=result.total_gross_rent,
        total_noi=result.total_noi,
        total_cashflow=result.total_cashflow,
        total_cashflow_after_tax=result.total_cashflow_after_tax,
        avg_cash_on_cash=result.avg_cash_on_cash,
        avg_dscr=_finite(result.avg_dscr),
        avg_opex_ratio=result.avg_opex_ratio,
        avg_occupancy=result.avg_occupancy,
        avg_tenant_retention=result.avg_tenant_retention,
        total_investment=result.total_investment,
        own_capital=result.own_capital,
        monthly_payment=result.monthly_payment,
        irs_rate=result.irs_rate,
        cap_rate=result.cap_rate,
        annual_cashflow=result.annual_cashflow,
        irr_10_years=result.irr_10_years,
        break_even_occupancy=result.break_even_occupancy,
        renovation_estimate_3_years=result.renovation_estimate_3_years,
        tenant_diversity=[
            TenantTypeShareResponse(
                tenant_type=s.tenant_type.value, count=s.count, percentage=s.percentage
            )
            for s in result.tenant_diversity
        ],
        units=units,
        warnings=result.warnings,
    )


@router.post("/mortgage", response_model=MortgageResponse)
async def mortgage(req: MortgageRequest):
    """Monthly payment and a per-year amortization summary."""
    schedule = amortization_schedule(req.principal, req.interest_rate, req.loan_term_years)
    return MortgageResponse(
        monthly_payment=schedule.monthly_payment,
        total_interest=schedule.total_interest,
        years=[MortgageYearResponse(**asdict(y)) for y in yearly_debt_summary(schedule)],
    )
