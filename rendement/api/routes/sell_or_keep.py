"""Sell-or-keep route: compare selling an owned property with keeping it."""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from rendement.api.schemas import (
    RecommendationResponse,
    ScenarioDetailResponse,
    ScenarioResponse,
    SellOrKeepRequest,
    SellOrKeepResponse,
    StressTestResponse,
)
from rendement.models.sell_or_keep import (
    Goal,
    MortgageType,
    PropertyManager,
    RiskProfile,
    ScenarioResult,
    SellOrKeepInputs,
    TaxRegime,
)
from rendement.engine.sell_or_keep import analyze_sell_or_keep

router = APIRouter(prefix="/api/v1/sell-or-keep", tags=["sell-or-keep"])


def _scenario_response(s: ScenarioResult) -> ScenarioResponse:
    return ScenarioResponse(
        code=s.code,
        name=s.name,
        monthly_income=s.monthly_income,
        net_worth_10_years=s.net_worth_10_years,
        net_worth_30_years=s.net_worth_30_years,
        cashflow_stability=s.cashflow_stability.value,
        fiscal_predictability=s.fiscal_predictability.value,
        operational_complexity=s.operational_complexity.value,
        legacy_years=s.legacy_years,
        details=[ScenarioDetailResponse(**asdict(d)) for d in s.details],
    )


@router.post("", response_model=SellOrKeepResponse)
async def sell_or_keep(req: SellOrKeepRequest):
    """Sell and invest, sell and buy again, or keep renting."""
    fields = req.model_dump()
    inputs = SellOrKeepInputs(
        **{
            **fields,
            "mortgage_type": MortgageType(req.mortgage_type),
            "property_manager": PropertyManager(req.property_manager),
            "rental_tax_regime": TaxRegime(req.rental_tax_regime),
            "capital_gains_regime": TaxRegime(req.capital_gains_regime),
            "primary_goal": Goal(req.primary_goal),
            "risk_profile": RiskProfile(req.risk_profile),
        }
    )
    try:
        result = analyze_sell_or_keep(inputs)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return SellOrKeepResponse(
        scenario_a=_scenario_response(result.scenario_a),
        scenario_b=_scenario_response(result.scenario_b),
        scenario_c=_scenario_response(result.scenario_c),
        keep_irr=result.keep_irr,
        stress_tests=[StressTestResponse(**asdict(t)) for t in result.stress_tests],
        recommendation=RecommendationResponse(**asdict(result.recommendation)),
    )
