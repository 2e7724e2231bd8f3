"""Portuguese tax routes: IMT, IMI, IRS and a combined summary."""

from fastapi import APIRouter

from rendement.api.schemas import (
    IMIRequest,
    IMIResponse,
    IMTRequest,
    IMTResponse,
    IRSRequest,
    IRSResponse,
    TaxSummaryRequest,
    TaxSummaryResponse,
)
from rendement.models.tax import (
    IMIResult,
    IMTResult,
    IRSInput,
    IRSResult,
    MunicipalityType,
    PropertyUse,
)
from rendement.engine.tax import (
    calculate_imi,
    calculate_imt,
    calculate_irs,
    calculate_total_taxes,
)

router = APIRouter(prefix="/api/v1/tax", tags=["tax"])


def _irs_input(req: IRSRequest) -> IRSInput:
    return IRSInput(
        income_year=req.income_year,
        monthly_rent=req.monthly_rent,
        contract_years=req.contract_years,
        renewals=req.renewals,
        englobamento=req.englobamento,
        dhd_contract=req.dhd_contract,
    )


def _imt_response(result: IMTResult) -> IMTResponse:
    return IMTResponse(
        amount=result.amount,
        marginal_rate=result.marginal_rate,
        average_rate=result.average_rate,
        taxa_unica=result.taxa_unica,
        explanation=result.explanation,
    )


def _imi_response(result: IMIResult) -> IMIResponse:
    return IMIResponse(
        annual_amount=result.annual_amount,
        monthly_amount=result.monthly_amount,
        rate=result.rate,
        explanation=result.explanation,
        next_payment=result.next_payment,
    )


def _irs_response(result: IRSResult) -> IRSResponse:
    return IRSResponse(
        annual_amount=result.annual_amount,
        monthly_amount=result.monthly_amount,
        gross_annual_rent=result.gross_annual_rent,
        net_annual_rent=result.net_annual_rent,
        net_monthly_rent=result.net_monthly_rent,
        rate=result.rate,
        regime=result.regime.value,
        explanation=result.explanation,
        saving=result.saving,
        warning=result.warning,
    )


@router.post("/imt", response_model=IMTResponse)
async def imt(req: IMTRequest):
    return _imt_response(calculate_imt(req.price, PropertyUse(req.property_use)))


@router.post("/imi", response_model=IMIResponse)
async def imi(req: IMIRequest):
    result = calculate_imi(
        req.assessed_value, MunicipalityType(req.municipality_type), req.custom_rate
    )
    return _imi_response(result)


@router.post("/irs", response_model=IRSResponse)
async def irs(req: IRSRequest):
    """IRS on rent for the regime of the income year."""
    return _irs_response(calculate_irs(_irs_input(req)))


@router.post("/summary", response_model=TaxSummaryResponse)
async def summary(req: TaxSummaryRequest):
    """One-time and recurring taxes for a purchase."""
    result = calculate_total_taxes(
        req.price,
        req.assessed_value,
        _irs_input(req.irs),
        PropertyUse(req.property_use),
        MunicipalityType(req.municipality_type),
    )
    return TaxSummaryResponse(
        imt=_imt_response(result.imt),
        imi=_imi_response(result.imi),
        irs=_irs_response(result.irs),
        total_one_time=result.total_one_time,
        total_annual=result.total_annual,
        total_monthly=result.total_monthly,
    )
