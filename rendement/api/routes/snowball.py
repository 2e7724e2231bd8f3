"""Debt snowball routes."""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from rendement.api.schemas import (
    SnowballImpactRequest,
    SnowballImpactResponse,
    SnowballPropertyRequest,
    SnowballRequest,
    SnowballResultResponse,
)
from rendement.models.snowball import SnowballProperty
from rendement.engine.snowball import simulate_snowball, snowball_impact

router = APIRouter(prefix="/api/v1/snowball", tags=["snowball"])


def _to_property(req: SnowballPropertyRequest) -> SnowballProperty:
    return SnowballProperty(
        id=req.id,
        name=req.name or req.id,
        debt=req.debt,
        monthly_payment=req.monthly_payment,
        net_cashflow=req.net_cashflow,
        interest_rate=req.interest_rate,
    )


@router.post("", response_model=list[SnowballResultResponse])
async def snowball(req: SnowballRequest):
    """Months until each property's loan is paid off."""
    try:
        results = simulate_snowball(
            [_to_property(p) for p in req.properties], req.extra_monthly_cash, req.strategy
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [SnowballResultResponse(**asdict(r)) for r in results]


@router.post("/impact", response_model=SnowballImpactResponse)
async def impact(req: SnowballImpactRequest):
    """Effect of adding a candidate property on the debt-free date."""
    try:
        result = snowball_impact(
            [_to_property(p) for p in req.existing],
            _to_property(req.candidate),
            req.extra_monthly_cash,
            req.strategy,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SnowballImpactResponse(**asdict(result))
