"""Multi-unit building analysis: shared costs and one mortgage split over units.

Pure computation. No I/O. MultiUnitInputs in, MultiUnitAnalysis out.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from rendement.models.multi_unit import (
    MultiUnitAnalysis,
    MultiUnitInputs,
    TenantType,
    TenantTypeShare,
    UnitAnalysis,
    UnitInput,
)
from rendement.models.tax import IRSInput
from rendement.engine.debt import monthly_payment
from rendement.engine.irr import compute_irr
from rendement.engine.tax import calculate_imt, calculate_irs

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
INFINITY = Decimal("Infinity")

IRR_HORIZON_YEARS = 10
IRR_VALUE_GROWTH = Decimal("0.03")  # Flat yearly value growth for the 10-year IRR
# Share of the loan assumed repaid after 10 years
IRR_PRINCIPAL_REPAID = Decimal("0.30")
RENOVATION_COST_PER_SCORE_POINT = Decimal("500")  # Per unit, over 3 years


def _q(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def _analyze_unit(
    unit: UnitInput,
    shared_monthly: Decimal,
    mortgage_monthly: Decimal,
    own_capital: Decimal,
    irs_rate: Decimal,
) -> UnitAnalysis:
    share = unit.verdelingsfactor_pct / 100
    gross = unit.monthly_rent * 12 * unit.occupancy_pct / 100
    allocated = shared_monthly * 12 * share
    unit_noi = gross - allocated
    mortgage_share = mortgage_monthly * 12 * share
    cashflow = unit_noi - mortgage_share
    after_tax = cashflow * (1 - irs_rate / 100)
    unit_capital = own_capital * share

    return UnitAnalysis(
        id=unit.id,
        name=unit.name,
        area_m2=unit.area_m2,
        gross_rent=_q(gross),
        allocated_costs=_q(allocated),
        noi=_q(unit_noi),
        mortgage_share=_q(mortgage_share),
        cashflow=_q(cashflow),
        cashflow_after_tax=_q(after_tax),
        yield_per_m2=_q(gross / unit.area_m2) if unit.area_m2 > 0 else Decimal("0"),
        opex_ratio=_q(allocated / gross * 100) if gross > 0 else Decimal("0"),
        occupancy_pct=unit.occupancy_pct,
        tenant_retention_months=unit.tenant_retention_months,
        cash_on_cash=_q(cashflow / unit_capital * 100) if unit_capital > 0 else Decimal("0"),
        dscr=_q(unit_noi / mortgage_share) if mortgage_share > 0 else INFINITY,
        energy_label=unit.energy_label,
        renovation_score=unit.renovation_score,
        tenant_type=unit.tenant_type,
    )


def portfolio_irs_rate(inputs: MultiUnitInputs) -> Decimal:
    """One IRS rate for the building, from the average unit rent."""
    if not inputs.units:
        return Decimal("0")
    avg_rent = sum((u.monthly_rent for u in inputs.units), Decimal("0")) / len(inputs.units)
    result = calculate_irs(IRSInput(
        income_year=inputs.irs_year,
        monthly_rent=avg_rent,
        contract_years=inputs.contract_years,
    ))
    return result.rate


def tenant_diversity(units: list[UnitInput]) -> list[TenantTypeShare]:
    counts: dict[TenantType, int] = {}
    for unit in units:
        counts[unit.tenant_type] = counts.get(unit.tenant_type, 0) + 1
    n = len(units) or 1
    return [
        TenantTypeShare(
            tenant_type=tenant_type,
            count=count,
            percentage=_q(Decimal(count) / n * 100),
        )
        for tenant_type, count in counts.items()
    ]


def analyze_multi_unit(inputs: MultiUnitInputs) -> MultiUnitAnalysis:
    warnings: list[str] = []
    if inputs.allocation_warning:
        logger.warning("%s: %s", inputs.property_name, inputs.allocation_warning)
        warnings.append(inputs.allocation_warning)

    imt = (
        calculate_imt(inputs.purchase_price, inputs.property_use).amount
        if inputs.imt_automatic
        else inputs.imt
    )
    total_investment = inputs.purchase_price + imt + inputs.notary_fees + inputs.renovation_costs

    shared_monthly = inputs.shared_costs.monthly_total
    mortgage_monthly = inputs.manual_payment
    if mortgage_monthly is None:
        mortgage_monthly = monthly_payment(
            inputs.loan_amount, inputs.interest_rate, inputs.loan_term_years
        )

    irs_rate = portfolio_irs_rate(inputs)
    logger.debug(
        "%s: %d units, shared costs %s/month, mortgage %s/month, IRS %s%%",
        inputs.property_name, len(inputs.units), shared_monthly, mortgage_monthly, irs_rate,
    )

    units = [
        _analyze_unit(u, shared_monthly, mortgage_monthly, inputs.own_capital, irs_rate)
        for u in inputs.units
    ]

    total_gross = sum((u.gross_rent for u in units), Decimal("0"))
    total_noi = sum((u.noi for u in units), Decimal("0"))
    total_cashflow = sum((u.cashflow for u in units), Decimal("0"))
    total_after_tax = sum((u.cashflow_after_tax for u in units), Decimal("0"))

    n = len(units) or 1

    def _avg(values) -> Decimal:
        total = sum(values, Decimal("0"))
        return total / n if total.is_infinite() else _q(total / n)

    # Property level
    effective_value = inputs.market_value if inputs.market_value > 0 else total_investment
    cap_rate = _q(total_noi / effective_value * 100) if effective_value > 0 else Decimal("0")

    # TODO: use debt.remaining_balance for the year-10 loan instead of the
    # flat 30%-repaid assumption, as the single-property exit does.
    exit_value = effective_value * (1 + IRR_VALUE_GROWTH) ** IRR_HORIZON_YEARS
    remaining_debt = inputs.loan_amount * (1 - IRR_PRINCIPAL_REPAID)
    irr_cashflows = [-inputs.own_capital] + [total_cashflow] * IRR_HORIZON_YEARS
    irr_cashflows[-1] += exit_value - remaining_debt

    avg_score = Decimal(sum(u.renovation_score for u in inputs.units)) / n
    renovation_estimate = _q(avg_score * RENOVATION_COST_PER_SCORE_POINT * len(inputs.units))

    fixed_costs = (shared_monthly + mortgage_monthly) * 12
    potential_rent = sum((u.monthly_rent * 12 for u in inputs.units), Decimal("0"))
    break_even = _q(fixed_costs / potential_rent * 100) if potential_rent > 0 else Decimal("100")

    return MultiUnitAnalysis(
        total_gross_rent=total_gross,
        total_noi=total_noi,
        total_cashflow=total_cashflow,
        total_cashflow_after_tax=total_after_tax,
        avg_cash_on_cash=_avg(u.cash_on_cash for u in units),
        avg_dscr=_avg(u.dscr for u in units),
        avg_opex_ratio=_avg(u.opex_ratio for u in units),
        avg_occupancy=_avg(u.occupancy_pct for u in units),
        avg_tenant_retention=_avg(u.tenant_retention_months for u in units),
        total_investment=_q(total_investment),
        own_capital=inputs.own_capital,
        monthly_payment=_q(mortgage_monthly),
        irs_rate=irs_rate,
        cap_rate=cap_rate,
        annual_cashflow=total_cashflow,
        irr_10_years=compute_irr(irr_cashflows),
        break_even_occupancy=break_even,
        renovation_estimate_3_years=renovation_estimate,
        tenant_diversity=tenant_diversity(inputs.units),
        units=units,
        warnings=warnings,
    )


# metric: (good threshold, warning threshold, higher is better)
METRIC_THRESHOLDS: dict[str, tuple[Decimal, Decimal, bool]] = {
    "cash_on_cash": (Decimal("12"), Decimal("8"), True),
    "cap_rate": (Decimal("6"), Decimal("5"), True),
    "dscr": (Decimal("1.5"), Decimal("1.2"), True),
    "yield_per_m2": (Decimal("150"), Decimal("100"), True),
    "opex_ratio": (Decimal("30"), Decimal("50"), False),
    "occupancy": (Decimal("90"), Decimal("70"), True),
    "tenant_retention": (Decimal("24"), Decimal("6"), True),
    "break_even_occupancy": (Decimal("50"), Decimal("70"), False),
    "renovation_score": (Decimal("3"), Decimal("7"), False),
}


def metric_status(metric: str, value: Decimal) -> str:
    """Classify a KPI as "good", "warning" or "danger". Unknown metrics are "warning"."""
    if metric not in METRIC_THRESHOLDS:
        return "warning"
    good, warn, higher_is_better = METRIC_THRESHOLDS[metric]
    if higher_is_better:
        if value >= good:
            return "good"
        return "warning" if value >= warn else "danger"
    if value <= good:
        return "good"
    return "warning" if value <= warn else "danger"
