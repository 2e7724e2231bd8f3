"""Single-property investment analysis: yearly projection, KPIs, exit.

Pure computation. No I/O. AnalysisInputs in, InvestmentAnalysis out.
"""

import logging
from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP

from rendement.models.analysis import AnalysisInputs, ManualPayment
from rendement.models.results import (
    ExitAnalysis,
    InvestmentAnalysis,
    RiskAssessment,
    SensitivityScenario,
    YearlyCashflow,
)
from rendement.engine.debt import amortization_schedule, monthly_payment, remaining_balance
from rendement.engine.cashflow import (
    base_gross_rent,
    break_even_occupancy,
    cash_on_cash,
    dscr,
    gross_rent,
    gross_yield,
    net_yield,
    operating_expenses,
    property_value,
)
from rendement.engine.irr import compute_irr

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def resolve_monthly_payment(inputs: AnalysisInputs) -> Decimal:
    """Manual payment always wins over the annuity formula."""
    if isinstance(inputs.payment, ManualPayment):
        return inputs.payment.monthly
    return monthly_payment(inputs.loan_amount, inputs.interest_rate, inputs.loan_term_years)


def remaining_debt_at(inputs: AnalysisInputs, payment: Decimal, years: int) -> Decimal:
    """Outstanding loan after `years` of payments.

    A manual payment need not match the annuity, so its balance comes
    from running the schedule with that payment.
    """
    loan = inputs.loan_amount
    if isinstance(inputs.payment, ManualPayment):
        if loan <= 0 or years <= 0:
            return max(Decimal("0"), loan)
        schedule = amortization_schedule(
            loan, inputs.interest_rate, inputs.loan_term_years,
            hold_years=years, payment=payment,
        )
        return schedule.ending_balance
    return remaining_balance(loan, inputs.interest_rate, inputs.loan_term_years, years * 12)


def analyze_investment(inputs: AnalysisInputs) -> InvestmentAnalysis:
    """Run the full analysis for one property over `inputs.years`."""
    total_investment = inputs.total_investment
    loan_amount = inputs.loan_amount
    own_capital = inputs.own_capital

    payment = resolve_monthly_payment(inputs)
    annual_debt_service = (payment * 12).quantize(TWO_PLACES, ROUND_HALF_UP)
    logger.debug(
        "Analyzing %s purchase: loan %s, payment %s/month over %d years",
        inputs.purchase_price, loan_amount, payment, inputs.years,
    )

    yearly: list[YearlyCashflow] = []
    irr_cashflows: list[Decimal] = [-own_capital]
    cumulative = Decimal("0")

    for year in range(1, inputs.years + 1):
        gr = gross_rent(inputs, year)
        opex = operating_expenses(inputs, year)["total"]
        year_noi = gr - opex
        net = year_noi - annual_debt_service
        cumulative += net

        yearly.append(YearlyCashflow(
            year=year,
            gross_rent=gr,
            opex=opex,
            noi=year_noi,
            debt_service=annual_debt_service,
            net_cashflow=net,
            cumulative_cashflow=cumulative,
        ))
        irr_cashflows.append(net)

    # Exit
    market_value = property_value(inputs.purchase_price, inputs.value_growth, inputs.years)
    remaining_debt = remaining_debt_at(inputs, payment, inputs.years)
    net_exit = market_value - remaining_debt
    total_return = net_exit + cumulative
    if len(irr_cashflows) > 1:
        irr_cashflows[-1] += net_exit

    # KPIs on year 1
    y1_rent = gross_rent(inputs, 1)
    y1_opex = operating_expenses(inputs, 1)["total"]
    y1_noi = y1_rent - y1_opex
    y1_net = y1_noi - annual_debt_service

    return InvestmentAnalysis(
        total_investment=total_investment.quantize(TWO_PLACES, ROUND_HALF_UP),
        own_capital=own_capital.quantize(TWO_PLACES, ROUND_HALF_UP),
        loan_amount=loan_amount.quantize(TWO_PLACES, ROUND_HALF_UP),
        monthly_payment=payment.quantize(TWO_PLACES, ROUND_HALF_UP),
        bar=gross_yield(y1_rent, inputs.purchase_price),
        nar=net_yield(y1_noi, inputs.purchase_price),
        cash_on_cash=cash_on_cash(y1_net, own_capital),
        dscr=dscr(y1_noi, annual_debt_service),
        irr=compute_irr(irr_cashflows),
        break_even_occupancy=break_even_occupancy(
            y1_opex, annual_debt_service, base_gross_rent(inputs)
        ),
        yearly_cashflows=yearly,
        exit_analysis=ExitAnalysis(
            market_value=market_value,
            remaining_debt=remaining_debt,
            net_exit=net_exit,
            total_return=total_return,
        ),
    )


# (label, rate shock in points, short-term occupancy %, rent change %)
SENSITIVITY_PRESETS = [
    ("Basis scenario", Decimal("0"), None, Decimal("0")),
    ("Rentestijging (+2%)", Decimal("2"), None, Decimal("0")),
    ("Hoge leegstand", Decimal("0"), Decimal("50"), Decimal("0")),
    ("Huurverlaging (-15%)", Decimal("0"), None, Decimal("-15")),
    ("Worstcase", Decimal("2"), Decimal("50"), Decimal("-10")),
]


def _year_one_cashflow(analysis: InvestmentAnalysis) -> Decimal:
    rows = analysis.yearly_cashflows
    return rows[0].net_cashflow if rows else Decimal("0")


def _dscr_change(new: Decimal, base: Decimal) -> Decimal:
    if new.is_infinite() and base.is_infinite():
        return Decimal("0")
    return new - base


def sensitivity(inputs: AnalysisInputs) -> list[SensitivityScenario]:
    """Rerun the analysis under the preset rate, occupancy and rent shocks.

    Occupancy applies to short-term nights only. The rent change moves both
    the long-term rent and the short-term ADR. A manual payment is kept as
    entered, so a rate shock does not reach it.
    """
    base = analyze_investment(inputs)
    scenarios = []
    for label, rate_shock, occupancy, rent_change in SENSITIVITY_PRESETS:
        factor = 1 + rent_change / 100
        shocked = replace(
            inputs,
            interest_rate=inputs.interest_rate + rate_shock,
            st_occupancy=inputs.st_occupancy if occupancy is None else occupancy,
            monthly_rent=inputs.monthly_rent * factor,
            st_adr=inputs.st_adr * factor,
        )
        result = analyze_investment(shocked)
        scenarios.append(SensitivityScenario(
            label=label,
            interest_rate=shocked.interest_rate,
            st_occupancy=shocked.st_occupancy,
            rent_change_pct=rent_change,
            analysis=result,
            irr_change=result.irr - base.irr,
            dscr_change=_dscr_change(result.dscr, base.dscr),
            year_one_cashflow_change=_year_one_cashflow(result) - _year_one_cashflow(base),
        ))
    return scenarios


def assess_risk(analysis: InvestmentAnalysis) -> RiskAssessment:
    """Score DSCR, IRR, cash-on-cash and break-even into a traffic light."""
    reasons: list[str] = []
    score = 0

    if analysis.dscr >= Decimal("1.2"):
        reasons.append("DSCR ≥ 1,2: hypotheeklasten ruim gedekt")
    elif analysis.dscr >= 1:
        reasons.append("DSCR 1,0-1,2: krappe dekking")
        score += 1
    else:
        reasons.append("DSCR < 1,0: huur dekt de hypotheek niet")
        score += 2

    if analysis.irr >= 12:
        reasons.append("IRR ≥ 12%: uitstekend rendement")
    elif analysis.irr >= 8:
        reasons.append("IRR 8-12%: redelijk rendement")
        score += 1
    else:
        reasons.append("IRR < 8%: laag rendement")
        score += 2

    if analysis.cash_on_cash >= 8:
        reasons.append("Cash-on-cash ≥ 8%: goed rendement op eigen geld")
    elif analysis.cash_on_cash >= 4:
        reasons.append("Cash-on-cash 4-8%: matig rendement")
        score += 1
    else:
        reasons.append("Cash-on-cash < 4%: laag rendement")
        score += 2

    if analysis.break_even_occupancy <= 60:
        reasons.append("Break-even ≤ 60%: veel marge bij leegstand")
    elif analysis.break_even_occupancy <= 80:
        reasons.append("Break-even 60-80%: acceptabele marge")
        score += 1
    else:
        reasons.append("Break-even > 80%: weinig marge bij leegstand")
        score += 2

    if score <= 1:
        level = "good"
    elif score <= 3:
        level = "moderate"
    else:
        level = "risky"
    return RiskAssessment(level=level, score=score, reasons=reasons)
