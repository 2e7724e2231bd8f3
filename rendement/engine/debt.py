"""Mortgage payment, remaining balance and amortization schedule.

Pure functions: Decimal in, dataclass out. No I/O.
Interest rates are annual percentages (3.5 means 3.5%).
"""

from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class AmortizationPayment:
    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: list[AmortizationPayment]
    monthly_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal

    @property
    def ending_balance(self) -> Decimal:
        if not self.payments:
            return Decimal("0")
        return self.payments[-1].balance


@dataclass(frozen=True)
class YearlyDebt:
    year: int
    principal: Decimal
    interest: Decimal
    debt_service: Decimal
    ending_balance: Decimal


def monthly_payment(principal: Decimal, annual_rate: Decimal, term_years: int) -> Decimal:
    """Fixed monthly mortgage payment.

    No loan or no term means no payment. A non-positive rate amortizes
    straight-line (unrounded, so payment * n gives back the principal).
    """
    if principal <= 0 or term_years <= 0:
        return Decimal("0")
    n = term_years * 12
    if annual_rate <= 0:
        return principal / n

    r = annual_rate / 100 / 12
    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    payment = principal * (r * factor) / (factor - 1)
    return payment.quantize(TWO_PLACES, ROUND_HALF_UP)


def remaining_balance(
    principal: Decimal,
    annual_rate: Decimal,
    term_years: int,
    payments_made: int,
) -> Decimal:
    """Outstanding balance after a number of monthly payments (closed form)."""
    if principal <= 0 or term_years <= 0:
        return Decimal("0")
    if payments_made >= term_years * 12:
        return Decimal("0")
    if payments_made <= 0:
        return principal

    pmt = monthly_payment(principal, annual_rate, term_years)
    if annual_rate <= 0:
        balance = principal - pmt * payments_made
    else:
        r = annual_rate / 100 / 12
        growth = (1 + r) ** payments_made
        balance = principal * growth - pmt * (growth - 1) / r

    return max(Decimal("0"), balance).quantize(TWO_PLACES, ROUND_HALF_UP)


def _schedule_row(period: int, balance: Decimal, monthly_rate: Decimal, pmt: Decimal) -> AmortizationPayment:
    interest = (balance * monthly_rate).quantize(TWO_PLACES, ROUND_HALF_UP)
    # Last instalment only clears what is left
    principal_part = min(pmt - interest, balance)
    return AmortizationPayment(
        period=period,
        payment=interest + principal_part,
        principal=principal_part,
        interest=interest,
        balance=balance - principal_part,
    )


def amortization_schedule(
    principal: Decimal,
    annual_rate: Decimal,
    term_years: int,
    hold_years: int | None = None,
    payment: Decimal | None = None,
) -> AmortizationSchedule:
    """Month-by-month split of each payment into interest and principal.

    Stops after `hold_years` when given, or as soon as the loan is
    cleared, which happens before the term when a manual `payment`
    exceeds the annuity payment.
    """
    pmt = payment if payment is not None else monthly_payment(principal, annual_rate, term_years)
    monthly_rate = max(Decimal("0"), annual_rate) / 100 / 12
    last_period = (hold_years or term_years) * 12

    rows: list[AmortizationPayment] = []
    balance = max(Decimal("0"), principal)
    while balance > 0 and len(rows) < last_period:
        row = _schedule_row(len(rows) + 1, balance, monthly_rate, pmt)
        balance = row.balance
        rows.append(replace(row, balance=balance.quantize(TWO_PLACES, ROUND_HALF_UP)))

    return AmortizationSchedule(
        payments=rows,
        monthly_payment=pmt,
        total_interest=sum((r.interest for r in rows), Decimal("0")),
        total_principal=sum((r.principal for r in rows), Decimal("0")),
    )


def yearly_debt_summary(schedule: AmortizationSchedule) -> list[YearlyDebt]:
    """Roll the monthly schedule up into calendar-less loan years."""
    yearly: list[YearlyDebt] = []
    months: list[AmortizationPayment] = []

    for p in schedule.payments:
        months.append(p)
        if p.period % 12 and p.period != len(schedule.payments):
            continue
        yearly.append(YearlyDebt(
            year=(p.period - 1) // 12 + 1,
            principal=sum((m.principal for m in months), Decimal("0")),
            interest=sum((m.interest for m in months), Decimal("0")),
            debt_service=sum((m.payment for m in months), Decimal("0")),
            ending_balance=p.balance,
        ))
        months = []

    return yearly
