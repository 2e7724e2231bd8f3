"""Goal-planning helpers: pension gap, inflation, years to financial freedom."""

import math
from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")

MAX_FREEDOM_MONTHS = 600


def pension_gap(
    desired_monthly_income: Decimal,
    state_pension_monthly: Decimal,
    pension_monthly: Decimal,
    other_income_monthly: Decimal,
    rental_income_monthly: Decimal,
) -> Decimal:
    """Monthly shortfall against the desired retirement income, never negative."""
    expected = (
        state_pension_monthly + pension_monthly + other_income_monthly + rental_income_monthly
    )
    return max(Decimal("0"), desired_monthly_income - expected)


def adjust_for_inflation(
    amount: Decimal, years: int, inflation_rate: Decimal = Decimal("2.5")
) -> Decimal:
    """Nominal amount needed after `years` to match `amount` today (rate in %)."""
    return (amount * (1 + inflation_rate / 100) ** years).quantize(TWO_PLACES, ROUND_HALF_UP)


def years_to_freedom(
    monthly_gap: Decimal,
    current_net_cashflow: Decimal,
    monthly_growth_pct: Decimal = Decimal("0.5"),
) -> int | None:
    """Whole years until cashflow growing at `monthly_growth_pct` covers the gap.

    None when there is no positive cashflow to grow.
    """
    if monthly_gap <= 0:
        return 0
    if current_net_cashflow <= 0:
        return None

    cashflow = current_net_cashflow
    months = 0
    while cashflow < monthly_gap and months < MAX_FREEDOM_MONTHS:
        cashflow *= 1 + monthly_growth_pct / 100
        months += 1
    return math.ceil(months / 12)


def liquidity_ratio(cash: Decimal, investments: Decimal, monthly_expenses: Decimal) -> Decimal:
    """Months of expenses covered by liquid assets."""
    if monthly_expenses <= 0:
        return Decimal("0")
    return ((cash + investments) / monthly_expenses).quantize(TWO_PLACES, ROUND_HALF_UP)


def debt_to_asset_ratio(total_debt: Decimal, total_assets: Decimal) -> Decimal:
    """Debt as % of assets."""
    if total_assets <= 0:
        return Decimal("0")
    return (total_debt / total_assets * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
