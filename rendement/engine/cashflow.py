"""Single-property cash flow: rent, OPEX, NOI and the yield KPIs.

Pure functions: Decimal in, Decimal out. No I/O.
Percent inputs are on a 0-100 scale; KPI outputs are in % too, except DSCR.
"""

from decimal import Decimal, ROUND_HALF_UP

from rendement.models.analysis import AnalysisInputs, RentalType

TWO_PLACES = Decimal("0.01")
INFINITY = Decimal("Infinity")

DAYS_PER_YEAR = 365
# Mixed rental: half the year let long-term, half short-term
MIXED_LT_MONTHS = 6
MIXED_ST_DAYS = 180


def _growth(pct: Decimal, periods: int) -> Decimal:
    return (1 + pct / 100) ** periods


def base_gross_rent(inputs: AnalysisInputs) -> Decimal:
    """Year-1 gross rent at full potential for the rental model."""
    if inputs.rental_type == RentalType.LONG_TERM:
        return inputs.monthly_rent * 12
    if inputs.rental_type == RentalType.SHORT_TERM:
        return DAYS_PER_YEAR * inputs.st_occupancy / 100 * inputs.st_adr
    lt_income = inputs.monthly_rent * MIXED_LT_MONTHS
    st_income = MIXED_ST_DAYS * inputs.st_occupancy / 100 * inputs.st_adr
    return lt_income + st_income


def gross_rent(inputs: AnalysisInputs, year: int) -> Decimal:
    """Gross rent for a given year (1-indexed), grown by rent growth."""
    grown = base_gross_rent(inputs) * _growth(inputs.rent_growth, year - 1)
    return grown.quantize(TWO_PLACES, ROUND_HALF_UP)


def operating_expenses(inputs: AnalysisInputs, year: int) -> dict[str, Decimal]:
    """Itemized OPEX for a given year.

    Year-1 amounts (management on year-1 rent) grown by cost growth.
    """
    factor = _growth(inputs.cost_growth, year - 1)
    base = {
        "management": base_gross_rent(inputs) * inputs.management_pct / 100,
        "maintenance": inputs.maintenance_yearly,
        "imi": inputs.imi_yearly,
        "insurance": inputs.insurance_yearly,
        "condo": inputs.condo_monthly * 12,
        "utilities": inputs.utilities_monthly * 12,
    }
    expenses = {
        name: (amount * factor).quantize(TWO_PLACES, ROUND_HALF_UP)
        for name, amount in base.items()
    }
    expenses["total"] = sum(expenses.values(), Decimal("0"))
    return expenses


def noi(inputs: AnalysisInputs, year: int) -> Decimal:
    """Net Operating Income = gross rent - OPEX."""
    return gross_rent(inputs, year) - operating_expenses(inputs, year)["total"]


def _pct(numerator: Decimal, denominator: Decimal) -> Decimal:
    return (numerator / denominator * 100).quantize(TWO_PLACES, ROUND_HALF_UP)


def gross_yield(annual_gross_rent: Decimal, purchase_price: Decimal) -> Decimal:
    """BAR (bruto aanvangsrendement) = gross rent / purchase price, in %."""
    if purchase_price <= 0:
        return Decimal("0")
    return _pct(annual_gross_rent, purchase_price)


def net_yield(annual_noi: Decimal, purchase_price: Decimal) -> Decimal:
    """NAR (netto aanvangsrendement) = NOI / purchase price, in %."""
    if purchase_price <= 0:
        return Decimal("0")
    return _pct(annual_noi, purchase_price)


def cash_on_cash(cash_flow: Decimal, own_capital: Decimal) -> Decimal:
    """Cash-on-cash return = annual net cash flow / equity invested, in %."""
    if own_capital <= 0:
        return Decimal("0")
    return _pct(cash_flow, own_capital)


def dscr(noi_amount: Decimal, annual_debt_service: Decimal) -> Decimal:
    """Debt Service Coverage Ratio = NOI / annual debt service.

    Infinity when there is no debt service.
    """
    if annual_debt_service <= 0:
        return INFINITY
    return (noi_amount / annual_debt_service).quantize(TWO_PLACES, ROUND_HALF_UP)


def break_even_occupancy(
    annual_opex: Decimal, annual_debt_service: Decimal, potential_rent: Decimal
) -> Decimal:
    """Occupancy (%) at which rent covers OPEX and debt service, capped at 100."""
    if potential_rent <= 0:
        return Decimal("100")
    ratio = (annual_opex + annual_debt_service) / potential_rent * 100
    return min(Decimal("100"), ratio).quantize(TWO_PLACES, ROUND_HALF_UP)


def property_value(purchase_price: Decimal, value_growth: Decimal, year: int) -> Decimal:
    """Estimated value at the end of a year, compounding value growth (%)."""
    return (purchase_price * _growth(value_growth, year)).quantize(TWO_PLACES, ROUND_HALF_UP)
