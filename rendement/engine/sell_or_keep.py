"""Sell or keep: three futures for a property already owned.

A: sell and put the net proceeds in an ETF.
B: sell and use the proceeds as a 30% deposit on a new rental.
C: keep renting the property out.

Each scenario is projected 10 and 30 years out. Stress tests shock the
keep scenario, and a recommendation is picked from the owner's goal and
risk profile.

Pure functions. No I/O.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from rendement.models.sell_or_keep import (
    Goal,
    MortgageType,
    PropertyManager,
    Rating,
    Recommendation,
    RiskProfile,
    ScenarioDetail,
    ScenarioResult,
    SellOrKeepAnalysis,
    SellOrKeepInputs,
    StressTestResult,
    TaxRegime,
)
from rendement.engine.debt import monthly_payment, remaining_balance
from rendement.engine.irr import compute_irr
from rendement.engine.tax import calculate_capital_gains_tax

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")

HORIZONS = (10, 30)

MANAGER_FEES = {  # % of rent
    PropertyManager.SELF: Decimal("0"),
    PropertyManager.LONG_TERM: Decimal("10"),
    PropertyManager.SHORT_TERM: Decimal("25"),
}
RENTAL_TAX_RATES = {  # % of net rent
    TaxRegime.AUTONOMOUS: Decimal("28"),
    TaxRegime.PROGRESSIVE: Decimal("25"),
}
# Effective rate assumed when the gain is aggregated with other income
PROGRESSIVE_GAINS_RATE = Decimal("35")

SAFE_WITHDRAWAL_RATE = Decimal("0.04")
LEGACY_YEARLY_NEED = Decimal("24000")  # €2,000/month

# Scenario B: the proceeds are a 30% deposit on a 25-year annuity loan
NEW_PROPERTY_DEPOSIT_SHARE = Decimal("0.30")
NEW_PROPERTY_TERM_YEARS = 25
NEW_PROPERTY_MONTHLY_YIELD = Decimal("0.005")  # ~6% gross per year
NEW_PROPERTY_NET_SHARE = Decimal("0.65")  # Rent left after running costs

STRESS_RATE_SHOCK = Decimal("2")  # Percentage points
STRESS_EXTRA_VACANCY = Decimal("0.05")
STRESS_FLAT_YEARS = 5


def _q(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def _eur(value: Decimal) -> str:
    return f"€{value:,.0f}"


def _grow(value: Decimal, pct: Decimal, years: int) -> Decimal:
    return value * (1 + pct / 100) ** years


def _legacy_years(net_worth: Decimal) -> int:
    return max(0, int(net_worth // LEGACY_YEARLY_NEED))


def capital_gains_on_sale(inputs: SellOrKeepInputs, sale_price: Decimal, reinvest: bool) -> Decimal:
    """Mais-valias on selling at `sale_price`; nil when reinvested in an EU home."""
    if reinvest:
        return ZERO
    result = calculate_capital_gains_tax(
        sale_price, inputs.original_purchase_price, resident=inputs.resident
    )
    if inputs.capital_gains_regime is TaxRegime.PROGRESSIVE:
        return _q(result.taxable_gain * PROGRESSIVE_GAINS_RATE / 100)
    return result.tax


def mortgage_payment(inputs: SellOrKeepInputs, rate: Decimal) -> Decimal:
    """Monthly payment on the existing loan at `rate`."""
    if inputs.remaining_mortgage <= 0 or inputs.remaining_years <= 0:
        return ZERO
    if inputs.mortgage_type is MortgageType.INTEREST_ONLY:
        return _q(inputs.remaining_mortgage * rate / 100 / 12)
    return monthly_payment(inputs.remaining_mortgage, rate, inputs.remaining_years)


def mortgage_left_after(inputs: SellOrKeepInputs, years: int) -> Decimal:
    # Interest-only principal is owed until it is repaid in one go
    if inputs.mortgage_type is MortgageType.INTEREST_ONLY:
        return max(ZERO, inputs.remaining_mortgage)
    return remaining_balance(
        inputs.remaining_mortgage, inputs.mortgage_rate, inputs.remaining_years, years * 12
    )


def net_rental_income(inputs: SellOrKeepInputs) -> Decimal:
    """Monthly rent after running costs, vacancy, IMI and rental income tax."""
    rent = inputs.monthly_rent
    costs = (
        inputs.maintenance_monthly
        + rent * MANAGER_FEES[inputs.property_manager] / 100
        + rent * inputs.renovation_reserve_pct / 100
        + rent * inputs.vacancy_pct / 100
        + inputs.cadastral_value * inputs.imi_rate / 100 / 12
    )
    before_tax = rent - costs
    tax = max(ZERO, before_tax) * RENTAL_TAX_RATES[inputs.rental_tax_regime] / 100
    return _q(before_tax - tax)


def _sale(inputs: SellOrKeepInputs) -> tuple[Decimal, Decimal, Decimal]:
    """Sales costs, capital gains tax and net proceeds of selling today."""
    price = inputs.current_market_value
    costs = _q(price * inputs.sales_costs_pct / 100)
    gains_tax = capital_gains_on_sale(inputs, price, inputs.reinvest_in_eu_residence)
    return costs, gains_tax, price - inputs.remaining_mortgage - costs - gains_tax


def sell_and_invest(inputs: SellOrKeepInputs) -> ScenarioResult:
    costs, gains_tax, proceeds = _sale(inputs)
    worth_30 = _q(_grow(proceeds, inputs.alternative_return, 30))
    return ScenarioResult(
        code="A",
        name="Verkopen + ETF",
        monthly_income=_q(proceeds * SAFE_WITHDRAWAL_RATE / 12),
        net_worth_10_years=_q(_grow(proceeds, inputs.alternative_return, 10)),
        net_worth_30_years=worth_30,
        cashflow_stability=Rating.HIGH,
        fiscal_predictability=Rating.HIGH,
        operational_complexity=Rating.LOW,
        legacy_years=_legacy_years(worth_30),
        details=[
            ScenarioDetail("Verkoopprijs", inputs.current_market_value, "Huidige marktwaarde"),
            ScenarioDetail("Verkoopkosten", costs, "Makelaar, notaris, etc."),
            ScenarioDetail("Vermogenswinstbelasting", gains_tax, "Mais-valias"),
            ScenarioDetail("Aflossing hypotheek", inputs.remaining_mortgage, "Restschuld"),
            ScenarioDetail("Netto opbrengst", proceeds, "Beschikbaar voor investering"),
        ],
    )


def sell_and_buy(inputs: SellOrKeepInputs) -> ScenarioResult:
    _, _, proceeds = _sale(inputs)
    new_value = proceeds / NEW_PROPERTY_DEPOSIT_SHARE if proceeds > 0 else ZERO
    new_loan = new_value - max(ZERO, proceeds)
    payment = monthly_payment(new_loan, inputs.mortgage_rate, NEW_PROPERTY_TERM_YEARS)
    rent = new_value * NEW_PROPERTY_MONTHLY_YIELD

    if new_value > 0:
        worth_10 = _grow(new_value, inputs.annual_growth, 10) - remaining_balance(
            new_loan, inputs.mortgage_rate, NEW_PROPERTY_TERM_YEARS, 10 * 12
        )
        worth_30 = _grow(new_value, inputs.annual_growth, 30) - remaining_balance(
            new_loan, inputs.mortgage_rate, NEW_PROPERTY_TERM_YEARS, 30 * 12
        )
    else:
        # Nothing left to reinvest; the shortfall stays with the owner
        worth_10 = worth_30 = proceeds

    return ScenarioResult(
        code="B",
        name="Verkopen + Nieuw Vastgoed",
        monthly_income=_q(rent * NEW_PROPERTY_NET_SHARE - payment),
        net_worth_10_years=_q(worth_10),
        net_worth_30_years=_q(worth_30),
        cashflow_stability=Rating.MEDIUM,
        fiscal_predictability=Rating.MEDIUM,
        operational_complexity=Rating.HIGH,
        legacy_years=_legacy_years(worth_30),
        details=[
            ScenarioDetail("Netto opbrengst verkoop", proceeds, "Eigen inleg nieuw pand"),
            ScenarioDetail("Waarde nieuw pand", _q(new_value), "Op basis van 30% eigen inleg"),
            ScenarioDetail("Nieuwe hypotheek", _q(new_loan), "70% financiering"),
            ScenarioDetail("Nieuwe hypotheeklast", payment, "Maandelijkse betaling"),
            ScenarioDetail("Verwachte huur", _q(rent), "~6% bruto rendement"),
        ],
    )


def keep_renting(inputs: SellOrKeepInputs) -> ScenarioResult:
    net_rent = net_rental_income(inputs)
    payment = mortgage_payment(inputs, inputs.mortgage_rate)
    value_10 = _grow(inputs.current_market_value, inputs.annual_growth, 10)
    value_30 = _grow(inputs.current_market_value, inputs.annual_growth, 30)
    # Gains stay taxable on a later sale; reinvestment relief is not assumed
    latent_10 = capital_gains_on_sale(inputs, _q(value_10), reinvest=False)
    latent_30 = capital_gains_on_sale(inputs, _q(value_30), reinvest=False)
    worth_30 = _q(value_30 - mortgage_left_after(inputs, 30) - latent_30)
    self_managed = inputs.property_manager is PropertyManager.SELF

    return ScenarioResult(
        code="C",
        name="Behouden als Huurwoning",
        monthly_income=net_rent - payment,
        net_worth_10_years=_q(value_10 - mortgage_left_after(inputs, 10) - latent_10),
        net_worth_30_years=worth_30,
        cashflow_stability=Rating.LOW if self_managed else Rating.MEDIUM,
        fiscal_predictability=Rating.MEDIUM,
        operational_complexity=Rating.HIGH if self_managed else Rating.MEDIUM,
        legacy_years=_legacy_years(worth_30),
        details=[
            ScenarioDetail("Bruto huur", inputs.monthly_rent, "Maandelijkse huurinkomsten"),
            ScenarioDetail("Netto huur na kosten", net_rent, "Na alle aftrekposten"),
            ScenarioDetail("Hypotheeklast", payment, "Maandelijkse betaling"),
            ScenarioDetail("Cashflow", net_rent - payment, "Netto maandelijks inkomen"),
            ScenarioDetail("Latente mais-valias (10j)", latent_10, "Bij verkoop na 10 jaar"),
        ],
    )


def stress_tests(inputs: SellOrKeepInputs) -> list[StressTestResult]:
    """Shocks to the keep scenario: rate +2 points, 5% more vacancy, 5 flat years."""
    rate_hit = (
        mortgage_payment(inputs, inputs.mortgage_rate + STRESS_RATE_SHOCK)
        - mortgage_payment(inputs, inputs.mortgage_rate)
    )
    vacancy_hit = _q(inputs.monthly_rent * STRESS_EXTRA_VACANCY)
    growth_hit = _q(
        _grow(inputs.current_market_value, inputs.annual_growth, STRESS_FLAT_YEARS)
        - inputs.current_market_value
    )
    return [
        StressTestResult(
            scenario="Rente +2%",
            impact=-rate_hit,
            description=f"Je maandelijkse cashflow daalt met {_eur(rate_hit)} bij een rentestijging van 2%.",
        ),
        StressTestResult(
            scenario="Leegstand +5%",
            impact=-vacancy_hit,
            description=f"Extra leegstand kost je {_eur(vacancy_hit)} per maand aan gemiste huur.",
        ),
        StressTestResult(
            scenario="Geen waardegroei (5j)",
            impact=-growth_hit,
            description=f"Bij 5 jaar stagnatie mis je {_eur(growth_hit)} aan waardestijging.",
        ),
    ]


def _best(scenarios: list[ScenarioResult], key) -> ScenarioResult:
    # max() keeps the first of equals, so ties go to A, then B
    return max(scenarios, key=key)


_RISK_WORDS = {RiskProfile.LOW: "lage", RiskProfile.MEDIUM: "gemiddelde", RiskProfile.HIGH: "hoge"}

_TRADEOFFS = {
    "A": [
        "Je verliest de fysieke asset en potentiële waardegroei van vastgoed.",
        "ETF-rendement is niet gegarandeerd en kan fluctueren.",
    ],
    "B": [
        "Nieuw vastgoed brengt transactiekosten en onbekende risico's.",
        "Je neemt een nieuwe hypotheek en mogelijk hogere operationele lasten.",
    ],
    "C": [
        "Onderhoud en leegstand blijven je verantwoordelijkheid.",
        "Je vermogen blijft illiquide tot verkoop.",
    ],
}


def recommend(
    inputs: SellOrKeepInputs, a: ScenarioResult, b: ScenarioResult, c: ScenarioResult
) -> Recommendation:
    """Pick a scenario for the owner's primary goal."""
    horizon = inputs.horizon_years
    goal = inputs.primary_goal

    if goal is Goal.CASHFLOW:
        best = _best([a, b, c], lambda s: s.monthly_income)
        reasoning = (
            f"Voor maximale cashflow biedt {best.name} het hoogste maandelijkse "
            f"inkomen van {_eur(best.monthly_income)}."
        )
    elif goal is Goal.WEALTH:
        best = _best([a, b, c], lambda s: s.net_worth(horizon))
        reasoning = (
            f"Voor maximale vermogensopbouw over {horizon} jaar levert {best.name} "
            "het hoogste eindvermogen op."
        )
    elif goal is Goal.RETIREMENT:
        if inputs.risk_profile is RiskProfile.LOW:
            best = a if a.cashflow_stability is Rating.HIGH else c
        else:
            best = c if c.net_worth(horizon) > a.net_worth(horizon) else a
        reasoning = (
            f"Voor pensioenplanning met jouw {_RISK_WORDS[inputs.risk_profile]} "
            f"risicoprofiel is {best.name} het meest geschikt."
        )
    else:
        best = _best([a, b, c], lambda s: s.legacy_years)
        reasoning = (
            f"Voor legacy-opbouw biedt {best.name} de meeste jaren financiële zekerheid "
            f"voor je kinderen ({best.legacy_years} jaar)."
        )

    tradeoffs = list(_TRADEOFFS[best.code])
    if inputs.property_manager is PropertyManager.SELF:
        tradeoffs.append("Zelf beheren kost tijd en energie; overweeg een property manager.")
    return Recommendation(best_scenario=best.code, reasoning=reasoning, tradeoffs=tradeoffs)


def keep_irr(inputs: SellOrKeepInputs, sale_proceeds: Decimal, keep: ScenarioResult) -> Decimal:
    """Return on keeping, with the forgone sale proceeds as the stake.

    Yearly flows are twelve months of the keep cashflow; the final year
    adds the keep net worth at the horizon.
    """
    years = inputs.horizon_years
    flows = [-sale_proceeds] + [keep.monthly_income * 12] * years
    flows[-1] += keep.net_worth(years)
    return compute_irr(flows)


def analyze_sell_or_keep(inputs: SellOrKeepInputs) -> SellOrKeepAnalysis:
    if inputs.horizon_years not in HORIZONS:
        raise ValueError(f"Horizon must be one of {HORIZONS} years, got {inputs.horizon_years}")

    a = sell_and_invest(inputs)
    b = sell_and_buy(inputs)
    c = keep_renting(inputs)
    _, _, proceeds = _sale(inputs)
    recommendation = recommend(inputs, a, b, c)
    logger.debug(
        "Sell or keep: A %s, B %s, C %s net worth at %d years, best %s",
        a.net_worth(inputs.horizon_years), b.net_worth(inputs.horizon_years),
        c.net_worth(inputs.horizon_years), inputs.horizon_years, recommendation.best_scenario,
    )

    return SellOrKeepAnalysis(
        scenario_a=a,
        scenario_b=b,
        scenario_c=c,
        keep_irr=keep_irr(inputs, proceeds, c),
        stress_tests=stress_tests(inputs),
        recommendation=recommendation,
    )
