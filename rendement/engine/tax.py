"""Portuguese property taxes: IMT at purchase, yearly IMI, IRS on rent, mais-valias.

Pure functions: Decimal in, dataclasses out. No I/O apart from reading
today's date for the IMI payment window when none is passed.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable

from rendement.config import settings
from rendement.models.tax import (
    CapitalGainsResult,
    IMIResult,
    IMTResult,
    IRSInput,
    IRSRegime,
    IRSResult,
    MunicipalityType,
    PropertyUse,
    TaxSummary,
)

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
ZERO = Decimal("0")


def _money(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


# ---- IMT ----

NON_RESIDENTIAL_IMT_RATE = Decimal("6.5")

# (upper bound of band, marginal rate %), progressive up to the last bound
RESIDENTIAL_IMT_BRACKETS: list[tuple[Decimal, Decimal]] = [
    (Decimal("106346"), Decimal("0")),
    (Decimal("145470"), Decimal("2")),
    (Decimal("198347"), Decimal("5")),
    (Decimal("330539"), Decimal("7")),
    (Decimal("633453"), Decimal("8")),
]

# Above the progressive brackets one rate applies to the whole price
# (upper bound or None, rate %)
RESIDENTIAL_IMT_SINGLE_RATES: list[tuple[Decimal | None, Decimal]] = [
    (Decimal("1102920"), Decimal("6")),
    (None, Decimal("7.5")),
]


def _progressive_imt(price: Decimal) -> tuple[Decimal, Decimal, Decimal]:
    """Progressive IMT. Returns (amount, marginal rate, lower bound of the band reached)."""
    amount = ZERO
    lower = ZERO
    marginal = ZERO
    band_floor = ZERO
    for upper, rate in RESIDENTIAL_IMT_BRACKETS:
        if price <= lower:
            break
        amount += (min(price, upper) - lower) * rate / 100
        marginal = rate
        band_floor = lower
        lower = upper
    return amount, marginal, band_floor


def calculate_imt(price: Decimal, property_use: PropertyUse = PropertyUse.NON_RESIDENTIAL) -> IMTResult:
    """IMT (Imposto Municipal sobre as Transmissões) due at purchase."""
    if price <= 0:
        return IMTResult(
            amount=ZERO,
            marginal_rate=ZERO,
            average_rate=ZERO,
            taxa_unica=False,
            explanation="Geen aankoopprijs opgegeven.",
        )

    if property_use == PropertyUse.NON_RESIDENTIAL:
        return IMTResult(
            amount=_money(price * NON_RESIDENTIAL_IMT_RATE / 100),
            marginal_rate=NON_RESIDENTIAL_IMT_RATE,
            average_rate=NON_RESIDENTIAL_IMT_RATE,
            taxa_unica=True,
            explanation="Niet-woningen en beleggingspanden betalen een vast tarief van 6,5%.",
        )

    progressive_ceiling = RESIDENTIAL_IMT_BRACKETS[-1][0]
    if price <= progressive_ceiling:
        amount, marginal, band_floor = _progressive_imt(price)
        taxa_unica = False
        if marginal == 0:
            explanation = f"Woningen tot €{RESIDENTIAL_IMT_BRACKETS[0][0]:,} zijn vrijgesteld."
        else:
            explanation = (
                f"Progressief tarief: {marginal}% over het deel boven €{band_floor:,}."
            )
    else:
        amount = ZERO
        marginal = ZERO
        for upper, rate in RESIDENTIAL_IMT_SINGLE_RATES:
            if upper is None or price <= upper:
                amount = price * rate / 100
                marginal = rate
                break
        taxa_unica = True
        explanation = f"Taxa única: {marginal}% over de volledige aankoopprijs."

    average = (amount / price * 100).quantize(FOUR_PLACES, ROUND_HALF_UP)
    return IMTResult(
        amount=max(ZERO, _money(amount)),
        marginal_rate=marginal,
        average_rate=average,
        taxa_unica=taxa_unica,
        explanation=explanation,
    )


# ---- IMI ----

def _next_imi_payment(today: date) -> str:
    """IMI is collected in May/June; after May 31 the next window is next year."""
    year = today.year + 1 if today > date(today.year, 5, 31) else today.year
    return f"Mei/Juni {year}"


def calculate_imi(
    assessed_value: Decimal,
    municipality_type: MunicipalityType = MunicipalityType.STANDARD,
    custom_rate: Decimal | None = None,
    today: date | None = None,
) -> IMIResult:
    """Yearly IMI (Imposto Municipal sobre Imóveis) on the fiscal value (VPT).

    custom_rate is a % of VPT and replaces the municipality default.
    """
    if assessed_value <= 0:
        return IMIResult(
            annual_amount=ZERO,
            monthly_amount=ZERO,
            rate=ZERO,
            explanation="Geen VPT-waarde opgegeven.",
            next_payment="",
        )

    if custom_rate is not None and custom_rate > 0:
        rate = custom_rate
    else:
        rate = settings.imi_rates[municipality_type.value]

    annual = assessed_value * rate / 100
    return IMIResult(
        annual_amount=_money(annual),
        monthly_amount=_money(annual / 12),
        rate=rate,
        explanation=(
            f"IMI = fiscale waarde (VPT) × {rate}%. "
            "De VPT ligt meestal op 50-70% van de marktwaarde."
        ),
        next_payment=_next_imi_payment(today or date.today()),
    )


# ---- IRS ----

STANDARD_IRS_RATE = Decimal("25")
REDUCED_IRS_RATE = Decimal("10")
ENGLOBAMENTO_ESTIMATE_RATE = Decimal("30")
DHD_DISCOUNT = Decimal("0.20")  # Share taken off the rate

# (contract years below which the rate applies, rate %); 20+ years falls through
OLD_REGIME_DURATION_RATES: list[tuple[int, Decimal]] = [
    (2, Decimal("28")),
    (5, Decimal("25")),
    (10, Decimal("15")),
    (20, Decimal("10")),
]
OLD_REGIME_LONGEST_RATE = Decimal("5")
RENEWAL_DISCOUNT_POINTS = Decimal("2")


def _irs_result(
    gross: Decimal,
    rate: Decimal,
    regime: IRSRegime,
    explanation: str,
    saving: Decimal | None = None,
    warning: str | None = None,
) -> IRSResult:
    tax = gross * rate / 100
    net = gross - tax
    return IRSResult(
        annual_amount=_money(tax),
        monthly_amount=_money(tax / 12),
        gross_annual_rent=_money(gross),
        net_annual_rent=_money(net),
        net_monthly_rent=_money(net / 12),
        rate=rate.quantize(TWO_PLACES, ROUND_HALF_UP),
        regime=regime,
        explanation=explanation,
        saving=saving,
        warning=warning,
    )


def _old_regime(irs: IRSInput, gross: Decimal) -> IRSResult:
    """Autonomous taxation by contract duration, income years up to 2025."""
    years = irs.contract_years if irs.contract_years is not None else settings.default_contract_years

    rate = OLD_REGIME_LONGEST_RATE
    explanation = "Contracten van 20 jaar of langer: laagste tarief van 5%."
    floor = 0
    for ceiling, band_rate in OLD_REGIME_DURATION_RATES:
        if years < ceiling:
            rate = band_rate
            explanation = f"Contracten van {floor}-{ceiling} jaar: {band_rate}%."
            break
        floor = ceiling

    if rate == Decimal("15") and irs.renewals > 0:
        rate = max(OLD_REGIME_LONGEST_RATE, rate - RENEWAL_DISCOUNT_POINTS * irs.renewals)
        explanation += f" Korting van {RENEWAL_DISCOUNT_POINTS * irs.renewals} procentpunt voor verlengingen."

    if irs.dhd_contract:
        rate = rate * (1 - DHD_DISCOUNT)
        explanation += " DHD-contract: 20% korting op het tarief."

    return _irs_result(gross, rate, IRSRegime.OLD, explanation)


def _new_regime(irs: IRSInput, gross: Decimal) -> IRSResult:
    """Rent-level based taxation, income years 2026-2029."""
    if irs.englobamento:
        return _irs_result(
            gross,
            ENGLOBAMENTO_ESTIMATE_RATE,
            IRSRegime.NEW,
            "Bij englobamento telt de huur mee in het progressieve tarief (13-48%).",
            warning="Schatting op 30%; de werkelijke belasting hangt af van je totale inkomen.",
        )

    threshold = settings.irs_rent_threshold
    if irs.monthly_rent <= threshold:
        return _irs_result(
            gross,
            REDUCED_IRS_RATE,
            IRSRegime.NEW,
            f"Huur ≤ €{threshold:,}/maand in 2026-2029: verlaagd tarief van 10%.",
            saving=_money(gross * (STANDARD_IRS_RATE - REDUCED_IRS_RATE) / 100),
        )
    return _irs_result(
        gross,
        STANDARD_IRS_RATE,
        IRSRegime.NEW,
        f"Huur > €{threshold:,}/maand: standaardtarief van 25%.",
    )


def _fallback_regime(irs: IRSInput, gross: Decimal) -> IRSResult:
    logger.warning("No IRS rules known for %d, estimating at %s%%", irs.income_year, STANDARD_IRS_RATE)
    return _irs_result(
        gross,
        STANDARD_IRS_RATE,
        IRSRegime.UNKNOWN,
        "De regeling na 2029 is nog niet bekend; gerekend met 25%.",
        warning="Na 2029 is de regeling onzeker. Reken voorzichtig en raadpleeg een fiscalist.",
    )


@dataclass(frozen=True)
class IRSRule:
    first_year: int | None  # None = open-ended
    last_year: int | None
    apply: Callable[[IRSInput, Decimal], IRSResult]

    def covers(self, year: int) -> bool:
        if self.first_year is not None and year < self.first_year:
            return False
        if self.last_year is not None and year > self.last_year:
            return False
        return True


IRS_RULES: list[IRSRule] = [
    IRSRule(None, 2025, _old_regime),
    IRSRule(2026, 2029, _new_regime),
    IRSRule(2030, None, _fallback_regime),
]


def irs_rule_for(year: int) -> IRSRule:
    for rule in IRS_RULES:
        if rule.covers(year):
            return rule
    return IRS_RULES[-1]


def calculate_irs(irs: IRSInput) -> IRSResult:
    """IRS on rental income for the regime of the income year."""
    gross = irs.monthly_rent * 12
    if gross <= 0:
        return IRSResult(
            annual_amount=ZERO,
            monthly_amount=ZERO,
            gross_annual_rent=ZERO,
            net_annual_rent=ZERO,
            net_monthly_rent=ZERO,
            rate=ZERO,
            regime=IRSRegime.UNKNOWN,
            explanation="Geen huurinkomsten opgegeven.",
        )

    rule = irs_rule_for(irs.income_year)
    result = rule.apply(irs, gross)
    logger.debug("IRS %d: %s regime at %s%%", irs.income_year, result.regime.value, result.rate)
    return result


# ---- Aggregates ----

def calculate_total_taxes(
    price: Decimal,
    assessed_value: Decimal,
    irs: IRSInput,
    property_use: PropertyUse = PropertyUse.NON_RESIDENTIAL,
    municipality_type: MunicipalityType = MunicipalityType.STANDARD,
    today: date | None = None,
) -> TaxSummary:
    """One-time (IMT) versus recurring (IMI + IRS) tax obligations."""
    imt = calculate_imt(price, property_use)
    imi = calculate_imi(assessed_value, municipality_type, today=today)
    irs_result = calculate_irs(irs)
    return TaxSummary(
        imt=imt,
        imi=imi,
        irs=irs_result,
        total_one_time=imt.amount,
        total_annual=imi.annual_amount + irs_result.annual_amount,
        total_monthly=imi.monthly_amount + irs_result.monthly_amount,
    )


def estimate_vpt(price: Decimal, pct: Decimal = Decimal("60")) -> Decimal:
    """Fiscal value (VPT) estimate; typically 50-70% of market value."""
    return (price * pct / 100).quantize(Decimal("1"), ROUND_HALF_UP)


CAPITAL_GAINS_RATE = Decimal("28")
RESIDENT_TAXABLE_SHARE = Decimal("0.5")


def calculate_capital_gains_tax(
    sale_price: Decimal, purchase_price: Decimal, resident: bool = False
) -> CapitalGainsResult:
    """Mais-valias: residents are taxed on half the gain, non-residents on all of it."""
    gain = sale_price - purchase_price
    if gain <= 0:
        return CapitalGainsResult(gain=gain, taxable_gain=ZERO, tax=ZERO, rate=CAPITAL_GAINS_RATE)

    taxable = gain * RESIDENT_TAXABLE_SHARE if resident else gain
    return CapitalGainsResult(
        gain=gain,
        taxable_gain=_money(taxable),
        tax=_money(taxable * CAPITAL_GAINS_RATE / 100),
        rate=CAPITAL_GAINS_RATE,
    )
