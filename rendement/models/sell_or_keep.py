from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class MortgageType(Enum):
    ANNUITY = "annuity"
    INTEREST_ONLY = "interest_only"  # Principal due in full at maturity


class PropertyManager(Enum):
    SELF = "self"
    LONG_TERM = "longterm"
    SHORT_TERM = "shortterm"


class TaxRegime(Enum):
    AUTONOMOUS = "autonomous"  # Flat rate
    PROGRESSIVE = "progressive"  # Aggregated with other income (englobamento)


class Goal(Enum):
    CASHFLOW = "cashflow"
    WEALTH = "wealth"
    RETIREMENT = "retirement"
    LEGACY = "legacy"


class RiskProfile(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Rating(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class SellOrKeepInputs:
    """An owned property weighed against selling it."""

    # Property
    current_market_value: Decimal
    original_purchase_price: Decimal
    cadastral_value: Decimal = Decimal("0")  # VPT

    # Existing mortgage
    remaining_mortgage: Decimal = Decimal("0")
    mortgage_rate: Decimal = Decimal("3.8")  # Annual, %
    mortgage_type: MortgageType = MortgageType.ANNUITY
    remaining_years: int = 25

    # Rent and running costs
    monthly_rent: Decimal = Decimal("0")
    maintenance_monthly: Decimal = Decimal("300")
    renovation_reserve_pct: Decimal = Decimal("6")  # % of rent
    vacancy_pct: Decimal = Decimal("5")  # % of rent
    property_manager: PropertyManager = PropertyManager.SELF

    # Taxes
    imi_rate: Decimal = Decimal("0.4")  # % of VPT
    rental_tax_regime: TaxRegime = TaxRegime.AUTONOMOUS
    sales_costs_pct: Decimal = Decimal("7")  # Agent, notary, certificates
    capital_gains_regime: TaxRegime = TaxRegime.AUTONOMOUS
    reinvest_in_eu_residence: bool = False  # Exempts the gain on a sale
    resident: bool = True

    # Assumptions and goals
    annual_growth: Decimal = Decimal("3.4")  # Rent and value, %
    alternative_return: Decimal = Decimal("7.5")  # ETF return, %
    horizon_years: int = 10  # 10 or 30
    primary_goal: Goal = Goal.WEALTH
    risk_profile: RiskProfile = RiskProfile.MEDIUM


@dataclass(frozen=True)
class ScenarioDetail:
    label: str
    value: Decimal
    description: str


@dataclass(frozen=True)
class ScenarioResult:
    code: str  # "A", "B" or "C"
    name: str
    monthly_income: Decimal
    net_worth_10_years: Decimal
    net_worth_30_years: Decimal
    cashflow_stability: Rating
    fiscal_predictability: Rating
    operational_complexity: Rating
    legacy_years: int  # Years of €2,000/month the 30-year net worth would fund
    details: list[ScenarioDetail] = field(default_factory=list)

    def net_worth(self, horizon_years: int) -> Decimal:
        return self.net_worth_30_years if horizon_years == 30 else self.net_worth_10_years


@dataclass(frozen=True)
class StressTestResult:
    scenario: str
    impact: Decimal  # Negative = loss
    description: str


@dataclass(frozen=True)
class Recommendation:
    best_scenario: str
    reasoning: str
    tradeoffs: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SellOrKeepAnalysis:
    scenario_a: ScenarioResult  # Sell and invest in an ETF
    scenario_b: ScenarioResult  # Sell and buy a new property
    scenario_c: ScenarioResult  # Keep renting out
    keep_irr: Decimal  # % return on the equity a sale would free, over the horizon
    stress_tests: list[StressTestResult]
    recommendation: Recommendation
