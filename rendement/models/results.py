from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class YearlyCashflow:
    year: int
    gross_rent: Decimal
    opex: Decimal
    noi: Decimal
    debt_service: Decimal
    net_cashflow: Decimal  # NOI - debt service
    cumulative_cashflow: Decimal  # Running sum of net cashflow from year 1


@dataclass(frozen=True)
class ExitAnalysis:
    market_value: Decimal
    remaining_debt: Decimal
    net_exit: Decimal  # Market value - remaining debt
    total_return: Decimal  # Net exit + cumulative cashflow


@dataclass(frozen=True)
class RiskAssessment:
    level: str  # "good", "moderate", "risky"
    score: int
    reasons: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class InvestmentAnalysis:
    total_investment: Decimal
    own_capital: Decimal
    loan_amount: Decimal
    monthly_payment: Decimal

    # KPIs, all in % except DSCR (a multiple, Infinity without debt)
    bar: Decimal
    nar: Decimal
    cash_on_cash: Decimal
    dscr: Decimal
    irr: Decimal
    break_even_occupancy: Decimal

    yearly_cashflows: list[YearlyCashflow]
    exit_analysis: ExitAnalysis


@dataclass(frozen=True)
class SensitivityScenario:
    """The analysis rerun under one shock, with its change against the base case."""
    label: str
    interest_rate: Decimal
    st_occupancy: Decimal
    rent_change_pct: Decimal
    analysis: InvestmentAnalysis
    irr_change: Decimal  # Percentage points
    dscr_change: Decimal  # 0 when both are Infinity
    year_one_cashflow_change: Decimal
