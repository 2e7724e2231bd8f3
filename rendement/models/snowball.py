from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SnowballProperty:
    id: str
    name: str
    debt: Decimal  # Outstanding balance
    monthly_payment: Decimal  # Required payment
    net_cashflow: Decimal  # Monthly surplus after the required payment
    interest_rate: Decimal  # Annual, %


@dataclass(frozen=True)
class SnowballResult:
    id: str
    name: str
    months_to_payoff: int
    paid_off: bool  # False when the simulation hit its month cap


@dataclass(frozen=True)
class SnowballImpact:
    months_without: int
    months_with: int
    months_saved: int  # Negative = the candidate delays being debt-free
    candidate_is_profitable: bool
    results_without: list[SnowballResult]
    results_with: list[SnowballResult]
