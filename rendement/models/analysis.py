from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class RentalType(Enum):
    LONG_TERM = "longterm"
    SHORT_TERM = "shortterm"
    MIXED = "mixed"  # Half a year long-term, half short-term


@dataclass(frozen=True)
class LoanToValue:
    """Loan sized as a share of the purchase price."""
    pct: Decimal  # % of purchase price


@dataclass(frozen=True)
class DownPayment:
    """Loan sized as purchase price minus an explicit down payment."""
    amount: Decimal


@dataclass(frozen=True)
class CalculatedPayment:
    """Monthly payment from the annuity formula."""


@dataclass(frozen=True)
class ManualPayment:
    """Monthly payment entered by the user (e.g. an existing loan's real payment)."""
    monthly: Decimal


LoanSizing = LoanToValue | DownPayment
PaymentMode = CalculatedPayment | ManualPayment


@dataclass(frozen=True)
class AnalysisInputs:
    # Purchase
    purchase_price: Decimal
    imt: Decimal = Decimal("0")  # Transfer tax paid at purchase
    notary_fees: Decimal = Decimal("0")
    renovation_costs: Decimal = Decimal("0")
    furnishing_costs: Decimal = Decimal("0")

    # Financing
    loan: LoanSizing = field(default_factory=lambda: LoanToValue(Decimal("0")))
    payment: PaymentMode = field(default_factory=CalculatedPayment)
    interest_rate: Decimal = Decimal("0")  # Annual, %
    loan_term_years: int = 30

    # Income
    rental_type: RentalType = RentalType.LONG_TERM
    monthly_rent: Decimal = Decimal("0")  # Long-term rent per month
    st_occupancy: Decimal = Decimal("0")  # Short-term occupancy, %
    st_adr: Decimal = Decimal("0")  # Short-term average daily rate

    # Operating expenses
    management_pct: Decimal = Decimal("0")  # % of gross rent
    maintenance_yearly: Decimal = Decimal("0")
    imi_yearly: Decimal = Decimal("0")
    insurance_yearly: Decimal = Decimal("0")
    condo_monthly: Decimal = Decimal("0")
    utilities_monthly: Decimal = Decimal("0")

    # Growth, % per year
    rent_growth: Decimal = Decimal("0")
    cost_growth: Decimal = Decimal("0")
    value_growth: Decimal = Decimal("0")

    # Horizon
    years: int = 10

    @property
    def total_investment(self) -> Decimal:
        return (
            self.purchase_price
            + self.imt
            + self.notary_fees
            + self.renovation_costs
            + self.furnishing_costs
        )

    @property
    def loan_amount(self) -> Decimal:
        if isinstance(self.loan, DownPayment):
            return max(Decimal("0"), self.purchase_price - self.loan.amount)
        return self.purchase_price * self.loan.pct / 100

    @property
    def own_capital(self) -> Decimal:
        return self.total_investment - self.loan_amount
