from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from rendement.models.analysis import CalculatedPayment, ManualPayment, PaymentMode
from rendement.models.tax import PropertyUse


class TenantType(Enum):
    LONG_TERM = "langdurig"
    TOURISM = "toerisme"
    STUDENT = "student"


@dataclass(frozen=True)
class UnitInput:
    id: str
    name: str
    area_m2: Decimal
    monthly_rent: Decimal
    verdelingsfactor_pct: Decimal  # Share of common costs and mortgage, %
    energy_label: str = "C"  # A-F
    tenant_retention_months: Decimal = Decimal("0")
    renovation_score: int = 1  # 1-10, expected renovation need over 3 years
    occupancy_pct: Decimal = Decimal("100")  # %
    tenant_type: TenantType = TenantType.LONG_TERM


@dataclass(frozen=True)
class SharedCosts:
    gas_monthly: Decimal = Decimal("0")
    water_monthly: Decimal = Decimal("0")
    vve_monthly: Decimal = Decimal("0")
    maintenance_yearly: Decimal = Decimal("0")
    insurance_yearly: Decimal = Decimal("0")

    @property
    def monthly_total(self) -> Decimal:
        return (
            self.gas_monthly
            + self.water_monthly
            + self.vve_monthly
            + self.maintenance_yearly / 12
            + self.insurance_yearly / 12
        )


@dataclass(frozen=True)
class MultiUnitInputs:
    property_name: str
    purchase_price: Decimal
    own_capital: Decimal
    loan_amount: Decimal
    interest_rate: Decimal  # Annual, %
    loan_term_years: int
    imt: Decimal = Decimal("0")
    imt_automatic: bool = False  # Derive IMT from purchase price and property use
    property_use: PropertyUse = PropertyUse.NON_RESIDENTIAL
    notary_fees: Decimal = Decimal("0")
    renovation_costs: Decimal = Decimal("0")
    payment: PaymentMode = field(default_factory=CalculatedPayment)
    market_value: Decimal = Decimal("0")  # 0 = use total investment
    units: list[UnitInput] = field(default_factory=list)
    shared_costs: SharedCosts = field(default_factory=SharedCosts)
    irs_year: int = 2026  # Income year selecting the IRS regime
    contract_years: int = 1  # Old-regime contract duration

    @property
    def share_total_pct(self) -> Decimal:
        return sum((u.verdelingsfactor_pct for u in self.units), Decimal("0"))

    @property
    def allocation_warning(self) -> str | None:
        """Cost shares are allowed not to add up, but the caller is told."""
        if not self.units:
            return None
        total = self.share_total_pct
        if total != 100:
            return (
                f"Verdelingsfactoren tellen op tot {total}% in plaats van 100%; "
                "kosten en hypotheek worden niet volledig verdeeld."
            )
        return None

    @property
    def manual_payment(self) -> Decimal | None:
        if isinstance(self.payment, ManualPayment):
            return self.payment.monthly
        return None


@dataclass(frozen=True)
class UnitAnalysis:
    id: str
    name: str
    area_m2: Decimal

    # Annual amounts
    gross_rent: Decimal
    allocated_costs: Decimal
    noi: Decimal
    mortgage_share: Decimal
    cashflow: Decimal  # Before tax
    cashflow_after_tax: Decimal

    # Ratios
    yield_per_m2: Decimal  # Annual rent per m2
    opex_ratio: Decimal  # %
    occupancy_pct: Decimal  # %
    tenant_retention_months: Decimal
    cash_on_cash: Decimal  # %
    dscr: Decimal  # Multiple, Infinity without a mortgage share

    energy_label: str
    renovation_score: int
    tenant_type: TenantType


@dataclass(frozen=True)
class TenantTypeShare:
    tenant_type: TenantType
    count: int
    percentage: Decimal


@dataclass(frozen=True)
class MultiUnitAnalysis:
    # Totals, annual
    total_gross_rent: Decimal
    total_noi: Decimal
    total_cashflow: Decimal
    total_cashflow_after_tax: Decimal

    # Averages across units
    avg_cash_on_cash: Decimal
    avg_dscr: Decimal
    avg_opex_ratio: Decimal
    avg_occupancy: Decimal
    avg_tenant_retention: Decimal

    # Property level
    total_investment: Decimal
    own_capital: Decimal
    monthly_payment: Decimal
    irs_rate: Decimal  # %
    cap_rate: Decimal  # %
    annual_cashflow: Decimal
    irr_10_years: Decimal  # %
    break_even_occupancy: Decimal  # %

    # Risk indicators
    renovation_estimate_3_years: Decimal
    tenant_diversity: list[TenantTypeShare]

    units: list[UnitAnalysis]
    warnings: list[str] = field(default_factory=list)
