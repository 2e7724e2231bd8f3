"""Portuguese tax inputs and results: IMT, IMI, IRS, mais-valias."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class PropertyUse(Enum):
    RESIDENTIAL = "woning"
    NON_RESIDENTIAL = "niet-woning"  # Investment / non-habitation


class MunicipalityType(Enum):
    STANDARD = "standaard"
    BIG_CITY = "grote_stad"
    RURAL = "landelijk"


class IRSRegime(Enum):
    OLD = "oud"  # Income years up to 2025
    NEW = "nieuw"  # Income years 2026-2029
    UNKNOWN = "onbekend"  # No rent given, or after 2029


@dataclass(frozen=True)
class IMTResult:
    amount: Decimal
    marginal_rate: Decimal  # %
    average_rate: Decimal  # %, 4 decimals
    taxa_unica: bool  # Single rate applied to the whole price
    explanation: str


@dataclass(frozen=True)
class IMIResult:
    annual_amount: Decimal
    monthly_amount: Decimal
    rate: Decimal  # % of VPT
    explanation: str
    next_payment: str  # e.g. "Mei/Juni 2027"; empty when there is no VPT


@dataclass(frozen=True)
class IRSInput:
    income_year: int  # Calendar year the rent is received
    monthly_rent: Decimal
    contract_years: int | None = None  # Old regime only
    renewals: int = 0  # Old regime 5-10 year contracts
    englobamento: bool = False  # Aggregated with other income
    dhd_contract: bool = False  # Direito de Habitação Duradoura


@dataclass(frozen=True)
class IRSResult:
    annual_amount: Decimal
    monthly_amount: Decimal
    gross_annual_rent: Decimal
    net_annual_rent: Decimal
    net_monthly_rent: Decimal
    rate: Decimal  # %
    regime: IRSRegime
    explanation: str
    saving: Decimal | None = None  # Versus the 25% standard rate
    warning: str | None = None


@dataclass(frozen=True)
class TaxSummary:
    imt: IMTResult
    imi: IMIResult
    irs: IRSResult
    total_one_time: Decimal
    total_annual: Decimal
    total_monthly: Decimal


@dataclass(frozen=True)
class CapitalGainsResult:
    gain: Decimal
    taxable_gain: Decimal
    tax: Decimal
    rate: Decimal  # %
