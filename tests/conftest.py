"""Canonical test fixtures used across engine and API tests.

Fixture: €250K long-term rental, 75% LTV, 3.5% rate, 30yr annuity.
Building: two units sharing costs 60/40 with a fixed €900/month mortgage.
Owned property: bought at €200K, now worth €300K, €100K left on a 20yr loan.
"""

import pytest
from decimal import Decimal

from rendement.models.analysis import AnalysisInputs, LoanToValue, ManualPayment, RentalType
from rendement.models.multi_unit import MultiUnitInputs, SharedCosts, UnitInput
from rendement.models.sell_or_keep import SellOrKeepInputs
from rendement.models.snowball import SnowballProperty


@pytest.fixture
def canonical_inputs() -> AnalysisInputs:
    """€250K apartment let long-term at €1,200/month."""
    return AnalysisInputs(
        purchase_price=Decimal("250000"),
        imt=Decimal("12500"),
        notary_fees=Decimal("3500"),
        loan=LoanToValue(Decimal("75")),
        interest_rate=Decimal("3.5"),
        loan_term_years=30,
        rental_type=RentalType.LONG_TERM,
        monthly_rent=Decimal("1200"),
        management_pct=Decimal("10"),
        maintenance_yearly=Decimal("2000"),
        imi_yearly=Decimal("750"),
        insurance_yearly=Decimal("400"),
        condo_monthly=Decimal("75"),
        rent_growth=Decimal("2"),
        cost_growth=Decimal("2"),
        value_growth=Decimal("3"),
        years=10,
    )


@pytest.fixture
def canonical_building() -> MultiUnitInputs:
    """Two units, shares summing to exactly 100%."""
    return MultiUnitInputs(
        property_name="Rua das Flores 12",
        purchase_price=Decimal("250000"),
        own_capital=Decimal("60000"),
        loan_amount=Decimal("200000"),
        interest_rate=Decimal("3.5"),
        loan_term_years=30,
        payment=ManualPayment(Decimal("900")),
        units=[
            UnitInput(
                id="a",
                name="Rés-do-chão",
                area_m2=Decimal("50"),
                monthly_rent=Decimal("800"),
                verdelingsfactor_pct=Decimal("60"),
            ),
            UnitInput(
                id="b",
                name="1º andar",
                area_m2=Decimal("40"),
                monthly_rent=Decimal("600"),
                verdelingsfactor_pct=Decimal("40"),
            ),
        ],
        shared_costs=SharedCosts(
            gas_monthly=Decimal("50"),
            water_monthly=Decimal("30"),
            vve_monthly=Decimal("100"),
            maintenance_yearly=Decimal("1200"),
            insurance_yearly=Decimal("600"),
        ),
        irs_year=2026,
    )


@pytest.fixture
def snowball_portfolio() -> list[SnowballProperty]:
    """Interest-free loans so payoff months can be worked out by hand."""
    return [
        SnowballProperty(
            id="porto",
            name="Porto",
            debt=Decimal("1000"),
            monthly_payment=Decimal("100"),
            net_cashflow=Decimal("100"),
            interest_rate=Decimal("0"),
        ),
        SnowballProperty(
            id="braga",
            name="Braga",
            debt=Decimal("3000"),
            monthly_payment=Decimal("100"),
            net_cashflow=Decimal("0"),
            interest_rate=Decimal("0"),
        ),
    ]


@pytest.fixture
def owned_property() -> SellOrKeepInputs:
    """Self-managed long-term rental with a €100K gain on paper."""
    return SellOrKeepInputs(
        current_market_value=Decimal("300000"),
        original_purchase_price=Decimal("200000"),
        cadastral_value=Decimal("120000"),
        remaining_mortgage=Decimal("100000"),
        mortgage_rate=Decimal("3.8"),
        remaining_years=20,
        monthly_rent=Decimal("1500"),
    )
