from datetime import date
from decimal import Decimal

from rendement.models.tax import IRSInput, IRSRegime, MunicipalityType, PropertyUse
from rendement.engine.tax import (
    calculate_capital_gains_tax,
    calculate_imi,
    calculate_imt,
    calculate_irs,
    calculate_total_taxes,
    estimate_vpt,
    irs_rule_for,
)


class TestIMT:
    def test_non_residential_flat_rate(self):
        result = calculate_imt(Decimal("200000"), PropertyUse.NON_RESIDENTIAL)
        assert result.amount == Decimal("13000.00")
        assert result.taxa_unica

    def test_residential_exempt(self):
        result = calculate_imt(Decimal("100000"), PropertyUse.RESIDENTIAL)
        assert result.amount == Decimal("0")
        assert result.marginal_rate == Decimal("0")

    def test_bracket_boundary_continuity(self):
        below = calculate_imt(Decimal("106346"), PropertyUse.RESIDENTIAL)
        above = calculate_imt(Decimal("106347"), PropertyUse.RESIDENTIAL)
        assert below.amount <= above.amount
        # At most the marginal rate on the extra euro
        assert above.amount - below.amount <= Decimal("0.02")

    def test_progressive_brackets(self):
        # 2% on 106346-145470, 5% on 145470-198347
        result = calculate_imt(Decimal("198347"), PropertyUse.RESIDENTIAL)
        assert result.amount == Decimal("3426.33")
        assert result.marginal_rate == Decimal("5")
        assert not result.taxa_unica

    def test_monotonic_across_brackets(self):
        prices = [Decimal(p) for p in (100000, 145470, 145471, 198347, 198348, 330539, 330540, 633453)]
        amounts = [calculate_imt(p, PropertyUse.RESIDENTIAL).amount for p in prices]
        assert amounts == sorted(amounts)

    def test_taxa_unica_above_progressive_range(self):
        result = calculate_imt(Decimal("700000"), PropertyUse.RESIDENTIAL)
        assert result.taxa_unica
        assert result.amount == Decimal("42000.00")

    def test_top_single_rate(self):
        result = calculate_imt(Decimal("2000000"), PropertyUse.RESIDENTIAL)
        assert result.amount == Decimal("150000.00")

    def test_average_rate(self):
        result = calculate_imt(Decimal("200000"), PropertyUse.RESIDENTIAL)
        assert result.average_rate == (result.amount / 200000 * 100).quantize(Decimal("0.0001"))

    def test_zero_price(self):
        assert calculate_imt(Decimal("0")).amount == Decimal("0")


class TestIMI:
    def test_standard_rate(self):
        result = calculate_imi(Decimal("100000"), today=date(2026, 3, 1))
        assert result.annual_amount == Decimal("500.00")
        assert result.monthly_amount == Decimal("41.67")
        assert result.next_payment == "Mei/Juni 2026"

    def test_rural_rate(self):
        result = calculate_imi(Decimal("100000"), MunicipalityType.RURAL, today=date(2026, 3, 1))
        assert result.annual_amount == Decimal("300.00")

    def test_custom_rate(self):
        result = calculate_imi(Decimal("100000"), custom_rate=Decimal("0.35"), today=date(2026, 3, 1))
        assert result.rate == Decimal("0.35")
        assert result.annual_amount == Decimal("350.00")

    def test_payment_window_rolls_over(self):
        assert calculate_imi(Decimal("100000"), today=date(2026, 5, 31)).next_payment == "Mei/Juni 2026"
        assert calculate_imi(Decimal("100000"), today=date(2026, 6, 1)).next_payment == "Mei/Juni 2027"

    def test_no_assessed_value(self):
        result = calculate_imi(Decimal("0"))
        assert result.annual_amount == Decimal("0")
        assert result.next_payment == ""


class TestIRSRegimeSelection:
    def test_new_regime_reduced_rate(self):
        result = calculate_irs(IRSInput(income_year=2027, monthly_rent=Decimal("2000")))
        assert result.regime == IRSRegime.NEW
        assert result.rate == Decimal("10")
        assert result.annual_amount == Decimal("2400.00")
        # 15 points saved on €24,000
        assert result.saving == Decimal("3600.00")

    def test_new_regime_threshold_inclusive(self):
        result = calculate_irs(IRSInput(income_year=2026, monthly_rent=Decimal("2300")))
        assert result.rate == Decimal("10")

    def test_new_regime_standard_rate(self):
        result = calculate_irs(IRSInput(income_year=2027, monthly_rent=Decimal("2500")))
        assert result.rate == Decimal("25")
        assert result.saving is None

    def test_englobamento(self):
        result = calculate_irs(IRSInput(
            income_year=2027, monthly_rent=Decimal("1000"), englobamento=True
        ))
        assert result.rate == Decimal("30")
        assert result.warning

    def test_old_regime_long_contract(self):
        result = calculate_irs(IRSInput(
            income_year=2024, monthly_rent=Decimal("1000"), contract_years=12
        ))
        assert result.regime == IRSRegime.OLD
        assert result.rate == Decimal("10")

    def test_old_regime_default_short_contract(self):
        result = calculate_irs(IRSInput(income_year=2025, monthly_rent=Decimal("1000")))
        assert result.rate == Decimal("28")

    def test_old_regime_duration_bands(self):
        def rate(years):
            return calculate_irs(IRSInput(
                income_year=2024, monthly_rent=Decimal("1000"), contract_years=years
            )).rate

        assert rate(3) == Decimal("25")
        assert rate(7) == Decimal("15")
        assert rate(25) == Decimal("5")

    def test_old_regime_renewals(self):
        result = calculate_irs(IRSInput(
            income_year=2024, monthly_rent=Decimal("1000"), contract_years=7, renewals=2
        ))
        assert result.rate == Decimal("11")

    def test_old_regime_renewals_floor(self):
        result = calculate_irs(IRSInput(
            income_year=2024, monthly_rent=Decimal("1000"), contract_years=7, renewals=10
        ))
        assert result.rate == Decimal("5")

    def test_dhd_discount(self):
        result = calculate_irs(IRSInput(
            income_year=2024, monthly_rent=Decimal("1000"), contract_years=12, dhd_contract=True
        ))
        assert result.rate == Decimal("8")

    def test_after_2029_falls_back(self):
        result = calculate_irs(IRSInput(income_year=2031, monthly_rent=Decimal("1000")))
        assert result.regime == IRSRegime.UNKNOWN
        assert result.rate == Decimal("25")
        assert result.warning

    def test_no_rent(self):
        result = calculate_irs(IRSInput(income_year=2027, monthly_rent=Decimal("0")))
        assert result.regime == IRSRegime.UNKNOWN
        assert result.annual_amount == Decimal("0")

    def test_net_rent(self):
        result = calculate_irs(IRSInput(income_year=2027, monthly_rent=Decimal("1000")))
        assert result.net_annual_rent == result.gross_annual_rent - result.annual_amount
        assert result.net_monthly_rent == Decimal("900.00")

    def test_rule_table_covers_every_year(self):
        for year in (1990, 2025, 2026, 2029, 2030, 2100):
            assert irs_rule_for(year).covers(year)


class TestTotals:
    def test_total_taxes(self):
        result = calculate_total_taxes(
            Decimal("200000"),
            Decimal("100000"),
            IRSInput(income_year=2027, monthly_rent=Decimal("1000")),
            today=date(2026, 3, 1),
        )
        assert result.total_one_time == Decimal("13000.00")
        # IMI 500 + IRS 1200
        assert result.total_annual == Decimal("1700.00")
        assert result.total_monthly == result.imi.monthly_amount + result.irs.monthly_amount

    def test_estimate_vpt(self):
        assert estimate_vpt(Decimal("250000")) == Decimal("150000")
        assert estimate_vpt(Decimal("250000"), Decimal("50")) == Decimal("125000")


class TestCapitalGains:
    def test_non_resident_full_gain(self):
        result = calculate_capital_gains_tax(Decimal("300000"), Decimal("200000"))
        assert result.taxable_gain == Decimal("100000")
        assert result.tax == Decimal("28000.00")

    def test_resident_half_gain(self):
        result = calculate_capital_gains_tax(Decimal("300000"), Decimal("200000"), resident=True)
        assert result.taxable_gain == Decimal("50000")
        assert result.tax == Decimal("14000.00")

    def test_loss(self):
        result = calculate_capital_gains_tax(Decimal("180000"), Decimal("200000"))
        assert result.gain == Decimal("-20000")
        assert result.tax == Decimal("0")
