from dataclasses import replace
from decimal import Decimal

from rendement.models.analysis import DownPayment, LoanToValue, ManualPayment, RentalType
from rendement.engine.debt import remaining_balance
from rendement.engine.investment import analyze_investment, assess_risk, sensitivity


class TestCanonicalScenario:
    def test_financing(self, canonical_inputs):
        result = analyze_investment(canonical_inputs)
        assert result.total_investment == Decimal("266000")
        assert result.loan_amount == Decimal("187500")
        assert result.own_capital == Decimal("78500")

    def test_year_one(self, canonical_inputs):
        result = analyze_investment(canonical_inputs)
        y1 = result.yearly_cashflows[0]
        assert y1.gross_rent == Decimal("14400")
        assert y1.opex == Decimal("5490")
        assert y1.noi == Decimal("8910")

    def test_yields(self, canonical_inputs):
        result = analyze_investment(canonical_inputs)
        assert result.bar == Decimal("5.76")
        assert result.nar == Decimal("3.56")

    def test_dscr_below_one(self, canonical_inputs):
        """€8,910 NOI does not cover ~€10,100 of yearly mortgage payments."""
        result = analyze_investment(canonical_inputs)
        y1 = result.yearly_cashflows[0]
        assert result.dscr == (y1.noi / y1.debt_service).quantize(Decimal("0.01"))
        assert Decimal("0") < result.dscr < Decimal("1")

    def test_break_even_capped(self, canonical_inputs):
        result = analyze_investment(canonical_inputs)
        assert result.break_even_occupancy == Decimal("100")


class TestYearlyCashflows:
    def test_length_matches_horizon(self, canonical_inputs):
        result = analyze_investment(canonical_inputs)
        assert len(result.yearly_cashflows) == 10
        assert [y.year for y in result.yearly_cashflows] == list(range(1, 11))

    def test_cumulative_is_running_sum(self, canonical_inputs):
        rows = analyze_investment(canonical_inputs).yearly_cashflows
        assert rows[0].cumulative_cashflow == rows[0].net_cashflow
        for prev, cur in zip(rows, rows[1:]):
            assert cur.cumulative_cashflow == prev.cumulative_cashflow + cur.net_cashflow

    def test_net_is_noi_minus_debt_service(self, canonical_inputs):
        for row in analyze_investment(canonical_inputs).yearly_cashflows:
            assert row.net_cashflow == row.noi - row.debt_service
            assert row.noi == row.gross_rent - row.opex

    def test_rent_grows(self, canonical_inputs):
        rows = analyze_investment(canonical_inputs).yearly_cashflows
        assert rows[-1].gross_rent > rows[0].gross_rent

    def test_short_horizon(self, canonical_inputs):
        result = analyze_investment(replace(canonical_inputs, years=1))
        assert len(result.yearly_cashflows) == 1


class TestFinancingModes:
    def test_no_loan_gives_infinite_dscr(self, canonical_inputs):
        result = analyze_investment(replace(canonical_inputs, loan=LoanToValue(Decimal("0"))))
        assert result.monthly_payment == Decimal("0")
        assert result.dscr.is_infinite()
        assert result.exit_analysis.remaining_debt == Decimal("0")

    def test_down_payment(self, canonical_inputs):
        result = analyze_investment(
            replace(canonical_inputs, loan=DownPayment(Decimal("50000")))
        )
        assert result.loan_amount == Decimal("200000")
        assert result.own_capital == Decimal("66000")

    def test_down_payment_above_price(self, canonical_inputs):
        result = analyze_investment(
            replace(canonical_inputs, loan=DownPayment(Decimal("300000")))
        )
        assert result.loan_amount == Decimal("0")

    def test_manual_payment_wins(self, canonical_inputs):
        result = analyze_investment(
            replace(canonical_inputs, payment=ManualPayment(Decimal("1000")))
        )
        assert result.monthly_payment == Decimal("1000")
        assert result.yearly_cashflows[0].debt_service == Decimal("12000")

    def test_manual_payment_repays_faster(self, canonical_inputs):
        calculated = analyze_investment(canonical_inputs)
        manual = analyze_investment(
            replace(canonical_inputs, payment=ManualPayment(Decimal("1500")))
        )
        assert manual.exit_analysis.remaining_debt < calculated.exit_analysis.remaining_debt


class TestExit:
    def test_market_value(self, canonical_inputs):
        exit_ = analyze_investment(canonical_inputs).exit_analysis
        assert exit_.market_value == Decimal("335979.09")

    def test_remaining_debt_from_amortization(self, canonical_inputs):
        exit_ = analyze_investment(canonical_inputs).exit_analysis
        assert exit_.remaining_debt == remaining_balance(
            Decimal("187500"), Decimal("3.5"), 30, 120
        )

    def test_totals(self, canonical_inputs):
        result = analyze_investment(canonical_inputs)
        exit_ = result.exit_analysis
        assert exit_.net_exit == exit_.market_value - exit_.remaining_debt
        assert exit_.total_return == (
            exit_.net_exit + result.yearly_cashflows[-1].cumulative_cashflow
        )

    def test_irr_positive_with_appreciation(self, canonical_inputs):
        result = analyze_investment(canonical_inputs)
        assert result.irr > Decimal("0")


class TestRisk:
    def test_canonical_is_risky(self, canonical_inputs):
        """Negative cash-on-cash and DSCR under 1."""
        risk = assess_risk(analyze_investment(canonical_inputs))
        assert risk.level == "risky"
        assert len(risk.reasons) == 4

    def test_cash_purchase_with_strong_rent(self, canonical_inputs):
        inputs = replace(
            canonical_inputs,
            loan=LoanToValue(Decimal("0")),
            monthly_rent=Decimal("3000"),
            value_growth=Decimal("5"),
        )
        risk = assess_risk(analyze_investment(inputs))
        assert risk.level in ("good", "moderate")
        assert risk.score <= 3


class TestSensitivity:
    def test_presets(self, canonical_inputs):
        labels = [s.label for s in sensitivity(canonical_inputs)]
        assert labels == [
            "Basis scenario",
            "Rentestijging (+2%)",
            "Hoge leegstand",
            "Huurverlaging (-15%)",
            "Worstcase",
        ]

    def test_base_matches_plain_analysis(self, canonical_inputs):
        base = sensitivity(canonical_inputs)[0]
        assert base.analysis == analyze_investment(canonical_inputs)
        assert base.irr_change == Decimal("0")
        assert base.dscr_change == Decimal("0")
        assert base.year_one_cashflow_change == Decimal("0")

    def test_rate_shock_raises_payment(self, canonical_inputs):
        rate_up = sensitivity(canonical_inputs)[1]
        assert rate_up.interest_rate == Decimal("5.5")
        assert rate_up.analysis.monthly_payment > analyze_investment(canonical_inputs).monthly_payment
        assert rate_up.year_one_cashflow_change < 0
        assert rate_up.dscr_change < 0

    def test_occupancy_leaves_long_term_rent_alone(self, canonical_inputs):
        vacancy = sensitivity(canonical_inputs)[2]
        assert vacancy.st_occupancy == Decimal("50")
        assert vacancy.year_one_cashflow_change == Decimal("0")

    def test_occupancy_hits_short_term_rent(self, canonical_inputs):
        inputs = replace(
            canonical_inputs,
            rental_type=RentalType.SHORT_TERM,
            st_occupancy=Decimal("70"),
            st_adr=Decimal("100"),
        )
        vacancy = sensitivity(inputs)[2]
        # 365 nights * 50% * €100
        assert vacancy.analysis.yearly_cashflows[0].gross_rent == Decimal("18250")
        assert vacancy.year_one_cashflow_change < 0

    def test_rent_cut(self, canonical_inputs):
        cut = sensitivity(canonical_inputs)[3]
        assert cut.rent_change_pct == Decimal("-15")
        assert cut.analysis.yearly_cashflows[0].gross_rent == Decimal("12240")

    def test_worst_case_is_worse_than_rate_shock_alone(self, canonical_inputs):
        _, rate_up, _, _, worst = sensitivity(canonical_inputs)
        assert worst.analysis.yearly_cashflows[0].gross_rent == Decimal("12960")
        assert worst.year_one_cashflow_change < rate_up.year_one_cashflow_change

    def test_cash_purchase_keeps_infinite_dscr(self, canonical_inputs):
        scenarios = sensitivity(replace(canonical_inputs, loan=LoanToValue(Decimal("0"))))
        assert all(s.analysis.dscr.is_infinite() for s in scenarios)
        assert all(s.dscr_change == Decimal("0") for s in scenarios)
