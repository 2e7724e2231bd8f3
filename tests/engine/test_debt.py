from decimal import Decimal

from rendement.engine.debt import (
    amortization_schedule,
    monthly_payment,
    remaining_balance,
    yearly_debt_summary,
)


class TestMonthlyPayment:
    def test_standard_mortgage(self):
        """€200K loan at 3.5% for 30 years."""
        pmt = monthly_payment(Decimal("200000"), Decimal("3.5"), 30)
        # Expected: ~€898.09
        assert abs(pmt - Decimal("898.09")) <= Decimal("0.01")

    def test_zero_rate_is_exact(self):
        pmt = monthly_payment(Decimal("120000"), Decimal("0"), 10)
        assert pmt == Decimal("1000")
        assert pmt * 120 == Decimal("120000")

    def test_zero_principal(self):
        assert monthly_payment(Decimal("0"), Decimal("3.5"), 30) == Decimal("0")

    def test_zero_term(self):
        assert monthly_payment(Decimal("200000"), Decimal("3.5"), 0) == Decimal("0")

    def test_higher_rate_costs_more(self):
        low = monthly_payment(Decimal("200000"), Decimal("3"), 30)
        high = monthly_payment(Decimal("200000"), Decimal("5"), 30)
        assert high > low


class TestRemainingBalance:
    def test_no_payments_made(self):
        assert remaining_balance(Decimal("200000"), Decimal("3.5"), 30, 0) == Decimal("200000")

    def test_paid_off_at_term(self):
        assert remaining_balance(Decimal("200000"), Decimal("3.5"), 30, 360) == Decimal("0")

    def test_zero_rate_linear(self):
        assert remaining_balance(Decimal("120000"), Decimal("0"), 10, 60) == Decimal("60000.00")

    def test_matches_schedule(self):
        """Closed form agrees with the month-by-month schedule to within rounding drift."""
        closed = remaining_balance(Decimal("187500"), Decimal("3.5"), 30, 120)
        schedule = amortization_schedule(Decimal("187500"), Decimal("3.5"), 30, hold_years=10)
        assert abs(closed - schedule.ending_balance) < Decimal("5.00")

    def test_early_years_mostly_interest(self):
        balance = remaining_balance(Decimal("200000"), Decimal("3.5"), 30, 60)
        # After 5 of 30 years, well over 80% of the loan is still outstanding
        assert balance > Decimal("170000")


class TestAmortizationSchedule:
    def test_payment_count(self):
        schedule = amortization_schedule(Decimal("200000"), Decimal("3.5"), 30)
        assert len(schedule.payments) == 360

    def test_partial_schedule(self):
        schedule = amortization_schedule(Decimal("200000"), Decimal("3.5"), 30, hold_years=10)
        assert len(schedule.payments) == 120

    def test_first_payment_interest(self):
        schedule = amortization_schedule(Decimal("200000"), Decimal("3.5"), 30)
        # 200000 * 0.035 / 12 = 583.33
        assert schedule.payments[0].interest == Decimal("583.33")

    def test_balance_decreases(self):
        schedule = amortization_schedule(Decimal("200000"), Decimal("3.5"), 30)
        for i in range(1, len(schedule.payments)):
            assert schedule.payments[i].balance < schedule.payments[i - 1].balance

    def test_final_balance_near_zero(self):
        schedule = amortization_schedule(Decimal("200000"), Decimal("3.5"), 30)
        assert schedule.ending_balance <= Decimal("1.00")

    def test_manual_payment_pays_off_sooner(self):
        """A payment above the annuity clears the loan before the term."""
        schedule = amortization_schedule(
            Decimal("100000"), Decimal("3"), 30, payment=Decimal("2000")
        )
        assert schedule.monthly_payment == Decimal("2000")
        assert schedule.ending_balance == Decimal("0")


class TestYearlyDebtSummary:
    def test_year_count(self):
        schedule = amortization_schedule(Decimal("200000"), Decimal("3.5"), 30)
        assert len(yearly_debt_summary(schedule)) == 30

    def test_principal_plus_interest_is_debt_service(self):
        schedule = amortization_schedule(Decimal("200000"), Decimal("3.5"), 30, hold_years=5)
        for year in yearly_debt_summary(schedule):
            assert year.principal + year.interest == year.debt_service

    def test_interest_declines(self):
        schedule = amortization_schedule(Decimal("200000"), Decimal("3.5"), 30)
        years = yearly_debt_summary(schedule)
        assert years[0].interest > years[10].interest > years[20].interest

    def test_ending_balance_matches_schedule(self):
        schedule = amortization_schedule(Decimal("200000"), Decimal("3.5"), 30, hold_years=3)
        years = yearly_debt_summary(schedule)
        assert [y.year for y in years] == [1, 2, 3]
        assert years[-1].ending_balance == schedule.ending_balance
