from decimal import Decimal

import pytest

from propcalc.engine.errors import InvalidInput
from propcalc.engine.loan import (
    calculate_loan_repayments,
    calculate_lvr,
    generate_amortization_schedule,
)


class TestCalculateLoanRepayments:
    def test_standard_loan(self):
        """$500K at 6% for 30 years."""
        loan = calculate_loan_repayments(Decimal("500000"), Decimal("6"), 30)
        assert loan.monthly_repayment == Decimal("2997.75")
        assert loan.number_of_payments == 360

    def test_seven_percent(self):
        loan = calculate_loan_repayments(Decimal("400000"), Decimal("7"), 30)
        assert loan.monthly_repayment == Decimal("2661.21")

    def test_zero_rate_is_simple_division(self):
        loan = calculate_loan_repayments(Decimal("360000"), Decimal("0"), 30)
        assert loan.monthly_repayment == Decimal("1000.00")
        assert loan.annual_repayment == Decimal("12000.00")
        assert loan.total_repayment == Decimal("360000.00")
        assert loan.total_interest == Decimal("0.00")

    def test_zero_rate_short_term(self):
        loan = calculate_loan_repayments(Decimal("120000"), Decimal("0"), 10)
        assert loan.monthly_repayment == Decimal("1000.00")

    def test_rate_below_precision_is_straight_line(self):
        """(1 + r)^n rounds to exactly 1, so the annuity formula cannot be used."""
        loan = calculate_loan_repayments(Decimal("500000"), Decimal("1E-25"), 30)
        assert loan.monthly_repayment == Decimal("1388.89")
        assert loan.total_interest == Decimal("0.00")

    def test_rate_below_precision_schedule(self):
        schedule = generate_amortization_schedule(Decimal("360000"), Decimal("1E-25"), 30)
        assert schedule[10].remaining_balance == Decimal("240000.00")

    def test_totals_consistent(self):
        loan = calculate_loan_repayments(Decimal("600000"), Decimal("6"), 30)
        assert abs(loan.total_interest - (loan.total_repayment - loan.loan_amount)) <= Decimal("0.01")
        # Annual is rounded from the unrounded monthly figure
        assert abs(loan.annual_repayment - loan.monthly_repayment * 12) <= Decimal("0.06")

    def test_outputs_in_cents(self):
        loan = calculate_loan_repayments(Decimal("333333"), Decimal("5.79"), 25)
        for value in (loan.monthly_repayment, loan.annual_repayment,
                      loan.total_repayment, loan.total_interest):
            assert value == value.quantize(Decimal("0.01"))

    @pytest.mark.parametrize(
        "principal, rate, term",
        [
            (Decimal("0"), Decimal("6"), 30),
            (Decimal("-1"), Decimal("6"), 30),
            (Decimal("100000"), Decimal("-0.5"), 30),
            (Decimal("100000"), Decimal("100.01"), 30),
            (Decimal("100000"), Decimal("6"), 0),
            (Decimal("100000"), Decimal("6"), 51),
        ],
    )
    def test_invalid_inputs(self, principal, rate, term):
        with pytest.raises(InvalidInput):
            calculate_loan_repayments(principal, rate, term)


class TestAmortizationSchedule:
    def test_yearly_entry_count(self):
        schedule = generate_amortization_schedule(Decimal("500000"), Decimal("6"), 30)
        assert [e.year for e in schedule] == list(range(31))

    def test_starts_at_principal(self):
        schedule = generate_amortization_schedule(Decimal("500000"), Decimal("6"), 30)
        first = schedule[0]
        assert first.remaining_balance == Decimal("500000.00")
        assert first.cumulative_interest_paid == Decimal("0.00")
        assert first.equity_built == Decimal("0.00")

    def test_final_balance_near_zero(self):
        schedule = generate_amortization_schedule(Decimal("500000"), Decimal("6"), 30)
        assert Decimal("0") <= schedule[-1].remaining_balance <= Decimal("1.00")

    def test_balance_non_increasing(self):
        schedule = generate_amortization_schedule(Decimal("450000"), Decimal("6.5"), 25)
        for prev, curr in zip(schedule, schedule[1:]):
            assert curr.remaining_balance <= prev.remaining_balance

    def test_interval_always_includes_final_year(self):
        schedule = generate_amortization_schedule(Decimal("300000"), Decimal("5"), 30, interval=7)
        assert [e.year for e in schedule] == [0, 7, 14, 21, 28, 30]

    def test_five_year_interval(self):
        schedule = generate_amortization_schedule(Decimal("300000"), Decimal("5"), 30, interval=5)
        assert [e.year for e in schedule] == [0, 5, 10, 15, 20, 25, 30]

    def test_zero_rate_linear(self):
        schedule = generate_amortization_schedule(Decimal("360000"), Decimal("0"), 30)
        year_10 = schedule[10]
        assert year_10.remaining_balance == Decimal("240000.00")
        assert year_10.equity_built == Decimal("120000.00")
        assert year_10.cumulative_interest_paid == Decimal("0.00")
        assert schedule[-1].remaining_balance == Decimal("0.00")

    def test_equity_built_tracks_principal(self):
        schedule = generate_amortization_schedule(Decimal("500000"), Decimal("6"), 30)
        for entry in schedule:
            assert abs(entry.equity_built - entry.cumulative_principal_paid) <= Decimal("0.01")

    def test_invalid_interval(self):
        with pytest.raises(InvalidInput):
            generate_amortization_schedule(Decimal("300000"), Decimal("5"), 30, interval=0)


class TestLVR:
    def test_eighty_percent_no_lmi(self):
        lvr = calculate_lvr(Decimal("600000"), Decimal("750000"))
        assert lvr.lvr == Decimal("80.00")
        assert lvr.requires_lmi is False
        assert lvr.deposit == Decimal("150000.00")
        assert lvr.deposit_percentage == Decimal("20.00")

    def test_above_eighty_requires_lmi(self):
        lvr = calculate_lvr(Decimal("675000"), Decimal("750000"))
        assert lvr.lvr == Decimal("90.00")
        assert lvr.requires_lmi is True

    def test_zero_property_value(self):
        with pytest.raises(InvalidInput):
            calculate_lvr(Decimal("100000"), Decimal("0"))
