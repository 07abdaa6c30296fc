from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP

import pytest

from propcalc.engine.errors import InvalidInput
from propcalc.engine.loan import generate_amortization_schedule
from propcalc.engine.projection import (
    PROJECTION_YEARS,
    calculate_30_year_projection,
    calculate_investment_metrics,
)
from propcalc.models.results import ProjectionEntry


def _entry(year: int, net_worth: str) -> ProjectionEntry:
    zero = Decimal("0")
    return ProjectionEntry(
        year=year,
        property_value=zero,
        equity=zero,
        equity_percentage=zero,
        remaining_loan_balance=zero,
        annual_rent=zero,
        annual_expenses=zero,
        annual_loan_repayment=zero,
        annual_cash_flow=zero,
        cumulative_cash_flow=zero,
        cumulative_rent=zero,
        cumulative_expenses=zero,
        cumulative_loan_repayments=zero,
        net_worth=Decimal(net_worth),
    )


class TestProjection:
    def test_thirty_one_entries(self, canonical_projection_params):
        projection = calculate_30_year_projection(canonical_projection_params)
        assert len(projection) == PROJECTION_YEARS + 1
        assert [p.year for p in projection] == list(range(31))

    def test_year_zero_baseline(self, canonical_projection_params):
        year_0 = calculate_30_year_projection(canonical_projection_params)[0]
        assert year_0.property_value == Decimal("750000")
        assert year_0.remaining_loan_balance == Decimal("600000")
        assert year_0.equity == Decimal("150000")
        assert year_0.equity_percentage == Decimal("20.0")
        assert year_0.annual_rent == Decimal("33800")
        assert year_0.annual_expenses == Decimal("10000")
        assert year_0.cumulative_cash_flow == Decimal("0")
        assert year_0.cumulative_rent == Decimal("0")
        assert year_0.cumulative_loan_repayments == Decimal("0")
        assert year_0.net_worth == year_0.equity

    def test_growth_as_of_year(self, canonical_projection_params):
        year_1 = calculate_30_year_projection(canonical_projection_params)[1]
        assert year_1.property_value == Decimal("787500")
        assert year_1.annual_rent == Decimal("34814")
        assert year_1.annual_expenses == Decimal("10250")

    def test_fixed_expense_inflation(self, canonical_projection_params):
        year_10 = calculate_30_year_projection(canonical_projection_params)[10]
        # 10000 * 1.025^10 = 12800.85
        assert year_10.annual_expenses == Decimal("12801")

    def test_balance_follows_amortization(self, canonical_projection_params):
        projection = calculate_30_year_projection(canonical_projection_params)
        schedule = generate_amortization_schedule(Decimal("600000"), Decimal("6"), 30)
        for year in (1, 10, 29):
            expected = schedule[year].remaining_balance.quantize(Decimal("1"), ROUND_HALF_UP)
            assert abs(projection[year].remaining_loan_balance - expected) <= 1

    def test_loan_cleared_at_term(self, canonical_projection_params):
        year_30 = calculate_30_year_projection(canonical_projection_params)[30]
        assert year_30.remaining_loan_balance == Decimal("0")
        assert year_30.annual_loan_repayment == Decimal("0")
        assert year_30.equity == year_30.property_value

    def test_short_loan_repayments_stop(self, canonical_projection_params):
        params = replace(canonical_projection_params, loan_term_years=10)
        projection = calculate_30_year_projection(params)
        expected = params.annual_repayment.quantize(Decimal("1"), ROUND_HALF_UP)
        assert projection[9].annual_loan_repayment == expected
        for entry in projection[10:]:
            assert entry.remaining_loan_balance == Decimal("0")
            assert entry.annual_loan_repayment == Decimal("0")

    def test_cumulative_rent_counts_from_year_one(self, canonical_projection_params):
        projection = calculate_30_year_projection(canonical_projection_params)
        assert projection[1].cumulative_rent == projection[1].annual_rent
        for prev, curr in zip(projection, projection[1:]):
            assert curr.cumulative_rent > prev.cumulative_rent

    def test_net_worth_is_equity_plus_cumulative_cash_flow(self, canonical_projection_params):
        for entry in calculate_30_year_projection(canonical_projection_params):
            assert abs(entry.net_worth - (entry.equity + entry.cumulative_cash_flow)) <= 1

    def test_zero_growth_holds_value(self, canonical_projection_params):
        params = replace(
            canonical_projection_params,
            capital_growth_rate=Decimal("0"),
            rental_growth_rate=Decimal("0"),
        )
        projection = calculate_30_year_projection(params)
        assert projection[30].property_value == Decimal("750000")
        assert projection[30].annual_rent == Decimal("33800")

    @pytest.mark.parametrize("field", ["capital_growth_rate", "rental_growth_rate"])
    def test_growth_of_minus_100_rejected(self, canonical_projection_params, field):
        params = replace(canonical_projection_params, **{field: Decimal("-100")})
        with pytest.raises(InvalidInput):
            calculate_30_year_projection(params)


class TestInvestmentMetrics:
    def test_empty_projection(self):
        with pytest.raises(InvalidInput):
            calculate_investment_metrics([], Decimal("100000"))

    def test_from_projection(self, canonical_projection_params):
        projection = calculate_30_year_projection(canonical_projection_params)
        metrics = calculate_investment_metrics(projection, Decimal("178953"))
        final = projection[-1]
        assert metrics.final_net_worth == final.net_worth
        assert metrics.total_return == final.net_worth - Decimal("178953")
        assert metrics.year_10.year == 10
        assert metrics.year_20.year == 20
        assert metrics.year_30.year == 30
        assert metrics.year_30.net_worth == final.net_worth
        assert metrics.total_rent_received == final.cumulative_rent
        assert metrics.total_expenses_paid == final.cumulative_expenses
        assert metrics.total_loan_repayments == final.cumulative_loan_repayments
        assert metrics.average_annual_return is not None

    def test_roi_and_cagr(self):
        projection = [_entry(y, "100000") for y in range(5)] + [_entry(5, "200000")]
        metrics = calculate_investment_metrics(projection, Decimal("100000"))
        assert metrics.return_on_investment == Decimal("100.0")
        # 2^(1/5) - 1
        assert metrics.average_annual_return == Decimal("14.9")

    def test_short_projection_clamps_milestones(self):
        projection = [_entry(y, "100000") for y in range(6)]
        metrics = calculate_investment_metrics(projection, Decimal("100000"))
        assert metrics.year_10.year == 5
        assert metrics.year_20.year == 5
        assert metrics.year_30.year == 5

    def test_negative_net_worth_has_no_cagr(self):
        projection = [_entry(0, "100000"), _entry(1, "-50000")]
        metrics = calculate_investment_metrics(projection, Decimal("100000"))
        assert metrics.return_on_investment == Decimal("-150.0")
        assert metrics.average_annual_return is None

    def test_zero_initial_investment(self):
        projection = [_entry(0, "0"), _entry(1, "50000")]
        metrics = calculate_investment_metrics(projection, Decimal("0"))
        assert metrics.total_return == Decimal("50000")
        assert metrics.return_on_investment is None
        assert metrics.average_annual_return is None
