"""Year-by-year self-sufficiency simulation over the loan term.

Runs its own monthly amortization and applies growth at year END: a year's
income figures use the rent at the start of that year, while the reported
property value is the end-of-year (grown) value. This intentionally differs
from the 30-year projection, which applies growth as of each year.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from propcalc.engine.loan import annuity_payment, monthly_rate, validate_loan_terms
from propcalc.engine.projection import validate_growth_rates
from propcalc.models.results import YearByYearEntry, YearByYearResult, YearByYearSummary

WHOLE = Decimal("1")
TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class YearByYearParams:
    purchase_price: Decimal
    loan_amount: Decimal
    annual_interest_rate: Decimal  # Percent
    loan_term_years: int
    initial_monthly_rent: Decimal
    monthly_expenses: Decimal
    capital_growth_rate: Decimal = Decimal("5")  # Percent
    rental_growth_rate: Decimal = Decimal("3")  # Percent


def _whole(value: Decimal) -> Decimal:
    return value.quantize(WHOLE, ROUND_HALF_UP)


def calculate_year_by_year(params: YearByYearParams) -> YearByYearResult:
    """Simulate each year of the loan and find the first self-sufficient year.

    A year is self-sufficient when rent covers expenses and loan repayments
    (annual cash flow >= 0). self_sufficient_year is None if that never
    happens within the term.
    """
    validate_loan_terms(params.loan_amount, params.annual_interest_rate, params.loan_term_years)
    validate_growth_rates(params.capital_growth_rate, params.rental_growth_rate)

    r = monthly_rate(params.annual_interest_rate)
    pmt = annuity_payment(params.loan_amount, params.annual_interest_rate, params.loan_term_years)
    capital_growth = 1 + params.capital_growth_rate / 100
    rental_growth = 1 + params.rental_growth_rate / 100

    balance = params.loan_amount
    property_value = params.purchase_price
    monthly_rent = params.initial_monthly_rent
    annual_expenses = params.monthly_expenses * 12
    annual_loan_payment = pmt * 12
    self_sufficient_year: int | None = None

    yearly: list[YearByYearEntry] = []
    for year in range(1, params.loan_term_years + 1):
        start_rent = monthly_rent
        principal_paid = Decimal("0")
        interest_paid = Decimal("0")

        for _ in range(12):
            if balance <= 0:
                break
            interest = balance * r
            principal = pmt - interest
            interest_paid += interest
            principal_paid += principal
            balance -= principal
            if balance < 0:
                balance = Decimal("0")

        # Growth lands at year end
        property_value *= capital_growth
        monthly_rent *= rental_growth

        equity = property_value - balance
        equity_pct = equity / property_value * 100 if property_value else Decimal("0")

        annual_rent = start_rent * 12
        annual_cash_flow = annual_rent - annual_expenses - annual_loan_payment
        is_self_sufficient = annual_cash_flow >= 0
        if self_sufficient_year is None and is_self_sufficient:
            self_sufficient_year = year

        yearly.append(YearByYearEntry(
            year=year,
            property_value=_whole(property_value),
            loan_balance=_whole(balance),
            equity=_whole(equity),
            equity_percentage=equity_pct.quantize(TWO_PLACES, ROUND_HALF_UP),
            monthly_rent=_whole(start_rent),
            annual_rent=_whole(annual_rent),
            principal_paid=_whole(principal_paid),
            interest_paid=_whole(interest_paid),
            monthly_cash_flow=_whole(annual_cash_flow / 12),
            annual_cash_flow=_whole(annual_cash_flow),
            is_self_sufficient=is_self_sufficient,
        ))

    summary = YearByYearSummary(
        total_years=params.loan_term_years,
        final_property_value=_whole(property_value),
        final_equity=_whole(property_value - balance),
        final_monthly_rent=_whole(monthly_rent),
        self_sufficient_year=self_sufficient_year,
    )
    return YearByYearResult(
        yearly_data=yearly,
        self_sufficient_year=self_sufficient_year,
        summary=summary,
    )
