"""30-year wealth projection and derived investment metrics.

Growth is discrete annual compounding applied "as of" each year, so year y
uses rent * (1 + g)^y. Compare year_by_year, which applies growth at year end.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP

from propcalc.engine.errors import InvalidInput
from propcalc.engine.loan import generate_amortization_schedule
from propcalc.models.results import InvestmentMetrics, MilestoneSnapshot, ProjectionEntry

WHOLE = Decimal("1")
ONE_PLACE = Decimal("0.1")

PROJECTION_YEARS = 30
# Fixed expense inflation assumption; not caller-configurable
EXPENSE_INFLATION_RATE = Decimal("0.025")


@dataclass(frozen=True)
class ProjectionParams:
    purchase_price: Decimal
    annual_rent: Decimal
    loan_amount: Decimal
    annual_interest_rate: Decimal  # Percent
    loan_term_years: int
    annual_repayment: Decimal
    annual_expenses: Mapping[str, Decimal] = field(default_factory=dict)
    capital_growth_rate: Decimal = Decimal("5")  # Percent
    rental_growth_rate: Decimal = Decimal("3")  # Percent


def _whole(value: Decimal) -> Decimal:
    return value.quantize(WHOLE, ROUND_HALF_UP)


def validate_growth_rates(capital_growth_rate: Decimal, rental_growth_rate: Decimal) -> None:
    """Growth of -100% or less would zero or flip the compounding base."""
    if capital_growth_rate <= -100:
        raise InvalidInput("Capital growth rate must be greater than -100 percent")
    if rental_growth_rate <= -100:
        raise InvalidInput("Rental growth rate must be greater than -100 percent")


def calculate_30_year_projection(params: ProjectionParams) -> list[ProjectionEntry]:
    """Year 0..30 snapshots of value, equity, cash flow and net worth.

    Year 0 is a baseline and is not counted as a cash flow period. From the
    loan term onwards the balance and repayment are zero.
    """
    validate_growth_rates(params.capital_growth_rate, params.rental_growth_rate)
    schedule = generate_amortization_schedule(
        params.loan_amount,
        params.annual_interest_rate,
        params.loan_term_years,
        interval=1,
    )
    balances = {entry.year: entry.remaining_balance for entry in schedule}
    total_expenses = sum(params.annual_expenses.values(), Decimal("0"))

    capital_growth = 1 + params.capital_growth_rate / 100
    rental_growth = 1 + params.rental_growth_rate / 100
    expense_growth = 1 + EXPENSE_INFLATION_RATE

    cumulative_cash_flow = Decimal("0")
    cumulative_rent = Decimal("0")
    cumulative_expenses = Decimal("0")
    cumulative_repayments = Decimal("0")

    projection: list[ProjectionEntry] = []
    for year in range(PROJECTION_YEARS + 1):
        value = params.purchase_price * capital_growth ** year
        rent = params.annual_rent * rental_growth ** year
        expenses = total_expenses * expense_growth ** year

        if year < params.loan_term_years:
            balance = balances[year]
            repayment = params.annual_repayment
        else:
            balance = Decimal("0")
            repayment = Decimal("0")

        equity = value - balance
        cash_flow = rent - repayment - expenses

        if year > 0:
            cumulative_cash_flow += cash_flow
            cumulative_rent += rent
            cumulative_expenses += expenses
            cumulative_repayments += repayment

        equity_pct = equity / value * 100 if value else Decimal("0")

        projection.append(ProjectionEntry(
            year=year,
            property_value=_whole(value),
            equity=_whole(equity),
            equity_percentage=equity_pct.quantize(ONE_PLACE, ROUND_HALF_UP),
            remaining_loan_balance=_whole(balance),
            annual_rent=_whole(rent),
            annual_expenses=_whole(expenses),
            annual_loan_repayment=_whole(repayment),
            annual_cash_flow=_whole(cash_flow),
            cumulative_cash_flow=_whole(cumulative_cash_flow),
            cumulative_rent=_whole(cumulative_rent),
            cumulative_expenses=_whole(cumulative_expenses),
            cumulative_loan_repayments=_whole(cumulative_repayments),
            net_worth=_whole(equity + cumulative_cash_flow),
        ))

    return projection


def _snapshot(projection: list[ProjectionEntry], index: int) -> MilestoneSnapshot:
    entry = projection[index] if index < len(projection) else projection[-1]
    return MilestoneSnapshot(
        year=entry.year,
        net_worth=entry.net_worth,
        equity=entry.equity,
        property_value=entry.property_value,
        cumulative_cash_flow=entry.cumulative_cash_flow,
    )


def calculate_investment_metrics(
    projection: list[ProjectionEntry], initial_investment: Decimal
) -> InvestmentMetrics:
    """Total return, ROI and CAGR from the final projection year.

    ROI is None when initial_investment <= 0. CAGR is additionally None when
    the final net worth is <= 0, since the root of a non-positive ratio is
    undefined.
    """
    if not projection:
        raise InvalidInput("Projection data is required")

    final = projection[-1]
    years = len(projection) - 1
    total_return = final.net_worth - initial_investment

    roi: Decimal | None = None
    cagr: Decimal | None = None
    if initial_investment > 0:
        roi = (total_return / initial_investment * 100).quantize(ONE_PLACE, ROUND_HALF_UP)
        if final.net_worth > 0 and years > 0:
            growth = (final.net_worth / initial_investment) ** (Decimal("1") / years)
            cagr = ((growth - 1) * 100).quantize(ONE_PLACE, ROUND_HALF_UP)

    return InvestmentMetrics(
        initial_investment=_whole(initial_investment),
        final_net_worth=final.net_worth,
        total_return=_whole(total_return),
        return_on_investment=roi,
        average_annual_return=cagr,
        year_10=_snapshot(projection, 10),
        year_20=_snapshot(projection, 20),
        year_30=_snapshot(projection, years),
        total_rent_received=final.cumulative_rent,
        total_expenses_paid=final.cumulative_expenses,
        total_loan_repayments=final.cumulative_loan_repayments,
    )
