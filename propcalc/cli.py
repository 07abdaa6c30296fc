"""CLI for running a property calculation and printing a terminal report.

Usage:
    python -m propcalc.cli --price 750000 --deposit 150000 --state NSW --rate 6.2 --weekly-rent 650
    python -m propcalc.cli --price 600000 --deposit 120000 --state VIC --rate 6 --weekly-rent 550 \
        --expense council_rates=2000 --expense strata=900:quarterly --management-fee 8 --first-home
"""

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation

from propcalc.config import settings
from propcalc.engine.calculator import calculate_property_investment
from propcalc.engine.errors import CalculationError
from propcalc.models.inputs import ExpenseCategory, ExpenseItem, Frequency, PropertyInput
from propcalc.models.results import CalculationResult

logger = logging.getLogger(__name__)


# ── Helpers ──────────────────────────────────────────────────────────────────

def _dollar(v) -> str:
    return f"${float(v):,.0f}"


def _cents(v) -> str:
    return f"${float(v):,.2f}"


def _pct(v) -> str:
    return "n/a" if v is None else f"{float(v):.2f}%"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def finite_decimal(raw: str) -> Decimal:
    """argparse type: a Decimal that is neither NaN nor infinite."""
    try:
        value = Decimal(raw)
    except InvalidOperation as e:
        raise argparse.ArgumentTypeError(f"invalid number {raw!r}") from e
    if not value.is_finite():
        raise argparse.ArgumentTypeError(f"{raw!r} is not a finite number")
    return value


def parse_expense(raw: str) -> tuple[ExpenseCategory, ExpenseItem]:
    """Parse CATEGORY=AMOUNT[:FREQUENCY], e.g. "strata=900:quarterly"."""
    try:
        name, value = raw.split("=", 1)
        amount, _, freq = value.partition(":")
        return ExpenseCategory(name.strip()), ExpenseItem(
            amount=finite_decimal(amount),
            frequency=Frequency(freq.strip()) if freq else Frequency.YEARLY,
        )
    except (ValueError, argparse.ArgumentTypeError) as e:
        raise argparse.ArgumentTypeError(f"invalid expense {raw!r}: {e}") from e


# ── Report sections ──────────────────────────────────────────────────────────

def print_upfront(result: CalculationResult) -> None:
    s = result.summary
    duty = result.stamp_duty
    _header("Upfront Costs")
    print(f"  Purchase Price:     {_dollar(s.purchase_price)}")
    print(f"  Deposit:            {_dollar(s.deposit_amount)} ({_pct(result.lvr.deposit_percentage)})")
    print(f"  Loan Amount:        {_dollar(s.loan_amount)} (LVR {_pct(result.lvr.lvr)})")
    print(f"  Stamp Duty ({duty.jurisdiction}):  {_dollar(duty.total)}")
    if duty.concession_applied:
        print(f"    {duty.concession_kind.value}: saves {_dollar(duty.amount_saved)}")
    if s.lmi:
        print(f"  LMI:                {_dollar(s.lmi)}")
    elif result.lvr.requires_lmi:
        print("  LMI:                likely required (LVR above 80%)")
    print(f"  Other Costs:        {_dollar(s.additional_costs)}")
    print(f"  Total Upfront:      {_dollar(s.total_upfront_costs)}")


def print_cash_flow(result: CalculationResult) -> None:
    loan = result.loan_details
    cf = result.cash_flow
    _header("Loan & Cash Flow")
    print(f"  Repayment:          {_cents(loan.monthly_repayment)}/mo ({_cents(loan.annual_repayment)}/yr)")
    print(f"  Total Interest:     {_dollar(loan.total_interest)} over {loan.loan_term_years} years")
    print(f"  Rental Income:      {_cents(cf.income.annual)}/yr")
    for name, amount in cf.costs.breakdown.items():
        if amount:
            print(f"    {name.replace('_', ' ').title():<24}{_cents(amount)}/yr")
    print(f"  Total Costs:        {_cents(cf.costs.total)}/yr")
    status = "positive" if cf.is_positive else "negative"
    print(f"  Net Cash Flow:      {_cents(cf.cash_flow.annual)}/yr, "
          f"{_cents(cf.cash_flow.weekly)}/wk ({status})")
    print(f"  Gross / Net Yield:  {_pct(result.gross_yield.gross_yield)} / {_pct(result.net_yield.net_yield)}")


def print_stress_tests(result: CalculationResult) -> None:
    if not result.stress_tests:
        return
    _header("Interest Rate Stress Tests")
    for test in result.stress_tests:
        print(f"  +{float(test.rate_increase):.2f}% -> {_pct(test.new_rate):>7}  "
              f"{_cents(test.monthly_repayment)}/mo  cash flow {_cents(test.annual_cash_flow)}/yr")


def print_projection(result: CalculationResult, step: int) -> None:
    m = result.investment_metrics
    _header("30-Year Projection")
    print(f"  {'Year':>4} {'Value':>12} {'Loan':>12} {'Equity':>12} {'Cash Flow':>11} {'Net Worth':>12}")
    for p in result.projection:
        if p.year % step and p.year != len(result.projection) - 1:
            continue
        print(f"  {p.year:>4} {_dollar(p.property_value):>12} {_dollar(p.remaining_loan_balance):>12} "
              f"{_dollar(p.equity):>12} {_dollar(p.annual_cash_flow):>11} {_dollar(p.net_worth):>12}")
    print()
    print(f"  Total Return:       {_dollar(m.total_return)}")
    print(f"  ROI:                {_pct(m.return_on_investment)}")
    print(f"  CAGR:               {_pct(m.average_annual_return)}")


def print_self_sufficiency(result: CalculationResult) -> None:
    yby = result.year_by_year
    _header("Self-Sufficiency")
    if yby.self_sufficient_year is None:
        print(f"  Never cash flow positive within the {yby.summary.total_years}-year term")
    else:
        print(f"  Cash flow positive from year {yby.self_sufficient_year}")
    print(f"  Property value at end of term: {_dollar(yby.summary.final_property_value)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Property investment calculator")
    parser.add_argument("--price", type=finite_decimal, required=True, help="Purchase price")
    parser.add_argument("--deposit", type=finite_decimal, required=True, help="Deposit amount")
    parser.add_argument("--state", required=True, help="NSW, VIC, QLD, SA, WA, TAS, NT or ACT")
    parser.add_argument("--first-home", action="store_true", help="First home buyer")
    parser.add_argument("--rate", type=finite_decimal, required=True, help="Annual interest rate in percent")
    parser.add_argument("--term", type=int, default=settings.default_loan_term_years, help="Loan term in years")
    parser.add_argument("--weekly-rent", type=finite_decimal, required=True, help="Weekly rent")
    parser.add_argument("--weeks-rented", type=int, default=settings.default_weeks_rented)
    parser.add_argument("--management-fee", type=finite_decimal, default=Decimal("0"), help="Percent of rent")
    parser.add_argument(
        "--expense", type=parse_expense, action="append", default=[],
        help="CATEGORY=AMOUNT[:FREQUENCY], repeatable (default frequency: yearly)",
    )
    parser.add_argument("--lmi", type=finite_decimal, default=Decimal("0"), help="LMI premium paid upfront")
    parser.add_argument("--upfront-costs", type=finite_decimal, default=Decimal("0"), help="Other upfront costs")
    parser.add_argument("--capital-growth", type=finite_decimal, default=settings.default_capital_growth_rate)
    parser.add_argument("--rental-growth", type=finite_decimal, default=settings.default_rental_growth_rate)
    parser.add_argument("--no-stress-tests", action="store_true")
    parser.add_argument("--step", type=int, default=5, help="Projection rows every N years")
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level)
    args = build_parser().parse_args(argv)

    inputs = PropertyInput(
        purchase_price=args.price,
        jurisdiction=args.state,
        deposit_amount=args.deposit,
        is_first_time_buyer=args.first_home,
        additional_upfront_costs=args.upfront_costs,
        lmi=args.lmi,
        annual_interest_rate=args.rate,
        loan_term_years=args.term,
        weekly_rent=args.weekly_rent,
        weeks_rented_per_year=args.weeks_rented,
        expenses=dict(args.expense),
        property_management_fee_pct=args.management_fee,
        capital_growth_rate=args.capital_growth,
        rental_growth_rate=args.rental_growth,
        include_stress_tests=not args.no_stress_tests,
    )

    try:
        result = calculate_property_investment(inputs)
    except CalculationError as e:
        logger.debug("Calculation rejected", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_upfront(result)
    print_cash_flow(result)
    print_stress_tests(result)
    print_projection(result, max(args.step, 1))
    print_self_sufficiency(result)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
