"""Interest rate stress tests: repayment and cash flow at higher rates.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from collections.abc import Mapping, Sequence
from decimal import Decimal

from propcalc.engine.cashflow import calculate_cash_flow
from propcalc.engine.loan import calculate_loan_repayments
from propcalc.models.results import StressTestResult

# Percentage points added to the current rate
STRESS_TEST_INCREMENTS: tuple[Decimal, ...] = (
    Decimal("0.25"),
    Decimal("0.50"),
    Decimal("1.00"),
)
MAX_RATE = Decimal("100")


def calculate_stress_tests(
    loan_amount: Decimal,
    annual_rate: Decimal,
    term_years: int,
    annual_income: Decimal,
    annual_expenses: Mapping[str, Decimal],
    increments: Sequence[Decimal] = STRESS_TEST_INCREMENTS,
) -> list[StressTestResult]:
    """Re-run the repayment and cash flow at each rate increase."""
    results: list[StressTestResult] = []
    for increase in increments:
        new_rate = min(annual_rate + increase, MAX_RATE)
        loan = calculate_loan_repayments(loan_amount, new_rate, term_years)
        cash_flow = calculate_cash_flow(annual_income, loan.annual_repayment, annual_expenses)
        results.append(StressTestResult(
            rate_increase=increase,
            new_rate=new_rate,
            monthly_repayment=loan.monthly_repayment,
            annual_repayment=loan.annual_repayment,
            annual_cash_flow=cash_flow.cash_flow.annual,
            is_positive=cash_flow.is_positive,
        ))
    return results
