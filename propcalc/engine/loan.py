"""Loan repayment, amortization schedule and LVR computation.

Pure functions: Decimal in, dataclass out. No I/O.
Rates are annual percentages (e.g. Decimal("6") for 6%).
"""

from decimal import Decimal, ROUND_HALF_UP

from propcalc.engine.errors import InvalidInput
from propcalc.models.results import (
    AmortizationScheduleEntry,
    LoanRepaymentResult,
    LVRResult,
)

TWO_PLACES = Decimal("0.01")
MAX_TERM_YEARS = 50
LMI_LVR_THRESHOLD = Decimal("80")


def validate_loan_terms(principal: Decimal, annual_rate: Decimal, term_years: int) -> None:
    if principal <= 0:
        raise InvalidInput("Loan amount must be greater than 0")
    if annual_rate < 0 or annual_rate > 100:
        raise InvalidInput("Interest rate must be between 0 and 100")
    if term_years < 1 or term_years > MAX_TERM_YEARS:
        raise InvalidInput(f"Loan term must be between 1 and {MAX_TERM_YEARS} years")


def monthly_rate(annual_rate: Decimal) -> Decimal:
    return annual_rate / 100 / 12


def annuity_payment(principal: Decimal, annual_rate: Decimal, term_years: int) -> Decimal:
    """Unrounded fixed monthly payment.

    A zero rate, or one too small to move (1 + r)^n at the context precision,
    falls back to straight division so the annuity formula never divides by zero.
    """
    r = monthly_rate(annual_rate)
    n = term_years * 12
    if r == 0:
        return principal / n

    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    if factor == 1:
        return principal / n
    return principal * (r * factor) / (factor - 1)


def calculate_loan_repayments(
    principal: Decimal, annual_rate: Decimal, term_years: int
) -> LoanRepaymentResult:
    """Monthly, annual and lifetime repayment figures for a fixed-rate loan."""
    validate_loan_terms(principal, annual_rate, term_years)

    n = term_years * 12
    pmt = annuity_payment(principal, annual_rate, term_years)
    total = pmt * n

    return LoanRepaymentResult(
        loan_amount=principal.quantize(TWO_PLACES, ROUND_HALF_UP),
        annual_interest_rate=annual_rate,
        loan_term_years=term_years,
        monthly_repayment=pmt.quantize(TWO_PLACES, ROUND_HALF_UP),
        annual_repayment=(pmt * 12).quantize(TWO_PLACES, ROUND_HALF_UP),
        total_repayment=total.quantize(TWO_PLACES, ROUND_HALF_UP),
        total_interest=(total - principal).quantize(TWO_PLACES, ROUND_HALF_UP),
        number_of_payments=n,
    )


def generate_amortization_schedule(
    principal: Decimal,
    annual_rate: Decimal,
    term_years: int,
    interval: int = 1,
) -> list[AmortizationScheduleEntry]:
    """Yearly snapshots of a month-by-month amortization.

    Emits year 0, every `interval`-th year and always the final year.
    The balance is clamped at zero to absorb rounding drift.
    """
    validate_loan_terms(principal, annual_rate, term_years)
    if interval < 1:
        raise InvalidInput("Schedule interval must be at least 1 year")

    r = monthly_rate(annual_rate)
    pmt = annuity_payment(principal, annual_rate, term_years)

    schedule: list[AmortizationScheduleEntry] = []
    balance = principal
    principal_paid = Decimal("0")
    interest_paid = Decimal("0")

    for year in range(term_years + 1):
        if year % interval == 0 or year == term_years:
            schedule.append(AmortizationScheduleEntry(
                year=year,
                remaining_balance=balance.quantize(TWO_PLACES, ROUND_HALF_UP),
                cumulative_principal_paid=principal_paid.quantize(TWO_PLACES, ROUND_HALF_UP),
                cumulative_interest_paid=interest_paid.quantize(TWO_PLACES, ROUND_HALF_UP),
                equity_built=(principal - balance).quantize(TWO_PLACES, ROUND_HALF_UP),
            ))
        if year == term_years:
            break

        for _ in range(12):
            if balance <= 0:
                break
            interest = balance * r
            principal_portion = pmt - interest

            balance -= principal_portion
            principal_paid += principal_portion
            interest_paid += interest

            if balance < 0:
                balance = Decimal("0")

    return schedule


def calculate_lvr(loan_amount: Decimal, property_value: Decimal) -> LVRResult:
    """Loan-to-value ratio. Above 80% conventionally triggers LMI."""
    if property_value <= 0:
        raise InvalidInput("Property value must be greater than 0")

    lvr = loan_amount / property_value * 100
    deposit = property_value - loan_amount
    return LVRResult(
        lvr=lvr.quantize(TWO_PLACES, ROUND_HALF_UP),
        requires_lmi=lvr > LMI_LVR_THRESHOLD,
        deposit=deposit.quantize(TWO_PLACES, ROUND_HALF_UP),
        deposit_percentage=(deposit / property_value * 100).quantize(
            TWO_PLACES, ROUND_HALF_UP
        ),
    )
