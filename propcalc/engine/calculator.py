"""Calculation orchestrator: validates a PropertyInput and composes every
engine sub-module into one CalculationResult.

Pure computation. No I/O. Dataclasses in, CalculationResult out.
Any failure rejects the whole calculation; there is no partial result.
"""

from collections.abc import Mapping
from dataclasses import fields
from decimal import Decimal, ROUND_HALF_UP

from propcalc.data.duty_rates import DUTY_RULES
from propcalc.engine.cashflow import (
    annualize_expenses,
    calculate_cash_flow,
    calculate_net_rental_yield,
    calculate_rental_yield,
)
from propcalc.engine.errors import InvalidInput
from propcalc.engine.loan import MAX_TERM_YEARS, calculate_loan_repayments, calculate_lvr
from propcalc.engine.projection import (
    ProjectionParams,
    calculate_30_year_projection,
    calculate_investment_metrics,
    validate_growth_rates,
)
from propcalc.engine.stamp_duty import calculate_stamp_duty, resolve_rules
from propcalc.engine.stress import calculate_stress_tests
from propcalc.engine.year_by_year import YearByYearParams, calculate_year_by_year
from propcalc.models.inputs import PROPERTY_MANAGEMENT, PropertyInput
from propcalc.models.results import CalculationResult, CalculationSummary
from propcalc.models.stamp_duty import DutyRules

TWO_PLACES = Decimal("0.01")


def validate_property_input(
    inputs: PropertyInput, rules: Mapping[str, DutyRules] = DUTY_RULES
) -> None:
    """Single validation pass over required fields, before any module runs.

    Raises InvalidInput (or UnknownJurisdiction) for the first problem found.
    """
    for f in fields(inputs):
        value = getattr(inputs, f.name)
        if isinstance(value, Decimal) and not value.is_finite():
            raise InvalidInput(f"{f.name} must be a finite number")

    if inputs.purchase_price is None or inputs.purchase_price <= 0:
        raise InvalidInput("Purchase price must be greater than 0")
    if not inputs.jurisdiction:
        raise InvalidInput("Jurisdiction is required")
    resolve_rules(inputs.jurisdiction, rules)

    if inputs.deposit_amount is None or inputs.deposit_amount < 0:
        raise InvalidInput("Deposit is required and must not be negative")
    if inputs.deposit_amount >= inputs.purchase_price:
        raise InvalidInput("Deposit must be less than purchase price")

    rate = inputs.annual_interest_rate
    if rate is None or rate < 0 or rate > 100:
        raise InvalidInput("Interest rate must be between 0 and 100")
    term = inputs.loan_term_years
    if term is None or term < 1 or term > MAX_TERM_YEARS:
        raise InvalidInput(f"Loan term must be between 1 and {MAX_TERM_YEARS} years")

    if inputs.weekly_rent is None or inputs.weekly_rent < 0:
        raise InvalidInput("Weekly rent is required and must not be negative")
    if not 0 <= inputs.weeks_rented_per_year <= 52:
        raise InvalidInput("Weeks rented per year must be between 0 and 52")

    if not 0 <= inputs.property_management_fee_pct <= 100:
        raise InvalidInput("Property management fee must be between 0 and 100 percent")
    if inputs.additional_upfront_costs < 0 or inputs.lmi < 0:
        raise InvalidInput("Upfront costs must not be negative")
    for category, item in inputs.expenses.items():
        if not item.amount.is_finite() or item.amount < 0:
            raise InvalidInput(f"Expense {category.value} must not be negative")

    validate_growth_rates(inputs.capital_growth_rate, inputs.rental_growth_rate)


def annual_expense_breakdown(inputs: PropertyInput) -> dict[str, Decimal]:
    """Management fee (percent of rent) followed by each itemised expense, annualised."""
    management = inputs.annual_rent * inputs.property_management_fee_pct / 100
    return {
        PROPERTY_MANAGEMENT: management.quantize(TWO_PLACES, ROUND_HALF_UP),
        **annualize_expenses(inputs.expenses),
    }


def calculate_property_investment(
    inputs: PropertyInput,
    rules: Mapping[str, DutyRules] = DUTY_RULES,
) -> CalculationResult:
    """Run the complete property investment analysis."""
    validate_property_input(inputs, rules)

    # Upfront
    stamp_duty = calculate_stamp_duty(
        inputs.purchase_price,
        inputs.jurisdiction,
        inputs.is_first_time_buyer,
        rules=rules,
    )
    loan_amount = inputs.loan_amount
    loan = calculate_loan_repayments(
        loan_amount, inputs.annual_interest_rate, inputs.loan_term_years
    )
    lvr = calculate_lvr(loan_amount, inputs.purchase_price)
    total_upfront = (
        inputs.deposit_amount
        + stamp_duty.total
        + inputs.lmi
        + inputs.additional_upfront_costs
    )

    # Recurring
    annual_rent = inputs.annual_rent
    annual_expenses = annual_expense_breakdown(inputs)
    total_annual_expenses = sum(annual_expenses.values(), Decimal("0"))

    cash_flow = calculate_cash_flow(annual_rent, loan.annual_repayment, annual_expenses)
    gross_yield = calculate_rental_yield(annual_rent, inputs.purchase_price)
    net_yield = calculate_net_rental_yield(annual_rent, inputs.purchase_price, annual_expenses)

    # Long range
    projection = calculate_30_year_projection(ProjectionParams(
        purchase_price=inputs.purchase_price,
        annual_rent=annual_rent,
        loan_amount=loan_amount,
        annual_interest_rate=inputs.annual_interest_rate,
        loan_term_years=inputs.loan_term_years,
        annual_repayment=loan.annual_repayment,
        annual_expenses=annual_expenses,
        capital_growth_rate=inputs.capital_growth_rate,
        rental_growth_rate=inputs.rental_growth_rate,
    ))
    metrics = calculate_investment_metrics(projection, total_upfront)

    year_by_year = calculate_year_by_year(YearByYearParams(
        purchase_price=inputs.purchase_price,
        loan_amount=loan_amount,
        annual_interest_rate=inputs.annual_interest_rate,
        loan_term_years=inputs.loan_term_years,
        initial_monthly_rent=annual_rent / 12,
        monthly_expenses=total_annual_expenses / 12,
        capital_growth_rate=inputs.capital_growth_rate,
        rental_growth_rate=inputs.rental_growth_rate,
    ))

    stress_tests = []
    if inputs.include_stress_tests:
        stress_tests = calculate_stress_tests(
            loan_amount,
            inputs.annual_interest_rate,
            inputs.loan_term_years,
            annual_rent,
            annual_expenses,
        )

    summary = CalculationSummary(
        purchase_price=inputs.purchase_price,
        deposit_amount=inputs.deposit_amount,
        loan_amount=loan_amount,
        total_upfront_costs=total_upfront,
        stamp_duty=stamp_duty.total,
        lmi=inputs.lmi,
        additional_costs=inputs.additional_upfront_costs,
    )

    return CalculationResult(
        summary=summary,
        stamp_duty=stamp_duty,
        loan_details=loan,
        lvr=lvr,
        cash_flow=cash_flow,
        gross_yield=gross_yield,
        net_yield=net_yield,
        investment_metrics=metrics,
        projection=projection,
        year_by_year=year_by_year,
        inputs=inputs,
        stress_tests=stress_tests,
    )
