"""Canonical test fixtures used across all engine tests.

Fixture: $750K NSW investment property, $150K deposit (80% LVR), 6% rate,
30yr P&I, $650/wk rent, 8% management fee.
"""

from decimal import Decimal

import pytest

from propcalc.engine.loan import calculate_loan_repayments
from propcalc.engine.projection import ProjectionParams
from propcalc.models.inputs import ExpenseCategory, ExpenseItem, Frequency, PropertyInput
from propcalc.models.stamp_duty import DutyBracket, DutyRules, FirstHomeBuyerConcession


@pytest.fixture
def canonical_input() -> PropertyInput:
    """$750K NSW property with typical yearly outgoings."""
    return PropertyInput(
        purchase_price=Decimal("750000"),
        jurisdiction="NSW",
        deposit_amount=Decimal("150000"),
        is_first_time_buyer=False,
        annual_interest_rate=Decimal("6"),
        loan_term_years=30,
        weekly_rent=Decimal("650"),
        weeks_rented_per_year=52,
        expenses={
            ExpenseCategory.COUNCIL_RATES: ExpenseItem(Decimal("2000"), Frequency.YEARLY),
            ExpenseCategory.WATER_RATES: ExpenseItem(Decimal("800"), Frequency.YEARLY),
            ExpenseCategory.INSURANCE: ExpenseItem(Decimal("1200"), Frequency.YEARLY),
            ExpenseCategory.MAINTENANCE: ExpenseItem(Decimal("1500"), Frequency.YEARLY),
            ExpenseCategory.STRATA: ExpenseItem(Decimal("900"), Frequency.QUARTERLY),
        },
        property_management_fee_pct=Decimal("8"),
        capital_growth_rate=Decimal("5"),
        rental_growth_rate=Decimal("3"),
    )


@pytest.fixture
def canonical_projection_params() -> ProjectionParams:
    """Same loan as canonical_input, with a flat $10K of yearly expenses."""
    loan = calculate_loan_repayments(Decimal("600000"), Decimal("6"), 30)
    return ProjectionParams(
        purchase_price=Decimal("750000"),
        annual_rent=Decimal("33800"),
        loan_amount=Decimal("600000"),
        annual_interest_rate=Decimal("6"),
        loan_term_years=30,
        annual_repayment=loan.annual_repayment,
        annual_expenses={"council_rates": Decimal("4000"), "insurance": Decimal("6000")},
        capital_growth_rate=Decimal("5"),
        rental_growth_rate=Decimal("3"),
    )


@pytest.fixture
def two_bracket_rules() -> dict[str, DutyRules]:
    """Substitute duty table: 1% to $100K, then $1,000 + 2% above."""
    return {
        "TEST": DutyRules(
            brackets=(
                DutyBracket(Decimal("0"), Decimal("100000"), Decimal("0"), Decimal("1")),
                DutyBracket(Decimal("100000"), None, Decimal("1000"), Decimal("2")),
            ),
            first_home_buyer=FirstHomeBuyerConcession(
                full_exemption=Decimal("50000"),
                partial_exemption=Decimal("150000"),
            ),
        ),
    }
