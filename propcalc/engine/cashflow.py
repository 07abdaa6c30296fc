"""Cash flow and rental yield.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from collections.abc import Mapping
from decimal import Decimal, ROUND_HALF_UP

from propcalc.engine.errors import InvalidInput
from propcalc.models.inputs import ExpenseCategory, ExpenseItem, Frequency
from propcalc.models.results import (
    CashFlowResult,
    CostBreakdown,
    NetRentalYieldResult,
    PeriodAmounts,
    RentalYieldResult,
)

TWO_PLACES = Decimal("0.01")


def _cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def to_monthly(amount: Decimal, frequency: Frequency) -> Decimal:
    """Normalise a periodic amount to a monthly figure."""
    return amount * frequency.monthly_multiplier


def annualize_expenses(
    expenses: Mapping[ExpenseCategory, ExpenseItem],
) -> dict[str, Decimal]:
    """Convert itemised expenses to annual amounts via the monthly base.

    Every category is present in the result (zero when not supplied).
    """
    annual: dict[str, Decimal] = {}
    for category in ExpenseCategory:
        item = expenses.get(category)
        if item is None:
            annual[category.value] = Decimal("0.00")
            continue
        annual[category.value] = _cents(to_monthly(item.amount, item.frequency) * 12)
    return annual


def calculate_cash_flow(
    annual_income: Decimal,
    annual_loan_repayment: Decimal,
    annual_expenses: Mapping[str, Decimal],
) -> CashFlowResult:
    """Net cash flow = rent - (loan repayments + expenses).

    The annual net is derived from the rounded income and cost totals so that
    income.annual - costs.total == cash_flow.annual holds exactly.
    """
    total_expenses = sum(annual_expenses.values(), Decimal("0"))
    total_costs = annual_loan_repayment + total_expenses

    income_annual = _cents(annual_income)
    costs_total = _cents(total_costs)
    net_annual = income_annual - costs_total

    return CashFlowResult(
        income=PeriodAmounts(
            annual=income_annual,
            monthly=_cents(annual_income / 12),
            weekly=_cents(annual_income / 52),
        ),
        costs=CostBreakdown(
            loan_repayment=_cents(annual_loan_repayment),
            expenses=_cents(total_expenses),
            total=costs_total,
            breakdown={name: _cents(amount) for name, amount in annual_expenses.items()},
        ),
        cash_flow=PeriodAmounts(
            annual=net_annual,
            monthly=_cents(net_annual / 12),
            weekly=_cents(net_annual / 52),
        ),
        is_positive=net_annual >= 0,
    )


def calculate_rental_yield(
    annual_income: Decimal, property_value: Decimal
) -> RentalYieldResult:
    """Gross yield = annual rent / property value."""
    if property_value <= 0:
        raise InvalidInput("Property value must be greater than 0")

    return RentalYieldResult(
        gross_yield=_cents(annual_income / property_value * 100),
        annual_rent=_cents(annual_income),
        property_value=_cents(property_value),
    )


def calculate_net_rental_yield(
    annual_income: Decimal,
    property_value: Decimal,
    annual_expenses: Mapping[str, Decimal],
) -> NetRentalYieldResult:
    """Net yield = (annual rent - expenses) / property value, before loan costs."""
    if property_value <= 0:
        raise InvalidInput("Property value must be greater than 0")

    total_expenses = sum(annual_expenses.values(), Decimal("0"))
    net_income = annual_income - total_expenses

    return NetRentalYieldResult(
        net_yield=_cents(net_income / property_value * 100),
        net_income=_cents(net_income),
        total_expenses=_cents(total_expenses),
        property_value=_cents(property_value),
    )
