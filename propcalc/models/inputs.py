from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class Frequency(Enum):
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    HALF_YEARLY = "half-yearly"
    YEARLY = "yearly"

    @property
    def monthly_multiplier(self) -> Decimal:
        """Factor that converts one payment at this frequency to a monthly amount."""
        return MONTHLY_MULTIPLIERS[self]


MONTHLY_MULTIPLIERS: dict[Frequency, Decimal] = {
    Frequency.WEEKLY: Decimal("52") / Decimal("12"),
    Frequency.FORTNIGHTLY: Decimal("26") / Decimal("12"),
    Frequency.MONTHLY: Decimal("1"),
    Frequency.QUARTERLY: Decimal("4") / Decimal("12"),
    Frequency.HALF_YEARLY: Decimal("2") / Decimal("12"),
    Frequency.YEARLY: Decimal("1") / Decimal("12"),
}


class ExpenseCategory(Enum):
    COUNCIL_RATES = "council_rates"
    WATER_RATES = "water_rates"
    INSURANCE = "insurance"
    MAINTENANCE = "maintenance"
    EMERGENCY_SERVICES_LEVY = "emergency_services_levy"
    LAND_TAX = "land_tax"
    WEALTH_FEE = "wealth_fee"
    STRATA = "strata"


# Breakdown key for the management fee, which is derived from rent
PROPERTY_MANAGEMENT = "property_management"


@dataclass(frozen=True)
class ExpenseItem:
    amount: Decimal
    frequency: Frequency = Frequency.YEARLY


@dataclass(frozen=True)
class PropertyInput:
    # Purchase
    purchase_price: Decimal
    jurisdiction: str  # NSW, VIC, QLD, SA, WA, TAS, NT, ACT
    deposit_amount: Decimal
    is_first_time_buyer: bool = False
    additional_upfront_costs: Decimal = Decimal("0")
    lmi: Decimal = Decimal("0")  # Lenders Mortgage Insurance, paid upfront

    # Financing
    annual_interest_rate: Decimal = Decimal("0")  # Percent, e.g. 6 for 6%
    loan_term_years: int = 30

    # Income
    weekly_rent: Decimal = Decimal("0")
    weeks_rented_per_year: int = 52

    # Expenses
    expenses: dict[ExpenseCategory, ExpenseItem] = field(default_factory=dict)
    property_management_fee_pct: Decimal = Decimal("0")  # % of rent

    # Growth (percent per year)
    capital_growth_rate: Decimal = Decimal("5")
    rental_growth_rate: Decimal = Decimal("3")

    include_stress_tests: bool = True

    @property
    def loan_amount(self) -> Decimal:
        return self.purchase_price - self.deposit_amount

    @property
    def annual_rent(self) -> Decimal:
        return self.weekly_rent * self.weeks_rented_per_year
