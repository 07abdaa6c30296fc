"""Pydantic schemas for API request/response models."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from propcalc.config import settings
from propcalc.models.inputs import ExpenseCategory, ExpenseItem, Frequency, PropertyInput
from propcalc.models.stamp_duty import ConcessionKind


# ---- Request schemas ----

class ExpenseItemRequest(BaseModel):
    amount: Decimal = Decimal("0")
    frequency: Frequency = Frequency.YEARLY


class CalculateRequest(BaseModel):
    """Raw calculation input. Range checks happen in the engine so that every
    rejection carries the engine's message."""

    # Property
    purchase_price: Decimal
    state: str = Field(..., description="NSW, VIC, QLD, SA, WA, TAS, NT or ACT")
    is_first_home: bool = False
    additional_upfront_costs: Decimal = Decimal("0")
    lmi: Decimal = Field(Decimal("0"), description="Lenders Mortgage Insurance paid upfront")

    # Loan
    deposit: Decimal
    interest_rate: Decimal = Field(..., description="Annual rate in percent, e.g. 6.2")
    loan_term: int = settings.default_loan_term_years

    # Rental
    weekly_rent: Decimal
    weeks_rented: int = settings.default_weeks_rented

    # Expenses
    property_management_fee: Decimal = Field(Decimal("0"), description="Percent of rent")
    expenses: dict[ExpenseCategory, ExpenseItemRequest] = Field(default_factory=dict)

    # Growth
    capital_growth_rate: Decimal = settings.default_capital_growth_rate
    rental_growth_rate: Decimal = settings.default_rental_growth_rate

    include_stress_tests: bool = True

    def to_property_input(self) -> PropertyInput:
        return PropertyInput(
            purchase_price=self.purchase_price,
            jurisdiction=self.state,
            deposit_amount=self.deposit,
            is_first_time_buyer=self.is_first_home,
            additional_upfront_costs=self.additional_upfront_costs,
            lmi=self.lmi,
            annual_interest_rate=self.interest_rate,
            loan_term_years=self.loan_term,
            weekly_rent=self.weekly_rent,
            weeks_rented_per_year=self.weeks_rented,
            expenses={
                category: ExpenseItem(amount=item.amount, frequency=item.frequency)
                for category, item in self.expenses.items()
            },
            property_management_fee_pct=self.property_management_fee,
            capital_growth_rate=self.capital_growth_rate,
            rental_growth_rate=self.rental_growth_rate,
            include_stress_tests=self.include_stress_tests,
        )


class StampDutyRequest(BaseModel):
    property_value: Decimal
    state: str
    is_first_home: bool = False


class LoanRepaymentsRequest(BaseModel):
    loan_amount: Decimal
    interest_rate: Decimal
    loan_term: int = settings.default_loan_term_years
    include_schedule: bool = False
    schedule_interval: int = 1


# ---- Response schemas ----
# Built from engine dataclasses via from_attributes.

class EngineModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class LoanDetailsResponse(EngineModel):
    loan_amount: Decimal
    annual_interest_rate: Decimal
    loan_term_years: int
    monthly_repayment: Decimal
    annual_repayment: Decimal
    total_repayment: Decimal
    total_interest: Decimal
    number_of_payments: int


class AmortizationEntryResponse(EngineModel):
    year: int
    remaining_balance: Decimal
    cumulative_principal_paid: Decimal
    cumulative_interest_paid: Decimal
    equity_built: Decimal


class LoanRepaymentsResponse(BaseModel):
    loan: LoanDetailsResponse
    schedule: list[AmortizationEntryResponse] = []


class LVRResponse(EngineModel):
    lvr: Decimal
    requires_lmi: bool
    deposit: Decimal
    deposit_percentage: Decimal


class StampDutyResponse(EngineModel):
    jurisdiction: str
    property_value: Decimal
    is_first_time_buyer: bool
    total: Decimal
    concession_applied: bool
    concession_kind: ConcessionKind | None = None
    amount_saved: Decimal


class PeriodAmountsResponse(EngineModel):
    annual: Decimal
    monthly: Decimal
    weekly: Decimal


class CostBreakdownResponse(EngineModel):
    loan_repayment: Decimal
    expenses: Decimal
    total: Decimal
    breakdown: dict[str, Decimal]


class CashFlowResponse(EngineModel):
    income: PeriodAmountsResponse
    costs: CostBreakdownResponse
    cash_flow: PeriodAmountsResponse
    is_positive: bool


class RentalYieldResponse(EngineModel):
    gross_yield: Decimal
    annual_rent: Decimal
    property_value: Decimal


class NetRentalYieldResponse(EngineModel):
    net_yield: Decimal
    net_income: Decimal
    total_expenses: Decimal
    property_value: Decimal


class YieldsResponse(BaseModel):
    gross: RentalYieldResponse
    net: NetRentalYieldResponse


class MilestoneResponse(EngineModel):
    year: int
    net_worth: Decimal
    equity: Decimal
    property_value: Decimal
    cumulative_cash_flow: Decimal


class InvestmentMetricsResponse(EngineModel):
    initial_investment: Decimal
    final_net_worth: Decimal
    total_return: Decimal
    return_on_investment: Decimal | None = None
    average_annual_return: Decimal | None = None
    year_10: MilestoneResponse
    year_20: MilestoneResponse
    year_30: MilestoneResponse
    total_rent_received: Decimal
    total_expenses_paid: Decimal
    total_loan_repayments: Decimal


class ProjectionEntryResponse(EngineModel):
    year: int
    property_value: Decimal
    equity: Decimal
    equity_percentage: Decimal
    remaining_loan_balance: Decimal
    annual_rent: Decimal
    annual_expenses: Decimal
    annual_loan_repayment: Decimal
    annual_cash_flow: Decimal
    cumulative_cash_flow: Decimal
    cumulative_rent: Decimal
    cumulative_expenses: Decimal
    cumulative_loan_repayments: Decimal
    net_worth: Decimal


class YearByYearEntryResponse(EngineModel):
    year: int
    property_value: Decimal
    loan_balance: Decimal
    equity: Decimal
    equity_percentage: Decimal
    monthly_rent: Decimal
    annual_rent: Decimal
    principal_paid: Decimal
    interest_paid: Decimal
    monthly_cash_flow: Decimal
    annual_cash_flow: Decimal
    is_self_sufficient: bool


class YearByYearSummaryResponse(EngineModel):
    total_years: int
    final_property_value: Decimal
    final_equity: Decimal
    final_monthly_rent: Decimal
    self_sufficient_year: int | None = None


class YearByYearResponse(EngineModel):
    yearly_data: list[YearByYearEntryResponse]
    self_sufficient_year: int | None = None
    summary: YearByYearSummaryResponse


class StressTestResponse(EngineModel):
    rate_increase: Decimal
    new_rate: Decimal
    monthly_repayment: Decimal
    annual_repayment: Decimal
    annual_cash_flow: Decimal
    is_positive: bool


class SummaryResponse(EngineModel):
    purchase_price: Decimal
    deposit_amount: Decimal
    loan_amount: Decimal
    total_upfront_costs: Decimal
    stamp_duty: Decimal
    lmi: Decimal
    additional_costs: Decimal


class CalculationResponse(BaseModel):
    generated_at: datetime
    summary: SummaryResponse
    stamp_duty: StampDutyResponse
    loan_details: LoanDetailsResponse
    lvr: LVRResponse
    cash_flow: CashFlowResponse
    yields: YieldsResponse
    investment_metrics: InvestmentMetricsResponse
    projection: list[ProjectionEntryResponse]
    year_by_year: YearByYearResponse
    stress_tests: list[StressTestResponse] = []
    inputs: CalculateRequest


class JurisdictionResponse(BaseModel):
    code: str
    flat_rate: bool
    full_exemption: Decimal | None = None
    partial_exemption: Decimal | None = None
