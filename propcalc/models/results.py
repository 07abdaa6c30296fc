from dataclasses import dataclass, field
from decimal import Decimal

from propcalc.models.inputs import PropertyInput
from propcalc.models.stamp_duty import ConcessionKind


# ---- Loan ----

@dataclass(frozen=True)
class LoanRepaymentResult:
    loan_amount: Decimal
    annual_interest_rate: Decimal
    loan_term_years: int
    monthly_repayment: Decimal
    annual_repayment: Decimal
    total_repayment: Decimal
    total_interest: Decimal
    number_of_payments: int


@dataclass(frozen=True)
class AmortizationScheduleEntry:
    year: int
    remaining_balance: Decimal
    cumulative_principal_paid: Decimal
    cumulative_interest_paid: Decimal
    equity_built: Decimal  # Principal repaid so far


@dataclass(frozen=True)
class LVRResult:
    lvr: Decimal  # Percent
    requires_lmi: bool
    deposit: Decimal
    deposit_percentage: Decimal


@dataclass(frozen=True)
class StressTestResult:
    rate_increase: Decimal
    new_rate: Decimal
    monthly_repayment: Decimal
    annual_repayment: Decimal
    annual_cash_flow: Decimal
    is_positive: bool


# ---- Stamp duty ----

@dataclass(frozen=True)
class StampDutyResult:
    jurisdiction: str
    property_value: Decimal
    is_first_time_buyer: bool
    total: Decimal
    concession_applied: bool = False
    concession_kind: ConcessionKind | None = None
    amount_saved: Decimal = Decimal("0")


# ---- Cash flow ----

@dataclass(frozen=True)
class PeriodAmounts:
    annual: Decimal
    monthly: Decimal
    weekly: Decimal


@dataclass(frozen=True)
class CostBreakdown:
    loan_repayment: Decimal
    expenses: Decimal
    total: Decimal
    breakdown: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class CashFlowResult:
    income: PeriodAmounts
    costs: CostBreakdown
    cash_flow: PeriodAmounts
    is_positive: bool


@dataclass(frozen=True)
class RentalYieldResult:
    gross_yield: Decimal  # Percent
    annual_rent: Decimal
    property_value: Decimal


@dataclass(frozen=True)
class NetRentalYieldResult:
    net_yield: Decimal  # Percent, before loan repayments
    net_income: Decimal
    total_expenses: Decimal
    property_value: Decimal


# ---- Projection ----

@dataclass(frozen=True)
class ProjectionEntry:
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
    net_worth: Decimal  # Equity + cumulative cash flow


@dataclass(frozen=True)
class MilestoneSnapshot:
    year: int
    net_worth: Decimal
    equity: Decimal
    property_value: Decimal
    cumulative_cash_flow: Decimal


@dataclass(frozen=True)
class InvestmentMetrics:
    initial_investment: Decimal
    final_net_worth: Decimal
    total_return: Decimal
    # None when the ratio is undefined (non-positive investment or net worth)
    return_on_investment: Decimal | None
    average_annual_return: Decimal | None  # CAGR, percent
    year_10: MilestoneSnapshot
    year_20: MilestoneSnapshot
    year_30: MilestoneSnapshot
    total_rent_received: Decimal
    total_expenses_paid: Decimal
    total_loan_repayments: Decimal


# ---- Year by year ----

@dataclass(frozen=True)
class YearByYearEntry:
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


@dataclass(frozen=True)
class YearByYearSummary:
    total_years: int
    final_property_value: Decimal
    final_equity: Decimal
    final_monthly_rent: Decimal
    self_sufficient_year: int | None


@dataclass(frozen=True)
class YearByYearResult:
    yearly_data: list[YearByYearEntry]
    self_sufficient_year: int | None  # None = never within the loan term
    summary: YearByYearSummary


# ---- Combined ----

@dataclass(frozen=True)
class CalculationSummary:
    purchase_price: Decimal
    deposit_amount: Decimal
    loan_amount: Decimal
    total_upfront_costs: Decimal
    stamp_duty: Decimal
    lmi: Decimal
    additional_costs: Decimal


@dataclass(frozen=True)
class CalculationResult:
    summary: CalculationSummary
    stamp_duty: StampDutyResult
    loan_details: LoanRepaymentResult
    lvr: LVRResult
    cash_flow: CashFlowResult
    gross_yield: RentalYieldResult
    net_yield: NetRentalYieldResult
    investment_metrics: InvestmentMetrics
    projection: list[ProjectionEntry]
    year_by_year: YearByYearResult
    inputs: PropertyInput
    stress_tests: list[StressTestResult] = field(default_factory=list)
