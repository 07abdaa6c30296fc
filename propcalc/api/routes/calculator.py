"""Calculator routes: the primary API entry point.

The engine raises typed errors; this layer is the only place they are turned
into HTTP responses.
"""

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException

from propcalc.api.deps import get_duty_rules
from propcalc.api.schemas import (
    AmortizationEntryResponse,
    CalculateRequest,
    CalculationResponse,
    CashFlowResponse,
    InvestmentMetricsResponse,
    JurisdictionResponse,
    LoanDetailsResponse,
    LoanRepaymentsRequest,
    LoanRepaymentsResponse,
    LVRResponse,
    NetRentalYieldResponse,
    ProjectionEntryResponse,
    RentalYieldResponse,
    StampDutyRequest,
    StampDutyResponse,
    StressTestResponse,
    SummaryResponse,
    YearByYearResponse,
    YieldsResponse,
)
from propcalc.engine.calculator import calculate_property_investment
from propcalc.engine.errors import CalculationError, ConfigurationError
from propcalc.engine.loan import calculate_loan_repayments, generate_amortization_schedule
from propcalc.engine.stamp_duty import calculate_stamp_duty
from propcalc.models.results import CalculationResult
from propcalc.models.stamp_duty import DutyRules

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["calculator"])


def _raise_http(exc: CalculationError) -> NoReturn:
    if isinstance(exc, ConfigurationError):
        logger.error("Duty table inconsistency: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    logger.warning("Calculation rejected: %s", exc)
    raise HTTPException(status_code=400, detail=str(exc)) from exc


def _result_to_response(result: CalculationResult, req: CalculateRequest) -> CalculationResponse:
    """Convert engine CalculationResult to API response."""
    return CalculationResponse(
        generated_at=datetime.now(timezone.utc),
        summary=SummaryResponse.model_validate(result.summary),
        stamp_duty=StampDutyResponse.model_validate(result.stamp_duty),
        loan_details=LoanDetailsResponse.model_validate(result.loan_details),
        lvr=LVRResponse.model_validate(result.lvr),
        cash_flow=CashFlowResponse.model_validate(result.cash_flow),
        yields=YieldsResponse(
            gross=RentalYieldResponse.model_validate(result.gross_yield),
            net=NetRentalYieldResponse.model_validate(result.net_yield),
        ),
        investment_metrics=InvestmentMetricsResponse.model_validate(result.investment_metrics),
        projection=[ProjectionEntryResponse.model_validate(p) for p in result.projection],
        year_by_year=YearByYearResponse.model_validate(result.year_by_year),
        stress_tests=[StressTestResponse.model_validate(s) for s in result.stress_tests],
        inputs=req,
    )


@router.post("/calculate", response_model=CalculationResponse)
async def calculate(
    req: CalculateRequest,
    rules: Mapping[str, DutyRules] = Depends(get_duty_rules),
):
    """Full analysis: stamp duty, loan, cash flow, yields, projection, year by year."""
    try:
        result = calculate_property_investment(req.to_property_input(), rules=rules)
    except CalculationError as e:
        _raise_http(e)

    logger.debug(
        "Calculated %s purchase at %s: self-sufficient year %s",
        result.stamp_duty.jurisdiction,
        req.purchase_price,
        result.year_by_year.self_sufficient_year,
    )
    return _result_to_response(result, req)


@router.post("/stamp-duty", response_model=StampDutyResponse)
async def stamp_duty(
    req: StampDutyRequest,
    rules: Mapping[str, DutyRules] = Depends(get_duty_rules),
):
    """Quick stamp duty lookup."""
    try:
        result = calculate_stamp_duty(req.property_value, req.state, req.is_first_home, rules=rules)
    except CalculationError as e:
        _raise_http(e)
    return StampDutyResponse.model_validate(result)


@router.post("/loan-repayments", response_model=LoanRepaymentsResponse)
async def loan_repayments(req: LoanRepaymentsRequest):
    """Quick repayment calculation, optionally with a yearly balance schedule."""
    try:
        loan = calculate_loan_repayments(req.loan_amount, req.interest_rate, req.loan_term)
        schedule = []
        if req.include_schedule:
            schedule = generate_amortization_schedule(
                req.loan_amount, req.interest_rate, req.loan_term, req.schedule_interval
            )
    except CalculationError as e:
        _raise_http(e)

    return LoanRepaymentsResponse(
        loan=LoanDetailsResponse.model_validate(loan),
        schedule=[AmortizationEntryResponse.model_validate(s) for s in schedule],
    )


@router.get("/jurisdictions", response_model=list[JurisdictionResponse])
async def jurisdictions(rules: Mapping[str, DutyRules] = Depends(get_duty_rules)):
    """Configured jurisdictions and their first home buyer ceilings."""
    return [
        JurisdictionResponse(
            code=code,
            flat_rate=r.flat_rate is not None,
            full_exemption=r.first_home_buyer.full_exemption,
            partial_exemption=r.first_home_buyer.partial_exemption,
        )
        for code, r in rules.items()
    ]
