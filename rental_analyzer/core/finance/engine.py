# rental_analyzer/core/finance/engine.py
"""
Projection Aggregator

Drives the year loop for a leveraged rental: resolves the year's rate,
amortizes twelve months, escalates income/expenses, and derives summary
metrics (IRR, cap rate, cash-on-cash, total profit) from the full ledger.

The carried state (balance, escalating figures) is an immutable `_Carry`
threaded through the loop; nothing is shared across calls.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from rental_analyzer.core.logs import get_logger
from rental_analyzer.schemas.models import (
    AnalysisResult,
    InputParameters,
    RateSegment,
    SummaryMetrics,
    YearlyResult,
)

from .amortization import MONTHS_PER_YEAR, amortize_year
from .irr import irr
from .rates import active_segment, normalize_schedule


@dataclass(frozen=True)
class _Carry:
    property_value: float
    monthly_rent: float
    other_monthly_income: float
    annual_tax: float
    annual_insurance: float
    monthly_hoa: float
    monthly_maintenance: float
    loan_balance: float


def _grow(val: float, pct: float) -> float:
    return val * (1 + pct / 100)


def _ratio_pct(numerator: float, denominator: float) -> float:
    """numerator / denominator * 100 with IEEE semantics for a zero denominator (±inf, or nan for 0/0)."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator * 100


def _initial_carry(p: InputParameters) -> _Carry:
    return _Carry(
        property_value=p.purchase_price,
        monthly_rent=p.monthly_rent,
        other_monthly_income=p.other_monthly_income,
        annual_tax=p.property_tax,
        annual_insurance=p.insurance,
        monthly_hoa=p.hoa_monthly,
        monthly_maintenance=p.maintenance_monthly,
        loan_balance=p.initial_loan_amount,
    )


def _escalate(c: _Carry, p: InputParameters, loan_balance: float) -> _Carry:
    """Next year's figures. The loan balance carries over as amortized, unescalated."""
    return _Carry(
        property_value=_grow(c.property_value, p.appreciation_rate),
        monthly_rent=_grow(c.monthly_rent, p.annual_rent_increase),
        other_monthly_income=_grow(c.other_monthly_income, p.annual_other_income_increase),
        annual_tax=_grow(c.annual_tax, p.annual_tax_increase),
        annual_insurance=_grow(c.annual_insurance, p.annual_insurance_increase),
        monthly_hoa=_grow(c.monthly_hoa, p.annual_hoa_increase),
        monthly_maintenance=_grow(c.monthly_maintenance, p.annual_maintenance_increase),
        loan_balance=loan_balance,
    )


def _project_year(year: int, c: _Carry, p: InputParameters, rate: float) -> tuple[YearlyResult, float]:
    """Build one ledger row; returns (row, post-amortization balance)."""
    remaining_term = max(0, p.loan_term_years - (year - 1))

    payment = interest = principal = 0.0
    balance = c.loan_balance
    if balance > 0 and remaining_term > 0:
        debt = amortize_year(balance, rate, remaining_term)
        payment, interest, principal = debt.payment, debt.interest_paid, debt.principal_paid
        balance = debt.closing_balance

    # Income
    gross_rent = c.monthly_rent * MONTHS_PER_YEAR
    gross_other = c.other_monthly_income * MONTHS_PER_YEAR
    vacancy_loss = (gross_rent + gross_other) * (p.vacancy_rate / 100)
    egi = gross_rent + gross_other - vacancy_loss

    # Expenses
    management_fee = egi * (p.management_fee_percent / 100)
    opex = (
        c.annual_tax
        + c.annual_insurance
        + c.monthly_hoa * MONTHS_PER_YEAR
        + c.monthly_maintenance * MONTHS_PER_YEAR
        + management_fee
    )

    noi = egi - opex
    reported_balance = max(0.0, balance)

    row = YearlyResult(
        year=year,
        property_value=c.property_value,
        rental_income=egi,
        other_income=gross_other,
        vacancy_loss=vacancy_loss,
        operating_expenses=opex,
        noi=noi,
        mortgage_payment=payment,
        interest_paid=interest,
        principal_paid=principal,
        remaining_loan_balance=reported_balance,
        cash_flow=noi - payment,
        equity=c.property_value - reported_balance,
        rate_applied=rate,
    )
    return row, balance


def net_sale_proceeds(final_year: YearlyResult, cost_to_sell: float) -> float:
    """Sale price net of selling costs, minus the outstanding balance."""
    return final_year.property_value * (1 - cost_to_sell / 100) - final_year.remaining_loan_balance


def summarize(p: InputParameters, yearly: tuple[YearlyResult, ...]) -> SummaryMetrics:
    """Derive SummaryMetrics from a complete (non-empty) ledger."""
    y1, last = yearly[0], yearly[-1]
    initial_investment = p.initial_investment
    total_cash_flow = sum(y.cash_flow for y in yearly)
    proceeds = net_sale_proceeds(last, p.cost_to_sell)

    # Equity cash flows: outlay at t=0, annual CF, sale proceeds added to the final year
    series = [-initial_investment] + [y.cash_flow for y in yearly]
    series[-1] += proceeds

    return SummaryMetrics(
        irr=irr(series) * 100,
        cash_on_cash=_ratio_pct(y1.cash_flow, initial_investment),
        cap_rate=_ratio_pct(y1.noi, p.purchase_price),
        total_cash_flow=total_cash_flow,
        total_profit=total_cash_flow + proceeds - initial_investment,
        initial_investment=initial_investment,
    )


def calculate_analysis(inputs: InputParameters, rate_segments: Iterable[RateSegment]) -> AnalysisResult:
    """
    Project a leveraged rental over `inputs.holding_period` years.

    Raises:
        RateScheduleError: if `rate_segments` is empty.
    """
    schedule = normalize_schedule(rate_segments)
    get_logger().debug(
        "calculate_analysis: holding_period=%d segments=%d", inputs.holding_period, len(schedule)
    )

    carry = _initial_carry(inputs)
    rows: list[YearlyResult] = []
    for year in range(1, inputs.holding_period + 1):
        rate = active_segment(schedule, year).interest_rate
        row, balance = _project_year(year, carry, inputs, rate)
        rows.append(row)
        carry = _escalate(carry, inputs, balance)

    yearly = tuple(rows)
    return AnalysisResult(yearly=yearly, summary=summarize(inputs, yearly))


__all__ = ["calculate_analysis", "summarize", "net_sale_proceeds"]
