# rental_analyzer/schemas/models.py

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Shared config: immutable records, ignore unknown keys, accept both
# snake_case (Python callers) and camelCase (form-state JSON) on input.
_FROZEN = ConfigDict(frozen=True, extra="ignore", alias_generator=to_camel, populate_by_name=True)


def _new_segment_id() -> str:
    return uuid.uuid4().hex[:9]


# =========================
# Core inputs
# =========================


class InputParameters(BaseModel):
    """
    Investment parameters for one calculation call. All money amounts are assumed to use the same currency.
    Percentages are plain numbers meaning "percent" (7.5 = 7.5%).
    """

    model_config = _FROZEN

    # Purchase
    purchase_price: float = Field(..., ge=0, description="Total contract price for the property.")
    down_payment_percent: float = Field(20.0, ge=0, le=100, description="Down payment as a percent of purchase price.")
    closing_costs: float = Field(0.0, ge=0, description="One-time buyer costs at closing. Added to the initial investment.")
    loan_term_years: int = Field(30, ge=0, description="Original loan term in years.")

    # Income
    monthly_rent: float = Field(0.0, ge=0, description="Monthly rent at Year 1 start (pre-growth).")
    annual_rent_increase: float = Field(0.0, description="Annual rent growth in percent.")
    other_monthly_income: float = Field(0.0, ge=0, description="Other monthly income (parking, storage, laundry).")
    annual_other_income_increase: float = Field(0.0, description="Annual growth of other income in percent.")
    vacancy_rate: float = Field(0.0, ge=0, le=100, description="Vacancy/credit loss in percent of gross potential income.")

    # Expenses
    property_tax: float = Field(0.0, ge=0, description="Annual property tax.")
    annual_tax_increase: float = Field(0.0, description="Annual property tax growth in percent.")
    insurance: float = Field(0.0, ge=0, description="Annual insurance premium.")
    annual_insurance_increase: float = Field(0.0, description="Annual insurance growth in percent.")
    hoa_monthly: float = Field(0.0, ge=0, description="Monthly HOA/condo fees.")
    annual_hoa_increase: float = Field(0.0, description="Annual HOA growth in percent.")
    maintenance_monthly: float = Field(0.0, ge=0, description="Monthly maintenance allowance.")
    annual_maintenance_increase: float = Field(0.0, description="Annual maintenance growth in percent.")
    management_fee_percent: float = Field(0.0, ge=0, description="Management fee in percent of effective gross income.")

    # Sell / valuation
    appreciation_rate: float = Field(0.0, description="Annual property appreciation in percent.")
    holding_period: int = Field(..., ge=1, description="Number of projected years (1..holding_period).")
    cost_to_sell: float = Field(0.0, ge=0, description="Disposition costs in percent of the final property value.")

    @property
    def initial_loan_amount(self) -> float:
        return self.purchase_price * (1 - self.down_payment_percent / 100)

    @property
    def initial_investment(self) -> float:
        return self.purchase_price * (self.down_payment_percent / 100) + self.closing_costs


class RateSegment(BaseModel):
    """One step of the loan's nominal annual rate, effective from `start_year` until superseded."""

    model_config = _FROZEN

    id: str = Field(default_factory=_new_segment_id, description="Opaque identifier used by schedule editors.")
    start_year: int = Field(1, ge=1, description="First projection year (1-based) the rate applies to.")
    interest_rate: float = Field(..., description="Nominal annual rate in percent (6.875 = 6.875%).")


# =========================
# Computed outputs
# =========================


class YearlyResult(BaseModel):
    """One row per projected year, after amortization and before that year's escalation."""

    model_config = _FROZEN

    year: int = Field(..., description="Year index starting at 1.")
    property_value: float = Field(..., description="Property value at the start of the year (pre-appreciation).")
    rental_income: float = Field(..., description="Effective gross income: (rent + other income) after vacancy.")
    other_income: float = Field(..., description="Annualized other income before vacancy.")
    vacancy_loss: float = Field(..., description="Gross potential income times the vacancy rate.")
    operating_expenses: float = Field(..., description="Tax + insurance + HOA + maintenance + management fee.")
    noi: float = Field(..., description="Net Operating Income: effective gross income - operating expenses.")
    mortgage_payment: float = Field(..., description="Total principal + interest paid during the year.")
    interest_paid: float = Field(..., description="Interest component of the year's payments.")
    principal_paid: float = Field(..., description="Principal component of the year's payments.")
    remaining_loan_balance: float = Field(..., description="Loan balance after the year's payments (floored at 0).")
    cash_flow: float = Field(..., description="Levered cash flow before taxes: NOI - mortgage payment.")
    equity: float = Field(..., description="Property value - remaining loan balance.")
    rate_applied: float = Field(..., description="Annual interest rate (percent) in effect this year.")


class SummaryMetrics(BaseModel):
    """
    Headline returns derived from the full yearly ledger. Percent values are in percent units.
    Degenerate denominators yield inf/nan instead of raising.
    """

    model_config = _FROZEN

    irr: float = Field(..., description="Internal rate of return in percent (bisection over (-50%, 100%)).")
    cash_on_cash: float = Field(..., description="Year 1 cash flow / initial investment, in percent.")
    cap_rate: float = Field(..., description="Year 1 NOI / purchase price, in percent.")
    total_cash_flow: float = Field(..., description="Sum of all yearly cash flows.")
    total_profit: float = Field(..., description="Total cash flow + net sale proceeds - initial investment.")
    initial_investment: float = Field(..., description="Down payment + closing costs.")


class AnalysisResult(BaseModel):
    """Complete projection: the yearly ledger plus summary metrics."""

    model_config = _FROZEN

    yearly: tuple[YearlyResult, ...] = Field(..., description="Ordered per-year results, year 1 first.")
    summary: SummaryMetrics = Field(..., description="Summary metrics computed from the ledger.")


# =========================
# Advisory service payloads
# =========================


class TokenUsage(BaseModel):
    """Token accounting reported by an advisory text provider (when available)."""

    model_config = _FROZEN

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class AdviceResponse(BaseModel):
    """Text produced by an advisory provider."""

    model_config = _FROZEN

    text: str = Field("", description="Free-form commentary (Markdown).")
    usage: TokenUsage | None = Field(None, description="Token usage, if the provider reports it.")
