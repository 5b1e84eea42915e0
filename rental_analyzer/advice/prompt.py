# rental_analyzer/advice/prompt.py

from __future__ import annotations

from collections.abc import Sequence

from rental_analyzer.schemas.models import InputParameters, SummaryMetrics, YearlyResult

SYSTEM_PROMPT = "You are a professional real estate investment analyst. Be concise and concrete."


def _num(x: float) -> str:
    """Plain number: 420000.0 -> "420000", 6.875 -> "6.875"."""
    return f"{x:.4f}".rstrip("0").rstrip(".")


def build_advice_prompt(inputs: InputParameters, summary: SummaryMetrics, yearly: Sequence[YearlyResult]) -> str:
    """
    Render the analysis prompt: inputs, key metrics, cash flow trend, and the task.
    Year 5 cash flow reads "N/A" when the projection is shorter than five years.
    """
    cf_y1 = f"${yearly[0].cash_flow:.2f}" if yearly else "N/A"
    cf_y5 = f"${yearly[4].cash_flow:.2f}" if len(yearly) >= 5 else "N/A"

    return f"""
Analyze this rental property investment deal. Here is the data:

**Inputs:**
- Purchase Price: ${_num(inputs.purchase_price)}
- Down Payment: {_num(inputs.down_payment_percent)}%
- Loan Term: {inputs.loan_term_years} years
- Monthly Rent: ${_num(inputs.monthly_rent)}
- Holding Period: {inputs.holding_period} years

**Key Metrics:**
- Initial Investment: ${summary.initial_investment:.2f}
- Cash on Cash Return (Year 1): {summary.cash_on_cash:.2f}%
- Cap Rate (Year 1): {summary.cap_rate:.2f}%
- IRR (Internal Rate of Return): {summary.irr:.2f}%
- Total Profit over {inputs.holding_period} years: ${summary.total_profit:.2f}

**Cash Flow Trend:**
- Year 1 Cash Flow: {cf_y1}
- Year 5 Cash Flow: {cf_y5}

**Task:**
Provide a professional real estate investment analysis (approx 150 words).
1. Verdict: Is this a "Solid Deal", "Risky", or "Poor"?
2. Highlight 1-2 strengths (e.g., strong cash flow, good equity build-up).
3. Highlight 1-2 risks (e.g., negative cash flow, low cap rate, dependency on appreciation).
4. Comment specifically on the interest rate strategy if the cash flow fluctuates significantly.

Format nicely with Markdown.
""".strip()
