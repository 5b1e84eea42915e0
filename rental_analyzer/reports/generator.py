from __future__ import annotations

import math
from collections.abc import Sequence

from rental_analyzer.core.finance.rates import normalize_schedule
from rental_analyzer.schemas.models import (
    AnalysisResult,
    InputParameters,
    RateSegment,
    SummaryMetrics,
    YearlyResult,
)

NOT_AVAILABLE = "N/A"


def _fmt_currency(x: float) -> str:
    """
    Format a float as USD-style currency with thousands separators.

    Example:
        123456.789 -> $123,456.79
        -2000 -> -$2,000.00
        inf -> N/A
    """
    if not math.isfinite(x):
        return NOT_AVAILABLE
    sign = "-" if x < 0 else ""
    return f"{sign}${abs(x):,.2f}"


def _fmt_pct(x: float, digits: int = 2) -> str:
    """
    Format a percent-unit number (6.5 means 6.5%). Non-finite values render as N/A.

    Example:
        6.5 -> 6.50%
    """
    if not math.isfinite(x):
        return NOT_AVAILABLE
    return f"{x:.{digits}f}%"


def _section(title: str) -> str:
    """
    Render a level-2 heading for Markdown sections.
    """
    return f"\n## {title}\n"


# -----------------------
# Sections
# -----------------------


def _render_header(inputs: InputParameters, title: str | None) -> str:
    heading = title or "Rental Investment Analysis"
    lines = [
        f"# {heading}",
        "",
        f"- **Purchase Price:** {_fmt_currency(inputs.purchase_price)}",
        f"- **Down Payment:** {_fmt_pct(inputs.down_payment_percent)}",
        f"- **Loan Term:** {inputs.loan_term_years} years",
        f"- **Monthly Rent:** {_fmt_currency(inputs.monthly_rent)}",
        f"- **Holding Period:** {inputs.holding_period} years",
    ]
    return "\n".join(lines) + "\n"


def _render_key_metrics(summary: SummaryMetrics, year1: YearlyResult) -> str:
    """
    Headline cards: Year 1 cash flow (with monthly figure), CoC, cap rate, IRR, totals.
    """
    monthly = year1.cash_flow / 12
    if math.isfinite(monthly):
        monthly_txt = f"{'-' if monthly < 0 else ''}${abs(monthly):,.0f} / mo"
    else:
        monthly_txt = NOT_AVAILABLE
    lines = [
        _section("Key Metrics"),
        f"- **Cash Flow (Y1):** {_fmt_currency(year1.cash_flow)} ({monthly_txt})",
        f"- **Cash-on-Cash (Y1):** {_fmt_pct(summary.cash_on_cash)}",
        f"- **Cap Rate (Y1):** {_fmt_pct(summary.cap_rate)}",
        f"- **IRR:** {_fmt_pct(summary.irr)}",
        f"- **Total Cash Flow:** {_fmt_currency(summary.total_cash_flow)}",
        f"- **Total Profit:** {_fmt_currency(summary.total_profit)}",
        f"- **Initial Investment:** {_fmt_currency(summary.initial_investment)}",
    ]
    return "\n".join(lines) + "\n"


def _render_rate_schedule(segments: Sequence[RateSegment], loan_term_years: int) -> str:
    """
    Rate periods with their effective year ranges. Rates apply from the start
    year until the next period or the end of the loan.
    """
    schedule = normalize_schedule(segments)
    rows = [
        _section("Interest Rate Schedule"),
        "| Period | Years | Rate |",
        "| ---: | :--- | ---: |",
    ]
    for i, seg in enumerate(schedule):
        end = schedule[i + 1].start_year - 1 if i + 1 < len(schedule) else loan_term_years
        if end > seg.start_year:
            years = f"{seg.start_year}-{end}"
        elif i + 1 < len(schedule):
            years = f"{seg.start_year}"
        else:
            years = f"{seg.start_year}+"
        rows.append(f"| {i + 1} | {years} | {_fmt_pct(seg.interest_rate, 3)} |")
    return "\n".join(rows) + "\n"


def _render_year_table(yearly: Sequence[YearlyResult]) -> str:
    """
    Render the year-by-year ledger.

    Columns:
      Year | Value | Income | Expenses | NOI | Mortgage | Interest | Principal | Cash Flow | Balance | Equity | Rate
    """
    header = [
        _section(f"{len(yearly)}-Year Projection"),
        "| Year | Value | Income | Expenses | NOI | Mortgage | Interest | Principal | Cash Flow | Balance | Equity | Rate |",
        "| ---: | ---: | ---: | ---: | ---: | ---: | ---: | ---: | ---: | ---: | ---: | ---: |",
    ]
    rows = []
    for y in yearly:
        rows.append(
            f"| {y.year} "
            f"| {_fmt_currency(y.property_value)} "
            f"| {_fmt_currency(y.rental_income)} "
            f"| {_fmt_currency(y.operating_expenses)} "
            f"| {_fmt_currency(y.noi)} "
            f"| {_fmt_currency(y.mortgage_payment)} "
            f"| {_fmt_currency(y.interest_paid)} "
            f"| {_fmt_currency(y.principal_paid)} "
            f"| {_fmt_currency(y.cash_flow)} "
            f"| {_fmt_currency(y.remaining_loan_balance)} "
            f"| {_fmt_currency(y.equity)} "
            f"| {_fmt_pct(y.rate_applied, 3)} |"
        )
    return "\n".join(header + rows) + "\n"


def _render_advice(advice: str) -> str:
    return _section("AI Analysis") + "\n" + advice.strip() + "\n"


def generate_report(
    inputs: InputParameters,
    rate_segments: Sequence[RateSegment],
    result: AnalysisResult,
    advice: str | None = None,
    title_override: str | None = None,
) -> str:
    """
    Generate a Markdown report for one analysis.

    Sections:
      - Header: purchase and holding summary
      - Key Metrics: Y1 cash flow, CoC, cap rate, IRR, totals
      - Interest Rate Schedule
      - Year-by-year projection table
      - AI Analysis (only when advice text is given)
    """
    parts = [
        _render_header(inputs, title_override),
        _render_key_metrics(result.summary, result.yearly[0]),
        _render_rate_schedule(rate_segments, inputs.loan_term_years),
        _render_year_table(result.yearly),
        _render_advice(advice) if advice else "",
    ]
    return "\n".join(part for part in parts if part).strip() + "\n"


def write_report(
    path: str,
    inputs: InputParameters,
    rate_segments: Sequence[RateSegment],
    result: AnalysisResult,
    advice: str | None = None,
) -> None:
    """
    Convenience helper to write the generated report to disk.
    """
    md = generate_report(inputs, rate_segments, result, advice=advice)
    with open(path, "w", encoding="utf-8") as f:
        f.write(md)
