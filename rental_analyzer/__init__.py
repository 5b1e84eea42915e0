"""
Rental Analyzer

Multi-year projections for a leveraged rental property: amortization under a
piecewise-variable rate schedule, annual income/expense escalation, and
summary returns (IRR, cap rate, cash-on-cash, total profit).

    from rental_analyzer import InputParameters, RateSegment, calculate_analysis

    result = calculate_analysis(
        InputParameters(purchase_price=420_000, monthly_rent=2_200, holding_period=10),
        [RateSegment(start_year=1, interest_rate=6.875)],
    )
"""

from rental_analyzer.core.finance import calculate_analysis
from rental_analyzer.schemas.models import (
    AnalysisResult,
    InputParameters,
    RateSegment,
    SummaryMetrics,
    YearlyResult,
)

__all__ = [
    "calculate_analysis",
    "InputParameters",
    "RateSegment",
    "YearlyResult",
    "SummaryMetrics",
    "AnalysisResult",
]
