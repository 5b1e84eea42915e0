# rental_analyzer/schemas/__init__.py

from .models import (
    AdviceResponse,
    AnalysisResult,
    InputParameters,
    RateSegment,
    SummaryMetrics,
    TokenUsage,
    YearlyResult,
)

__all__ = [
    "InputParameters",
    "RateSegment",
    "YearlyResult",
    "SummaryMetrics",
    "AnalysisResult",
    "AdviceResponse",
    "TokenUsage",
]
