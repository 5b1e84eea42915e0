# rental_analyzer/core/finance/__init__.py

from .amortization import YearDebt, amortize_year, monthly_payment
from .engine import calculate_analysis
from .errors import CalculationError, RateScheduleError, is_calculation_error
from .irr import irr, npv
from .rates import add_segment, normalize_schedule, remove_segment, resolve_rate, update_segment

__all__ = [
    "calculate_analysis",
    "amortize_year",
    "monthly_payment",
    "YearDebt",
    "resolve_rate",
    "normalize_schedule",
    "add_segment",
    "update_segment",
    "remove_segment",
    "irr",
    "npv",
    "CalculationError",
    "RateScheduleError",
    "is_calculation_error",
]
