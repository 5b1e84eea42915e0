# rental_analyzer/core/finance/errors.py
"""
Typed errors for the projection engine.

The engine is pure arithmetic, so the taxonomy is narrow:
  - Precondition violations (e.g. an empty rate schedule) raise before the
    projection loop starts.
  - Degenerate denominators (zero initial investment, zero purchase price)
    never raise; they propagate inf/nan and presentation decides how to render.
  - The IRR bisection always terminates and never raises.
"""

from __future__ import annotations


class CalculationError(ValueError):
    """Base class for projection precondition failures."""


class RateScheduleError(CalculationError):
    """The rate schedule is empty or otherwise unusable."""


def is_calculation_error(exc: BaseException) -> bool:
    return isinstance(exc, CalculationError)


__all__ = ["CalculationError", "RateScheduleError", "is_calculation_error"]
