from __future__ import annotations

from collections.abc import Sequence

IRR_LOW = -0.5
IRR_HIGH = 1.0
IRR_ITERATIONS = 50


def npv(rate: float, cash_flows: Sequence[float]) -> float:
    """Net present value of cash flows at integer periods 0..n."""
    total = 0.0
    for t, cf in enumerate(cash_flows):
        total += cf / (1.0 + rate) ** t
    return total


def irr(
    cash_flows: Sequence[float],
    *,
    low: float = IRR_LOW,
    high: float = IRR_HIGH,
    iterations: int = IRR_ITERATIONS,
) -> float:
    """
    Compute annual IRR (as a fraction, 0.12 for 12%) by fixed-count bisection.

    Each step evaluates NPV at the midpoint: a positive NPV means the root lies
    above the midpoint (raise `low`), otherwise lower `high`. Returns `low`
    after `iterations` halvings, so results are clamped to [low, high].

    Assumes a conventional series (one sign change, outlay first). With several
    sign changes NPV is not monotonic and the result may not be a true root.
    Never raises; a non-finite NPV simply lowers `high`.
    """
    lo, hi = low, high
    for _ in range(iterations):
        mid = (lo + hi) / 2.0
        if npv(mid, cash_flows) > 0:
            lo = mid
        else:
            hi = mid
    return lo


__all__ = ["npv", "irr", "IRR_LOW", "IRR_HIGH", "IRR_ITERATIONS"]
