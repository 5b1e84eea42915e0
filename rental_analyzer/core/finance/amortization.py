# rental_analyzer/core/finance/amortization.py

from __future__ import annotations

from dataclasses import dataclass

_EPS = 1e-6  # for floating cleanup
MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class YearDebt:
    interest_paid: float
    principal_paid: float
    payment: float
    closing_balance: float
    monthly_payment: float = 0.0


def monthly_payment(principal: float, annual_rate_percent: float, years: int) -> float:
    """
    Fixed monthly P&I payment for a fully amortizing loan (standard annuity).

        PMT = P * r * (1 + r)^n / ((1 + r)^n - 1),  r = rate / 100 / 12,  n = years * 12

    A zero rate reduces to straight-line principal; a non-positive term pays nothing.
    """
    if years <= 0:
        return 0.0
    n = years * MONTHS_PER_YEAR
    if annual_rate_percent == 0:
        return principal / n
    r = annual_rate_percent / 100 / MONTHS_PER_YEAR
    growth = (1 + r) ** n
    return principal * r * growth / (growth - 1)


def amortize_year(opening_balance: float, annual_rate_percent: float, remaining_term_years: int) -> YearDebt:
    """
    Simulate twelve monthly payments on the opening balance.

    The payment is re-amortized each call: the current balance is spread over the
    remaining term at the given rate, which models an adjustable-rate loan that
    recasts whenever the rate changes. Months after payoff contribute nothing.
    """
    pmt = monthly_payment(opening_balance, annual_rate_percent, remaining_term_years)
    r = annual_rate_percent / 100 / MONTHS_PER_YEAR

    bal = opening_balance
    interest_total = 0.0
    principal_total = 0.0
    for _ in range(MONTHS_PER_YEAR):
        if bal <= 0:
            break
        interest = bal * r
        principal = min(bal, pmt - interest)
        interest_total += interest
        principal_total += principal
        bal -= principal

    # Clean tiny residual drift at payoff
    if bal < _EPS:
        bal = 0.0

    return YearDebt(
        interest_paid=interest_total,
        principal_paid=principal_total,
        payment=interest_total + principal_total,
        closing_balance=bal,
        monthly_payment=pmt,
    )
