# tests/utils.py
"""
Single source of truth for test data, factories, and canonical payloads.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from typing import Any

from rental_analyzer.schemas.models import InputParameters, RateSegment

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_RATE = 6.875

# Scenario A: single-family rental, one fixed rate for the whole term
SCENARIO_A: dict[str, Any] = {
    "purchase_price": 420_000.0,
    "down_payment_percent": 20.0,
    "closing_costs": 9_000.0,
    "loan_term_years": 30,
    "monthly_rent": 2_200.0,
    "vacancy_rate": 5.0,
    "property_tax": 4_000.0,
    "insurance": 1_800.0,
    "maintenance_monthly": 200.0,
    "appreciation_rate": 4.0,
    "holding_period": 30,
    "cost_to_sell": 6.0,
}

# Same deal as form-state JSON (camelCase, scalar rate)
FLAT_CAMEL_PAYLOAD: dict[str, Any] = {
    "purchasePrice": 420000,
    "downPaymentPercent": 20,
    "closingCosts": 9000,
    "loanTermYears": 30,
    "interestRate": DEFAULT_RATE,
    "monthlyRent": 2200,
    "vacancyRate": 5,
    "propertyTax": 4000,
    "insurance": 1800,
    "maintenanceMonthly": 200,
    "appreciationRate": 4,
    "holdingPeriod": 30,
    "costToSell": 6,
}


# -----------------------------
# Factories
# -----------------------------


def make_inputs(**overrides: Any) -> InputParameters:
    """Scenario A inputs with optional field overrides (snake_case)."""
    return InputParameters(**{**SCENARIO_A, **overrides})


def make_segments(*pairs: tuple[int, float]) -> list[RateSegment]:
    """
    Build a rate schedule from (start_year, rate) pairs.
    With no pairs: one segment at DEFAULT_RATE from year 1.
    """
    if not pairs:
        pairs = ((1, DEFAULT_RATE),)
    return [RateSegment(start_year=start, interest_rate=rate) for start, rate in pairs]


def make_step_schedule() -> list[RateSegment]:
    """Scenario B: 5% for years 1-5, 7% from year 6."""
    return make_segments((1, 5.0), (6, 7.0))
