# main.py
"""
Entry Point: Rental Investment Analyzer

Purpose
-------
Run a projection end-to-end and emit a Markdown report:
  1) Load inputs (sample defaults or --config JSON).
  2) Project the holding period under the rate schedule.
  3) Optionally request advisory commentary (--advice).
  4) Write the Markdown report.

Design
------
- CLI-friendly; pure Python. The calculation is synchronous and never touches
  the network; only the optional advice step does.
- Advisory provider is configuration-driven (RENTAL_ADVICE_PROVIDER / --provider).

Usage
-----
    python main.py
    python main.py --config data/sample/inputs.json --out out.md --advice --provider mock
"""

from __future__ import annotations

import argparse

from rental_analyzer.advice import (
    FALLBACK_ADVICE_TEXT,
    AdviceServiceError,
    create_advice_provider,
    generate_investment_advice,
)
from rental_analyzer.advice.advisor import PROVIDERS
from rental_analyzer.core.finance import calculate_analysis
from rental_analyzer.core.logs import get_logger, report_exception
from rental_analyzer.inputs.inputs import AppInputs, InputsLoader, RunOptions
from rental_analyzer.reports.generator import write_report
from rental_analyzer.schemas.models import InputParameters, RateSegment


def build_sample_inputs() -> AppInputs:
    """Baseline single-family rental for demo purposes (fixed 6.875% for 30 years)."""
    return AppInputs(
        inputs=InputParameters(
            purchase_price=420_000.0,
            down_payment_percent=20.0,
            closing_costs=12_000.0,
            loan_term_years=30,
            monthly_rent=2_800.0,
            annual_rent_increase=3.0,
            other_monthly_income=50.0,
            annual_other_income_increase=2.0,
            vacancy_rate=5.0,
            property_tax=5_040.0,
            annual_tax_increase=2.0,
            insurance=1_800.0,
            annual_insurance_increase=3.0,
            hoa_monthly=0.0,
            maintenance_monthly=150.0,
            annual_maintenance_increase=2.5,
            management_fee_percent=8.0,
            appreciation_rate=3.5,
            holding_period=30,
            cost_to_sell=6.0,
        ),
        rate_segments=(RateSegment(start_year=1, interest_rate=6.875),),
        run=RunOptions(),
    )


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments for configurable runs."""
    p = argparse.ArgumentParser(description="Rental Investment Analyzer")
    p.add_argument("--config", type=str, default=None, help="Path to JSON inputs (flat form state or AppInputs).")
    p.add_argument("--out", type=str, default=None, help="Output Markdown path (overrides config).")
    p.add_argument("--advice", action="store_true", help="Append advisory commentary to the report.")
    p.add_argument(
        "--provider",
        type=str,
        default=None,
        choices=list(PROVIDERS),
        help="Advisory provider (overrides config and RENTAL_ADVICE_PROVIDER).",
    )
    return p.parse_args()


def main():
    """Run the analysis and write rental_analysis.md (or chosen output)."""
    print("Running Rental Investment Analyzer...")
    args = parse_args()

    loader = InputsLoader()
    cfg = loader.load(args.config) if args.config else build_sample_inputs()
    cfg = loader.with_overrides(
        cfg,
        out=args.out,
        advice=True if args.advice else None,
        provider=args.provider,
    )

    try:
        result = calculate_analysis(cfg.inputs, cfg.rate_segments)
    except Exception as e:
        report_exception("Error during analysis", e)
        raise

    advice = None
    if cfg.run.advice:
        try:
            provider = create_advice_provider(cfg.run.provider)
        except (AdviceServiceError, ValueError) as e:
            # missing credentials or an unknown provider name from config/env
            report_exception("Advice provider unavailable", e)
            advice = FALLBACK_ADVICE_TEXT
        else:
            advice = generate_investment_advice(cfg.inputs, result.summary, result.yearly, provider=provider)
        get_logger().info("advice requested: provider=%s", cfg.run.provider or "default")

    write_report(cfg.run.out, cfg.inputs, cfg.rate_segments, result, advice=advice)

    summary = result.summary
    print(f"Report written to {cfg.run.out}")
    print(f"IRR: {summary.irr:.2f}%  Cash-on-Cash (Y1): {summary.cash_on_cash:.2f}%  Cap Rate: {summary.cap_rate:.2f}%")


if __name__ == "__main__":
    main()
