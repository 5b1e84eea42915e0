# rental_analyzer/advice/advisor.py
"""
Investment Advisor

Purpose
-------
Turn a finished analysis into free-form commentary via an injectable
AdviceProvider. The calculation result is an input here, never an output:
whatever the provider does, the numbers are unaffected.

Design
------
- `create_advice_provider(name)` selects a provider (gemini | proxy | openai | mock).
  "gemini" without a key falls back to the proxy.
- `generate_investment_advice(...)` never raises on provider failures (any exception
  is classified through `advice_error_guard`); it logs and returns a fixed
  fallback message instead.
"""

from __future__ import annotations

from collections.abc import Sequence

from rental_analyzer.core.logs import get_logger, report_exception
from rental_analyzer.schemas.models import InputParameters, SummaryMetrics, YearlyResult

from .errors import AdviceServiceError, advice_error_guard
from .gemini_provider import GeminiProvider, ProxyProvider
from .mock_provider import MockAdviceProvider
from .openai_provider import OpenAIProvider
from .prompt import SYSTEM_PROMPT, build_advice_prompt
from .provider_base import AdviceProvider
from .secrets import AdviceSettings, use_proxy

EMPTY_ADVICE_TEXT = "Could not generate analysis."
FALLBACK_ADVICE_TEXT = (
    "Unable to generate AI analysis at this time. Please ensure your API key is configured correctly."
)
PROVIDERS = ("gemini", "proxy", "openai", "mock")


def create_advice_provider(name: str | None = None, settings: AdviceSettings | None = None) -> AdviceProvider:
    """Factory for advisory providers. Unknown names raise ValueError."""
    cfg = settings or AdviceSettings.from_env()
    provider = (name or cfg.provider).strip().lower()

    if provider == "gemini":
        if use_proxy():
            return ProxyProvider(cfg)
        return GeminiProvider(cfg)
    if provider == "proxy":
        return ProxyProvider(cfg)
    if provider == "openai":
        return OpenAIProvider(cfg)
    if provider == "mock":
        return MockAdviceProvider()
    raise ValueError(f"Unknown AI provider: {provider}")


def generate_investment_advice(
    inputs: InputParameters,
    summary: SummaryMetrics,
    yearly: Sequence[YearlyResult],
    provider: AdviceProvider | None = None,
) -> str:
    """
    Produce Markdown commentary for an analysis.

    Returns:
        Provider text; EMPTY_ADVICE_TEXT if the provider answered with nothing;
        FALLBACK_ADVICE_TEXT if the provider could not be created or failed.
    """
    prompt = build_advice_prompt(inputs, summary, yearly)
    try:
        with advice_error_guard():
            prov = provider or create_advice_provider()
            response = prov.generate(prompt, SYSTEM_PROMPT)
    except AdviceServiceError as e:
        report_exception("Advice generation failed", e)
        return FALLBACK_ADVICE_TEXT

    if response.usage is not None:
        get_logger().debug("advice usage: %s", response.usage.model_dump())
    return response.text.strip() or EMPTY_ADVICE_TEXT
