"""
Advisory text package

Re-exports the provider interface/implementations and the advisor entry
point, so callers can do:

    from rental_analyzer.advice import (
        AdviceProvider,
        MockAdviceProvider,
        create_advice_provider,
        generate_investment_advice,
    )
"""

from __future__ import annotations

from .advisor import (
    EMPTY_ADVICE_TEXT,
    FALLBACK_ADVICE_TEXT,
    create_advice_provider,
    generate_investment_advice,
)
from .errors import AdviceNetworkError, AdviceResponseError, AdviceServiceError, MissingApiKeyError
from .gemini_provider import GeminiProvider, ProxyProvider
from .mock_provider import MockAdviceProvider
from .openai_provider import OpenAIProvider
from .prompt import build_advice_prompt
from .provider_base import AdviceProvider
from .secrets import AdviceSettings, get_api_key, use_proxy

__all__ = [
    "AdviceProvider",
    "GeminiProvider",
    "ProxyProvider",
    "OpenAIProvider",
    "MockAdviceProvider",
    "AdviceSettings",
    "create_advice_provider",
    "generate_investment_advice",
    "build_advice_prompt",
    "get_api_key",
    "use_proxy",
    "AdviceServiceError",
    "MissingApiKeyError",
    "AdviceNetworkError",
    "AdviceResponseError",
    "EMPTY_ADVICE_TEXT",
    "FALLBACK_ADVICE_TEXT",
]
