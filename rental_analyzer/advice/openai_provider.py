# rental_analyzer/advice/openai_provider.py
"""
OpenAI Advice Provider

Alternative `AdviceProvider` using the OpenAI chat completions API. Selected
with RENTAL_ADVICE_PROVIDER=openai; RENTAL_ADVICE_MODEL should then name an
OpenAI model (defaults to "gpt-4o-mini" when the configured model is a
Gemini one).

Environment
-----------
OPENAI_API_KEY : required
"""

from __future__ import annotations

import os

from rental_analyzer.schemas.models import AdviceResponse, TokenUsage

from .errors import AdviceNetworkError, AdviceServiceError, MissingApiKeyError, advice_error_guard
from .provider_base import AdviceProvider, with_retries
from .secrets import AdviceSettings

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


class OpenAIProvider(AdviceProvider):
    def __init__(self, settings: AdviceSettings | None = None, client: object | None = None) -> None:
        self._settings = settings or AdviceSettings.from_env()
        model = self._settings.model
        self._model = DEFAULT_OPENAI_MODEL if model.startswith("gemini") else model

        if client is not None:
            self._client = client
            return

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise MissingApiKeyError("OPENAI_API_KEY not set for OpenAIProvider.")
        try:
            from openai import OpenAI
        except ImportError as e:
            raise AdviceServiceError("OpenAI SDK not available. Install `openai>=1.0`.") from e
        self._client = OpenAI(api_key=api_key, timeout=self._settings.timeout_s)

    def generate(self, prompt: str, system_prompt: str | None = None) -> AdviceResponse:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        def _call() -> AdviceResponse:
            with advice_error_guard():
                try:
                    resp = self._client.chat.completions.create(  # type: ignore[attr-defined]
                        model=self._model,
                        messages=messages,
                        max_tokens=self._settings.max_tokens,
                    )
                except Exception as e:
                    if type(e).__name__ in {"APIConnectionError", "APITimeoutError"}:
                        raise AdviceNetworkError(str(e)) from e
                    raise
                usage = None
                if getattr(resp, "usage", None) is not None:
                    usage = TokenUsage(
                        prompt_tokens=resp.usage.prompt_tokens or 0,
                        completion_tokens=resp.usage.completion_tokens or 0,
                        total_tokens=resp.usage.total_tokens or 0,
                    )
                return AdviceResponse(text=resp.choices[0].message.content or "", usage=usage)

        return with_retries(_call, self._settings.max_retries)
