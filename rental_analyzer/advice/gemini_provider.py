# rental_analyzer/advice/gemini_provider.py
"""
Gemini Advice Providers

GeminiProvider calls the Generative Language REST API directly with an API
key. ProxyProvider posts to an HTTP proxy that holds the key server-side and
answers with `{text, content, usage}`.

Both use `requests`, translate failures through `advice_error_guard`, and
retry transport errors.
"""

from __future__ import annotations

from typing import Any

import requests

from rental_analyzer.schemas.models import AdviceResponse, TokenUsage

from .errors import AdviceResponseError, MissingApiKeyError, advice_error_guard
from .provider_base import AdviceProvider, join_prompt, with_retries
from .secrets import AdviceSettings, get_api_key

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiProvider(AdviceProvider):
    def __init__(self, settings: AdviceSettings | None = None, api_key: str | None = None) -> None:
        self._settings = settings or AdviceSettings.from_env()
        self._api_key = api_key if api_key is not None else get_api_key()
        if not self._api_key:
            raise MissingApiKeyError("GEMINI_API_KEY not set for GeminiProvider.")

    @property
    def url(self) -> str:
        return f"{GEMINI_BASE_URL}/{self._settings.model}:generateContent"

    def generate(self, prompt: str, system_prompt: str | None = None) -> AdviceResponse:
        body = {
            "contents": [{"parts": [{"text": join_prompt(prompt, system_prompt)}]}],
            "generationConfig": {"maxOutputTokens": self._settings.max_tokens},
        }

        def _call() -> AdviceResponse:
            with advice_error_guard():
                resp = requests.post(
                    self.url,
                    params={"key": self._api_key},
                    json=body,
                    timeout=self._settings.timeout_s,
                )
                if not resp.ok:
                    raise AdviceResponseError(f"Gemini API error ({resp.status_code}): {resp.text}")
                return _parse_gemini_payload(resp.json())

        return with_retries(_call, self._settings.max_retries)


class ProxyProvider(AdviceProvider):
    def __init__(self, settings: AdviceSettings | None = None) -> None:
        self._settings = settings or AdviceSettings.from_env()

    def generate(self, prompt: str, system_prompt: str | None = None) -> AdviceResponse:
        body = {
            "prompt": prompt,
            "systemPrompt": system_prompt,
            "model": self._settings.model,
            "maxTokens": self._settings.max_tokens,
        }

        def _call() -> AdviceResponse:
            with advice_error_guard():
                resp = requests.post(self._settings.endpoint, json=body, timeout=self._settings.timeout_s)
                if not resp.ok:
                    raise AdviceResponseError(f"AI service error: {resp.status_code} {resp.reason}")
                data = resp.json()
                return AdviceResponse(
                    text=data.get("text") or data.get("content") or "",
                    usage=TokenUsage.model_validate(data["usage"]) if data.get("usage") else None,
                )

        return with_retries(_call, self._settings.max_retries)


# ---------- helpers ----------
def _parse_gemini_payload(data: dict[str, Any]) -> AdviceResponse:
    """Extract the first candidate's text and the usage metadata, tolerating missing pieces."""
    text = ""
    candidates = data.get("candidates") or []
    if candidates:
        parts = (candidates[0].get("content") or {}).get("parts") or []
        if parts:
            text = parts[0].get("text") or ""

    usage = None
    meta = data.get("usageMetadata")
    if meta:
        usage = TokenUsage(
            prompt_tokens=meta.get("promptTokenCount", 0),
            completion_tokens=meta.get("candidatesTokenCount", 0),
            total_tokens=meta.get("totalTokenCount", 0),
        )
    return AdviceResponse(text=text, usage=usage)
