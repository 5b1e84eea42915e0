# rental_analyzer/advice/secrets.py
"""
Secret/config retrieval for the advisory text service.

Keys live in the environment only. When no Gemini key is present the
service goes through the HTTP proxy, which holds the key server-side.

Environment
-----------
GEMINI_API_KEY             : direct Gemini access (optional)
OPENAI_API_KEY             : OpenAI provider (optional)
RENTAL_ADVICE_PROVIDER     : gemini | proxy | openai | mock (default "gemini")
RENTAL_ADVICE_MODEL        : default "gemini-2.5-flash"
RENTAL_ADVICE_MAX_TOKENS   : default "1000"
RENTAL_ADVICE_TIMEOUT_S    : default "20"
RENTAL_ADVICE_MAX_RETRIES  : default "2"
RENTAL_ADVICE_ENDPOINT     : proxy URL, default "/api/gemini"
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from rental_analyzer.core.logs import get_logger

DEFAULT_PROVIDER = "gemini"
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_ENDPOINT = "/api/gemini"


def get_api_key() -> str:
    """Gemini API key, or "" when unset (the proxy handles authentication)."""
    key = os.getenv("GEMINI_API_KEY", "").strip()
    if not key:
        get_logger().warning("API key not configured. Using proxy endpoint.")
    return key


def use_proxy() -> bool:
    return not os.getenv("GEMINI_API_KEY", "").strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


@dataclass(frozen=True)
class AdviceSettings:
    """Provider-agnostic knobs for advisory calls."""

    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    max_tokens: int = 1000
    timeout_s: float = 20.0
    max_retries: int = 2
    endpoint: str = DEFAULT_ENDPOINT

    @classmethod
    def from_env(cls) -> AdviceSettings:
        return cls(
            provider=(os.getenv("RENTAL_ADVICE_PROVIDER", "") or DEFAULT_PROVIDER).strip().lower(),
            model=(os.getenv("RENTAL_ADVICE_MODEL", "") or DEFAULT_MODEL).strip(),
            max_tokens=_env_int("RENTAL_ADVICE_MAX_TOKENS", 1000),
            timeout_s=_env_float("RENTAL_ADVICE_TIMEOUT_S", 20.0),
            max_retries=max(0, _env_int("RENTAL_ADVICE_MAX_RETRIES", 2)),
            endpoint=(os.getenv("RENTAL_ADVICE_ENDPOINT", "") or DEFAULT_ENDPOINT).strip(),
        )


__all__ = ["get_api_key", "use_proxy", "AdviceSettings"]
