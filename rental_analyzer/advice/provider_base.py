# rental_analyzer/advice/provider_base.py
"""
Advice Provider Interface

Purpose
-------
Define a minimal, provider-agnostic contract for advisory text so the
calculation core stays synchronous and free of network dependencies.
Concrete providers (Gemini, proxy, OpenAI, mock) can be swapped without
touching callers.

Public API
----------
class AdviceProvider(Protocol):
    def generate(self, prompt: str, system_prompt: str | None = None) -> AdviceResponse

def with_retries(call, max_retries) -> T
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol, TypeVar

from rental_analyzer.schemas.models import AdviceResponse

from .errors import AdviceNetworkError

T = TypeVar("T")


class AdviceProvider(Protocol):
    def generate(self, prompt: str, system_prompt: str | None = None) -> AdviceResponse: ...


def join_prompt(prompt: str, system_prompt: str | None) -> str:
    """Single-text providers get the system prompt prepended."""
    return f"{system_prompt}\n\n{prompt}" if system_prompt else prompt


def with_retries(call: Callable[[], T], max_retries: int, sleep: Callable[[float], None] = time.sleep) -> T:
    """
    Run `call`, retrying transport failures with a short linear backoff.
    Only AdviceNetworkError is retried; other errors surface immediately.
    """
    last_err: AdviceNetworkError | None = None
    for attempt in range(max_retries + 1):
        try:
            return call()
        except AdviceNetworkError as e:
            last_err = e
            if attempt < max_retries:
                sleep(min(0.5 * (attempt + 1), 2.0))
    assert last_err is not None
    raise last_err
