# rental_analyzer/advice/errors.py
"""
Typed errors + utilities for advisory text providers.

Exports
-------
- AdviceServiceError, MissingApiKeyError, AdviceNetworkError, AdviceResponseError
- ADVICE_ERRORS
- classify_advice_error(exc)
- advice_error_guard()
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import requests

# =========================
# Exception types
# =========================


class AdviceServiceError(RuntimeError):
    """Base class for advisory text failures. Never affects calculation results."""


class MissingApiKeyError(AdviceServiceError):
    """No credential is configured for a provider that needs one."""


class AdviceNetworkError(AdviceServiceError):
    """HTTP/transport failure while calling the provider or proxy."""


class AdviceResponseError(AdviceServiceError):
    """The provider answered, but with an error status or an unreadable payload."""


ADVICE_ERRORS = (
    MissingApiKeyError,
    AdviceNetworkError,
    AdviceResponseError,
)

# =========================
# Classification helpers
# =========================


def classify_advice_error(exc: Exception) -> AdviceServiceError:
    """
    Map arbitrary exceptions raised inside a provider to a typed AdviceServiceError.

    Heuristics:
      - Any AdviceServiceError subclass → passed through
      - requests.HTTPError → AdviceResponseError
      - ValueError/KeyError/TypeError/IndexError (payload shape, bad URL) → AdviceResponseError
      - other requests.* errors → AdviceNetworkError
      - Fallback → AdviceServiceError
    """
    if isinstance(exc, AdviceServiceError):
        return exc
    if isinstance(exc, requests.HTTPError):
        return AdviceResponseError(str(exc))
    if isinstance(exc, ValueError | KeyError | TypeError | IndexError):
        return AdviceResponseError(f"{type(exc).__name__}: {exc}")
    if isinstance(exc, requests.RequestException):
        return AdviceNetworkError(str(exc))
    return AdviceServiceError(f"{type(exc).__name__}: {exc}")


@contextmanager
def advice_error_guard() -> Iterator[None]:
    """Context manager to normalize unexpected exceptions from provider internals."""
    try:
        yield
    except ADVICE_ERRORS:
        raise
    except Exception as exc:  # noqa: BLE001
        raise classify_advice_error(exc) from exc


__all__ = [
    "AdviceServiceError",
    "MissingApiKeyError",
    "AdviceNetworkError",
    "AdviceResponseError",
    "ADVICE_ERRORS",
    "classify_advice_error",
    "advice_error_guard",
]
