# rental_analyzer/core/logs.py
"""
Logging / debug helpers shared by the engine, the advisory service and the CLI.

- `get_logger()` returns the package logger. A rotating file handler under
  logs/rental_analyzer.log is attached only when RENTAL_DEBUG is on.
- `report_exception()` always prints a redacted message to stderr and
  best-effort logs it.
"""

from __future__ import annotations

import logging
import os
import sys
import traceback
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "rental_analyzer"
LOG_PATH = os.path.join("logs", "rental_analyzer.log")
_SECRET_ENV_VARS = ("GEMINI_API_KEY", "OPENAI_API_KEY")

_LOGGER: logging.Logger | None = None


def debug_enabled() -> bool:
    return os.getenv("RENTAL_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def get_logger() -> logging.Logger:
    """Create/reuse the package logger."""
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    logger = logging.getLogger(LOGGER_NAME)

    # Avoid duplicate handlers if reloaded in REPL/tests
    if debug_enabled() and not logger.handlers:
        logger.setLevel(logging.DEBUG)
        try:
            os.makedirs(os.path.dirname(LOG_PATH), exist_ok=True)
            handler = RotatingFileHandler(LOG_PATH, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        except OSError:
            # Unwritable log dir: keep the logger without a file handler
            pass
        else:
            handler.setFormatter(
                logging.Formatter(
                    fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
                    datefmt="(%Y-%m-%d %H:%M:%S)",
                )
            )
            logger.addHandler(handler)

    _LOGGER = logger
    return logger


def redact(text: str) -> str:
    """Replace configured API keys with [REDACTED]."""
    for key in _SECRET_ENV_VARS:
        val = os.getenv(key)
        if val:
            text = text.replace(val, "[REDACTED]")
    return text


def report_exception(prefix: str, exc: BaseException) -> None:
    """Print a redacted error to stderr and log it (with traceback when debugging)."""
    msg = redact(f"{prefix}: {type(exc).__name__}: {exc}")
    print(f"[RENTAL ERROR] {msg}", file=sys.stderr, flush=True)

    logger = get_logger()
    if debug_enabled():
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        logger.error("%s\n%s", msg, redact(tb))
    else:
        logger.error(msg)


__all__ = ["get_logger", "debug_enabled", "redact", "report_exception"]
