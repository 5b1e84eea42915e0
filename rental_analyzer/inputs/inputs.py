# rental_analyzer/inputs/inputs.py
"""
Inputs loader for the Rental Analyzer.

Goals
-----
- Deterministic, file-first inputs with validation via Pydantic.
- Accept the flat form-state shape (InputParameters at root, camelCase or
  snake_case) as well as a structured shape with run options.
- Minimal environment-variable overrides for CI/CLI convenience.

Supported JSON shapes
---------------------
1) Flat (root = InputParameters)
   {
     "purchasePrice": 420000, "holdingPeriod": 30, ...,
     "rateSegments": [{"startYear": 1, "interestRate": 6.875}]
   }
   A scalar "interest_rate" / "interestRate" may replace the segment list;
   it becomes a single segment starting at year 1.

2) Structured (root = AppInputs)
   {
     "inputs": { ... InputParameters ... },
     "rate_segments": [ ... ],
     "run": {"out": "rental_analysis.md", "advice": false, "provider": null}
   }

Environment overrides (optional)
--------------------------------
- RENTAL_OUT              -> AppInputs.run.out
- RENTAL_ADVICE           -> AppInputs.run.advice (1/true/yes/on)
- RENTAL_ADVICE_PROVIDER  -> AppInputs.run.provider

Public API
----------
- class InputsLoader:
    - load(path: str | Path | None) -> AppInputs
    - load_json(text: str) -> AppInputs
    - with_overrides(**kwargs) -> AppInputs (non-destructive copies)
- function load_inputs(path: str | Path | None) -> AppInputs  (convenience)
- function safe_validate(model, data) -> (instance | None, ValidationIssue | None)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from rental_analyzer.core.finance.rates import normalize_schedule
from rental_analyzer.schemas.models import InputParameters, RateSegment

M = TypeVar("M", bound=BaseModel)

_TRUTHY = {"1", "true", "yes", "on"}

# ----------------------------
# Pydantic models for structured inputs
# ----------------------------


class RunOptions(BaseModel):
    """Runtime (non-financial) options controlling the analysis run."""

    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)

    out: str = Field("rental_analysis.md", description="Path to write the Markdown report.")
    advice: bool = Field(False, description="Request advisory commentary for the report.")
    provider: str | None = Field(None, description="Advisory provider override: gemini | proxy | openai | mock.")


class AppInputs(BaseModel):
    """
    Full input payload.

    Attributes:
        inputs:        Validated InputParameters for the engine.
        rate_segments: Non-empty rate schedule (normalized: sorted, deduplicated).
        run:           Non-financial, runtime options for the current execution.
    """

    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)

    inputs: InputParameters
    rate_segments: tuple[RateSegment, ...]
    run: RunOptions = RunOptions()

    @field_validator("rate_segments")
    @classmethod
    def _non_empty_schedule(cls, v: tuple[RateSegment, ...]) -> tuple[RateSegment, ...]:
        # RateScheduleError is a ValueError, so pydantic reports it as a validation error
        return normalize_schedule(v)


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    message: str


def _first_issue(err: ValidationError) -> ValidationIssue:
    first = err.errors()[0]
    field = ".".join(str(p) for p in first.get("loc", ())) or "unknown"
    return ValidationIssue(field=field, message=first.get("msg", "Validation failed"))


def safe_validate(model: type[M], data: Any) -> tuple[M | None, ValidationIssue | None]:
    """Validate without raising: (instance, None) on success, (None, issue) on failure."""
    try:
        return model.model_validate(data), None
    except ValidationError as e:
        return None, _first_issue(e)


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first inputs loader with light env overrides.

    Responsibilities:
        - Read JSON from a file or string
        - Accept both the flat and structured shapes
        - Validate with Pydantic
        - Apply environment overrides for run options

    Default search (when path=None):
        1) ./data/sample/inputs.json
        2) ./config.json
    """

    env_prefix: str = "RENTAL_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> AppInputs:
        """
        Load inputs from a JSON file (path). If path is None, try defaults.

        Returns:
            AppInputs (validated).
        """
        p = self._resolve_path(path)
        raw = self._read_json_file(p)
        data = self._maybe_translate_flat(raw)
        cfg = self._parse_root(data)
        return self._apply_env_overrides(cfg)

    def load_json(self, text: str) -> AppInputs:
        """Load inputs from a JSON string (flat or structured shape)."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Invalid JSON payload: expected an object at the root.")
        data = self._maybe_translate_flat(raw)
        cfg = self._parse_root(data)
        return self._apply_env_overrides(cfg)

    def with_overrides(
        self,
        cfg: AppInputs,
        *,
        out: str | None = None,
        advice: bool | None = None,
        provider: str | None = None,
    ) -> AppInputs:
        """
        Return a *new* AppInputs with provided non-null overrides applied to RunOptions.
        Does not mutate the original instance.
        """
        updates: dict[str, Any] = {}
        if out is not None:
            updates["out"] = out
        if advice is not None:
            updates["advice"] = advice
        if provider is not None:
            updates["provider"] = provider.strip().lower()

        if not updates:
            return cfg

        run_new = cfg.run.model_copy(update=updates)
        return cfg.model_copy(update={"run": run_new})

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Inputs file not found: {p}")
            return p

        for candidate in (Path("data/sample/inputs.json"), Path("config.json")):
            if candidate.exists():
                return candidate
        raise FileNotFoundError(
            "No inputs path provided and no default inputs found. Looked for ./data/sample/inputs.json and ./config.json."
        )

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported inputs format for {p.name}; only .json is supported.")
        try:
            loaded = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(loaded, dict):
            raise ValueError(f"Invalid JSON in {p}: expected an object at the root.")
        return cast(dict[str, Any], loaded)

    def _maybe_translate_flat(self, raw: dict[str, Any]) -> dict[str, Any]:
        """
        Accept flat (InputParameters at root) or structured (AppInputs shape).
        A scalar interest rate becomes a one-segment schedule starting at year 1.
        """
        if "inputs" in raw:
            return raw  # already structured

        body = dict(raw)
        segments = body.pop("rate_segments", None) or body.pop("rateSegments", None)
        scalar_rate = body.pop("interest_rate", None)
        if scalar_rate is None:
            scalar_rate = body.pop("interestRate", None)
        if not segments and scalar_rate is not None:
            segments = [{"start_year": 1, "interest_rate": scalar_rate}]
        run = body.pop("run", None)

        data: dict[str, Any] = {"inputs": body, "rate_segments": segments or []}
        if run is not None:
            data["run"] = run
        return data

    def _parse_root(self, data: dict[str, Any]) -> AppInputs:
        """Validate and return structured AppInputs."""
        cfg, issue = safe_validate(AppInputs, data)
        if issue is not None:
            raise ValueError(f"Validation failed for {issue.field}: {issue.message}")
        assert cfg is not None
        return cfg

    def _apply_env_overrides(self, cfg: AppInputs) -> AppInputs:
        """Apply light, optional overrides from environment variables to run options."""
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        out = os.getenv(f"{prefix}OUT")
        if out:
            updates["out"] = out

        advice = os.getenv(f"{prefix}ADVICE")
        if advice:
            updates["advice"] = advice.strip().lower() in _TRUTHY

        provider = os.getenv(f"{prefix}ADVICE_PROVIDER")
        if provider:
            updates["provider"] = provider.strip().lower()

        if not updates:
            return cfg

        run_new = cfg.run.model_copy(update=updates)
        return cfg.model_copy(update={"run": run_new})


# ----------------------------
# Convenience function
# ----------------------------


def load_inputs(path: str | Path | None = None) -> AppInputs:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)
