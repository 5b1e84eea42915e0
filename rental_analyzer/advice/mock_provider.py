# rental_analyzer/advice/mock_provider.py
"""
Mock Advice Provider

Deterministic, zero-network provider for tests, CI and offline CLI runs.
Reads the key-metric lines of the prompt and returns a short rule-based
Markdown verdict. The real providers can be swapped in without touching
callers.
"""

from __future__ import annotations

import re

from rental_analyzer.schemas.models import AdviceResponse, TokenUsage

from .provider_base import AdviceProvider

_METRIC_PAT = re.compile(r"-\s*(Cash on Cash Return \(Year 1\)|Cap Rate \(Year 1\)|IRR[^:]*):\s*(-?[\d.]+|nan|-?inf)%")

SOLID_IRR = 10.0
RISKY_IRR = 5.0


class MockAdviceProvider(AdviceProvider):
    """Rule-based verdict from the metrics embedded in the prompt."""

    def __init__(self, fixed_text: str | None = None) -> None:
        self._fixed_text = fixed_text
        self.calls: list[tuple[str, str | None]] = []

    def generate(self, prompt: str, system_prompt: str | None = None) -> AdviceResponse:
        self.calls.append((prompt, system_prompt))
        text = self._fixed_text if self._fixed_text is not None else _verdict(prompt)
        words = len(prompt.split())
        return AdviceResponse(
            text=text,
            usage=TokenUsage(prompt_tokens=words, completion_tokens=len(text.split()), total_tokens=words + len(text.split())),
        )


def _verdict(prompt: str) -> str:
    metrics = {name: float(val) for name, val in _METRIC_PAT.findall(prompt)}
    irr = next((v for k, v in metrics.items() if k.startswith("IRR")), 0.0)
    coc = metrics.get("Cash on Cash Return (Year 1)", 0.0)

    if irr >= SOLID_IRR and coc >= 0:
        verdict = "Solid Deal"
    elif irr >= RISKY_IRR:
        verdict = "Risky"
    else:
        verdict = "Poor"

    lines = [f"**Verdict:** {verdict}", ""]
    if coc < 0:
        lines.append("- Risk: negative Year 1 cash flow; returns depend on appreciation.")
    else:
        lines.append("- Strength: Year 1 cash flow covers debt service.")
    lines.append(f"- IRR of {irr:.2f}% over the holding period.")
    return "\n".join(lines)
