# tests/conftest.py
from __future__ import annotations

import pytest

from rental_analyzer.core.finance import calculate_analysis
from tests.utils import make_inputs, make_segments, make_step_schedule


# -------- Environment isolation --------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep real keys and run overrides out of the tests."""
    for name in (
        "GEMINI_API_KEY",
        "OPENAI_API_KEY",
        "RENTAL_DEBUG",
        "RENTAL_OUT",
        "RENTAL_ADVICE",
        "RENTAL_ADVICE_PROVIDER",
        "RENTAL_ADVICE_MODEL",
        "RENTAL_ADVICE_MAX_TOKENS",
        "RENTAL_ADVICE_TIMEOUT_S",
        "RENTAL_ADVICE_MAX_RETRIES",
        "RENTAL_ADVICE_ENDPOINT",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


# -------- Financial fixtures --------
@pytest.fixture
def baseline_inputs():
    """Factory for Scenario A inputs (overridable)."""

    def _factory(**overrides):
        return make_inputs(**overrides)

    return _factory


@pytest.fixture
def flat_schedule():
    return make_segments()


@pytest.fixture
def step_schedule():
    return make_step_schedule()


@pytest.fixture
def baseline_analysis():
    """Factory to run the engine; defaults to Scenario A under a flat rate."""

    def _factory(inputs=None, segments=None):
        return calculate_analysis(inputs or make_inputs(), segments or make_segments())

    return _factory


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks integration tests")
