# tests/unit/test_advice_service.py
from types import SimpleNamespace

import pytest
import requests

from rental_analyzer.advice import (
    EMPTY_ADVICE_TEXT,
    FALLBACK_ADVICE_TEXT,
    AdviceNetworkError,
    AdviceResponseError,
    AdviceServiceError,
    AdviceSettings,
    GeminiProvider,
    MissingApiKeyError,
    MockAdviceProvider,
    OpenAIProvider,
    ProxyProvider,
    build_advice_prompt,
    create_advice_provider,
    generate_investment_advice,
    get_api_key,
    use_proxy,
)
from rental_analyzer.advice.errors import advice_error_guard, classify_advice_error
from rental_analyzer.advice.gemini_provider import _parse_gemini_payload
from rental_analyzer.advice.prompt import SYSTEM_PROMPT
from rental_analyzer.advice.provider_base import join_prompt, with_retries
from rental_analyzer.core.finance import calculate_analysis
from tests.utils import make_inputs, make_segments


class _FakeResponse:
    def __init__(self, payload=None, status_code=200, reason="OK"):
        self._payload = payload or {}
        self.status_code = status_code
        self.reason = reason
        self.ok = status_code < 400
        self.text = str(self._payload)

    def json(self):
        return self._payload


@pytest.fixture
def analysis():
    p = make_inputs(holding_period=10)
    return p, calculate_analysis(p, make_segments())


@pytest.fixture
def capture_post(monkeypatch):
    """Replace requests.post; returns the list of recorded calls."""

    def _install(response):
        calls = []

        def _fake_post(url, **kwargs):
            calls.append((url, kwargs))
            if isinstance(response, Exception):
                raise response
            return response

        monkeypatch.setattr(requests, "post", _fake_post)
        return calls

    return _install


# -------- Prompt --------
def test_prompt_contains_inputs_and_metrics(analysis):
    p, res = analysis
    prompt = build_advice_prompt(p, res.summary, res.yearly)

    assert "- Purchase Price: $420000" in prompt
    assert "- Down Payment: 20%" in prompt
    assert f"- IRR (Internal Rate of Return): {res.summary.irr:.2f}%" in prompt
    assert f"- Year 5 Cash Flow: ${res.yearly[4].cash_flow:.2f}" in prompt
    assert "Solid Deal" in prompt


def test_prompt_short_horizon_year_five_not_available():
    p = make_inputs(holding_period=3)
    res = calculate_analysis(p, make_segments())
    prompt = build_advice_prompt(p, res.summary, res.yearly)
    assert "- Year 5 Cash Flow: N/A" in prompt
    assert "Total Profit over 3 years" in prompt


# -------- Advisor --------
def test_generate_with_mock_provider(analysis):
    p, res = analysis
    mock = MockAdviceProvider()
    text = generate_investment_advice(p, res.summary, res.yearly, provider=mock)

    assert text.startswith("**Verdict:**")
    assert len(mock.calls) == 1
    prompt, system_prompt = mock.calls[0]
    assert system_prompt == SYSTEM_PROMPT
    assert "Key Metrics" in prompt


def test_empty_provider_text_uses_placeholder(analysis):
    p, res = analysis
    text = generate_investment_advice(p, res.summary, res.yearly, provider=MockAdviceProvider(fixed_text="   "))
    assert text == EMPTY_ADVICE_TEXT


def test_provider_failure_returns_fallback_and_redacts(analysis, monkeypatch, capsys):
    monkeypatch.setenv("GEMINI_API_KEY", "sk-secret-123")

    class _Broken:
        def generate(self, prompt, system_prompt=None):
            raise AdviceNetworkError("connection reset for key sk-secret-123")

    p, res = analysis
    before = res.model_copy(deep=True)
    text = generate_investment_advice(p, res.summary, res.yearly, provider=_Broken())

    assert text == FALLBACK_ADVICE_TEXT
    err = capsys.readouterr().err
    assert "[RENTAL ERROR]" in err
    assert "sk-secret-123" not in err
    assert "[REDACTED]" in err
    # the calculation result is untouched
    assert res == before


def test_unreachable_proxy_returns_fallback(analysis):
    # default endpoint is relative, so requests rejects it before any I/O
    p, res = analysis
    provider = ProxyProvider(AdviceSettings(max_retries=0))
    assert generate_investment_advice(p, res.summary, res.yearly, provider=provider) == FALLBACK_ADVICE_TEXT


@pytest.mark.parametrize(
    ("prompt", "verdict"),
    [
        ("- Cash on Cash Return (Year 1): 4.00%\n- IRR (Internal Rate of Return): 12.50%", "Solid Deal"),
        ("- Cash on Cash Return (Year 1): -1.00%\n- IRR (Internal Rate of Return): 12.50%", "Risky"),
        ("- Cash on Cash Return (Year 1): 2.00%\n- IRR (Internal Rate of Return): 6.00%", "Risky"),
        ("- Cash on Cash Return (Year 1): -3.00%\n- IRR (Internal Rate of Return): 1.00%", "Poor"),
    ],
)
def test_mock_provider_verdicts(prompt, verdict):
    resp = MockAdviceProvider().generate(prompt)
    assert resp.text.startswith(f"**Verdict:** {verdict}")
    assert resp.usage is not None
    assert resp.usage.total_tokens == resp.usage.prompt_tokens + resp.usage.completion_tokens


# -------- Factory / secrets --------
def test_factory_selection(monkeypatch):
    assert isinstance(create_advice_provider("mock"), MockAdviceProvider)
    assert isinstance(create_advice_provider("proxy"), ProxyProvider)
    # no key -> gemini goes through the proxy
    assert use_proxy()
    assert isinstance(create_advice_provider("gemini"), ProxyProvider)

    monkeypatch.setenv("GEMINI_API_KEY", "k")
    assert not use_proxy()
    assert isinstance(create_advice_provider(" Gemini "), GeminiProvider)


def test_factory_reads_env_provider(monkeypatch):
    monkeypatch.setenv("RENTAL_ADVICE_PROVIDER", "mock")
    assert isinstance(create_advice_provider(), MockAdviceProvider)


def test_factory_unknown_provider():
    with pytest.raises(ValueError, match="Unknown AI provider: claude"):
        create_advice_provider("claude")


def test_openai_requires_key():
    with pytest.raises(MissingApiKeyError):
        create_advice_provider("openai")


def test_gemini_requires_key():
    with pytest.raises(MissingApiKeyError):
        GeminiProvider(AdviceSettings())


def test_get_api_key(monkeypatch):
    assert get_api_key() == ""
    monkeypatch.setenv("GEMINI_API_KEY", "  abc ")
    assert get_api_key() == "abc"


def test_settings_from_env(monkeypatch):
    assert AdviceSettings.from_env() == AdviceSettings()

    monkeypatch.setenv("RENTAL_ADVICE_PROVIDER", "OpenAI")
    monkeypatch.setenv("RENTAL_ADVICE_MODEL", "gpt-4o")
    monkeypatch.setenv("RENTAL_ADVICE_MAX_TOKENS", "500")
    monkeypatch.setenv("RENTAL_ADVICE_TIMEOUT_S", "2.5")
    monkeypatch.setenv("RENTAL_ADVICE_MAX_RETRIES", "-3")
    monkeypatch.setenv("RENTAL_ADVICE_ENDPOINT", "http://localhost:3000/api/gemini")
    s = AdviceSettings.from_env()
    assert s.provider == "openai"
    assert s.model == "gpt-4o"
    assert s.max_tokens == 500
    assert s.timeout_s == 2.5
    assert s.max_retries == 0
    assert s.endpoint == "http://localhost:3000/api/gemini"


def test_settings_bad_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("RENTAL_ADVICE_MAX_TOKENS", "lots")
    monkeypatch.setenv("RENTAL_ADVICE_TIMEOUT_S", "soon")
    s = AdviceSettings.from_env()
    assert s.max_tokens == 1000
    assert s.timeout_s == 20.0


# -------- HTTP providers (requests.post patched) --------
def test_gemini_request_and_parse(capture_post):
    payload = {
        "candidates": [{"content": {"parts": [{"text": "**Verdict:** Risky"}]}}],
        "usageMetadata": {"promptTokenCount": 10, "candidatesTokenCount": 5, "totalTokenCount": 15},
    }
    calls = capture_post(_FakeResponse(payload))

    provider = GeminiProvider(AdviceSettings(max_tokens=321, max_retries=0), api_key="k")
    resp = provider.generate("analyze", "be brief")

    assert resp.text == "**Verdict:** Risky"
    assert resp.usage.total_tokens == 15
    url, kwargs = calls[0]
    assert url.endswith("/gemini-2.5-flash:generateContent")
    assert kwargs["params"] == {"key": "k"}
    assert kwargs["json"]["generationConfig"]["maxOutputTokens"] == 321
    assert kwargs["json"]["contents"][0]["parts"][0]["text"] == "be brief\n\nanalyze"


def test_gemini_error_status(capture_post):
    capture_post(_FakeResponse({"error": "quota"}, status_code=429, reason="Too Many Requests"))
    provider = GeminiProvider(AdviceSettings(max_retries=0), api_key="k")
    with pytest.raises(AdviceResponseError, match="429"):
        provider.generate("x")


def test_gemini_transport_error_is_network_error(capture_post):
    calls = capture_post(requests.ConnectionError("boom"))
    provider = GeminiProvider(AdviceSettings(max_retries=0), api_key="k")
    with pytest.raises(AdviceNetworkError):
        provider.generate("x")
    assert len(calls) == 1


def test_proxy_request_and_parse(capture_post):
    payload = {"content": "hello", "usage": {"promptTokens": 3, "completionTokens": 1, "totalTokens": 4}}
    calls = capture_post(_FakeResponse(payload))
    settings = AdviceSettings(endpoint="http://localhost/api/gemini", max_retries=0)

    resp = ProxyProvider(settings).generate("p", "s")

    assert resp.text == "hello"
    assert resp.usage.total_tokens == 4
    url, kwargs = calls[0]
    assert url == "http://localhost/api/gemini"
    assert kwargs["json"] == {"prompt": "p", "systemPrompt": "s", "model": "gemini-2.5-flash", "maxTokens": 1000}


def test_proxy_error_status(capture_post):
    capture_post(_FakeResponse(status_code=500, reason="Internal Server Error"))
    provider = ProxyProvider(AdviceSettings(endpoint="http://localhost/api/gemini", max_retries=0))
    with pytest.raises(AdviceResponseError, match="AI service error: 500"):
        provider.generate("p")


def test_parse_gemini_payload_tolerates_missing_pieces():
    resp = _parse_gemini_payload({})
    assert resp.text == ""
    assert resp.usage is None


# -------- OpenAI (injected client) --------
def test_openai_provider_with_fake_client():
    seen = {}

    def _create(**kwargs):
        seen.update(kwargs)
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="ok"))],
            usage=SimpleNamespace(prompt_tokens=1, completion_tokens=2, total_tokens=3),
        )

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=_create)))
    resp = OpenAIProvider(AdviceSettings(max_retries=0), client=client).generate("p", "s")

    assert resp.text == "ok"
    assert resp.usage.total_tokens == 3
    assert seen["model"] == "gpt-4o-mini"
    assert seen["messages"][0] == {"role": "system", "content": "s"}


# -------- Errors / retries --------
def test_classify_advice_error():
    assert isinstance(classify_advice_error(requests.HTTPError("x")), AdviceResponseError)
    assert isinstance(classify_advice_error(requests.Timeout("x")), AdviceNetworkError)
    assert isinstance(classify_advice_error(KeyError("text")), AdviceResponseError)
    assert type(classify_advice_error(RuntimeError("x"))) is AdviceServiceError
    err = MissingApiKeyError("x")
    assert classify_advice_error(err) is err


def test_advice_error_guard_wraps():
    with pytest.raises(AdviceResponseError) as ei:
        with advice_error_guard():
            {}["candidates"]
    assert isinstance(ei.value.__cause__, KeyError)


def test_with_retries_only_retries_network_errors():
    attempts = []
    sleeps = []

    def _flaky():
        attempts.append(1)
        if len(attempts) < 3:
            raise AdviceNetworkError("reset")
        return "done"

    assert with_retries(_flaky, 2, sleep=sleeps.append) == "done"
    assert sleeps == [0.5, 1.0]

    def _bad():
        attempts.append(1)
        raise AdviceResponseError("bad payload")

    attempts.clear()
    with pytest.raises(AdviceResponseError):
        with_retries(_bad, 5, sleep=sleeps.append)
    assert len(attempts) == 1


def test_with_retries_gives_up():
    attempts = []

    def _down():
        attempts.append(1)
        raise AdviceNetworkError("unreachable")

    with pytest.raises(AdviceNetworkError, match="unreachable"):
        with_retries(_down, 1, sleep=lambda _: None)
    assert len(attempts) == 2


def test_join_prompt():
    assert join_prompt("p", None) == "p"
    assert join_prompt("p", "s") == "s\n\np"


def test_unexpected_provider_exception_returns_fallback(analysis, capsys):
    class _Crashing:
        def generate(self, prompt, system_prompt=None):
            raise RuntimeError("provider blew up")

    p, res = analysis
    text = generate_investment_advice(p, res.summary, res.yearly, provider=_Crashing())

    assert text == FALLBACK_ADVICE_TEXT
    assert "provider blew up" in capsys.readouterr().err


def test_unknown_env_provider_returns_fallback(analysis, monkeypatch):
    monkeypatch.setenv("RENTAL_ADVICE_PROVIDER", "gemeni")
    p, res = analysis
    assert generate_investment_advice(p, res.summary, res.yearly) == FALLBACK_ADVICE_TEXT
