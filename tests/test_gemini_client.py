"""Tests for the Gemini REST client"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from mermaid_app.agents.gemini_client import GeminiClient, ModelCallError
from mermaid_app.config import Settings


def _response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = text
    return response


def _ok(text):
    return _response(payload={"candidates": [{"content": {"parts": [{"text": text}]}}]})


@pytest.fixture
def settings():
    return Settings(gemini_api_key="secret", request_timeout=12)


def test_generate_text_builds_request(settings):
    client = GeminiClient(settings)
    with patch("mermaid_app.agents.gemini_client.requests.post", return_value=_ok("hello")) as post:
        text = client.generate_text(
            "prompt", system_instruction="system", temperature=0.7,
            max_output_tokens=2000, model="gemini-2.0-flash-exp",
        )

    assert text == "hello"
    url = post.call_args.args[0]
    assert url == (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-2.0-flash-exp:generateContent"
    )
    assert post.call_args.kwargs["headers"]["x-goog-api-key"] == "secret"
    payload = post.call_args.kwargs["json"]
    assert payload["contents"] == [{"role": "user", "parts": [{"text": "prompt"}]}]
    assert payload["systemInstruction"] == {"parts": [{"text": "system"}]}
    assert payload["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 2000}
    assert post.call_args.kwargs["timeout"] == 12


def test_generate_text_defaults_to_chat_model(settings):
    client = GeminiClient(settings)
    with patch("mermaid_app.agents.gemini_client.requests.post", return_value=_ok("hi")) as post:
        client.generate_text("prompt")

    assert "/models/gemini-2.5-flash:generateContent" in post.call_args.args[0]
    assert "generationConfig" not in post.call_args.kwargs["json"]
    assert "systemInstruction" not in post.call_args.kwargs["json"]


def test_joins_multiple_parts(settings):
    payload = {"candidates": [{"content": {"parts": [{"text": "a"}, {"text": "b"}]}}]}
    with patch("mermaid_app.agents.gemini_client.requests.post", return_value=_response(payload=payload)):
        assert GeminiClient(settings).generate_text("p") == "ab"


def test_missing_api_key():
    client = GeminiClient(Settings(gemini_api_key=None))
    with patch("mermaid_app.agents.gemini_client.requests.post") as post:
        with pytest.raises(ModelCallError, match="GEMINI_API_KEY"):
            client.generate_text("p")
    post.assert_not_called()


def test_non_200_status(settings):
    with patch("mermaid_app.agents.gemini_client.requests.post",
               return_value=_response(status_code=429, text="quota")):
        with pytest.raises(ModelCallError) as exc_info:
            GeminiClient(settings).generate_text("p")

    assert exc_info.value.message == "Gemini API failed: 429: quota"
    assert "Traceback" in exc_info.value.stack


def test_transport_error_is_wrapped(settings):
    with patch("mermaid_app.agents.gemini_client.requests.post",
               side_effect=requests.exceptions.Timeout("read timed out")):
        with pytest.raises(ModelCallError, match="read timed out"):
            GeminiClient(settings).generate_text("p")


def test_malformed_payload_is_wrapped(settings):
    with patch("mermaid_app.agents.gemini_client.requests.post",
               return_value=_response(payload={"promptFeedback": {"blockReason": "SAFETY"}})):
        with pytest.raises(ModelCallError):
            GeminiClient(settings).generate_text("p")


def test_non_string_prompt_is_wrapped(settings):
    with patch("mermaid_app.agents.gemini_client.requests.post") as post:
        with pytest.raises(ModelCallError, match="prompt must be a string"):
            GeminiClient(settings).generate_text(None)
    post.assert_not_called()


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "Development")
    monkeypatch.setenv("DIAGRAM_TEMPERATURE", "0.2")
    monkeypatch.setenv("GEMINI_API_BASE", "http://localhost:9000/v1beta/")

    settings = Settings.from_env()

    assert settings.is_development
    assert settings.diagram_temperature == 0.2
    assert settings.gemini_api_base == "http://localhost:9000/v1beta"


def test_connection_error_does_not_expose_api_key():
    # Nothing listens on the discard port, so requests raises ConnectionError
    settings = Settings(gemini_api_key="SUPERSECRET123", gemini_api_base="http://127.0.0.1:9/v1beta", request_timeout=2)

    with pytest.raises(ModelCallError) as exc_info:
        GeminiClient(settings).generate_text("p")

    assert "127.0.0.1" in exc_info.value.message
    assert "SUPERSECRET123" not in exc_info.value.message
    assert "SUPERSECRET123" not in exc_info.value.stack


def test_cors_origins_from_env(monkeypatch):
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://app.example.com, http://localhost:3000,")

    settings = Settings.from_env()

    assert settings.cors_allow_origins == ("https://app.example.com", "http://localhost:3000")


def test_cors_origins_default_to_any(monkeypatch):
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)

    assert Settings.from_env().cors_allow_origins == ("*",)
