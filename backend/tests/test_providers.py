"""Tests for the Groq and Hugging Face provider adapters."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import openai
import pytest
import requests

from reflected.prompts import SYSTEM_PROMPT
from reflected.services.providers import (
    EmptyCompletionError,
    GroqProvider,
    HuggingFaceProvider,
    ProviderError,
)


def _completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _http_response(status_code: int, body: str) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.text = body
    return resp


def _groq(**kwargs) -> GroqProvider:
    params = {
        "api_key": "gsk-test",
        "model": "llama-3.3-70b-versatile",
        "base_url": "https://api.groq.com/openai/v1",
    }
    params.update(kwargs)
    return GroqProvider(**params)


def _hf(**kwargs) -> HuggingFaceProvider:
    params = {
        "api_key": "hf-test",
        "model": "mistralai/Mistral-7B-Instruct-v0.2",
        "base_url": "https://api-inference.huggingface.co/models",
    }
    params.update(kwargs)
    return HuggingFaceProvider(**params)


class TestGroqProvider:
    def test_client_targets_groq_without_retries(self):
        with patch("reflected.services.providers.OpenAI") as mock_openai:
            _groq()

        mock_openai.assert_called_once_with(
            api_key="gsk-test",
            base_url="https://api.groq.com/openai/v1",
            max_retries=0,
        )

    def test_timeout_is_passed_only_when_configured(self):
        with patch("reflected.services.providers.OpenAI") as mock_openai:
            _groq(timeout=15.0)

        assert mock_openai.call_args.kwargs["timeout"] == 15.0

    def test_generate_returns_trimmed_content(self):
        with patch("reflected.services.providers.OpenAI") as mock_openai:
            client = mock_openai.return_value
            client.chat.completions.create.return_value = _completion("  Your report.\n")
            text = _groq().generate("Batman, because of discipline.")

        assert text == "Your report."
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "llama-3.3-70b-versatile"
        assert kwargs["temperature"] == 0.6
        assert kwargs["max_tokens"] == 2000
        assert kwargs["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}

    def test_sdk_error_becomes_provider_error(self):
        with patch("reflected.services.providers.OpenAI") as mock_openai:
            client = mock_openai.return_value
            client.chat.completions.create.side_effect = openai.OpenAIError("rate limited")
            with pytest.raises(ProviderError, match="rate limited"):
                _groq().generate("Batman, because of discipline.")

    @pytest.mark.parametrize("content", [None, "", "   "])
    def test_empty_completion_is_a_failure(self, content):
        with patch("reflected.services.providers.OpenAI") as mock_openai:
            mock_openai.return_value.chat.completions.create.return_value = _completion(content)
            with pytest.raises(EmptyCompletionError):
                _groq().generate("Batman, because of discipline.")

    def test_null_message_is_an_empty_completion(self):
        with patch("reflected.services.providers.OpenAI") as mock_openai:
            mock_openai.return_value.chat.completions.create.return_value = SimpleNamespace(
                choices=[SimpleNamespace(message=None)]
            )
            with pytest.raises(EmptyCompletionError):
                _groq().generate("Batman, because of discipline.")

    def test_non_json_body_is_a_malformed_completion(self):
        # the SDK hands back the raw text when the body is not JSON
        with patch("reflected.services.providers.OpenAI") as mock_openai:
            mock_openai.return_value.chat.completions.create.return_value = "<html>gateway</html>"
            with pytest.raises(ProviderError, match="Groq returned a malformed completion"):
                _groq().generate("Batman, because of discipline.")


class TestHuggingFaceProvider:
    def test_posts_inference_payload_with_bearer_token(self):
        body = json.dumps([{"generated_text": " Hugging report "}])
        with patch(
            "reflected.services.providers.requests.post", return_value=_http_response(200, body)
        ) as mock_post:
            text = _hf().generate("Superman, because of hope.")

        assert text == "Hugging report"
        args, kwargs = mock_post.call_args
        assert args[0] == (
            "https://api-inference.huggingface.co/models/mistralai/Mistral-7B-Instruct-v0.2"
        )
        assert kwargs["headers"]["Authorization"] == "Bearer hf-test"
        assert kwargs["json"]["inputs"].endswith("\n\nAssistant:")
        assert kwargs["json"]["parameters"] == {
            "max_new_tokens": 2000,
            "temperature": 0.6,
            "return_full_text": False,
        }
        assert kwargs["timeout"] is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"generated_text": "object report"},
            [{"generated_text": "object report"}],
            [[{"generated_text": "object report"}]],
        ],
    )
    def test_accepts_all_response_shapes(self, payload):
        with patch(
            "reflected.services.providers.requests.post",
            return_value=_http_response(200, json.dumps(payload)),
        ):
            assert _hf().generate("Superman, because of hope.") == "object report"

    def test_non_2xx_includes_status_and_truncated_body(self):
        body = "x" * 500
        with patch(
            "reflected.services.providers.requests.post", return_value=_http_response(503, body)
        ):
            with pytest.raises(ProviderError) as excinfo:
                _hf().generate("Superman, because of hope.")

        assert str(excinfo.value) == "HF 503: " + "x" * 300

    def test_invalid_json_is_a_failure(self):
        with patch(
            "reflected.services.providers.requests.post",
            return_value=_http_response(200, "<html>loading</html>"),
        ):
            with pytest.raises(ProviderError, match="HF invalid JSON: <html>loading</html>"):
                _hf().generate("Superman, because of hope.")

    @pytest.mark.parametrize("payload", [[], {}, [{"error": "model loading"}], [{"generated_text": "  "}]])
    def test_missing_generated_text_is_a_failure(self, payload):
        with patch(
            "reflected.services.providers.requests.post",
            return_value=_http_response(200, json.dumps(payload)),
        ):
            with pytest.raises(EmptyCompletionError):
                _hf().generate("Superman, because of hope.")

    def test_network_error_is_a_failure(self):
        with patch(
            "reflected.services.providers.requests.post",
            side_effect=requests.ConnectionError("connection refused"),
        ):
            with pytest.raises(ProviderError, match="connection refused"):
                _hf().generate("Superman, because of hope.")
