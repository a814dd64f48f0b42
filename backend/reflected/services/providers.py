from __future__ import annotations

import json
import logging
from typing import Any

import openai
import requests
from openai import OpenAI

from reflected.prompts import build_chat_messages, build_inference_prompt

logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """Raised when a provider cannot produce report text."""


class EmptyCompletionError(ProviderError):
    """Raised when a provider answered but generated no text."""


class GroqProvider:
    """Primary provider: Groq's OpenAI-compatible chat completions API."""

    name = "groq"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        temperature: float = 0.6,
        max_tokens: int = 2000,
        timeout: float | None = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

        client_kwargs: dict[str, Any] = {
            "api_key": api_key,
            "base_url": base_url,
            "max_retries": 0,
        }
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self._client = OpenAI(**client_kwargs)

    def generate(self, answer: str) -> str:
        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=build_chat_messages(answer),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.OpenAIError as exc:
            status = getattr(exc, "status_code", None)
            detail = getattr(exc, "message", "") or ""
            logger.error("[Groq] %s %s", status or exc, detail)
            raise ProviderError(str(exc)) from exc

        try:
            choices = completion.choices or []
            message = choices[0].message if choices else None
            content = getattr(message, "content", None)
            text = (content or "").strip()
        except (AttributeError, IndexError, TypeError) as exc:
            error = ProviderError("Groq returned a malformed completion")
            logger.error("[Groq] %s: %s", error, exc)
            raise error from exc

        if not text:
            raise EmptyCompletionError("Groq returned an empty completion")
        return text


class HuggingFaceProvider:
    """Fallback provider: Hugging Face hosted inference (text generation)."""

    name = "huggingface"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        temperature: float = 0.6,
        max_tokens: int = 2000,
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.model}"

    def generate(self, answer: str) -> str:
        payload = {
            "inputs": build_inference_prompt(answer),
            "parameters": {
                "max_new_tokens": self.max_tokens,
                "temperature": self.temperature,
                "return_full_text": False,
            },
        }
        try:
            resp = requests.post(
                self.url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("[Hugging Face] %s", exc)
            raise ProviderError(f"HF request failed: {exc}") from exc

        body = resp.text
        if not resp.ok:
            error = ProviderError(f"HF {resp.status_code}: {body[:300]}")
            logger.error("[Hugging Face] %s", error)
            raise error

        try:
            data = json.loads(body)
        except ValueError as exc:
            error = ProviderError("HF invalid JSON: " + body[:100])
            logger.error("[Hugging Face] %s", error)
            raise error from exc

        text = _extract_generated_text(data).strip()
        if not text:
            logger.error("[Hugging Face] response contained no generated_text")
            raise EmptyCompletionError("HF response contained no generated_text")
        return text


def _extract_generated_text(data: Any) -> str:
    # HF returns either [{"generated_text": ...}], {"generated_text": ...},
    # or occasionally a nested list
    raw = data[0] if isinstance(data, list) and data else data
    if isinstance(raw, dict):
        generated = raw.get("generated_text")
    elif isinstance(raw, list) and raw and isinstance(raw[0], dict):
        generated = raw[0].get("generated_text")
    else:
        generated = None
    return generated if isinstance(generated, str) else ""
