from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

from flask import current_app

from reflected.models.insight import InsightReport
from reflected.services.providers import (
    EmptyCompletionError,
    GroqProvider,
    HuggingFaceProvider,
    ProviderError,
)

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = (
    "Server is not configured for AI. Please set GROQ_API_KEY or HUGGINGFACE_API_KEY."
)
VERCEL_HINT = (
    " In Vercel: Project → Settings → Environment Variables — add them for "
    "Production (and Preview), then redeploy."
)
GENERATION_FAILED_MESSAGE = (
    "No insight was generated. Groq and Hugging Face both failed or are unconfigured. "
    "Please try again or set GROQ_API_KEY / HUGGINGFACE_API_KEY."
)
HINT_LENGTH = 120


class Provider(Protocol):
    name: str

    def generate(self, answer: str) -> str: ...


class ProvidersNotConfiguredError(RuntimeError):
    """Raised when no provider credentials are configured."""


class InsightGenerationError(RuntimeError):
    """Raised when every configured provider failed."""


class InsightService:
    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        self.config = config if config is not None else current_app.config
        self.groq_key = (self.config.get("GROQ_API_KEY") or "").strip()
        self.hf_key = (self.config.get("HUGGINGFACE_API_KEY") or "").strip()

    @property
    def is_configured(self) -> bool:
        return bool(self.groq_key or self.hf_key)

    def providers(self) -> list[Provider]:
        """Configured providers in the order they are attempted."""
        shared = {
            "temperature": self.config.get("LLM_TEMPERATURE", 0.6),
            "max_tokens": self.config.get("LLM_MAX_TOKENS", 2000),
            "timeout": self.config.get("PROVIDER_TIMEOUT"),
        }
        chain: list[Provider] = []
        if self.groq_key:
            chain.append(
                GroqProvider(
                    api_key=self.groq_key,
                    model=self.config.get("GROQ_MODEL") or "llama-3.3-70b-versatile",
                    base_url=self.config.get("GROQ_BASE_URL") or "https://api.groq.com/openai/v1",
                    **shared,
                )
            )
        if self.hf_key:
            chain.append(
                HuggingFaceProvider(
                    api_key=self.hf_key,
                    model=self.config.get("HUGGINGFACE_MODEL")
                    or "mistralai/Mistral-7B-Instruct-v0.2",
                    base_url=self.config.get("HUGGINGFACE_BASE_URL")
                    or "https://api-inference.huggingface.co/models",
                    **shared,
                )
            )
        return chain

    # ---------- public API ----------

    def generate_report(self, answer: str) -> InsightReport:
        """
        Try each configured provider in order and return the first report.

        Raises ProvidersNotConfiguredError when no keys are set and
        InsightGenerationError when every provider failed.
        """
        if not self.is_configured:
            on_vercel = bool(self.config.get("ON_VERCEL"))
            logger.warning(
                "[Reflected] Missing API keys. GROQ_API_KEY set: %s HUGGINGFACE_API_KEY set: %s%s",
                bool(self.groq_key),
                bool(self.hf_key),
                " (Vercel: add both in Project settings, then redeploy)" if on_vercel else "",
            )
            message = NOT_CONFIGURED_MESSAGE + (VERCEL_HINT if on_vercel else "")
            raise ProvidersNotConfiguredError(message)

        last_error: ProviderError | None = None
        for provider in self.providers():
            try:
                text = provider.generate(answer)
            except EmptyCompletionError:
                # empty output leaves the previous hint in place
                continue
            except ProviderError as exc:
                last_error = exc
                continue
            logger.info("Insight generated by %s (%d chars)", provider.name, len(text))
            return InsightReport(report=text, provider=provider.name)

        hint = str(last_error)[:HINT_LENGTH] if last_error else ""
        message = GENERATION_FAILED_MESSAGE + (f" (Server log: {hint})" if hint else "")
        raise InsightGenerationError(message)
