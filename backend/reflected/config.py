from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

BACKEND_DIR = Path(__file__).resolve().parent.parent


def load_environment(base_dir: Path | None = None) -> None:
    """
    Load .env from the working directory, then .env.local next to the backend.

    .env.local overrides; on hosted deployments neither file exists and the
    platform's environment is used as-is.
    """
    load_dotenv(find_dotenv(usecwd=True))
    local_env = (base_dir or BACKEND_DIR) / ".env.local"
    if local_env.exists():
        load_dotenv(dotenv_path=local_env, override=True)


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def _env_float(name: str, default: float | None) -> float | None:
    value = _env_str(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    value = _env_str(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(slots=True)
class BaseConfig:
    SECRET_KEY: str = field(default_factory=lambda: _env_str("SECRET_KEY", "change-me"))
    FLASK_ENV: str = field(default_factory=lambda: _env_str("FLASK_ENV", "development"))
    DEBUG: bool = field(default_factory=lambda: _env_str("FLASK_DEBUG", "0") == "1")

    # Groq (primary, OpenAI-compatible)
    GROQ_API_KEY: str = field(default_factory=lambda: _env_str("GROQ_API_KEY"))
    GROQ_MODEL: str = field(
        default_factory=lambda: _env_str("GROQ_MODEL", "llama-3.3-70b-versatile")
    )
    GROQ_BASE_URL: str = field(
        default_factory=lambda: _env_str("GROQ_BASE_URL", "https://api.groq.com/openai/v1")
    )

    # Hugging Face (fallback, hosted inference)
    HUGGINGFACE_API_KEY: str = field(default_factory=lambda: _env_str("HUGGINGFACE_API_KEY"))
    HUGGINGFACE_MODEL: str = field(
        default_factory=lambda: _env_str("HUGGINGFACE_MODEL", "mistralai/Mistral-7B-Instruct-v0.2")
    )
    HUGGINGFACE_BASE_URL: str = field(
        default_factory=lambda: _env_str(
            "HUGGINGFACE_BASE_URL", "https://api-inference.huggingface.co/models"
        )
    )

    # Generation
    LLM_TEMPERATURE: float = field(default_factory=lambda: _env_float("LLM_TEMPERATURE", 0.6))
    LLM_MAX_TOKENS: int = field(default_factory=lambda: _env_int("LLM_MAX_TOKENS", 2000))
    # None leaves the HTTP client's own default in place
    PROVIDER_TIMEOUT: float | None = field(
        default_factory=lambda: _env_float("PROVIDER_TIMEOUT", None)
    )
    MIN_ANSWER_LENGTH: int = field(default_factory=lambda: _env_int("MIN_ANSWER_LENGTH", 10))

    # Hosting
    ON_VERCEL: bool = field(default_factory=lambda: bool(os.getenv("VERCEL")))
    STATIC_FOLDER: str = field(
        default_factory=lambda: _env_str("STATIC_FOLDER", str(BACKEND_DIR / "public"))
    )
    PORT: int = field(default_factory=lambda: _env_int("PORT", 3000))


@dataclass(slots=True)
class DevelopmentConfig(BaseConfig):
    DEBUG: bool = True


@dataclass(slots=True)
class ProductionConfig(BaseConfig):
    DEBUG: bool = False


_CONFIG_MAP = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
}


def get_config(name: str | None) -> type[BaseConfig]:
    env_name = name or os.getenv("FLASK_ENV", "development").lower()
    return _CONFIG_MAP.get(env_name, DevelopmentConfig)
