from __future__ import annotations

from typing import Any

import pytest
from flask import Flask

from reflected import create_app


def make_app(**overrides: Any) -> Flask:
    config: dict[str, Any] = {
        "TESTING": True,
        "GROQ_API_KEY": "",
        "HUGGINGFACE_API_KEY": "",
        "ON_VERCEL": False,
    }
    config.update(overrides)
    return create_app("development", overrides=config)


@pytest.fixture
def unconfigured_app() -> Flask:
    return make_app()


@pytest.fixture
def app() -> Flask:
    return make_app(GROQ_API_KEY="gsk-test", HUGGINGFACE_API_KEY="hf-test")


@pytest.fixture
def client(app: Flask):
    return app.test_client()


@pytest.fixture
def answer() -> str:
    return "Batman, because he earned every skill he has through discipline."
